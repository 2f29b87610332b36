"""
SQLAlchemy model for configuration variables.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any

from sqlalchemy import JSON, DateTime, String, func
from sqlalchemy.orm import Mapped, mapped_column

from forget_me_not.shared.database import Base


class ConfigVariable(Base):
    """A named JSON value in the persistent configuration store."""

    __tablename__ = "variables"

    name: Mapped[str] = mapped_column(
        String(128),
        primary_key=True,
    )
    value: Mapped[Any] = mapped_column(
        JSON,
        nullable=True,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
        onupdate=lambda: datetime.now(timezone.utc),
    )

    def __repr__(self) -> str:
        return f"<ConfigVariable(name={self.name})>"
