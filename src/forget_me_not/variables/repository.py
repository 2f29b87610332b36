"""
Repository for configuration variables.
"""

from typing import Any

from sqlalchemy import delete, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from forget_me_not.shared.exceptions import StorageError
from forget_me_not.shared.logging import get_logger
from forget_me_not.variables.models import ConfigVariable

logger = get_logger(__name__)


class VariableRepository:
    """Data-access facade for the ``variables`` table."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get(self, name: str, default: Any = None) -> Any:
        """Return the stored value for ``name``, or ``default`` when unset.

        Raises:
            StorageError: If the read fails.
        """
        try:
            result = await self._session.execute(
                select(ConfigVariable.value).where(ConfigVariable.name == name)
            )
        except SQLAlchemyError as e:
            logger.error(
                "Variable read failed",
                extra={"variable": name, "error": str(e)},
            )
            raise StorageError(
                f"Failed to read variable: {name}",
                details={"variable": name},
            ) from e

        row = result.first()
        if row is None:
            return default
        return row[0]

    async def set(self, name: str, value: Any) -> None:
        """Store ``value`` under ``name``, replacing any previous value.

        Raises:
            StorageError: If the write fails. The session is rolled back.
        """
        try:
            entity = await self._session.get(ConfigVariable, name)
            if entity is None:
                self._session.add(ConfigVariable(name=name, value=value))
            else:
                entity.value = value
            await self._session.flush()
        except SQLAlchemyError as e:
            await self._session.rollback()
            logger.error(
                "Variable write failed",
                extra={"variable": name, "error": str(e)},
            )
            raise StorageError(
                f"Failed to write variable: {name}",
                details={"variable": name},
            ) from e

    async def delete(self, name: str) -> bool:
        """Delete ``name``. Returns True if a row was removed.

        Raises:
            StorageError: If the delete fails. The session is rolled back.
        """
        try:
            result = await self._session.execute(
                delete(ConfigVariable).where(ConfigVariable.name == name)
            )
            await self._session.flush()
        except SQLAlchemyError as e:
            await self._session.rollback()
            logger.error(
                "Variable delete failed",
                extra={"variable": name, "error": str(e)},
            )
            raise StorageError(
                f"Failed to delete variable: {name}",
                details={"variable": name},
            ) from e

        return result.rowcount > 0
