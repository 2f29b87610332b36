"""
Application configuration with environment-driven settings.
"""

import os
from functools import lru_cache
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

_MARKUP_CHARACTERS = "&<>\"'"


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    app_name: str = "forget_me_not"
    app_env: Literal["dev", "qa", "uat", "prod"] = "dev"
    debug: bool = False
    log_level: str = "INFO"

    # Database
    database_url: str = Field(
        default="sqlite+aiosqlite:///./forget_me_not.db",
        description="Async SQLAlchemy connection URL",
    )
    auto_create_schema: bool = Field(
        default=True,
        description="Create missing tables at application startup.",
    )

    # JWT Configuration
    jwt_secret_key: str = Field(
        default="change-me-in-production-use-secrets-manager",
        description="Secret key for verifying session JWTs",
    )
    jwt_algorithm: str = Field(
        default="HS256",
        description="JWT signing algorithm",
    )
    jwt_access_token_expire_minutes: int = Field(
        default=60,
        ge=1,
        description="Access token expiration in minutes",
    )

    # CORS
    cors_origins: str = Field(
        default="http://localhost:8000",
        description="Comma-separated list of allowed CORS origins",
    )

    # Exclusions
    exclusions_variable_name: str = Field(
        default="forget_me_not_excluded_modules",
        description="Variable key holding the excluded module list.",
    )
    enabled_modules: str = Field(
        default="",
        description="Comma-separated list of enabled modules offered for exclusion.",
    )
    update_status_file: str | None = Field(
        default=None,
        description="JSON document with the projects pending update-check presentation.",
    )

    @field_validator("log_level", mode="before")
    @classmethod
    def normalize_log_level(cls, v: str) -> str:
        """Accept log levels in any case."""
        return str(v).strip().upper()

    @field_validator("enabled_modules")
    @classmethod
    def reject_markup_in_module_names(cls, v: str) -> str:
        """Reject module names that HTML escaping would change."""
        invalid = [
            name.strip()
            for name in v.split(",")
            if any(char in name for char in _MARKUP_CHARACTERS)
        ]
        if invalid:
            raise ValueError(
                f"Module names may not contain any of {_MARKUP_CHARACTERS!r}: {', '.join(invalid)}"
            )
        return v

    @property
    def cors_origins_list(self) -> list[str]:
        """Parse CORS origins into a list."""
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]

    @property
    def enabled_modules_list(self) -> list[str]:
        """Parse enabled modules into a de-duplicated list, preserving order."""
        seen: dict[str, None] = {}
        for name in self.enabled_modules.split(","):
            name = name.strip()
            if name:
                seen.setdefault(name, None)
        return list(seen)


@lru_cache
def _get_settings_cached() -> Settings:
    return Settings()


def get_settings() -> Settings:
    """Get the settings instance.

    Under pytest, environment variables change between tests, so a fresh
    instance is built on every call.
    """
    if os.environ.get("PYTEST_CURRENT_TEST"):
        return Settings()
    return _get_settings_cached()
