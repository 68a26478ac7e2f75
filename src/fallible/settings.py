"""Environment-based configuration using pydantic-settings.

Example:
    >>> from fallible.settings import get_settings
    >>> settings = get_settings()
    >>> settings.logging.level
    'WARNING'

    # Or with environment variables:
    # FALLIBLE_DEBUG=true
    # FALLIBLE_LOG_LEVEL=DEBUG
    # FALLIBLE_LOG_LOG_CAPTURED=false
"""

from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class LoggingSettings(BaseSettings):
    """Logging configuration for the `fallible` logger namespace."""

    model_config = SettingsConfigDict(
        env_prefix="FALLIBLE_LOG_",
        extra="ignore",
    )

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "WARNING"
    log_captured: bool = Field(
        default=True,
        description="Log exceptions converted into failure Results at DEBUG",
    )
    include_traceback: bool = Field(
        default=False,
        description="Attach the formatted traceback to captured-exception records",
    )

    @field_validator("level", mode="before")
    @classmethod
    def _normalize_level(cls, v: str) -> str:
        return v.upper() if isinstance(v, str) else v


class FallibleSettings(BaseSettings):
    """Root settings, loaded from `FALLIBLE_*` variables and an optional `.env` file."""

    model_config = SettingsConfigDict(
        env_prefix="FALLIBLE_",
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        extra="ignore",
        validate_default=True,
    )

    debug: bool = Field(default=False, description="Force DEBUG logging regardless of logging.level")
    logging: LoggingSettings = Field(default_factory=LoggingSettings)

    @property
    def effective_level(self) -> str:
        """Log level after applying the debug override."""
        return "DEBUG" if self.debug else self.logging.level


@lru_cache(maxsize=1)
def get_settings() -> FallibleSettings:
    """Get the global settings instance (cached)."""
    return FallibleSettings()


def clear_settings_cache() -> None:
    """Clear the settings cache so the next `get_settings()` re-reads the environment."""
    get_settings.cache_clear()
