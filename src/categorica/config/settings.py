"""Environment-based configuration using pydantic-settings.

Provides type-safe, validated configuration from environment variables
with sensible defaults. Supports .env files and nested configuration.

Example:
    >>> from categorica.config import get_settings
    >>> settings = get_settings()
    >>> settings.logging.level
    'INFO'
    >>> settings.dispatch.trace
    False

    # Or with environment variables:
    # CATEGORICA_LOG_LEVEL=DEBUG
    # CATEGORICA_DISPATCH_TRACE=true
"""

from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic import Field, computed_field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class LoggingSettings(BaseSettings):
    """Logging configuration."""

    model_config = SettingsConfigDict(
        env_prefix="CATEGORICA_LOG_",
        extra="ignore",
    )

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    format: Literal["console", "json", "none"] = "console"
    show_timestamp: bool = True

    @field_validator("level", mode="before")
    @classmethod
    def _normalize_level(cls, v: str) -> str:
        return v.upper() if isinstance(v, str) else v


class DispatchSettings(BaseSettings):
    """Context dispatch behaviour."""

    model_config = SettingsConfigDict(
        env_prefix="CATEGORICA_DISPATCH_",
        extra="ignore",
    )

    trace: bool = Field(default=False, description="Log every capability dispatch at DEBUG")
    allow_reregister: bool = Field(
        default=False,
        description="Allow replacing the context registered for a type",
    )


class CategoricaSettings(BaseSettings):
    """Root settings for categorica.

    Loads configuration from environment variables with CATEGORICA_ prefix.

    Example environment variables:
        CATEGORICA_DEBUG=true
        CATEGORICA_LOG_LEVEL=DEBUG
        CATEGORICA_LOG_FORMAT=json
        CATEGORICA_DISPATCH_TRACE=true
    """

    model_config = SettingsConfigDict(
        env_prefix="CATEGORICA_",
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        extra="ignore",
        validate_default=True,
    )

    debug: bool = Field(default=False, description="Enable debug mode")

    logging: LoggingSettings = Field(default_factory=LoggingSettings)
    dispatch: DispatchSettings = Field(default_factory=DispatchSettings)

    @computed_field
    @property
    def effective_log_level(self) -> str:
        """Debug mode forces DEBUG regardless of the configured level."""
        return "DEBUG" if self.debug else self.logging.level


@lru_cache(maxsize=1)
def get_settings() -> CategoricaSettings:
    """Get the global settings instance (cached)."""
    return CategoricaSettings()


def clear_settings_cache() -> None:
    """Clear the settings cache (useful for testing).

    After calling this, the next get_settings() call will
    reload configuration from environment.
    """
    get_settings.cache_clear()
