"""Configuration management using pydantic-settings."""

from .settings import (
    CategoricaSettings,
    DispatchSettings,
    LoggingSettings,
    clear_settings_cache,
    get_settings,
)

__all__ = [
    "CategoricaSettings",
    "DispatchSettings",
    "LoggingSettings",
    "clear_settings_cache",
    "get_settings",
]
