"""Tests for environment-based settings."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from categorica.config import CategoricaSettings, clear_settings_cache, get_settings


def test_defaults() -> None:
    settings = get_settings()
    assert settings.debug is False
    assert settings.logging.level == "INFO"
    assert settings.logging.format == "console"
    assert settings.dispatch.trace is False
    assert settings.dispatch.allow_reregister is False
    assert settings.effective_log_level == "INFO"


def test_settings_are_cached() -> None:
    assert get_settings() is get_settings()
    first = get_settings()
    clear_settings_cache()
    assert get_settings() is not first


def test_environment_overrides(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("CATEGORICA_LOG_LEVEL", "warning")
    monkeypatch.setenv("CATEGORICA_LOG_FORMAT", "json")
    monkeypatch.setenv("CATEGORICA_DISPATCH_TRACE", "true")
    clear_settings_cache()
    settings = get_settings()
    assert settings.logging.level == "WARNING"
    assert settings.logging.format == "json"
    assert settings.dispatch.trace is True


def test_debug_forces_debug_level(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("CATEGORICA_DEBUG", "1")
    monkeypatch.setenv("CATEGORICA_LOG_LEVEL", "ERROR")
    settings = CategoricaSettings()
    assert settings.effective_log_level == "DEBUG"


def test_invalid_values_rejected(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("CATEGORICA_LOG_FORMAT", "xml")
    with pytest.raises(ValidationError):
        CategoricaSettings()
