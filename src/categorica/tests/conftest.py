"""Shared fixtures: every test starts from default settings, logging and registry."""

from __future__ import annotations

from collections.abc import Iterator

import pytest

from categorica.config import clear_settings_cache
from categorica.context import reset_registry
from categorica.observability import reset_logging


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    """Reset cached settings, logging configuration and the registry around each test."""
    for var in ("CATEGORICA_DEBUG", "CATEGORICA_LOG_LEVEL", "CATEGORICA_LOG_FORMAT",
                "CATEGORICA_DISPATCH_TRACE", "CATEGORICA_DISPATCH_ALLOW_REREGISTER"):
        monkeypatch.delenv(var, raising=False)
    clear_settings_cache()
    reset_logging()
    reset_registry()
    yield
    clear_settings_cache()
    reset_logging()
    reset_registry()
