"""Shared fixtures for the localekit test suite."""

import pytest
import structlog

from localekit.configuration import get_settings
from localekit.i18n import get_localization_service


@pytest.fixture(autouse=True)
def reset_cached_providers():
    """Drop cached settings and services so env overrides take effect."""
    get_settings.cache_clear()
    get_localization_service.cache_clear()
    yield
    get_settings.cache_clear()
    get_localization_service.cache_clear()


@pytest.fixture(autouse=True)
def clear_log_context():
    """Prevent structlog context leaking between tests."""
    structlog.contextvars.clear_contextvars()
    yield
    structlog.contextvars.clear_contextvars()
