"""pytest configuration and fixtures."""

import logging

import pytest

from promissory.core.config import ENV_PREFIX, FutureSettings, reset_settings


@pytest.fixture(autouse=True)
def clean_settings(monkeypatch):
    """Run every test with default settings and no PROMISSORY_* variables."""
    for name in FutureSettings.model_fields:
        monkeypatch.delenv(ENV_PREFIX + name.upper(), raising=False)
    package_logger = logging.getLogger("promissory")
    level = package_logger.level
    reset_settings()
    yield
    reset_settings()
    package_logger.setLevel(level)


@pytest.fixture
def deferred():
    """Pending future plus its fulfill/reject capabilities."""
    from promissory import Future
    return Future.with_resolvers()
