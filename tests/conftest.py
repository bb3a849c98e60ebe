"""
Test Configuration and Fixtures

Provides shared fixtures and fakes for the test suite.
"""

import os

import pytest

# Set test environment variables before importing the package.
os.environ.setdefault("ENVIRONMENT", "test")
os.environ.setdefault("DATABASE_URL", "sqlite:///:memory:")
os.environ.setdefault("LOG_LEVEL", "WARNING")


# =============================================================================
# PYTEST CONFIGURATION
# =============================================================================


def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "unit: Unit tests (fast, isolated)")
    config.addinivalue_line("markers", "integration: Integration tests (may use real services)")


def pytest_collection_modifyitems(config, items):
    """Mark everything not explicitly tiered as a unit test."""
    for item in items:
        if item.get_closest_marker("integration") or item.get_closest_marker("unit"):
            continue
        item.add_marker(pytest.mark.unit)


@pytest.fixture(autouse=True)
def _clear_settings_cache():
    from firstapp.config import get_settings

    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


# =============================================================================
# ENVIRONMENT FIXTURES
# =============================================================================


@pytest.fixture
def log_buffer():
    from tests.support.log import RecordingLog

    return RecordingLog()


@pytest.fixture
def fake_db():
    from tests.support.db import FakeDb

    return FakeDb()


@pytest.fixture
def env(log_buffer, fake_db):
    from firstapp.appm import Env

    return Env(log_fn=log_buffer, config={"name": "cfg0"}, db_handle=fake_db)
