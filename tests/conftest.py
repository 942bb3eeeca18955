"""
Pytest configuration and fixtures.

This file provides pytest-specific configuration and fixtures.
For the in-memory database helpers, see tests/fixtures/db.py
"""

import pytest

from web.backend.config import get_config


def pytest_configure(config):
    """Configure pytest markers."""
    config.addinivalue_line(
        "markers", "db: marks tests as requiring database (deselect with '-m \"not db\"')"
    )


@pytest.fixture(autouse=True)
def reset_config_cache():
    """Environment overrides set by one test must not leak into the next."""
    yield
    get_config.cache_clear()
