"""Root test fixtures shared across all test types.

Database-specific fixtures are in tests/integration/conftest.py.
"""

import os

os.environ.setdefault("APP_ENV", "testing")
# Placeholder so Settings loads; integration tests build their own engine per test
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")

# ruff: noqa: E402 - Imports must be after env var setup
from collections.abc import Generator

import pytest

from src.sitt.core.config import get_settings
from src.sitt.core.shutdown import request_tracker
from tests.helpers import FakeClock

# Clear settings cache to ensure test environment variables are picked up
get_settings.cache_clear()


@pytest.fixture
def clock() -> FakeClock:
    """Controllable clock for the time track service."""
    return FakeClock()


@pytest.fixture
def reset_request_tracker() -> Generator[None]:
    request_tracker.reset()
    yield
    request_tracker.reset()
