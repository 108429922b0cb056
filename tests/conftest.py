"""Pytest fixtures for sun and moon calculation tests.

This module provides test fixtures that ensure:
1. A controlled configuration (UTC civil days, no .env surprises)
2. A fresh default registry for every test, since registration mutates it
3. Reference locations and instants shared by the test modules
"""

import os
from datetime import datetime, timezone

import pytest

# Set test environment BEFORE importing application modules
os.environ.setdefault("SUNMOON_CIVIL_TIMEZONE", "UTC")
os.environ.setdefault("SUNMOON_LOG_LEVEL", "DEBUG")
os.environ.setdefault("SUNMOON_DEBUG", "true")

from sunmoon.astronomy.registry import AngleRegistry, get_default_registry
from sunmoon.models.location import Coordinates
from sunmoon.timeutil import to_timestamp_ms


# =============================================================================
# Test Isolation Fixtures
# =============================================================================


@pytest.fixture(autouse=True)
def reset_settings_cache():
    """Reset settings cache before each test to ensure clean state."""
    from sunmoon.config import get_settings
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture(autouse=True)
def reset_default_registry():
    """Start every test with a default registry holding only the built-ins."""
    get_default_registry.cache_clear()
    yield
    get_default_registry.cache_clear()


@pytest.fixture
def registry() -> AngleRegistry:
    """A private registry with the built-in thresholds and aliases."""
    return AngleRegistry()


# =============================================================================
# Sample Data Fixtures
# =============================================================================


@pytest.fixture
def sample_coordinates() -> Coordinates:
    """Reference location of the SunCalc test values."""
    return Coordinates(latitude=50.5, longitude=30.5)


@pytest.fixture
def reference_ts() -> float:
    """2013-03-05T00:00:00Z, the reference instant of the SunCalc test values."""
    return to_timestamp_ms(datetime(2013, 3, 5, tzinfo=timezone.utc))


@pytest.fixture
def utc_ms():
    """Build epoch milliseconds from UTC datetime fields."""

    def build(*args: int) -> float:
        return to_timestamp_ms(datetime(*args, tzinfo=timezone.utc))

    return build
