"""Sun and moon positions, event times and moon phases."""

from sunmoon.astronomy.calculator import SunMoonCalculator
from sunmoon.astronomy.phase import get_moon_data, get_moon_illumination
from sunmoon.astronomy.position import get_moon_position, get_position
from sunmoon.astronomy.registry import (
    AngleRegistry,
    add_deprecated_time_name,
    add_time,
    get_default_registry,
)
from sunmoon.astronomy.solver import (
    get_moon_times,
    get_solar_time,
    get_sun_time,
    get_sun_time_by_azimuth,
    get_sun_times,
)
from sunmoon.astronomy.transit import moon_transit, pair_midpoint

__all__ = [
    "SunMoonCalculator",
    "AngleRegistry",
    "add_deprecated_time_name",
    "add_time",
    "get_default_registry",
    "get_position",
    "get_moon_position",
    "get_sun_times",
    "get_sun_time",
    "get_sun_time_by_azimuth",
    "get_solar_time",
    "get_moon_times",
    "get_moon_illumination",
    "get_moon_data",
    "moon_transit",
    "pair_midpoint",
]
