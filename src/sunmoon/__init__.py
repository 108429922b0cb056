"""Sun and moon positions, rise/set/twilight times and moon phases."""

from sunmoon.astronomy import (
    AngleRegistry,
    SunMoonCalculator,
    add_deprecated_time_name,
    add_time,
    get_default_registry,
    get_moon_data,
    get_moon_illumination,
    get_moon_position,
    get_moon_times,
    get_position,
    get_solar_time,
    get_sun_time,
    get_sun_time_by_azimuth,
    get_sun_times,
    moon_transit,
    pair_midpoint,
)
from sunmoon.errors import InvalidArgumentError

__version__ = "0.1.0"

__all__ = [
    "AngleRegistry",
    "InvalidArgumentError",
    "SunMoonCalculator",
    "add_deprecated_time_name",
    "add_time",
    "get_default_registry",
    "get_moon_data",
    "get_moon_illumination",
    "get_moon_position",
    "get_moon_times",
    "get_position",
    "get_solar_time",
    "get_sun_time",
    "get_sun_time_by_azimuth",
    "get_sun_times",
    "moon_transit",
    "pair_midpoint",
]
