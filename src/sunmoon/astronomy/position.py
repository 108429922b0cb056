"""Sun and moon positions from low-order series.

The formulas follow the classic approximations from Jean Meeus,
"Astronomical Algorithms", reduced to the handful of periodic terms that keep
the sun within about a minute of arc and the moon within a fraction of a
degree for dates a few centuries around J2000.

All angles are radians unless a name says otherwise. Time is civil time in
epoch milliseconds (or a datetime, see ``sunmoon.timeutil``).
"""

from __future__ import annotations

import math
from dataclasses import dataclass

from sunmoon.errors import require_number
from sunmoon.models.position import MoonPositionResult, PositionResult
from sunmoon.timeutil import TimeInput, to_days, to_timestamp_ms

RAD = math.pi / 180
TAU = 2 * math.pi

OBLIQUITY = RAD * 23.4397  # obliquity of the Earth
PERIHELION = RAD * 102.9372  # perihelion of the Earth
EARTH_RADIUS_KM = 6378.14


@dataclass
class CelestialCoordinates:
    """Geocentric equatorial coordinates of a body."""

    ra: float  # Right ascension
    dec: float  # Declination
    ecliptic_longitude: float
    distance: float | None = None  # km, moon only


def _clamp_unit(x: float) -> float:
    return max(-1.0, min(1.0, x))


def right_ascension(l: float, b: float) -> float:
    return math.atan2(
        math.sin(l) * math.cos(OBLIQUITY) - math.tan(b) * math.sin(OBLIQUITY),
        math.cos(l),
    )


def declination(l: float, b: float) -> float:
    return math.asin(
        _clamp_unit(math.sin(b) * math.cos(OBLIQUITY) + math.cos(b) * math.sin(OBLIQUITY) * math.sin(l))
    )


def azimuth_from(H: float, phi: float, dec: float) -> float:
    """Azimuth measured from North, in [0, 2pi)."""
    az = math.atan2(math.sin(H), math.cos(H) * math.sin(phi) - math.tan(dec) * math.cos(phi)) + math.pi
    return az % TAU


def altitude_from(H: float, phi: float, dec: float) -> float:
    return math.asin(
        _clamp_unit(math.sin(phi) * math.sin(dec) + math.cos(phi) * math.cos(dec) * math.cos(H))
    )


def sidereal_time(d: float, lw: float) -> float:
    return RAD * (280.16 + 360.9856235 * d) - lw


def astro_refraction(h: float) -> float:
    """Atmospheric refraction in radians at geometric altitude ``h``.

    Saemundsson's formula; altitudes below the horizon are treated as 0.
    """
    if h < 0:
        h = 0
    return 0.0002967 / math.tan(h + 0.00312536 / (h + 0.08901179))


def solar_mean_anomaly(d: float) -> float:
    return RAD * (357.5291 + 0.98560028 * d)


def ecliptic_longitude(M: float) -> float:
    """Ecliptic longitude of the sun for mean anomaly ``M``."""
    C = RAD * (1.9148 * math.sin(M) + 0.02 * math.sin(2 * M) + 0.0003 * math.sin(3 * M))
    return M + C + PERIHELION + math.pi


def sun_coords(d: float) -> CelestialCoordinates:
    M = solar_mean_anomaly(d)
    L = ecliptic_longitude(M)
    return CelestialCoordinates(
        ra=right_ascension(L, 0),
        dec=declination(L, 0),
        ecliptic_longitude=L,
    )


def moon_coords(d: float) -> CelestialCoordinates:
    """Geocentric moon coordinates for ``d`` days since J2000."""
    L0 = RAD * (218.316 + 13.176396 * d)  # mean longitude
    M = RAD * (134.963 + 13.064993 * d)  # mean anomaly
    F = RAD * (93.272 + 13.229350 * d)  # argument of latitude
    D = RAD * (297.850 + 12.190749 * d)  # mean elongation
    Ms = solar_mean_anomaly(d)

    l = L0 + RAD * (
        6.289 * math.sin(M)
        + 1.274 * math.sin(2 * D - M)  # evection
        + 0.658 * math.sin(2 * D)  # variation
        + 0.214 * math.sin(2 * M)
        - 0.186 * math.sin(Ms)  # annual equation
        - 0.114 * math.sin(2 * F)
    )
    b = RAD * (
        5.128 * math.sin(F)
        + 0.280 * math.sin(M + F)
        + 0.277 * math.sin(M - F)
        + 0.173 * math.sin(2 * D - F)
    )
    dist = 385001 - 20905 * math.cos(M) - 3699 * math.cos(2 * D - M) - 2956 * math.cos(2 * D)

    return CelestialCoordinates(
        ra=right_ascension(l, b),
        dec=declination(l, b),
        ecliptic_longitude=l,
        distance=dist,
    )


def lunar_parallax(h: float, distance: float) -> float:
    """Parallax in altitude of the moon at geocentric altitude ``h``."""
    return math.asin(_clamp_unit(EARTH_RADIUS_KM / distance * math.cos(h)))


def observer_angles(lat: float, lng: float) -> tuple[float, float]:
    """Return (phi, lw): latitude and west longitude in radians.

    Raises:
        InvalidArgumentError: If latitude or longitude is not a number
    """
    lat = require_number("latitude", lat)
    lng = require_number("longitude", lng)
    return RAD * lat, RAD * -lng


def get_position(time: TimeInput, lat: float, lng: float) -> PositionResult:
    """Calculate the sun position at a given time and location.

    Args:
        time: Epoch milliseconds or datetime
        lat: Latitude in degrees
        lng: Longitude in degrees, positive East

    Returns:
        PositionResult with azimuth (from North), altitude and zenith
    """
    phi, lw = observer_angles(lat, lng)
    d = to_days(to_timestamp_ms(time))
    c = sun_coords(d)
    H = sidereal_time(d, lw) - c.ra
    azimuth = azimuth_from(H, phi, c.dec)
    altitude = altitude_from(H, phi, c.dec)

    return PositionResult(
        azimuth=azimuth,
        altitude=altitude,
        zenith=math.pi / 2 - altitude,
        azimuth_degrees=math.degrees(azimuth),
        altitude_degrees=math.degrees(altitude),
        zenith_degrees=90 - math.degrees(altitude),
        declination=c.dec,
    )


def get_moon_position(time: TimeInput, lat: float, lng: float) -> MoonPositionResult:
    """Calculate the apparent moon position at a given time and location.

    The altitude is topocentric (corrected for parallax) and includes
    atmospheric refraction.
    """
    phi, lw = observer_angles(lat, lng)
    d = to_days(to_timestamp_ms(time))
    c = moon_coords(d)
    H = sidereal_time(d, lw) - c.ra
    azimuth = azimuth_from(H, phi, c.dec)
    altitude = altitude_from(H, phi, c.dec)
    altitude -= lunar_parallax(altitude, c.distance)
    altitude += astro_refraction(altitude)

    # formula 14.1 of "Astronomical Algorithms" 2nd edition by Jean Meeus
    pa = math.atan2(math.sin(H), math.tan(phi) * math.cos(c.dec) - math.sin(c.dec) * math.cos(H))

    return MoonPositionResult(
        azimuth=azimuth,
        altitude=altitude,
        zenith=math.pi / 2 - altitude,
        azimuth_degrees=math.degrees(azimuth),
        altitude_degrees=math.degrees(altitude),
        zenith_degrees=90 - math.degrees(altitude),
        declination=c.dec,
        distance=c.distance,
        parallactic_angle=pa,
        parallactic_angle_degrees=math.degrees(pa),
    )
