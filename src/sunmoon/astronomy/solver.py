"""Times at which the sun or moon reaches a given altitude or azimuth.

Sun events are solved in closed form from the hour angle of the target
altitude around solar noon. The moon moves too irregularly for that, so its
rise and set are found by scanning the civil day in steps of about an hour.

Civil days are resolved in UTC when ``in_utc`` is true and in the configured
civil timezone otherwise (see ``sunmoon.config``).
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass

from sunmoon.astronomy.position import (
    RAD,
    azimuth_from,
    declination,
    ecliptic_longitude,
    get_moon_position,
    observer_angles,
    sidereal_time,
    solar_mean_anomaly,
    sun_coords,
)
from sunmoon.astronomy.registry import AngleRegistry, get_default_registry
from sunmoon.errors import require_number
from sunmoon.models.events import EventKind, EventTime, MoonTimes, SunEvent, SunTime
from sunmoon.timeutil import (
    DAY_MS,
    J2000,
    TimeInput,
    at_hour_of_day,
    from_julian,
    shift_days,
    start_of_day,
    to_days,
    to_julian,
    to_timestamp_ms,
)

logger = logging.getLogger(__name__)

J0 = 0.0009

# Altitude of the moon's center at moonrise/moonset
MOON_HORIZON_DEG = 0.133

HOUR_MS = DAY_MS / 24
MOON_SAMPLES = 24


def julian_cycle(d: float, lw: float) -> int:
    return math.floor(d - J0 - lw / (2 * math.pi) + 0.5)


def approx_transit(Ht: float, lw: float, n: float) -> float:
    return J0 + (Ht + lw) / (2 * math.pi) + n


def solar_transit_j(ds: float, M: float, L: float) -> float:
    return J2000 + ds + 0.0053 * math.sin(M) - 0.0069 * math.sin(2 * L)


def hour_angle(h: float, phi: float, dec: float) -> float:
    """Hour angle at which a body of declination ``dec`` reaches altitude ``h``.

    Returns NaN when the altitude is never reached (polar day or night).
    """
    x = (math.sin(h) - math.sin(phi) * math.sin(dec)) / (math.cos(phi) * math.cos(dec))
    if not -1.0 <= x <= 1.0:
        return math.nan
    return math.acos(x)


def observer_angle(height: float) -> float:
    """Dip of the visible horizon in degrees for an observer ``height`` meters up."""
    return -2.076 * math.sqrt(height) / 60


def get_set_j(h: float, lw: float, phi: float, dec: float, n: int, M: float, L: float) -> float:
    w = hour_angle(h, phi, dec)
    if math.isnan(w):
        return math.nan
    a = approx_transit(w, lw, n)
    return solar_transit_j(a, M, L)


@dataclass
class SolarDay:
    """Quantities shared by all sun events of one civil day."""

    phi: float
    lw: float
    dh: float  # horizon dip in degrees
    n: int
    M: float
    L: float
    dec: float
    j_noon: float

    def set_julian(self, angle_deg: float) -> float:
        """Julian date of the evening crossing of ``angle_deg``, or NaN."""
        h0 = (angle_deg + self.dh) * RAD
        return get_set_j(h0, self.lw, self.phi, self.dec, self.n, self.M, self.L)

    def rise_julian(self, j_set: float) -> float:
        # Rise is symmetric to set around solar noon
        return self.j_noon - (j_set - self.j_noon)


def solar_day(time: TimeInput, lat: float, lng: float, height: float | None, in_utc: bool) -> SolarDay:
    phi, lw = observer_angles(lat, lng)
    ts = at_hour_of_day(to_timestamp_ms(time), 12, in_utc)
    if height is None or math.isnan(height) or height <= 0:
        height = 0.0

    d = to_days(ts)
    n = julian_cycle(d, lw)
    ds = approx_transit(0, lw, n)
    M = solar_mean_anomaly(ds)
    L = ecliptic_longitude(M)
    return SolarDay(
        phi=phi,
        lw=lw,
        dh=observer_angle(height),
        n=n,
        M=M,
        L=L,
        dec=declination(L, 0),
        j_noon=solar_transit_j(ds, M, L),
    )


def _event(name: str, julian: float, elevation: float, kind: EventKind, pos: int) -> EventTime:
    if math.isnan(julian):
        return EventTime(name=name, elevation=elevation, valid=False, kind=kind, pos=pos)
    return EventTime(
        name=name,
        ts=from_julian(julian),
        julian=julian,
        elevation=elevation,
        valid=True,
        kind=kind,
        pos=pos,
    )


def get_sun_times(
    time: TimeInput,
    lat: float,
    lng: float,
    height: float | None = 0,
    include_deprecated: bool = False,
    in_utc: bool = False,
    registry: AngleRegistry | None = None,
) -> dict[str, EventTime]:
    """Calculate all registered sun events of a civil day.

    Args:
        time: Any instant of the civil day
        lat: Latitude in degrees
        lng: Longitude in degrees, positive East
        height: Observer height in meters
        include_deprecated: Also return events under their deprecated names
        in_utc: Use the UTC day instead of the configured civil timezone
        registry: Thresholds to solve (default registry if omitted)

    Returns:
        Mapping of event name to EventTime, including ``solarNoon`` and
        ``nadir``. Events that do not happen on that day have ``valid=False``.
    """
    if registry is None:
        registry = get_default_registry()
    day = solar_day(time, lat, lng, height, in_utc)
    thresholds = registry.thresholds()
    count = len(thresholds)

    result: dict[str, EventTime] = {
        SunEvent.SOLAR_NOON.value: _event(SunEvent.SOLAR_NOON.value, day.j_noon, 90.0, EventKind.NOON, count),
        SunEvent.NADIR.value: _event(SunEvent.NADIR.value, day.j_noon + 0.5, -90.0, EventKind.NADIR, count * 2 + 1),
    }

    for i, threshold in enumerate(thresholds):
        j_set = day.set_julian(threshold.angle)
        j_rise = day.rise_julian(j_set)
        set_pos = threshold.set_position if threshold.set_position is not None else count + i + 1
        rise_pos = threshold.rise_position if threshold.rise_position is not None else count - i - 1
        result[threshold.set_name] = _event(threshold.set_name, j_set, threshold.angle, EventKind.SET, set_pos)
        result[threshold.rise_name] = _event(threshold.rise_name, j_rise, threshold.angle, EventKind.RISE, rise_pos)

    if include_deprecated:
        for alias, canonical in registry.effective_aliases().items():
            if canonical not in result:
                continue
            result[alias] = result[canonical].model_copy(
                update={"name": alias, "deprecated": True, "canonical_name": canonical, "pos": -2}
            )

    return result


def get_sun_time(
    time: TimeInput,
    lat: float,
    lng: float,
    elevation_angle: float,
    height: float | None = 0,
    degrees: bool = True,
    in_utc: bool = False,
) -> SunTime:
    """Calculate when the sun crosses a single elevation angle.

    The elevation is used as given, like the angles of registered
    thresholds, so conventional horizon angles such as -0.833 already carry
    refraction.

    Raises:
        InvalidArgumentError: If latitude, longitude or elevation is not a number
    """
    observer_angles(lat, lng)
    elevation = require_number("elevationAngle", elevation_angle)
    elevation_deg = elevation if degrees else math.degrees(elevation)

    day = solar_day(time, lat, lng, height, in_utc)
    j_set = day.set_julian(elevation_deg)
    j_rise = day.rise_julian(j_set)

    return SunTime(
        rise=_event("rise", j_rise, elevation_deg, EventKind.RISE, 1),
        set=_event("set", j_set, elevation_deg, EventKind.SET, 0),
    )


def get_sun_time_by_azimuth(
    time: TimeInput,
    lat: float,
    lng: float,
    azimuth: float,
    degrees: bool = True,
    in_utc: bool = False,
) -> float:
    """Find when the sun reaches an azimuth (from North) on a civil day.

    Bisects over the day assuming the azimuth grows steadily from midnight
    to midnight. This holds at moderate latitudes but not near the poles or
    when the civil day is far from the local solar day.

    Returns:
        Epoch milliseconds, floored to the millisecond
    """
    phi, lw = observer_angles(lat, lng)
    target = require_number("azimuth", azimuth)
    if degrees:
        target *= RAD

    step = DAY_MS / 2
    ts = start_of_day(to_timestamp_ms(time), in_utc) + step
    while step > 200:
        step /= 2
        d = to_days(ts)
        c = sun_coords(d)
        H = sidereal_time(d, lw) - c.ra
        if azimuth_from(H, phi, c.dec) > target:
            ts -= step
        else:
            ts += step

    return float(math.floor(ts))


def get_solar_time(time: TimeInput, lng: float, utc_offset_minutes: float | None = None) -> float:
    """Apparent solar time at longitude ``lng``.

    The result is epoch milliseconds whose UTC clock reading is the local
    apparent solar time: 12:00 at the moment of solar noon. It depends only
    on the instant and the longitude; ``utc_offset_minutes`` is accepted for
    callers that pass their zone offset and does not change the result.
    """
    ts = to_timestamp_ms(time)
    lng = require_number("longitude", lng)
    d = to_days(ts)
    M = solar_mean_anomaly(d)
    L = ecliptic_longitude(M)
    equation_of_time = 0.0053 * math.sin(M) - 0.0069 * math.sin(2 * L)
    return ts + (lng / 360 - J0 - equation_of_time) * DAY_MS


def _moon_event(name: str, ts: float | None, kind: EventKind, pos: int) -> EventTime:
    if ts is None:
        return EventTime(name=name, elevation=MOON_HORIZON_DEG, valid=False, kind=kind, pos=pos)
    return EventTime(
        name=name,
        ts=ts,
        julian=to_julian(ts),
        elevation=MOON_HORIZON_DEG,
        valid=True,
        kind=kind,
        pos=pos,
    )


def get_moon_times(time: TimeInput, lat: float, lng: float, in_utc: bool = False) -> MoonTimes:
    """Calculate moonrise and moonset for a civil day.

    The apparent altitude is sampled at ``MOON_SAMPLES`` even steps from
    midnight to the next midnight, so a day with a daylight-saving change is
    sampled over its real 23 or 25 hours. Each crossing of the moon horizon
    is interpolated linearly within its step. Only the first rise and the
    first set of the day are reported.
    """
    observer_angles(lat, lng)
    start = start_of_day(to_timestamp_ms(time), in_utc)
    step = (start_of_day(shift_days(start, 1, in_utc), in_utc) - start) / MOON_SAMPLES

    def height_above_horizon(ts: float) -> float:
        return get_moon_position(ts, lat, lng).altitude_degrees - MOON_HORIZON_DEG

    rise: float | None = None
    set_: float | None = None
    prev = height_above_horizon(start)
    current = prev

    for i in range(1, MOON_SAMPLES + 1):
        current = height_above_horizon(start + i * step)
        crossing = start + (i - 1 + prev / (prev - current)) * step if prev != current else None
        if rise is None and prev < 0 <= current:
            rise = crossing
        elif set_ is None and prev >= 0 > current:
            set_ = crossing
        if rise is not None and set_ is not None:
            break
        prev = current

    always_up = rise is None and set_ is None and current > 0
    always_down = rise is None and set_ is None and not always_up
    if always_up or always_down:
        logger.debug(f"Moon never crosses the horizon at {lat},{lng} on day starting {start}")

    return MoonTimes(
        rise=_moon_event("rise", rise, EventKind.RISE, 0),
        set=_moon_event("set", set_, EventKind.SET, 1),
        always_up=always_up,
        always_down=always_down,
    )
