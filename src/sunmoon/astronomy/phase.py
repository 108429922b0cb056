"""Moon illumination, phase and upcoming quarter phases."""

from __future__ import annotations

import logging
import math

from sunmoon.astronomy.position import get_moon_position, moon_coords, sun_coords
from sunmoon.models.position import (
    IlluminationResult,
    MoonData,
    MoonPhase,
    PhaseEvent,
    PhaseEventType,
)
from sunmoon.timeutil import DAY_MS, TimeInput, to_days, to_timestamp_ms

logger = logging.getLogger(__name__)

SUN_DISTANCE_KM = 149598000

LUNAR_CYCLE_MS = 2551442778  # 29.53058770576 days
FIRST_NEW_MOON_2000 = 947178840000  # 2000-01-06 18:14 UTC

PHASE_SEARCH_STEP_MS = DAY_MS / 24
PHASE_SEARCH_WINDOW_MS = 2 * DAY_MS
PHASE_SEARCH_SAMPLES = 96

MOON_PHASES: tuple[MoonPhase, ...] = tuple(
    MoonPhase(
        id=phase_id,
        name=name,
        emoji=emoji,
        from_value=((i - 0.5) / 8) % 1,
        to_value=(i + 0.5) / 8,
    )
    for i, (phase_id, name, emoji) in enumerate(
        [
            ("newMoon", "New Moon", "\U0001F311"),
            ("waxingCrescentMoon", "Waxing Crescent", "\U0001F312"),
            ("firstQuarterMoon", "First Quarter", "\U0001F313"),
            ("waxingGibbousMoon", "Waxing Gibbous", "\U0001F314"),
            ("fullMoon", "Full Moon", "\U0001F315"),
            ("waningGibbousMoon", "Waning Gibbous", "\U0001F316"),
            ("thirdQuarterMoon", "Third Quarter", "\U0001F317"),
            ("waningCrescentMoon", "Waning Crescent", "\U0001F318"),
        ]
    )
)

QUARTERS: tuple[tuple[PhaseEventType, float], ...] = (
    (PhaseEventType.NEW_MOON, 0.0),
    (PhaseEventType.FIRST_QUARTER, 0.25),
    (PhaseEventType.FULL_MOON, 0.5),
    (PhaseEventType.THIRD_QUARTER, 0.75),
)


def phase_value_at(ts: float) -> float:
    """Position in the lunar cycle: 0 new, 0.25 first quarter, 0.5 full, 0.75 last quarter.

    Taken from the difference of the geocentric ecliptic longitudes of the
    moon and the sun.
    """
    d = to_days(ts)
    delta = moon_coords(d).ecliptic_longitude - sun_coords(d).ecliptic_longitude
    value = (math.atan2(math.sin(delta), math.cos(delta)) / (2 * math.pi)) % 1.0
    return 0.0 if value >= 1.0 else value


def phase_for_value(value: float) -> MoonPhase:
    """Bucket a phase value into one of the eight named phases."""
    return MOON_PHASES[math.floor(value * 8 + 0.5) % 8]


def _crossed(prev: float, current: float, target: float) -> bool:
    if target == 0.0:
        # Wraps from just below 1 to just above 0
        return prev - current > 0.5
    return prev < target <= current


def _interpolate(prev_ts: float, prev: float, current: float, target: float) -> float:
    if target == 0.0:
        current += 1.0
        target = 1.0
    return prev_ts + (target - prev) / (current - prev) * PHASE_SEARCH_STEP_MS


def _scan_for_crossing(start: float, target: float) -> float | None:
    prev_ts = start
    prev = phase_value_at(start)
    for i in range(1, PHASE_SEARCH_SAMPLES + 1):
        ts = start + i * PHASE_SEARCH_STEP_MS
        current = phase_value_at(ts)
        if _crossed(prev, current, target):
            return _interpolate(prev_ts, prev, current, target)
        prev_ts, prev = ts, current
    return None


def mean_next_phase(ts: float, target: float) -> float:
    """Next instant after ``ts`` of a phase in the mean lunar cycle."""
    cycle_offset = (ts - FIRST_NEW_MOON_2000) % LUNAR_CYCLE_MS
    estimate = ts - cycle_offset + target * LUNAR_CYCLE_MS
    if estimate <= ts:
        estimate += LUNAR_CYCLE_MS
    return estimate


def next_phase_time(ts: float, target: float) -> float:
    """First instant after ``ts`` at which the phase value passes ``target``.

    Starts from the mean-cycle estimate and scans hourly around it. The true
    phase can lead or lag the mean one by over half a day, so the previous
    and following cycles are tried as well.
    """
    estimate = mean_next_phase(ts, target)
    for candidate in (estimate - LUNAR_CYCLE_MS, estimate, estimate + LUNAR_CYCLE_MS):
        if candidate + PHASE_SEARCH_WINDOW_MS <= ts:
            continue
        found = _scan_for_crossing(max(ts, candidate - PHASE_SEARCH_WINDOW_MS), target)
        if found is not None and found > ts:
            return found
    logger.warning(f"No phase {target} crossing found near {estimate}, using the mean cycle")
    return estimate


def get_moon_illumination(time: TimeInput) -> IlluminationResult:
    """Calculate illumination and phase of the moon at a given instant.

    Returns:
        IlluminationResult with the illuminated fraction, the phase value and
        bucket, the bright limb angle and the next four quarter phases in
        time order
    """
    ts = to_timestamp_ms(time)
    d = to_days(ts)
    s = sun_coords(d)
    m = moon_coords(d)

    # Elongation, then the phase angle seen from the moon
    phi = math.acos(
        max(-1.0, min(1.0, math.sin(s.dec) * math.sin(m.dec) + math.cos(s.dec) * math.cos(m.dec) * math.cos(s.ra - m.ra)))
    )
    inc = math.atan2(SUN_DISTANCE_KM * math.sin(phi), m.distance - SUN_DISTANCE_KM * math.cos(phi))
    angle = math.atan2(
        math.cos(s.dec) * math.sin(s.ra - m.ra),
        math.sin(s.dec) * math.cos(m.dec) - math.cos(s.dec) * math.sin(m.dec) * math.cos(s.ra - m.ra),
    )
    phase_value = phase_value_at(ts)

    next_events = sorted(
        (PhaseEvent(id=event_id, ts=next_phase_time(ts, target)) for event_id, target in QUARTERS),
        key=lambda event: event.ts,
    )

    return IlluminationResult(
        fraction=(1 + math.cos(inc)) / 2,
        phase_value=phase_value,
        phase=phase_for_value(phase_value),
        angle=angle,
        next_events=next_events,
    )


def get_moon_data(time: TimeInput, lat: float, lng: float) -> MoonData:
    """Moon position and illumination in one result.

    ``zenith_angle`` is the bright limb angle relative to the observer's
    zenith, useful for drawing the moon as it appears in the sky.
    """
    position = get_moon_position(time, lat, lng)
    illumination = get_moon_illumination(time)
    return MoonData(
        **position.model_dump(),
        illumination=illumination,
        zenith_angle=illumination.angle - position.parallactic_angle,
    )
