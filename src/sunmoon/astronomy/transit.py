"""Moon meridian transit for a civil day.

Moonrise and moonset drift by about 50 minutes a day, so the transit that
falls on a given calendar day is not always the one between that day's own
rise and set. The transit is estimated as the midpoint of a rise/set pair and
the candidate pairs are checked in a fixed order:

1. today's rise and today's set;
2. today's rise and tomorrow's set;
3. yesterday's rise and today's set.

Later rules win over earlier ones, as documented on ``moon_transit``.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from typing import Callable

from sunmoon.astronomy.position import observer_angles
from sunmoon.astronomy.solver import get_moon_times
from sunmoon.models.events import TransitResult
from sunmoon.timeutil import civil_date, shift_days

logger = logging.getLogger(__name__)


def pair_midpoint(a: float, b: float) -> float:
    """Arithmetic midpoint of two timestamps, in either order."""
    return a + (b - a) / 2


@dataclass
class _TransitState:
    rise: float | None
    set: float | None
    day: date
    lat: float
    lng: float
    in_utc: bool
    main: float | None = None
    invert: float | None = None

    def on_day(self, ts: float) -> bool:
        return civil_date(ts, self.in_utc) == self.day

    def neighbour_times(self, ts: float, days: int):
        return get_moon_times(shift_days(ts, days, self.in_utc), self.lat, self.lng, self.in_utc)


def _same_day_pair(state: _TransitState) -> None:
    """Rule 1: rise and set of the day itself."""
    if state.rise is None or state.set is None:
        return
    if state.rise < state.set:
        state.main = pair_midpoint(state.rise, state.set)
    else:
        state.invert = pair_midpoint(state.rise, state.set)


def _rise_with_next_set(state: _TransitState) -> None:
    """Rule 2: today's rise with tomorrow's set, if the midpoint is still today."""
    if state.rise is None:
        return
    next_set = state.neighbour_times(state.rise, 1).set.ts
    if next_set is None:
        return
    candidate = pair_midpoint(state.rise, next_set)
    if not state.on_day(candidate):
        return
    if state.main is None:
        state.main = candidate
    else:
        state.invert = candidate


def _set_with_previous_rise(state: _TransitState) -> None:
    """Rule 3: yesterday's rise with today's set; overrides ``main``."""
    if state.set is None:
        return
    previous_rise = state.neighbour_times(state.set, -1).rise.ts
    if previous_rise is None:
        return
    candidate = pair_midpoint(state.set, previous_rise)
    if state.on_day(candidate):
        state.main = candidate


TRANSIT_RULES: tuple[Callable[[_TransitState], None], ...] = (
    _same_day_pair,
    _rise_with_next_set,
    _set_with_previous_rise,
)


def moon_transit(
    rise: float | None,
    set: float | None,
    lat: float,
    lng: float,
    in_utc: bool = False,
) -> TransitResult:
    """Resolve the moon's meridian transit for the civil day of ``set``.

    Args:
        rise: Moonrise of the day in epoch milliseconds, or None
        set: Moonset of the day in epoch milliseconds, or None
        lat: Latitude in degrees
        lng: Longitude in degrees, positive East
        in_utc: Use UTC days instead of the configured civil timezone

    Returns:
        TransitResult with ``main`` (the expected transit) and ``invert`` (a
        second candidate on the same day, or None). The rules of the module
        docstring are applied in order; rule 2 fills ``main`` if still empty
        and ``invert`` otherwise, rule 3 always overwrites ``main``.
    """
    observer_angles(lat, lng)
    reference = set if set is not None else rise
    if reference is None:
        return TransitResult()

    state = _TransitState(
        rise=rise,
        set=set,
        day=civil_date(reference, in_utc),
        lat=lat,
        lng=lng,
        in_utc=in_utc,
    )
    for rule in TRANSIT_RULES:
        rule(state)

    logger.debug(f"Moon transit on {state.day}: main={state.main} invert={state.invert}")
    return TransitResult(main=state.main, invert=state.invert)
