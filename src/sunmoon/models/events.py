"""Event models for sun and moon threshold crossings."""

from __future__ import annotations

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, Field

from sunmoon.timeutil import from_timestamp_ms


class EventKind(str, Enum):
    """Which side of the day an event belongs to."""

    RISE = "rise"
    SET = "set"
    NOON = "noon"
    NADIR = "nadir"


class SunEvent(str, Enum):
    """Built-in sun events.

    Names are the keys used in sun time results. Custom events added to a
    registry are keyed by their validated names only.
    """

    SOLAR_NOON = "solarNoon"
    NADIR = "nadir"

    GOLDEN_HOUR_DAWN_END = "goldenHourDawnEnd"  # 6°
    GOLDEN_HOUR_DUSK_START = "goldenHourDuskStart"
    SUNRISE_END = "sunriseEnd"  # -0.3°
    SUNSET_START = "sunsetStart"
    SUNRISE_START = "sunriseStart"  # -0.833°
    SUNSET_END = "sunsetEnd"
    GOLDEN_HOUR_DAWN_START = "goldenHourDawnStart"  # -1°
    GOLDEN_HOUR_DUSK_END = "goldenHourDuskEnd"
    BLUE_HOUR_DAWN_END = "blueHourDawnEnd"  # -4°
    BLUE_HOUR_DUSK_START = "blueHourDuskStart"
    CIVIL_DAWN = "civilDawn"  # -6°
    CIVIL_DUSK = "civilDusk"
    BLUE_HOUR_DAWN_START = "blueHourDawnStart"  # -8°
    BLUE_HOUR_DUSK_END = "blueHourDuskEnd"
    NAUTICAL_DAWN = "nauticalDawn"  # -12°
    NAUTICAL_DUSK = "nauticalDusk"
    AMATEUR_DAWN = "amateurDawn"  # -15°
    AMATEUR_DUSK = "amateurDusk"
    ASTRONOMICAL_DAWN = "astronomicalDawn"  # -18°
    ASTRONOMICAL_DUSK = "astronomicalDusk"


class EventTime(BaseModel):
    """The instant a body reaches a threshold.

    An event that does not happen on the requested civil day is reported with
    ``valid=False`` and no timestamp.
    """

    name: str
    ts: float | None = Field(default=None, description="Epoch milliseconds")
    julian: float | None = None
    elevation: float = Field(..., description="Threshold altitude in degrees")
    valid: bool
    kind: EventKind
    pos: int = Field(default=0, description="Ordering slot within a day's events")
    deprecated: bool = False
    canonical_name: str | None = None

    @property
    def value(self) -> datetime | None:
        """Event time as an aware UTC datetime."""
        if self.ts is None:
            return None
        return from_timestamp_ms(self.ts)


class SunTime(BaseModel):
    """Rise and set of the sun for a single elevation angle."""

    rise: EventTime
    set: EventTime


class MoonTimes(BaseModel):
    """Moonrise and moonset within one civil day."""

    rise: EventTime
    set: EventTime
    always_up: bool = False
    always_down: bool = False


class TransitResult(BaseModel):
    """Moon meridian transit candidates for one civil day.

    ``main`` is the expected daily transit. ``invert`` is a second candidate
    that appears when two transit-like instants land on the same day.
    """

    main: float | None = None
    invert: float | None = None

    @property
    def main_value(self) -> datetime | None:
        return None if self.main is None else from_timestamp_ms(self.main)

    @property
    def invert_value(self) -> datetime | None:
        return None if self.invert is None else from_timestamp_ms(self.invert)
