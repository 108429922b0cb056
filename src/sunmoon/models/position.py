"""Position and illumination models for the sun and moon."""

from __future__ import annotations

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, Field

from sunmoon.timeutil import from_timestamp_ms


class PositionResult(BaseModel):
    """Horizontal position of a body.

    Azimuth is measured from North through East (0=N, pi/2=E, pi=S).
    """

    azimuth: float
    altitude: float
    zenith: float
    azimuth_degrees: float
    altitude_degrees: float
    zenith_degrees: float
    declination: float


class MoonPositionResult(PositionResult):
    """Moon position with distance and parallactic angle."""

    distance: float = Field(..., description="Earth-Moon distance in km")
    parallactic_angle: float
    parallactic_angle_degrees: float


class PhaseEventType(str, Enum):
    """Quarter boundaries of the lunar cycle."""

    NEW_MOON = "newMoon"
    FIRST_QUARTER = "firstQuarter"
    FULL_MOON = "fullMoon"
    THIRD_QUARTER = "thirdQuarter"


class MoonPhase(BaseModel):
    """One of the eight phase buckets."""

    id: str
    name: str
    emoji: str
    from_value: float
    to_value: float


class PhaseEvent(BaseModel):
    """An upcoming quarter-phase instant."""

    id: PhaseEventType
    ts: float

    @property
    def value(self) -> datetime:
        return from_timestamp_ms(self.ts)


class IlluminationResult(BaseModel):
    """Illuminated fraction and phase of the moon."""

    fraction: float = Field(..., ge=0, le=1)
    phase_value: float = Field(..., ge=0, lt=1)
    phase: MoonPhase
    angle: float = Field(..., description="Bright limb position angle in radians")
    next_events: list[PhaseEvent]

    @property
    def next(self) -> PhaseEvent:
        """The nearest upcoming quarter phase."""
        return self.next_events[0]


class MoonData(MoonPositionResult):
    """Moon position combined with its illumination."""

    illumination: IlluminationResult
    zenith_angle: float
