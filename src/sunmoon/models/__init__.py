"""Domain models for sun and moon calculations."""

from sunmoon.models.location import Coordinates
from sunmoon.models.events import (
    EventKind,
    EventTime,
    MoonTimes,
    SunEvent,
    SunTime,
    TransitResult,
)
from sunmoon.models.position import (
    IlluminationResult,
    MoonData,
    MoonPhase,
    MoonPositionResult,
    PhaseEvent,
    PhaseEventType,
    PositionResult,
)
from sunmoon.models.registry import AngleThreshold, DeprecatedAlias

__all__ = [
    # Location
    "Coordinates",
    # Events
    "EventKind",
    "EventTime",
    "MoonTimes",
    "SunEvent",
    "SunTime",
    "TransitResult",
    # Positions
    "IlluminationResult",
    "MoonData",
    "MoonPhase",
    "MoonPositionResult",
    "PhaseEvent",
    "PhaseEventType",
    "PositionResult",
    # Registry
    "AngleThreshold",
    "DeprecatedAlias",
]
