"""Observer location models."""

from __future__ import annotations

import re
from typing import Self

from pydantic import BaseModel, Field


# Regex for parsing lat/long coordinates: "latitude,longitude"
# Supports optional +/- prefix for both values
COORDINATE_PATTERN = re.compile(
    r"^(?P<lat>[-+]?\d*\.?\d+)\s*,\s*(?P<lon>[-+]?\d*\.?\d+)$"
)


class Coordinates(BaseModel):
    """Geographic coordinates of an observer.

    Latitude:
        - Negative (-) = south of equator
        - Positive (+) = north of equator
        - Range: -90 to +90

    Longitude:
        - Negative (-) = west of prime meridian
        - Positive (+) = east of prime meridian
        - Range: -180 to +180

    Height is the observer's elevation above the surrounding horizon in
    meters. It lowers the visible horizon (dip) for sun events.
    """

    latitude: float = Field(..., ge=-90, le=90, allow_inf_nan=False, description="Latitude in decimal degrees")
    longitude: float = Field(..., ge=-180, le=180, allow_inf_nan=False, description="Longitude in decimal degrees")
    height: float = Field(default=0.0, ge=0, allow_inf_nan=False, description="Observer height in meters")

    @classmethod
    def from_string(cls, value: str, height: float = 0.0) -> Self:
        """Parse coordinates from string format 'latitude,longitude'.

        Examples:
            '50.5,30.5' -> Kyiv region
            '-33.8688,151.2093' -> Sydney
            '+78.2232,15.6267' -> Longyearbyen
        """
        match = COORDINATE_PATTERN.match(value.strip())
        if not match:
            raise ValueError(
                f"Invalid coordinate format: '{value}'. "
                "Expected format: 'latitude,longitude' (e.g., '50.5,30.5')"
            )
        return cls(
            latitude=float(match.group("lat")),
            longitude=float(match.group("lon")),
            height=height,
        )

    def __str__(self) -> str:
        return f"{self.latitude},{self.longitude}"

    def to_tuple(self) -> tuple[float, float]:
        """Return coordinates as (latitude, longitude) tuple."""
        return (self.latitude, self.longitude)
