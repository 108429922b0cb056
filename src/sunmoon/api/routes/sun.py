"""Sun routes.

Position, named event times, single-angle times, azimuth crossing and
apparent solar time.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query
from pydantic import BaseModel

from sunmoon.api.routes.dependencies import Observer, get_observer, get_registry
from sunmoon.astronomy.position import get_position
from sunmoon.astronomy.registry import AngleRegistry
from sunmoon.astronomy.solver import (
    get_solar_time,
    get_sun_time,
    get_sun_time_by_azimuth,
    get_sun_times,
)
from sunmoon.config import get_settings
from sunmoon.models.events import EventTime, SunTime
from sunmoon.models.position import PositionResult

router = APIRouter()


class TimestampResponse(BaseModel):
    """A single instant in epoch milliseconds."""

    ts: float


@router.get("/position", response_model=PositionResult)
def sun_position(observer: Observer = Depends(get_observer)) -> PositionResult:
    """Get the sun's azimuth and altitude."""
    return get_position(observer.time, observer.lat, observer.lng)


@router.get("/times", response_model=dict[str, EventTime])
def sun_times(
    observer: Observer = Depends(get_observer),
    height: float | None = Query(default=None, ge=0, description="Observer height in meters"),
    include_deprecated: bool | None = None,
    utc: bool = False,
    registry: AngleRegistry = Depends(get_registry),
) -> dict[str, EventTime]:
    """Get every registered sun event for the civil day."""
    settings = get_settings()
    return get_sun_times(
        observer.time,
        observer.lat,
        observer.lng,
        height=settings.default_height_m if height is None else height,
        include_deprecated=(
            settings.include_deprecated_names if include_deprecated is None else include_deprecated
        ),
        in_utc=utc,
        registry=registry,
    )


@router.get("/time", response_model=SunTime)
def sun_time(
    elevation: float,
    observer: Observer = Depends(get_observer),
    height: float | None = Query(default=None, ge=0),
    degrees: bool = True,
    utc: bool = False,
) -> SunTime:
    """Get the rise and set of the sun at a single elevation angle."""
    if height is None:
        height = get_settings().default_height_m
    return get_sun_time(observer.time, observer.lat, observer.lng, elevation, height, degrees, utc)


@router.get("/azimuth-time", response_model=TimestampResponse)
def sun_azimuth_time(
    azimuth: float,
    observer: Observer = Depends(get_observer),
    degrees: bool = True,
    utc: bool = False,
) -> TimestampResponse:
    """Get when the sun reaches an azimuth (from North) during the civil day."""
    ts = get_sun_time_by_azimuth(observer.time, observer.lat, observer.lng, azimuth, degrees, utc)
    return TimestampResponse(ts=ts)


@router.get("/solar-time", response_model=TimestampResponse)
def solar_time(observer: Observer = Depends(get_observer)) -> TimestampResponse:
    """Get apparent solar time; the UTC clock reading of ``ts`` is the solar time."""
    return TimestampResponse(ts=get_solar_time(observer.time, observer.lng))
