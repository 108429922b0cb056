"""Moon routes."""

from __future__ import annotations

from datetime import datetime

from fastapi import APIRouter, Depends

from sunmoon.api.routes.dependencies import Observer, get_observer, get_time
from sunmoon.astronomy.phase import get_moon_data, get_moon_illumination
from sunmoon.astronomy.position import get_moon_position
from sunmoon.astronomy.solver import get_moon_times
from sunmoon.astronomy.transit import moon_transit
from sunmoon.models.events import MoonTimes, TransitResult
from sunmoon.models.position import IlluminationResult, MoonData, MoonPositionResult

router = APIRouter()


@router.get("/position", response_model=MoonPositionResult)
def moon_position(observer: Observer = Depends(get_observer)) -> MoonPositionResult:
    """Get the moon's apparent azimuth, altitude and distance."""
    return get_moon_position(observer.time, observer.lat, observer.lng)


@router.get("/illumination", response_model=IlluminationResult)
def moon_illumination(time: datetime = Depends(get_time)) -> IlluminationResult:
    """Get illuminated fraction, phase and the next quarter phases."""
    return get_moon_illumination(time)


@router.get("/data", response_model=MoonData)
def moon_data(observer: Observer = Depends(get_observer)) -> MoonData:
    """Get moon position and illumination together."""
    return get_moon_data(observer.time, observer.lat, observer.lng)


@router.get("/times", response_model=MoonTimes)
def moon_times(observer: Observer = Depends(get_observer), utc: bool = False) -> MoonTimes:
    """Get moonrise and moonset for the civil day."""
    return get_moon_times(observer.time, observer.lat, observer.lng, utc)


@router.get("/transit", response_model=TransitResult)
def transit(observer: Observer = Depends(get_observer), utc: bool = False) -> TransitResult:
    """Get the moon's meridian transit for the civil day."""
    times = get_moon_times(observer.time, observer.lat, observer.lng, utc)
    return moon_transit(times.rise.ts, times.set.ts, observer.lat, observer.lng, utc)
