"""Shared query parameters for the API routes."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone

from fastapi import Query, Request

from sunmoon.astronomy.registry import AngleRegistry


@dataclass
class Observer:
    """Observer location and instant taken from the query string."""

    lat: float
    lng: float
    time: datetime


def get_observer(
    lat: float = Query(..., ge=-90, le=90, description="Latitude in degrees"),
    lng: float = Query(..., ge=-180, le=180, description="Longitude in degrees, positive East"),
    time: datetime | None = Query(default=None, description="ISO 8601 instant (default: now)"),
) -> Observer:
    return Observer(lat=lat, lng=lng, time=time or datetime.now(timezone.utc))


def get_time(
    time: datetime | None = Query(default=None, description="ISO 8601 instant (default: now)"),
) -> datetime:
    return time or datetime.now(timezone.utc)


def get_registry(request: Request) -> AngleRegistry:
    return request.app.state.registry
