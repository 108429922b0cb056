"""Registry routes.

List the named sun thresholds and add new thresholds or deprecated names.
Registration conflicts are reported with 409 so clients can pick another
name.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, status
from pydantic import BaseModel, Field

from sunmoon.api.routes.dependencies import get_registry
from sunmoon.astronomy.registry import AngleRegistry
from sunmoon.models.registry import AngleThreshold, DeprecatedAlias

router = APIRouter()


class RegistryResponse(BaseModel):
    """Current registry contents."""

    thresholds: list[AngleThreshold]
    aliases: list[DeprecatedAlias]


class ThresholdCreate(BaseModel):
    """Request to add a sun threshold."""

    angle: float = Field(..., allow_inf_nan=False)
    rise_name: str
    set_name: str
    rise_position: int | None = None
    set_position: int | None = None
    degrees: bool = True


@router.get("", response_model=RegistryResponse)
async def list_registry(registry: AngleRegistry = Depends(get_registry)) -> RegistryResponse:
    """List thresholds and aliases in registration order."""
    return RegistryResponse(
        thresholds=list(registry.thresholds()),
        aliases=list(registry.aliases()),
    )


@router.post("/thresholds", response_model=AngleThreshold, status_code=status.HTTP_201_CREATED)
async def add_threshold(
    request: ThresholdCreate,
    registry: AngleRegistry = Depends(get_registry),
) -> AngleThreshold:
    """Add a sun threshold."""
    added = registry.register(
        request.angle,
        request.rise_name,
        request.set_name,
        request.rise_position,
        request.set_position,
        request.degrees,
    )
    if not added:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="Threshold names are invalid or already registered",
        )
    return next(t for t in registry.thresholds() if t.rise_name == request.rise_name)


@router.post("/aliases", response_model=DeprecatedAlias, status_code=status.HTTP_201_CREATED)
async def add_alias(
    request: DeprecatedAlias,
    registry: AngleRegistry = Depends(get_registry),
) -> DeprecatedAlias:
    """Add a deprecated name for a registered event."""
    if not registry.register_alias(request.alias, request.canonical):
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="Alias is invalid or the event name is unknown",
        )
    return request
