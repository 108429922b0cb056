"""Models for named sun altitude thresholds."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class AngleThreshold(BaseModel):
    """A sun altitude with the names of its morning and evening events."""

    model_config = ConfigDict(frozen=True)

    angle: float = Field(..., description="Sun altitude in degrees")
    rise_name: str
    set_name: str
    rise_position: int | None = None
    set_position: int | None = None

    @property
    def names(self) -> tuple[str, str]:
        return (self.rise_name, self.set_name)


class DeprecatedAlias(BaseModel):
    """An alternative name that resolves to a registered event name."""

    model_config = ConfigDict(frozen=True)

    alias: str
    canonical: str
