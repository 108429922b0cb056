"""Location-bound access to the sun and moon calculations."""

from __future__ import annotations

from sunmoon.astronomy.phase import get_moon_data, get_moon_illumination
from sunmoon.astronomy.position import get_moon_position, get_position
from sunmoon.astronomy.registry import AngleRegistry, get_default_registry
from sunmoon.astronomy.solver import (
    get_moon_times,
    get_solar_time,
    get_sun_time,
    get_sun_time_by_azimuth,
    get_sun_times,
)
from sunmoon.astronomy.transit import moon_transit
from sunmoon.models.events import EventTime, MoonTimes, SunEvent, SunTime, TransitResult
from sunmoon.models.location import Coordinates
from sunmoon.models.position import IlluminationResult, MoonData, MoonPositionResult, PositionResult
from sunmoon.timeutil import TimeInput, civil_date, to_timestamp_ms


class SunMoonCalculator:
    """Calculator for sun and moon data at a specific location.

    Sun and moon times are cached per civil day. The cache does not notice
    thresholds added to the registry afterwards; call ``clear_cache()`` after
    registering new ones.

    Example:
        ```python
        calc = SunMoonCalculator(Coordinates(latitude=50.5, longitude=30.5))

        # Sun events for today
        times = calc.get_sun_times(datetime.now(timezone.utc))
        sunrise = times["sunriseStart"].value

        # Moon transit for today
        transit = calc.get_moon_transit(datetime.now(timezone.utc))
        ```
    """

    def __init__(
        self,
        coordinates: Coordinates,
        registry: AngleRegistry | None = None,
        in_utc: bool = False,
    ):
        """Initialize calculator for a specific location.

        Args:
            coordinates: Observer location, including height
            registry: Thresholds for sun times (default registry if omitted)
            in_utc: Use UTC days instead of the configured civil timezone
        """
        self.coordinates = coordinates
        self.registry = registry if registry is not None else get_default_registry()
        self.in_utc = in_utc
        self._sun_cache: dict[str, dict[str, EventTime]] = {}
        self._moon_cache: dict[str, MoonTimes] = {}

    @property
    def lat(self) -> float:
        return self.coordinates.latitude

    @property
    def lng(self) -> float:
        return self.coordinates.longitude

    def _day_key(self, time: TimeInput) -> str:
        return civil_date(to_timestamp_ms(time), self.in_utc).isoformat()

    def clear_cache(self) -> None:
        self._sun_cache.clear()
        self._moon_cache.clear()

    def get_sun_position(self, time: TimeInput) -> PositionResult:
        return get_position(time, self.lat, self.lng)

    def get_moon_position(self, time: TimeInput) -> MoonPositionResult:
        return get_moon_position(time, self.lat, self.lng)

    def get_sun_times(self, time: TimeInput, include_deprecated: bool = False) -> dict[str, EventTime]:
        """Get sun events for the civil day of ``time`` (cached)."""
        cache_key = f"{self._day_key(time)}:{include_deprecated}"
        if cache_key not in self._sun_cache:
            self._sun_cache[cache_key] = get_sun_times(
                time,
                self.lat,
                self.lng,
                height=self.coordinates.height,
                include_deprecated=include_deprecated,
                in_utc=self.in_utc,
                registry=self.registry,
            )
        return self._sun_cache[cache_key]

    def get_sun_time(self, time: TimeInput, elevation: float, degrees: bool = True) -> SunTime:
        """Find when the sun crosses a single elevation angle."""
        return get_sun_time(
            time, self.lat, self.lng, elevation, self.coordinates.height, degrees, self.in_utc
        )

    def get_sun_time_by_azimuth(self, time: TimeInput, azimuth: float, degrees: bool = True) -> float:
        return get_sun_time_by_azimuth(time, self.lat, self.lng, azimuth, degrees, self.in_utc)

    def get_solar_time(self, time: TimeInput) -> float:
        return get_solar_time(time, self.lng)

    def get_moon_times(self, time: TimeInput) -> MoonTimes:
        """Get moonrise and moonset for the civil day of ``time`` (cached)."""
        cache_key = self._day_key(time)
        if cache_key not in self._moon_cache:
            self._moon_cache[cache_key] = get_moon_times(time, self.lat, self.lng, self.in_utc)
        return self._moon_cache[cache_key]

    def get_moon_transit(self, time: TimeInput) -> TransitResult:
        """Resolve the moon's meridian transit for the civil day of ``time``."""
        times = self.get_moon_times(time)
        return moon_transit(times.rise.ts, times.set.ts, self.lat, self.lng, self.in_utc)

    def get_moon_illumination(self, time: TimeInput) -> IlluminationResult:
        return get_moon_illumination(time)

    def get_moon_data(self, time: TimeInput) -> MoonData:
        return get_moon_data(time, self.lat, self.lng)

    def is_night(self, time: TimeInput) -> bool:
        """Check if the sun is below the standard sunset altitude."""
        return self.get_sun_position(time).altitude_degrees < self._angle_of(SunEvent.SUNSET_END)

    def is_astronomical_night(self, time: TimeInput) -> bool:
        """Check if it's astronomical night (sun below -18°)."""
        return self.get_sun_position(time).altitude_degrees < self._angle_of(SunEvent.ASTRONOMICAL_DUSK)

    def _angle_of(self, event: SunEvent) -> float:
        for threshold in self.registry.thresholds():
            if event.value in threshold.names:
                return threshold.angle
        raise KeyError(event.value)
