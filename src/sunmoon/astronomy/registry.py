"""Registry of named sun altitude thresholds.

The registry holds the ordered list of altitudes that ``get_sun_times``
solves, together with a table of deprecated alternative names. It is
append-only: thresholds and aliases can be added at runtime but never
removed, except that an alias is dropped when a threshold claims its name.

A registry is an ordinary object. Solvers accept one explicitly and fall back
to a process-wide default created on first use:

```python
registry = AngleRegistry()
registry.register(-3, "lateDawn", "earlyDusk")
times = get_sun_times(ts, 50.5, 30.5, registry=registry)
```
"""

from __future__ import annotations

import logging
import math
import re
import threading
from functools import lru_cache
from typing import Iterable

from sunmoon.models.events import SunEvent
from sunmoon.models.registry import AngleThreshold, DeprecatedAlias

logger = logging.getLogger(__name__)

NAME_PATTERN = re.compile(r"^(?![0-9])[a-zA-Z0-9$_]+$")

# Result keys produced for every call, never available as threshold names
RESERVED_NAMES = frozenset({SunEvent.SOLAR_NOON.value, SunEvent.NADIR.value})

BUILTIN_THRESHOLDS: tuple[AngleThreshold, ...] = (
    AngleThreshold(angle=6, rise_name=SunEvent.GOLDEN_HOUR_DAWN_END.value, set_name=SunEvent.GOLDEN_HOUR_DUSK_START.value),
    AngleThreshold(angle=-0.3, rise_name=SunEvent.SUNRISE_END.value, set_name=SunEvent.SUNSET_START.value),
    AngleThreshold(angle=-0.833, rise_name=SunEvent.SUNRISE_START.value, set_name=SunEvent.SUNSET_END.value),
    AngleThreshold(angle=-1, rise_name=SunEvent.GOLDEN_HOUR_DAWN_START.value, set_name=SunEvent.GOLDEN_HOUR_DUSK_END.value),
    AngleThreshold(angle=-4, rise_name=SunEvent.BLUE_HOUR_DAWN_END.value, set_name=SunEvent.BLUE_HOUR_DUSK_START.value),
    AngleThreshold(angle=-6, rise_name=SunEvent.CIVIL_DAWN.value, set_name=SunEvent.CIVIL_DUSK.value),
    AngleThreshold(angle=-8, rise_name=SunEvent.BLUE_HOUR_DAWN_START.value, set_name=SunEvent.BLUE_HOUR_DUSK_END.value),
    AngleThreshold(angle=-12, rise_name=SunEvent.NAUTICAL_DAWN.value, set_name=SunEvent.NAUTICAL_DUSK.value),
    AngleThreshold(angle=-15, rise_name=SunEvent.AMATEUR_DAWN.value, set_name=SunEvent.AMATEUR_DUSK.value),
    AngleThreshold(angle=-18, rise_name=SunEvent.ASTRONOMICAL_DAWN.value, set_name=SunEvent.ASTRONOMICAL_DUSK.value),
)

BUILTIN_ALIASES: tuple[DeprecatedAlias, ...] = (
    DeprecatedAlias(alias="dawn", canonical=SunEvent.CIVIL_DAWN.value),
    DeprecatedAlias(alias="dusk", canonical=SunEvent.CIVIL_DUSK.value),
    DeprecatedAlias(alias="nightEnd", canonical=SunEvent.ASTRONOMICAL_DAWN.value),
    DeprecatedAlias(alias="night", canonical=SunEvent.ASTRONOMICAL_DUSK.value),
    DeprecatedAlias(alias="nightStart", canonical=SunEvent.ASTRONOMICAL_DUSK.value),
    DeprecatedAlias(alias="goldenHour", canonical=SunEvent.GOLDEN_HOUR_DUSK_START.value),
    DeprecatedAlias(alias="sunrise", canonical=SunEvent.SUNRISE_START.value),
    DeprecatedAlias(alias="sunset", canonical=SunEvent.SUNSET_END.value),
    DeprecatedAlias(alias="goldenHourEnd", canonical=SunEvent.GOLDEN_HOUR_DAWN_END.value),
    DeprecatedAlias(alias="goldenHourStart", canonical=SunEvent.GOLDEN_HOUR_DUSK_START.value),
)


def is_valid_name(name: object) -> bool:
    """Check that ``name`` is a non-empty identifier-shaped string."""
    return isinstance(name, str) and bool(NAME_PATTERN.match(name))


def _is_position(value: object) -> bool:
    return value is None or (isinstance(value, int) and not isinstance(value, bool))


class AngleRegistry:
    """Ordered, append-only collection of sun altitude thresholds.

    All mutations and snapshot reads hold the same lock, so a registry can be
    shared between threads. Readers iterate over the tuples returned by
    ``thresholds()`` and ``aliases()``, never over the live lists.
    """

    def __init__(
        self,
        thresholds: Iterable[AngleThreshold] = BUILTIN_THRESHOLDS,
        aliases: Iterable[DeprecatedAlias] = BUILTIN_ALIASES,
    ):
        self._lock = threading.RLock()
        self._thresholds: list[AngleThreshold] = list(thresholds)
        self._aliases: list[DeprecatedAlias] = list(aliases)

    def __len__(self) -> int:
        with self._lock:
            return len(self._thresholds)

    def __contains__(self, name: object) -> bool:
        return self.resolve(name) is not None

    def thresholds(self) -> tuple[AngleThreshold, ...]:
        """Snapshot of the registered thresholds in registration order."""
        with self._lock:
            return tuple(self._thresholds)

    def aliases(self) -> tuple[DeprecatedAlias, ...]:
        """Snapshot of the deprecated aliases in registration order."""
        with self._lock:
            return tuple(self._aliases)

    def names(self) -> set[str]:
        """All rise and set names currently registered."""
        with self._lock:
            return self._names_locked()

    def _names_locked(self) -> set[str]:
        names: set[str] = set()
        for threshold in self._thresholds:
            names.update(threshold.names)
        return names

    def resolve(self, name: object) -> str | None:
        """Resolve an event or alias name to its registered event name.

        When the same alias was registered more than once, the most recent
        registration wins.
        """
        if not isinstance(name, str):
            return None
        with self._lock:
            if name in self._names_locked():
                return name
            for alias in reversed(self._aliases):
                if alias.alias == name:
                    return alias.canonical
        return None

    def register(
        self,
        angle: float,
        rise_name: str,
        set_name: str,
        rise_position: int | None = None,
        set_position: int | None = None,
        degrees: bool = True,
    ) -> bool:
        """Add a threshold.

        Args:
            angle: Sun altitude of the events
            rise_name: Name of the morning event
            set_name: Name of the evening event
            rise_position: Optional ordering slot of the morning event
            set_position: Optional ordering slot of the evening event
            degrees: False if ``angle`` is given in radians

        Returns:
            True if the threshold was added. False if a name is malformed or
            already used, the angle is not a finite number or a position is not
            an integer; the registry is left untouched in that case.
        """
        if isinstance(angle, bool) or not isinstance(angle, (int, float)) or not math.isfinite(angle):
            logger.debug(f"Rejected threshold {rise_name}/{set_name}: angle {angle!r} is not a number")
            return False
        if not (is_valid_name(rise_name) and is_valid_name(set_name)) or rise_name == set_name:
            logger.debug(f"Rejected threshold {rise_name!r}/{set_name!r}: invalid names")
            return False
        if not all(_is_position(p) for p in (rise_position, set_position)):
            logger.debug(
                f"Rejected threshold {rise_name}/{set_name}: "
                f"positions {rise_position!r}, {set_position!r} are not integers"
            )
            return False

        with self._lock:
            used = self._names_locked() | RESERVED_NAMES
            if rise_name in used or set_name in used:
                logger.debug(f"Rejected threshold {rise_name}/{set_name}: name already registered")
                return False

            angle_deg = float(angle) if degrees else math.degrees(angle)
            self._thresholds.append(
                AngleThreshold(
                    angle=angle_deg,
                    rise_name=rise_name,
                    set_name=set_name,
                    rise_position=rise_position,
                    set_position=set_position,
                )
            )
            # A registered event name takes precedence over an alias of the same name
            before = len(self._aliases)
            self._aliases = [a for a in self._aliases if a.alias not in (rise_name, set_name)]
            pruned = before - len(self._aliases)

        logger.info(f"Registered sun threshold {angle_deg}° as {rise_name}/{set_name}")
        if pruned:
            logger.info(f"Dropped {pruned} deprecated alias(es) replaced by {rise_name}/{set_name}")
        return True

    def register_alias(self, alias: str, canonical: str) -> bool:
        """Add a deprecated alternative name for a registered event.

        Returns:
            True if the alias was added. False if ``alias`` is malformed or is
            itself a registered event name, or ``canonical`` is not a
            registered event name.
        """
        if not is_valid_name(alias) or not isinstance(canonical, str) or not canonical:
            logger.debug(f"Rejected alias {alias!r} -> {canonical!r}: invalid names")
            return False

        with self._lock:
            used = self._names_locked()
            if alias in used or alias in RESERVED_NAMES or canonical not in used:
                logger.debug(f"Rejected alias {alias} -> {canonical}: name conflict or unknown event")
                return False
            self._aliases.append(DeprecatedAlias(alias=alias, canonical=canonical))

        logger.info(f"Registered deprecated name {alias} -> {canonical}")
        return True

    def effective_aliases(self) -> dict[str, str]:
        """Alias to canonical name mapping, later registrations overriding earlier ones."""
        with self._lock:
            return {a.alias: a.canonical for a in self._aliases}


@lru_cache
def get_default_registry() -> AngleRegistry:
    """Get the process-wide registry used when none is passed explicitly.

    To start over with only the built-in thresholds:
    ```python
    get_default_registry.cache_clear()
    ```
    """
    return AngleRegistry()


def add_time(
    angle: float,
    rise_name: str,
    set_name: str,
    rise_position: int | None = None,
    set_position: int | None = None,
    degrees: bool = True,
    registry: AngleRegistry | None = None,
) -> bool:
    """Register a sun altitude threshold in ``registry`` (default registry if omitted)."""
    if registry is None:
        registry = get_default_registry()
    return registry.register(angle, rise_name, set_name, rise_position, set_position, degrees)


def add_deprecated_time_name(
    alias: str,
    canonical: str,
    registry: AngleRegistry | None = None,
) -> bool:
    """Register a deprecated name for an existing event in ``registry``."""
    if registry is None:
        registry = get_default_registry()
    return registry.register_alias(alias, canonical)
