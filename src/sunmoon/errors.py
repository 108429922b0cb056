"""Exceptions raised by the astronomy calculations."""

from __future__ import annotations

import math


class InvalidArgumentError(ValueError):
    """A required numeric input is missing or not a number.

    These are programming errors on the caller's side. Astronomically
    unreachable events are never reported through exceptions.
    """

    def __init__(self, argument: str, value: object = None):
        super().__init__(f"{argument} missing")
        self.argument = argument
        self.value = value


def require_number(argument: str, value: object) -> float:
    """Return ``value`` as a float or raise InvalidArgumentError."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise InvalidArgumentError(argument, value)
    if math.isnan(value):
        raise InvalidArgumentError(argument, value)
    return float(value)
