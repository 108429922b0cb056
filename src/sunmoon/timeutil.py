"""Conversions between civil timestamps, datetimes and Julian dates.

Civil time is carried as epoch milliseconds throughout the package. These
helpers are the only place where ``datetime`` objects and timezones enter the
calculations: callers may pass either form, and civil-day boundaries are
resolved either in UTC or in the configured civil timezone.
"""

from __future__ import annotations

from datetime import date, datetime, timedelta, timezone, tzinfo

from sunmoon.errors import require_number
from sunmoon.config import get_settings

DAY_MS = 86_400_000
J1970 = 2440587.5
J2000 = 2451545.0

TimeInput = int | float | datetime


def to_timestamp_ms(value: TimeInput) -> float:
    """Convert a datetime or epoch-millisecond value to epoch milliseconds.

    Naive datetimes are treated as UTC.
    """
    if isinstance(value, datetime):
        if value.tzinfo is None:
            value = value.replace(tzinfo=timezone.utc)
        return value.timestamp() * 1000.0
    return require_number("date", value)


def from_timestamp_ms(ts: float) -> datetime:
    """Convert epoch milliseconds to an aware UTC datetime."""
    return datetime.fromtimestamp(ts / 1000.0, tz=timezone.utc)


def to_days(ts: float) -> float:
    """Days since J2000.0 for an epoch-millisecond timestamp."""
    return ts / DAY_MS + J1970 - J2000


def to_julian(ts: float) -> float:
    return ts / DAY_MS + J1970


def from_julian(j: float) -> float:
    return (j - J1970) * DAY_MS


def civil_tz(in_utc: bool) -> tzinfo:
    """Timezone that defines the civil day."""
    if in_utc:
        return timezone.utc
    return get_settings().tzinfo


def _civil_datetime(ts: float, in_utc: bool) -> datetime:
    return datetime.fromtimestamp(ts / 1000.0, tz=civil_tz(in_utc))


def at_hour_of_day(ts: float, hour: int, in_utc: bool) -> float:
    """Timestamp of ``hour``:00 on the civil day containing ``ts``."""
    dt = _civil_datetime(ts, in_utc).replace(hour=hour, minute=0, second=0, microsecond=0)
    return dt.timestamp() * 1000.0


def start_of_day(ts: float, in_utc: bool) -> float:
    """Timestamp of midnight starting the civil day containing ``ts``."""
    return at_hour_of_day(ts, 0, in_utc)


def shift_days(ts: float, days: int, in_utc: bool) -> float:
    """Move ``ts`` by whole calendar days, keeping the civil wall-clock time."""
    dt = _civil_datetime(ts, in_utc)
    naive = dt.replace(tzinfo=None) + timedelta(days=days)
    return naive.replace(tzinfo=dt.tzinfo).timestamp() * 1000.0


def civil_date(ts: float, in_utc: bool) -> date:
    """Calendar date of ``ts`` in the civil timezone."""
    return _civil_datetime(ts, in_utc).date()
