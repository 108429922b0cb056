"""Tests for configuration and civil-day handling."""

from datetime import datetime, timezone
from zoneinfo import ZoneInfo

import pytest
from pydantic import ValidationError

from sunmoon.config import Settings, get_settings, get_settings_uncached
from sunmoon.timeutil import (
    civil_date,
    from_timestamp_ms,
    shift_days,
    start_of_day,
    to_timestamp_ms,
)


class TestSettings:
    """Tests for settings loaded from the environment."""

    def test_test_environment(self):
        settings = get_settings()

        assert settings.civil_timezone == "UTC"
        assert settings.log_level == "DEBUG"
        assert settings.debug is True

    def test_defaults(self, monkeypatch):
        for name in ("SUNMOON_CIVIL_TIMEZONE", "SUNMOON_LOG_LEVEL", "SUNMOON_DEBUG"):
            monkeypatch.delenv(name, raising=False)

        settings = Settings(_env_file=None)

        assert settings.civil_timezone == "UTC"
        assert settings.log_level == "WARNING"
        assert settings.default_height_m == 0
        assert settings.include_deprecated_names is False

    def test_settings_cached(self):
        assert get_settings() is get_settings()
        assert get_settings_uncached() is not get_settings()

    def test_log_level_normalized(self, monkeypatch):
        monkeypatch.setenv("SUNMOON_LOG_LEVEL", "info")
        assert get_settings_uncached().log_level == "INFO"

    def test_invalid_log_level(self, monkeypatch):
        monkeypatch.setenv("SUNMOON_LOG_LEVEL", "loud")
        with pytest.raises(ValidationError):
            get_settings_uncached()

    def test_invalid_timezone(self, monkeypatch):
        monkeypatch.setenv("SUNMOON_CIVIL_TIMEZONE", "Mars/Olympus_Mons")
        with pytest.raises(ValidationError, match="Unknown timezone"):
            get_settings_uncached()

    def test_negative_height(self, monkeypatch):
        monkeypatch.setenv("SUNMOON_DEFAULT_HEIGHT_M", "-3")
        with pytest.raises(ValidationError):
            get_settings_uncached()

    def test_tzinfo(self, monkeypatch):
        monkeypatch.setenv("SUNMOON_CIVIL_TIMEZONE", "Europe/Berlin")
        assert get_settings_uncached().tzinfo == ZoneInfo("Europe/Berlin")


class TestCivilDays:
    """Tests for civil-day boundaries."""

    def test_start_of_day_utc(self, utc_ms):
        assert start_of_day(utc_ms(2024, 3, 31, 22, 30), True) == utc_ms(2024, 3, 31)

    def test_start_of_day_configured_zone(self, utc_ms, monkeypatch):
        monkeypatch.setenv("SUNMOON_CIVIL_TIMEZONE", "Europe/Berlin")
        get_settings.cache_clear()

        # 22:30 UTC on 31 March is already 1 April in Berlin (UTC+2 after the switch)
        ts = utc_ms(2024, 3, 31, 22, 30)
        assert civil_date(ts, False).isoformat() == "2024-04-01"
        assert start_of_day(ts, False) == utc_ms(2024, 3, 31, 22)
        assert civil_date(ts, True).isoformat() == "2024-03-31"

    def test_shift_days_keeps_wall_clock(self, utc_ms, monkeypatch):
        monkeypatch.setenv("SUNMOON_CIVIL_TIMEZONE", "Europe/Berlin")
        get_settings.cache_clear()

        # 12:00 CET on 30 March, the day before the switch to summer time
        before = utc_ms(2024, 3, 30, 11)
        after = shift_days(before, 1, False)

        assert after == utc_ms(2024, 3, 31, 10)
        assert shift_days(after, -1, False) == before

    def test_timestamp_conversions(self):
        dt = datetime(2013, 3, 5, 10, 10, 57, tzinfo=timezone.utc)

        assert to_timestamp_ms(dt) == 1362478257000
        assert to_timestamp_ms(1362478257000) == 1362478257000
        assert from_timestamp_ms(1362478257000) == dt
