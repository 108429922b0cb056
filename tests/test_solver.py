"""Tests for sun event times."""

import math

import pytest

from sunmoon.astronomy.registry import AngleRegistry
from sunmoon.astronomy.solver import (
    get_solar_time,
    get_sun_time,
    get_sun_time_by_azimuth,
    get_sun_times,
    hour_angle,
    julian_cycle,
    observer_angle,
)
from sunmoon.errors import InvalidArgumentError
from sunmoon.models.events import EventKind
from sunmoon.timeutil import DAY_MS, from_timestamp_ms

# SunCalc reference times for 2013-03-05 at 50.5N 30.5E
REFERENCE_TIMES = {
    "solarNoon": (10, 10, 57),
    "sunriseStart": (4, 34, 56),
    "sunsetEnd": (15, 46, 57),
    "sunriseEnd": (4, 38, 19),
    "sunsetStart": (15, 43, 34),
    "civilDawn": (4, 2, 17),
    "civilDusk": (16, 19, 36),
    "nauticalDawn": (3, 24, 31),
    "nauticalDusk": (16, 57, 22),
    "astronomicalDawn": (2, 46, 17),
    "astronomicalDusk": (17, 35, 36),
    "goldenHourDawnEnd": (5, 19, 1),
    "goldenHourDuskStart": (15, 2, 52),
}

DAWN_ORDER = [
    "astronomicalDawn",
    "amateurDawn",
    "nauticalDawn",
    "blueHourDawnStart",
    "civilDawn",
    "blueHourDawnEnd",
    "goldenHourDawnStart",
    "sunriseStart",
    "sunriseEnd",
    "goldenHourDawnEnd",
]


@pytest.fixture
def reference_times(reference_ts: float):
    return get_sun_times(reference_ts, 50.5, 30.5, in_utc=True)


class TestGetSunTimes:
    """Tests for all events of a day."""

    @pytest.mark.parametrize("name, clock", REFERENCE_TIMES.items())
    def test_reference_times(self, reference_times, utc_ms, name: str, clock: tuple):
        expected = utc_ms(2013, 3, 5, *clock)
        event = reference_times[name]

        assert event.valid
        # Reference values are truncated to the second
        assert -100 <= event.ts - expected < 1100

    def test_nadir_half_day_after_noon(self, reference_times):
        noon = reference_times["solarNoon"]
        nadir = reference_times["nadir"]

        assert nadir.kind == EventKind.NADIR
        assert nadir.ts - noon.ts == pytest.approx(DAY_MS / 2)
        assert nadir.julian - noon.julian == pytest.approx(0.5)

    def test_all_builtin_events_present(self, reference_times):
        assert len(reference_times) == 22
        assert all(event.valid for event in reference_times.values())

    def test_events_ordered_through_day(self, reference_times):
        dawn = [reference_times[name].ts for name in DAWN_ORDER]
        dusk_names = [t.set_name for t in AngleRegistry().thresholds()]
        dusk = [reference_times[name].ts for name in dusk_names]
        noon = reference_times["solarNoon"].ts

        assert dawn == sorted(dawn)
        assert dusk == sorted(dusk)
        assert dawn[-1] < noon < dusk[0]
        assert reference_times["nadir"].ts > dusk[-1]

    def test_rise_and_set_symmetric_around_noon(self, reference_times):
        noon = reference_times["solarNoon"].julian
        rise = reference_times["civilDawn"].julian
        dusk = reference_times["civilDusk"].julian

        assert noon - rise == pytest.approx(dusk - noon)

    def test_event_metadata(self, reference_times):
        dawn = reference_times["civilDawn"]
        dusk = reference_times["civilDusk"]

        assert dawn.kind == EventKind.RISE
        assert dusk.kind == EventKind.SET
        assert dawn.elevation == -6
        assert dawn.value == from_timestamp_ms(dawn.ts)
        assert dawn.deprecated is False

    def test_default_positions(self, reference_times):
        n = 10
        assert reference_times["solarNoon"].pos == n
        assert reference_times["nadir"].pos == 2 * n + 1
        assert reference_times["goldenHourDawnEnd"].pos == n - 1
        assert reference_times["goldenHourDuskStart"].pos == n + 1
        assert reference_times["astronomicalDawn"].pos == 0
        assert reference_times["astronomicalDusk"].pos == 2 * n

    def test_deprecated_names(self, reference_ts: float):
        times = get_sun_times(reference_ts, 50.5, 30.5, include_deprecated=True, in_utc=True)

        assert times["dawn"].ts == times["civilDawn"].ts
        assert times["dawn"].deprecated is True
        assert times["dawn"].canonical_name == "civilDawn"
        assert times["dawn"].pos == -2
        assert times["sunrise"].ts == times["sunriseStart"].ts
        assert times["nightStart"].ts == times["astronomicalDusk"].ts
        assert times["civilDawn"].deprecated is False

    def test_deprecated_names_excluded_by_default(self, reference_times):
        assert "dawn" not in reference_times
        assert "sunrise" not in reference_times

    def test_custom_threshold(self, reference_ts: float, registry: AngleRegistry):
        registry.register(-6, "myDawn", "myDusk", rise_position=42)

        times = get_sun_times(reference_ts, 50.5, 30.5, in_utc=True, registry=registry)

        assert times["myDawn"].ts == times["civilDawn"].ts
        assert times["myDusk"].ts == times["civilDusk"].ts
        assert times["myDawn"].pos == 42
        assert times["myDusk"].pos == 11 + 10 + 1
        assert times["solarNoon"].pos == 11

    def test_custom_alias(self, reference_ts: float, registry: AngleRegistry):
        registry.register_alias("firstLight", "nauticalDawn")
        times = get_sun_times(reference_ts, 50.5, 30.5, include_deprecated=True, in_utc=True, registry=registry)

        assert times["firstLight"].ts == times["nauticalDawn"].ts

    def test_equinox_at_equator(self, utc_ms):
        times = get_sun_times(utc_ms(2024, 3, 20), 0, 0, in_utc=True)
        day_length = times["sunsetEnd"].ts - times["sunriseStart"].ts

        assert abs(day_length - DAY_MS / 2) < 20 * 60 * 1000
        assert from_timestamp_ms(times["solarNoon"].ts).hour in (11, 12)

    def test_polar_day(self, utc_ms):
        """Longyearbyen at midsummer: the sun never sets."""
        times = get_sun_times(utc_ms(2024, 6, 21), 78.2232, 15.6267, in_utc=True)

        assert times["solarNoon"].valid
        assert not times["sunriseStart"].valid
        assert not times["sunsetEnd"].valid
        assert times["sunriseStart"].ts is None
        assert times["sunriseStart"].julian is None

    def test_polar_night(self, utc_ms):
        """Longyearbyen at midwinter: the sun stays about 11.7 degrees down."""
        times = get_sun_times(utc_ms(2024, 12, 21), 78.2232, 15.6267, in_utc=True)

        assert not times["sunriseStart"].valid
        assert not times["civilDawn"].valid
        assert times["nauticalDawn"].valid
        assert times["astronomicalDusk"].valid

    def test_observer_height_lengthens_day(self, reference_ts: float):
        ground = get_sun_times(reference_ts, 50.5, 30.5, height=0, in_utc=True)
        tower = get_sun_times(reference_ts, 50.5, 30.5, height=100, in_utc=True)

        assert tower["sunriseStart"].ts < ground["sunriseStart"].ts
        assert tower["sunsetEnd"].ts > ground["sunsetEnd"].ts
        assert tower["solarNoon"].ts == ground["solarNoon"].ts

    @pytest.mark.parametrize("height", [None, -10, math.nan])
    def test_unusable_height_treated_as_ground(self, reference_ts: float, reference_times, height):
        times = get_sun_times(reference_ts, 50.5, 30.5, height=height, in_utc=True)
        assert times["sunriseStart"].ts == reference_times["sunriseStart"].ts

    def test_any_instant_of_the_day(self, utc_ms, reference_times):
        late = get_sun_times(utc_ms(2013, 3, 5, 23, 59), 50.5, 30.5, in_utc=True)
        assert late["solarNoon"].ts == reference_times["solarNoon"].ts

    def test_civil_timezone_day(self, utc_ms, monkeypatch):
        """At 23:30 UTC it is already the next day in Kyiv."""
        from sunmoon.config import get_settings

        monkeypatch.setenv("SUNMOON_CIVIL_TIMEZONE", "Europe/Kyiv")
        get_settings.cache_clear()

        local = get_sun_times(utc_ms(2013, 3, 5, 23, 30), 50.5, 30.5)
        utc = get_sun_times(utc_ms(2013, 3, 5, 23, 30), 50.5, 30.5, in_utc=True)

        assert local["solarNoon"].ts - utc["solarNoon"].ts == pytest.approx(DAY_MS, abs=60_000)

    @pytest.mark.parametrize("lat, lng", [(math.nan, 30.5), (50.5, math.nan), (None, 30.5)])
    def test_invalid_coordinates(self, reference_ts: float, lat, lng):
        with pytest.raises(InvalidArgumentError):
            get_sun_times(reference_ts, lat, lng)

    def test_invalid_time(self):
        with pytest.raises(InvalidArgumentError, match="date missing"):
            get_sun_times(math.nan, 50.5, 30.5)


class TestGetSunTime:
    """Tests for a single elevation angle."""

    def test_matches_registered_threshold(self, reference_ts: float, reference_times):
        result = get_sun_time(reference_ts, 50.5, 30.5, 6, in_utc=True)

        assert result.rise.ts == pytest.approx(reference_times["goldenHourDawnEnd"].ts)
        assert result.set.ts == pytest.approx(reference_times["goldenHourDuskStart"].ts)
        assert result.rise.name == "rise"
        assert result.set.name == "set"
        assert (result.rise.pos, result.set.pos) == (1, 0)

    def test_radians(self, reference_ts: float, reference_times):
        result = get_sun_time(reference_ts, 50.5, 30.5, math.radians(-6), degrees=False, in_utc=True)

        assert result.rise.elevation == pytest.approx(-6)
        assert result.rise.ts == pytest.approx(reference_times["civilDawn"].ts, abs=1)

    @pytest.mark.parametrize(
        "elevation, rise_name, set_name",
        [
            (-0.833, "sunriseStart", "sunsetEnd"),
            (-0.3, "sunriseEnd", "sunsetStart"),
            (-1, "goldenHourDawnStart", "goldenHourDuskEnd"),
        ],
    )
    def test_horizon_angles_match_registered_thresholds(
        self, reference_ts: float, reference_times, elevation: float, rise_name: str, set_name: str
    ):
        """Angles near the horizon are used as given, like registered thresholds."""
        result = get_sun_time(reference_ts, 50.5, 30.5, elevation, in_utc=True)

        assert result.rise.ts == pytest.approx(reference_times[rise_name].ts, abs=1)
        assert result.set.ts == pytest.approx(reference_times[set_name].ts, abs=1)
        assert result.rise.elevation == elevation

    def test_continuous_across_one_degree(self, reference_ts: float):
        inside = get_sun_time(reference_ts, 50.5, 30.5, 1.0, in_utc=True)
        outside = get_sun_time(reference_ts, 50.5, 30.5, 1.0001, in_utc=True)

        assert abs(outside.rise.ts - inside.rise.ts) < 1000

    def test_unreachable_elevation(self, reference_ts: float):
        result = get_sun_time(reference_ts, 50.5, 30.5, 60, in_utc=True)

        assert not result.rise.valid
        assert not result.set.valid
        assert result.rise.ts is None

    @pytest.mark.parametrize("elevation", [math.nan, None, "6"])
    def test_invalid_elevation(self, reference_ts: float, elevation):
        with pytest.raises(InvalidArgumentError, match="elevationAngle missing"):
            get_sun_time(reference_ts, 50.5, 30.5, elevation)

    def test_invalid_coordinates(self, reference_ts: float):
        with pytest.raises(InvalidArgumentError, match="latitude missing"):
            get_sun_time(reference_ts, math.nan, 30.5, 6)


class TestGetSunTimeByAzimuth:
    """Tests for azimuth-based times."""

    def test_south_is_solar_noon(self, reference_ts: float, reference_times):
        ts = get_sun_time_by_azimuth(reference_ts, 50.5, 30.5, 180, in_utc=True)

        assert abs(ts - reference_times["solarNoon"].ts) < 5 * 60 * 1000
        assert ts == math.floor(ts)

    def test_radians(self, reference_ts: float):
        degrees = get_sun_time_by_azimuth(reference_ts, 50.5, 30.5, 180, in_utc=True)
        radians = get_sun_time_by_azimuth(reference_ts, 50.5, 30.5, math.pi, degrees=False, in_utc=True)

        assert radians == pytest.approx(degrees, abs=1000)

    def test_east_before_west(self, reference_ts: float):
        east = get_sun_time_by_azimuth(reference_ts, 50.5, 30.5, 90, in_utc=True)
        west = get_sun_time_by_azimuth(reference_ts, 50.5, 30.5, 270, in_utc=True)

        assert east < west

    def test_invalid_azimuth(self, reference_ts: float):
        with pytest.raises(InvalidArgumentError, match="azimuth missing"):
            get_sun_time_by_azimuth(reference_ts, 50.5, 30.5, math.nan)


class TestGetSolarTime:
    """Tests for apparent solar time."""

    def test_noon_at_solar_noon(self, reference_times):
        noon = reference_times["solarNoon"].ts
        solar = from_timestamp_ms(get_solar_time(noon, 30.5))

        minutes = solar.hour * 60 + solar.minute + solar.second / 60
        assert minutes == pytest.approx(12 * 60, abs=1)

    def test_offset_does_not_change_result(self, reference_ts: float):
        assert get_solar_time(reference_ts, 30.5, 120) == get_solar_time(reference_ts, 30.5)

    def test_longitude_shift(self, reference_ts: float):
        """Fifteen degrees of longitude is one hour of solar time."""
        west = get_solar_time(reference_ts, 0)
        east = get_solar_time(reference_ts, 15)

        assert east - west == pytest.approx(DAY_MS / 24)

    def test_invalid_longitude(self, reference_ts: float):
        with pytest.raises(InvalidArgumentError, match="longitude missing"):
            get_solar_time(reference_ts, math.nan)


class TestHelpers:
    """Tests for the closed-form building blocks."""

    def test_hour_angle_unreachable(self):
        assert math.isnan(hour_angle(math.radians(60), math.radians(50.5), math.radians(-6)))

    def test_hour_angle_horizon_at_equinox(self):
        assert hour_angle(0, math.radians(50.5), 0) == pytest.approx(math.pi / 2)

    def test_observer_angle(self):
        assert observer_angle(0) == 0
        assert observer_angle(100) == pytest.approx(-2.076 * 10 / 60)

    def test_julian_cycle(self):
        assert julian_cycle(0.4, 0) == 0
        assert julian_cycle(0.6, 0) == 1
        # Western longitudes move the cycle forward
        assert julian_cycle(0.2, -math.pi) == 1
