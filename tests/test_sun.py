from __future__ import annotations

import math
from datetime import date, datetime, time, timedelta, timezone
from zoneinfo import ZoneInfo

import erfa
import numpy as np
import pytest

import sunmoon
from sunmoon import sun_events
from sunmoon.config import Settings
from sunmoon.results import NoEventCode, NoEventTime, RiseSet
from sunmoon.sun_events import (
    ASTRONOMICAL_OFFSET,
    CIVIL_OFFSET,
    NAUTICAL_OFFSET,
    SUNRISE_OFFSET,
    SolverError,
    approx_local_hour_angle,
    normalize_m,
    sun_rise_set,
    sun_rise_set_correction,
)

BRACKET = timedelta(seconds=60)

LOCATIONS = [
    pytest.param(21.3069, -157.8583, "Pacific/Honolulu", date(2016, 6, 21), id="honolulu"),
    pytest.param(52.52, 13.405, "Europe/Berlin", date(2016, 3, 20), id="berlin-march"),
    pytest.param(52.52, 13.405, "Europe/Berlin", date(2016, 10, 15), id="berlin-october"),
    pytest.param(-36.8485, 174.7633, "Pacific/Auckland", date(2016, 1, 10), id="auckland"),
    pytest.param(-0.1807, -78.4678, "America/Guayaquil", date(2016, 9, 1), id="quito"),
]

RISE_EVENTS = [
    (sunmoon.sunrise, SUNRISE_OFFSET),
    (sunmoon.civil_dawn, CIVIL_OFFSET),
    (sunmoon.nautical_dawn, NAUTICAL_OFFSET),
    (sunmoon.astronomical_dawn, ASTRONOMICAL_OFFSET),
]

SET_EVENTS = [
    (sunmoon.sunset, SUNRISE_OFFSET),
    (sunmoon.civil_dusk, CIVIL_OFFSET),
    (sunmoon.nautical_dusk, NAUTICAL_OFFSET),
    (sunmoon.astronomical_dusk, ASTRONOMICAL_OFFSET),
]

MCMURDO = (-77.8333, 166.6)


def _local_noon(day: date, zone_name: str) -> datetime:
    return datetime.combine(day, time(12, 0), tzinfo=ZoneInfo(zone_name))


def _erfa_dates(dt: datetime) -> tuple[tuple[float, float], tuple[float, float]]:
    dt = dt.astimezone(timezone.utc)
    utc1, utc2 = erfa.dtf2d(
        "UTC",
        dt.year,
        dt.month,
        dt.day,
        dt.hour,
        dt.minute,
        dt.second + dt.microsecond / 1_000_000,
    )
    tai1, tai2 = erfa.utctai(utc1, utc2)
    tt = erfa.taitt(tai1, tai2)
    ut1 = erfa.utcut1(utc1, utc2, 0.0)
    return tt, ut1


def _sun_terrestrial(dt: datetime) -> np.ndarray:
    """Unit vector towards the sun in the terrestrial frame."""

    (tt1, tt2), (ut11, ut12) = _erfa_dates(dt)
    pvh, _ = erfa.epv00(tt1, tt2)
    sun = -np.asarray(pvh["p"], dtype=float)
    rc2t = np.asarray(erfa.c2t06a(tt1, tt2, ut11, ut12, 0.0, 0.0))
    vector = rc2t @ sun
    return vector / np.linalg.norm(vector)


def _sun_altitude(dt: datetime, lat: float, lon: float) -> float:
    phi, lam = math.radians(lat), math.radians(lon)
    up = np.array([math.cos(phi) * math.cos(lam), math.cos(phi) * math.sin(lam), math.sin(phi)])
    return math.degrees(math.asin(float(np.dot(up, _sun_terrestrial(dt)))))


def _sun_eastward(dt: datetime, lon: float) -> float:
    lam = math.radians(lon)
    east = np.array([-math.sin(lam), math.cos(lam), 0.0])
    return float(np.dot(east, _sun_terrestrial(dt)))


@pytest.mark.parametrize("lat, lon, zone, day", LOCATIONS)
def test_rise_events_cross_their_altitude(lat, lon, zone, day):
    dt = _local_noon(day, zone)
    for func, offset in RISE_EVENTS:
        event = func(dt, lat, lon)
        assert isinstance(event, datetime), func.__name__
        assert event.tzinfo is dt.tzinfo
        assert event.date() == day
        assert _sun_altitude(event - BRACKET, lat, lon) < -offset
        assert _sun_altitude(event + BRACKET, lat, lon) > -offset


@pytest.mark.parametrize("lat, lon, zone, day", LOCATIONS)
def test_set_events_cross_their_altitude(lat, lon, zone, day):
    dt = _local_noon(day, zone)
    for func, offset in SET_EVENTS:
        event = func(dt, lat, lon)
        assert isinstance(event, datetime), func.__name__
        assert event.date() == day
        assert _sun_altitude(event - BRACKET, lat, lon) > -offset
        assert _sun_altitude(event + BRACKET, lat, lon) < -offset


@pytest.mark.parametrize("lat, lon, zone, day", LOCATIONS)
def test_solar_noon_is_upper_transit(lat, lon, zone, day):
    noon = sunmoon.solar_noon(_local_noon(day, zone), lon)
    assert noon.date() == day
    assert _sun_eastward(noon - timedelta(seconds=60), lon) > 0
    assert _sun_eastward(noon + timedelta(seconds=60), lon) < 0


@pytest.mark.parametrize("lat, lon, zone, day", LOCATIONS)
def test_events_are_ordered(lat, lon, zone, day):
    dt = _local_noon(day, zone)
    events = [
        sunmoon.astronomical_dawn(dt, lat, lon),
        sunmoon.nautical_dawn(dt, lat, lon),
        sunmoon.civil_dawn(dt, lat, lon),
        sunmoon.sunrise(dt, lat, lon),
        sunmoon.solar_noon(dt, lon),
        sunmoon.sunset(dt, lat, lon),
        sunmoon.civil_dusk(dt, lat, lon),
        sunmoon.nautical_dusk(dt, lat, lon),
        sunmoon.astronomical_dusk(dt, lat, lon),
    ]
    assert events == sorted(events)
    assert len(set(events)) == len(events)


def test_negative_day_fraction_lands_on_local_date():
    # Auckland sunrise happens on the previous UTC day.
    dt = _local_noon(date(2016, 1, 10), "Pacific/Auckland")
    rise = sunmoon.sunrise(dt, -36.8485, 174.7633)
    assert rise.astimezone(timezone.utc).date() == date(2016, 1, 9)
    assert rise.date() == date(2016, 1, 10)
    assert 5 <= rise.hour <= 7


def test_equinox_day_length():
    dt = _local_noon(date(2016, 3, 20), "Europe/Berlin")
    length = sunmoon.sunset(dt, 52.52, 13.405) - sunmoon.sunrise(dt, 52.52, 13.405)
    assert timedelta(hours=12) < length < timedelta(hours=12, minutes=20)


def test_naive_datetime_is_read_as_utc():
    naive = sunmoon.sunrise(datetime(2016, 3, 20, 12), 52.52, 13.405)
    aware = sunmoon.sunrise(datetime(2016, 3, 20, 12, tzinfo=timezone.utc), 52.52, 13.405)
    assert naive == aware
    assert naive.utcoffset() == timedelta(0)


def test_round_to_nearest_minute():
    dt = _local_noon(date(2016, 3, 20), "Europe/Berlin")
    exact = sunmoon.sunrise(dt, 52.52, 13.405)
    rounded = sunmoon.sunrise(dt, 52.52, 13.405, Settings(round_to_nearest_minute=True))
    assert rounded.second == 0 and rounded.microsecond == 0
    assert abs((rounded - exact).total_seconds()) <= 30


def test_global_rounding_setting_is_used():
    dt = _local_noon(date(2016, 3, 20), "Europe/Berlin")
    sunmoon.settings(round_to_nearest_minute=True)
    assert sunmoon.sunset(dt, 52.52, 13.405).second == 0
    assert sunmoon.solar_noon(dt, 13.405).second == 0


def test_approx_local_hour_angle():
    assert approx_local_hour_angle(0.0, 0.0, 0.0) == pytest.approx(90.0)
    assert approx_local_hour_angle(80.0, 23.0, SUNRISE_OFFSET) is NoEventCode.SUN_HIGH
    assert approx_local_hour_angle(-80.0, 23.0, SUNRISE_OFFSET) is NoEventCode.SUN_LOW


def test_normalize_m():
    assert normalize_m(-0.1, 0) == pytest.approx(0.9)
    assert normalize_m(0.5, 600) == 0.5
    assert normalize_m(0.9, 600) == pytest.approx(-0.1)
    assert normalize_m(0.1, -600) == pytest.approx(1.1)


def test_degenerate_correction_raises(monkeypatch):
    monkeypatch.setattr(sun_events, "cosd", lambda x: 0.0)
    with pytest.raises(SolverError):
        sun_rise_set_correction(0.16, 100.0, 68.0, 45.0, 0.0, 0.25, SUNRISE_OFFSET)


@pytest.mark.parametrize(
    "func",
    [sunmoon.sunrise, sunmoon.sunset, sunmoon.civil_dawn, sunmoon.civil_dusk],
)
def test_polar_night_codes(func):
    dt = _local_noon(date(2016, 7, 1), "Pacific/Auckland")
    assert func(dt, *MCMURDO) is NoEventCode.SUN_LOW


def test_nautical_twilight_exists_in_polar_night():
    dt = _local_noon(date(2016, 7, 1), "Pacific/Auckland")
    assert isinstance(sunmoon.nautical_dawn(dt, *MCMURDO), datetime)


def test_polar_day_codes():
    dt = _local_noon(date(2016, 1, 1), "Pacific/Auckland")
    for func in (
        sunmoon.sunrise,
        sunmoon.sunset,
        sunmoon.civil_dawn,
        sunmoon.civil_dusk,
        sunmoon.nautical_dawn,
        sunmoon.nautical_dusk,
        sunmoon.astronomical_dawn,
        sunmoon.astronomical_dusk,
    ):
        assert func(dt, *MCMURDO) is NoEventCode.SUN_HIGH
    assert sun_rise_set(dt, *MCMURDO, RiseSet.SET) is NoEventCode.SUN_HIGH


@pytest.mark.parametrize(
    "func, expected",
    [
        (sunmoon.sunrise, "07:00‡"),
        (sunmoon.sunset, "19:00‡"),
        (sunmoon.civil_dawn, "06:30‡"),
        (sunmoon.civil_dusk, "19:30‡"),
        (sunmoon.nautical_dawn, "06:00‡"),
        (sunmoon.nautical_dusk, "20:00‡"),
        (sunmoon.astronomical_dawn, "05:30‡"),
        (sunmoon.astronomical_dusk, "20:30‡"),
    ],
)
def test_polar_day_fallback_times(func, expected):
    # 1 January is daylight saving time in New Zealand.
    sunmoon.settings(return_time_for_no_event_case=True)
    dt = _local_noon(date(2016, 1, 1), "Pacific/Auckland")
    result = func(dt, *MCMURDO)
    assert isinstance(result, NoEventTime)
    assert result.code is NoEventCode.SUN_HIGH
    assert result.time.date() == date(2016, 1, 1)
    assert sunmoon.format_time(result, "%H:%M") == expected


@pytest.mark.parametrize(
    "func, expected",
    [
        (sunmoon.sunrise, "06:00†"),
        (sunmoon.sunset, "18:00†"),
        (sunmoon.civil_dawn, "05:30†"),
        (sunmoon.civil_dusk, "18:30†"),
    ],
)
def test_polar_night_fallback_times(func, expected):
    options = Settings(return_time_for_no_event_case=True)
    dt = _local_noon(date(2016, 7, 1), "Pacific/Auckland")
    result = func(dt, *MCMURDO, options)
    assert isinstance(result, NoEventTime)
    assert result.code is NoEventCode.SUN_LOW
    assert sunmoon.format_time(result, "%H:%M", options) == expected


def test_custom_markers():
    sunmoon.settings(
        return_time_for_no_event_case=True,
        date_format_keys={"SUN_HIGH": " (High)", "SUN_LOW": " (Low)"},
    )
    summer = _local_noon(date(2016, 1, 1), "Pacific/Auckland")
    winter = _local_noon(date(2016, 7, 1), "Pacific/Auckland")
    assert sunmoon.format_time(sunmoon.sunrise(summer, *MCMURDO), "%H:%M") == "07:00 (High)"
    assert sunmoon.format_time(sunmoon.sunset(winter, *MCMURDO), "%H:%M") == "18:00 (Low)"
