"""Conversions between civil time, Julian dates and dynamical time."""

from __future__ import annotations

import json
import logging
import math
from datetime import datetime, timedelta, timezone
from typing import Tuple

from .auxmath import polynomial
from .constants import (
    DELTA_T_BRIDGE_END,
    DELTA_T_LONG_TERM,
    DELTA_T_MAX_YEAR,
    DELTA_T_MIN_YEAR,
    DELTA_T_SEGMENTS,
)

__all__ = [
    "DeltaTRangeError",
    "J2000",
    "DAYS_PER_CENTURY",
    "SECONDS_PER_DAY",
    "calendar_to_jd",
    "datetime_to_jd",
    "jd_to_calendar",
    "jd_to_datetime",
    "jd_to_t",
    "datetime_to_t",
    "delta_t_for",
    "delta_t",
    "approx_k",
    "k_to_t",
    "round_to_minute",
]

LOGGER = logging.getLogger(__name__)

J2000 = 2451545.0
DAYS_PER_CENTURY = 36525.0
SECONDS_PER_DAY = 86400.0

# 1582-10-15T12:00:00Z, the first instant counted on the Gregorian calendar.
_GREGORIAN_START = (1582, 10, 15.5)
_GREGORIAN_START_JD_DAY = 2299161


class DeltaTRangeError(ValueError):
    """Raised when Delta T is requested outside the years the fit covers."""


def calendar_to_jd(
    year: int,
    month: int,
    day: int,
    hour: int = 0,
    minute: int = 0,
    second: float = 0.0,
) -> float:
    """Julian date of a UTC calendar instant (AA p60f).

    Instants after 1582-10-15T12:00 are read on the Gregorian calendar, earlier
    ones on the proleptic Julian calendar. Astronomical year numbering is used,
    so 1 BCE is year 0.
    """

    fractional_day = day + (hour + (minute + second / 60.0) / 60.0) / 24.0
    gregorian = (year, month, fractional_day) > _GREGORIAN_START
    if month < 3:
        year -= 1
        month += 12
    b = 0
    if gregorian:
        a = math.floor(year / 100)
        b = 2 - a + math.floor(a / 4)
    return (
        math.floor(365.25 * (year + 4716))
        + math.floor(30.6001 * (month + 1))
        + fractional_day
        + b
        - 1524.5
    )


def datetime_to_jd(dt: datetime) -> float:
    """Julian date of *dt*, whose wall-clock fields are taken as UTC."""

    return calendar_to_jd(
        dt.year,
        dt.month,
        dt.day,
        dt.hour,
        dt.minute,
        dt.second + dt.microsecond / 1_000_000,
    )


def jd_to_calendar(jd: float) -> Tuple[int, int, int, int, int, int]:
    """Calendar fields ``(year, month, day, hour, minute, second)`` of *jd* (AA p63).

    Hours, minutes and seconds are truncated, not rounded.
    """

    jd += 0.5
    z = math.floor(jd)
    f = jd - z
    a = z
    if z >= _GREGORIAN_START_JD_DAY:
        alpha = math.floor((z - 1867216.25) / 36524.25)
        a += 1 + alpha - math.floor(alpha / 4)
    b = a + 1524
    c = math.floor((b - 122.1) / 365.25)
    d = math.floor(365.25 * c)
    e = math.floor((b - d) / 30.6001)
    fractional_day = b - d - math.floor(30.6001 * e) + f
    day = math.floor(fractional_day)
    hours = (fractional_day - day) * 24.0
    hour = math.floor(hours)
    minutes = (hours - hour) * 60.0
    minute = math.floor(minutes)
    second = math.floor((minutes - minute) * 60.0)
    month = e - 1 if e < 14 else e - 13
    year = c - 4716 if month > 2 else c - 4715
    return year, month, day, hour, minute, second


def jd_to_datetime(jd: float) -> datetime:
    """UTC datetime of *jd*, truncated to whole seconds."""

    year, month, day, hour, minute, second = jd_to_calendar(jd)
    return datetime(year, month, day, hour, minute, second, tzinfo=timezone.utc)


def jd_to_t(jd: float) -> float:
    """Julian centuries since J2000.0 (AA Eq. 12.1)."""

    return (jd - J2000) / DAYS_PER_CENTURY


def datetime_to_t(dt: datetime) -> float:
    return jd_to_t(datetime_to_jd(dt))


def delta_t_for(year: int, month: int = 1) -> float:
    """Delta T = TT - UT in seconds for the middle of a calendar month.

    Parameters
    ----------
    year:
        Astronomical year number, between -1999 and 3000 inclusive.
    month:
        Calendar month (1-12).

    Raises
    ------
    DeltaTRangeError
        If *year* lies outside the range covered by the polynomial fit.
    """

    if year < DELTA_T_MIN_YEAR or year > DELTA_T_MAX_YEAR:
        LOGGER.warning(json.dumps({"event": "delta_t_out_of_range", "year": year}))
        raise DeltaTRangeError(
            f"Delta T can only be calculated for years {DELTA_T_MIN_YEAR} "
            f"to {DELTA_T_MAX_YEAR}, got year {year}"
        )
    y = year + (month - 0.5) / 12.0
    for upper, origin, scale, coeffs in DELTA_T_SEGMENTS:
        if y < upper:
            return polynomial((y - origin) / scale, coeffs)
    _, origin, scale, coeffs = DELTA_T_LONG_TERM
    long_term = polynomial((y - origin) / scale, coeffs)
    if y < DELTA_T_BRIDGE_END:
        return long_term - 0.5628 * (DELTA_T_BRIDGE_END - y)
    return long_term


def delta_t(dt: datetime) -> float:
    """Delta T in seconds for the calendar month of *dt*."""

    return delta_t_for(dt.year, dt.month)


def approx_k(dt: datetime) -> float:
    """Approximate number of lunations since the new moon of 2000-01-06."""

    year = dt.year + dt.month / 12.0 + dt.day / 365.25
    return (year - 2000.0) * 12.3685


def k_to_t(k: float) -> float:
    """Julian centuries since J2000.0 for lunation number *k*."""

    return k / 1236.85


def round_to_minute(dt: datetime) -> datetime:
    """Round *dt* to the nearest whole minute, half a minute rounding up."""

    return (dt + timedelta(seconds=30)).replace(second=0, microsecond=0)
