"""Solar transit, rise, set and twilight times (AA chapter 15).

The solver starts from the sun's apparent place at 0h UT of the civil date,
derives a first estimate of the event as a fraction ``m`` of the day and
refines it with interpolated coordinates. Longitudes are east-positive.
"""

from __future__ import annotations

import json
import logging
import math
from datetime import datetime, timedelta, timezone, tzinfo
from typing import Optional, Union

from .auxmath import cosd, interpolate_from_three, reduce_angle, sind
from .config import Settings, resolve
from .results import NoEventCode, RiseSet
from .solar import (
    apparent_sidereal_time_greenwich,
    sun_apparent_declination,
    sun_apparent_right_ascension,
)
from .timescales import (
    DAYS_PER_CENTURY,
    SECONDS_PER_DAY,
    datetime_to_t,
    delta_t,
    round_to_minute,
)

__all__ = [
    "SolverError",
    "SUNRISE_OFFSET",
    "CIVIL_OFFSET",
    "NAUTICAL_OFFSET",
    "ASTRONOMICAL_OFFSET",
    "sun_transit",
    "sun_rise_set",
    "approx_local_hour_angle",
    "normalize_m",
    "local_hour_angle",
    "altitude",
    "interpolated_ra",
    "interpolated_dec",
    "sun_transit_correction",
    "sun_rise_set_correction",
]

LOGGER = logging.getLogger(__name__)

# Degrees below the geometric horizon: refraction plus the solar semidiameter
# for sunrise/sunset, then the civil, nautical and astronomical depressions.
SUNRISE_OFFSET = 50.0 / 60.0
CIVIL_OFFSET = 6.0
NAUTICAL_OFFSET = 12.0
ASTRONOMICAL_OFFSET = 18.0

MAX_ITERATIONS = 3
CONVERGENCE_THRESHOLD = 0.0001  # fraction of a day, about 9 s
SIDEREAL_RATE = 360.985647  # degrees per day

_ONE_DAY_IN_CENTURIES = 1.0 / DAYS_PER_CENTURY


class SolverError(RuntimeError):
    """Raised when the rise/set refinement runs into a degenerate geometry."""


def _zone(dt: datetime) -> tzinfo:
    return dt.tzinfo if dt.tzinfo is not None else timezone.utc


def _utc_offset_minutes(dt: datetime) -> float:
    offset = dt.utcoffset()
    if offset is None:
        return 0.0
    return offset.total_seconds() / 60.0


def _utc_midnight(dt: datetime) -> datetime:
    """0h UTC on the civil date of *dt* (the wall-clock date, not converted)."""

    return datetime(dt.year, dt.month, dt.day, tzinfo=timezone.utc)


def _day_fraction_to_timedelta(m: float) -> timedelta:
    seconds = math.floor(abs(m) * SECONDS_PER_DAY + 0.5)
    return timedelta(seconds=seconds if m >= 0 else -seconds)


def _finish(midnight: datetime, m: float, dt: datetime, options: Settings) -> datetime:
    event = midnight + _day_fraction_to_timedelta(m)
    if options.round_to_nearest_minute:
        event = round_to_minute(event)
    return event.astimezone(_zone(dt))


def sun_transit(
    dt: datetime, longitude: float, options: Optional[Settings] = None
) -> datetime:
    """Time of the sun's upper transit on the civil date of *dt*.

    Parameters
    ----------
    dt:
        Timezone-aware datetime; only its date and UTC offset are used.
    longitude:
        Geographic longitude in degrees, east positive.
    options:
        Explicit settings; the process-wide default is used when omitted.

    Returns
    -------
    datetime
        Transit time expressed in the time zone of *dt*.
    """

    options = resolve(options)
    midnight = _utc_midnight(dt)
    dT = delta_t(midnight)
    T = datetime_to_t(midnight)
    theta0 = apparent_sidereal_time_greenwich(T)
    TD = T + dT / (SECONDS_PER_DAY * DAYS_PER_CENTURY)
    alpha = sun_apparent_right_ascension(TD)
    m = normalize_m((alpha - longitude - theta0) / 360.0, _utc_offset_minutes(dt))
    m += sun_transit_correction(T, theta0, dT, longitude, m)
    return _finish(midnight, m, dt, options)


def sun_rise_set(
    dt: datetime,
    latitude: float,
    longitude: float,
    flag: RiseSet,
    offset: float = SUNRISE_OFFSET,
    options: Optional[Settings] = None,
) -> Union[datetime, NoEventCode]:
    """Time at which the sun's centre crosses *offset* degrees below the horizon.

    Parameters
    ----------
    dt:
        Timezone-aware datetime; only its date and UTC offset are used.
    latitude, longitude:
        Geographic coordinates in degrees (east-positive longitude).
    flag:
        :attr:`RiseSet.RISE` for the morning crossing, :attr:`RiseSet.SET`
        for the evening one.
    offset:
        Depression of the sun below the horizon defining the event.
    options:
        Explicit settings; the process-wide default is used when omitted.

    Returns
    -------
    datetime or NoEventCode
        The event time in the time zone of *dt*, or the reason why the sun
        does not reach the required altitude on that date.

    Raises
    ------
    SolverError
        If the refinement step divides by zero or produces a non-finite value.
    """

    options = resolve(options)
    flag = RiseSet(flag)
    midnight = _utc_midnight(dt)
    dT = delta_t(midnight)
    T = datetime_to_t(midnight)
    theta0 = apparent_sidereal_time_greenwich(T)
    TD = T + dT / (SECONDS_PER_DAY * DAYS_PER_CENTURY)
    alpha = sun_apparent_right_ascension(TD)
    delta = sun_apparent_declination(TD)

    H0 = approx_local_hour_angle(latitude, delta, offset)
    if isinstance(H0, NoEventCode):
        LOGGER.debug(
            json.dumps(
                {
                    "event": "no_event",
                    "code": H0.value,
                    "date": midnight.date().isoformat(),
                    "flag": flag.value,
                    "offset": offset,
                }
            )
        )
        return H0

    m0 = normalize_m((alpha - longitude - theta0) / 360.0, _utc_offset_minutes(dt))
    m = m0 - H0 / 360.0 if flag is RiseSet.RISE else m0 + H0 / 360.0

    for _ in range(MAX_ITERATIONS):
        correction = sun_rise_set_correction(T, theta0, dT, latitude, longitude, m, offset)
        m += correction
        if abs(correction) <= CONVERGENCE_THRESHOLD:
            break
    return _finish(midnight, m, dt, options)


def approx_local_hour_angle(
    phi: float, delta: float, offset: float
) -> Union[float, NoEventCode]:
    """Approximate hour angle of the event (AA Eq. 15.1), or why there is none."""

    cos_H0 = (sind(-offset) - sind(phi) * sind(delta)) / (cosd(phi) * cosd(delta))
    if cos_H0 < -1:
        return NoEventCode.SUN_HIGH
    if cos_H0 > 1:
        return NoEventCode.SUN_LOW
    return math.degrees(math.acos(cos_H0))


def normalize_m(m: float, utc_offset_minutes: float) -> float:
    """Shift the day fraction *m* so the event falls on the local civil date."""

    local_m = m + utc_offset_minutes / 1440.0
    if local_m < 0:
        return m + 1
    if local_m > 1:
        return m - 1
    return m


def local_hour_angle(theta0: float, longitude: float, alpha: float) -> float:
    """Local hour angle in (-180, 180]."""

    H = reduce_angle(theta0 + longitude - alpha)
    if H > 180:
        H -= 360
    return H


def altitude(phi: float, delta: float, H: float) -> float:
    """Altitude above the horizon (AA Eq. 13.6)."""

    return math.degrees(
        math.asin(sind(phi) * sind(delta) + cosd(phi) * cosd(delta) * cosd(H))
    )


def interpolated_ra(T: float, n: float) -> float:
    """Right ascension at fraction *n* of the day starting at *T*, in [0, 360)."""

    alpha = interpolate_from_three(
        sun_apparent_right_ascension(T - _ONE_DAY_IN_CENTURIES),
        sun_apparent_right_ascension(T),
        sun_apparent_right_ascension(T + _ONE_DAY_IN_CENTURIES),
        n,
        normalize=True,
    )
    return reduce_angle(alpha)


def interpolated_dec(T: float, n: float) -> float:
    return interpolate_from_three(
        sun_apparent_declination(T - _ONE_DAY_IN_CENTURIES),
        sun_apparent_declination(T),
        sun_apparent_declination(T + _ONE_DAY_IN_CENTURIES),
        n,
    )


def sun_transit_correction(
    T: float, theta0: float, dT: float, longitude: float, m: float
) -> float:
    theta = theta0 + SIDEREAL_RATE * m
    n = m + dT / SECONDS_PER_DAY
    alpha = interpolated_ra(T, n)
    return -local_hour_angle(theta, longitude, alpha) / 360.0


def sun_rise_set_correction(
    T: float,
    theta0: float,
    dT: float,
    phi: float,
    longitude: float,
    m: float,
    offset: float,
) -> float:
    """Correction to the day fraction *m* of a rise or set (AA p103)."""

    theta = theta0 + SIDEREAL_RATE * m
    n = m + dT / SECONDS_PER_DAY
    alpha = interpolated_ra(T, n)
    delta = interpolated_dec(T, n)
    H = local_hour_angle(theta, longitude, alpha)
    h = altitude(phi, delta, H)
    denominator = 360.0 * cosd(delta) * cosd(phi) * sind(H)
    if denominator == 0.0:
        raise SolverError(
            f"Degenerate rise/set geometry at latitude {phi} (hour angle {H})"
        )
    correction = (h + offset) / denominator
    if not math.isfinite(correction):
        raise SolverError(f"Non-finite rise/set correction at latitude {phi}")
    return correction
