"""Public almanac operations.

Solar events take a timezone-aware :class:`datetime` whose civil date selects
the day, plus the observer's latitude and east-positive longitude. Naive
datetimes are read as UTC; that is the caller's responsibility and is not
checked.

When the sun never reaches the altitude defining an event, the result is a
:class:`NoEventCode` or, with ``return_time_for_no_event_case`` enabled, a
:class:`NoEventTime` holding a fixed clock time for that event.
"""

from __future__ import annotations

from datetime import datetime, timedelta
from typing import List, Optional, Union

from .config import Settings, resolve
from .moon_phases import year_all_phases, year_phases
from .results import NoEventCode, NoEventTime, PhaseEvent, RiseSet
from .sun_events import (
    ASTRONOMICAL_OFFSET,
    CIVIL_OFFSET,
    NAUTICAL_OFFSET,
    SUNRISE_OFFSET,
    sun_rise_set,
    sun_transit,
)

__all__ = [
    "SunEvent",
    "sunrise",
    "sunset",
    "solar_noon",
    "civil_dawn",
    "civil_dusk",
    "nautical_dawn",
    "nautical_dusk",
    "astronomical_dawn",
    "astronomical_dusk",
    "year_moon_phases",
    "year_all_moon_phases",
    "handle_no_event_case",
    "format_time",
]

SunEvent = Union[datetime, NoEventTime, NoEventCode]


def handle_no_event_case(
    dt: datetime,
    code: NoEventCode,
    hour: int,
    minute: int = 0,
    options: Optional[Settings] = None,
) -> Union[NoEventTime, NoEventCode]:
    """Fallback for a day without the requested event.

    Returns *code* unchanged, or, when ``return_time_for_no_event_case`` is
    set, the date of *dt* at ``hour:minute`` (one hour later while daylight
    saving time is in effect) tagged with *code*.
    """

    options = resolve(options)
    if not options.return_time_for_no_event_case:
        return code
    fallback = dt.replace(hour=hour, minute=minute, second=0, microsecond=0)
    if dt.dst():
        fallback += timedelta(hours=1)
    return NoEventTime(time=fallback, code=code)


def _event(
    dt: datetime,
    latitude: float,
    longitude: float,
    flag: RiseSet,
    offset: float,
    hour: int,
    minute: int,
    options: Optional[Settings],
) -> SunEvent:
    options = resolve(options)
    result = sun_rise_set(dt, latitude, longitude, flag, offset, options)
    if isinstance(result, NoEventCode):
        return handle_no_event_case(dt, result, hour, minute, options)
    return result


def sunrise(
    dt: datetime, latitude: float, longitude: float, options: Optional[Settings] = None
) -> SunEvent:
    """Sunrise on the civil date of *dt*; falls back to 06:00."""

    return _event(dt, latitude, longitude, RiseSet.RISE, SUNRISE_OFFSET, 6, 0, options)


def sunset(
    dt: datetime, latitude: float, longitude: float, options: Optional[Settings] = None
) -> SunEvent:
    """Sunset on the civil date of *dt*; falls back to 18:00."""

    return _event(dt, latitude, longitude, RiseSet.SET, SUNRISE_OFFSET, 18, 0, options)


def civil_dawn(
    dt: datetime, latitude: float, longitude: float, options: Optional[Settings] = None
) -> SunEvent:
    """Sun 6° below the horizon in the morning; falls back to 05:30."""

    return _event(dt, latitude, longitude, RiseSet.RISE, CIVIL_OFFSET, 5, 30, options)


def civil_dusk(
    dt: datetime, latitude: float, longitude: float, options: Optional[Settings] = None
) -> SunEvent:
    """Sun 6° below the horizon in the evening; falls back to 18:30."""

    return _event(dt, latitude, longitude, RiseSet.SET, CIVIL_OFFSET, 18, 30, options)


def nautical_dawn(
    dt: datetime, latitude: float, longitude: float, options: Optional[Settings] = None
) -> SunEvent:
    """Sun 12° below the horizon in the morning; falls back to 05:00."""

    return _event(dt, latitude, longitude, RiseSet.RISE, NAUTICAL_OFFSET, 5, 0, options)


def nautical_dusk(
    dt: datetime, latitude: float, longitude: float, options: Optional[Settings] = None
) -> SunEvent:
    """Sun 12° below the horizon in the evening; falls back to 19:00."""

    return _event(dt, latitude, longitude, RiseSet.SET, NAUTICAL_OFFSET, 19, 0, options)


def astronomical_dawn(
    dt: datetime, latitude: float, longitude: float, options: Optional[Settings] = None
) -> SunEvent:
    """Sun 18° below the horizon in the morning; falls back to 04:30."""

    return _event(
        dt, latitude, longitude, RiseSet.RISE, ASTRONOMICAL_OFFSET, 4, 30, options
    )


def astronomical_dusk(
    dt: datetime, latitude: float, longitude: float, options: Optional[Settings] = None
) -> SunEvent:
    """Sun 18° below the horizon in the evening; falls back to 19:30."""

    return _event(
        dt, latitude, longitude, RiseSet.SET, ASTRONOMICAL_OFFSET, 19, 30, options
    )


def solar_noon(
    dt: datetime, longitude: float, options: Optional[Settings] = None
) -> datetime:
    """Solar transit on the civil date of *dt*. Always defined."""

    return sun_transit(dt, longitude, options)


def year_moon_phases(
    year: int, phase: int, timezone: str = "UTC", options: Optional[Settings] = None
) -> List[datetime]:
    """Moons of one phase (0 new, 1 first quarter, 2 full, 3 last quarter) in *year*."""

    return year_phases(year, phase, timezone, options)


def year_all_moon_phases(
    year: int, timezone: str = "UTC", options: Optional[Settings] = None
) -> List[PhaseEvent]:
    return year_all_phases(year, timezone, options)


def format_time(
    value: Union[datetime, NoEventTime],
    pattern: str,
    options: Optional[Settings] = None,
) -> str:
    """Format *value* with :meth:`datetime.strftime`.

    A :class:`NoEventTime` gets the marker configured for its code in
    ``date_format_keys`` appended; a plain datetime is formatted as is.
    """

    options = resolve(options)
    if isinstance(value, NoEventTime):
        text = value.time.strftime(pattern)
        marker = options.date_format_keys.get(value.code.value)
        if marker:
            text += marker
        return text
    return value.strftime(pattern)
