"""Sun and moon almanac after Meeus, *Astronomical Algorithms*."""

from .almanac import (
    astronomical_dawn,
    astronomical_dusk,
    civil_dawn,
    civil_dusk,
    format_time,
    nautical_dawn,
    nautical_dusk,
    solar_noon,
    sunrise,
    sunset,
    year_all_moon_phases,
    year_moon_phases,
)
from .config import Settings, get_settings, reset_settings, settings
from .results import MoonPhase, NoEventCode, NoEventTime, PhaseEvent, RiseSet
from .sun_events import SolverError
from .timescales import DeltaTRangeError

__all__ = [
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
    "format_time",
    "settings",
    "get_settings",
    "reset_settings",
    "Settings",
    "MoonPhase",
    "NoEventCode",
    "NoEventTime",
    "PhaseEvent",
    "RiseSet",
    "DeltaTRangeError",
    "SolverError",
]
