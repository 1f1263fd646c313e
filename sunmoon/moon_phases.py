"""Times of the principal moon phases (AA chapter 49)."""

from __future__ import annotations

import json
import logging
import math
from datetime import datetime, timedelta
from typing import List, Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

import numpy as np

from . import constants
from .auxmath import polynomial
from .config import Settings, resolve
from .results import MoonPhase, PhaseEvent
from .timescales import approx_k, delta_t, jd_to_datetime, k_to_t, round_to_minute

__all__ = [
    "LUNATIONS_PER_YEAR_SEARCH",
    "true_phase",
    "mean_phase",
    "eccentricity_correction",
    "sun_mean_anomaly",
    "moon_mean_anomaly",
    "moon_argument_of_latitude",
    "moon_ascending_node_longitude",
    "new_full_corrections",
    "quarter_corrections",
    "common_corrections",
    "year_phases",
    "year_all_phases",
    "zone_for",
]

LOGGER = logging.getLogger(__name__)

# Lunations examined per year; more than the 12-13 occurrences of a phase.
LUNATIONS_PER_YEAR_SEARCH = 15

SYNODIC_MONTH = 29.530588861

# Larger than Delta T anywhere in its domain.
_WINDOW_MARGIN = timedelta(days=1)


def mean_phase(T: float, k: float) -> float:
    """JDE of the mean phase (AA Eq. 49.1)."""

    return (
        2451550.09766
        + SYNODIC_MONTH * k
        + 0.00015437 * T**2
        - 0.000000150 * T**3
        + 0.00000000073 * T**4
    )


def eccentricity_correction(T: float) -> float:
    """Factor for terms depending on the eccentricity of the earth's orbit (AA Eq. 47.6)."""

    return polynomial(T, (1.0, -0.002516, -0.0000074))


def sun_mean_anomaly(T: float, k: float) -> float:
    return 2.5534 + 29.10535670 * k - 0.0000014 * T**2 - 0.00000011 * T**3


def moon_mean_anomaly(T: float, k: float) -> float:
    return (
        201.5643
        + 385.81693528 * k
        + 0.0107582 * T**2
        + 0.00001238 * T**3
        - 0.000000058 * T**4
    )


def moon_argument_of_latitude(T: float, k: float) -> float:
    return (
        160.7108
        + 390.67050284 * k
        - 0.0016118 * T**2
        - 0.00000227 * T**3
        + 0.000000011 * T**4
    )


def moon_ascending_node_longitude(T: float, k: float) -> float:
    return 124.7746 - 1.56375588 * k + 0.0020672 * T**2 + 0.00000215 * T**3


def _periodic_sum(
    table: np.ndarray,
    arguments: np.ndarray,
    E: float,
    amplitude_column: int,
    func=np.sin,
) -> float:
    n_args = arguments.shape[0]
    angles = np.radians(table[:, :n_args] @ arguments)
    amplitudes = table[:, amplitude_column] * E ** table[:, n_args]
    return float(np.dot(amplitudes, func(angles)))


def new_full_corrections(
    E: float, M: float, MPrime: float, F: float, Omega: float, phase: MoonPhase
) -> float:
    """Periodic terms for new moon and full moon, in days."""

    column = 5 if phase == MoonPhase.NEW_MOON else 6
    return _periodic_sum(
        constants.NEW_FULL_MOON_TERMS, np.array([M, MPrime, F, Omega]), E, column
    )


def quarter_corrections(
    E: float, M: float, MPrime: float, F: float, Omega: float, phase: MoonPhase
) -> float:
    """Periodic terms for the quarters including the W correction, in days."""

    correction = _periodic_sum(
        constants.QUARTER_TERMS, np.array([M, MPrime, F, Omega]), E, 5
    )
    W = _periodic_sum(constants.QUARTER_W_TERMS, np.array([M, MPrime, F]), E, 4, np.cos)
    if phase == MoonPhase.FIRST_QUARTER:
        return correction + W
    return correction - W


def common_corrections(T: float, k: float) -> float:
    """Planetary-argument corrections shared by all phases (AA p352)."""

    table = constants.PLANETARY_ARGUMENTS
    arguments = table[:, 0] + table[:, 1] * k + table[:, 2] * T**2
    return float(np.dot(table[:, 3], np.sin(np.radians(arguments))))


def true_phase(k: float, phase: int) -> float:
    """JDE of the phase *phase* in lunation *k*.

    Parameters
    ----------
    k:
        Integer lunation number counted from the new moon of 2000-01-06.
    phase:
        0 new moon, 1 first quarter, 2 full moon, 3 last quarter.

    Returns
    -------
    float
        Julian ephemeris day (dynamical time) of the phase.
    """

    phase = _phase(phase)
    k += phase / 4.0
    T = k_to_t(k)
    E = eccentricity_correction(T)
    M = sun_mean_anomaly(T, k)
    MPrime = moon_mean_anomaly(T, k)
    F = moon_argument_of_latitude(T, k)
    Omega = moon_ascending_node_longitude(T, k)
    if phase in (MoonPhase.NEW_MOON, MoonPhase.FULL_MOON):
        correction = new_full_corrections(E, M, MPrime, F, Omega, phase)
    else:
        correction = quarter_corrections(E, M, MPrime, F, Omega, phase)
    return mean_phase(T, k) + correction + common_corrections(T, k)


def _phase(phase: int) -> MoonPhase:
    try:
        return MoonPhase(phase)
    except ValueError as exc:
        raise ValueError(f"Unsupported moon phase: {phase!r} (expected 0-3)") from exc


def zone_for(name: str) -> ZoneInfo:
    """Resolve an IANA time zone name."""

    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError) as exc:
        raise ValueError(f"Unknown time zone: {name}") from exc


def year_phases(
    year: int,
    phase: int,
    timezone: str = "UTC",
    options: Optional[Settings] = None,
) -> List[datetime]:
    """All moons of *phase* falling in calendar *year* of *timezone*.

    The window is ``[year-01-01T00:00, (year+1)-01-01T00:00)`` in the given
    zone. Results are in chronological order and expressed in that zone.
    """

    options = resolve(options)
    phase = _phase(phase)
    zone = zone_for(timezone)
    year_begin = datetime(year, 1, 1, tzinfo=zone)
    year_end = datetime(year + 1, 1, 1, tzinfo=zone)
    last_instant = year_end - timedelta(microseconds=1)

    # first lunation at or before the start of the year
    k = math.floor(approx_k(year_begin)) - 1
    phase_times: List[datetime] = []
    for _ in range(LUNATIONS_PER_YEAR_SEARCH):
        # the JDE is read as a JD first, Delta T is removed afterwards
        moon_utc = jd_to_datetime(true_phase(k, phase))
        if moon_utc > year_end + _WINDOW_MARGIN:
            # later lunations cannot fall inside the year, and their Delta T
            # may lie outside the fitted range
            break
        # Delta T of the last month for instants just past the year end
        dT = delta_t(min(moon_utc.astimezone(zone), last_instant))
        moon_utc -= timedelta(seconds=math.floor(dT + 0.5))
        if options.round_to_nearest_minute:
            moon_utc = round_to_minute(moon_utc)
        moon_time = moon_utc.astimezone(zone)
        if year_begin <= moon_time < year_end:
            phase_times.append(moon_time)
        k += 1

    LOGGER.debug(
        json.dumps(
            {
                "event": "moon_phases",
                "year": year,
                "phase": int(phase),
                "timezone": timezone,
                "count": len(phase_times),
            }
        )
    )
    return phase_times


def year_all_phases(
    year: int,
    timezone: str = "UTC",
    options: Optional[Settings] = None,
) -> List[PhaseEvent]:
    """Every principal phase in *year*, sorted by time."""

    options = resolve(options)
    events = [
        PhaseEvent(time=moon_time, phase=phase)
        for phase in MoonPhase
        for moon_time in year_phases(year, phase, timezone, options)
    ]
    return sorted(events, key=lambda event: event.time)
