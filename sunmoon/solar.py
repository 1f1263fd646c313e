"""Apparent position of the sun and sidereal time (AA chapters 12, 22, 25).

All functions take ``T``, Julian centuries since J2000.0, and return degrees.
"""

from __future__ import annotations

import math
from typing import Tuple

import numpy as np

from . import constants
from .auxmath import cosd, polynomial, reduce_angle, sind
from .timescales import DAYS_PER_CENTURY

__all__ = [
    "sun_mean_longitude",
    "sun_mean_anomaly",
    "sun_equation_of_center",
    "sun_true_longitude",
    "sun_apparent_longitude",
    "moon_mean_elongation",
    "moon_mean_anomaly",
    "moon_argument_of_latitude",
    "moon_ascending_node_longitude",
    "nutation",
    "nutation_in_longitude",
    "nutation_in_obliquity",
    "mean_obliquity_of_ecliptic",
    "true_obliquity_of_ecliptic",
    "sun_apparent_right_ascension",
    "sun_apparent_declination",
    "mean_sidereal_time_greenwich",
    "apparent_sidereal_time_greenwich",
]


def sun_mean_longitude(T: float) -> float:
    """Geometric mean longitude of the sun, mean equinox of date (AA Eq. 25.2)."""

    return reduce_angle(polynomial(T, constants.SUN_MEAN_LONGITUDE))


def sun_mean_anomaly(T: float) -> float:
    return reduce_angle(polynomial(T, constants.SUN_MEAN_ANOMALY))


def sun_equation_of_center(T: float) -> float:
    M = sun_mean_anomaly(T)
    return (
        (1.914602 - 0.004817 * T - 0.000014 * T**2) * sind(M)
        + (0.019993 - 0.000101 * T) * sind(2 * M)
        + 0.000290 * sind(3 * M)
    )


def sun_true_longitude(T: float) -> float:
    return sun_mean_longitude(T) + sun_equation_of_center(T)


def sun_apparent_longitude(T: float) -> float:
    """True longitude corrected for nutation and aberration (AA p164)."""

    Omega = moon_ascending_node_longitude(T)
    return sun_true_longitude(T) - 0.00569 - 0.00478 * sind(Omega)


def moon_mean_elongation(T: float) -> float:
    return reduce_angle(polynomial(T, constants.MOON_MEAN_ELONGATION))


def moon_mean_anomaly(T: float) -> float:
    return reduce_angle(polynomial(T, constants.MOON_MEAN_ANOMALY))


def moon_argument_of_latitude(T: float) -> float:
    return reduce_angle(polynomial(T, constants.MOON_ARGUMENT_OF_LATITUDE))


def moon_ascending_node_longitude(T: float) -> float:
    """Longitude of the ascending node of the moon's mean orbit on the ecliptic."""

    return reduce_angle(polynomial(T, constants.MOON_ASCENDING_NODE_LONGITUDE))


def nutation(T: float) -> Tuple[float, float]:
    """Nutation in longitude and in obliquity, in degrees (AA Ch. 22).

    Evaluates the 63 periodic terms of Table 22.A; the argument of each term
    is an integer combination of D, M, M', F and Omega.
    """

    arguments = np.array(
        [
            moon_mean_elongation(T),
            sun_mean_anomaly(T),
            moon_mean_anomaly(T),
            moon_argument_of_latitude(T),
            moon_ascending_node_longitude(T),
        ]
    )
    table = constants.NUTATIONS
    angles = np.radians(table[:, :5] @ arguments)
    delta_psi = np.dot(table[:, 5] + table[:, 6] * T, np.sin(angles))
    delta_epsilon = np.dot(table[:, 7] + table[:, 8] * T, np.cos(angles))
    return (
        float(delta_psi) / constants.NUTATION_SCALE,
        float(delta_epsilon) / constants.NUTATION_SCALE,
    )


def nutation_in_longitude(T: float) -> float:
    return nutation(T)[0]


def nutation_in_obliquity(T: float) -> float:
    return nutation(T)[1]


def mean_obliquity_of_ecliptic(T: float) -> float:
    """Mean obliquity after Laskar (AA Eq. 22.3), valid over +-10000 years."""

    return polynomial(T / 100.0, constants.MEAN_OBLIQUITY_OF_ECLIPTIC)


def true_obliquity_of_ecliptic(T: float) -> float:
    return mean_obliquity_of_ecliptic(T) + nutation_in_obliquity(T)


def _apparent_obliquity_and_longitude(T: float) -> Tuple[float, float]:
    Omega = moon_ascending_node_longitude(T)
    epsilon = true_obliquity_of_ecliptic(T) + 0.00256 * cosd(Omega)
    return epsilon, sun_apparent_longitude(T)


def sun_apparent_right_ascension(T: float) -> float:
    """Apparent right ascension of the sun in [0, 360) (AA Eq. 25.6)."""

    epsilon, lam = _apparent_obliquity_and_longitude(T)
    alpha = math.degrees(math.atan2(cosd(epsilon) * sind(lam), cosd(lam)))
    return reduce_angle(alpha)


def sun_apparent_declination(T: float) -> float:
    """Apparent declination of the sun (AA Eq. 25.7)."""

    epsilon, lam = _apparent_obliquity_and_longitude(T)
    return math.degrees(math.asin(sind(epsilon) * sind(lam)))


def mean_sidereal_time_greenwich(T: float) -> float:
    """Mean sidereal time at Greenwich, not reduced (AA Eq. 12.4)."""

    days = T * DAYS_PER_CENTURY
    return 280.46061837 + 360.98564736629 * days + 0.000387933 * T**2 - T**3 / 38710000.0


def apparent_sidereal_time_greenwich(T: float) -> float:
    """Mean sidereal time corrected by the equation of the equinoxes, in [0, 360)."""

    delta_psi, delta_epsilon = nutation(T)
    epsilon = mean_obliquity_of_ecliptic(T) + delta_epsilon
    return reduce_angle(mean_sidereal_time_greenwich(T) + delta_psi * cosd(epsilon))
