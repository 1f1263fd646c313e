from __future__ import annotations

import math

import erfa
import numpy as np
import pytest

from sunmoon import constants
from sunmoon.auxmath import interpolate_from_three, polynomial, reduce_angle
from sunmoon.solar import (
    apparent_sidereal_time_greenwich,
    mean_obliquity_of_ecliptic,
    mean_sidereal_time_greenwich,
    moon_ascending_node_longitude,
    nutation,
    sun_apparent_declination,
    sun_apparent_longitude,
    sun_apparent_right_ascension,
    sun_equation_of_center,
    sun_mean_anomaly,
    sun_mean_longitude,
    sun_true_longitude,
    true_obliquity_of_ecliptic,
)
from sunmoon.timescales import jd_to_t

ARCSEC = 1.0 / 3600.0

# AA Examples 12.a and 22.a: 1987 April 10, 0h
T_1987 = jd_to_t(2446895.5)
# AA Example 25.a: 1992 October 13, 0h TD
T_1992 = jd_to_t(2448908.5)


def _angle_difference(a: float, b: float) -> float:
    return (a - b + 180.0) % 360.0 - 180.0


def test_nutation_table_shape_and_checksums():
    table = constants.NUTATIONS
    assert table.shape == (63, 9)
    assert table[:, 5].sum() == -184144
    assert table[:, 7].sum() == 98301
    assert table[:, :5].sum() == 140
    assert np.array_equal(table[:, :5], np.round(table[:, :5]))
    assert list(table[0]) == [0, 0, 0, 0, 1, -171996, -174.2, 92025, 8.9]


def test_planetary_argument_table():
    table = constants.PLANETARY_ARGUMENTS
    assert table.shape == (14, 4)
    assert table[:, 3].sum() == pytest.approx(0.001292)


def test_reduce_angle():
    assert reduce_angle(370.0) == pytest.approx(10.0)
    assert reduce_angle(-10.0) == pytest.approx(350.0)
    assert reduce_angle(720.0) == 0.0
    assert 0.0 <= reduce_angle(-1e-12) < 360.0


def test_polynomial():
    assert polynomial(2.0, (1.0, 2.0, 3.0)) == 17.0
    assert polynomial(5.0, ()) == 0.0


def test_interpolate_from_three():
    # AA Example 3.a
    value = interpolate_from_three(0.884226, 0.877366, 0.870531, 4.35 / 24)
    assert value == pytest.approx(0.876125, abs=1e-6)


def test_interpolate_across_zero_right_ascension():
    value = interpolate_from_three(359.0, 0.0, 1.0, 0.5, normalize=True)
    assert reduce_angle(value) == pytest.approx(0.5)


def test_nutation_example_22a():
    delta_psi, delta_epsilon = nutation(T_1987)
    assert delta_psi / ARCSEC == pytest.approx(-3.788, abs=0.002)
    assert delta_epsilon / ARCSEC == pytest.approx(9.443, abs=0.002)
    assert moon_ascending_node_longitude(T_1987) == pytest.approx(11.2531, abs=1e-4)


def test_obliquity_example_22a():
    assert mean_obliquity_of_ecliptic(T_1987) == pytest.approx(23 + 26 / 60 + 27.407 / 3600, abs=1e-6)
    assert true_obliquity_of_ecliptic(T_1987) == pytest.approx(23 + 26 / 60 + 36.850 / 3600, abs=1e-6)


def test_sidereal_time_example_12a():
    mean = reduce_angle(mean_sidereal_time_greenwich(T_1987))
    apparent = apparent_sidereal_time_greenwich(T_1987)
    assert mean == pytest.approx(15 * (13 + 10 / 60 + 46.3668 / 3600), abs=1e-5)
    assert apparent == pytest.approx(15 * (13 + 10 / 60 + 46.1351 / 3600), abs=1e-5)


def test_solar_coordinates_example_25a():
    assert sun_mean_longitude(T_1992) == pytest.approx(201.80720, abs=1e-5)
    assert sun_mean_anomaly(T_1992) == pytest.approx(278.99397, abs=0.002)
    assert sun_equation_of_center(T_1992) == pytest.approx(-1.89732, abs=0.001)
    assert sun_true_longitude(T_1992) == pytest.approx(199.90988, abs=0.001)
    assert sun_apparent_longitude(T_1992) == pytest.approx(199.90895, abs=0.001)
    assert sun_apparent_right_ascension(T_1992) == pytest.approx(198.38083, abs=0.002)
    assert sun_apparent_declination(T_1992) == pytest.approx(-7.78507, abs=0.002)


@pytest.mark.parametrize("mjd", [15020.0, 33282.0, 44239.5, 51544.5, 57388.0, 62502.25, 69807.0])
def test_nutation_matches_erfa(mjd):
    dpsi, deps = erfa.nut80(2400000.5, mjd)
    delta_psi, delta_epsilon = nutation(jd_to_t(2400000.5 + mjd))
    assert delta_psi == pytest.approx(math.degrees(dpsi), abs=0.05 * ARCSEC)
    assert delta_epsilon == pytest.approx(math.degrees(deps), abs=0.05 * ARCSEC)


@pytest.mark.parametrize("mjd", [15020.0, 44239.5, 51544.5, 57388.0, 69807.0])
def test_mean_sidereal_time_matches_erfa(mjd):
    gmst = math.degrees(erfa.gmst82(2400000.5, mjd))
    ours = reduce_angle(mean_sidereal_time_greenwich(jd_to_t(2400000.5 + mjd)))
    assert _angle_difference(ours, gmst) == pytest.approx(0.0, abs=1e-5)


@pytest.mark.parametrize("mjd", [44239.5, 51544.5, 57388.0, 57570.0])
def test_right_ascension_range(mjd):
    alpha = sun_apparent_right_ascension(jd_to_t(2400000.5 + mjd))
    assert 0.0 <= alpha < 360.0
