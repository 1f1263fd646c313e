"""Coefficient tables from Meeus, *Astronomical Algorithms* (2nd ed.).

Polynomial coefficients are listed lowest order first, as consumed by
:func:`sunmoon.auxmath.polynomial`.
"""

from __future__ import annotations

from typing import Tuple

import numpy as np

# AA p144, referred to T.
SUN_MEAN_ANOMALY = (357.52772, 35999.050340, -0.0001603, -1.0 / 300000.0)
MOON_MEAN_ELONGATION = (297.85036, 445267.111480, -0.0019142, 1.0 / 189474.0)
MOON_MEAN_ANOMALY = (134.96298, 477198.867398, 0.0086972, 1.0 / 56250.0)
MOON_ARGUMENT_OF_LATITUDE = (93.27191, 483202.017538, -0.0036825, 1.0 / 327270.0)
MOON_ASCENDING_NODE_LONGITUDE = (125.04452, -1934.136261, 0.0020708, 1.0 / 450000.0)

# AA p163 Eq. 25.2
SUN_MEAN_LONGITUDE = (280.46646, 36000.76983, 0.0003032)

# AA p147 Eq. 22.3, arc-seconds converted to degrees, argument U = T / 100.
MEAN_OBLIQUITY_OF_ECLIPTIC = tuple(
    value / 3600.0
    for value in (
        84381.448,
        -4680.93,
        -1.55,
        1999.25,
        -51.38,
        -249.67,
        -39.05,
        7.12,
        27.87,
        5.79,
        2.45,
    )
)

# AA Table 22.A. Columns: multiples of D, M, M', F, Omega, then the
# longitude coefficient and its rate, then the obliquity coefficient and its
# rate, all in units of 0.0001".
NUTATIONS = np.array(
    [
        [0, 0, 0, 0, 1, -171996, -174.2, 92025, 8.9],
        [-2, 0, 0, 2, 2, -13187, -1.6, 5736, -3.1],
        [0, 0, 0, 2, 2, -2274, -0.2, 977, -0.5],
        [0, 0, 0, 0, 2, 2062, 0.2, -895, 0.5],
        [0, 1, 0, 0, 0, 1426, -3.4, 54, -0.1],
        [0, 0, 1, 0, 0, 712, 0.1, -7, 0],
        [-2, 1, 0, 2, 2, -517, 1.2, 224, -0.6],
        [0, 0, 0, 2, 1, -386, -0.4, 200, 0],
        [0, 0, 1, 2, 2, -301, 0, 129, -0.1],
        [-2, -1, 0, 2, 2, 217, -0.5, -95, 0.3],
        [-2, 0, 1, 0, 0, -158, 0, 0, 0],
        [-2, 0, 0, 2, 1, 129, 0.1, -70, 0],
        [0, 0, -1, 2, 2, 123, 0, -53, 0],
        [2, 0, 0, 0, 0, 63, 0, 0, 0],
        [0, 0, 1, 0, 1, 63, 0.1, -33, 0],
        [2, 0, -1, 2, 2, -59, 0, 26, 0],
        [0, 0, -1, 0, 1, -58, -0.1, 32, 0],
        [0, 0, 1, 2, 1, -51, 0, 27, 0],
        [-2, 0, 2, 0, 0, 48, 0, 0, 0],
        [0, 0, -2, 2, 1, 46, 0, -24, 0],
        [2, 0, 0, 2, 2, -38, 0, 16, 0],
        [0, 0, 2, 2, 2, -31, 0, 13, 0],
        [0, 0, 2, 0, 0, 29, 0, 0, 0],
        [-2, 0, 1, 2, 2, 29, 0, -12, 0],
        [0, 0, 0, 2, 0, 26, 0, 0, 0],
        [-2, 0, 0, 2, 0, -22, 0, 0, 0],
        [0, 0, -1, 2, 1, 21, 0, -10, 0],
        [0, 2, 0, 0, 0, 17, -0.1, 0, 0],
        [2, 0, -1, 0, 1, 16, 0, -8, 0],
        [-2, 2, 0, 2, 2, -16, 0.1, 7, 0],
        [0, 1, 0, 0, 1, -15, 0, 9, 0],
        [-2, 0, 1, 0, 1, -13, 0, 7, 0],
        [0, -1, 0, 0, 1, -12, 0, 6, 0],
        [0, 0, 2, -2, 0, 11, 0, 0, 0],
        [2, 0, -1, 2, 1, -10, 0, 5, 0],
        [2, 0, 1, 2, 2, -8, 0, 3, 0],
        [0, 1, 0, 2, 2, 7, 0, -3, 0],
        [-2, 1, 1, 0, 0, -7, 0, 0, 0],
        [0, -1, 0, 2, 2, -7, 0, 3, 0],
        [2, 0, 0, 2, 1, -7, 0, 3, 0],
        [2, 0, 1, 0, 0, 6, 0, 0, 0],
        [-2, 0, 2, 2, 2, 6, 0, -3, 0],
        [-2, 0, 1, 2, 1, 6, 0, -3, 0],
        [2, 0, -2, 0, 1, -6, 0, 3, 0],
        [2, 0, 0, 0, 1, -6, 0, 3, 0],
        [0, -1, 1, 0, 0, 5, 0, 0, 0],
        [-2, -1, 0, 2, 1, -5, 0, 3, 0],
        [-2, 0, 0, 0, 1, -5, 0, 3, 0],
        [0, 0, 2, 2, 1, -5, 0, 3, 0],
        [-2, 0, 2, 0, 1, 4, 0, 0, 0],
        [-2, 1, 0, 2, 1, 4, 0, 0, 0],
        [0, 0, 1, -2, 0, 4, 0, 0, 0],
        [-1, 0, 1, 0, 0, -4, 0, 0, 0],
        [-2, 1, 0, 0, 0, -4, 0, 0, 0],
        [1, 0, 0, 0, 0, -4, 0, 0, 0],
        [0, 0, 1, 2, 0, 3, 0, 0, 0],
        [0, 0, -2, 2, 2, -3, 0, 0, 0],
        [-1, -1, 1, 0, 0, -3, 0, 0, 0],
        [0, 1, 1, 0, 0, -3, 0, 0, 0],
        [0, -1, 1, 2, 2, -3, 0, 0, 0],
        [2, -1, -1, 2, 2, -3, 0, 0, 0],
        [0, 0, 3, 2, 2, 3, 0, 0, 0],
        [2, -1, 0, 2, 2, -3, 0, 0, 0],
    ],
    dtype=float,
)
NUTATION_SCALE = 36_000_000.0

# Espenak & Meeus polynomial fit for Delta T (NASA GSFC, deltatpoly).
# Each segment: (exclusive upper bound of the decimal year, origin, scale,
# coefficients). The variable is (y - origin) / scale. 2050-2150 carries an
# extra linear term and is handled separately.
DeltaTSegment = Tuple[float, float, float, Tuple[float, ...]]

DELTA_T_LONG_TERM: DeltaTSegment = (float("inf"), 1820.0, 100.0, (-20.0, 0.0, 32.0))
DELTA_T_SEGMENTS: Tuple[DeltaTSegment, ...] = (
    (-500.0, 1820.0, 100.0, (-20.0, 0.0, 32.0)),
    (
        500.0,
        0.0,
        100.0,
        (10583.6, -1014.41, 33.78311, -5.952053, -0.1798452, 0.022174192, 0.0090316521),
    ),
    (
        1600.0,
        1000.0,
        100.0,
        (1574.2, -556.01, 71.23472, 0.319781, -0.8503463, -0.005050998, 0.0083572073),
    ),
    (1700.0, 1600.0, 1.0, (120.0, -0.9808, -0.01532, 1.0 / 7129.0)),
    (1800.0, 1700.0, 1.0, (8.83, 0.1603, -0.0059285, 0.00013336, -1.0 / 1174000.0)),
    (
        1860.0,
        1800.0,
        1.0,
        (
            13.72,
            -0.332447,
            0.0068612,
            0.0041116,
            -0.00037436,
            0.0000121272,
            -0.0000001699,
            0.000000000875,
        ),
    ),
    (
        1900.0,
        1860.0,
        1.0,
        (7.62, 0.5737, -0.251754, 0.01680668, -0.0004473624, 1.0 / 233174.0),
    ),
    (1920.0, 1900.0, 1.0, (-2.79, 1.494119, -0.0598939, 0.0061966, -0.000197)),
    (1941.0, 1920.0, 1.0, (21.20, 0.84493, -0.076100, 0.0020936)),
    (1961.0, 1950.0, 1.0, (29.07, 0.407, -1.0 / 233.0, 1.0 / 2547.0)),
    (1986.0, 1975.0, 1.0, (45.45, 1.067, -1.0 / 260.0, -1.0 / 718.0)),
    (
        2005.0,
        2000.0,
        1.0,
        (63.86, 0.3345, -0.060374, 0.0017275, 0.000651814, 0.00002373599),
    ),
    (2050.0, 2000.0, 1.0, (62.92, 0.32217, 0.005589)),
)
DELTA_T_BRIDGE_END = 2150.0
DELTA_T_MIN_YEAR = -1999
DELTA_T_MAX_YEAR = 3000

# AA Ch. 49, additional corrections for all phases: (constant, rate in k,
# rate in T^2, amplitude in days).
PLANETARY_ARGUMENTS = np.array(
    [
        [299.77, 0.107408, -0.009173, 0.000325],
        [251.88, 0.016321, 0.0, 0.000165],
        [251.83, 26.651886, 0.0, 0.000164],
        [349.42, 36.412478, 0.0, 0.000126],
        [84.66, 18.206239, 0.0, 0.000110],
        [141.74, 53.303771, 0.0, 0.000062],
        [207.14, 2.453732, 0.0, 0.000060],
        [154.84, 7.306860, 0.0, 0.000056],
        [34.52, 27.261239, 0.0, 0.000047],
        [207.19, 0.121824, 0.0, 0.000042],
        [291.34, 1.844379, 0.0, 0.000040],
        [161.72, 24.198154, 0.0, 0.000037],
        [239.56, 25.513099, 0.0, 0.000035],
        [331.55, 3.592518, 0.0, 0.000023],
    ],
    dtype=float,
)

# AA p351, new and full moon. Columns: multiples of M, M', F, Omega, power
# of E, then the amplitude for new moon and for full moon.
NEW_FULL_MOON_TERMS = np.array(
    [
        [0, 1, 0, 0, 0, -0.40720, -0.40614],
        [1, 0, 0, 0, 1, 0.17241, 0.17302],
        [0, 2, 0, 0, 0, 0.01608, 0.01614],
        [0, 0, 2, 0, 0, 0.01039, 0.01043],
        [-1, 1, 0, 0, 1, 0.00739, 0.00734],
        [1, 1, 0, 0, 1, -0.00514, -0.00515],
        [2, 0, 0, 0, 2, 0.00208, 0.00209],
        [0, 1, -2, 0, 0, -0.00111, -0.00111],
        [0, 1, 2, 0, 0, -0.00057, -0.00057],
        [1, 2, 0, 0, 1, 0.00056, 0.00056],
        [0, 3, 0, 0, 0, -0.00042, -0.00042],
        [1, 0, 2, 0, 1, 0.00042, 0.00042],
        [1, 0, -2, 0, 1, 0.00038, 0.00038],
        [-1, 2, 0, 0, 1, -0.00024, -0.00024],
        [0, 0, 0, 1, 0, -0.00017, -0.00017],
        [2, 1, 0, 0, 0, -0.00007, -0.00007],
        [0, 2, -2, 0, 0, 0.00004, 0.00004],
        [3, 0, 0, 0, 0, 0.00004, 0.00004],
        [1, 1, -2, 0, 0, 0.00003, 0.00003],
        [0, 2, 2, 0, 0, 0.00003, 0.00003],
        [1, 1, 2, 0, 0, -0.00003, -0.00003],
        [-1, 1, 2, 0, 0, 0.00003, 0.00003],
        [-1, 1, -2, 0, 0, -0.00002, -0.00002],
        [1, 3, 0, 0, 0, -0.00002, -0.00002],
        [0, 4, 0, 0, 0, 0.00002, 0.00002],
    ],
    dtype=float,
)

# AA p352, first and last quarter. Columns: multiples of M, M', F, Omega,
# power of E, amplitude.
QUARTER_TERMS = np.array(
    [
        [0, 1, 0, 0, 0, -0.62801],
        [1, 0, 0, 0, 1, 0.17172],
        [1, 1, 0, 0, 1, -0.01183],
        [0, 2, 0, 0, 0, 0.00862],
        [0, 0, 2, 0, 0, 0.00804],
        [-1, 1, 0, 0, 1, 0.00454],
        [2, 0, 0, 0, 2, 0.00204],
        [0, 1, -2, 0, 0, -0.00180],
        [0, 1, 2, 0, 0, -0.00070],
        [0, 3, 0, 0, 0, -0.00040],
        [-1, 2, 0, 0, 1, -0.00034],
        [1, 0, 2, 0, 1, 0.00032],
        [1, 0, -2, 0, 1, 0.00032],
        [2, 1, 0, 0, 2, -0.00028],
        [1, 2, 0, 0, 1, 0.00027],
        [0, 0, 0, 1, 0, -0.00017],
        [-1, 1, -2, 0, 0, -0.00005],
        [0, 2, 2, 0, 0, 0.00004],
        [1, 1, 2, 0, 0, -0.00004],
        [-2, 1, 0, 0, 0, 0.00004],
        [1, 1, -2, 0, 0, 0.00003],
        [3, 0, 0, 0, 0, 0.00003],
        [0, 2, -2, 0, 0, 0.00002],
        [-1, 1, 2, 0, 0, 0.00002],
        [1, 3, 0, 0, 0, -0.00002],
    ],
    dtype=float,
)

# AA p352, the W correction for quarters. Columns: multiples of M, M', F,
# power of E, amplitude (cosine terms).
QUARTER_W_TERMS = np.array(
    [
        [0, 0, 0, 0, 0.00306],
        [1, 0, 0, 1, -0.00038],
        [0, 1, 0, 0, 0.00026],
        [-1, 1, 0, 0, -0.00002],
        [1, 1, 0, 0, 0.00002],
        [0, 0, 2, 0, 0.00002],
    ],
    dtype=float,
)
