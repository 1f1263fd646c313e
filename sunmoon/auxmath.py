"""Small numerical helpers shared by the solar and lunar models."""

from __future__ import annotations

import math
from typing import Sequence

__all__ = [
    "sind",
    "cosd",
    "reduce_angle",
    "polynomial",
    "interpolate_from_three",
]


def sind(deg: float) -> float:
    """Sine of an angle given in degrees."""

    return math.sin(math.radians(deg))


def cosd(deg: float) -> float:
    """Cosine of an angle given in degrees."""

    return math.cos(math.radians(deg))


def reduce_angle(angle: float) -> float:
    """Reduce *angle* (degrees) to the interval [0, 360)."""

    return angle - 360.0 * math.floor(angle / 360.0)


def polynomial(variable: float, coeffs: Sequence[float]) -> float:
    """Evaluate ``A + Bx + Cx^2 + ...`` for ``coeffs = (A, B, C, ...)``."""

    result = 0.0
    for coeff in reversed(coeffs):
        result = result * variable + coeff
    return result


def interpolate_from_three(
    y1: float, y2: float, y3: float, n: float, normalize: bool = False
) -> float:
    """Interpolate from three tabular values one interval apart (AA Eq. 3.3).

    Parameters
    ----------
    y1, y2, y3:
        Tabulated values at ``-1``, ``0`` and ``+1``.
    n:
        Interpolating factor relative to the middle value.
    normalize:
        Treat the values as angles and unwrap differences across 360°.
    """

    a = y2 - y1
    b = y3 - y2
    if normalize:
        if a < 0:
            a += 360.0
        if b < 0:
            b += 360.0
    c = b - a
    return y2 + (n / 2.0) * (a + b + n * c)
