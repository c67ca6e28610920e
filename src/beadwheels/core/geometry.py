"""
Small geometry helpers shared by the layout and arc models.
"""

import math
from typing import NamedTuple


class Point(NamedTuple):
    x: float
    y: float


def distance(a: tuple[float, float], b: tuple[float, float]) -> float:
    """Euclidean distance between two points."""
    return math.hypot(b[0] - a[0], b[1] - a[1])


def remap(
    value: float,
    in_lo: float,
    in_hi: float,
    out_lo: float,
    out_hi: float,
) -> float:
    """Linearly re-map ``value`` from one range to another (unclamped)."""
    if in_hi == in_lo:
        return out_lo
    return out_lo + (value - in_lo) * (out_hi - out_lo) / (in_hi - in_lo)


def constrain(value: float, lo: float, hi: float) -> float:
    return min(max(value, lo), hi)


def circles_clear(
    c1: tuple[float, float],
    r1: float,
    c2: tuple[float, float],
    r2: float,
    factor: float = 1.0,
) -> bool:
    """True when the centres are at least ``factor`` x (r1 + r2) apart."""
    return distance(c1, c2) >= (r1 + r2) * factor


def polar(radius: float, angle: float) -> Point:
    return Point(math.cos(angle) * radius, math.sin(angle) * radius)


def quadratic_bezier(
    p0: tuple[float, float],
    p1: tuple[float, float],
    p2: tuple[float, float],
    t: float,
) -> Point:
    """
    Evaluate a quadratic Bezier curve.

    P(t) = (1 - t)^2 * p0 + 2(1 - t)t * p1 + t^2 * p2

    Args:
        p0: Start point.
        p1: Control point.
        p2: End point.
        t: Curve parameter in [0, 1].

    Returns:
        Point on the curve. Exactly ``p0`` at t=0 and ``p2`` at t=1.
    """
    mt = 1.0 - t
    a = mt * mt
    b = 2.0 * mt * t
    c = t * t
    return Point(
        a * p0[0] + b * p1[0] + c * p2[0],
        a * p0[1] + b * p1[1] + c * p2[1],
    )
