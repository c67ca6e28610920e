"""Tests for geometry helpers."""

import math

import pytest

from beadwheels.core.geometry import (
    Point,
    circles_clear,
    constrain,
    distance,
    polar,
    quadratic_bezier,
    remap,
)


class TestRemap:
    def test_linear(self):
        assert remap(0.125, 0, 0.25, 0, 1) == 0.5
        assert remap(120, 20, 220, 16, 32) == 24

    def test_unclamped(self):
        assert remap(0.5, 0, 0.25, 0, 1) == 2.0

    def test_degenerate_range(self):
        assert remap(3, 1, 1, 5, 9) == 5

    def test_constrain(self):
        assert constrain(2.0, 0, 1) == 1
        assert constrain(-1.0, 0, 1) == 0
        assert constrain(0.3, 0, 1) == 0.3


class TestDistances:
    def test_distance(self):
        assert distance((0, 0), (3, 4)) == 5

    def test_circles_clear(self):
        assert circles_clear((0, 0), 1, (2, 0), 1, 1.0)
        assert not circles_clear((0, 0), 1, (1.5, 0), 1, 1.0)
        assert circles_clear((0, 0), 1, (1.75, 0), 1, 0.85)

    def test_polar(self):
        p = polar(2.0, math.pi / 2)
        assert p.x == pytest.approx(0.0, abs=1e-12)
        assert p.y == pytest.approx(2.0)


class TestQuadraticBezier:
    def test_endpoints_exact(self):
        p0, p1, p2 = Point(1.3, -2.7), Point(40.1, 12.9), Point(-8.25, 3.5)
        assert quadratic_bezier(p0, p1, p2, 0.0) == p0
        assert quadratic_bezier(p0, p1, p2, 1.0) == p2

    def test_midpoint(self):
        p = quadratic_bezier((0, 0), (1, 2), (2, 0), 0.5)
        assert p == (pytest.approx(1.0), pytest.approx(1.0))
