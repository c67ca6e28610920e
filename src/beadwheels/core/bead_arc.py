"""
Curved bead strings connecting the edges of two wheels.
"""

import math
from dataclasses import dataclass

import numpy as np

from beadwheels.core.geometry import Point, quadratic_bezier
from beadwheels.core.palette import HSBColor
from beadwheels.core.wheel import Wheel


@dataclass(frozen=True)
class BeadArc:
    """
    A quadratic Bezier string of beads between two wheels.

    The arc references its wheels by geometry only: endpoints sit just
    inside each wheel's edge along the centre-to-centre direction, and
    the control point bends the chord sideways by a fixed random amount.
    """

    start: Point
    end: Point
    control: Point
    color: HSBColor
    bead_count: int
    bead_size: float

    EDGE_INSET = 0.95
    CURVATURE = 0.25
    CURVATURE_JITTER = 0.08
    BEAD_FACTOR = 0.06
    SPACING = 1.4
    LENGTH_FACTOR = 1.1
    MIN_BEADS = 4

    @classmethod
    def between(cls, wheel_a: Wheel, wheel_b: Wheel, rng: np.random.Generator) -> "BeadArc":
        ax, ay = wheel_a.center
        bx, by = wheel_b.center

        # Direction from A to B (zero vector for coincident centres)
        dx, dy = bx - ax, by - ay
        length = math.hypot(dx, dy)
        if length > 0:
            dx, dy = dx / length, dy / length

        ra = wheel_a.base_radius * cls.EDGE_INSET
        rb = wheel_b.base_radius * cls.EDGE_INSET
        start = Point(ax + dx * ra, ay + dy * ra)
        end = Point(bx - dx * rb, by - dy * rb)

        cx, cy = end.x - start.x, end.y - start.y
        chord_len = math.hypot(cx, cy)
        mid = Point(start.x + cx * 0.5, start.y + cy * 0.5)

        nx, ny = -cy, cx
        if chord_len > 0:
            nx, ny = nx / chord_len, ny / chord_len

        curvature = chord_len * (
            cls.CURVATURE + rng.uniform(-cls.CURVATURE_JITTER, cls.CURVATURE_JITTER)
        )
        control = Point(mid.x + nx * curvature, mid.y + ny * curvature)

        bead_size = min(wheel_a.base_radius, wheel_b.base_radius) * cls.BEAD_FACTOR
        spacing = bead_size * cls.SPACING
        approx_len = chord_len * cls.LENGTH_FACTOR
        count = max(cls.MIN_BEADS, int(approx_len / spacing))

        return cls(
            start=start,
            end=end,
            control=control,
            color=wheel_a.bead_color,
            bead_count=count,
            bead_size=bead_size,
        )

    def point_at(self, t: float) -> Point:
        """Point on the arc for t in [0, 1]."""
        return quadratic_bezier(self.start, self.control, self.end, t)

    def sample_points(self) -> list[Point]:
        """Bead positions at t = 0, 1/n, ..., 1."""
        n = self.bead_count
        return [self.point_at(i / n) for i in range(n + 1)]
