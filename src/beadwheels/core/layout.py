"""
Procedural layout of wheels, bead arcs and background dots.

Placement is greedy and single-pass: candidates are proposed in row-major
grid order and either accepted or dropped for good. The accepted wheel list
is the only spatial index; every distance query scans it.
"""

import logging
import math
from dataclasses import dataclass

import numpy as np

from beadwheels.core.bead_arc import BeadArc
from beadwheels.core.geometry import Point, circles_clear, distance
from beadwheels.core.palette import BACKGROUND_PALETTE, HSBColor, choose
from beadwheels.core.wheel import Wheel

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BackgroundDot:
    position: Point
    radius: float
    color: HSBColor


class LayoutEngine:
    """
    Generates one composition from a seeded random generator.

    The generator is consumed in traversal order (wheels, then arcs, then
    dots), so the same seed and canvas size always yield the same layout.
    """

    # Wheels
    GRID_DIVISIONS = 9
    CELL_PROBABILITY = 0.8
    CENTER_JITTER = 0.25
    MIN_RADIUS = 0.55
    MAX_RADIUS = 1.05
    WHEEL_SPACING = 0.85

    # Arcs
    ARC_MIN_GAP = 0.95
    ARC_MAX_FRACTION = 0.5
    ARC_BLOCK_FACTOR = 0.9

    # Background dots
    DOT_DIVISIONS = 28
    DOT_SKIP_PROBABILITY = 0.6
    DOT_JITTER = 0.3
    DOT_MIN_RADIUS = 0.06
    DOT_MAX_RADIUS = 0.12
    DOT_WHEEL_CLEARANCE = 0.9

    def __init__(self, rng: np.random.Generator, neighbors_per_wheel: int = 2):
        self.rng = rng
        self.neighbors_per_wheel = neighbors_per_wheel

    def generate_wheels(self, width: float, height: float) -> list[Wheel]:
        """
        Place non-overlapping wheels over a jittered grid.

        Args:
            width: Canvas width.
            height: Canvas height.

        Returns:
            Accepted wheels in scan order.
        """
        if width <= 0 or height <= 0:
            return []

        rng = self.rng
        wheels: list[Wheel] = []
        unit = min(width, height) / self.GRID_DIVISIONS
        cols = int(width / unit) + 1
        rows = int(height / unit) + 1
        jitter = unit * self.CENTER_JITTER

        for j in range(rows):
            for i in range(cols):
                if rng.random() >= self.CELL_PROBABILITY:
                    continue
                cx = (i + 0.5) * unit + rng.uniform(-jitter, jitter)
                cy = (j + 0.5) * unit + rng.uniform(-jitter, jitter)
                r = unit * rng.uniform(self.MIN_RADIUS, self.MAX_RADIUS)

                ok = all(
                    circles_clear((cx, cy), r, w.center, w.base_radius, self.WHEEL_SPACING)
                    for w in wheels
                )
                if ok:
                    wheels.append(Wheel.create(cx, cy, r, rng))

        logger.debug("Placed %d wheels on a %dx%d grid", len(wheels), cols, rows)
        return wheels

    def generate_bead_arcs(
        self,
        wheels: list[Wheel],
        width: float,
        height: float,
        neighbors_per_wheel: int | None = None,
    ) -> list[BeadArc]:
        """
        Connect each wheel to up to k of its nearest neighbours.

        A pair is only considered from the lower-index wheel. Candidates
        that are too close or too far are skipped, and an arc whose
        midpoint lands inside a third wheel is discarded as blocked.
        """
        k = self.neighbors_per_wheel if neighbors_per_wheel is None else neighbors_per_wheel
        max_dist = min(width, height) * self.ARC_MAX_FRACTION
        arcs: list[BeadArc] = []
        blocked_count = 0

        for i, w1 in enumerate(wheels):
            candidates = sorted(
                ((distance(w1.center, w2.center), j) for j, w2 in enumerate(wheels) if j != i),
                key=lambda c: c[0],
            )

            added = 0
            for d, j in candidates:
                if added >= k:
                    break
                if j < i:
                    continue
                w2 = wheels[j]

                if d < (w1.base_radius + w2.base_radius) * self.ARC_MIN_GAP:
                    continue
                if d > max_dist:
                    continue

                arc = BeadArc.between(w1, w2, self.rng)
                mid = arc.point_at(0.5)

                blocked = any(
                    w.contains(mid, self.ARC_BLOCK_FACTOR)
                    for m, w in enumerate(wheels)
                    if m != i and m != j
                )
                if blocked:
                    blocked_count += 1
                    continue

                arcs.append(arc)
                added += 1

        logger.debug("Built %d bead arcs (%d blocked)", len(arcs), blocked_count)
        return arcs

    def generate_background_dots(
        self,
        wheels: list[Wheel],
        width: float,
        height: float,
    ) -> list[BackgroundDot]:
        """Scatter small dots over a fine grid, keeping clear of wheels."""
        if width <= 0 or height <= 0:
            return []

        rng = self.rng
        dots: list[BackgroundDot] = []
        step = min(width, height) / self.DOT_DIVISIONS
        jitter = step * self.DOT_JITTER

        n_rows = math.ceil(height / step - 0.5)
        n_cols = math.ceil(width / step - 0.5)
        for row in range(n_rows):
            y = step * (row + 0.5)
            for col in range(n_cols):
                x = step * (col + 0.5)
                if rng.random() < self.DOT_SKIP_PROBABILITY:
                    continue

                px = x + rng.uniform(-jitter, jitter)
                py = y + rng.uniform(-jitter, jitter)

                if any(w.contains((px, py), self.DOT_WHEEL_CLEARANCE) for w in wheels):
                    continue

                dots.append(BackgroundDot(
                    position=Point(px, py),
                    radius=rng.uniform(step * self.DOT_MIN_RADIUS, step * self.DOT_MAX_RADIUS),
                    color=choose(rng, BACKGROUND_PALETTE),
                ))

        logger.debug("Scattered %d background dots", len(dots))
        return dots

    def generate(
        self, width: float, height: float
    ) -> tuple[list[Wheel], list[BeadArc], list[BackgroundDot]]:
        """Run the full layout in its fixed order: wheels, arcs, dots."""
        wheels = self.generate_wheels(width, height)
        arcs = self.generate_bead_arcs(wheels, width, height)
        dots = self.generate_background_dots(wheels, width, height)
        return wheels, arcs, dots
