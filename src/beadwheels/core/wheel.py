"""
Wheel model: one decorated disc of the composition.

A wheel owns its layered recipe (styles, colours, precomputed dot rings)
and a fixed outer bead ring. Rotation and bead scale are supplied by the
animation at paint time and never stored here.
"""

import math
from dataclasses import dataclass
from typing import Union

import numpy as np

from beadwheels.core.geometry import Point, remap
from beadwheels.core.palette import HSBColor, PaletteSystem, choose


@dataclass(frozen=True)
class RingDot:
    """A dot of a ``dots`` layer, relative to the wheel centre."""
    x: float
    y: float
    r: float


@dataclass(frozen=True)
class SolidLayer:
    ratio: float
    color: HSBColor
    style = "solid"


@dataclass(frozen=True)
class DotsLayer:
    ratio: float
    color: HSBColor
    dots: tuple[RingDot, ...]
    style = "dots"


@dataclass(frozen=True)
class SunburstLayer:
    ratio: float
    color: HSBColor
    style = "sunburst"


@dataclass(frozen=True)
class StripesLayer:
    ratio: float
    color: HSBColor
    style = "stripes"


Layer = Union[SolidLayer, DotsLayer, SunburstLayer, StripesLayer]

LAYER_STYLES = ("solid", "dots", "sunburst", "stripes")


@dataclass(frozen=True)
class BeadRing:
    radius: float
    bead_size: float
    count: int


def make_ring_dots(rad: float, rng: np.random.Generator) -> tuple[RingDot, ...]:
    """
    Precompute a ring of dots for a ``dots`` layer.

    Larger rings get more dots; each dot sits at a jittered radial
    distance inside the ring.

    Args:
        rad: Ring radius.
        rng: Layout random generator.

    Returns:
        Dots positioned relative to the wheel centre.
    """
    count = int(remap(rad, 20, 220, 16, 32))
    dot_r = rad * 0.10
    dots = []
    for k in range(count):
        a = (2 * math.pi * k) / count
        rr = rad * rng.uniform(0.8, 0.95)
        dots.append(RingDot(math.cos(a) * rr, math.sin(a) * rr, dot_r))
    return tuple(dots)


def make_layer(style: str, ratio: float, color: HSBColor, base_radius: float,
               rng: np.random.Generator) -> Layer:
    if style == "solid":
        return SolidLayer(ratio, color)
    if style == "dots":
        return DotsLayer(ratio, color, make_ring_dots(base_radius * ratio * 0.9, rng))
    if style == "sunburst":
        return SunburstLayer(ratio, color)
    if style == "stripes":
        return StripesLayer(ratio, color)
    raise ValueError(f"Unknown layer style: {style!r}")


@dataclass(frozen=True)
class Wheel:
    """A decorated disc: concentric layers, an outer bead ring and a core."""

    center: Point
    base_radius: float
    core_color: HSBColor
    bead_color: HSBColor
    layers: tuple[Layer, ...]
    bead_ring: BeadRing

    # Layer geometry relative to base_radius
    LAYER_MIN_RATIO = 0.25
    LAYER_MAX_RATIO = 1.0
    LAYER_RADIUS_FACTOR = 0.9
    RING_RADIUS_FACTOR = 0.88
    RING_BEAD_FACTOR = 0.09
    RING_SPACING = 1.2
    CORE_DIAMETER_FACTOR = 0.18  # Diameter, not radius: the core spans 0.18 x base_radius

    @property
    def radius(self) -> float:
        return self.base_radius

    @property
    def x(self) -> float:
        return self.center.x

    @property
    def y(self) -> float:
        return self.center.y

    @classmethod
    def create(cls, x: float, y: float, base_radius: float,
               rng: np.random.Generator) -> "Wheel":
        """
        Build a wheel with a randomized layer recipe.

        Random draws happen in a fixed order (core colour, bead colour,
        layer count, then per layer: style, colour, dot jitter) so that a
        seeded generator reproduces the same wheel.
        """
        if not base_radius > 0:
            raise ValueError(f"base_radius must be positive, got {base_radius}")

        core_color = PaletteSystem.pick(rng)
        bead_color = PaletteSystem.pick(rng)

        n_layers = int(rng.integers(3, 5))
        layers = []
        for i in range(n_layers):
            ratio = remap(i, 0, n_layers - 1, cls.LAYER_MIN_RATIO, cls.LAYER_MAX_RATIO)
            style = choose(rng, LAYER_STYLES)
            color = PaletteSystem.pick(rng)
            layers.append(make_layer(style, ratio, color, base_radius, rng))

        ring_r = base_radius * cls.RING_RADIUS_FACTOR
        bead_size = base_radius * cls.RING_BEAD_FACTOR
        circumference = 2 * math.pi * ring_r
        count = max(10, int(circumference / (bead_size * cls.RING_SPACING)))

        return cls(
            center=Point(float(x), float(y)),
            base_radius=float(base_radius),
            core_color=core_color,
            bead_color=bead_color,
            layers=tuple(layers),
            bead_ring=BeadRing(ring_r, bead_size, count),
        )

    def contains(self, point: tuple[float, float], factor: float = 1.0) -> bool:
        """True if ``point`` lies strictly inside ``factor`` x the radius."""
        return math.hypot(point[0] - self.center.x, point[1] - self.center.y) < self.base_radius * factor
