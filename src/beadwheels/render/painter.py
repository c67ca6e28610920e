"""
Paints a composition through a ``Renderer``.

Draw order per frame: background fill, background dots, bead arcs, wheels.
Each layer style has its own paint function; dispatch is by layer type.
"""

import math
from typing import Sequence

import numpy as np

from beadwheels.audio.mapper import AnimationParameters
from beadwheels.core.bead_arc import BeadArc
from beadwheels.core.geometry import polar, remap
from beadwheels.core.layout import BackgroundDot
from beadwheels.core.palette import DARK, HSBColor
from beadwheels.core.state import CompositionState
from beadwheels.core.wheel import (
    DotsLayer,
    SolidLayer,
    StripesLayer,
    SunburstLayer,
    Wheel,
)
from beadwheels.render.renderer import Renderer

RING_HALO = 1.4
ARC_HALO = 1.45


def paint_solid(renderer: Renderer, layer: SolidLayer, rad: float, rng: np.random.Generator):
    renderer.fill_flat(layer.color)
    renderer.draw_disc((0.0, 0.0), rad * 2)


def paint_dots(renderer: Renderer, layer: DotsLayer, rad: float, rng: np.random.Generator):
    # Precomputed dots ignore the bead scale
    renderer.fill_flat(layer.color)
    for d in layer.dots:
        renderer.draw_disc((d.x, d.y), d.r * 2)


def paint_sunburst(renderer: Renderer, layer: SunburstLayer, rad: float, rng: np.random.Generator):
    rays = int(remap(rad, 20, 220, 20, 40))
    for i in range(rays):
        a0 = (2 * math.pi * i) / rays
        a1 = (2 * math.pi * (i + 0.5)) / rays
        color = layer.color if i % 2 == 0 else DARK
        renderer.draw_wedge(
            [
                (0.0, 0.0),
                polar(rad, a0),
                polar(rad, a1),
            ],
            color,
        )


def paint_stripes(renderer: Renderer, layer: StripesLayer, rad: float, rng: np.random.Generator):
    bands = int(rng.integers(4, 6))
    thick = (rad * 0.9) / bands
    segs = int(remap(rad, 20, 220, 12, 24))
    for b in range(bands):
        rr = rad * 0.1 + b * thick
        for i in range(segs):
            a0 = (2 * math.pi * i) / segs
            a1 = (2 * math.pi * (i + 0.6)) / segs
            renderer.draw_arc_band((0.0, 0.0), rr * 2, a0, a1, layer.color.shifted(b * 8 + i * 3))


LAYER_PAINTERS = {
    SolidLayer: paint_solid,
    DotsLayer: paint_dots,
    SunburstLayer: paint_sunburst,
    StripesLayer: paint_stripes,
}


def paint_beads(
    renderer: Renderer,
    points,
    bead_size: float,
    color: HSBColor,
    bead_scale: float,
    halo: float,
):
    for x, y in points:
        renderer.fill_flat(DARK)
        renderer.draw_disc((x, y), bead_size * halo * bead_scale)
        renderer.fill_flat(color)
        renderer.draw_disc((x, y), bead_size * bead_scale)


def paint_wheel(
    renderer: Renderer,
    wheel: Wheel,
    rotation: float,
    bead_scale: float,
    rng: np.random.Generator,
):
    """Draw one wheel rotated about its centre."""
    r = wheel.base_radius
    renderer.push_transform()
    renderer.translate(wheel.center.x, wheel.center.y)
    renderer.rotate(rotation)

    ring = wheel.bead_ring
    ring_points = [polar(ring.radius, 2 * math.pi * i / ring.count) for i in range(ring.count)]
    paint_beads(renderer, ring_points, ring.bead_size, wheel.bead_color, bead_scale, RING_HALO)

    for layer in wheel.layers:
        rad = r * layer.ratio * Wheel.LAYER_RADIUS_FACTOR
        LAYER_PAINTERS[type(layer)](renderer, layer, rad, rng)

    renderer.fill_flat(wheel.core_color)
    renderer.draw_disc((0.0, 0.0), r * Wheel.CORE_DIAMETER_FACTOR)

    renderer.pop_transform()


def paint_bead_arc(renderer: Renderer, arc: BeadArc, bead_scale: float):
    paint_beads(renderer, arc.sample_points(), arc.bead_size, arc.color, bead_scale, ARC_HALO)


def paint_background_dots(renderer: Renderer, dots: Sequence[BackgroundDot], background_scale: float):
    for d in dots:
        renderer.fill_flat(d.color)
        renderer.draw_disc(d.position, d.radius * 2 * background_scale)


class CompositionPainter:
    """
    Draws a full frame of a composition.

    Args:
        background_color: Canvas fill colour.
        seed: Seed for render-time randomness (stripe band counts). This
            generator is separate from the layout generator.
    """

    def __init__(
        self,
        background_color: HSBColor = HSBColor(200.0, 40.0, 20.0),
        seed: int | None = None,
    ):
        self.background_color = background_color
        self.rng = np.random.default_rng(seed)

    def paint(
        self,
        renderer: Renderer,
        state: CompositionState,
        params: AnimationParameters,
    ):
        renderer.background(self.background_color)
        paint_background_dots(renderer, state.background_dots, params.background_scale_factor)
        for arc in state.bead_arcs:
            paint_bead_arc(renderer, arc, params.bead_scale_factor)
        for wheel in state.wheels:
            paint_wheel(renderer, wheel, params.rotation_angle, params.bead_scale_factor, self.rng)
