"""
Colour system for the wheel composition.

Colours are kept in HSB space (hue in degrees, saturation and brightness
in percent) so that jitter and per-segment hue shifts stay simple, and are
converted to RGB only at draw time.
"""

import colorsys
from typing import NamedTuple

import numpy as np


class HSBColor(NamedTuple):
    """Hue [0, 360), saturation [0, 100], brightness [0, 100]."""

    h: float
    s: float
    b: float

    def to_rgb(self) -> tuple[int, int, int]:
        """Convert to an 8-bit RGB tuple."""
        r, g, b = colorsys.hsv_to_rgb(
            (self.h % 360.0) / 360.0,
            min(max(self.s, 0.0), 100.0) / 100.0,
            min(max(self.b, 0.0), 100.0) / 100.0,
        )
        return (int(round(r * 255)), int(round(g * 255)), int(round(b * 255)))

    def shifted(self, dh: float) -> "HSBColor":
        """Return the same colour with its hue rotated by ``dh`` degrees."""
        return HSBColor((self.h + dh) % 360.0, self.s, self.b)


# Halo and sunburst background colour
DARK = HSBColor(0.0, 0.0, 15.0)

BASE_PALETTE: tuple[HSBColor, ...] = (
    HSBColor(340.0, 90.0, 100.0),  # magenta
    HSBColor(25.0, 95.0, 100.0),   # orange
    HSBColor(55.0, 90.0, 100.0),   # yellow
    HSBColor(200.0, 60.0, 90.0),   # cyan-blue
    HSBColor(120.0, 70.0, 90.0),   # green
    HSBColor(0.0, 0.0, 100.0),     # white
    DARK,                          # near-black
)

BACKGROUND_PALETTE: tuple[HSBColor, ...] = (
    HSBColor(0.0, 0.0, 100.0),
    DARK,
    HSBColor(25.0, 95.0, 100.0),
    HSBColor(340.0, 90.0, 100.0),
)


def choose(rng: np.random.Generator, options: tuple):
    """Uniformly pick one element of a sequence."""
    return options[int(rng.integers(len(options)))]


class PaletteSystem:
    """
    Samples related but non-repeating colours from the base palette.

    Each pick chooses a base colour and jitters it independently in
    hue (wrapped), saturation and brightness (clamped).
    """

    HUE_JITTER = 8.0
    SAT_JITTER = 6.0
    BRI_JITTER = 6.0

    @classmethod
    def pick(cls, rng: np.random.Generator) -> HSBColor:
        base = choose(rng, BASE_PALETTE)
        h = (base.h + rng.uniform(-cls.HUE_JITTER, cls.HUE_JITTER) + 360.0) % 360.0
        s = min(max(base.s + rng.uniform(-cls.SAT_JITTER, cls.SAT_JITTER), 50.0), 100.0)
        b = min(max(base.b + rng.uniform(-cls.BRI_JITTER, cls.BRI_JITTER), 40.0), 100.0)
        return HSBColor(float(h), float(s), float(b))
