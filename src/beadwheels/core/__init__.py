"""Layout core: palette, geometry, wheels, bead arcs and layout."""

from beadwheels.core.bead_arc import BeadArc
from beadwheels.core.layout import BackgroundDot, LayoutEngine
from beadwheels.core.palette import HSBColor, PaletteSystem
from beadwheels.core.wheel import Wheel

__all__ = ["BackgroundDot", "BeadArc", "HSBColor", "LayoutEngine", "PaletteSystem", "Wheel"]
