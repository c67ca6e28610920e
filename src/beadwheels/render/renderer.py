"""
Drawing backend.

The composition painter only talks to the ``Renderer`` interface; the
pygame implementation keeps a stack of 2D affine transforms and turns
arcs into filled polygons.
"""

import abc
import math
from typing import Sequence

import numpy as np
import pygame

from beadwheels.core.palette import HSBColor

Color = HSBColor | tuple[int, int, int]


def to_rgb(color: Color) -> tuple[int, int, int]:
    if isinstance(color, HSBColor):
        return color.to_rgb()
    return (int(color[0]), int(color[1]), int(color[2]))


class Renderer(abc.ABC):
    """Minimal immediate-mode drawing interface."""

    @abc.abstractmethod
    def background(self, color: Color):
        pass

    @abc.abstractmethod
    def fill_flat(self, color: Color):
        """Set the fill colour for subsequent discs."""
        pass

    @abc.abstractmethod
    def draw_disc(self, center: tuple[float, float], diameter: float):
        pass

    @abc.abstractmethod
    def draw_wedge(self, vertices: Sequence[tuple[float, float]], color: Color):
        pass

    @abc.abstractmethod
    def draw_arc_band(
        self,
        center: tuple[float, float],
        outer_diameter: float,
        start_angle: float,
        end_angle: float,
        color: Color,
    ):
        """Filled pie slice between two angles."""
        pass

    @abc.abstractmethod
    def push_transform(self):
        pass

    @abc.abstractmethod
    def translate(self, dx: float, dy: float):
        pass

    @abc.abstractmethod
    def rotate(self, angle: float):
        pass

    @abc.abstractmethod
    def pop_transform(self):
        pass


class PygameRenderer(Renderer):
    """
    Renderer drawing onto a ``pygame.Surface``.

    Args:
        surface: Target surface.
        arc_resolution: Polygon vertices per full turn for pie slices.
    """

    def __init__(self, surface: pygame.Surface, arc_resolution: int = 96):
        self.surface = surface
        self.arc_resolution = arc_resolution
        self._matrix = np.identity(3)
        self._stack: list[np.ndarray] = []
        self._fill = (255, 255, 255)

    def _apply(self, x: float, y: float) -> tuple[float, float]:
        m = self._matrix
        return (
            m[0, 0] * x + m[0, 1] * y + m[0, 2],
            m[1, 0] * x + m[1, 1] * y + m[1, 2],
        )

    def background(self, color: Color):
        self.surface.fill(to_rgb(color))

    def fill_flat(self, color: Color):
        self._fill = to_rgb(color)

    def draw_disc(self, center: tuple[float, float], diameter: float):
        radius = diameter / 2
        if radius <= 0:
            return
        pygame.draw.circle(self.surface, self._fill, self._apply(*center), radius)

    def draw_wedge(self, vertices: Sequence[tuple[float, float]], color: Color):
        points = [self._apply(x, y) for x, y in vertices]
        if len(points) >= 3:
            pygame.draw.polygon(self.surface, to_rgb(color), points)

    def draw_arc_band(
        self,
        center: tuple[float, float],
        outer_diameter: float,
        start_angle: float,
        end_angle: float,
        color: Color,
    ):
        radius = outer_diameter / 2
        if radius <= 0:
            return
        span = end_angle - start_angle
        steps = max(2, int(abs(span) / (2 * math.pi) * self.arc_resolution) + 1)
        cx, cy = center
        vertices = [(cx, cy)]
        for k in range(steps + 1):
            a = start_angle + span * k / steps
            vertices.append((cx + math.cos(a) * radius, cy + math.sin(a) * radius))
        self.draw_wedge(vertices, color)

    def push_transform(self):
        self._stack.append(self._matrix.copy())

    def translate(self, dx: float, dy: float):
        t = np.array([[1.0, 0.0, dx], [0.0, 1.0, dy], [0.0, 0.0, 1.0]])
        self._matrix = self._matrix @ t

    def rotate(self, angle: float):
        c, s = math.cos(angle), math.sin(angle)
        r = np.array([[c, -s, 0.0], [s, c, 0.0], [0.0, 0.0, 1.0]])
        self._matrix = self._matrix @ r

    def pop_transform(self):
        if not self._stack:
            raise IndexError("pop_transform() without matching push_transform()")
        self._matrix = self._stack.pop()

    def surface_to_array(self) -> np.ndarray:
        """Convert the surface to an (H, W, 3) uint8 array."""
        # pygame uses (width, height) but numpy expects (height, width)
        arr = pygame.surfarray.array3d(self.surface)
        return np.transpose(arr, (1, 0, 2))
