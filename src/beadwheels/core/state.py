"""
Composition state and regeneration.

A composition is rebuilt wholesale from a seed and the canvas size, then
swapped in; readers never see a half-built collection.
"""

import logging
import os
import time
from dataclasses import dataclass

import numpy as np

from beadwheels.core.bead_arc import BeadArc
from beadwheels.core.layout import BackgroundDot, LayoutEngine
from beadwheels.core.wheel import Wheel

logger = logging.getLogger(__name__)


def new_seed() -> int:
    """Derive a fresh 32-bit seed from the clock and OS entropy."""
    mixed = (
        time.time_ns()
        ^ time.perf_counter_ns()
        ^ int.from_bytes(os.urandom(4), "little")
    )
    return mixed & 0xFFFFFFFF


@dataclass(frozen=True)
class CompositionState:
    """One generated layout: wheels, bead arcs and background dots."""

    seed: int
    width: int
    height: int
    wheels: tuple[Wheel, ...] = ()
    bead_arcs: tuple[BeadArc, ...] = ()
    background_dots: tuple[BackgroundDot, ...] = ()

    @classmethod
    def generate(
        cls,
        seed: int,
        width: int,
        height: int,
        neighbors_per_wheel: int = 2,
    ) -> "CompositionState":
        """
        Build a composition from scratch.

        Args:
            seed: Random seed; with the canvas size it fully determines
                the layout.
            width: Canvas width in pixels.
            height: Canvas height in pixels.
            neighbors_per_wheel: Maximum arcs started from each wheel.

        Returns:
            A new, immutable CompositionState.
        """
        rng = np.random.default_rng(seed)
        engine = LayoutEngine(rng, neighbors_per_wheel=neighbors_per_wheel)
        wheels, arcs, dots = engine.generate(width, height)
        return cls(
            seed=seed,
            width=width,
            height=height,
            wheels=tuple(wheels),
            bead_arcs=tuple(arcs),
            background_dots=tuple(dots),
        )


class CompositionStore:
    """Holds the current composition and replaces it on regeneration."""

    def __init__(
        self,
        width: int,
        height: int,
        seed: int | None = None,
        neighbors_per_wheel: int = 2,
    ):
        self.neighbors_per_wheel = neighbors_per_wheel
        self.current = self._build(new_seed() if seed is None else seed, width, height)

    def _build(self, seed: int, width: int, height: int) -> CompositionState:
        state = CompositionState.generate(
            seed, width, height, neighbors_per_wheel=self.neighbors_per_wheel
        )
        logger.info(
            "Composition seed=%d size=%dx%d: %d wheels, %d arcs, %d dots",
            seed, width, height,
            len(state.wheels), len(state.bead_arcs), len(state.background_dots),
        )
        return state

    @property
    def seed(self) -> int:
        return self.current.seed

    def regenerate(
        self,
        keep_seed: bool = False,
        width: int | None = None,
        height: int | None = None,
    ) -> CompositionState:
        """Build a new composition (same or fresh seed) and swap it in."""
        seed = self.current.seed if keep_seed else new_seed()
        width = self.current.width if width is None else width
        height = self.current.height if height is None else height
        self.current = self._build(seed, width, height)
        return self.current

    def resize(self, width: int, height: int) -> CompositionState:
        """Re-layout at a new canvas size, keeping the seed."""
        return self.regenerate(keep_seed=True, width=width, height=height)
