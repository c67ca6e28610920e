"""
Volume-to-visual parameter mapping.

A single scalar volume reading per frame drives three visual parameters:
- Level → rotation increment (accumulated, never wrapped)
- Level → bead scale (wheel bead rings and bead arcs)
- Level → background dot scale

The mapping is memoryless: no smoothing is applied between frames.
"""

import math
from dataclasses import dataclass

from beadwheels.core.geometry import constrain, remap


@dataclass
class AnimationParameters:
    """Per-frame animation values shared by the controller and painter."""

    rotation_angle: float = 0.0
    bead_scale_factor: float = 1.0
    background_scale_factor: float = 1.0
    raw_level: float = 0.0
    normalized_level: float = 0.0

    def reset(self):
        """Return to the rest state (no rotation, unit scales)."""
        self.rotation_angle = 0.0
        self.bead_scale_factor = 1.0
        self.background_scale_factor = 1.0
        self.raw_level = 0.0
        self.normalized_level = 0.0

    def is_at_rest(self) -> bool:
        return (
            self.rotation_angle == 0.0
            and self.bead_scale_factor == 1.0
            and self.background_scale_factor == 1.0
        )


def coerce_sample(sample) -> float:
    """Treat missing, non-numeric or non-finite samples as silence."""
    try:
        value = float(sample)
    except (TypeError, ValueError):
        return 0.0
    if not math.isfinite(value):
        return 0.0
    return value


class AudioParameterMapper:
    """
    Maps a raw volume sample onto animation parameters.

    Args:
        level_ceiling: Volume that maps to a normalized level of 1.0.
        base_rotation: Rotation increment per frame at silence.
        rotation_gain: Extra rotation per frame at full level.
        bead_gain: Extra bead scale at full level.
        background_gain: Extra background dot scale at full level.
    """

    def __init__(
        self,
        level_ceiling: float = 0.25,
        base_rotation: float = 0.01,
        rotation_gain: float = 0.25,
        bead_gain: float = 1.6,
        background_gain: float = 1.2,
    ):
        self.level_ceiling = level_ceiling
        self.base_rotation = base_rotation
        self.rotation_gain = rotation_gain
        self.bead_gain = bead_gain
        self.background_gain = background_gain

    def normalize_level(self, sample) -> float:
        """Rescale a sample from [0, level_ceiling] to [0, 1], clamped."""
        level = coerce_sample(sample)
        return constrain(remap(level, 0.0, self.level_ceiling, 0.0, 1.0), 0.0, 1.0)

    def rotation_increment(self, normalized_level: float) -> float:
        return self.base_rotation + normalized_level * self.rotation_gain

    def update(self, params: AnimationParameters, sample) -> AnimationParameters:
        """
        Apply one volume sample to ``params`` in place.

        Args:
            params: Parameters to update.
            sample: Raw volume reading (possibly NaN or None).

        Returns:
            The same ``params`` object, for chaining.
        """
        level = coerce_sample(sample)
        norm = self.normalize_level(level)

        params.raw_level = level
        params.normalized_level = norm
        params.rotation_angle += self.rotation_increment(norm)
        params.bead_scale_factor = 1.0 + norm * self.bead_gain
        params.background_scale_factor = 1.0 + norm * self.background_gain
        return params
