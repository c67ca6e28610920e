"""
Runtime configuration for the wheels composition.
"""

from dataclasses import dataclass
from pathlib import Path

from beadwheels.audio.mapper import AudioParameterMapper
from beadwheels.core.palette import HSBColor


@dataclass
class WheelsConfig:
    """Configuration shared by the interactive host and the video renderer."""

    width: int = 1280
    height: int = 800
    fps: int = 60
    seed: int | None = None  # None draws a fresh seed
    neighbors_per_wheel: int = 2  # Max bead arcs started from each wheel
    background_color: HSBColor = HSBColor(200.0, 40.0, 20.0)

    # Volume → parameter mapping
    level_ceiling: float = 0.25  # RMS level treated as full scale
    base_rotation: float = 0.01  # Radians per frame at silence
    rotation_gain: float = 0.25
    bead_gain: float = 1.6
    background_gain: float = 1.2

    # I/O
    audio_path: Path | None = None
    export_dir: Path = Path(".")
    sample_rate: int = 22050  # Analysis sample rate

    def mapper(self) -> AudioParameterMapper:
        return AudioParameterMapper(
            level_ceiling=self.level_ceiling,
            base_rotation=self.base_rotation,
            rotation_gain=self.rotation_gain,
            bead_gain=self.bead_gain,
            background_gain=self.background_gain,
        )
