"""
beadwheels: seed-driven wheel compositions that move with the music.

Wheels, bead arcs and background dots are laid out from a seed; the volume
of the playing track drives rotation and bead/dot scaling every frame.
"""

from beadwheels.audio.mapper import AnimationParameters, AudioParameterMapper
from beadwheels.config import WheelsConfig
from beadwheels.controller import AnimationController, PlayState
from beadwheels.core.state import CompositionState, CompositionStore

__version__ = "0.1.0"
__all__ = [
    "AnimationController",
    "AnimationParameters",
    "AudioParameterMapper",
    "CompositionState",
    "CompositionStore",
    "PlayState",
    "WheelsConfig",
]
