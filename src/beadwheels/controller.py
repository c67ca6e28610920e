"""
Play/pause state machine driving the frame loop.

IDLE: no playback, parameters at rest, frames drawn only on request.
PLAYING: looping playback, parameters updated from the volume every tick.
"""

import enum
import logging

from beadwheels.audio.mapper import AnimationParameters, AudioParameterMapper
from beadwheels.audio.source import AudioSource

logger = logging.getLogger(__name__)


class PlayState(enum.Enum):
    IDLE = "idle"
    PLAYING = "playing"


class AnimationController:
    """
    Owns the animation parameters and decides when frames are drawn.

    The host calls ``tick()`` once per frame while ``looping`` is set and
    draws a single frame whenever ``consume_redraw()`` returns True.
    """

    def __init__(
        self,
        audio: AudioSource | None,
        mapper: AudioParameterMapper | None = None,
        params: AnimationParameters | None = None,
    ):
        self.audio = audio
        self.mapper = mapper or AudioParameterMapper()
        self.params = params or AnimationParameters()
        self.state = PlayState.IDLE
        self.looping = False
        self._redraw = True

    @property
    def is_playing(self) -> bool:
        return self.state is PlayState.PLAYING

    def toggle(self) -> PlayState:
        """Flip between IDLE and PLAYING."""
        if self.audio is None:
            return self.state

        if self.is_playing:
            self.audio.stop()
            self.params.reset()
            self.state = PlayState.IDLE
            self.looping = False
            self.request_redraw()
        else:
            self.audio.start(loop=True)
            if not self.audio.is_playing():
                logger.warning("Playback did not start; staying idle")
                return self.state
            self.state = PlayState.PLAYING
            self.looping = True

        logger.info("Animation %s", self.state.value)
        return self.state

    def tick(self) -> AnimationParameters:
        """Advance one frame; only PLAYING with live audio changes parameters."""
        if self.is_playing and self.audio is not None and self.audio.is_playing():
            self.mapper.update(self.params, self.audio.current_volume_level())
        return self.params

    @property
    def redraw_pending(self) -> bool:
        return self._redraw

    def request_redraw(self):
        self._redraw = True

    def consume_redraw(self) -> bool:
        """True once per pending redraw request."""
        pending = self._redraw
        self._redraw = False
        return pending
