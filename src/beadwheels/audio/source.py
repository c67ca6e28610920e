"""
Audio sources: playback control plus a per-frame volume reading.
"""

import abc
import logging
from pathlib import Path
from typing import Union

import pygame

from beadwheels.audio.analyzer import VolumeEnvelope, analyze_volume

logger = logging.getLogger(__name__)


class AudioSource(abc.ABC):
    """Playback engine with a non-blocking volume sampler."""

    @abc.abstractmethod
    def is_playing(self) -> bool:
        pass

    @abc.abstractmethod
    def current_volume_level(self) -> float:
        """Latest volume reading. May be non-finite; callers must coerce."""
        pass

    @abc.abstractmethod
    def start(self, loop: bool = True):
        pass

    @abc.abstractmethod
    def stop(self):
        pass


class EnvelopeAudioSource(AudioSource):
    """
    Frame-stepped source over a precomputed envelope.

    Used for offline rendering, where each video frame advances playback by
    exactly one envelope frame.
    """

    def __init__(self, envelope: VolumeEnvelope):
        self.envelope = envelope
        self.frame = 0
        self.loop = False
        self._playing = False

    def is_playing(self) -> bool:
        return self._playing

    def current_volume_level(self) -> float:
        if not self._playing:
            return 0.0
        return self.envelope.level_at_frame(self.frame, loop=self.loop)

    def start(self, loop: bool = True):
        self.frame = 0
        self.loop = loop
        self._playing = True

    def stop(self):
        self._playing = False

    def advance(self, n: int = 1):
        """Move playback forward by ``n`` frames; stops at the end unless looping."""
        if not self._playing:
            return
        self.frame += n
        if not self.loop and self.frame >= self.envelope.n_frames:
            self._playing = False


class MixerAudioSource(AudioSource):
    """
    Plays a track through ``pygame.mixer`` and samples its RMS envelope at
    the current playback position.
    """

    def __init__(
        self,
        audio_path: Union[str, Path],
        fps: int = 60,
        envelope: VolumeEnvelope | None = None,
    ):
        self.audio_path = Path(audio_path)
        self.envelope = envelope or analyze_volume(self.audio_path, fps=fps)
        self._loaded = False
        self._playing = False

    def _ensure_loaded(self):
        if self._loaded:
            return
        if not pygame.mixer.get_init():
            pygame.mixer.init()
        pygame.mixer.music.load(str(self.audio_path))
        self._loaded = True

    def is_playing(self) -> bool:
        return self._playing and pygame.mixer.music.get_busy()

    def current_volume_level(self) -> float:
        if not self.is_playing():
            return 0.0
        pos_ms = pygame.mixer.music.get_pos()
        if pos_ms < 0:
            return 0.0
        return self.envelope.level_at(pos_ms / 1000.0, loop=True)

    def start(self, loop: bool = True):
        try:
            self._ensure_loaded()
            pygame.mixer.music.play(loops=-1 if loop else 0)
        except pygame.error as e:
            logger.warning("Could not start playback of %s: %s", self.audio_path, e)
            self._playing = False
            return
        self._playing = True
        logger.info("Playing %s (loop=%s)", self.audio_path.name, loop)

    def stop(self):
        if self._loaded:
            pygame.mixer.music.stop()
        self._playing = False
