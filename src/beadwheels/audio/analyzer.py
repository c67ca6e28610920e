"""
Volume envelope extraction.

Computes a frame-aligned RMS loudness curve with librosa so that the
playing track can be sampled as a single scalar per rendered frame.
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Union

import librosa
import numpy as np

logger = logging.getLogger(__name__)


class AudioLoadError(RuntimeError):
    """An audio file exists but could not be decoded."""


@dataclass
class VolumeEnvelope:
    """RMS loudness per video frame."""

    levels: np.ndarray  # Shape: (n_frames,)
    fps: int
    duration: float

    @property
    def n_frames(self) -> int:
        return len(self.levels)

    def level_at_frame(self, index: int, loop: bool = True) -> float:
        """RMS level for a frame index; wraps when looping, else 0 past the end."""
        if self.n_frames == 0:
            return 0.0
        if loop:
            index %= self.n_frames
        elif index < 0 or index >= self.n_frames:
            return 0.0
        return float(self.levels[index])

    def level_at(self, seconds: float, loop: bool = True) -> float:
        """RMS level at a playback position in seconds."""
        return self.level_at_frame(int(seconds * self.fps), loop=loop)


def compute_hop_length(sr: int, fps: int) -> int:
    """Hop length in samples giving one analysis frame per video frame."""
    return max(1, int(sr / fps))


def envelope_from_signal(y: np.ndarray, sr: int, fps: int = 60) -> VolumeEnvelope:
    """
    Compute a volume envelope for an in-memory mono signal.

    Args:
        y: Audio samples.
        sr: Sample rate.
        fps: Target frames per second.

    Returns:
        VolumeEnvelope with one RMS value per frame.
    """
    y = np.asarray(y, dtype=np.float32)
    duration = len(y) / sr if sr else 0.0
    if len(y) == 0:
        return VolumeEnvelope(np.zeros(0, dtype=np.float32), fps, 0.0)

    hop_length = compute_hop_length(sr, fps)
    frame_length = max(2048, hop_length * 2)
    rms = librosa.feature.rms(
        y=y,
        frame_length=frame_length,
        hop_length=hop_length,
        center=True,
    )[0]

    # Keep exactly one value per video frame of the track
    n_frames = max(1, int(np.ceil(duration * fps)))
    if len(rms) < n_frames:
        rms = np.pad(rms, (0, n_frames - len(rms)))
    levels = np.nan_to_num(rms[:n_frames].astype(np.float32))

    return VolumeEnvelope(levels=levels, fps=fps, duration=duration)


def analyze_volume(
    audio_path: Union[str, Path],
    fps: int = 60,
    sample_rate: int = 22050,
) -> VolumeEnvelope:
    """
    Load an audio file and compute its per-frame RMS envelope.

    Args:
        audio_path: Path to audio file (wav, mp3, flac, ...).
        fps: Target frames per second.
        sample_rate: Resampling rate for analysis.

    Returns:
        VolumeEnvelope aligned to ``fps``.

    Raises:
        AudioLoadError: If the file cannot be decoded.
    """
    try:
        y, sr = librosa.load(str(audio_path), sr=sample_rate, mono=True)
    except Exception as e:
        raise AudioLoadError(f"Could not load audio {audio_path}: {e}") from e
    envelope = envelope_from_signal(y, sr, fps=fps)
    logger.info(
        "Analyzed %s: %.2fs, %d frames, peak RMS %.3f",
        audio_path, envelope.duration, envelope.n_frames,
        float(envelope.levels.max()) if envelope.n_frames else 0.0,
    )
    return envelope
