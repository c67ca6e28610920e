"""
Offline video rendering.

Analyzes the track's volume envelope, then plays the composition through
the same controller and painter as the interactive host, one tick per
video frame, and pipes the frames to ffmpeg.
"""

import logging
import sys
from pathlib import Path
from typing import Callable, Iterator

import numpy as np
import pygame

from beadwheels.audio.analyzer import VolumeEnvelope, analyze_volume
from beadwheels.audio.source import EnvelopeAudioSource
from beadwheels.config import WheelsConfig
from beadwheels.controller import AnimationController
from beadwheels.core.state import CompositionState, new_seed
from beadwheels.io.encoder import encode_video
from beadwheels.render.painter import CompositionPainter
from beadwheels.render.renderer import PygameRenderer

logger = logging.getLogger(__name__)


def iter_frames(
    state: CompositionState,
    envelope: VolumeEnvelope,
    config: WheelsConfig,
    n_frames: int | None = None,
    progress_callback: Callable[[int, int], None] | None = None,
) -> Iterator[np.ndarray]:
    """
    Yield rendered (H, W, 3) uint8 frames driven by ``envelope``.

    Args:
        state: Composition to animate.
        envelope: Per-frame volume levels.
        config: Mapping gains and background colour.
        n_frames: Number of frames (defaults to the envelope length).
        progress_callback: Optional callback(current, total).
    """
    total = envelope.n_frames if n_frames is None else min(n_frames, envelope.n_frames)

    surface = pygame.Surface((state.width, state.height))
    renderer = PygameRenderer(surface)
    painter = CompositionPainter(background_color=config.background_color, seed=state.seed)
    source = EnvelopeAudioSource(envelope)
    controller = AnimationController(source, mapper=config.mapper())
    controller.toggle()

    for i in range(total):
        params = controller.tick()
        painter.paint(renderer, state, params)
        yield renderer.surface_to_array()
        source.advance()

        if progress_callback:
            progress_callback(i + 1, total)


def _progress_bar(current: int, total: int, width: int = 35):
    """Print a progress bar to stdout."""
    pct = current / max(total, 1) * 100
    filled = int(width * current / max(total, 1))
    bar = "#" * filled + "-" * (width - filled)
    if sys.stdout.isatty():
        sys.stdout.write(f"\r[{bar}] {pct:5.1f}%  frame {current}/{total}")
        sys.stdout.flush()
        if current >= total:
            sys.stdout.write("\n")
    else:
        if current % max(1, total // 20) == 0 or current >= total:
            print(f"{pct:5.1f}%  frame {current}/{total}", flush=True)


def render_video(
    audio_path: Path,
    output_path: Path,
    config: WheelsConfig | None = None,
    quality: str = "high",
    max_duration: float | None = None,
    progress_callback: Callable[[int, int], None] | None = _progress_bar,
) -> Path:
    """
    Render an MP4 of the composition reacting to ``audio_path``.

    Args:
        audio_path: Input audio file.
        output_path: Output MP4 path.
        config: Canvas size, fps, seed and mapping gains.
        quality: Encoding quality ("high", "medium" or "fast").
        max_duration: Limit output to N seconds.
        progress_callback: Optional callback(current, total).

    Returns:
        Path to the written video.
    """
    cfg = config or WheelsConfig()
    seed = new_seed() if cfg.seed is None else cfg.seed

    print(f"Analyzing audio: {audio_path}")
    envelope = analyze_volume(audio_path, fps=cfg.fps, sample_rate=cfg.sample_rate)
    print(f"  Duration: {envelope.duration:.1f}s")
    print(f"  Frames: {envelope.n_frames}")

    total_frames = envelope.n_frames
    duration = envelope.duration
    if max_duration is not None:
        total_frames = min(total_frames, int(max_duration * cfg.fps))
        duration = min(duration, max_duration)
        print(f"  Limiting to {max_duration}s ({total_frames} frames)")

    state = CompositionState.generate(
        seed, cfg.width, cfg.height, neighbors_per_wheel=cfg.neighbors_per_wheel
    )
    print(f"\nRendering {total_frames} frames at {cfg.width}x{cfg.height} @ {cfg.fps}fps (seed {seed})")

    frames = iter_frames(state, envelope, cfg, n_frames=total_frames,
                         progress_callback=progress_callback)

    return encode_video(
        frame_iterator=frames,
        audio_path=audio_path,
        output_path=output_path,
        width=cfg.width,
        height=cfg.height,
        fps=cfg.fps,
        quality=quality,
        duration=duration,
        total_frames=total_frames,
    )
