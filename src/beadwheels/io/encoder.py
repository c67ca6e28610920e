"""
MP4 encoding for offline renders.

Painted canvases are streamed to ffmpeg as rgb24 over stdin and muxed with
the track that drove them.
"""

import logging
import subprocess
from pathlib import Path
from typing import Callable, Iterator

import numpy as np

logger = logging.getLogger(__name__)

# Quality presets: (preset, crf, pix_fmt)
QUALITY_PRESETS = {
    "high": ("slow", "18", "yuv444p"),
    "medium": ("medium", "23", "yuv420p"),
    "fast": ("ultrafast", "28", "yuv420p"),
}


def build_ffmpeg_command(
    audio_path: Path,
    output_path: Path,
    width: int,
    height: int,
    fps: int,
    quality: str = "high",
    duration: float | None = None,
) -> list[str]:
    """Assemble the ffmpeg argument list for a raw RGB pipe plus audio."""
    preset, crf, pix_fmt = QUALITY_PRESETS.get(quality, QUALITY_PRESETS["high"])

    cmd = [
        "ffmpeg", "-y",
        "-f", "rawvideo",
        "-pix_fmt", "rgb24",
        "-s", f"{width}x{height}",
        "-r", str(fps),
        "-i", "pipe:0",
        "-i", str(audio_path),
        "-c:v", "libx264",
        "-preset", preset,
        "-crf", crf,
        "-pix_fmt", pix_fmt,
        "-c:a", "aac",
        "-b:a", "192k",
        "-shortest",
        str(output_path),
    ]

    if duration is not None:
        cmd[-1:-1] = ["-t", str(duration)]

    return cmd


def summarize_ffmpeg_errors(stderr: str, max_lines: int = 5) -> str:
    """Keep the last few error-looking lines of ffmpeg output, or its tail."""
    lines = [
        line for line in stderr.splitlines()
        if "error" in line.lower() or "invalid" in line.lower()
    ]
    if lines:
        return "\n".join(lines[-max_lines:])
    return stderr[-500:]


def encode_video(
    frame_iterator: Iterator[np.ndarray],
    audio_path: Path,
    output_path: Path,
    width: int = 1280,
    height: int = 800,
    fps: int = 60,
    quality: str = "high",
    duration: float | None = None,
    total_frames: int | None = None,
    progress_callback: Callable[[int, int], None] | None = None,
) -> Path:
    """
    Encode frames to MP4 with audio.

    Args:
        frame_iterator: Yields (H, W, 3) uint8 numpy arrays.
        audio_path: Path to audio file to mux in.
        output_path: Output MP4 path.
        width: Frame width.
        height: Frame height.
        fps: Frames per second.
        quality: "high", "medium", or "fast".
        duration: Optional output duration limit in seconds.
        total_frames: Total frame count for progress reporting.
        progress_callback: Optional callback(current_frame, total_frames).

    Returns:
        Path to the output file.
    """
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    cmd = build_ffmpeg_command(
        audio_path, output_path, width, height, fps, quality, duration
    )

    proc = subprocess.Popen(
        cmd,
        stdin=subprocess.PIPE,
        stdout=subprocess.PIPE,
        stderr=subprocess.PIPE,
    )

    frame_count = 0
    expected_shape = (height, width, 3)
    try:
        for frame in frame_iterator:
            if frame.shape != expected_shape:
                proc.kill()
                proc.wait()
                raise ValueError(
                    f"Frame {frame_count} has shape {frame.shape}, expected {expected_shape}"
                )
            proc.stdin.write(np.ascontiguousarray(frame, dtype=np.uint8).tobytes())
            frame_count += 1

            if progress_callback and total_frames:
                progress_callback(frame_count, total_frames)

    except BrokenPipeError:
        logger.debug("ffmpeg closed its input after %d frames", frame_count)
    finally:
        if proc.stdin:
            try:
                proc.stdin.close()
            except BrokenPipeError:
                pass

    proc.wait()

    if proc.returncode != 0:
        stderr = proc.stderr.read().decode("utf-8", errors="replace")
        raise RuntimeError(
            f"ffmpeg exited with code {proc.returncode}: {summarize_ffmpeg_errors(stderr)}"
        )

    logger.info("Encoded %d frames to %s", frame_count, output_path)

    return output_path
