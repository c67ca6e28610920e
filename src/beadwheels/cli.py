"""
CLI entry points.

Usage:
    beadwheels [audio_file] [options]
    beadwheels-render <audio_file> [options]
"""

import argparse
import sys
import time
from pathlib import Path

from beadwheels.audio.analyzer import AudioLoadError
from beadwheels.config import WheelsConfig
from beadwheels.log import configure_logging


def _add_canvas_args(parser: argparse.ArgumentParser):
    parser.add_argument("--width", type=int, default=1280, help="Canvas width (default: 1280)")
    parser.add_argument("--height", type=int, default=800, help="Canvas height (default: 800)")
    parser.add_argument("-f", "--fps", type=int, default=60, help="Frames per second (default: 60)")
    parser.add_argument("--seed", type=int, default=None, help="Layout seed (default: random)")
    parser.add_argument(
        "-n", "--neighbors", type=int, default=2,
        help="Max bead arcs started from each wheel (default: 2)",
    )
    parser.add_argument(
        "--log-level", type=str, default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Log level (default: INFO)",
    )


def _check_audio(path: Path | None):
    if path is not None and not path.exists():
        print(f"Error: Audio file not found: {path}", file=sys.stderr)
        sys.exit(1)


def _load_failed(error: AudioLoadError):
    print(f"Error: {error}", file=sys.stderr)
    sys.exit(1)


def _config_from_args(args: argparse.Namespace) -> WheelsConfig:
    return WheelsConfig(
        width=args.width,
        height=args.height,
        fps=args.fps,
        seed=args.seed,
        neighbors_per_wheel=args.neighbors,
        audio_path=args.audio,
    )


def main(argv: list[str] | None = None):
    """Interactive window."""
    parser = argparse.ArgumentParser(
        prog="beadwheels",
        description="Audio-reactive generative wheels composition",
    )
    parser.add_argument(
        "audio", type=Path, nargs="?", default=None,
        help="Audio track to play (wav, mp3, ogg)",
    )
    _add_canvas_args(parser)
    parser.add_argument(
        "--export-dir", type=Path, default=Path("."),
        help="Directory for saved PNG frames (default: current directory)",
    )
    args = parser.parse_args(argv)

    configure_logging(args.log_level)
    _check_audio(args.audio)

    config = _config_from_args(args)
    config.export_dir = args.export_dir

    from beadwheels.app import WheelsApp

    try:
        app = WheelsApp(config)
    except AudioLoadError as e:
        _load_failed(e)
    app.run()


def render_main(argv: list[str] | None = None):
    """Offline MP4 render."""
    parser = argparse.ArgumentParser(
        prog="beadwheels-render",
        description="Render the wheels composition reacting to an audio file as MP4",
    )
    parser.add_argument("audio", type=Path, help="Input audio file (wav, mp3, flac)")
    parser.add_argument(
        "-o", "--output", type=Path, default=None,
        help="Output MP4 path (default: <audio>_wheels.mp4)",
    )
    _add_canvas_args(parser)
    parser.add_argument(
        "-q", "--quality", type=str, default="high",
        choices=["high", "medium", "fast"],
        help="Encoding quality (default: high)",
    )
    parser.add_argument(
        "--max-duration", type=float, default=None,
        help="Limit output to N seconds",
    )
    args = parser.parse_args(argv)

    configure_logging(args.log_level)
    _check_audio(args.audio)

    output = args.output
    if output is None:
        output = args.audio.with_name(f"{args.audio.stem}_wheels.mp4")

    from beadwheels.render_video import render_video

    t0 = time.time()
    try:
        render_video(
            audio_path=args.audio,
            output_path=output,
            config=_config_from_args(args),
            quality=args.quality,
            max_duration=args.max_duration,
        )
    except AudioLoadError as e:
        _load_failed(e)

    file_size_mb = output.stat().st_size / 1024 / 1024
    print(f"\nDone! {file_size_mb:.1f} MB in {time.time() - t0:.1f}s")
    print(f"  Output: {output}")


if __name__ == "__main__":
    main()
