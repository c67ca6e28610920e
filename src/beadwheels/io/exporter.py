"""
Frame export.

Saves rendered frames as PNG files without ever overwriting an existing
export.
"""

import logging
from pathlib import Path
from typing import Union

import numpy as np
import pygame
from PIL import Image

logger = logging.getLogger(__name__)


class FrameExporter:
    """
    Writes frames to ``<directory>/<prefix>_<seed>_<n>.png``.

    Args:
        directory: Output directory (created on first export).
        prefix: File name prefix.
    """

    def __init__(
        self,
        directory: Union[str, Path] = ".",
        prefix: str = "wheels_of_fortune_audio",
    ):
        self.directory = Path(directory)
        self.prefix = prefix

    def _next_path(self, seed: int) -> Path:
        n = 0
        while True:
            path = self.directory / f"{self.prefix}_{seed}_{n}.png"
            if not path.exists():
                return path
            n += 1

    def to_array(self, frame: Union[pygame.Surface, np.ndarray]) -> np.ndarray:
        """Accept a pygame Surface or an (H, W, 3) uint8 array."""
        if isinstance(frame, pygame.Surface):
            # pygame uses (width, height) but numpy expects (height, width)
            frame = np.transpose(pygame.surfarray.array3d(frame), (1, 0, 2))
        arr = np.asarray(frame)
        if arr.ndim != 3 or arr.shape[2] != 3:
            raise ValueError(f"Expected an (H, W, 3) frame, got shape {arr.shape}")
        return arr.astype(np.uint8)

    def export(self, frame: Union[pygame.Surface, np.ndarray], seed: int = 0) -> Path:
        """
        Save one frame as PNG.

        Args:
            frame: Rendered frame.
            seed: Composition seed, embedded in the file name.

        Returns:
            Path to the written file.
        """
        arr = self.to_array(frame)
        self.directory.mkdir(parents=True, exist_ok=True)
        path = self._next_path(seed)
        Image.fromarray(arr).save(path, format="PNG")
        logger.info("Saved frame to %s", path)
        return path
