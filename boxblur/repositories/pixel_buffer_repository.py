from __future__ import annotations

import logging
from pathlib import Path
from typing import Dict, Union

import numpy as np

from .. import config
from ..errors import AllocationError, InvalidInputError
from ..models.pixel_buffer import PixelBuffer

logger = logging.getLogger(__name__)


class PixelBufferRepository:
    """
    Owns every PixelBuffer allocated during one batch run.

    Each buffer is created, copied and released through here, so the
    repository always knows which buffers are still live. A buffer is
    counted as released once, however many times release() is called on it.
    """

    def __init__(self, max_pixels: int | None = None):
        self.max_pixels = config.MAX_PIXELS if max_pixels is None else max_pixels
        self._live: Dict[int, PixelBuffer] = {}
        self.allocated_count = 0
        self.released_count = 0

    # ─── Allocation ───────────────────────────────────────────────
    def _check_ceiling(self, width: int, height: int) -> None:
        if self.max_pixels and width * height > self.max_pixels:
            raise AllocationError(
                f"{width}x{height} image exceeds the {self.max_pixels} pixel limit"
            )

    def _track(self, buffer: PixelBuffer) -> PixelBuffer:
        self._live[id(buffer)] = buffer
        self.allocated_count += 1
        logger.debug(f"Allocated {buffer.width}x{buffer.height} buffer for {buffer.output_path}")
        return buffer

    def create_buffer(self, width: int, height: int,
                      output_path: Union[str, Path, None] = None) -> PixelBuffer:
        self._check_ceiling(width, height)
        return self._track(PixelBuffer.allocate(width, height, output_path))

    def create_from_pixels(self, pixels: np.ndarray,
                           output_path: Union[str, Path, None] = None) -> PixelBuffer:
        """
        Construct a buffer and populate it from an (H, W, 3) uint8 RGB array.
        """
        if pixels is None or pixels.ndim != 3 or pixels.shape[2] != 3:
            raise InvalidInputError("Expected an (H, W, 3) RGB pixel array")
        height, width = pixels.shape[:2]
        buffer = self.create_buffer(width, height, output_path)
        buffer.pixels[...] = pixels
        return buffer

    def copy(self, source: PixelBuffer | None) -> PixelBuffer:
        if source is None or source.is_released:
            raise InvalidInputError("Cannot copy an absent image buffer")
        self._check_ceiling(source.width, source.height)
        return self._track(PixelBuffer.deep_copy(source))

    # ─── Release ──────────────────────────────────────────────────
    def release(self, buffer: PixelBuffer | None) -> None:
        """Release one buffer. Absent or already released buffers are ignored."""
        if buffer is None:
            return
        if self._live.pop(id(buffer), None) is not None:
            self.released_count += 1
            logger.debug(f"Released buffer for {buffer.output_path}")
        buffer.release()

    def release_all(self) -> int:
        """Release every buffer still live and return how many there were."""
        pending = list(self._live.values())
        for buffer in pending:
            self.release(buffer)
        return len(pending)

    @property
    def live_count(self) -> int:
        return len(self._live)
