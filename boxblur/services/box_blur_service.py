"""
3x3 box blur.

Every output pixel is the per-channel mean of the neighborhood cells that
lie inside the image. Cells outside the image are left out of both the sum
and the count, so corners average 4 samples, edges 6 and interior pixels 9.
Channel values are truncated (sum // count).
"""
from __future__ import annotations

import logging

import numpy as np

from ..errors import AllocationError, InvalidInputError
from ..models.pixel import Pixel
from ..models.pixel_buffer import PixelBuffer
from ..repositories.pixel_buffer_repository import PixelBufferRepository

logger = logging.getLogger(__name__)

KERNEL_OFFSETS = tuple((dr, dc) for dr in (-1, 0, 1) for dc in (-1, 0, 1))


class BoxBlurService:
    """
    Pure filter: reads a source buffer, returns a new blurred buffer.
    Output storage comes from the given repository so it is accounted for.
    """

    def __init__(self, buffer_repository: PixelBufferRepository | None = None):
        self.buffer_repository = buffer_repository or PixelBufferRepository()

    @staticmethod
    def _check_source(source: PixelBuffer | None) -> None:
        if source is None or source.is_released:
            raise InvalidInputError("Invalid source image")

    # ─── Reference computation ────────────────────────────────────
    @classmethod
    def blur_pixel(cls, source: PixelBuffer, row: int, col: int) -> Pixel:
        """Blurred value of a single position, walking the 9 offsets."""
        cls._check_source(source)
        red_sum = green_sum = blue_sum = 0
        valid_pixels = 0
        for dr, dc in KERNEL_OFFSETS:
            adjacent_row, adjacent_col = row + dr, col + dc
            if 0 <= adjacent_row < source.height and 0 <= adjacent_col < source.width:
                pixel = source.pixel_at(adjacent_row, adjacent_col)
                red_sum += pixel.red
                green_sum += pixel.green
                blue_sum += pixel.blue
                valid_pixels += 1
        return Pixel(red_sum // valid_pixels,
                     green_sum // valid_pixels,
                     blue_sum // valid_pixels)

    # ─── Whole image ──────────────────────────────────────────────
    @staticmethod
    def _neighborhood_sums(pixels: np.ndarray) -> tuple[np.ndarray, np.ndarray]:
        """
        Returns (sums, counts): per-channel sums (H, W, 3) and the number of
        in-bounds cells (H, W) for every position.

        Zero padding adds nothing to the sums and the padded mask adds
        nothing to the counts, which is the same as skipping the cell.
        """
        height, width = pixels.shape[:2]
        padded = np.pad(pixels.astype(np.uint32), ((1, 1), (1, 1), (0, 0)))
        inside = np.pad(np.ones((height, width), dtype=np.uint32), 1)

        sums = np.zeros((height, width, 3), dtype=np.uint32)
        counts = np.zeros((height, width), dtype=np.uint32)
        for dr, dc in KERNEL_OFFSETS:
            rows = slice(1 + dr, 1 + dr + height)
            cols = slice(1 + dc, 1 + dc + width)
            sums += padded[rows, cols]
            counts += inside[rows, cols]
        return sums, counts

    def apply(self, source: PixelBuffer | None) -> PixelBuffer:
        """
        Blur `source` into a new buffer with the same dimensions and output
        path. The source is left untouched.

        Raises:
            InvalidInputError: source is absent or already released.
            AllocationError: the output buffer cannot be allocated.
        """
        self._check_source(source)
        blurred = self.buffer_repository.create_buffer(
            source.width, source.height, source.output_path
        )
        try:
            sums, counts = self._neighborhood_sums(source.pixels)
            blurred.pixels[...] = sums // counts[:, :, np.newaxis]
        except MemoryError as err:
            self.buffer_repository.release(blurred)
            raise AllocationError(
                f"Failed to allocate memory to blur {source.width}x{source.height} image"
            ) from err
        logger.debug(f"Blurred {source.width}x{source.height} image for {source.output_path}")
        return blurred
