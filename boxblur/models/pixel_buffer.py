from __future__ import annotations
from dataclasses import dataclass
from pathlib import Path
from typing import Union

import numpy as np

from ..errors import AllocationError, InvalidInputError
from .pixel import Pixel


@dataclass(eq=False)
class PixelBuffer:
    """
    Decoded image held in memory: row-major RGB pixels plus the path the
    result will be written to.

    `pixels` has shape (height, width, 3), dtype uint8, RGB order, so the
    flat position of (row, col) is row * width + col. A released buffer keeps
    its dimensions but no longer owns any pixel storage.
    """
    width: int
    height: int
    pixels: np.ndarray | None
    output_path: Path | None = None

    def __post_init__(self):
        if self.width <= 0 or self.height <= 0:
            raise InvalidInputError(
                f"Buffer dimensions must be positive, got {self.width}x{self.height}"
            )
        if self.pixels is not None and self.pixels.shape != (self.height, self.width, 3):
            raise InvalidInputError(
                f"Pixel array shape {self.pixels.shape} does not match "
                f"{self.width}x{self.height} RGB"
            )
        if self.output_path is not None:
            self.output_path = Path(self.output_path)

    # ─── Construction ─────────────────────────────────────────────
    @classmethod
    def allocate(cls, width: int, height: int,
                 output_path: Union[str, Path, None] = None) -> "PixelBuffer":
        """Reserve storage for width*height pixels. Content is unspecified."""
        if width <= 0 or height <= 0:
            raise InvalidInputError(f"Buffer dimensions must be positive, got {width}x{height}")
        try:
            pixels = np.empty((height, width, 3), dtype=np.uint8)
        except MemoryError as err:
            raise AllocationError(
                f"Failed to allocate memory for {width}x{height} image pixels"
            ) from err
        return cls(width=width, height=height, pixels=pixels, output_path=output_path)

    @classmethod
    def deep_copy(cls, source: "PixelBuffer | None") -> "PixelBuffer":
        """
        New buffer with the same dimensions and output path and its own copy
        of every pixel.
        """
        if source is None or source.is_released:
            raise InvalidInputError("Cannot copy an absent image buffer")
        try:
            pixels = source.pixels.copy()
        except MemoryError as err:
            raise AllocationError("Failed to allocate memory for copying image") from err
        return cls(width=source.width, height=source.height,
                   pixels=pixels, output_path=source.output_path)

    # ─── Access ───────────────────────────────────────────────────
    @property
    def is_released(self) -> bool:
        return self.pixels is None

    @property
    def pixel_count(self) -> int:
        return self.width * self.height

    def pixel_at(self, row: int, col: int) -> Pixel:
        """
        Caller guarantees 0 <= row < height and 0 <= col < width.
        """
        if not (0 <= row < self.height and 0 <= col < self.width):
            raise IndexError(f"Pixel ({row}, {col}) outside {self.width}x{self.height} image")
        red, green, blue = self.pixels[row, col]
        return Pixel(int(red), int(green), int(blue))

    def set_pixel(self, row: int, col: int, pixel: Pixel) -> None:
        if not (0 <= row < self.height and 0 <= col < self.width):
            raise IndexError(f"Pixel ({row}, {col}) outside {self.width}x{self.height} image")
        self.pixels[row, col] = pixel.as_tuple()

    def release(self) -> None:
        """Drop the pixel storage. Releasing twice is a no-op."""
        self.pixels = None
