from __future__ import annotations

import logging
from pathlib import Path
from typing import Union

from ..errors import DecodeError, InvalidInputError
from ..models.pixel_buffer import PixelBuffer
from ..repositories.image_codec import ImageCodec, ImageFileCodec
from ..repositories.pixel_buffer_repository import PixelBufferRepository

logger = logging.getLogger(__name__)


class ImageService:
    """Load/save helpers binding the codec to the buffer repository.  No filtering here."""

    def __init__(self,
                 codec: ImageCodec | None = None,
                 buffer_repository: PixelBufferRepository | None = None):
        self.codec = codec or ImageFileCodec()
        self.buffer_repository = buffer_repository or PixelBufferRepository()

    def load(self, input_path: Union[str, Path],
             output_path: Union[str, Path, None] = None) -> PixelBuffer:
        """Decode `input_path` into a new buffer tagged with `output_path`."""
        width, height, pixels = self.codec.decode(input_path)
        if pixels is None or pixels.shape != (height, width, 3):
            raise DecodeError(
                input_path,
                f"decoded pixels do not match reported {width}x{height} RGB size",
            )
        buffer = self.buffer_repository.create_from_pixels(pixels, output_path)
        logger.debug(f"Loaded {input_path} ({width}x{height})")
        return buffer

    def save(self, buffer: PixelBuffer) -> Path:
        """
        Write the buffer as PNG to its output path, then release it.
        On failure the buffer is left live for the caller to release.
        """
        path = buffer.output_path
        if path is None:
            raise InvalidInputError("Image buffer has no output path")
        self.codec.encode(path, buffer.width, buffer.height, buffer.pixels)
        self.release(buffer)
        logger.debug(f"Saved {path}")
        return path

    def release(self, buffer: PixelBuffer | None) -> None:
        self.buffer_repository.release(buffer)
