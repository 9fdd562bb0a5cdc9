from pathlib import Path

import numpy as np
import pytest
from PIL import Image as PILImage

from boxblur.models.pixel_buffer import PixelBuffer
from boxblur.repositories.pixel_buffer_repository import PixelBufferRepository


@pytest.fixture
def rng() -> np.random.Generator:
    return np.random.default_rng(1234)


@pytest.fixture
def buffer_repository() -> PixelBufferRepository:
    return PixelBufferRepository(max_pixels=0)


@pytest.fixture
def make_buffer():
    """Build a PixelBuffer straight from an (H, W, 3) array-like."""
    def _make(pixels, output_path=None) -> PixelBuffer:
        arr = np.asarray(pixels, dtype=np.uint8)
        height, width = arr.shape[:2]
        return PixelBuffer(width=width, height=height, pixels=arr.copy(), output_path=output_path)
    return _make


@pytest.fixture
def write_png(tmp_path):
    """Write an (H, W, 3) RGB array to tmp_path/<name> and return the path."""
    def _write(name: str, pixels) -> Path:
        path = tmp_path / name
        PILImage.fromarray(np.asarray(pixels, dtype=np.uint8)).save(path, format="PNG")
        return path
    return _write


@pytest.fixture
def read_png():
    """Read a PNG file back as an (H, W, 3) RGB array."""
    def _read(path) -> np.ndarray:
        with PILImage.open(path) as img:
            assert img.format == "PNG"
            return np.asarray(img.convert("RGB"))
    return _read
