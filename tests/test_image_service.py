import numpy as np
import pytest

from boxblur.errors import DecodeError, InvalidInputError
from boxblur.services.image_service import ImageService


@pytest.fixture
def image_service(buffer_repository) -> ImageService:
    return ImageService(buffer_repository=buffer_repository)


def test_load_tags_buffer_with_output_path(image_service, write_png, tmp_path, rng):
    pixels = rng.integers(0, 256, size=(2, 3, 3), dtype=np.uint8)
    source = write_png("in.png", pixels)

    buffer = image_service.load(source, tmp_path / "out.png")

    assert buffer.output_path == tmp_path / "out.png"
    np.testing.assert_array_equal(buffer.pixels, pixels)
    assert image_service.buffer_repository.live_count == 1


def test_save_writes_then_releases(image_service, buffer_repository, read_png, tmp_path):
    pixels = np.full((2, 2, 3), 77, dtype=np.uint8)
    buffer = buffer_repository.create_from_pixels(pixels, tmp_path / "out.png")

    written = image_service.save(buffer)

    assert written == tmp_path / "out.png"
    np.testing.assert_array_equal(read_png(written), pixels)
    assert buffer.is_released
    assert buffer_repository.live_count == 0


def test_save_without_output_path(image_service, buffer_repository):
    buffer = buffer_repository.create_buffer(1, 1)

    with pytest.raises(InvalidInputError):
        image_service.save(buffer)
    assert not buffer.is_released


class MismatchedCodec:
    """Reports a size that disagrees with the pixels it returns."""

    def decode(self, path):
        return 5, 5, np.zeros((2, 3, 3), dtype=np.uint8)

    def encode(self, path, width, height, pixels):
        raise AssertionError("not used")


def test_load_rejects_inconsistent_decoded_size(buffer_repository, tmp_path):
    service = ImageService(codec=MismatchedCodec(), buffer_repository=buffer_repository)

    with pytest.raises(DecodeError):
        service.load(tmp_path / "in.png", tmp_path / "out.png")
    assert buffer_repository.live_count == 0
