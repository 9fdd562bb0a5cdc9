"""
Batch blur pipeline.
Loads every input, blurs every buffer, then saves every result, one stage
at a time across the whole batch. The first failure aborts the batch after
releasing every buffer the run still holds.
"""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable, List, Tuple, Union

from ..errors import BlurError, BoxBlurError, InvalidInputError, LoadError, SaveError
from ..models.pixel_buffer import PixelBuffer
from ..repositories.image_codec import ImageCodec
from ..repositories.pixel_buffer_repository import PixelBufferRepository
from ..services.box_blur_service import BoxBlurService
from ..services.image_service import ImageService

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]


def _load_all(pairs: List[Tuple[Path, Path]], images: List[PixelBuffer],
              image_service: ImageService) -> None:
    for index, (input_path, output_path) in enumerate(pairs):
        try:
            images.append(image_service.load(input_path, output_path))
        except BoxBlurError as err:
            raise LoadError(index, err) from err


def _blur_all(images: List[PixelBuffer], blur_service: BoxBlurService,
              image_service: ImageService) -> None:
    for index, buffer in enumerate(images):
        try:
            blurred = blur_service.apply(buffer)
        except BoxBlurError as err:
            raise BlurError(index, err) from err
        # the pre-blur buffer is superseded as soon as its result exists
        image_service.release(buffer)
        images[index] = blurred


def _save_all(images: List[PixelBuffer], image_service: ImageService) -> List[Path]:
    written = []
    for index, buffer in enumerate(images):
        try:
            written.append(image_service.save(buffer))
        except BoxBlurError as err:
            raise SaveError(index, err) from err
    return written


def run_batch(
    pairs: Iterable[Tuple[PathLike, PathLike]],
    *,
    codec: ImageCodec | None = None,
    buffer_repository: PixelBufferRepository | None = None,
    blur_service: BoxBlurService | None = None,
) -> List[Path]:
    """
    Blur every (input_path, output_path) pair and write the results as PNG.

    Args:
        pairs: Ordered (input, output) file pairs.
        codec: Decoder/encoder for image files (defaults to ImageFileCodec).
        buffer_repository: Arena accounting for every buffer of this run.
            Pass a fresh one per run; it is empty again when run_batch returns.
        blur_service: Filter to apply (defaults to BoxBlurService on the same arena).

    Returns:
        List[Path]: The written output paths, in input order.

    Raises:
        InvalidInputError: no pairs were given.
        LoadError / BlurError / SaveError: first failing stage and 0-based index.
    """
    pairs = [(Path(input_path), Path(output_path)) for input_path, output_path in pairs]
    if not pairs:
        raise InvalidInputError("At least one input/output pair is required")

    buffer_repository = buffer_repository or PixelBufferRepository()
    image_service = ImageService(codec, buffer_repository)
    blur_service = blur_service or BoxBlurService(buffer_repository)

    images: List[PixelBuffer] = []
    try:
        logger.info(f"Step 1: loading {len(pairs)} image(s)")
        _load_all(pairs, images, image_service)

        logger.info(f"Step 2: blurring {len(images)} image(s)")
        _blur_all(images, blur_service, image_service)

        logger.info(f"Step 3: saving {len(images)} image(s)")
        written = _save_all(images, image_service)
    except BoxBlurError as err:
        logger.warning(f"Batch aborted, releasing {sum(not b.is_released for b in images)} "
                       f"buffer(s): {err}")
        raise
    finally:
        for buffer in images:
            image_service.release(buffer)
        images.clear()

    logger.info(f"Batch complete: wrote {len(written)} image(s)")
    return written
