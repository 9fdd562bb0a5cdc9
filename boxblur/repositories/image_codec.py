from __future__ import annotations

from io import BytesIO
from pathlib import Path
from typing import Protocol, Tuple, Union

import cv2
import numpy as np
from PIL import Image as PILImage

from ..errors import DecodeError, EncodeError


class ImageCodec(Protocol):
    """Collaborator that turns files into RGB arrays and back."""

    def decode(self, path: Union[str, Path]) -> Tuple[int, int, np.ndarray]:
        ...

    def encode(self, path: Union[str, Path], width: int, height: int,
               pixels: np.ndarray) -> None:
        ...


class ImageFileCodec:
    """
    File I/O for RGB images. OpenCV decodes any format it knows,
    Pillow writes PNG regardless of the output extension.
    """

    # ─── Decoding ─────────────────────────────────────────────────
    @staticmethod
    def decode_bytes(data: bytes, path: Union[str, Path, None] = None) -> Tuple[int, int, np.ndarray]:
        """
        Returns (width, height, pixels) with pixels shaped (H, W, 3) uint8 RGB.
        Grayscale and alpha inputs are converted to three channels. EXIF
        orientation is ignored, the stored raster is returned as is.
        """
        raw = np.frombuffer(data, dtype=np.uint8)
        arr_bgr = None
        if raw.size:
            try:
                arr_bgr = cv2.imdecode(raw, cv2.IMREAD_COLOR | cv2.IMREAD_IGNORE_ORIENTATION)
            except cv2.error as err:
                raise DecodeError(path, str(err)) from err
        if arr_bgr is None:
            raise DecodeError(path, "unsupported or corrupt image data")

        arr = np.ascontiguousarray(arr_bgr[:, :, ::-1])
        height, width = arr.shape[:2]
        return width, height, arr

    def decode(self, path: Union[str, Path]) -> Tuple[int, int, np.ndarray]:
        path = Path(path)
        try:
            data = path.read_bytes()
        except OSError as err:
            raise DecodeError(path, err.strerror or str(err)) from err
        return self.decode_bytes(data, path)

    # ─── Encoding ─────────────────────────────────────────────────
    @staticmethod
    def encode_bytes(width: int, height: int, pixels: np.ndarray,
                     path: Union[str, Path, None] = None) -> bytes:
        if pixels is None or pixels.shape != (height, width, 3):
            raise EncodeError(path, f"pixel data does not match {width}x{height} RGB")
        np_img = pixels
        if not np_img.flags['C_CONTIGUOUS']:
            np_img = np.ascontiguousarray(np_img)

        out = BytesIO()
        try:
            PILImage.fromarray(np_img.astype(np.uint8, copy=False)).save(out, format="PNG")
        except (OSError, ValueError, MemoryError) as err:
            raise EncodeError(path, str(err) or type(err).__name__) from err
        return out.getvalue()

    def encode(self, path: Union[str, Path], width: int, height: int,
               pixels: np.ndarray) -> None:
        """
        Encode in memory first so a failed encode never leaves a partial file.
        """
        path = Path(path)
        data = self.encode_bytes(width, height, pixels, path)
        try:
            path.write_bytes(data)
        except OSError as err:
            raise EncodeError(path, err.strerror or str(err)) from err
