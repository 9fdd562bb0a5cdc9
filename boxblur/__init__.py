"""Batch 3x3 box blur for RGB images."""
from .errors import (
    AllocationError,
    BlurError,
    BoxBlurError,
    DecodeError,
    EncodeError,
    InvalidInputError,
    LoadError,
    PipelineError,
    SaveError,
)
from .models import Pixel, PixelBuffer
from .pipeline.batch_blur import run_batch
from .services.box_blur_service import BoxBlurService

__version__ = "1.0.0"

__all__ = [
    "AllocationError",
    "BlurError",
    "BoxBlurError",
    "BoxBlurService",
    "DecodeError",
    "EncodeError",
    "InvalidInputError",
    "LoadError",
    "Pixel",
    "PixelBuffer",
    "PipelineError",
    "SaveError",
    "run_batch",
]
