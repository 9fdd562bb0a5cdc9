from .pixel import Pixel
from .pixel_buffer import PixelBuffer

__all__ = ["Pixel", "PixelBuffer"]
