from __future__ import annotations
from dataclasses import dataclass

from ..errors import InvalidInputError


@dataclass(frozen=True)
class Pixel:
    """
    RGB value of a single pixel, 8 bits per channel, no alpha.
    """
    red: int
    green: int
    blue: int

    def __post_init__(self):
        for name in ("red", "green", "blue"):
            value = getattr(self, name)
            if not 0 <= value <= 255:
                raise InvalidInputError(f"{name} channel out of range 0-255: {value}")

    def as_tuple(self) -> tuple[int, int, int]:
        return self.red, self.green, self.blue
