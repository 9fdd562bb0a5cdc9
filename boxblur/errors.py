from __future__ import annotations

from pathlib import Path


class BoxBlurError(Exception):
    """Base error for known box-blur failures."""


class InvalidInputError(BoxBlurError):
    """Raised when a buffer is absent or an argument is out of its domain."""


class AllocationError(BoxBlurError):
    """Raised when pixel storage cannot be reserved."""


class DecodeError(BoxBlurError):
    """Raised when an input file cannot be read or parsed as an image."""

    def __init__(self, path: Path | str | None, reason: str):
        self.path = Path(path) if path is not None else None
        self.reason = reason
        where = f": {self.path}" if self.path is not None else ""
        super().__init__(f"Failed to load image{where} ({reason})")


class EncodeError(BoxBlurError):
    """Raised when pixels cannot be serialised or written to disk."""

    def __init__(self, path: Path | str | None, reason: str):
        self.path = Path(path) if path is not None else None
        self.reason = reason
        where = f": {self.path}" if self.path is not None else ""
        super().__init__(f"Failed to write PNG file{where} ({reason})")


class PipelineError(BoxBlurError):
    """
    Stage-level failure of a batch run.

    `index` is the 0-based position of the failing pair, `cause` the
    underlying error (also chained as __cause__).
    """
    stage = "pipeline"

    def __init__(self, index: int, cause: BaseException):
        self.index = index
        self.cause = cause
        super().__init__(
            f"{self.stage} stage failed at index {index} (image {index + 1}): {cause}"
        )


class LoadError(PipelineError):
    stage = "load"


class BlurError(PipelineError):
    stage = "blur"


class SaveError(PipelineError):
    stage = "save"
