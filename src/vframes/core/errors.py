"""Exception types raised by the extraction pipeline."""

from __future__ import annotations


class ExtractionError(Exception):
    """Base class for all vframes errors."""


class StorageError(ExtractionError):
    """A directory could not be created or a file could not be moved."""


class DecoderError(ExtractionError):
    """The frame decoder could not open or read the video at all."""

    def __init__(self, code: str, message: str):
        super().__init__(message)
        self.code = code

    def __str__(self) -> str:
        return f"[{self.code}] {self.args[0]}"


class ProbeError(ExtractionError):
    """Video metadata (duration, fps) could not be read."""
