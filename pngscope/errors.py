"""Exceptions raised while analysing a PNG stream."""

from __future__ import annotations

from typing import Sequence, Tuple


class PngAnalysisError(ValueError):
    """Base class for fatal analysis failures.

    ``chunks`` holds the chunk records that were fully walked before the
    failure so callers can still show what was readable.
    """

    def __init__(self, message: str, chunks: Sequence = ()) -> None:
        super().__init__(message)
        self.chunks: Tuple = tuple(chunks)


class NotPngError(PngAnalysisError):
    """Raised when the first eight bytes are not the PNG signature."""


class TruncatedInputError(PngAnalysisError):
    """Raised when a read runs past the end of the buffer."""


class UnterminatedStreamError(TruncatedInputError):
    """Raised when the buffer ends on a chunk boundary before ``IEND``."""


class MissingHeaderError(PngAnalysisError):
    """Raised when the first chunk is not ``IHDR``."""


class DecompressionError(PngAnalysisError):
    """Raised when the reassembled IDAT payload cannot be inflated."""


__all__ = [
    "DecompressionError",
    "MissingHeaderError",
    "NotPngError",
    "PngAnalysisError",
    "TruncatedInputError",
    "UnterminatedStreamError",
]
