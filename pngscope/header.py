"""PNG signature check and ``IHDR`` field decoding."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum

from .cursor import ByteCursor
from .errors import NotPngError, TruncatedInputError

PNG_SIGNATURE = b"\x89PNG\r\n\x1a\n"
IHDR_LENGTH = 13


class ColourType(IntEnum):
    GRAYSCALE = 0
    TRUECOLOR = 2
    INDEXED_COLOR = 3
    GRAYSCALE_WITH_ALPHA = 4
    TRUECOLOR_WITH_ALPHA = 6


class CompressionMethod(IntEnum):
    DEFLATE = 0


class FilterMethod(IntEnum):
    BASIC = 0


class InterlaceMethod(IntEnum):
    NONE = 0
    ADAM7 = 1


@dataclass(frozen=True)
class ImageHeader:
    """Raw ``IHDR`` fields.

    Enumerated fields are kept as plain integers so values outside the
    known enums survive decoding; use :mod:`pngscope.labels` to name them.
    """

    width: int
    height: int
    bit_depth: int
    colour_type: int
    compression_method: int
    filter_method: int
    interlace_method: int


def is_png(data: bytes) -> bool:
    return bytes(data[: len(PNG_SIGNATURE)]) == PNG_SIGNATURE


def check_signature(cursor: ByteCursor) -> None:
    """Consume the 8-byte signature or raise :class:`NotPngError`."""
    if cursor.remaining < len(PNG_SIGNATURE):
        raise NotPngError("Input is shorter than the PNG signature")
    if bytes(cursor.peek_bytes(len(PNG_SIGNATURE))) != PNG_SIGNATURE:
        raise NotPngError("File is not a valid PNG image")
    cursor.skip(len(PNG_SIGNATURE))


def decode_ihdr(payload: memoryview) -> ImageHeader:
    """Decode the 13-byte ``IHDR`` payload; trailing bytes are ignored."""
    if len(payload) < IHDR_LENGTH:
        raise TruncatedInputError(
            f"IHDR payload is {len(payload)} bytes, expected {IHDR_LENGTH}"
        )
    cursor = ByteCursor(payload)
    return ImageHeader(
        width=cursor.read_uint32_be(),
        height=cursor.read_uint32_be(),
        bit_depth=cursor.read_uint8(),
        colour_type=cursor.read_uint8(),
        compression_method=cursor.read_uint8(),
        filter_method=cursor.read_uint8(),
        interlace_method=cursor.read_uint8(),
    )
