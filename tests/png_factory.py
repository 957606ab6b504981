"""Builders for small in-memory PNG streams used across the tests."""

import struct
import zlib
from typing import Iterable, List, Optional, Tuple

SIGNATURE = b"\x89PNG\r\n\x1a\n"


def chunk(chunk_type: bytes, data: bytes = b"", crc: Optional[int] = None) -> bytes:
    if crc is None:
        crc = zlib.crc32(chunk_type + data) & 0xFFFFFFFF
    return struct.pack(">I", len(data)) + chunk_type + data + struct.pack(">I", crc)


def ihdr(
    width: int,
    height: int,
    bit_depth: int = 8,
    colour_type: int = 0,
    compression: int = 0,
    filter_method: int = 0,
    interlace: int = 0,
) -> bytes:
    data = struct.pack(
        ">IIBBBBB", width, height, bit_depth, colour_type, compression, filter_method, interlace
    )
    return chunk(b"IHDR", data)


def iend() -> bytes:
    return chunk(b"IEND")


def scanlines(filters: Iterable[int], stride: int) -> bytes:
    """Filtered image data: one filter byte followed by ``stride`` zero bytes per row."""
    return b"".join(bytes([f]) + bytes(stride) for f in filters)


def png(*chunks: bytes) -> bytes:
    return SIGNATURE + b"".join(chunks)


def simple_png(
    width: int = 1,
    height: int = 1,
    colour_type: int = 0,
    bit_depth: int = 8,
    filters: Optional[List[int]] = None,
    idat_splits: int = 1,
    extra: Tuple[bytes, ...] = (),
) -> bytes:
    """A valid PNG whose image data uses the given per-row filter bytes."""
    channels = {0: 1, 2: 3, 3: 1, 4: 2, 6: 4}[colour_type]
    stride = (channels * bit_depth * width + 7) // 8
    if filters is None:
        filters = [0] * height
    compressed = zlib.compress(scanlines(filters, stride))
    step = max(1, -(-len(compressed) // idat_splits))
    idats = [chunk(b"IDAT", compressed[i : i + step]) for i in range(0, len(compressed), step)]
    return png(ihdr(width, height, bit_depth, colour_type), *extra, *idats, iend())


def chunk_layout(data: bytes) -> List[Tuple[bytes, int, int]]:
    """(type, size, offset) of every chunk, read independently of pngscope."""
    out = []
    pos = len(SIGNATURE)
    while pos < len(data):
        (size,) = struct.unpack(">I", data[pos : pos + 4])
        out.append((data[pos + 4 : pos + 8], size, pos))
        pos += 12 + size
    return out
