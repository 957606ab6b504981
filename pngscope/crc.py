"""CRC32 as used by PNG chunks (polynomial 0xEDB88320, reflected)."""

from __future__ import annotations

import zlib
from typing import Union

Buffer = Union[bytes, bytearray, memoryview]


def compute(data: Buffer) -> int:
    """Return the CRC32 of ``data`` as an unsigned 32-bit integer."""
    return zlib.crc32(data) & 0xFFFFFFFF


def chunk_crc(chunk_type: Buffer, payload: Buffer) -> int:
    """CRC over a chunk's type tag followed by its payload."""
    return zlib.crc32(payload, zlib.crc32(chunk_type)) & 0xFFFFFFFF


def verify(chunk_type: Buffer, payload: Buffer, stored: int) -> bool:
    return chunk_crc(chunk_type, payload) == stored
