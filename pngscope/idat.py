"""IDAT reassembly and the hand-off to a decompressor."""

from __future__ import annotations

import logging
from typing import List, Sequence, Tuple

from .blocks import BlockRecord, Decompressor

log = logging.getLogger(__name__)


class IdatReassembler:
    """Concatenates IDAT payloads in file order."""

    def __init__(self) -> None:
        self._parts: List[bytes] = []
        self._length = 0

    def append(self, payload: memoryview) -> None:
        self._parts.append(bytes(payload))
        self._length += len(payload)

    @property
    def chunk_count(self) -> int:
        return len(self._parts)

    def __len__(self) -> int:
        return self._length

    def payload(self) -> bytes:
        return b"".join(self._parts)


def inflate_idat(
    compressed: bytes, decompressor: Decompressor
) -> Tuple[bytes, Sequence[BlockRecord]]:
    """Run ``decompressor`` over the joined IDAT data.

    An empty payload (no IDAT chunks) yields empty results without calling
    the decompressor.
    """
    if not compressed:
        return b"", ()
    plain, records = decompressor.decompress(compressed)
    log.debug(
        "Inflated %d IDAT bytes into %d bytes over %d blocks",
        len(compressed),
        len(plain),
        len(records),
    )
    return bytes(plain), tuple(records)
