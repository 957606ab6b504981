"""Chunk walking from the signature to ``IEND``."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Optional

from . import crc
from .cursor import ByteCursor
from .errors import MissingHeaderError, TruncatedInputError, UnterminatedStreamError
from .header import ImageHeader, decode_ihdr
from .idat import IdatReassembler
from .palette import PaletteBuilder

log = logging.getLogger(__name__)

CHUNK_OVERHEAD = 12  # length + type + CRC


@dataclass(frozen=True)
class ChunkRecord:
    type: str
    size: int
    byte_offset: int
    crc_stored: int
    crc_computed: int

    @property
    def crc_valid(self) -> bool:
        return self.crc_stored == self.crc_computed

    @property
    def total_size(self) -> int:
        return CHUNK_OVERHEAD + self.size


class ChunkWalker:
    """Walks every chunk of one PNG and feeds the per-type collectors.

    The cursor must be positioned just past the signature. A walker is
    single-use; all of its state belongs to the parse that created it.
    """

    def __init__(self, cursor: ByteCursor):
        self.cursor = cursor
        self.header: Optional[ImageHeader] = None
        self.palette = PaletteBuilder()
        self.idat = IdatReassembler()
        self.chunks: List[ChunkRecord] = []

    def walk(self) -> List[ChunkRecord]:
        while True:
            if self.cursor.at_end():
                raise UnterminatedStreamError(
                    f"Stream ended at offset {self.cursor.position} without an IEND chunk",
                    self.chunks,
                )
            try:
                record = self._read_chunk()
            except TruncatedInputError as exc:
                raise TruncatedInputError(str(exc), self.chunks) from exc

            self.chunks.append(record)
            if record.type == "IEND":
                return self.chunks

    def _read_chunk(self) -> ChunkRecord:
        offset = self.cursor.position
        size = self.cursor.read_uint32_be()
        tag = bytes(self.cursor.read_bytes(4))
        chunk_type = tag.decode("latin-1")
        if self.header is None and chunk_type != "IHDR":
            raise MissingHeaderError(
                f"First chunk is {chunk_type!r}, expected 'IHDR'", self.chunks
            )
        payload = self.cursor.read_bytes(size)
        crc_stored = self.cursor.read_uint32_be()
        log.debug("Chunk %s size=%d offset=%d", chunk_type, size, offset)

        self._dispatch(chunk_type, payload)

        record = ChunkRecord(
            type=chunk_type,
            size=size,
            byte_offset=offset,
            crc_stored=crc_stored,
            crc_computed=crc.chunk_crc(tag, payload),
        )
        if not record.crc_valid:
            log.warning(
                "CRC mismatch in %s chunk at offset %d: stored %08X, computed %08X",
                chunk_type,
                offset,
                record.crc_stored,
                record.crc_computed,
            )
        return record

    def _dispatch(self, chunk_type: str, payload: memoryview) -> None:
        if chunk_type == "IHDR":
            if self.header is not None:
                log.warning("Duplicate IHDR chunk ignored")
                return
            self.header = decode_ihdr(payload)
        elif chunk_type == "IDAT":
            self.idat.append(payload)
        elif chunk_type == "PLTE":
            self.palette.add_plte(payload)
        elif chunk_type == "tRNS":
            self.palette.apply_trns(payload, self.header.colour_type)
        # Every other type is recorded without interpretation.
