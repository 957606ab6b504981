"""Top-level PNG analysis."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional, Tuple

from .blocks import BlockStat, BlockTotals, Decompressor, aggregate_blocks
from .chunks import ChunkRecord, ChunkWalker
from .cursor import ByteCursor
from .errors import DecompressionError
from .filters import FilterSummary, classify_filters
from .header import ImageHeader, check_signature
from .idat import inflate_idat
from .inflate import ZlibInflater
from .palette import PaletteEntry

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class PngDocument:
    """Everything learned from one PNG byte stream."""

    header: ImageHeader
    chunks: Tuple[ChunkRecord, ...]
    palette: Tuple[PaletteEntry, ...]
    filters: FilterSummary
    blocks: Tuple[BlockStat, ...]
    totals: BlockTotals
    idat_length: int = 0
    image_data_length: int = 0

    @property
    def width(self) -> int:
        return self.header.width

    @property
    def height(self) -> int:
        return self.header.height

    @property
    def bit_depth(self) -> int:
        return self.header.bit_depth

    @property
    def colour_type(self) -> int:
        return self.header.colour_type

    @property
    def compression_method(self) -> int:
        return self.header.compression_method

    @property
    def filter_method(self) -> int:
        return self.header.filter_method

    @property
    def interlace_method(self) -> int:
        return self.header.interlace_method

    @property
    def crc_errors(self) -> Tuple[ChunkRecord, ...]:
        return tuple(chunk for chunk in self.chunks if not chunk.crc_valid)


def analyze_png(data: bytes, decompressor: Optional[Decompressor] = None) -> PngDocument:
    """Parse ``data`` and return a :class:`PngDocument`.

    ``decompressor`` turns the joined IDAT payload into image bytes plus
    per-block records; :class:`~pngscope.inflate.ZlibInflater` is used when
    none is given. Fatal problems raise a
    :class:`~pngscope.errors.PngAnalysisError` subclass whose ``chunks``
    attribute holds whatever was walked before the failure.
    """
    if not isinstance(data, (bytes, bytearray, memoryview)):
        raise TypeError(f"data must be bytes, got {type(data).__name__}")
    if decompressor is None:
        decompressor = ZlibInflater()

    cursor = ByteCursor(data)
    check_signature(cursor)

    walker = ChunkWalker(cursor)
    chunks = tuple(walker.walk())
    if cursor.remaining:
        log.debug("Ignoring %d bytes after IEND", cursor.remaining)

    compressed = walker.idat.payload()
    log.debug(
        "Reassembled %d IDAT chunks into %d bytes", walker.idat.chunk_count, len(compressed)
    )
    try:
        image_data, records = inflate_idat(compressed, decompressor)
    except ValueError as exc:
        raise DecompressionError(f"Failed to inflate image data: {exc}", chunks) from exc

    blocks, totals = aggregate_blocks(records)
    return PngDocument(
        header=walker.header,
        chunks=chunks,
        palette=walker.palette.entries(),
        filters=classify_filters(image_data, walker.header),
        blocks=blocks,
        totals=totals,
        idat_length=len(compressed),
        image_data_length=len(image_data),
    )
