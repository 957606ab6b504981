"""Per-block deflate statistics.

The decompressor is a collaborator: anything with a
``decompress(data) -> (plain_bytes, block_records)`` method can be plugged
in. This module only summarises the records it returns.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import NamedTuple, Optional, Protocol, Sequence, Tuple

import numpy as np

LITERAL_SYMBOLS = 256


class BlockType(IntEnum):
    STORED = 0
    FIXED_HUFFMAN = 1
    DYNAMIC_HUFFMAN = 2


class HuffmanCode(NamedTuple):
    symbol: int
    code: int
    length: int

    def bits(self) -> str:
        """The code as a bit string, most significant bit first."""
        return format(self.code, f"0{self.length}b") if self.length else ""


@dataclass(frozen=True)
class BlockRecord:
    """What a decompressor reports for one deflate block."""

    block_type: int
    plain_length: int
    compressed_length: int
    litlen_counts: Tuple[int, ...] = ()
    matches: Tuple[Tuple[int, int], ...] = ()
    huffman_table: Optional[Tuple[HuffmanCode, ...]] = None


class Decompressor(Protocol):
    def decompress(self, data: bytes) -> Tuple[bytes, Sequence[BlockRecord]]:
        ...


def _percent(numerator: int, denominator: int) -> Optional[float]:
    if denominator == 0:
        return None
    return round(numerator / denominator * 100, 2)


def _average(total: int, count: int) -> Optional[float]:
    if count == 0:
        return None
    return round(total / count, 2)


@dataclass(frozen=True)
class BlockStat:
    """Summary of one block.

    ``average_match_length`` and ``compression_ratio`` are ``None`` when
    they are not applicable (no matches, or an empty block).
    """

    block_type: int
    plain_length: int
    compressed_length: int
    literal_count: int
    match_count: int
    match_total_length: int
    huffman_table: Optional[Tuple[HuffmanCode, ...]] = None
    symbol_counts: Tuple[int, ...] = ()

    @property
    def is_huffman(self) -> bool:
        return self.block_type != BlockType.STORED and self.huffman_table is not None

    @property
    def average_match_length(self) -> Optional[float]:
        return _average(self.match_total_length, self.match_count)

    @property
    def compression_ratio(self) -> Optional[float]:
        return _percent(self.compressed_length, self.plain_length)

    def symbol_count(self, symbol: int) -> int:
        if 0 <= symbol < len(self.symbol_counts):
            return self.symbol_counts[symbol]
        return 0


@dataclass(frozen=True)
class BlockTotals:
    literal_total: int = 0
    match_count_total: int = 0
    match_length_total: int = 0
    plain_total: int = 0
    compressed_total: int = 0

    @property
    def average_match_length(self) -> Optional[float]:
        return _average(self.match_length_total, self.match_count_total)

    @property
    def compression_ratio(self) -> Optional[float]:
        return _percent(self.compressed_total, self.plain_total)


def summarize_block(record: BlockRecord) -> BlockStat:
    if record.block_type == BlockType.STORED:
        return BlockStat(
            block_type=record.block_type,
            plain_length=record.plain_length,
            compressed_length=record.compressed_length,
            literal_count=record.plain_length,
            match_count=0,
            match_total_length=0,
        )

    counts = np.asarray(record.litlen_counts, dtype=np.int64)
    lengths = np.asarray([length for length, _ in record.matches], dtype=np.int64)
    table = tuple(HuffmanCode(*entry) for entry in record.huffman_table or ())
    return BlockStat(
        block_type=record.block_type,
        plain_length=record.plain_length,
        compressed_length=record.compressed_length,
        literal_count=int(counts[:LITERAL_SYMBOLS].sum()),
        match_count=int(lengths.size),
        match_total_length=int(lengths.sum()),
        huffman_table=table,
        symbol_counts=tuple(int(c) for c in record.litlen_counts),
    )


def aggregate_blocks(records: Sequence[BlockRecord]) -> Tuple[Tuple[BlockStat, ...], BlockTotals]:
    """Summarise every record in order and accumulate running totals."""
    stats = []
    literal_total = match_count_total = match_length_total = 0
    plain_total = compressed_total = 0
    for record in records:
        stat = summarize_block(record)
        stats.append(stat)
        literal_total += stat.literal_count
        match_count_total += stat.match_count
        match_length_total += stat.match_total_length
        plain_total += stat.plain_length
        compressed_total += stat.compressed_length

    totals = BlockTotals(
        literal_total=literal_total,
        match_count_total=match_count_total,
        match_length_total=match_length_total,
        plain_total=plain_total,
        compressed_total=compressed_total,
    )
    return tuple(stats), totals
