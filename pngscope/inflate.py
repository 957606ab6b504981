"""Pure-Python zlib/deflate decoder that reports per-block statistics.

``zlib.decompress`` gives no view into block structure, so this decoder
walks the stream itself (RFC 1950 / RFC 1951) and records, for every
block, its type, the bytes it produced and consumed, how often each
literal/length symbol was used, the back-references it contained and its
literal/length Huffman code table.
"""

from __future__ import annotations

import logging
import zlib
from typing import List, Optional, Sequence, Tuple

from .blocks import BlockRecord, BlockType, HuffmanCode

log = logging.getLogger(__name__)

END_OF_BLOCK = 256

# (extra bits, base length) for length symbols 257..285
LENGTH_BASE = [
    (0, 3), (0, 4), (0, 5), (0, 6), (0, 7), (0, 8), (0, 9), (0, 10),
    (1, 11), (1, 13), (1, 15), (1, 17),
    (2, 19), (2, 23), (2, 27), (2, 31),
    (3, 35), (3, 43), (3, 51), (3, 59),
    (4, 67), (4, 83), (4, 99), (4, 115),
    (5, 131), (5, 163), (5, 195), (5, 227),
    (0, 258),
]

# (extra bits, base distance) for distance symbols 0..29
DISTANCE_BASE = [
    (0, 1), (0, 2), (0, 3), (0, 4),
    (1, 5), (1, 7),
    (2, 9), (2, 13),
    (3, 17), (3, 25),
    (4, 33), (4, 49),
    (5, 65), (5, 97),
    (6, 129), (6, 193),
    (7, 257), (7, 385),
    (8, 513), (8, 769),
    (9, 1025), (9, 1537),
    (10, 2049), (10, 3073),
    (11, 4097), (11, 6145),
    (12, 8193), (12, 12289),
    (13, 16385), (13, 24577),
]

CODE_LENGTH_ORDER = [16, 17, 18, 0, 8, 7, 9, 6, 10, 5, 11, 4, 12, 3, 13, 2, 14, 1, 15]

FIXED_LITLEN_LENGTHS = [8] * 144 + [9] * 112 + [7] * 24 + [8] * 8
FIXED_DISTANCE_LENGTHS = [5] * 30


class InflateError(ValueError):
    """The compressed stream is malformed or ends early."""


class BitReader:
    """LSB-first bit reader over a byte string."""

    def __init__(self, data: bytes, pos: int = 0):
        self.data = data
        self.pos = pos
        self._buf = 0
        self._count = 0

    def _fill(self, n: int) -> None:
        while self._count < n and self.pos < len(self.data):
            self._buf |= self.data[self.pos] << self._count
            self.pos += 1
            self._count += 8

    def bits(self, n: int) -> int:
        self._fill(n)
        if self._count < n:
            raise InflateError("Unexpected end of deflate stream")
        value = self._buf & ((1 << n) - 1)
        self._buf >>= n
        self._count -= n
        return value

    def peek(self, n: int) -> int:
        """The next ``n`` bits without consuming them, zero-padded past the end."""
        self._fill(n)
        return self._buf & ((1 << n) - 1)

    def consume(self, n: int) -> None:
        if self._count < n:
            raise InflateError("Unexpected end of deflate stream")
        self._buf >>= n
        self._count -= n

    def tell(self) -> int:
        """Offset of the first byte with no consumed bits."""
        return self.pos - self._count // 8

    def align(self) -> None:
        """Discard bits up to the next byte boundary."""
        self.pos = self.tell()
        self._buf = 0
        self._count = 0

    def take(self, n: int) -> bytes:
        """Read ``n`` raw bytes; only valid when byte-aligned."""
        if self.pos + n > len(self.data):
            raise InflateError("Stored block runs past the end of the stream")
        chunk = self.data[self.pos : self.pos + n]
        self.pos += n
        return chunk


def canonical_codes(lengths: Sequence[int]) -> List[int]:
    """Assign canonical Huffman codes from code lengths (RFC 1951 3.2.2)."""
    max_bits = max(lengths, default=0)
    bl_count = [0] * (max_bits + 1)
    for length in lengths:
        bl_count[length] += 1
    bl_count[0] = 0

    next_code = [0] * (max_bits + 1)
    code = 0
    for bits in range(1, max_bits + 1):
        code = (code + bl_count[bits - 1]) << 1
        next_code[bits] = code

    codes = [0] * len(lengths)
    for symbol, length in enumerate(lengths):
        if length:
            codes[symbol] = next_code[length]
            next_code[length] += 1
    return codes


def _reverse_bits(code: int, length: int) -> int:
    result = 0
    for _ in range(length):
        result = (result << 1) | (code & 1)
        code >>= 1
    return result


class HuffmanDecoder:
    def __init__(self, lengths: Sequence[int]):
        self.lengths = list(lengths)
        self.codes = canonical_codes(self.lengths)
        self.max_length = max(self.lengths, default=0)
        # Indexed by the next max_length bits in stream order; codes are
        # packed MSB-first, so each slot key is the bit-reversed code.
        self._table: List[Optional[Tuple[int, int]]] = [None] * (1 << self.max_length)
        for symbol, (code, length) in enumerate(zip(self.codes, self.lengths)):
            if not length:
                continue
            key = _reverse_bits(code, length)
            for fill in range(0, 1 << self.max_length, 1 << length):
                self._table[key | fill] = (symbol, length)

    def decode(self, reader: BitReader) -> int:
        entry = self._table[reader.peek(self.max_length)]
        if entry is None:
            raise InflateError("Invalid Huffman code")
        symbol, length = entry
        reader.consume(length)
        return symbol

    def table(self) -> Tuple[HuffmanCode, ...]:
        return tuple(
            HuffmanCode(symbol, code, length)
            for symbol, (code, length) in enumerate(zip(self.codes, self.lengths))
            if length
        )


_FIXED_LITLEN = HuffmanDecoder(FIXED_LITLEN_LENGTHS)
_FIXED_DISTANCE = HuffmanDecoder(FIXED_DISTANCE_LENGTHS)


class ZlibInflater:
    """Default decompressor for :func:`pngscope.analyze_png`.

    Holds no state between calls, so one instance can be shared freely.
    """

    def decompress(self, data: bytes) -> Tuple[bytes, List[BlockRecord]]:
        data = bytes(data)
        if len(data) < 2:
            raise InflateError("zlib stream is shorter than its header")
        cmf, flg = data[0], data[1]
        if (cmf * 256 + flg) % 31:
            raise InflateError("zlib header check bits are wrong")
        if cmf & 0x0F != 8:
            raise InflateError(f"Unsupported zlib compression method {cmf & 0x0F}")
        if flg & 0x20:
            raise InflateError("zlib preset dictionaries are not supported")

        reader = BitReader(data, 2)
        out = bytearray()
        records: List[BlockRecord] = []
        final = 0
        while not final:
            start_pos = reader.tell()
            start_len = len(out)
            final = reader.bits(1)
            btype = reader.bits(2)
            if btype == BlockType.STORED:
                parts = self._stored_block(reader, out)
            elif btype == BlockType.FIXED_HUFFMAN:
                parts = self._huffman_block(reader, out, _FIXED_LITLEN, _FIXED_DISTANCE)
            elif btype == BlockType.DYNAMIC_HUFFMAN:
                litlen, distance = self._read_dynamic_tables(reader)
                parts = self._huffman_block(reader, out, litlen, distance)
            else:
                raise InflateError("Reserved deflate block type 3")

            record = BlockRecord(
                block_type=BlockType(btype),
                plain_length=len(out) - start_len,
                compressed_length=reader.tell() - start_pos,
                litlen_counts=parts[0],
                matches=parts[1],
                huffman_table=parts[2],
            )
            log.debug(
                "Block %d type=%d plain=%d compressed=%d",
                len(records),
                record.block_type,
                record.plain_length,
                record.compressed_length,
            )
            records.append(record)

        reader.align()
        self._check_adler(reader, bytes(out))
        return bytes(out), records

    def _check_adler(self, reader: BitReader, plain: bytes) -> None:
        if reader.pos + 4 > len(reader.data):
            log.warning("zlib stream has no Adler-32 trailer")
            return
        stored = int.from_bytes(reader.take(4), "big")
        computed = zlib.adler32(plain) & 0xFFFFFFFF
        if stored != computed:
            log.warning(
                "Adler-32 mismatch: stored %08X, computed %08X", stored, computed
            )

    def _stored_block(self, reader: BitReader, out: bytearray):
        reader.align()
        length = reader.bits(16)
        nlength = reader.bits(16)
        if length ^ nlength != 0xFFFF:
            raise InflateError("Stored block LEN/NLEN mismatch")
        out += reader.take(length)
        return (), (), None

    def _read_dynamic_tables(self, reader: BitReader) -> Tuple[HuffmanDecoder, HuffmanDecoder]:
        hlit = reader.bits(5) + 257
        hdist = reader.bits(5) + 1
        hclen = reader.bits(4) + 4

        code_length_lengths = [0] * 19
        for index in range(hclen):
            code_length_lengths[CODE_LENGTH_ORDER[index]] = reader.bits(3)
        code_length_decoder = HuffmanDecoder(code_length_lengths)

        # Literal/length and distance lengths form one run-length coded
        # sequence; repeats may cross from one into the other.
        lengths: List[int] = []
        total = hlit + hdist
        while len(lengths) < total:
            symbol = code_length_decoder.decode(reader)
            if symbol < 16:
                lengths.append(symbol)
                continue
            if symbol == 16:
                if not lengths:
                    raise InflateError("Repeat code with no previous length")
                value, repeat = lengths[-1], 3 + reader.bits(2)
            elif symbol == 17:
                value, repeat = 0, 3 + reader.bits(3)
            else:
                value, repeat = 0, 11 + reader.bits(7)
            if len(lengths) + repeat > total:
                raise InflateError("Code length repeat overflows the table")
            lengths.extend([value] * repeat)

        if lengths[END_OF_BLOCK] == 0:
            raise InflateError("Dynamic block has no end-of-block code")
        return HuffmanDecoder(lengths[:hlit]), HuffmanDecoder(lengths[hlit:])

    def _huffman_block(
        self,
        reader: BitReader,
        out: bytearray,
        litlen: HuffmanDecoder,
        distance: HuffmanDecoder,
    ):
        counts = [0] * len(litlen.lengths)
        matches: List[Tuple[int, int]] = []
        while True:
            symbol = litlen.decode(reader)
            counts[symbol] += 1
            if symbol < END_OF_BLOCK:
                out.append(symbol)
                continue
            if symbol == END_OF_BLOCK:
                break
            if symbol - 257 >= len(LENGTH_BASE):
                raise InflateError(f"Invalid length symbol {symbol}")
            extra, base = LENGTH_BASE[symbol - 257]
            length = base + reader.bits(extra)

            dist_symbol = distance.decode(reader)
            if dist_symbol >= len(DISTANCE_BASE):
                raise InflateError(f"Invalid distance symbol {dist_symbol}")
            extra, base = DISTANCE_BASE[dist_symbol]
            dist = base + reader.bits(extra)
            if dist > len(out):
                raise InflateError(f"Distance {dist} reaches before the start of output")

            start = len(out) - dist
            if dist >= length:
                out += out[start : start + length]
            else:
                for index in range(length):
                    out.append(out[start + index])
            matches.append((length, dist))

        return tuple(counts), tuple(matches), litlen.table()
