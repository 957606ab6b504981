from pngscope.blocks import (
    BlockRecord,
    BlockType,
    HuffmanCode,
    aggregate_blocks,
    summarize_block,
)


def _counts(literals, length_symbols=0, total=286):
    counts = [0] * total
    for value, n in literals.items():
        counts[value] += n
    counts[256] = 1
    if length_symbols:
        counts[257] = length_symbols
    return tuple(counts)


def test_stored_block_counts_every_byte_as_literal():
    stat = summarize_block(BlockRecord(BlockType.STORED, plain_length=40, compressed_length=45))
    assert stat.literal_count == 40
    assert stat.match_count == 0
    assert stat.match_total_length == 0
    assert stat.huffman_table is None
    assert not stat.is_huffman
    assert stat.average_match_length is None
    assert stat.compression_ratio == 112.5


def test_huffman_block_summary():
    record = BlockRecord(
        block_type=BlockType.DYNAMIC_HUFFMAN,
        plain_length=20,
        compressed_length=8,
        litlen_counts=_counts({65: 3, 66: 2}, length_symbols=3),
        matches=((5, 1), (5, 2), (5, 3)),
        huffman_table=((65, 0b0, 1), (66, 0b10, 2), (256, 0b110, 3), (257, 0b111, 3)),
    )
    stat = summarize_block(record)
    assert stat.literal_count == 5
    assert stat.match_count == 3
    assert stat.match_total_length == 15
    assert stat.average_match_length == 5.0
    assert stat.compression_ratio == 40.0
    assert stat.is_huffman
    assert stat.huffman_table[1] == HuffmanCode(66, 0b10, 2)
    assert stat.huffman_table[2].bits() == "110"
    assert stat.symbol_count(257) == 3
    assert stat.symbol_count(400) == 0


def test_zero_matches_is_not_applicable():
    record = BlockRecord(
        BlockType.FIXED_HUFFMAN,
        plain_length=0,
        compressed_length=2,
        litlen_counts=_counts({}, total=288),
        huffman_table=(),
    )
    stat = summarize_block(record)
    assert stat.match_count == 0
    assert stat.average_match_length is None
    assert stat.compression_ratio is None


def test_totals_accumulate_in_order():
    records = [
        BlockRecord(BlockType.STORED, 10, 15),
        BlockRecord(
            BlockType.FIXED_HUFFMAN,
            plain_length=12,
            compressed_length=6,
            litlen_counts=_counts({1: 4}, length_symbols=2, total=288),
            matches=((3, 1), (5, 4)),
            huffman_table=(),
        ),
    ]
    stats, totals = aggregate_blocks(records)
    assert [s.block_type for s in stats] == [BlockType.STORED, BlockType.FIXED_HUFFMAN]
    assert totals.literal_total == 14
    assert totals.match_count_total == 2
    assert totals.match_length_total == 8
    assert totals.plain_total == 22
    assert totals.compressed_total == 21
    assert totals.average_match_length == 4.0


def test_empty_record_sequence():
    stats, totals = aggregate_blocks([])
    assert stats == ()
    assert totals.plain_total == 0
    assert totals.compression_ratio is None
    assert totals.average_match_length is None
