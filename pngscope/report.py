"""JSON-ready report built from a :class:`PngDocument`."""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from .blocks import BlockStat
from .document import PngDocument
from .filters import FILTER_MIXED, FILTER_UNKNOWN, FilterSummary
from .labels import (
    BLOCK_TYPE_LABELS,
    COLOUR_TYPE_LABELS,
    COMPRESSION_METHOD_LABELS,
    FILTER_METHOD_LABELS,
    FILTER_TYPE_LABELS,
    INTERLACE_METHOD_LABELS,
    describe,
)


def hex32(value: int) -> str:
    return f"{value & 0xFFFFFFFF:08X}"


def chunk_to_dict(chunk) -> Dict[str, Any]:
    return {
        "type": chunk.type,
        "size": chunk.size,
        "offset": chunk.byte_offset,
        "crc_stored": hex32(chunk.crc_stored),
        "crc_computed": hex32(chunk.crc_computed),
        "crc_valid": chunk.crc_valid,
    }


def _filter_mode_label(mode: int) -> str:
    if mode in (FILTER_MIXED, FILTER_UNKNOWN):
        return FILTER_TYPE_LABELS[mode]
    return describe(FILTER_TYPE_LABELS, mode)


def _filters_to_dict(summary: FilterSummary) -> Dict[str, Any]:
    result: Dict[str, Any] = {
        "mode": summary.mode,
        "mode_label": _filter_mode_label(summary.mode),
        "scanlines": summary.scanline_count,
    }
    if summary.is_mixed:
        result["counts"] = [
            {
                "filter": describe(FILTER_TYPE_LABELS, value),
                "count": summary.counts[value],
                "ratio": summary.ratio(value),
            }
            for value in sorted(summary.counts)
        ]
        result["lines"] = list(summary.filters)
    return result


def _block_to_dict(index: int, block: BlockStat) -> Dict[str, Any]:
    return {
        "index": index,
        "type": BLOCK_TYPE_LABELS.get(block.block_type, str(block.block_type)),
        "plain": block.plain_length,
        "compressed": block.compressed_length,
        "ratio": block.compression_ratio,
        "literal": block.literal_count,
        "match_count": block.match_count,
        "match_total": block.match_total_length,
        "match_average": block.average_match_length,
    }


def huffman_usage(block: BlockStat) -> Optional[Dict[str, Any]]:
    """Per-code usage for a Huffman block, ``None`` for stored blocks."""
    if not block.is_huffman:
        return None
    rows: List[Dict[str, Any]] = []
    count_total = bits_total = 0
    for entry in block.huffman_table:
        count = block.symbol_count(entry.symbol)
        bits = count * entry.length
        count_total += count
        bits_total += bits
        rows.append(
            {"value": entry.symbol, "code": entry.bits(), "count": count, "bits": bits}
        )
    return {"codes": rows, "count_total": count_total, "bits_total": bits_total}


def build_report(document: PngDocument, filename: Optional[str] = None) -> Dict[str, Any]:
    report: Dict[str, Any] = {}
    if filename:
        report["filename"] = filename

    report["header"] = {
        "width": document.width,
        "height": document.height,
        "bit_depth": document.bit_depth,
        "colour_type": describe(COLOUR_TYPE_LABELS, document.colour_type),
        "compression_method": describe(COMPRESSION_METHOD_LABELS, document.compression_method),
        "filter_method": describe(FILTER_METHOD_LABELS, document.filter_method),
        "interlace_method": describe(INTERLACE_METHOD_LABELS, document.interlace_method),
    }
    report["chunks"] = [chunk_to_dict(chunk) for chunk in document.chunks]
    report["palette"] = [list(entry.as_rgba()) for entry in document.palette]
    report["filters"] = _filters_to_dict(document.filters)
    report["blocks"] = [_block_to_dict(i, block) for i, block in enumerate(document.blocks)]
    report["huffman"] = {
        str(i): huffman_usage(block)
        for i, block in enumerate(document.blocks)
        if block.is_huffman
    }

    totals = document.totals
    report["totals"] = {
        "plain": totals.plain_total,
        "compressed": totals.compressed_total,
        "ratio": totals.compression_ratio,
        "literal": totals.literal_total,
        "match_count": totals.match_count_total,
        "match_total": totals.match_length_total,
        "match_average": totals.average_match_length,
        "idat_length": document.idat_length,
        "image_data_length": document.image_data_length,
    }
    return report
