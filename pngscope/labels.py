"""Display names for the numeric codes found in a PNG."""

from __future__ import annotations

from types import MappingProxyType
from typing import Mapping

from .blocks import BlockType
from .filters import FILTER_MIXED, FILTER_UNKNOWN, FilterType
from .header import ColourType, CompressionMethod, FilterMethod, InterlaceMethod

COLOUR_TYPE_LABELS: Mapping[int, str] = MappingProxyType(
    {
        ColourType.GRAYSCALE: "Grayscale",
        ColourType.TRUECOLOR: "Truecolor",
        ColourType.INDEXED_COLOR: "IndexedColor",
        ColourType.GRAYSCALE_WITH_ALPHA: "GrayscaleWithAlpha",
        ColourType.TRUECOLOR_WITH_ALPHA: "TruecolorWithAlpha",
    }
)

COMPRESSION_METHOD_LABELS: Mapping[int, str] = MappingProxyType(
    {CompressionMethod.DEFLATE: "Deflate"}
)

FILTER_METHOD_LABELS: Mapping[int, str] = MappingProxyType({FilterMethod.BASIC: "Basic"})

INTERLACE_METHOD_LABELS: Mapping[int, str] = MappingProxyType(
    {
        InterlaceMethod.NONE: "None",
        InterlaceMethod.ADAM7: "Adam7",
    }
)

FILTER_TYPE_LABELS: Mapping[int, str] = MappingProxyType(
    {
        FilterType.NONE: "None",
        FilterType.SUB: "Sub",
        FilterType.UP: "Up",
        FilterType.AVERAGE: "Average",
        FilterType.PAETH: "Paeth",
        FILTER_MIXED: "Mixed",
        FILTER_UNKNOWN: "Unknown",
    }
)

BLOCK_TYPE_LABELS: Mapping[int, str] = MappingProxyType(
    {
        BlockType.STORED: "Stored",
        BlockType.FIXED_HUFFMAN: "FixedHuffman",
        BlockType.DYNAMIC_HUFFMAN: "DynamicHuffman",
    }
)


def describe(table: Mapping[int, str], value: int) -> str:
    """``"Truecolor (2)"`` for known codes, ``"9"`` for unknown ones."""
    label = table.get(value)
    if label is None:
        return str(value)
    return f"{label} ({value})"
