"""Structural analysis of PNG byte streams."""

from .blocks import BlockRecord, BlockStat, BlockTotals, BlockType, HuffmanCode
from .chunks import ChunkRecord
from .document import PngDocument, analyze_png
from .errors import (
    DecompressionError,
    MissingHeaderError,
    NotPngError,
    PngAnalysisError,
    TruncatedInputError,
    UnterminatedStreamError,
)
from .filters import FILTER_MIXED, FILTER_UNKNOWN, FilterSummary, FilterType
from .header import ColourType, ImageHeader, is_png
from .inflate import ZlibInflater
from .palette import PaletteEntry
from .report import build_report

__all__ = [
    "BlockRecord",
    "BlockStat",
    "BlockTotals",
    "BlockType",
    "ChunkRecord",
    "ColourType",
    "DecompressionError",
    "FILTER_MIXED",
    "FILTER_UNKNOWN",
    "FilterSummary",
    "FilterType",
    "HuffmanCode",
    "ImageHeader",
    "MissingHeaderError",
    "NotPngError",
    "PaletteEntry",
    "PngAnalysisError",
    "PngDocument",
    "TruncatedInputError",
    "UnterminatedStreamError",
    "ZlibInflater",
    "analyze_png",
    "build_report",
    "is_png",
]
