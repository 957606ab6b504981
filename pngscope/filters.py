"""Scanline filter-type extraction and classification."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import IntEnum
from types import MappingProxyType
from typing import Dict, Mapping, Optional, Tuple

import numpy as np

from .header import ColourType, ImageHeader

log = logging.getLogger(__name__)

# Sentinel modes; real filter types are 0..4.
FILTER_MIXED = -1
FILTER_UNKNOWN = -2


class FilterType(IntEnum):
    NONE = 0
    SUB = 1
    UP = 2
    AVERAGE = 3
    PAETH = 4


CHANNELS_PER_PIXEL: Mapping[int, int] = MappingProxyType(
    {
        ColourType.GRAYSCALE: 1,
        ColourType.INDEXED_COLOR: 1,
        ColourType.GRAYSCALE_WITH_ALPHA: 2,
        ColourType.TRUECOLOR: 3,
        ColourType.TRUECOLOR_WITH_ALPHA: 4,
    }
)


def channels_per_pixel(colour_type: int) -> Optional[int]:
    return CHANNELS_PER_PIXEL.get(colour_type)


def scanline_stride(colour_type: int, bit_depth: int, width: int) -> Optional[int]:
    """Bytes of filtered pixel data per scanline, excluding the filter byte."""
    channels = channels_per_pixel(colour_type)
    if channels is None:
        return None
    return (channels * bit_depth * width + 7) // 8


@dataclass(frozen=True)
class FilterSummary:
    """Filter bytes per scanline and the overall classification.

    ``mode`` is a filter type when every scanline agrees, ``FILTER_MIXED``
    otherwise, and ``FILTER_UNKNOWN`` when there were no scanlines.
    """

    filters: Tuple[int, ...] = ()
    mode: int = FILTER_UNKNOWN
    counts: Mapping[int, int] = field(default_factory=dict)

    @property
    def scanline_count(self) -> int:
        return len(self.filters)

    @property
    def is_mixed(self) -> bool:
        return self.mode == FILTER_MIXED

    def ratio(self, filter_type: int) -> Optional[float]:
        if not self.filters:
            return None
        return round(self.counts.get(filter_type, 0) / len(self.filters) * 100, 2)


def extract_filter_bytes(image_data: bytes, stride: int) -> Tuple[int, ...]:
    """Leading byte of every ``stride + 1`` step of the decompressed data."""
    if not image_data:
        return ()
    arr = np.frombuffer(image_data, dtype=np.uint8)
    return tuple(int(v) for v in arr[:: stride + 1])


def summarize_filters(filters: Tuple[int, ...]) -> FilterSummary:
    if not filters:
        return FilterSummary()

    mode = filters[0]
    previous = filters[0]
    counts: Dict[int, int] = {}
    for value in filters:
        if value != previous:
            mode = FILTER_MIXED
        previous = value
        counts[value] = counts.get(value, 0) + 1
    return FilterSummary(filters=filters, mode=mode, counts=MappingProxyType(counts))


def classify_filters(image_data: bytes, header: ImageHeader) -> FilterSummary:
    stride = scanline_stride(header.colour_type, header.bit_depth, header.width)
    if stride is None:
        log.warning(
            "Unknown colour type %d; cannot derive scanline stride", header.colour_type
        )
        return FilterSummary()
    return summarize_filters(extract_filter_bytes(image_data, stride))
