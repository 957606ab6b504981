"""Palette construction from ``PLTE`` with ``tRNS`` alpha merged in."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Tuple

from .header import ColourType

log = logging.getLogger(__name__)

OPAQUE = 255


@dataclass(frozen=True)
class PaletteEntry:
    red: int
    green: int
    blue: int
    alpha: int = OPAQUE

    def as_rgba(self) -> Tuple[int, int, int, int]:
        return (self.red, self.green, self.blue, self.alpha)


class PaletteBuilder:
    """Accumulates palette state for one parse."""

    def __init__(self) -> None:
        self._entries: List[PaletteEntry] = []
        self._seen_plte = False

    def add_plte(self, payload: memoryview) -> None:
        if len(payload) % 3:
            log.warning(
                "PLTE length %d is not a multiple of 3; ignoring %d trailing bytes",
                len(payload),
                len(payload) % 3,
            )
        if self._seen_plte:
            log.warning("Duplicate PLTE chunk replaces the earlier palette")
        usable = len(payload) - len(payload) % 3
        self._entries = [
            PaletteEntry(payload[i], payload[i + 1], payload[i + 2])
            for i in range(0, usable, 3)
        ]
        self._seen_plte = True

    def apply_trns(self, payload: memoryview, colour_type: int) -> None:
        """Overwrite alpha for indexed images; no-op for anything else."""
        if colour_type != ColourType.INDEXED_COLOR:
            return
        if not self._seen_plte:
            log.warning("tRNS appears before PLTE; transparency ignored")
            return
        count = min(len(payload), len(self._entries))
        for index in range(count):
            entry = self._entries[index]
            self._entries[index] = PaletteEntry(entry.red, entry.green, entry.blue, payload[index])

    def entries(self) -> Tuple[PaletteEntry, ...]:
        return tuple(self._entries)
