from pngscope.header import ColourType
from pngscope.palette import PaletteBuilder, PaletteEntry


def _palette(n):
    builder = PaletteBuilder()
    builder.add_plte(memoryview(bytes(v for i in range(n) for v in (i, i + 1, i + 2))))
    return builder


def test_plte_entries_default_opaque():
    entries = _palette(3).entries()
    assert entries == (
        PaletteEntry(0, 1, 2, 255),
        PaletteEntry(1, 2, 3, 255),
        PaletteEntry(2, 3, 4, 255),
    )


def test_trns_overrides_prefix_only():
    builder = _palette(5)
    builder.apply_trns(memoryview(b"\x00\x40\x80"), ColourType.INDEXED_COLOR)
    alphas = [entry.alpha for entry in builder.entries()]
    assert alphas == [0, 0x40, 0x80, 255, 255]


def test_trns_longer_than_palette_is_clamped():
    builder = _palette(2)
    builder.apply_trns(memoryview(b"\x01\x02\x03\x04"), ColourType.INDEXED_COLOR)
    assert [entry.alpha for entry in builder.entries()] == [1, 2]


def test_trns_ignored_for_other_colour_types_and_before_plte():
    builder = PaletteBuilder()
    builder.apply_trns(memoryview(b"\x00"), ColourType.INDEXED_COLOR)
    assert builder.entries() == ()

    builder = _palette(2)
    builder.apply_trns(memoryview(b"\x00\x00"), ColourType.TRUECOLOR)
    assert [entry.alpha for entry in builder.entries()] == [255, 255]


def test_trailing_partial_entry_dropped():
    builder = PaletteBuilder()
    builder.add_plte(memoryview(b"\x01\x02\x03\x04\x05"))
    assert builder.entries() == (PaletteEntry(1, 2, 3),)
