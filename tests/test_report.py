import json
import zlib

from pngscope import analyze_png, build_report
from pngscope.labels import COLOUR_TYPE_LABELS, INTERLACE_METHOD_LABELS, describe

import png_factory as pf


def _fixed_png():
    raw = pf.scanlines([1, 2, 2], 3)
    obj = zlib.compressobj(9, zlib.DEFLATED, 15, 9, zlib.Z_FIXED)
    compressed = obj.compress(raw) + obj.flush()
    return pf.png(pf.ihdr(3, 3), pf.chunk(b"IDAT", compressed), pf.iend())


def test_describe_known_and_unknown_codes():
    assert describe(COLOUR_TYPE_LABELS, 2) == "Truecolor (2)"
    assert describe(INTERLACE_METHOD_LABELS, 1) == "Adam7 (1)"
    assert describe(COLOUR_TYPE_LABELS, 9) == "9"


def test_report_is_json_serialisable():
    report = build_report(analyze_png(_fixed_png()), filename="fixed.png")
    decoded = json.loads(json.dumps(report))
    assert decoded["filename"] == "fixed.png"
    assert decoded["header"]["colour_type"] == "Grayscale (0)"
    assert decoded["header"]["filter_method"] == "Basic (0)"
    assert [c["type"] for c in decoded["chunks"]] == ["IHDR", "IDAT", "IEND"]
    assert decoded["chunks"][-1]["crc_stored"] == "AE426082"


def test_mixed_filter_section_lists_counts():
    report = build_report(analyze_png(_fixed_png()))
    filters = report["filters"]
    assert filters["mode_label"] == "Mixed"
    assert filters["lines"] == [1, 2, 2]
    assert filters["counts"] == [
        {"filter": "Sub (1)", "count": 1, "ratio": 33.33},
        {"filter": "Up (2)", "count": 2, "ratio": 66.67},
    ]


def test_uniform_filter_section_is_compact():
    report = build_report(analyze_png(pf.simple_png(width=2, height=2, filters=[4, 4])))
    assert report["filters"] == {"mode": 4, "mode_label": "Paeth (4)", "scanlines": 2}


def test_block_and_huffman_sections():
    report = build_report(analyze_png(_fixed_png()))
    assert [b["type"] for b in report["blocks"]] == ["FixedHuffman"]
    huffman = report["huffman"]["0"]
    assert len(huffman["codes"]) == 288
    eob = next(row for row in huffman["codes"] if row["value"] == 256)
    assert eob == {"value": 256, "code": "0000000", "count": 1, "bits": 7}
    assert huffman["count_total"] == sum(row["count"] for row in huffman["codes"])
    totals = report["totals"]
    assert totals["plain"] == 12
    assert totals["literal"] + totals["match_total"] == 12


def test_no_matches_reports_not_applicable():
    report = build_report(analyze_png(pf.simple_png(width=1, height=1)))
    for block in report["blocks"]:
        if block["match_count"] == 0:
            assert block["match_average"] is None


def test_stored_blocks_have_no_huffman_section():
    raw = pf.scanlines([0, 0], 4)
    data = pf.png(pf.ihdr(4, 2), pf.chunk(b"IDAT", zlib.compress(raw, 0)), pf.iend())
    report = build_report(analyze_png(data))
    assert [b["type"] for b in report["blocks"]] == ["Stored"]
    assert report["huffman"] == {}
