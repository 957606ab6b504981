#!/usr/bin/env python3
"""Quick smoke test: encode a few images with Pillow and analyse them."""

import io
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parent.parent
try:
    import pngscope  # type: ignore  # noqa: F401
except ModuleNotFoundError:
    sys.path.insert(0, str(ROOT))
    import pngscope  # type: ignore  # noqa: F401

from PIL import Image

from pngscope import analyze_png, build_report

SAMPLES = {
    "gray": ("L", (16, 8)),
    "rgb": ("RGB", (24, 12)),
    "rgba": ("RGBA", (10, 10)),
    "palette": ("P", (12, 6)),
}


def encode_sample(mode: str, size) -> bytes:
    img = Image.new(mode, size)
    width, height = size
    if mode == "P":
        img.putpalette([i % 256 for i in range(48)])
        img.putdata([(x + y) % 16 for y in range(height) for x in range(width)])
    else:
        bands = len(mode)
        pixels = []
        for y in range(height):
            for x in range(width):
                if bands == 1:
                    pixels.append((x * y) % 256)
                else:
                    pixels.append(tuple((x * 13 + y * 7 + b * 31) % 256 for b in range(bands)))
        img.putdata(pixels)
    buf = io.BytesIO()
    img.save(buf, format="PNG")
    return buf.getvalue()


def main() -> int:
    failures = 0
    for name, (mode, size) in SAMPLES.items():
        data = encode_sample(mode, size)
        try:
            report = build_report(analyze_png(data), filename=f"{name}.png")
        except Exception as exc:
            print(f"  x {name}: {exc}")
            failures += 1
            continue
        header = report["header"]
        totals = report["totals"]
        print(
            f"  ok {name}: {header['width']}x{header['height']} {header['colour_type']}, "
            f"{len(report['chunks'])} chunks, {len(report['blocks'])} blocks, "
            f"filter {report['filters']['mode_label']}, ratio {totals['ratio']}%"
        )
        if totals["plain"] != report["totals"]["image_data_length"]:
            print(f"  x {name}: block plain total does not match image data length")
            failures += 1

    if failures:
        print(f"Smoke test failed: {failures} sample(s) did not analyse cleanly.")
        return 1
    print("Smoke test passed: all samples analysed.")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
