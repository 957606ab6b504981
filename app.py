"""Flask entrypoint that exposes the PNG analyzer as a JSON endpoint."""

import os
from typing import Optional

from flask import Flask, jsonify, request

from pngscope import PngAnalysisError, analyze_png, build_report
from pngscope.report import chunk_to_dict

DEFAULT_MAX_BYTES = 8 * 1024 * 1024  # 8MB


def _max_bytes(value: Optional[str]) -> int:
    try:
        parsed = int(value) if value else DEFAULT_MAX_BYTES
    except ValueError:
        return DEFAULT_MAX_BYTES
    return parsed if parsed > 0 else DEFAULT_MAX_BYTES


def _env_flag(value: Optional[str]) -> bool:
    return str(value).strip().lower() in {"true", "1", "yes", "on"}


app = Flask(__name__)
app.config["MAX_IMAGE_BYTES"] = _max_bytes(os.getenv("PNGSCOPE_MAX_BYTES"))


@app.post("/api/identify")
def api_identify():
    image_file = request.files.get("image")
    if image_file is None:
        return jsonify({"error": "Image file is required"}), 400

    if not image_file.filename:
        return jsonify({"error": "Image file must have a filename"}), 400

    try:
        image_bytes = image_file.read()
    except Exception as e:
        return jsonify({"error": f"Failed to read image file: {str(e)}"}), 400

    if not image_bytes:
        return jsonify({"error": "Image file is empty"}), 400

    max_size = app.config["MAX_IMAGE_BYTES"]
    if len(image_bytes) > max_size:
        return jsonify({"error": f"Image file too large. Maximum size is {max_size} bytes"}), 400

    try:
        document = analyze_png(image_bytes)
        return jsonify(build_report(document, filename=image_file.filename))
    except PngAnalysisError as exc:
        return (
            jsonify(
                {
                    "error": f"Analysis failed: {str(exc)}",
                    "kind": type(exc).__name__,
                    "chunks": [chunk_to_dict(chunk) for chunk in exc.chunks],
                }
            ),
            400,
        )
    except Exception as exc:
        app.logger.exception("Unexpected error while analysing %s", image_file.filename)
        return jsonify({"error": f"Unexpected error during analysis: {str(exc)}"}), 500


if __name__ == "__main__":
    app.run(host="0.0.0.0", port=5000, debug=_env_flag(os.getenv("PNGSCOPE_DEBUG")))
