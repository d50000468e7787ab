"""
server.py - HTTP front end for the Huffman compressor.

Accepts file uploads, compresses or decompresses them in memory and
stores the result in the upload directory for later download.
"""

import atexit
import logging
import os
import time
from concurrent.futures import ThreadPoolExecutor, TimeoutError as FutureTimeout
from typing import Optional

from flask import Flask, jsonify, request, send_from_directory
from werkzeug.exceptions import RequestEntityTooLarge
from werkzeug.utils import secure_filename

from .config_loader import Settings
from .errors import HuffmanDecodeError, RLEFormatError
from .huffman_compressor import COMPRESSED_SUFFIX, HuffmanCompressor

logger = logging.getLogger(__name__)

VALID_ACTIONS = {"compress", "decompress"}


def _ratio(numerator: int, denominator: int) -> float:
    if not denominator:
        return 0.0
    return round(numerator / denominator * 100, 2)


def process_upload(
    content: bytes,
    filename: str,
    action: str,
    settings: Settings,
    deadline: Optional[float] = None,
) -> dict:
    """
    Compress or decompress an uploaded file and write the result
    to the upload directory.

    deadline is a time.monotonic() value; once it has passed the
    result is discarded instead of written.

    Raises:
        TimeoutError: if the deadline passed before the result was written

    Returns:
        dict: ProcessResult with filename, sizes, ratio and download path
    """
    if action == "compress":
        processed, log_info = HuffmanCompressor.compress_bytes(content, use_rle=settings.use_rle)
        out_name = filename + COMPRESSED_SUFFIX
        ratio = _ratio(len(content) - len(processed), len(content))
    else:
        processed, log_info = HuffmanCompressor.decompress_bytes(content)
        if filename.endswith(COMPRESSED_SUFFIX) and len(filename) > len(COMPRESSED_SUFFIX):
            out_name = filename[: -len(COMPRESSED_SUFFIX)]
        else:
            out_name = filename + ".out"
        ratio = _ratio(len(processed), len(content))

    if deadline is not None and time.monotonic() > deadline:
        logger.warning("Discarding %s of %s finished after the deadline", action, filename)
        raise TimeoutError(f"{action} of {filename} finished after the deadline")

    with open(os.path.join(settings.upload_dir, out_name), "wb") as f:
        f.write(processed)

    logger.info("%s %s -> %s: %s", action, filename, out_name, log_info)
    return {
        "filename": out_name,
        "originalSize": len(content),
        "processedSize": len(processed),
        "ratio": ratio,
        "downloadPath": f"/download/{out_name}",
    }


def create_app(settings: Optional[Settings] = None) -> Flask:
    """Flask application factory"""
    settings = settings or Settings()
    os.makedirs(settings.upload_dir, exist_ok=True)

    app = Flask(__name__)
    app.config["MAX_CONTENT_LENGTH"] = settings.max_upload_bytes
    executor = ThreadPoolExecutor(max_workers=4, thread_name_prefix="huffzip")
    app.extensions["huffzip_executor"] = executor
    atexit.register(executor.shutdown, wait=False)

    @app.route("/", methods=["GET"])
    def index():
        return jsonify({"service": "huffzip", "status": "ok"})

    @app.route("/upload", methods=["POST"])
    def upload():
        """Compress or decompress the uploaded file"""
        upload_file = request.files.get("file")
        if upload_file is None or not upload_file.filename:
            return jsonify({"error": "A file is required"}), 400

        action = (request.form.get("action") or "").strip().lower()
        if action not in VALID_ACTIONS:
            return jsonify({"error": f"Action must be one of {sorted(VALID_ACTIONS)}"}), 400

        filename = secure_filename(upload_file.filename)
        if not filename:
            return jsonify({"error": "Invalid file name"}), 400

        content = upload_file.read()
        deadline = time.monotonic() + settings.processing_timeout
        future = executor.submit(process_upload, content, filename, action, settings, deadline)
        try:
            result = future.result(timeout=settings.processing_timeout)
        except (FutureTimeout, TimeoutError):
            logger.warning("%s of %s exceeded %ss", action, filename, settings.processing_timeout)
            return jsonify({"error": "Processing timed out"}), 504
        except (HuffmanDecodeError, RLEFormatError) as e:
            logger.warning("Rejected %s: %s", filename, e)
            return jsonify({"error": str(e), "kind": e.kind}), 422

        return jsonify(result)

    @app.route("/download/<path:filename>", methods=["GET"])
    def download(filename):
        """Serve a processed file as an attachment"""
        return send_from_directory(
            os.path.abspath(settings.upload_dir),
            secure_filename(filename),
            as_attachment=True,
            mimetype="application/octet-stream",
        )

    @app.errorhandler(RequestEntityTooLarge)
    def too_large(e):
        return jsonify({"error": f"Upload exceeds {settings.max_upload_bytes} bytes"}), 413

    return app
