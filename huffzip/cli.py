"""
Command line entry point: run the HTTP service or (de)compress files.
"""

import argparse
import logging
import sys
from typing import List, Optional

from .config_loader import load_config
from .errors import HuffmanDecodeError, RLEFormatError
from .huffman_compressor import COMPRESSED_SUFFIX, HuffmanCompressor

logger = logging.getLogger(__name__)


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="huffzip", description="Huffman coding based compressor"
    )
    parser.add_argument("--config", help="path to a YAML configuration file")
    commands = parser.add_subparsers(dest="command", required=True)

    serve = commands.add_parser("serve", help="run the upload/download HTTP service")
    serve.add_argument("-p", "--port", type=int, help="port to serve on")
    serve.add_argument("--host", help="interface to bind")

    compress = commands.add_parser("compress", help="compress a file")
    compress.add_argument("input")
    compress.add_argument("output", nargs="?")
    compress.add_argument("--rle", action="store_true", default=None,
                          help="apply run-length encoding before Huffman coding")

    decompress = commands.add_parser("decompress", help="decompress a .huff file")
    decompress.add_argument("input")
    decompress.add_argument("output", nargs="?")

    return parser.parse_args(argv)


def default_output(input_path: str, command: str) -> str:
    if command == "compress":
        return input_path + COMPRESSED_SUFFIX
    if input_path.endswith(COMPRESSED_SUFFIX) and len(input_path) > len(COMPRESSED_SUFFIX):
        return input_path[: -len(COMPRESSED_SUFFIX)]
    return input_path + ".out"


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    settings = load_config(args.config)
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if args.command == "serve":
        # imported lazily so file commands do not need Flask
        from .server import create_app

        settings = settings.with_overrides(port=args.port, host=args.host)
        app = create_app(settings)
        logger.info("Server starting on http://%s:%d", settings.host, settings.port)
        app.run(host=settings.host, port=settings.port)
        return 0

    output = args.output or default_output(args.input, args.command)
    try:
        if args.command == "compress":
            use_rle = settings.use_rle if args.rle is None else args.rle
            log_info = HuffmanCompressor.compress_file(args.input, output, use_rle=use_rle)
        else:
            log_info = HuffmanCompressor.decompress_file(args.input, output)
    except FileNotFoundError as e:
        logger.error("File not found: %s", e.filename)
        return 1
    except (HuffmanDecodeError, RLEFormatError) as e:
        logger.error("Cannot decompress %s: %s", args.input, e)
        return 1

    logger.info("%s -> %s: %s", args.input, output, log_info)
    return 0


if __name__ == "__main__":
    sys.exit(main())
