"""
Huffman compressor with optional RLE pre-processing.

File layout:
    2 bytes  magic b"HZ"
    u8       transform applied before Huffman coding (0 none, 1 RLE)
    ...      container, see container.py
"""

import logging
from typing import BinaryIO

from .codec import compress, decompress
from .compressor_ABC import Compressor
from .container import read_container, write_container
from .errors import MalformedHeaderError
from .RLE import RLECompressor

logger = logging.getLogger(__name__)

MAGIC = b"HZ"
COMPRESSED_SUFFIX = ".huff"
TRANSFORM_NONE = 0
TRANSFORM_RLE = 1


def size_report(original_size: int, final_size: int) -> str:
    """Human-readable size change used in the compressor log lines."""
    diff = original_size - final_size
    if diff > 0:
        ratio = (1 - final_size / original_size) * 100
        return f"Size reduced by {diff} bytes ({ratio:.1f}% total saving)"
    return f"Size increased by {-diff} bytes"


class HuffmanCompressor(Compressor):
    """
    Implements the .huff file format on top of the Huffman container.
    """

    def __init__(self, use_rle: bool = False):
        self.use_rle = use_rle

    def compress(self, input_stream: BinaryIO, output_stream: BinaryIO) -> str:
        """
        Compresses everything readable from input_stream into output_stream.
        Returns log information.
        """
        data = input_stream.read()
        transform = TRANSFORM_RLE if self.use_rle else TRANSFORM_NONE
        symbols = RLECompressor.encode(data) if self.use_rle else data

        compressed = compress(symbols)
        blob = MAGIC + bytes([transform]) + write_container(*compressed)
        output_stream.write(blob)

        log_info = size_report(len(data), len(blob))
        logger.info(
            "Compressed %d bytes to %d bytes (rle=%s, %d codes)",
            len(data), len(blob), self.use_rle, len(compressed.code_table),
        )
        return log_info

    def decompress(self, input_stream: BinaryIO, output_stream: BinaryIO) -> str:
        """
        Restores data written by compress. The transform byte decides
        whether RLE is undone, use_rle is not consulted.
        Returns log information.
        """
        blob = input_stream.read()
        if len(blob) < len(MAGIC) + 1:
            raise MalformedHeaderError("Input too short for a .huff file")
        if blob[: len(MAGIC)] != MAGIC:
            raise MalformedHeaderError("Invalid magic number")
        transform = blob[len(MAGIC)]
        if transform not in (TRANSFORM_NONE, TRANSFORM_RLE):
            raise MalformedHeaderError(f"Unknown transform id {transform}")

        symbols = decompress(*read_container(blob[len(MAGIC) + 1 :]))
        data = RLECompressor.decode(symbols) if transform == TRANSFORM_RLE else symbols
        output_stream.write(data)

        logger.info("Decompressed %d bytes to %d bytes", len(blob), len(data))
        return f"Restored {len(data)} bytes from {len(blob)} compressed bytes"
