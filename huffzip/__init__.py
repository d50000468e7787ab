"""
huffzip - lossless Huffman compressor with optional RLE pre-processing
"""

from .codec import CompressedData, compress, decompress, validate_code_table
from .container import read_container, write_container
from .errors import (
    HuffmanDecodeError,
    InvalidCodeError,
    MalformedHeaderError,
    RLEFormatError,
    TruncatedPayloadError,
    UnsupportedVersionError,
)
from .huffman_compressor import HuffmanCompressor

__version__ = "0.1.0"

__all__ = [
    "CompressedData",
    "HuffmanCompressor",
    "HuffmanDecodeError",
    "InvalidCodeError",
    "MalformedHeaderError",
    "RLEFormatError",
    "TruncatedPayloadError",
    "UnsupportedVersionError",
    "compress",
    "decompress",
    "read_container",
    "validate_code_table",
    "write_container",
]
