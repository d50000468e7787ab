from .bit_reader import BitReader, unpack_bits
from .bit_writer import BitWriter, pack_bits

__all__ = ["BitReader", "BitWriter", "pack_bits", "unpack_bits"]
