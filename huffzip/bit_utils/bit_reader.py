from typing import Optional

from bitarray import bitarray


class BitReader:
    """
    A class for reading bits, MSB first, from an in-memory byte buffer.
    """

    def __init__(self, data: bytes, bit_count: Optional[int] = None) -> None:
        """
        Initialize BitReader over the given bytes.

        Args:
            data: Packed bytes
            bit_count: Number of meaningful bits; the rest is treated as padding

        Raises:
            ValueError: If bit_count is negative or larger than the buffer
        """
        self.bits = bitarray(endian="big")
        self.bits.frombytes(bytes(data))
        if bit_count is not None:
            if bit_count < 0 or bit_count > len(self.bits):
                raise ValueError(
                    f"Bit count {bit_count} outside of buffer with {len(self.bits)} bits"
                )
            del self.bits[bit_count:]
        self.pos = 0

    def read_bit(self) -> int:
        """
        Read one bit from the stream.

        Returns:
            The bit value (0 or 1)

        Raises:
            EOFError: If the bit stream is exhausted
        """
        if self.pos >= len(self.bits):
            raise EOFError("Bit stream length exceeded")
        val = self.bits[self.pos]
        self.pos += 1
        return val

    def bits_remaining(self) -> int:
        """Number of bits not read yet."""
        return len(self.bits) - self.pos


def unpack_bits(data: bytes, bit_count: Optional[int] = None) -> bitarray:
    """
    Unpack bytes into their MSB-first bit sequence,
    optionally cut down to bit_count bits.
    """
    return BitReader(data, bit_count).bits
