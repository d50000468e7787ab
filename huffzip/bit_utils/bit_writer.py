from bitarray import bitarray


class BitWriter:
    """
    A class for writing Huffman codes to a bitarray stream.
    Bits are stored MSB first; the final byte is padded with zeros.
    """

    def __init__(self) -> None:
        """Initialize a new BitWriter instance with an empty bitarray."""
        self.bits = bitarray(endian="big")

    def write_code(self, code: str) -> None:
        """
        Append a code given as a string of '0' and '1' characters.

        Args:
            code: Code string, e.g. "101"

        Raises:
            ValueError: If the string contains anything but '0' and '1'
        """
        if code.strip("01"):
            raise ValueError(f"Invalid code string: {code!r}")
        self.bits.extend(code)

    def write_symbols(self, code_map: dict[int, bitarray], data: bytes) -> None:
        """
        Append the code of every symbol of data.

        Args:
            code_map: Mapping of symbol to its code as a bitarray
            data: Symbols to encode

        Raises:
            ValueError: If a symbol has no code in code_map
        """
        missing = set(data).difference(code_map)
        if missing:
            raise ValueError(f"Symbols without a code: {sorted(missing)}")
        self.bits.encode(code_map, data)

    def to_bytes(self) -> bytes:
        """
        Pack the written bits into bytes, zero padding the last byte.
        The writer itself is left unaligned.
        """
        return self.bits.tobytes()

    def __len__(self) -> int:
        return len(self.bits)


def pack_bits(bits: str) -> bytes:
    """
    Pack a '0'/'1' string MSB first into ceil(len(bits) / 8) bytes.

    >>> pack_bits("101")
    b'\\xa0'
    """
    writer = BitWriter()
    writer.write_code(bits)
    return writer.to_bytes()
