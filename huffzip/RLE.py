"""
Run-Length Encoding (RLE) transform applied before Huffman coding
"""

from .errors import RLEFormatError

MAX_RUN = 255


class RLECompressor:
    """Class for RLE compression and decompression"""

    @staticmethod
    def compress(data: bytes) -> list[tuple[int, bytes]]:
        """
        Compress data using RLE.

        Args:
            data: Input data as bytes

        Returns:
            List of (count, value) tuples, counts never exceed MAX_RUN
        """
        if not data:
            return []

        result = []
        current_byte = data[0]
        count = 1

        for byte in data[1:]:
            if byte == current_byte and count < MAX_RUN:
                count += 1
            else:
                result.append((count, bytes([current_byte])))
                current_byte = byte
                count = 1

        # Add the last run
        result.append((count, bytes([current_byte])))

        return result

    @staticmethod
    def decompress(runs: list[tuple[int, bytes]]) -> bytes:
        """
        Decompress RLE data.

        Args:
            runs: List of (count, value) tuples

        Returns:
            Decompressed data as bytes
        """
        result = bytearray()
        for count, byte_val in runs:
            result.extend(byte_val * count)
        return bytes(result)

    @staticmethod
    def encode(data: bytes) -> bytes:
        """
        Compress data and serialize the runs as [count][byte] pairs.
        """
        blob = bytearray()
        for count, byte in RLECompressor.compress(data):
            blob.append(count)
            blob.extend(byte)
        return bytes(blob)

    @staticmethod
    def decode(blob: bytes) -> bytes:
        """
        Parse [count][byte] pairs written by encode and expand them.

        Raises:
            RLEFormatError: for a dangling count byte or a zero count
        """
        if len(blob) % 2:
            raise RLEFormatError(f"RLE stream has odd length {len(blob)}")

        runs = []
        for pos in range(0, len(blob), 2):
            count = blob[pos]
            if count == 0:
                raise RLEFormatError(f"Zero run length at offset {pos}")
            runs.append((count, blob[pos + 1 : pos + 2]))

        return RLECompressor.decompress(runs)
