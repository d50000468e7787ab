from abc import ABC, abstractmethod
import io
from typing import BinaryIO, Tuple


class Compressor(ABC):
    """
    Interface describing compression and decompression of streams,
    files and byte strings.
    """

    @abstractmethod
    def compress(self, input_stream: BinaryIO, output_stream: BinaryIO) -> str:
        """
        Reads all bytes from the input stream, compresses them and
        writes the result to the output stream.

        Args:
            input_stream: Input stream with raw data
            output_stream: Output stream for compressed data

        Returns:
            Line with information for logging
        """

    @abstractmethod
    def decompress(self, input_stream: BinaryIO, output_stream: BinaryIO) -> str:
        """
        Reads compressed bytes from the input stream, decompresses them
        and writes the restored data to the output stream.

        Args:
            input_stream: Input stream with compressed data
            output_stream: Output stream for restored data

        Returns:
            Line with information for logging
        """

    @classmethod
    def compress_file(cls, input_file: str, output_file: str, **options) -> str:
        """
        Helper for compressing a file.

        Args:
            input_file: Path to the input file
            output_file: Path to the output file
            options: Keyword arguments passed to the compressor constructor

        Returns:
            Compression information
        """
        compressor = cls(**options)
        with open(input_file, 'rb') as in_file, open(output_file, 'wb') as out_file:
            return compressor.compress(in_file, out_file)

    @classmethod
    def decompress_file(cls, input_file: str, output_file: str, **options) -> str:
        """
        Helper for decompressing a file.

        Args:
            input_file: Path to the compressed file
            output_file: Path to the output file
            options: Keyword arguments passed to the compressor constructor

        Returns:
            Decompression information
        """
        compressor = cls(**options)
        with open(input_file, 'rb') as in_file:
            in_buffer = io.BytesIO(in_file.read())
        # decode fully before touching the output, so a corrupt input leaves no file behind
        out_buffer = io.BytesIO()
        log_info = compressor.decompress(in_buffer, out_buffer)
        with open(output_file, 'wb') as out_file:
            out_file.write(out_buffer.getvalue())
        return log_info

    @classmethod
    def compress_bytes(cls, data: bytes, **options) -> Tuple[bytes, str]:
        """
        Helper for compressing bytes.

        Args:
            data: Input data

        Returns:
            Tuple (compressed data, compression information)
        """
        compressor = cls(**options)
        in_buffer = io.BytesIO(data)
        out_buffer = io.BytesIO()
        log_info = compressor.compress(in_buffer, out_buffer)
        return out_buffer.getvalue(), log_info

    @classmethod
    def decompress_bytes(cls, data: bytes, **options) -> Tuple[bytes, str]:
        """
        Helper for decompressing bytes.

        Args:
            data: Compressed data

        Returns:
            Tuple (restored data, decompression information)
        """
        compressor = cls(**options)
        in_buffer = io.BytesIO(data)
        out_buffer = io.BytesIO()
        log_info = compressor.decompress(in_buffer, out_buffer)
        return out_buffer.getvalue(), log_info
