"""
Binary container for Huffman-compressed data.

Layout, integers big-endian unsigned:

    u8   format version
    u32  number of code records
    per record: u8 symbol, u8 code length, code as ASCII '0'/'1'
    u32  number of encoded symbols
    ...  packed payload
"""

import logging
import struct

from .codec import CompressedData, validate_code_table
from .errors import MalformedHeaderError, UnsupportedVersionError

logger = logging.getLogger(__name__)

FORMAT_VERSION = 1
MAX_SYMBOLS = 256
MAX_CODE_LENGTH = 255
MAX_SYMBOL_COUNT = 0xFFFFFFFF

_VERSION = struct.Struct(">B")
_U32 = struct.Struct(">I")
_RECORD = struct.Struct(">BB")
_BIT_CHARS = frozenset(b"01")
_FULL_CODE_SPACE = 1 << MAX_CODE_LENGTH


def write_container(code_table: dict[int, str], payload: bytes, symbol_count: int) -> bytes:
    """
    Serialize a code table, packed payload and symbol count.

    Records are written in ascending symbol order so equal inputs
    always produce identical bytes.

    Raises:
        ValueError: if a field does not fit the format
    """
    if len(code_table) > MAX_SYMBOLS:
        raise ValueError(f"Too many symbols: {len(code_table)}")
    if not 0 <= symbol_count <= MAX_SYMBOL_COUNT:
        raise ValueError(f"Symbol count {symbol_count} does not fit in 32 bits")

    header = bytearray()
    header.extend(_VERSION.pack(FORMAT_VERSION))
    header.extend(_U32.pack(len(code_table)))
    for sym, code in sorted(code_table.items()):
        if not 0 <= sym <= 255:
            raise ValueError(f"Symbol {sym} is not a byte value")
        if len(code) > MAX_CODE_LENGTH:
            raise ValueError(f"Code of symbol {sym} is longer than {MAX_CODE_LENGTH} bits")
        code_bytes = code.encode("ascii")
        if not _BIT_CHARS.issuperset(code_bytes):
            raise ValueError(f"Code of symbol {sym} is not a bit string: {code!r}")
        header.extend(_RECORD.pack(sym, len(code_bytes)))
        header.extend(code_bytes)
    header.extend(_U32.pack(symbol_count))

    logger.debug(
        "Container header %d bytes, payload %d bytes", len(header), len(payload)
    )
    return bytes(header) + bytes(payload)


class _HeaderParser:
    """Cursor over the container bytes that fails with MalformedHeaderError."""

    def __init__(self, data: bytes):
        self.data = memoryview(data)
        self.pos = 0

    def take(self, size: int, field: str) -> bytes:
        end = self.pos + size
        if end > len(self.data):
            raise MalformedHeaderError(
                f"Truncated {field} at offset {self.pos}: "
                f"need {size} bytes, {len(self.data) - self.pos} left"
            )
        chunk = self.data[self.pos:end].tobytes()
        self.pos = end
        return chunk

    def unpack(self, fmt: struct.Struct, field: str):
        return fmt.unpack(self.take(fmt.size, field))

    def rest(self) -> bytes:
        return self.data[self.pos:].tobytes()


def read_container(data: bytes) -> CompressedData:
    """
    Parse bytes produced by write_container.

    Raises:
        MalformedHeaderError: truncated or inconsistent header
        UnsupportedVersionError: unknown format version
        InvalidCodeError: the stored codes are not a usable prefix code
    """
    parser = _HeaderParser(bytes(data))

    (version,) = parser.unpack(_VERSION, "format version")
    if version != FORMAT_VERSION:
        raise UnsupportedVersionError(f"Unsupported container version {version}")

    (num_codes,) = parser.unpack(_U32, "symbol count")
    if num_codes > MAX_SYMBOLS:
        raise MalformedHeaderError(f"Header declares {num_codes} symbols, at most {MAX_SYMBOLS} allowed")

    code_table: dict[int, str] = {}
    # code space used by the parsed codes, in units of 2**-MAX_CODE_LENGTH
    used_space = 0
    for index in range(num_codes):
        if used_space == _FULL_CODE_SPACE:
            raise MalformedHeaderError(
                f"Header declares {num_codes} records, code table complete after {index}"
            )
        field = f"record {index + 1} of {num_codes}"
        sym, code_len = parser.unpack(_RECORD, field)
        code_bytes = parser.take(code_len, field)
        if not _BIT_CHARS.issuperset(code_bytes):
            raise MalformedHeaderError(f"{field} holds non-binary code bytes")
        if sym in code_table:
            raise MalformedHeaderError(f"{field} repeats symbol {sym}")
        code_table[sym] = code_bytes.decode("ascii")
        if code_len:
            used_space += 1 << (MAX_CODE_LENGTH - code_len)

    (symbol_count,) = parser.unpack(_U32, "original symbol count")
    if symbol_count and not code_table:
        raise MalformedHeaderError(f"Header declares {symbol_count} encoded symbols but no codes")

    validate_code_table(code_table)
    payload = parser.rest()
    logger.debug(
        "Read container with %d codes, %d symbols, %d payload bytes",
        len(code_table), symbol_count, len(payload),
    )
    return CompressedData(code_table, payload, symbol_count)
