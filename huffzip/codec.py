"""
Huffman encoder and decoder working on in-memory byte buffers.
"""

import logging
from typing import NamedTuple

from bitarray import bitarray

from .bit_utils import BitReader, BitWriter
from .errors import InvalidCodeError, TruncatedPayloadError
from .huffman_coding import build_code_table

logger = logging.getLogger(__name__)


class CompressedData(NamedTuple):
    """Code table, packed payload and number of encoded symbols."""

    code_table: dict[int, str]
    payload: bytes
    symbol_count: int


def validate_code_table(code_table: dict[int, str]) -> None:
    """
    Check that a code table can be decoded unambiguously.

    Raises:
        InvalidCodeError: for non-binary codes, empty codes in a
            multi-symbol table, duplicated codes or prefix violations
    """
    for sym, code in code_table.items():
        if not isinstance(code, str) or code.strip("01"):
            raise InvalidCodeError(f"Code for symbol {sym} is not a bit string: {code!r}")
        if not code and len(code_table) > 1:
            raise InvalidCodeError(f"Symbol {sym} has an empty code in a multi-symbol table")

    # after sorting, a code that prefixes any other code prefixes its successor
    ordered = sorted(code_table.items(), key=lambda item: item[1])
    for (sym_a, code_a), (sym_b, code_b) in zip(ordered, ordered[1:]):
        if code_a == code_b:
            raise InvalidCodeError(f"Symbols {sym_a} and {sym_b} share the code {code_a!r}")
        if code_b.startswith(code_a):
            raise InvalidCodeError(
                f"Code {code_a!r} of symbol {sym_a} is a prefix of code "
                f"{code_b!r} of symbol {sym_b}"
            )


def compress(data: bytes) -> CompressedData:
    """
    Huffman-encode data.

    Args:
        data: Input bytes, may be empty

    Returns:
        CompressedData with the code table, the MSB-first packed
        payload and the number of encoded symbols
    """
    data = bytes(data)
    code_table = build_code_table(data)
    writer = BitWriter()
    if data:
        writer.write_symbols(
            {sym: bitarray(code, endian="big") for sym, code in code_table.items()},
            data,
        )
    payload = writer.to_bytes()
    logger.debug(
        "Encoded %d symbols into %d bits (%d bytes)", len(data), len(writer), len(payload)
    )
    return CompressedData(code_table, payload, len(data))


def decompress(code_table: dict[int, str], payload: bytes, symbol_count: int) -> bytes:
    """
    Decode symbol_count symbols from payload using code_table.
    Bits left after the last symbol are padding and are ignored.

    Raises:
        InvalidCodeError: if the table is unusable or the bits stop
            matching any code
        TruncatedPayloadError: if payload runs out before symbol_count
            symbols were decoded
    """
    if symbol_count < 0:
        raise ValueError(f"Symbol count cannot be negative: {symbol_count}")
    if symbol_count == 0:
        return b""
    if not code_table:
        raise InvalidCodeError(f"Empty code table cannot decode {symbol_count} symbols")
    validate_code_table(code_table)

    if len(code_table) == 1:
        (sym, code), = code_table.items()
        if not code:
            return bytes([sym]) * symbol_count

    res_dict = {code: sym for sym, code in code_table.items()}
    max_len = max(len(code) for code in res_dict)
    reader = BitReader(payload)
    decoded_data = bytearray()
    curr_code = ""

    while len(decoded_data) < symbol_count:
        try:
            curr_code += "1" if reader.read_bit() else "0"
        except EOFError:
            raise TruncatedPayloadError(
                f"Payload exhausted after {len(decoded_data)} of {symbol_count} symbols"
            ) from None
        if curr_code in res_dict:
            decoded_data.append(res_dict[curr_code])
            curr_code = ""
        elif len(curr_code) >= max_len:
            raise InvalidCodeError(
                f"Bits {curr_code!r} at symbol {len(decoded_data)} match no code"
            )

    logger.debug(
        "Decoded %d symbols, %d padding bits ignored", symbol_count, reader.bits_remaining()
    )
    return bytes(decoded_data)
