"""
Exceptions raised while reading compressed data.

All decode errors derive from ValueError, so callers that only care
about "bad input" can keep catching ValueError.
"""


class HuffmanDecodeError(ValueError):
    """Base class for every error raised on the decode path."""

    kind = "decode_error"


class MalformedHeaderError(HuffmanDecodeError):
    """Container header is truncated or its records are inconsistent."""

    kind = "malformed_header"


class UnsupportedVersionError(MalformedHeaderError):
    """Container was written with a format version we cannot read."""

    kind = "unsupported_version"


class TruncatedPayloadError(HuffmanDecodeError):
    """Payload ended before the expected number of symbols was decoded."""

    kind = "truncated_payload"


class InvalidCodeError(HuffmanDecodeError):
    """Code table violates the prefix-free invariant or has unusable codes."""

    kind = "invalid_code"


class RLEFormatError(ValueError):
    """Serialized run-length data cannot be parsed."""

    kind = "rle_format"
