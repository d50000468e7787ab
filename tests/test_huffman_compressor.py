import os

import pytest

from huffzip import HuffmanCompressor, MalformedHeaderError, TruncatedPayloadError
from huffzip.huffman_compressor import MAGIC, TRANSFORM_NONE, TRANSFORM_RLE, size_report


@pytest.mark.parametrize("use_rle", [False, True])
@pytest.mark.parametrize(
    "data", [b"", b"A" * 10240, b"hello world" * 50, bytes(range(256))]
)
def test_bytes_round_trip(data, use_rle):
    compressed, _ = HuffmanCompressor.compress_bytes(data, use_rle=use_rle)
    restored, _ = HuffmanCompressor.decompress_bytes(compressed)
    assert restored == data


def test_framing_records_transform():
    plain, _ = HuffmanCompressor.compress_bytes(b"abc")
    rle, _ = HuffmanCompressor.compress_bytes(b"abc", use_rle=True)
    assert plain[:2] == MAGIC and plain[2] == TRANSFORM_NONE
    assert rle[:2] == MAGIC and rle[2] == TRANSFORM_RLE


def test_rle_helps_on_long_runs():
    data = b"A" * 5000 + b"B" * 5000
    plain, _ = HuffmanCompressor.compress_bytes(data)
    rle, _ = HuffmanCompressor.compress_bytes(data, use_rle=True)
    assert len(rle) < len(plain)


def test_log_info():
    _, log_info = HuffmanCompressor.compress_bytes(b"aaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaab")
    assert log_info.startswith("Size reduced by")
    _, log_info = HuffmanCompressor.compress_bytes(b"")
    assert log_info.startswith("Size increased by")


def test_size_report():
    assert size_report(100, 60) == "Size reduced by 40 bytes (40.0% total saving)"
    assert size_report(10, 15) == "Size increased by 5 bytes"


@pytest.mark.parametrize("blob", [b"", b"HZ", b"XX\x00\x01", b"HZ\x07\x01"])
def test_bad_framing(blob):
    with pytest.raises(MalformedHeaderError):
        HuffmanCompressor.decompress_bytes(blob)


def test_corrupted_header_is_rejected():
    compressed, _ = HuffmanCompressor.compress_bytes(b"Hello World" * 50)
    corrupted = bytearray(compressed)
    corrupted[3] ^= 0xFF
    with pytest.raises(MalformedHeaderError):
        HuffmanCompressor.decompress_bytes(bytes(corrupted))


def test_truncated_stream():
    compressed, _ = HuffmanCompressor.compress_bytes(b"This is a test" * 100)
    with pytest.raises(TruncatedPayloadError):
        HuffmanCompressor.decompress_bytes(compressed[:-3])


def test_file_helpers(tmp_path):
    source = tmp_path / "input.txt"
    source.write_bytes(b"hello world " * 100)
    packed = tmp_path / "input.txt.huff"
    restored = tmp_path / "restored.txt"

    HuffmanCompressor.compress_file(str(source), str(packed), use_rle=True)
    HuffmanCompressor.decompress_file(str(packed), str(restored))

    assert restored.read_bytes() == source.read_bytes()
    assert packed.stat().st_size < source.stat().st_size


def test_corrupt_file_leaves_no_output(tmp_path):
    packed = tmp_path / "broken.huff"
    packed.write_bytes(b"HZ\x00\x01\x00\x00\x00\x05")
    restored = tmp_path / "broken"
    with pytest.raises(MalformedHeaderError):
        HuffmanCompressor.decompress_file(str(packed), str(restored))
    assert not os.path.exists(restored)
