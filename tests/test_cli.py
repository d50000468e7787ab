import pytest
from flask import Flask

from huffzip.cli import default_output, main
from huffzip.huffman_compressor import TRANSFORM_RLE


def test_compress_and_decompress_files(tmp_path):
    source = tmp_path / "notes.txt"
    source.write_bytes(b"compress me " * 200)

    assert main(["compress", str(source)]) == 0
    packed = tmp_path / "notes.txt.huff"
    assert packed.exists()

    source.unlink()
    assert main(["decompress", str(packed)]) == 0
    assert source.read_bytes() == b"compress me " * 200


def test_rle_flag(tmp_path):
    source = tmp_path / "runs.bin"
    source.write_bytes(b"\x00" * 1000)
    target = tmp_path / "runs.huff"
    assert main(["compress", str(source), str(target), "--rle"]) == 0
    assert target.read_bytes()[2] == TRANSFORM_RLE


def test_missing_input(tmp_path):
    assert main(["compress", str(tmp_path / "absent.txt")]) == 1


def test_corrupt_input(tmp_path):
    packed = tmp_path / "bad.huff"
    packed.write_bytes(b"not a huff file")
    assert main(["decompress", str(packed)]) == 1
    assert not (tmp_path / "bad").exists()


def test_default_output():
    assert default_output("a.txt", "compress") == "a.txt.huff"
    assert default_output("a.txt.huff", "decompress") == "a.txt"
    assert default_output("a.bin", "decompress") == "a.bin.out"


def test_serve_uses_port_override(tmp_path, monkeypatch):
    calls = []
    monkeypatch.chdir(tmp_path)
    monkeypatch.setattr(Flask, "run", lambda self, host, port: calls.append((host, port)))
    assert main(["serve", "-p", "9999"]) == 0
    assert calls == [("127.0.0.1", 9999)]


def test_command_is_required():
    with pytest.raises(SystemExit):
        main([])
