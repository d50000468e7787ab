import io
import os
import time

import pytest

from huffzip import server
from huffzip.config_loader import Settings
from huffzip.server import create_app


@pytest.fixture
def settings(tmp_path):
    return Settings(upload_dir=str(tmp_path / "uploads"))


@pytest.fixture
def client(settings):
    app = create_app(settings)
    app.config["TESTING"] = True
    return app.test_client()


def _upload(client, content, filename, action):
    return client.post(
        "/upload",
        data={"file": (io.BytesIO(content), filename), "action": action},
        content_type="multipart/form-data",
    )


def test_index(client):
    response = client.get("/")
    assert response.status_code == 200
    assert response.get_json()["status"] == "ok"


def test_compress_then_decompress(client, settings, tmp_path):
    content = b"hello world " * 1000
    response = _upload(client, content, "test.txt", "compress")
    assert response.status_code == 200
    result = response.get_json()
    assert result["filename"] == "test.txt.huff"
    assert result["originalSize"] == len(content)
    assert result["processedSize"] < len(content)
    assert result["ratio"] > 0
    assert result["downloadPath"] == "/download/test.txt.huff"

    download = client.get(result["downloadPath"])
    assert download.status_code == 200
    assert "attachment" in download.headers["Content-Disposition"]
    compressed = download.data

    response = _upload(client, compressed, "test.txt.huff", "decompress")
    assert response.status_code == 200
    result = response.get_json()
    assert result["filename"] == "test.txt"
    assert result["processedSize"] == len(content)
    assert client.get("/download/test.txt").data == content


def test_decompress_without_suffix(client):
    compressed, _ = server.HuffmanCompressor.compress_bytes(b"abc")
    result = _upload(client, compressed, "blob", "decompress").get_json()
    assert result["filename"] == "blob.out"


def test_missing_file(client):
    response = client.post("/upload", data={"action": "compress"})
    assert response.status_code == 400


def test_bad_action(client):
    response = _upload(client, b"abc", "a.txt", "explode")
    assert response.status_code == 400


def test_corrupt_upload(client):
    response = _upload(client, b"HZ\x00\x01\x00\x00\x00\x05", "bad.huff", "decompress")
    assert response.status_code == 422
    assert response.get_json()["kind"] == "malformed_header"


def test_download_missing(client):
    assert client.get("/download/nothing-here").status_code == 404


def test_upload_too_large(tmp_path):
    app = create_app(Settings(upload_dir=str(tmp_path), max_upload_bytes=64))
    response = _upload(app.test_client(), b"x" * 1024, "big.bin", "compress")
    assert response.status_code == 413


def test_processing_timeout(tmp_path, monkeypatch):
    def slow(*args):
        time.sleep(0.5)
        return {}

    monkeypatch.setattr(server, "process_upload", slow)
    app = create_app(Settings(upload_dir=str(tmp_path), processing_timeout=0.05))
    response = _upload(app.test_client(), b"abc", "a.txt", "compress")
    assert response.status_code == 504


def test_late_result_is_not_written(settings):
    os.makedirs(settings.upload_dir, exist_ok=True)
    with pytest.raises(TimeoutError):
        server.process_upload(
            b"hello world", "late.txt", "compress", settings, deadline=time.monotonic() - 1
        )
    assert not os.path.exists(os.path.join(settings.upload_dir, "late.txt.huff"))


def test_result_within_deadline_is_written(settings):
    os.makedirs(settings.upload_dir, exist_ok=True)
    result = server.process_upload(
        b"hello world", "on_time.txt", "compress", settings, deadline=time.monotonic() + 60
    )
    assert os.path.exists(os.path.join(settings.upload_dir, result["filename"]))
