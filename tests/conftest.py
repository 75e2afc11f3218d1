import io

import pytest
from fastapi.testclient import TestClient
from PIL import Image

from main import app


@pytest.fixture
def client():
    """FastAPI test client (does not raise server exceptions)."""
    return TestClient(app, raise_server_exceptions=False)


@pytest.fixture
def sample_png():
    img = Image.new("RGB", (16, 16), color=(200, 40, 40))
    buf = io.BytesIO()
    img.save(buf, format="PNG")
    return buf.getvalue()


@pytest.fixture
def sample_jpeg():
    img = Image.new("RGB", (16, 16), color=(40, 200, 40))
    buf = io.BytesIO()
    img.save(buf, format="JPEG")
    return buf.getvalue()


@pytest.fixture
def make_file(tmp_path):
    """Write bytes to a file under tmp_path and return its path as str."""

    def _make(data: bytes, name: str = "upload.bin") -> str:
        path = tmp_path / name
        path.write_bytes(data)
        return str(path)

    return _make


class StubMetadata:
    """FileMetadataAccessor with canned answers, records every call."""

    def __init__(self, exists=True, readable=True, size=0, mime=None):
        self._exists = exists
        self._readable = readable
        self._size = size
        self._mime = mime
        self.calls = []

    def exists(self, path):
        self.calls.append(("exists", path))
        return self._exists

    def is_readable(self, path):
        self.calls.append(("is_readable", path))
        return self._readable

    def size_bytes(self, path):
        self.calls.append(("size_bytes", path))
        return self._size

    def mime_type(self, path):
        self.calls.append(("mime_type", path))
        return self._mime


@pytest.fixture
def stub_metadata():
    return StubMetadata
