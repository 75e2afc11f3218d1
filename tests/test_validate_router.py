"""Tests for the /validate endpoint."""

import json
import os
from unittest.mock import patch

import pytest

from config import settings


@pytest.fixture(autouse=True)
def upload_dir(tmp_path):
    with patch.object(settings, "upload_tmp_dir", str(tmp_path)):
        yield tmp_path


def test_validate_png_accepted(client, sample_png):
    constraint = json.dumps({"max_size": "1M", "mime_types": ["image/*"]})
    resp = client.post(
        "/validate",
        files={"file": ("photo.png", sample_png, "image/png")},
        data={"constraint": constraint},
    )
    assert resp.status_code == 200
    body = resp.json()
    assert body["valid"] is True
    assert body["filename"] == "photo.png"
    assert body["violations"] == []


def test_validate_without_constraint(client):
    resp = client.post("/validate", files={"file": ("a.txt", b"hello", "text/plain")})
    assert resp.status_code == 200
    assert resp.json()["valid"] is True


def test_validate_too_large(client):
    constraint = json.dumps({"max_size": 1000})
    resp = client.post(
        "/validate",
        files={"file": ("a.txt", b"a" * 1100, "text/plain")},
        data={"constraint": constraint},
    )
    body = resp.json()
    assert body["valid"] is False
    [violation] = body["violations"]
    assert violation["kind"] == "too_large"
    assert violation["parameters"]["size"] == "1.1"
    assert violation["parameters"]["limit"] == "1"
    assert violation["parameters"]["suffix"] == "kB"
    assert "Allowed maximum size is 1 kB." in violation["message"]


def test_validate_client_declared_mime_type_ignored(client):
    """A text file claiming to be a PNG is still sniffed as text."""
    constraint = json.dumps({"mime_types": ["image/png"]})
    resp = client.post(
        "/validate",
        files={"file": ("fake.png", b"not really a png", "image/png")},
        data={"constraint": constraint},
    )
    [violation] = resp.json()["violations"]
    assert violation["kind"] == "mime_type"
    assert violation["parameters"]["type"] == '"text/plain"'


def test_validate_empty_file_reports_both(client):
    constraint = json.dumps({"disallow_empty": True, "mime_types": ["text/plain"]})
    resp = client.post(
        "/validate",
        files={"file": ("empty.txt", b"", "text/plain")},
        data={"constraint": constraint},
    )
    kinds = [v["kind"] for v in resp.json()["violations"]]
    assert kinds == ["empty", "mime_type"]


def test_validate_form_ceiling(client):
    resp = client.post(
        "/validate",
        files={"file": ("a.bin", b"x" * 500, "application/octet-stream")},
        data={"MAX_FILE_SIZE": "100"},
    )
    [violation] = resp.json()["violations"]
    assert violation["kind"] == "upload_form_size"
    assert violation["message"] == "The file is too large."


def test_validate_server_ceiling(client):
    constraint = json.dumps({"max_size": 10_000})
    with patch.object(settings, "upload_max_filesize_bytes", 200):
        resp = client.post(
            "/validate",
            files={"file": ("a.bin", b"x" * 500, "application/octet-stream")},
            data={"constraint": constraint},
        )
    [violation] = resp.json()["violations"]
    assert violation["kind"] == "upload_ini_size"
    assert violation["parameters"] == {"limit": 200, "suffix": "bytes"}


def test_validate_no_file(client):
    resp = client.post("/validate", data={"constraint": "{}"})
    assert resp.status_code == 200
    [violation] = resp.json()["violations"]
    assert violation["kind"] == "upload_no_file"


def test_validate_removes_stored_upload(client, upload_dir):
    client.post("/validate", files={"file": ("a.txt", b"hello", "text/plain")})
    assert os.listdir(upload_dir) == []


def test_validate_invalid_constraint_json(client):
    resp = client.post(
        "/validate",
        files={"file": ("a.txt", b"hello", "text/plain")},
        data={"constraint": "{not json"},
    )
    assert resp.status_code == 400
    assert resp.json()["error"] == "bad_request"


def test_validate_constraint_not_object(client):
    resp = client.post(
        "/validate",
        files={"file": ("a.txt", b"hello", "text/plain")},
        data={"constraint": "[1, 2]"},
    )
    assert resp.status_code == 400


def test_validate_invalid_max_size(client):
    resp = client.post(
        "/validate",
        files={"file": ("a.txt", b"hello", "text/plain")},
        data={"constraint": json.dumps({"max_size": "12 parsecs"})},
    )
    assert resp.status_code == 400
    body = resp.json()
    assert body["message"] == "Invalid constraint"
    assert body["errors"]


def test_request_id_header(client):
    resp = client.post("/validate", files={"file": ("a.txt", b"hello", "text/plain")})
    assert "X-Request-ID" in resp.headers
