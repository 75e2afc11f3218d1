"""Tests for /health endpoint and check_upload_dir utility."""

from unittest.mock import patch

from config import settings
from routers.health import check_upload_dir


def test_check_upload_dir_ok(tmp_path):
    with patch.object(settings, "upload_tmp_dir", str(tmp_path)):
        checks = check_upload_dir()
    assert checks == {"upload_tmp_dir": True, "upload_tmp_dir_writable": True}


def test_check_upload_dir_missing(tmp_path):
    with patch.object(settings, "upload_tmp_dir", str(tmp_path / "gone")):
        checks = check_upload_dir()
    assert checks == {"upload_tmp_dir": False, "upload_tmp_dir_writable": False}


def test_health_endpoint_ok(client, tmp_path):
    with patch.object(settings, "upload_tmp_dir", str(tmp_path)):
        resp = client.get("/health")
    assert resp.status_code == 200
    data = resp.json()
    assert data["status"] == "ok"
    assert data["version"] == "0.1.0"


def test_health_endpoint_degraded(client):
    with patch("routers.health.check_upload_dir", return_value={"upload_tmp_dir": False}):
        resp = client.get("/health")
    assert resp.json()["status"] == "degraded"
