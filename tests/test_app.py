"""Tests for the HTTP API."""

from __future__ import annotations

import io

import pytest
from fastapi.testclient import TestClient
from PIL import Image

from downsample_companion import config
from app import app


@pytest.fixture
def client(tmp_path, monkeypatch):
    monkeypatch.setattr(config, "INPUT_DIR", tmp_path / "inputs")
    monkeypatch.setattr(config, "OUTPUT_DIR", tmp_path / "output")
    monkeypatch.setattr(config, "LOG_JSONL", None)
    return TestClient(app)


def _png_bytes(size) -> bytes:
    buf = io.BytesIO()
    Image.new("RGB", size, (1, 2, 3)).save(buf, format="PNG")
    return buf.getvalue()


def _factor_params(**overrides):
    params = {
        "source_width": 900,
        "source_height": 400,
        "requested_width": 100,
        "requested_height": 100,
    }
    params.update(overrides)
    return params


def test_strategies_lists_names(client):
    response = client.get("/strategies")
    assert response.status_code == 200
    payload = response.json()
    assert "center_outside" in payload["strategies"]
    assert "default" in payload["strategies"]
    assert payload["default"] == "at_least"
    assert payload["values"]["default"] == "at_least"
    assert payload["values"]["center_inside"] == "center_inside"


def test_scale_factor_at_most(client):
    response = client.get("/scale-factor", params=_factor_params(strategy="at_most"))
    assert response.status_code == 200
    payload = response.json()
    assert payload["factor"] == 16.0
    assert payload["plan"]["sample_size"] == 16
    assert payload["plan"]["output_size"] == [57, 25]


def test_scale_factor_uses_default(client):
    payload = client.get("/scale-factor", params=_factor_params()).json()
    assert payload["strategy"] == "at_least"
    assert payload["factor"] == 4.0


def test_scale_factor_unknown_strategy(client):
    response = client.get("/scale-factor", params=_factor_params(strategy="stretch"))
    assert response.status_code == 400
    assert "Unknown strategy" in response.json()["detail"]


@pytest.mark.parametrize("overrides", [
    {"requested_width": 0},
    {"requested_height": 100000},
    {"source_width": -5},
])
def test_scale_factor_rejects_bad_dimensions(client, overrides):
    response = client.get("/scale-factor", params=_factor_params(**overrides))
    assert response.status_code == 400


def test_process_and_download(client):
    response = client.post(
        "/process",
        files={"file": ("photo.png", _png_bytes((640, 480)), "image/png")},
        data={"requested_width": "100", "requested_height": "100", "strategy": "at_most"},
    )
    assert response.status_code == 200
    meta = response.json()["meta"]
    assert (meta["final_w"], meta["final_h"]) == (80, 60)
    assert meta["dst"].endswith("photo_ds.png")

    download = client.get("/download", params={"path": meta["dst"]})
    assert download.status_code == 200
    assert Image.open(io.BytesIO(download.content)).size == (80, 60)


def test_process_rejects_empty_file(client):
    response = client.post(
        "/process",
        files={"file": ("empty.png", b"", "image/png")},
        data={"requested_width": "100", "requested_height": "100"},
    )
    assert response.status_code == 400


def test_process_reports_undecodable_upload(client):
    response = client.post(
        "/process",
        files={"file": ("bad.png", b"not an image", "image/png")},
        data={"requested_width": "100", "requested_height": "100"},
    )
    assert response.status_code == 500
    assert response.json()["ok"] is False


def test_download_missing_file(client):
    response = client.get("/download", params={"path": "nothing.png"})
    assert response.status_code == 404
