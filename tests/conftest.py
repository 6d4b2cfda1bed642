"""Test configuration helpers for import path setup."""

from __future__ import annotations

import sys
from pathlib import Path

import pytest
from PIL import Image

ROOT = Path(__file__).resolve().parents[1]
BACKEND_ROOT = ROOT / "backend"

backend_path = str(BACKEND_ROOT)

if backend_path not in sys.path:
    sys.path.insert(0, backend_path)


@pytest.fixture
def make_png(tmp_path):
    """Write a solid-colour PNG of the given size and return its path."""

    def _make(size, name="source.png", mode="RGB", **save_params):
        color = (200, 80, 40, 255)[: len(mode)] if mode in ("RGB", "RGBA") else 128
        path = tmp_path / name
        Image.new(mode, size, color).save(path, **save_params)
        return path

    return _make
