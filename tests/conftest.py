"""Shared fixtures for draft2html tests."""

import json
import pytest
from PIL import Image

from draft2html.config import ConversionConfig


@pytest.fixture
def config():
    """Return a fresh ConversionConfig instance."""
    return ConversionConfig()


@pytest.fixture
def tmp_output(tmp_path):
    """Return a temporary output path for .html files."""
    return str(tmp_path / "output.html")


@pytest.fixture
def png_path(tmp_path):
    """Write a 3x2 PNG and return its path."""
    path = tmp_path / "pic.png"
    Image.new("RGB", (3, 2), "red").save(path)
    return str(path)


@pytest.fixture
def write_json(tmp_path):
    """Return a helper that dumps an object to a .json file in tmp_path."""
    def _write(name, obj):
        path = tmp_path / name
        path.write_text(json.dumps(obj), encoding="utf-8")
        return str(path)
    return _write
