import sys
import types

import numpy as np
import pytest

from photobooth.config import Settings


@pytest.fixture
def settings(tmp_path):
    return Settings(OUTPUT_DIR=str(tmp_path / "out"), BEAUTY_LEVEL=0)


@pytest.fixture
def skin_raster():
    # flat warm skin tone, fully opaque
    raster = np.zeros((40, 30, 4), dtype=np.uint8)
    raster[..., 0] = 200
    raster[..., 1] = 150
    raster[..., 2] = 120
    raster[..., 3] = 255
    return raster


@pytest.fixture
def fake_deepface(monkeypatch):
    """Install a fake 'deepface' module; tests fill in the DeepFace attributes."""
    DeepFace = types.SimpleNamespace()
    monkeypatch.setitem(sys.modules, "deepface", types.SimpleNamespace(DeepFace=DeepFace))
    return DeepFace
