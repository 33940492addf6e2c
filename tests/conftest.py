"""Shared test fixtures for FarmLens."""

import io
import os
import tempfile
from pathlib import Path

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

import numpy as np
import pytest
from PIL import Image

from core.utils import AnalysisResult, ImageAsset


def _image_bytes(width: int, height: int, fmt: str) -> bytes:
    img = Image.fromarray(np.random.randint(0, 255, (height, width, 3), dtype=np.uint8))
    buffer = io.BytesIO()
    img.save(buffer, format=fmt)
    return buffer.getvalue()


@pytest.fixture
def tmp_dir():
    """Provide a temporary directory that is cleaned up after the test."""
    with tempfile.TemporaryDirectory() as d:
        yield Path(d)


@pytest.fixture
def leaf_jpeg_bytes():
    """A small JPEG that decodes as a real image."""
    return _image_bytes(96, 64, "JPEG")


@pytest.fixture
def leaf_jpeg_path(tmp_dir, leaf_jpeg_bytes):
    path = tmp_dir / "leaf.jpg"
    path.write_bytes(leaf_jpeg_bytes)
    return str(path)


@pytest.fixture
def leaf_png_path(tmp_dir):
    path = tmp_dir / "leaf.png"
    path.write_bytes(_image_bytes(32, 32, "PNG"))
    return str(path)


@pytest.fixture
def sample_asset(leaf_jpeg_bytes):
    return ImageAsset(
        data=leaf_jpeg_bytes,
        mime_type="image/jpeg",
        size=len(leaf_jpeg_bytes),
        name="apple_leaf.jpg",
    )


@pytest.fixture
def sample_result():
    """The diagnosis the demo service returns."""
    return AnalysisResult(
        disease="Apple_Black_rot",
        confidence=0.92,
        description="Apple black rot is a fungal disease that affects apples.",
        symptoms="Circular lesions on leaves.",
        treatment="Prune out cankers and dead wood.",
        recommendations="Prune out cankers and dead wood. Apply fungicides.",
    )


@pytest.fixture
def service_payload():
    """A successful response body from the inference service."""
    return {
        "disease": "Apple_Black_rot",
        "confidence": 0.92,
        "information": {
            "description": "Apple black rot is a fungal disease that affects apples.",
            "symptoms": "Circular lesions on leaves.",
            "treatment": "Prune out cankers and dead wood.",
        },
        "recommendations": "Prune out cankers and dead wood. Apply fungicides.",
    }


@pytest.fixture
def qsettings(tmp_dir):
    """An isolated INI-backed QSettings so tests never touch the user's settings."""
    from PyQt6.QtCore import QSettings

    settings = QSettings(str(tmp_dir / "farmlens.ini"), QSettings.Format.IniFormat)
    yield settings
    settings.sync()


@pytest.fixture(scope="session")
def qapp():
    from PyQt6.QtWidgets import QApplication

    app = QApplication.instance() or QApplication([])
    yield app


@pytest.fixture(autouse=True)
def _init_i18n():
    """Initialize English translations for all tests."""
    import i18n
    i18n.init("en")
