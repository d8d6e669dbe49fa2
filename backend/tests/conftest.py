"""
Pytest Configuration and Test Fixtures for the MediaGuard Backend

This module provides shared fixtures:
- Real file-header prefixes for images, generated with Pillow
- Raw WAV, MP4 and PDF header prefixes
- A factory for ValidationInput objects with sensible defaults
- FastAPI TestClient and settings overrides for the HTTP surface
"""

from collections.abc import Callable, Generator
from io import BytesIO
from typing import Any

import pytest

from fastapi.testclient import TestClient
from PIL import Image

from mediaguard.config import Settings, get_settings
from mediaguard.main import app
from mediaguard.models.media import ValidationInput


PREFIX_LENGTH = 16


def pytest_configure(config: pytest.Config) -> None:
    """Register custom markers used across the suite."""
    config.addinivalue_line("markers", "unit: mark test as unit test")
    config.addinivalue_line("markers", "integration: mark test as integration test")


# ==============================================================================
# Byte Prefix Fixtures
# ==============================================================================


def _image_prefix(image_format: str, mode: str = "RGB") -> bytes:
    buffer = BytesIO()
    Image.new(mode, (8, 8), color=0).save(buffer, format=image_format)
    return buffer.getvalue()[:PREFIX_LENGTH]


@pytest.fixture(scope="session")
def jpeg_prefix() -> bytes:
    return _image_prefix("JPEG")


@pytest.fixture(scope="session")
def png_prefix() -> bytes:
    return _image_prefix("PNG")


@pytest.fixture(scope="session")
def gif_prefix() -> bytes:
    return _image_prefix("GIF", mode="P")


@pytest.fixture(scope="session")
def bmp_prefix() -> bytes:
    return _image_prefix("BMP")


@pytest.fixture(scope="session")
def webp_prefix() -> bytes:
    return _image_prefix("WEBP")


@pytest.fixture(scope="session")
def wav_prefix() -> bytes:
    """RIFF/WAVE header of a PCM file."""
    return b"RIFF" + (36).to_bytes(4, "little") + b"WAVEfmt "


@pytest.fixture(scope="session")
def mp4_prefix() -> bytes:
    """ISO base media header with a 24-byte ftyp box."""
    return b"\x00\x00\x00\x18ftypmp42\x00\x00\x00\x00"


@pytest.fixture(scope="session")
def pdf_prefix() -> bytes:
    return b"%PDF-1.7\n%\xe2\xe3\xcf\xd3\n1 0"


# ==============================================================================
# Input Factory
# ==============================================================================


@pytest.fixture
def make_input() -> Callable[..., ValidationInput]:
    """
    Factory for ValidationInput with a clean JPEG photo as the default.

    Example:
        file_input = make_input(filename="payload.exe")
    """

    def _make(**overrides: Any) -> ValidationInput:
        fields: dict[str, Any] = {
            "filename": "photo.jpg",
            "declared_mime_type": "image/jpeg",
            "size_bytes": 500_000,
        }
        fields.update(overrides)
        return ValidationInput(**fields)

    return _make


# ==============================================================================
# FastAPI Fixtures
# ==============================================================================


@pytest.fixture
def client() -> Generator[TestClient, None, None]:
    """TestClient without lifespan, so test logging is left untouched."""
    test_client = TestClient(app)
    yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def override_settings() -> Generator[Callable[..., Settings], None, None]:
    """
    Replace the settings dependency for the duration of a test.

    Example:
        override_settings(max_batch_size=1)
    """

    def _override(**values: Any) -> Settings:
        settings = Settings(**values)
        app.dependency_overrides[get_settings] = lambda: settings
        return settings

    yield _override
    app.dependency_overrides.pop(get_settings, None)
