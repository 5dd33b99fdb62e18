"""Test configuration and fixtures for image_processing_api.

This module provides:
- Pytest configuration (markers)
- Directory fixtures (isolated input/output dirs per test)
- Synthetic source images generated with PIL (no checked-in media)
- Component and API client fixtures
"""

from pathlib import Path

import pytest
from fastapi.testclient import TestClient
from PIL import Image, ImageDraw

from image_processing_api import (
    ImageApiConfig,
    ImageTransformer,
    ProcessingRequest,
    RequestOrchestrator,
    create_app,
)

SAMPLE_FILENAME = "sample.jpg"
SAMPLE_SIZE = (800, 600)


# ============================================================================
# Pytest Configuration
# ============================================================================


def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line(
        "markers",
        "integration: full HTTP round trips through the FastAPI app",
    )


# ============================================================================
# Directory Fixtures
# ============================================================================


@pytest.fixture
def input_dir(tmp_path: Path) -> Path:
    """Source image directory (populated by image fixtures)."""
    path = tmp_path / "images"
    path.mkdir()
    return path


@pytest.fixture
def public_dir(tmp_path: Path) -> Path:
    return tmp_path / "public"


@pytest.fixture
def output_dir(public_dir: Path) -> Path:
    """Artifact directory. Not created: components create it lazily."""
    return public_dir / "images" / "processed"


@pytest.fixture
def config(input_dir: Path, output_dir: Path, public_dir: Path) -> ImageApiConfig:
    return ImageApiConfig(input_dir=input_dir, output_dir=output_dir, public_dir=public_dir)


# ============================================================================
# Source Image Fixtures
# ============================================================================


@pytest.fixture
def sample_image(input_dir: Path) -> Path:
    """Generate an 800x600 JPEG named sample.jpg in the input directory."""
    output_path = input_dir / SAMPLE_FILENAME

    img = Image.new("RGB", SAMPLE_SIZE, color=(73, 109, 137))
    draw = ImageDraw.Draw(img)

    for i in range(0, SAMPLE_SIZE[0], 50):
        draw.line([(i, 0), (i, SAMPLE_SIZE[1])], fill=(255, 255, 255), width=2)
    for i in range(0, SAMPLE_SIZE[1], 50):
        draw.line([(0, i), (SAMPLE_SIZE[0], i)], fill=(255, 255, 255), width=2)

    draw.ellipse([300, 200, 500, 400], fill=(200, 100, 100))

    img.save(output_path, "JPEG", quality=85)

    return output_path


@pytest.fixture
def transparent_png(input_dir: Path) -> Path:
    """Generate a 200x100 RGBA PNG with a half-transparent square."""
    output_path = input_dir / "logo.png"

    img = Image.new("RGBA", (200, 100), (0, 0, 0, 0))
    draw = ImageDraw.Draw(img)
    draw.rectangle([50, 25, 150, 75], fill=(10, 200, 30, 128))
    img.save(output_path, "PNG")

    return output_path


@pytest.fixture
def sample_request() -> ProcessingRequest:
    return ProcessingRequest(filename=SAMPLE_FILENAME, width=300, height=200)


# ============================================================================
# Component Fixtures
# ============================================================================


class CountingTransformer(ImageTransformer):
    """ImageTransformer that records every request it runs."""

    def __init__(self, config: ImageApiConfig) -> None:
        super().__init__(config)
        self.calls: list[ProcessingRequest] = []

    async def transform(self, request: ProcessingRequest) -> Path:
        self.calls.append(request)
        return await super().transform(request)


@pytest.fixture
def transformer(config: ImageApiConfig) -> CountingTransformer:
    return CountingTransformer(config)


@pytest.fixture
def orchestrator(config: ImageApiConfig, transformer: CountingTransformer) -> RequestOrchestrator:
    return RequestOrchestrator(config, transformer=transformer)


@pytest.fixture
def api_client(config: ImageApiConfig, orchestrator: RequestOrchestrator):
    """Provide FastAPI TestClient for route testing."""
    app = create_app(config, orchestrator=orchestrator)
    with TestClient(app, raise_server_exceptions=False) as client:
        yield client


@pytest.fixture
def cmyk_jpeg(input_dir: Path) -> Path:
    """Generate a 120x80 CMYK JPEG, as produced by print workflows."""
    output_path = input_dir / "print.jpg"

    img = Image.new("CMYK", (120, 80), (0, 255, 255, 0))
    img.save(output_path, "JPEG", quality=90)

    return output_path


@pytest.fixture
def colour_pair(input_dir: Path) -> tuple[Path, Path]:
    """Two distinct 40x20 PNG sources: red.png and blue.png."""
    red = input_dir / "red.png"
    blue = input_dir / "blue.png"
    Image.new("RGB", (40, 20), (255, 0, 0)).save(red, "PNG")
    Image.new("RGB", (40, 20), (0, 0, 255)).save(blue, "PNG")
    return red, blue
