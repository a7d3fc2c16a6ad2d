"""Test configuration and fixtures for the image resizer.

This module provides:
- Image factories built with Pillow (solid colors, split halves)
- Ready `ImageData` instances for session tests
- Sample files on disk for loader tests
"""

import io
from pathlib import Path
from typing import Callable, Tuple

import pytest
from PIL import Image

from resizer.models.image_model import ImageData

RED = (255, 0, 0, 255)
BLUE = (0, 0, 255, 255)

Color = Tuple[int, int, int, int]


@pytest.fixture
def solid_image() -> Callable[..., Image.Image]:
    """Factory for a single-color RGBA image."""

    def _make(width: int, height: int, color: Color = RED) -> Image.Image:
        return Image.new("RGBA", (width, height), color)

    return _make


@pytest.fixture
def split_image() -> Callable[..., Image.Image]:
    """Factory for an RGBA image whose left half is red and right half is blue."""

    def _make(width: int, height: int) -> Image.Image:
        image = Image.new("RGBA", (width, height), BLUE)
        image.paste(RED, (0, 0, width // 2, height))
        return image

    return _make


@pytest.fixture
def image_data(solid_image) -> Callable[..., ImageData]:
    """Factory for `ImageData` without touching the filesystem."""

    def _make(width: int, height: int, color: Color = RED) -> ImageData:
        pil_image = solid_image(width, height, color)
        return ImageData(
            path=Path(f"sample_{width}x{height}.png"),
            pil_image=pil_image,
            width=width,
            height=height,
            mode="RGBA",
            size_bytes=None,
        )

    return _make


@pytest.fixture
def png_bytes(solid_image) -> Callable[..., bytes]:
    """Factory for an encoded PNG of the given size."""

    def _make(width: int, height: int, mode: str = "RGB") -> bytes:
        buf = io.BytesIO()
        solid_image(width, height).convert(mode).save(buf, format="PNG")
        return buf.getvalue()

    return _make


@pytest.fixture
def sample_png(tmp_path: Path, png_bytes) -> Path:
    """A 640x480 RGB PNG on disk."""
    path = tmp_path / "sample.png"
    path.write_bytes(png_bytes(640, 480))
    return path
