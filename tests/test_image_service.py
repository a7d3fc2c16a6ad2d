"""Tests for decoding images from disk and memory."""

import struct
import zlib

import pytest

from resizer.services.image_service import ImageDecodeError, ImageService


@pytest.fixture
def service() -> ImageService:
    return ImageService()


def test_load_image_reads_metadata(service, sample_png):
    """Test a PNG on disk is decoded with its metadata."""
    data = service.load_image(sample_png)
    assert (data.width, data.height) == (640, 480)
    assert data.aspect_ratio == pytest.approx(4 / 3)
    assert data.mode == "RGB"
    assert data.pil_image.mode == "RGBA"
    assert data.path == sample_png
    assert data.size_bytes == sample_png.stat().st_size
    assert data.display_name == "sample.png"


def test_load_image_accepts_str_path(service, sample_png):
    """Test string paths are accepted."""
    assert service.load_image(str(sample_png)).width == 640


def test_load_missing_file_raises(service, tmp_path):
    """Test a missing path raises FileNotFoundError."""
    with pytest.raises(FileNotFoundError):
        _ = service.load_image(tmp_path / "nope.png")


def test_load_directory_raises(service, tmp_path):
    """Test a directory is not treated as an image."""
    with pytest.raises(FileNotFoundError):
        _ = service.load_image(tmp_path)


def test_load_garbage_file_raises_decode_error(service, tmp_path):
    """Test non-image content raises ImageDecodeError."""
    path = tmp_path / "fake.png"
    path.write_bytes(b"definitely not an image")
    with pytest.raises(ImageDecodeError):
        _ = service.load_image(path)


def test_load_truncated_file_raises_decode_error(service, tmp_path, png_bytes):
    """Test a truncated image raises ImageDecodeError instead of hanging."""
    data = png_bytes(300, 300)
    path = tmp_path / "truncated.png"
    path.write_bytes(data[: len(data) // 2])
    with pytest.raises(ImageDecodeError):
        _ = service.load_image(path)


PNG_SIGNATURE = b"\x89PNG\r\n\x1a\n"


def _png_chunk(cid: bytes, payload: bytes) -> bytes:
    return struct.pack(">I", len(payload)) + cid + payload + struct.pack(">I", zlib.crc32(cid + payload))


def _short_ihdr_png() -> bytes:
    return PNG_SIGNATURE + _png_chunk(b"IHDR", b"\x00" * 6)


def _broken_chunk_png() -> bytes:
    ihdr = _png_chunk(b"IHDR", struct.pack(">IIBBBBB", 4, 4, 8, 2, 0, 0, 0))
    return PNG_SIGNATURE + ihdr + b"\x00\x00\x00\x04\x01\x02\x03\x04garbage"


# ============================================================================
# CORRUPT INPUT
# ============================================================================


@pytest.mark.parametrize(
    "payload",
    [
        pytest.param(_short_ihdr_png(), id="png-short-ihdr"),
        pytest.param(_broken_chunk_png(), id="png-broken-chunk"),
        pytest.param(b"P6\nabc 10\n255\n" + b"\x00" * 30, id="ppm-bad-header"),
        pytest.param(b"P6\n", id="ppm-header-only"),
    ],
)
def test_corrupt_bytes_raise_decode_error(service, payload):
    """Test malformed headers are reported as ImageDecodeError."""
    with pytest.raises(ImageDecodeError):
        _ = service.load_image_bytes(payload)


def test_corrupt_file_raises_decode_error(service, tmp_path):
    """Test a file with a truncated PNG header chunk raises ImageDecodeError."""
    path = tmp_path / "short-ihdr.png"
    path.write_bytes(_short_ihdr_png())
    with pytest.raises(ImageDecodeError):
        _ = service.load_image(path)


def test_load_image_bytes(service, png_bytes):
    """Test decoding from an in-memory buffer."""
    data = png_bytes(20, 10, mode="RGBA")
    image = service.load_image_bytes(data, name="drop.png")
    assert (image.width, image.height) == (20, 10)
    assert image.aspect_ratio == 2.0
    assert image.size_bytes == len(data)
    assert image.display_name == "drop.png"


def test_load_image_bytes_without_name(service, png_bytes):
    """Test buffers without a name have no path."""
    image = service.load_image_bytes(png_bytes(5, 5))
    assert image.path is None
    assert image.display_name == "—"


def test_decode_error_is_value_error(service):
    """Test ImageDecodeError can be handled as ValueError."""
    with pytest.raises(ValueError):
        _ = service.load_image_bytes(b"\x00\x01\x02")
