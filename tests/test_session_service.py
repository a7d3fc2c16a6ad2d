"""Tests for the resize session: load lifecycle, edits, resize and export."""

import io

import pytest
from PIL import Image

from resizer.models.resize_model import (
    FillMode,
    HeightEdited,
    LoadState,
    LockToggled,
    OutputFormat,
    TargetSpec,
    WidthEdited,
)
from resizer.services.image_service import ImageDecodeError
from resizer.services.session_service import ResizeSession


@pytest.fixture
def session() -> ResizeSession:
    return ResizeSession()


@pytest.fixture
def ready_session(session, image_data) -> ResizeSession:
    session.begin_load()
    session.complete_load(image_data(400, 200))
    return session


# ============================================================================
# LOAD LIFECYCLE
# ============================================================================


def test_new_session_is_empty_and_inert(session, tmp_path):
    """Test actions are no-ops before an image is loaded."""
    assert session.state is LoadState.EMPTY
    assert not session.can_resize
    assert not session.can_export
    assert session.resize() is None
    assert session.encode() is None
    assert session.export(tmp_path) is None
    assert list(tmp_path.iterdir()) == []


def test_loading_disables_actions(session):
    """Test the loading state keeps resize and export disabled."""
    session.begin_load()
    assert session.state is LoadState.LOADING
    assert not session.can_resize
    assert session.resize() is None


def test_complete_load_sets_dimensions(ready_session):
    """Test a loaded image fills width and height with its size."""
    assert ready_session.state is LoadState.READY
    assert ready_session.spec == TargetSpec(400, 200, False)
    assert ready_session.source_aspect == 2.0
    assert ready_session.can_resize
    assert not ready_session.can_export


def test_failed_load_reports_error(session):
    """Test a decode failure is recorded instead of hanging in loading."""
    session.begin_load()
    error = ImageDecodeError("broken")
    session.fail_load(error)
    assert session.state is LoadState.FAILED
    assert session.error is error
    assert session.image is None
    assert not session.can_resize


def test_new_load_discards_previous_surface(ready_session, image_data):
    """Test loading another image drops the old surface."""
    assert ready_session.resize() is not None
    ready_session.begin_load()
    ready_session.complete_load(image_data(30, 60))
    assert ready_session.surface is None
    assert ready_session.spec == TargetSpec(30, 60, False)
    assert ready_session.source_aspect == 0.5


# ============================================================================
# EDITS AND RESIZE
# ============================================================================


def test_resize_default_stretch(ready_session):
    """Test resize renders at the requested size."""
    ready_session.edit(WidthEdited("100"))
    ready_session.edit(HeightEdited("100"))
    surface = ready_session.resize()
    assert surface is not None
    assert surface.size == (100, 100)
    assert ready_session.surface is surface
    assert ready_session.can_export


def test_locked_edit_derives_other_field(ready_session):
    """Test locked edits keep the source aspect ratio."""
    ready_session.edit(LockToggled(True))
    spec = ready_session.edit(WidthEdited("300"))
    assert spec == TargetSpec(300, 150, True)
    assert ready_session.resize().size == (300, 150)


def test_resize_fills_blank_field_when_locked(ready_session):
    """Test a field left blank is derived at resize time."""
    ready_session.edit(LockToggled(True))
    ready_session.edit(HeightEdited(""))
    assert ready_session.spec == TargetSpec(400, None, True)
    surface = ready_session.resize()
    assert surface.size == (400, 200)
    assert ready_session.spec == TargetSpec(400, 200, True)


def test_resize_skipped_for_unresolved_size(ready_session):
    """Test a blank field without lock skips rendering."""
    ready_session.edit(WidthEdited(""))
    assert ready_session.resize() is None
    assert ready_session.surface is None


def test_resize_writes_back_clamped_values(ready_session):
    """Test clamped values replace the typed ones after resize."""
    ready_session.edit(WidthEdited("9000"))
    ready_session.edit(HeightEdited("0"))
    surface = ready_session.resize()
    assert surface.size == (5000, 1)
    assert ready_session.spec == TargetSpec(5000, 1, False)


def test_fill_mode_is_applied(ready_session):
    """Test the selected fill mode reaches the renderer."""
    ready_session.set_fill_mode("fit")
    ready_session.edit(WidthEdited("100"))
    ready_session.edit(HeightEdited("100"))
    surface = ready_session.resize()
    assert ready_session.fill_mode is FillMode.FIT
    assert surface.getpixel((50, 5)) == (255, 255, 255, 255)


def test_set_fill_mode_rejects_unknown(session):
    """Test unknown fill modes raise ValueError."""
    with pytest.raises(ValueError):
        session.set_fill_mode("zoom")


# ============================================================================
# EXPORT
# ============================================================================


@pytest.mark.parametrize("fmt", list(OutputFormat))
def test_export_writes_named_file(ready_session, tmp_path, fmt):
    """Test export writes resized-image.<ext> with the resized dimensions."""
    ready_session.set_output_format(fmt.value)
    ready_session.resize()
    path = ready_session.export(tmp_path)
    assert path == tmp_path / f"resized-image.{fmt.extension}"
    assert ready_session.export_filename() == path.name
    with Image.open(path) as decoded:
        assert decoded.size == (400, 200)


def test_encode_returns_bytes_of_current_format(ready_session):
    """Test encode follows the selected output format."""
    ready_session.set_output_format(OutputFormat.JPG)
    ready_session.resize()
    data = ready_session.encode()
    with Image.open(io.BytesIO(data)) as decoded:
        assert decoded.format == "JPEG"


def test_export_without_surface_is_noop(ready_session, tmp_path):
    """Test export before resize does nothing."""
    assert ready_session.export(tmp_path) is None
    assert list(tmp_path.iterdir()) == []
