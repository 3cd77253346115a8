"""
Image Editor v1.2 - Session Tests
=================================
End-to-end editing sessions
"""

import asyncio
import io
import pytest
import os
import sys
import httpx
from PIL import Image

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from conftest import png_bytes, png_data_uri
from editor_session import EditorSession
from export_encoder import EditFallback, EditRejected, EditSuccess, EditorStateError
from translations import describe_load_failure

# === FIXTURES ===

@pytest.fixture
def session(clock):
    """Ready session on a 960x540 image (shown at 0.625)"""
    s = EditorSession(png_data_uri(960, 540), clock=clock)
    asyncio.run(s.open())
    return s

def drag(session, start, end, clock=None):
    session.pointer_down(*start)
    session.pointer_move(*end)
    session.pointer_up()
    if clock is not None:
        clock.tick()

# === LIFECYCLE ===

def test_session_ready_after_open(session):
    assert session.status == 'ready'
    assert session.transform.scale == pytest.approx(0.625)
    assert session.transform.canvas_size == (600, 337)
    assert session.resize.current_dimensions() == (960, 540)
    assert session.mode == 'resize'
    assert session.preview.size == (600, 337)

def test_session_before_open_is_precondition_error(clock):
    s = EditorSession(png_data_uri(10, 10), clock=clock)
    with pytest.raises(EditorStateError):
        s.apply()
    with pytest.raises(EditorStateError):
        s.render_preview()

def test_session_load_failure(clock):
    """Failed load leaves an explicit error state"""
    s = EditorSession("data:image/png;base64,bm90IGFuIGltYWdl", clock=clock)
    result = asyncio.run(s.open())
    assert s.status == 'failed'
    assert s.failure is result
    assert s.loaded_image is None
    assert "corrupted" in describe_load_failure(result)
    with pytest.raises(EditorStateError):
        s.apply()

def test_session_skip_returns_original(session):
    assert session.skip() == session.reference

def test_session_preview_callback(clock):
    frames = []
    s = EditorSession(png_data_uri(1920, 1080), clock=clock, on_preview=frames.append)
    asyncio.run(s.open())
    assert frames and frames[-1].size == (600, 337)

# === RESIZE ===

def test_session_resize_apply(session):
    session.resize.set_width(480)
    result = session.apply()
    assert isinstance(result, EditSuccess)
    assert (result.width, result.height) == (480, 270)
    assert Image.open(io.BytesIO(result.data)).size == (480, 270)

def test_session_pointer_ignored_in_resize_mode(session, clock):
    assert not session.pointer_down(10, 10)
    assert session.crop.display_rect() is None
    assert session.selection_size() is None

# === CROP ===

def test_session_crop_apply(session, clock):
    """Display selection is mapped to source pixels"""
    session.set_mode('crop')
    drag(session, (60, 30), (360, 180), clock)
    assert session.selection_size() == (480, 240)
    result = session.apply()
    assert isinstance(result, EditSuccess)
    assert (result.width, result.height) == (480, 240)

def test_session_crop_zero_area_rejected(session, clock):
    """A click without movement keeps the editor open"""
    session.set_mode('crop')
    drag(session, (10, 10), (10, 10), clock)
    result = session.apply()
    assert isinstance(result, EditRejected)
    assert result.reason == 'selection-too-small'
    assert session.status == 'ready'

def test_session_crop_preview_overlay(session, clock):
    """Outside the selection is dimmed, inside is not, border drawn"""
    session.set_mode('crop')
    drag(session, (100, 100), (300, 200), clock)
    img = session.preview.present()
    assert img.getpixel((50, 50))[0] < 200
    assert img.getpixel((200, 150))[:3] == (255, 255, 255)
    assert img.getpixel((100, 100))[:3] == (59, 130, 246)

def test_session_crop_preview_collapsed_selection(session, clock):
    """A selection under one source pixel draws no undimmed region"""
    session.set_mode('crop')
    drag(session, (100, 100), (100.2, 200), clock)
    assert session.selection_size() == (0, 160)
    img = session.preview.present()
    assert img.getpixel((110, 150))[0] < 200

def test_session_redraws_once_per_frame(session, clock):
    session.set_mode('crop')
    before = session.scheduler.redraw_count
    session.pointer_down(0, 0)
    for i in range(30):
        session.pointer_move(i, i)
    clock.tick()
    assert session.scheduler.redraw_count == before + 1

def test_session_mode_switch_resets_selection(session, clock):
    session.set_mode('crop')
    drag(session, (60, 30), (360, 180), clock)
    session.set_mode('resize')
    session.set_mode('crop')
    assert session.crop.display_rect() is None
    assert isinstance(session.apply(), EditRejected)

def test_session_unknown_mode(session):
    with pytest.raises(ValueError):
        session.set_mode('rotate')

def test_session_close_cancels_redraw(session, clock):
    """No redraw fires after the editor is closed"""
    session.set_mode('crop')
    session.pointer_down(0, 0)
    session.pointer_move(50, 50)
    count = session.scheduler.redraw_count
    session.close()
    assert clock.tick() == 0
    assert session.scheduler.redraw_count == count
    assert session.status == 'closed'
    assert session.mode == 'resize'
    assert not session.pointer_move(60, 60)

# === CROSS-ORIGIN ===

def test_session_cross_origin_resize_falls_back(clock):
    """Cross-origin URL without CORS: export returns the fallback"""
    url = "https://images.example.com/photo.png"

    def handler(request):
        return httpx.Response(200, content=png_bytes(400, 300))

    async def scenario():
        async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
            s = EditorSession(url, clock=clock, client=client, page_origin="http://app.test")
            await s.open()
            return s

    s = asyncio.run(scenario())
    assert s.status == 'ready'
    assert s.preview is not None
    s.resize.set_width(200)
    result = s.apply()
    assert isinstance(result, EditFallback)
    assert result.reason == 'cors-blocked'
    assert result.original_reference == url

    s.set_mode('crop')
    drag(s, (0, 0), (100, 100), clock)
    assert isinstance(s.apply(), EditFallback)
