"""
Image Editor v1.2 - Export Tests
================================
Surface readback and encoded edit results
"""

import io
import pytest
import os
import sys
from PIL import Image

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from conftest import make_loaded
from export_encoder import (
    CORS_BLOCKED, EditFallback, EditRejected, EditSuccess, EditorStateError,
    export_crop, export_resize
)
from geometry import Rect
from surface import Surface, TaintedSurfaceError
from translations import describe_result

def decode(result: EditSuccess) -> Image.Image:
    return Image.open(io.BytesIO(result.data))

# === SURFACE ===

def test_surface_clean_readback():
    """Clean surfaces can be read back"""
    surface = Surface(40, 20)
    surface.draw_image(make_loaded(100, 50, color='green'))
    img = surface.read_pixels()
    assert img.size == (40, 20)
    assert img.getpixel((10, 10))[:3] == (0, 128, 0)

def test_surface_tainted_readback_blocked():
    """Cross-origin pixels can be shown but not read"""
    surface = Surface(40, 20)
    surface.draw_image(make_loaded(100, 50, origin_clean=False))
    assert not surface.origin_clean
    assert surface.present().size == (40, 20)
    with pytest.raises(TaintedSurfaceError):
        surface.read_pixels()
    with pytest.raises(TaintedSurfaceError):
        surface.encode()

def test_surface_rejects_empty_size():
    with pytest.raises(ValueError):
        Surface(0, 10)

def test_surface_overlay_and_border():
    """Dimmed overlay plus selection border"""
    surface = Surface(50, 50)
    surface.draw_image(make_loaded(50, 50, color='white'))
    surface.fill_rect((0, 0, 50, 50), (0, 0, 0, 128))
    surface.stroke_rect((10, 10, 30, 30), '#3b82f6', 2)
    img = surface.present()
    assert img.getpixel((10, 10))[:3] == (59, 130, 246)
    assert img.getpixel((40, 40))[0] < 255

# === RESIZE EXPORT ===

def test_export_resize_success():
    """Output has exactly the target dimensions"""
    result = export_resize(make_loaded(200, 100), 50, 25)
    assert isinstance(result, EditSuccess)
    assert (result.width, result.height) == (50, 25)
    assert result.mime_type == 'image/png'
    assert result.data_uri.startswith("data:image/png;base64,")
    assert decode(result).size == (50, 25)

def test_export_resize_upscale():
    result = export_resize(make_loaded(20, 10), 80, 40)
    assert decode(result).size == (80, 40)

def test_export_resize_jpeg():
    result = export_resize(make_loaded(200, 100), 100, 50, fmt='JPEG', quality=80)
    assert result.mime_type == 'image/jpeg'
    assert decode(result).format == 'JPEG'

def test_export_resize_cors_fallback():
    """Tainted sources fall back to the original instead of raising"""
    loaded = make_loaded(200, 100, origin_clean=False)
    result = export_resize(loaded, 50, 25)
    assert isinstance(result, EditFallback)
    assert result.reason == CORS_BLOCKED == 'cors-blocked'
    assert result.original_reference == loaded.reference

def test_export_before_load_is_precondition_error():
    with pytest.raises(EditorStateError):
        export_resize(None, 10, 10)
    with pytest.raises(EditorStateError):
        export_crop(None, Rect(0, 0, 10, 10))

# === CROP EXPORT ===

def test_export_crop_extracts_region(split_image):
    """Only the selected region is encoded, at 1:1"""
    result = export_crop(split_image, Rect(250, 20, 100, 60))
    assert isinstance(result, EditSuccess)
    img = decode(result).convert('RGB')
    assert img.size == (100, 60)
    assert img.getpixel((50, 30)) == (0, 0, 255)

def test_export_crop_spanning_halves(split_image):
    img = decode(export_crop(split_image, Rect(150, 0, 100, 200))).convert('RGB')
    assert img.getpixel((10, 100)) == (255, 0, 0)
    assert img.getpixel((90, 100)) == (0, 0, 255)

def test_export_crop_requires_one_pixel(split_image):
    with pytest.raises(ValueError):
        export_crop(split_image, Rect(10, 10, 0, 5))

def test_export_crop_cors_fallback():
    result = export_crop(make_loaded(200, 100, origin_clean=False), Rect(0, 0, 10, 10))
    assert isinstance(result, EditFallback)
    assert result.reason == 'cors-blocked'

# === USER MESSAGES ===

def test_result_messages_are_distinct():
    """Each outcome gets its own message"""
    success = export_resize(make_loaded(20, 10), 20, 10)
    fallback = EditFallback("https://cdn.example.org/a.png")
    rejected = EditRejected()
    messages = {describe_result(r) for r in (success, fallback, rejected)}
    assert len(messages) == 3
    assert "CORS" in describe_result(fallback)
    assert "larger area" in describe_result(rejected)
    assert "20 × 10" in describe_result(success)
    assert describe_result(rejected, 'ua') != describe_result(rejected, 'en')

def test_result_kinds():
    assert EditRejected().kind == 'rejected'
    assert EditRejected().reason == 'selection-too-small'
    assert EditFallback("x").kind == 'fallback'
