"""
Image Editor v1.2 - Test Fixtures
=================================
Shared fixtures for the test suite
"""

import base64
import io
import os
import sys

import pytest
from PIL import Image

# Add parent directory to path
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from image_loader import LoadedImage
from render_scheduler import ManualFrameClock

def png_bytes(width: int, height: int, color='white') -> bytes:
    img = Image.new('RGB', (width, height), color=color)
    buf = io.BytesIO()
    img.save(buf, 'PNG')
    return buf.getvalue()

def png_data_uri(width: int, height: int, color='white') -> str:
    return "data:image/png;base64," + base64.b64encode(png_bytes(width, height, color)).decode('utf-8')

def make_loaded(width: int, height: int, origin_clean: bool = True, color='white') -> LoadedImage:
    img = Image.new('RGBA', (width, height), color=color)
    ref = "https://cdn.example.org/photo.png" if not origin_clean else "data:image/png;base64,"
    return LoadedImage(ref, img, width, height, origin_clean)

# === FIXTURES ===

@pytest.fixture
def clock():
    """Manually ticked frame clock"""
    return ManualFrameClock()

@pytest.fixture
def split_image():
    """400x200 image: left half red, right half blue"""
    img = Image.new('RGBA', (400, 200), (255, 0, 0, 255))
    img.paste((0, 0, 255, 255), (200, 0, 400, 200))
    return LoadedImage("data:image/png;base64,", img, 400, 200, True)
