"""
Image Editor v1.2.0 - Configuration Module
==========================================
Centralized configuration and constants
"""

import os
from pathlib import Path

# === APPLICATION INFO ===
APP_VERSION = "1.2.0"
APP_NAME = "Image Editor"
APP_AUTHOR = "Marynyuk Andriy"
APP_LICENSE = "Proprietary"
APP_REPO = "https://github.com/MaanAndrii"

# === SOURCE SETTINGS ===
MAX_FILE_SIZE = 25 * 1024 * 1024  # 25 MB
SUPPORTED_SCHEMES = ['data', 'http', 'https']
SUPPORTED_UPLOAD_FORMATS = ['.jpg', '.jpeg', '.png', '.webp', '.gif']
HTTP_TIMEOUT = 10.0  # seconds

# Origin of the page hosting the editor; URLs from other origins
# need permissive CORS headers to stay readable
PAGE_ORIGIN = os.environ.get('IMAGE_EDITOR_ORIGIN', 'http://localhost:8501')

# === IMAGE PROCESSING ===
MAX_IMAGE_DIMENSION = 10000  # Maximum width or height
MIN_IMAGE_DIMENSION = 1

# === DISPLAY ===
MAX_DISPLAY_WIDTH = 600
MAX_DISPLAY_HEIGHT = 400
FRAME_INTERVAL = 1 / 60  # seconds between redraw frames

# === CROP OVERLAY ===
OVERLAY_FILL = (0, 0, 0, 128)
SELECTION_COLOR = '#3b82f6'
SELECTION_LINE_WIDTH = 2

# === EXPORT ===
OUTPUT_FORMAT = 'PNG'
OUTPUT_QUALITY = 92
OUTPUT_MIME_TYPES = {
    'PNG': 'image/png',
    'JPEG': 'image/jpeg',
    'WEBP': 'image/webp'
}

# === EDIT MODES ===
EDIT_MODES = ['resize', 'crop']
DEFAULT_EDIT_MODE = 'resize'

# === DEFAULT SETTINGS ===
DEFAULT_SETTINGS = {
    'aspect_locked': True,
    'lang_code': 'en',
    'edit_mode': DEFAULT_EDIT_MODE
}

# === PATHS ===
def get_project_root() -> Path:
    """Get project root directory"""
    return Path(__file__).parent

# === LOGGING ===
LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
LOG_LEVEL = os.environ.get('IMAGE_EDITOR_LOG_LEVEL', 'INFO')
LOG_FILE = 'image_editor.log'
