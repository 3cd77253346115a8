"""
Image Editor v1.2 - Export Encoder Module
=========================================
Rasterizes resize/crop results into encoded still images
"""

import base64
from dataclasses import dataclass, field
from typing import Union
import config
from geometry import Rect
from logger import get_logger
from surface import Surface, TaintedSurfaceError
from validators import coerce_dimension

logger = get_logger(__name__)

# === RESULT VARIANTS ===

CORS_BLOCKED = 'cors-blocked'
SELECTION_TOO_SMALL = 'selection-too-small'

@dataclass(frozen=True)
class EditSuccess:
    """Encoded edited image"""
    data: bytes = field(repr=False)
    width: int
    height: int
    mime_type: str = 'image/png'
    kind: str = field(default='success', init=False)

    @property
    def data_uri(self) -> str:
        return f"data:{self.mime_type};base64,{base64.b64encode(self.data).decode('utf-8')}"

@dataclass(frozen=True)
class EditFallback:
    """Editing unavailable: embed the original reference instead"""
    original_reference: str
    reason: str = CORS_BLOCKED
    kind: str = field(default='fallback', init=False)

@dataclass(frozen=True)
class EditRejected:
    """Recoverable validation failure; the editor stays open"""
    reason: str = SELECTION_TOO_SMALL
    kind: str = field(default='rejected', init=False)

EditResult = Union[EditSuccess, EditFallback, EditRejected]

class EditorStateError(RuntimeError):
    """Operation attempted before the source image finished loading"""
    pass

# === EXPORT ===

def _require_loaded(loaded_image):
    if loaded_image is None or getattr(loaded_image, 'image', None) is None:
        raise EditorStateError("Export requires a fully loaded image")

def _encode(surface: Surface, loaded_image, fmt: str = None, quality: int = None) -> EditResult:
    fmt = (fmt or config.OUTPUT_FORMAT).upper()
    try:
        data = surface.encode(fmt, quality)
    except TaintedSurfaceError as e:
        logger.warning(f"Export blocked, falling back to original: {e}")
        return EditFallback(loaded_image.reference, CORS_BLOCKED)
    mime = config.OUTPUT_MIME_TYPES.get(fmt, 'application/octet-stream')
    logger.info(f"Exported {surface.width}x{surface.height} {fmt} ({len(data)} bytes)")
    return EditSuccess(data, surface.width, surface.height, mime)

def export_resize(loaded_image, target_width: int, target_height: int, fmt: str = None, quality: int = None) -> EditResult:
    """
    Draw the whole image scaled to the target size and encode it

    Returns:
        EditSuccess, or EditFallback('cors-blocked') for tainted sources

    Raises:
        EditorStateError: If the image is not loaded
    """
    _require_loaded(loaded_image)
    width, height = coerce_dimension(target_width), coerce_dimension(target_height)
    surface = Surface(width, height)
    surface.draw_image(loaded_image)
    return _encode(surface, loaded_image, fmt, quality)

def export_crop(loaded_image, source_rect: Rect, fmt: str = None, quality: int = None) -> EditResult:
    """
    Draw only source_rect at 1:1 and encode it

    Returns:
        EditSuccess, or EditFallback('cors-blocked') for tainted sources

    Raises:
        EditorStateError: If the image is not loaded
        ValueError: If source_rect is smaller than 1x1
    """
    _require_loaded(loaded_image)
    box = source_rect.as_box()
    width, height = box[2] - box[0], box[3] - box[1]
    if width < 1 or height < 1:
        raise ValueError(f"Crop rectangle must be at least 1x1, got {width}x{height}")
    surface = Surface(width, height)
    surface.draw_image(loaded_image, src_box=box)
    return _encode(surface, loaded_image, fmt, quality)
