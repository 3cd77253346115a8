"""
Image Editor v1.2 - Geometry Module
===================================
Coordinate transforms between display space and source space
"""

from dataclasses import dataclass
from typing import Optional, Tuple
from validators import safe_divide

# === DATA CLASSES ===

@dataclass(frozen=True)
class Point:
    """Point in display-space or source-space pixels"""
    x: float = 0.0
    y: float = 0.0

@dataclass(frozen=True)
class Rect:
    """Axis-aligned rectangle (top-left corner + size)"""
    x: float = 0.0
    y: float = 0.0
    width: float = 0.0
    height: float = 0.0

    @property
    def right(self) -> float:
        return self.x + self.width

    @property
    def bottom(self) -> float:
        return self.y + self.height

    def as_box(self) -> Tuple[int, int, int, int]:
        """Pillow box (left, upper, right, lower) in whole pixels"""
        return (int(round(self.x)), int(round(self.y)),
                int(round(self.right)), int(round(self.bottom)))

@dataclass(frozen=True)
class DisplayTransform:
    """Scale mapping a natural-size image into the preview bounding box"""
    scale: float
    display_width: float
    display_height: float

    @classmethod
    def from_natural(cls, natural_w: int, natural_h: int, max_w: float, max_h: float) -> "DisplayTransform":
        scale = fit_scale(natural_w, natural_h, max_w, max_h)
        return cls(scale, natural_w * scale, natural_h * scale)

    @property
    def canvas_size(self) -> Tuple[int, int]:
        """Whole-pixel preview size, never below 1x1"""
        return max(1, int(self.display_width)), max(1, int(self.display_height))

# === SCALE ===

def fit_scale(natural_w: float, natural_h: float, max_w: float, max_h: float) -> float:
    """Largest scale <= 1 that fits the image inside max_w x max_h"""
    return min(
        1.0,
        safe_divide(max_w, natural_w, default=1.0),
        safe_divide(max_h, natural_h, default=1.0)
    )

# === SPACE MAPPING ===

def to_source_space(display_rect: Rect, scale: float, bounds: Optional[Tuple[float, float]] = None) -> Rect:
    """
    Map a display-space rectangle into source-pixel space

    Args:
        display_rect: Rectangle in preview coordinates
        scale: Display scale (0 < scale <= 1)
        bounds: Natural (width, height); when given the result is clamped to it

    Returns:
        Rectangle in source-space pixels
    """
    rect = Rect(
        display_rect.x / scale,
        display_rect.y / scale,
        display_rect.width / scale,
        display_rect.height / scale
    )
    if bounds is not None:
        rect = clamp_rect(rect, Rect(0, 0, bounds[0], bounds[1]))
    return rect

def to_display_space(source_rect: Rect, scale: float) -> Rect:
    """Map a source-space rectangle onto the preview"""
    return Rect(
        source_rect.x * scale,
        source_rect.y * scale,
        source_rect.width * scale,
        source_rect.height * scale
    )

# === CLAMPING ===

def clamp_rect(rect: Rect, bounds: Rect) -> Rect:
    """Clip rect to bounds; a disjoint rect collapses to zero size on the nearest edge"""
    left = min(max(rect.x, bounds.x), bounds.right)
    top = min(max(rect.y, bounds.y), bounds.bottom)
    right = min(max(rect.right, bounds.x), bounds.right)
    bottom = min(max(rect.bottom, bounds.y), bounds.bottom)
    return Rect(left, top, max(0.0, right - left), max(0.0, bottom - top))

def clamp_point(point: Point, width: float, height: float) -> Point:
    return Point(min(max(point.x, 0.0), width), min(max(point.y, 0.0), height))

def rect_from_points(a: Point, b: Point) -> Rect:
    """Normalized rectangle spanned by two corner points"""
    return Rect(min(a.x, b.x), min(a.y, b.y), abs(a.x - b.x), abs(a.y - b.y))
