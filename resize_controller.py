"""
Image Editor v1.2 - Resize Controller Module
============================================
Target dimensions with optional aspect-ratio lock
"""

from typing import Tuple
from validators import coerce_dimension, safe_divide
from logger import get_logger

logger = get_logger(__name__)

class ResizeController:
    """
    Holds the resize target for one editing session

    Toggling the lock does not renormalize the current dimensions; it
    takes effect on the next width or height edit.

    Both axes are clamped to 1..MAX_IMAGE_DIMENSION. For extreme ratios the
    locked dependent axis can hit that cap, and then the target no longer
    keeps the original ratio.
    """

    def __init__(self, natural_width: int, natural_height: int, aspect_locked: bool = True):
        self.original_aspect_ratio = safe_divide(natural_width, natural_height, default=1.0)
        self.target_width = coerce_dimension(natural_width)
        self.target_height = coerce_dimension(natural_height)
        self.aspect_locked = bool(aspect_locked)

    @classmethod
    def for_image(cls, loaded_image, aspect_locked: bool = True) -> "ResizeController":
        return cls(loaded_image.natural_width, loaded_image.natural_height, aspect_locked)

    def set_width(self, width) -> Tuple[int, int]:
        self.target_width = coerce_dimension(width)
        if self.aspect_locked:
            self.target_height = coerce_dimension(self.target_width / self.original_aspect_ratio)
        logger.debug(f"Resize target: {self.target_width}x{self.target_height}")
        return self.current_dimensions()

    def set_height(self, height) -> Tuple[int, int]:
        self.target_height = coerce_dimension(height)
        if self.aspect_locked:
            self.target_width = coerce_dimension(self.target_height * self.original_aspect_ratio)
        logger.debug(f"Resize target: {self.target_width}x{self.target_height}")
        return self.current_dimensions()

    def set_aspect_locked(self, locked: bool):
        self.aspect_locked = bool(locked)

    def current_dimensions(self) -> Tuple[int, int]:
        return self.target_width, self.target_height
