"""
Image Editor v1.2 - Crop Controller Module
==========================================
Pointer-driven rectangular selection and its mapping to source pixels
"""

from enum import Enum
from typing import Callable, Optional, Tuple
from geometry import DisplayTransform, Point, Rect, clamp_point, rect_from_points, to_source_space
from render_scheduler import RenderScheduler
from logger import get_logger

logger = get_logger(__name__)

class CropPhase(Enum):
    IDLE = 'idle'
    DRAGGING = 'dragging'

class CropController:
    """
    Selection rectangle tracked through a pointer drag

    Idle --begin--> Dragging --update*--> Dragging --end--> Idle.
    A finished selection is kept for rendering until the next begin()
    or reset(). Calls made in the wrong phase are ignored and return False.
    """

    def __init__(
        self,
        transform: DisplayTransform,
        natural_size: Tuple[int, int],
        scheduler: RenderScheduler,
        draw_fn: Optional[Callable[[], None]] = None
    ):
        self.transform = transform
        self.natural_size = natural_size
        self.scheduler = scheduler
        self.draw_fn = draw_fn
        self.phase = CropPhase.IDLE
        self.anchor: Optional[Point] = None
        # Latest pointer position; read lazily when a frame fires
        self.cursor: Optional[Point] = None

    @property
    def is_dragging(self) -> bool:
        return self.phase is CropPhase.DRAGGING

    @property
    def has_selection(self) -> bool:
        return self.anchor is not None and self.cursor is not None

    def _clamp(self, point) -> Point:
        if not isinstance(point, Point):
            point = Point(*point)
        return clamp_point(point, self.transform.display_width, self.transform.display_height)

    # === POINTER LIFECYCLE ===

    def begin_selection(self, point) -> bool:
        if self.is_dragging:
            logger.debug("begin_selection ignored: drag already in progress")
            return False
        p = self._clamp(point)
        self.anchor = p
        self.cursor = p
        self.phase = CropPhase.DRAGGING
        self._schedule_redraw()
        return True

    def update_selection(self, point) -> bool:
        if not self.is_dragging:
            return False
        self.cursor = self._clamp(point)
        self._schedule_redraw()
        return True

    def end_selection(self) -> bool:
        if not self.is_dragging:
            return False
        self.phase = CropPhase.IDLE
        self._schedule_redraw()
        logger.debug(f"Selection finished: {self.display_rect()}")
        return True

    def reset(self):
        """Drop the selection (mode switch or session close)"""
        self.phase = CropPhase.IDLE
        self.anchor = None
        self.cursor = None
        self.scheduler.cancel()

    def _schedule_redraw(self):
        if self.draw_fn is not None:
            self.scheduler.request_redraw(self.draw_fn)

    # === GEOMETRY ===

    def display_rect(self) -> Optional[Rect]:
        if not self.has_selection:
            return None
        return rect_from_points(self.anchor, self.cursor)

    def source_rect(self) -> Optional[Rect]:
        """Selection in whole source pixels, clamped to the image"""
        rect = self.display_rect()
        if rect is None:
            return None
        src = to_source_space(rect, self.transform.scale, bounds=self.natural_size)
        nat_w, nat_h = self.natural_size
        left = min(max(0, int(round(src.x))), nat_w)
        top = min(max(0, int(round(src.y))), nat_h)
        right = min(max(left, int(round(src.right))), nat_w)
        bottom = min(max(top, int(round(src.bottom))), nat_h)
        # under half a pixel collapses, even when the snapped edges straddle a pixel boundary
        if round(src.width) < 1:
            right = left
        if round(src.height) < 1:
            bottom = top
        return Rect(left, top, right - left, bottom - top)

    def selection_size(self) -> Optional[Tuple[int, int]]:
        rect = self.source_rect()
        if rect is None:
            return None
        return int(rect.width), int(rect.height)

    def finalize_crop(self) -> Optional[Rect]:
        """
        Selection mapped into source space for extraction

        Returns:
            Source-space rectangle, or None if the selection is missing or
            rounds to less than one pixel on either axis
        """
        rect = self.source_rect()
        if rect is None or rect.width < 1 or rect.height < 1:
            logger.info(f"Crop rejected: selection too small ({rect})")
            return None
        return rect
