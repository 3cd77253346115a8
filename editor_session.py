"""
Image Editor v1.2 - Editor Session Module
=========================================
One editing session: load, resize or crop, apply
"""

from typing import Callable, Optional
import httpx
from PIL import Image
import config
from crop_controller import CropController
from export_encoder import EditRejected, EditResult, EditorStateError, export_crop, export_resize
from geometry import DisplayTransform, to_display_space
from image_loader import LoadedImage, LoadResult, load_image
from logger import get_logger
from render_scheduler import RenderScheduler
from resize_controller import ResizeController
from surface import Surface
from validators import validate_display_bounds

logger = get_logger(__name__)

class EditorSession:
    """
    Editing session for a single source image

    The session is opened with open(), which loads the reference. Resize and
    crop state are created from the loaded image. Pointer events only act in
    crop mode. close() cancels any scheduled redraw.
    """

    def __init__(
        self,
        reference: str,
        max_display_width: float = None,
        max_display_height: float = None,
        clock=None,
        client: Optional[httpx.AsyncClient] = None,
        page_origin: str = None,
        on_preview: Optional[Callable[[Image.Image], None]] = None
    ):
        self.reference = reference
        self.max_display_width, self.max_display_height = validate_display_bounds(
            max_display_width or config.MAX_DISPLAY_WIDTH,
            max_display_height or config.MAX_DISPLAY_HEIGHT
        )
        self.client = client
        self.page_origin = page_origin
        self.on_preview = on_preview
        self.scheduler = RenderScheduler(clock)

        self.status = 'new'  # new | loading | ready | failed | closed
        self.failure = None
        self.loaded_image: Optional[LoadedImage] = None
        self.transform: Optional[DisplayTransform] = None
        self.resize: Optional[ResizeController] = None
        self.crop: Optional[CropController] = None
        self.mode = config.DEFAULT_EDIT_MODE
        self.preview: Optional[Surface] = None

    # === LIFECYCLE ===

    async def open(self) -> LoadResult:
        """Load the reference; a failure leaves the session in 'failed'"""
        if self.status == 'closed':
            raise EditorStateError("Session is closed")
        self.status = 'loading'
        result = await load_image(self.reference, client=self.client, page_origin=self.page_origin)
        if self.status == 'closed':
            return result
        if isinstance(result, LoadedImage):
            self._attach(result)
        else:
            self.status = 'failed'
            self.failure = result
            self.loaded_image = self.transform = self.resize = self.crop = None
        return result

    def _attach(self, loaded_image: LoadedImage):
        self.loaded_image = loaded_image
        self.transform = DisplayTransform.from_natural(
            loaded_image.natural_width, loaded_image.natural_height,
            self.max_display_width, self.max_display_height
        )
        self.resize = ResizeController.for_image(loaded_image, config.DEFAULT_SETTINGS['aspect_locked'])
        self.crop = CropController(
            self.transform,
            (loaded_image.natural_width, loaded_image.natural_height),
            self.scheduler,
            draw_fn=self._redraw
        )
        self.status = 'ready'
        self.failure = None
        logger.info(
            f"Session ready: {loaded_image.natural_width}x{loaded_image.natural_height} "
            f"shown at {self.transform.scale:.4f}"
        )
        self.render_preview()

    def close(self):
        """Tear down; no redraw fires afterwards"""
        self.scheduler.close()
        if self.crop is not None:
            self.crop.reset()
        self.mode = config.DEFAULT_EDIT_MODE
        self.status = 'closed'
        self.preview = None

    def _require_ready(self):
        if self.status != 'ready':
            raise EditorStateError(f"Session not ready (status: {self.status})")

    # === MODE ===

    def set_mode(self, mode: str):
        if mode not in config.EDIT_MODES:
            raise ValueError(f"Unknown edit mode: {mode}")
        if mode == self.mode:
            return
        self.mode = mode
        if self.crop is not None:
            self.crop.reset()
        if self.status == 'ready':
            self.render_preview()

    # === POINTER EVENTS ===

    def pointer_down(self, x: float, y: float) -> bool:
        if self.mode != 'crop' or self.status != 'ready':
            return False
        return self.crop.begin_selection((x, y))

    def pointer_move(self, x: float, y: float) -> bool:
        if self.mode != 'crop' or self.status != 'ready':
            return False
        return self.crop.update_selection((x, y))

    def pointer_up(self) -> bool:
        if self.mode != 'crop' or self.status != 'ready':
            return False
        return self.crop.end_selection()

    # === RENDERING ===

    def _redraw(self):
        if self.status != 'ready':
            return
        self.render_preview()

    def render_preview(self) -> Surface:
        """Draw the scaled image, plus the selection overlay in crop mode"""
        self._require_ready()
        width, height = self.transform.canvas_size
        surface = Surface(width, height)
        surface.draw_image(self.loaded_image)

        rect = self.crop.display_rect() if self.mode == 'crop' else None
        if rect is not None:
            box = rect.as_box()
            surface.fill_rect((0, 0, width, height), config.OVERLAY_FILL)
            src = self.crop.source_rect()
            if src.width >= 1 and src.height >= 1:
                dest = to_display_space(src, self.transform.scale).as_box()
                if dest[2] > dest[0] and dest[3] > dest[1]:
                    surface.draw_image(self.loaded_image, src_box=src.as_box(), dest_box=dest)
            surface.stroke_rect(box, config.SELECTION_COLOR, config.SELECTION_LINE_WIDTH)

        self.preview = surface
        if self.on_preview is not None:
            self.on_preview(surface.present())
        return surface

    def selection_size(self):
        if self.status != 'ready' or self.mode != 'crop':
            return None
        return self.crop.selection_size()

    # === APPLY ===

    def apply(self) -> EditResult:
        """
        Produce the edited image for the current mode

        Raises:
            EditorStateError: If the image has not finished loading
        """
        self._require_ready()
        if self.mode == 'resize':
            width, height = self.resize.current_dimensions()
            return export_resize(self.loaded_image, width, height)

        rect = self.crop.finalize_crop()
        if rect is None:
            return EditRejected()
        return export_crop(self.loaded_image, rect)

    def skip(self) -> str:
        """Keep the original image unedited"""
        return self.reference
