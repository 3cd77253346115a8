"""
Image Editor v1.2 - Surface Module
==================================
Off-screen drawing surface with cross-origin taint tracking
"""

import io
from typing import Optional, Tuple
from PIL import Image, ImageColor, ImageDraw
import config
from logger import get_logger

logger = get_logger(__name__)

Box = Tuple[int, int, int, int]

class TaintedSurfaceError(Exception):
    """Pixel readback attempted on a surface holding cross-origin pixels"""
    pass

class Surface:
    """
    RGBA drawing surface

    Drawing a cross-origin image that was not served with permissive
    access headers marks the surface as no longer origin-clean. Such a
    surface can still be presented on screen, but any readback of its
    pixels raises TaintedSurfaceError.
    """

    def __init__(self, width: int, height: int):
        if width < 1 or height < 1:
            raise ValueError(f"Surface size must be positive, got {width}x{height}")
        self._image = Image.new('RGBA', (int(width), int(height)), (0, 0, 0, 0))
        self.origin_clean = True

    @property
    def size(self) -> Tuple[int, int]:
        return self._image.size

    @property
    def width(self) -> int:
        return self._image.width

    @property
    def height(self) -> int:
        return self._image.height

    # === DRAWING ===

    def draw_image(self, loaded_image, src_box: Optional[Box] = None, dest_box: Optional[Box] = None):
        """
        Draw (part of) a loaded image, scaling src_box onto dest_box

        Args:
            loaded_image: LoadedImage to draw from
            src_box: Source region (left, upper, right, lower); whole image if None
            dest_box: Destination region on this surface; whole surface if None
        """
        source = loaded_image.image
        if src_box is not None:
            source = source.crop(src_box)
        dl, dt, dr, db = dest_box if dest_box is not None else (0, 0, self.width, self.height)
        dw, dh = max(1, dr - dl), max(1, db - dt)
        if source.size != (dw, dh):
            source = source.resize((dw, dh), Image.Resampling.LANCZOS)
        self._image.paste(source, (dl, dt))

        if not loaded_image.origin_clean:
            self.origin_clean = False

    def fill_rect(self, box: Box, color):
        """Alpha-blend a color over a region"""
        overlay = Image.new('RGBA', self.size, (0, 0, 0, 0))
        ImageDraw.Draw(overlay).rectangle(box, fill=color)
        self._image = Image.alpha_composite(self._image, overlay)

    def stroke_rect(self, box: Box, color: str, line_width: int = 1):
        rgb = ImageColor.getrgb(color)
        left, top, right, bottom = box
        # Pillow rectangles include the lower-right pixel
        ImageDraw.Draw(self._image).rectangle(
            (left, top, max(left, right - 1), max(top, bottom - 1)),
            outline=rgb, width=line_width
        )

    # === OUTPUT ===

    def present(self) -> Image.Image:
        """Image for on-screen display; allowed on tainted surfaces"""
        return self._image.copy()

    def read_pixels(self) -> Image.Image:
        """
        Read back the surface pixels

        Raises:
            TaintedSurfaceError: If cross-origin pixels were drawn
        """
        if not self.origin_clean:
            raise TaintedSurfaceError(
                "The surface has been tainted by cross-origin data"
            )
        return self._image.copy()

    def encode(self, fmt: str = None, quality: int = None) -> bytes:
        """
        Encode the surface into a still image

        Raises:
            TaintedSurfaceError: If cross-origin pixels were drawn
        """
        fmt = (fmt or config.OUTPUT_FORMAT).upper()
        quality = quality or config.OUTPUT_QUALITY
        img = self.read_pixels()

        if fmt == "JPEG":
            bg = Image.new("RGB", img.size, (255, 255, 255))
            bg.paste(img, mask=img.split()[3]); img = bg
        buf = io.BytesIO()
        sk = {"format": fmt}
        if fmt == "JPEG": sk.update({"quality": quality, "optimize": True, "subsampling": 0})
        elif fmt == "WEBP": sk.update({"quality": quality, "method": 6})
        elif fmt == "PNG": sk.update({"optimize": True})
        img.save(buf, **sk)
        logger.debug(f"Surface encoded: {self.width}x{self.height} {fmt} ({buf.tell()} bytes)")
        return buf.getvalue()
