"""
Image Editor v1.2 - Image Loader Module
=======================================
Asynchronous resolution of image references into decoded images
"""

import base64
import binascii
import io
from dataclasses import dataclass, field
from typing import Optional, Union
from urllib.parse import unquote_to_bytes, urlsplit
import httpx
from PIL import Image, ImageOps, UnidentifiedImageError
import config
from logger import get_logger
from validators import ValidationError, validate_image_reference, validate_dimensions

logger = get_logger(__name__)

# === RESULT TYPES ===

@dataclass(frozen=True)
class LoadedImage:
    """Decoded source image, immutable for the editing session"""
    reference: str
    image: Image.Image = field(repr=False, compare=False)
    natural_width: int = 0
    natural_height: int = 0
    origin_clean: bool = True

@dataclass(frozen=True)
class LoadFailure:
    """Explicit error state for a reference that could not be loaded"""
    reference: str
    reason: str  # invalid-reference | network | decode | too-large
    message: str = ""

LoadResult = Union[LoadedImage, LoadFailure]

class ImageTooLargeError(ValueError):
    """Decoded pixel area exceeds what the editor will allocate"""
    pass

# === ORIGIN CHECKS ===

def get_origin(url: str) -> str:
    """scheme://host[:port] with default ports dropped"""
    parts = urlsplit(url)
    scheme = parts.scheme.lower()
    host = (parts.hostname or '').lower()
    port = parts.port
    if port is None or (scheme, port) in (('http', 80), ('https', 443)):
        return f"{scheme}://{host}"
    return f"{scheme}://{host}:{port}"

def is_origin_clean(url: str, page_origin: str, headers) -> bool:
    """Whether pixels fetched from url stay readable for page_origin"""
    if get_origin(url) == get_origin(page_origin):
        return True
    allowed = (headers.get('access-control-allow-origin') or '').strip()
    if allowed == '*':
        return True
    try:
        return bool(allowed) and get_origin(allowed) == get_origin(page_origin)
    except ValueError:
        return False

# === DECODING ===

def decode_data_uri(reference: str) -> bytes:
    """
    Extract the payload of a data: URI

    Raises:
        ValueError: If the payload is not valid base64
    """
    header, _, payload = reference.partition(',')
    if header.lower().endswith(';base64'):
        try:
            return base64.b64decode(payload, validate=False)
        except (binascii.Error, ValueError) as e:
            raise ValueError(f"Invalid base64 payload: {e}")
    return unquote_to_bytes(payload)

def decode_image(data: bytes) -> Image.Image:
    """
    Decode bytes into an upright RGBA image (first frame only)

    Raises:
        ImageTooLargeError: If the header declares an oversized image
        ValueError: If the bytes are not a decodable image
    """
    if not data:
        raise ValueError("Image data is empty")
    try:
        with Image.open(io.BytesIO(data)) as img_temp:
            if max(img_temp.size) > config.MAX_IMAGE_DIMENSION:
                raise ImageTooLargeError(
                    f"Dimensions too large: {img_temp.width}x{img_temp.height} "
                    f"(max: {config.MAX_IMAGE_DIMENSION}px)"
                )
            img_temp.seek(0)
            img = ImageOps.exif_transpose(img_temp)
            img = img.convert('RGBA')
    except Image.DecompressionBombError as e:
        raise ImageTooLargeError(f"Image too large to decode: {e}")
    except (UnidentifiedImageError, OSError, SyntaxError) as e:
        raise ValueError(f"Corrupted or invalid image: {e}")
    try:
        validate_dimensions(img.width, img.height)
    except ValidationError as e:
        raise ValueError(str(e))
    return img

# === LOADING ===

async def fetch_bytes(url: str, client: httpx.AsyncClient, page_origin: str):
    """GET url sending the page origin, returning (content, headers, final_url)"""
    logger.debug(f"GET {url}")
    resp = await client.get(url, headers={'Origin': get_origin(page_origin)})
    if resp.status_code >= 400:
        raise httpx.HTTPStatusError(
            f"HTTP {resp.status_code} for {url}", request=resp.request, response=resp
        )
    return resp.content, resp.headers, str(resp.url)

async def load_image(
    reference: str,
    client: Optional[httpx.AsyncClient] = None,
    page_origin: str = None
) -> LoadResult:
    """
    Resolve a data URI or URL into a LoadedImage

    Load faults never raise: they resolve to a LoadFailure.

    Args:
        reference: data: URI or http(s) URL
        client: Shared HTTP client; a short-lived one is created if None
        page_origin: Origin of the hosting page, used for the CORS check

    Returns:
        LoadedImage or LoadFailure
    """
    page_origin = page_origin or config.PAGE_ORIGIN
    try:
        scheme = validate_image_reference(reference)
    except ValidationError as e:
        logger.warning(f"Rejected image reference: {e}")
        return LoadFailure(str(reference), 'invalid-reference', str(e))

    reference = reference.strip()
    origin_clean = True

    try:
        if scheme == 'data':
            data = decode_data_uri(reference)
        elif client is not None:
            data, headers, final_url = await fetch_bytes(reference, client, page_origin)
            origin_clean = is_origin_clean(final_url, page_origin, headers)
        else:
            async with httpx.AsyncClient(timeout=config.HTTP_TIMEOUT, follow_redirects=True) as own_client:
                data, headers, final_url = await fetch_bytes(reference, own_client, page_origin)
            origin_clean = is_origin_clean(final_url, page_origin, headers)
    except httpx.InvalidURL as e:
        logger.warning(f"Rejected image reference: {e}")
        return LoadFailure(reference, 'invalid-reference', str(e))
    except httpx.HTTPError as e:
        logger.warning(f"Image fetch failed: {e}")
        return LoadFailure(reference, 'network', str(e))
    except ValueError as e:
        logger.warning(f"Image payload invalid: {e}")
        return LoadFailure(reference, 'decode', str(e))

    if len(data) > config.MAX_FILE_SIZE:
        size_mb = len(data) / (1024 * 1024)
        max_mb = config.MAX_FILE_SIZE / (1024 * 1024)
        msg = f"File too large: {size_mb:.1f} MB (max: {max_mb:.1f} MB)"
        logger.warning(msg)
        return LoadFailure(reference, 'too-large', msg)

    try:
        img = decode_image(data)
    except ImageTooLargeError as e:
        logger.warning(f"Image rejected: {e}")
        return LoadFailure(reference, 'too-large', str(e))
    except ValueError as e:
        logger.warning(f"Image decode failed: {e}")
        return LoadFailure(reference, 'decode', str(e))

    if not origin_clean:
        logger.info(f"Loaded cross-origin image without CORS approval: {reference}")

    logger.info(f"Image loaded: {img.width}x{img.height} ({scheme}, clean={origin_clean})")
    return LoadedImage(reference, img, img.width, img.height, origin_clean)
