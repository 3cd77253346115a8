"""
Image Editor v1.2 - Validation Module
=====================================
Input validation and sanitization
"""

import math
from typing import Tuple
from urllib.parse import urlsplit
import config
from logger import get_logger

logger = get_logger(__name__)

class ValidationError(Exception):
    """Custom validation error"""
    pass

def validate_image_reference(reference: str) -> str:
    """
    Validate a source image reference and return its scheme

    Raises:
        ValidationError: If reference is empty or uses an unsupported scheme
    """
    if not reference or not isinstance(reference, str):
        raise ValidationError("Image reference is empty")

    reference = reference.strip()
    try:
        parts = urlsplit(reference)
        netloc = parts.netloc
        parts.port
    except ValueError as e:
        raise ValidationError(f"Malformed image reference: {e}")
    scheme = parts.scheme.lower()

    if scheme not in config.SUPPORTED_SCHEMES:
        raise ValidationError(
            f"Unsupported image reference: {reference[:40]}. "
            f"Supported: {', '.join(config.SUPPORTED_SCHEMES)}"
        )

    if scheme == 'data' and ',' not in reference:
        raise ValidationError("Malformed data URI: missing payload")

    if scheme in ('http', 'https') and not netloc:
        raise ValidationError(f"URL has no host: {reference}")

    return scheme

def coerce_dimension(value) -> int:
    """
    Coerce an edited dimension into the valid pixel range

    Values below 1 are raised to 1 and values above the configured
    maximum are lowered to it, so the editor always stays in a valid state.

    Raises:
        ValidationError: If value is not numeric
    """
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValidationError(f"Dimension must be numeric, got: {type(value).__name__}")

    if math.isnan(value):
        raise ValidationError("Dimension must be a number, got NaN")

    if math.isinf(value):
        return config.MAX_IMAGE_DIMENSION if value > 0 else config.MIN_IMAGE_DIMENSION

    return max(config.MIN_IMAGE_DIMENSION, min(config.MAX_IMAGE_DIMENSION, int(round(value))))

def validate_dimensions(width: int, height: int) -> bool:
    """
    Validate image dimensions

    Raises:
        ValidationError: If dimensions are invalid
    """
    if width <= 0 or height <= 0:
        raise ValidationError(f"Invalid dimensions: {width}x{height}")

    if width < config.MIN_IMAGE_DIMENSION or height < config.MIN_IMAGE_DIMENSION:
        raise ValidationError(
            f"Dimensions too small: {width}x{height} "
            f"(min: {config.MIN_IMAGE_DIMENSION}px)"
        )

    if width > config.MAX_IMAGE_DIMENSION or height > config.MAX_IMAGE_DIMENSION:
        raise ValidationError(
            f"Dimensions too large: {width}x{height} "
            f"(max: {config.MAX_IMAGE_DIMENSION}px)"
        )

    return True

def validate_display_bounds(max_width: float, max_height: float) -> Tuple[float, float]:
    """
    Validate the preview bounding box

    Raises:
        ValidationError: If either bound is not a positive number
    """
    for label, value in (('width', max_width), ('height', max_height)):
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise ValidationError(f"Display {label} must be numeric, got: {type(value).__name__}")
        if not value > 0:
            raise ValidationError(f"Display {label} must be positive, got: {value}")
    return max_width, max_height

def safe_divide(numerator: float, denominator: float, default: float = 1.0) -> float:
    """
    Safely divide with zero check

    Args:
        numerator: Numerator
        denominator: Denominator
        default: Value to return if denominator is zero

    Returns:
        Result or default
    """
    if denominator == 0:
        logger.warning(f"Division by zero prevented: {numerator}/{denominator}")
        return default
    return numerator / denominator
