"""
Avatar pipeline: crop-to-fill resize followed by rounded corner masking.

Example:
    >>> from PIL import Image
    >>> photo = Image.new("RGB", (400, 300), "red")
    >>> avatar = make_avatar(photo, (300, 300), 15)
    >>> avatar.getpixel((0, 0)), avatar.getpixel((150, 150))
    ((0, 0, 0, 0), (255, 0, 0, 255))
"""

import logging
from typing import Any

from AV_Libs.constants import (
    DEFAULT_ALPHA_RULE,
    DEFAULT_AVATAR_SIZE,
    DEFAULT_CORNER_RADIUS,
    DEFAULT_RESAMPLE,
    DEFAULT_SUPERSAMPLE,
)
from AV_Libs.errors import InvalidDimension, require_dimensions, require_radius
from AV_Libs.ImageEditingLib.image_models import Size
from AV_Libs.ImageEditingLib.resize_crop import resize_crop
from AV_Libs.ImageEditingLib.rounded_corners import apply_rounded_corners, validate_mask_options

logger = logging.getLogger(__name__)


def make_avatar(
    source: Any,
    size: Size = DEFAULT_AVATAR_SIZE,
    corner_radius: float = DEFAULT_CORNER_RADIUS,
    supersample: int = DEFAULT_SUPERSAMPLE,
    alpha_rule: str = DEFAULT_ALPHA_RULE,
    resample: str = DEFAULT_RESAMPLE,
) -> Any:
    """
    Build a rounded-corner avatar from a source image.

    Every argument is validated before any work starts, so on failure no
    image is produced. The source image is never modified.

    Args:
        source: PIL Image of any mode and size
        size: (width, height) of the avatar
        corner_radius: Corner radius in pixels (>= 0)
        supersample: Coverage samples per pixel axis (1-16)
        alpha_rule: 'clamp' or 'scale' for partially covered pixels
        resample: Resampling filter name for the resize step

    Returns:
        New RGBA PIL Image of the requested size

    Raises:
        TypeError: If source is not a PIL Image
        InvalidDimension: If the source has zero area or size is not positive
        InvalidRadius: If corner_radius is negative or not finite
        ValueError: If supersample, alpha_rule or resample is invalid
    """
    if not hasattr(source, "mode") or not hasattr(source, "size"):
        raise TypeError(f"Expected PIL Image, got {type(source)}")

    try:
        width, height = size
    except (TypeError, ValueError):
        raise InvalidDimension(f"size must be a (width, height) pair, got {size!r}")

    require_dimensions(*source.size, what="source")
    width, height = require_dimensions(width, height, what="target")
    radius = require_radius(corner_radius)
    validate_mask_options(supersample, alpha_rule)

    avatar = resize_crop(source, width, height, resample)
    apply_rounded_corners(avatar, radius, supersample, alpha_rule)

    logger.debug(f"Made {width}x{height} avatar from {source.size[0]}x{source.size[1]} source")
    return avatar
