"""
Crop-to-fill resize.

Scales a source image uniformly so it covers the whole target area, then
crops the overflow equally from both sides of the longer axis. No
letterboxing and no distortion.

Example:
    >>> from PIL import Image
    >>> photo = Image.new("RGB", (400, 300), "red")
    >>> square = resize_crop(photo, 300, 300)
    >>> square.size, square.mode
    ((300, 300), 'RGBA')
"""

from typing import Any, Dict, List

from PIL import Image, ImageOps

from AV_Libs.constants import DEFAULT_RESAMPLE
from AV_Libs.errors import require_dimensions
from AV_Libs.ImageEditingLib.image_models import BUFFER_MODE

RESAMPLING_FILTERS: Dict[str, Image.Resampling] = {
    "nearest": Image.Resampling.NEAREST,
    "bilinear": Image.Resampling.BILINEAR,
    "bicubic": Image.Resampling.BICUBIC,
    "lanczos": Image.Resampling.LANCZOS,
}


def get_resampling_filters() -> List[str]:
    """Names accepted by the ``resample`` argument of resize_crop."""
    return sorted(RESAMPLING_FILTERS)


def resize_crop(
    image: Any,
    target_width: int,
    target_height: int,
    resample: str = DEFAULT_RESAMPLE,
) -> Any:
    """
    Resize an image to exactly target_width x target_height by crop-to-fill.

    Args:
        image: PIL Image of any mode and size (not modified)
        target_width: Output width in pixels (> 0)
        target_height: Output height in pixels (> 0)
        resample: Resampling filter name ('lanczos', 'bicubic', 'bilinear', 'nearest')

    Returns:
        New RGBA PIL Image of the target size

    Raises:
        TypeError: If image is not a PIL Image
        InvalidDimension: If the source has zero area or the target is not positive
        ValueError: If resample is not a known filter name
    """
    if not hasattr(image, "mode") or not hasattr(image, "size"):
        raise TypeError(f"Expected PIL Image, got {type(image)}")

    require_dimensions(*image.size, what="source")
    target_width, target_height = require_dimensions(target_width, target_height, what="target")

    method = RESAMPLING_FILTERS.get(str(resample).lower())
    if method is None:
        raise ValueError(
            f"Unknown resample filter: {resample}. "
            f"Valid filters: {', '.join(get_resampling_filters())}"
        )

    # Convert first so alpha is resampled together with color
    source = image if image.mode == BUFFER_MODE else image.convert(BUFFER_MODE)

    return ImageOps.fit(
        source,
        (target_width, target_height),
        method=method,
        centering=(0.5, 0.5),
    )
