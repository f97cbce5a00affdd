"""
Rounded corner masking.

Punches transparent rounded corners into an RGBA image in place. The four
corner paths from ``build_corners`` are rasterized as one union, and every
pixel they cover is *replaced* toward transparent. Source-over blending with
a transparent color would leave the image unchanged, so it is never used.

Coverage model:
    Pixel (x, y) is the unit square centred on (x, y). It is sampled on an
    n x n grid (n = ``supersample``); coverage is the fraction of samples
    inside the union of the corner paths. Only the pixels under each
    path's bounding box are sampled. Each box is processed in row bands
    to keep memory use flat for large images and high sampling factors.

Alpha rules for a pixel with coverage c:
    - c == 0: untouched
    - c == 1: becomes (0, 0, 0, 0)
    - 'clamp' (default): alpha = min(alpha, round(255 * (1 - c)))
    - 'scale': alpha = round(alpha * (1 - c))

Both rules agree on opaque pixels. 'clamp' is idempotent; 'scale' keeps
eating into partially covered pixels when applied again.

Example:
    >>> from PIL import Image
    >>> img = Image.new("RGBA", (64, 64), (255, 0, 0, 255))
    >>> apply_rounded_corners(img, 12)
    >>> img.getpixel((0, 0))
    (0, 0, 0, 0)
"""

import logging
from typing import Any, Iterable

import numpy as np
from PIL import Image

from AV_Libs.constants import (
    ALPHA_RULE_CLAMP,
    ALPHA_RULES,
    COVERAGE_BAND_SAMPLES,
    DEFAULT_ALPHA_RULE,
    DEFAULT_SUPERSAMPLE,
    MAX_SUPERSAMPLE,
    MIN_SUPERSAMPLE,
)
from AV_Libs.errors import require_dimensions, require_radius
from AV_Libs.GeometryLib.corner_paths import CornerPath, PathCollection, build_corners
from AV_Libs.ImageEditingLib.image_models import BUFFER_MODE, TRANSPARENT

logger = logging.getLogger(__name__)


def validate_mask_options(supersample: int, alpha_rule: str) -> None:
    """
    Check the sampling factor and alpha rule.

    Raises:
        ValueError: If supersample is out of range or alpha_rule is unknown
    """
    if isinstance(supersample, bool) or not isinstance(supersample, int):
        raise ValueError(f"supersample must be an int, got {supersample!r}")

    if not (MIN_SUPERSAMPLE <= supersample <= MAX_SUPERSAMPLE):
        raise ValueError(
            f"supersample must be {MIN_SUPERSAMPLE}-{MAX_SUPERSAMPLE}, got {supersample}"
        )

    if alpha_rule not in ALPHA_RULES:
        raise ValueError(
            f"Unknown alpha_rule: {alpha_rule}. Valid rules: {', '.join(ALPHA_RULES)}"
        )


def compute_corner_coverage(
    width: int,
    height: int,
    corners: PathCollection,
    supersample: int = DEFAULT_SUPERSAMPLE,
) -> np.ndarray:
    """
    Fractional coverage of every pixel by the union of the corner paths.

    Args:
        width: Image width in pixels
        height: Image height in pixels
        corners: The four corner paths
        supersample: Samples per pixel along each axis

    Returns:
        float32 array of shape (height, width) with values in [0, 1]
    """
    coverage = np.zeros((height, width), dtype=np.float32)
    offsets = (np.arange(supersample) + 0.5) / supersample - 0.5

    for path in corners:
        x0, y0, x1, y1 = path.pixel_window(width, height)
        if x0 >= x1 or y0 >= y1:
            continue

        sample_x = (np.arange(x0, x1)[:, None] + offsets[None, :]).ravel()
        # Rows are sampled in bands so the sample grid stays bounded in size
        band_rows = max(1, COVERAGE_BAND_SAMPLES // (sample_x.size * supersample))

        for band_y0 in range(y0, y1, band_rows):
            band_y1 = min(y1, band_y0 + band_rows)
            sample_y = (np.arange(band_y0, band_y1)[:, None] + offsets[None, :]).ravel()

            # Every corner is tested, so overlapping windows agree on shared pixels
            inside = corners.contains(sample_x[None, :], sample_y[:, None])
            block = inside.reshape(
                band_y1 - band_y0, supersample, x1 - x0, supersample
            ).mean(axis=(1, 3))

            window = coverage[band_y0:band_y1, x0:x1]
            np.maximum(window, block, out=window)

    return coverage


def _replace_with_transparent(pixels: np.ndarray, coverage: np.ndarray, alpha_rule: str) -> None:
    """Write the coverage-weighted replacement into an (H, W, 4) uint8 array."""
    covered = coverage > 0.0
    alpha = pixels[..., 3].astype(np.float32)
    keep = 1.0 - coverage

    if alpha_rule == ALPHA_RULE_CLAMP:
        replaced = np.minimum(alpha, np.rint(255.0 * keep))
    else:
        replaced = np.rint(alpha * keep)

    pixels[..., 3] = np.where(covered, replaced, alpha).astype(np.uint8)
    pixels[coverage >= 1.0] = TRANSPARENT


def apply_rounded_corners(
    image: Any,
    corner_radius: float,
    supersample: int = DEFAULT_SUPERSAMPLE,
    alpha_rule: str = DEFAULT_ALPHA_RULE,
) -> None:
    """
    Make the four corners of an RGBA image transparent, in place.

    All arguments are validated before any pixel is touched.

    Args:
        image: RGBA PIL Image, mutated in place
        corner_radius: Corner radius in pixels (0 leaves the image unchanged)
        supersample: Samples per pixel along each axis (1-16)
        alpha_rule: 'clamp' or 'scale' for partially covered pixels

    Raises:
        TypeError: If image is not a PIL Image
        InvalidDimension: If the image has zero width or height
        InvalidRadius: If corner_radius is negative or not finite
        ValueError: If the image is not RGBA, or options are invalid
    """
    if not hasattr(image, "mode") or not hasattr(image, "size"):
        raise TypeError(f"Expected PIL Image, got {type(image)}")

    width, height = require_dimensions(*image.size)
    radius = require_radius(corner_radius)
    validate_mask_options(supersample, alpha_rule)

    if image.mode != BUFFER_MODE:
        raise ValueError(f"Image must be in {BUFFER_MODE} mode to be masked in place, got {image.mode}")

    if radius == 0:
        logger.debug("Corner radius is 0, image left unchanged")
        return

    corners = build_corners(width, height, radius)
    coverage = compute_corner_coverage(width, height, corners, supersample)

    if not coverage.any():
        return

    pixels = np.array(image, dtype=np.uint8)
    _replace_with_transparent(pixels, coverage, alpha_rule)
    image.paste(Image.fromarray(pixels))

    logger.debug(
        f"Masked corners of {width}x{height} image: radius {radius}, "
        f"{int(np.count_nonzero(coverage))} pixels touched"
    )


def corner_paths_mask(
    width: int,
    height: int,
    corners: Iterable[CornerPath],
    supersample: int = DEFAULT_SUPERSAMPLE,
) -> Any:
    """
    Render corner coverage as an "L" mask (255 = fully covered).

    Useful for previewing or for applying the corners to a different image.
    """
    collection = corners if isinstance(corners, PathCollection) else PathCollection(*corners)
    coverage = compute_corner_coverage(width, height, collection, supersample)
    return Image.fromarray(np.rint(coverage * 255.0).astype(np.uint8))
