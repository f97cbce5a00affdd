"""
Error types and argument checks shared by the avatar stages.

Each error also derives from the builtin exception callers would expect
(ValueError for bad arguments, IOError for unreadable data), so code that
already catches builtin kinds keeps working.

Classes:
    AvatarError: Base class for all avatar errors
    InvalidDimension: Zero or negative width, height or target size
    InvalidRadius: Negative or non-finite corner radius
    DecodeFailure: Source bytes could not be decoded into an image

Functions:
    require_dimensions: Validate a width/height pair
    require_radius: Validate a corner radius
"""

import math
import numbers
from typing import Any, Tuple


class AvatarError(Exception):
    """Base class for avatar errors."""


class InvalidDimension(AvatarError, ValueError):
    """Raised for zero or negative image or target dimensions."""


class InvalidRadius(AvatarError, ValueError):
    """Raised for negative or non-finite corner radii."""


class DecodeFailure(AvatarError, IOError):
    """Raised when source bytes cannot be decoded into an image."""


def require_dimensions(width: Any, height: Any, what: str = "image") -> Tuple[int, int]:
    """
    Validate a width/height pair.

    Args:
        width: Width in pixels
        height: Height in pixels
        what: Name used in the error message

    Returns:
        (width, height) as ints

    Raises:
        InvalidDimension: If either value is not a positive integer
    """
    for name, value in (("width", width), ("height", height)):
        if isinstance(value, bool) or not isinstance(value, numbers.Integral):
            raise InvalidDimension(f"{what} {name} must be an int, got {value!r}")
        if value <= 0:
            raise InvalidDimension(f"{what} {name} must be > 0, got {value}")
    return int(width), int(height)


def require_radius(radius: Any) -> float:
    """
    Validate a corner radius.

    Raises:
        InvalidRadius: If radius is not a finite number >= 0
    """
    try:
        value = float(radius)
    except (TypeError, ValueError):
        raise InvalidRadius(f"corner radius must be a number, got {radius!r}")

    if not math.isfinite(value) or value < 0:
        raise InvalidRadius(f"corner radius must be finite and >= 0, got {radius}")
    return value
