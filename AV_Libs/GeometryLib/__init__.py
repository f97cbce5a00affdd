"""
GeometryLib - Corner geometry for rounded avatars

This module provides the affine transforms and the square-minus-circle
corner paths used to mask image corners.
"""

from AV_Libs.GeometryLib.affine import AffineTransform
from AV_Libs.GeometryLib.corner_paths import (
    Bounds,
    CornerPath,
    PathCollection,
    build_corners,
)

__all__ = [
    "AffineTransform",
    "Bounds",
    "CornerPath",
    "PathCollection",
    "build_corners",
]
