"""
ImageEditingLib - Core image editing functionality

This module provides the resize/crop stage, the rounded corner compositor
and the avatar pipeline that chains them.
"""

from AV_Libs.ImageEditingLib.image_models import RgbaColor, Size, TRANSPARENT
from AV_Libs.ImageEditingLib.resize_crop import resize_crop, get_resampling_filters
from AV_Libs.ImageEditingLib.rounded_corners import (
    apply_rounded_corners,
    compute_corner_coverage,
    corner_paths_mask,
)
from AV_Libs.ImageEditingLib.avatar_pipeline import make_avatar

__all__ = [
    "RgbaColor",
    "Size",
    "TRANSPARENT",
    "resize_crop",
    "get_resampling_filters",
    "apply_rounded_corners",
    "compute_corner_coverage",
    "corner_paths_mask",
    "make_avatar",
]
