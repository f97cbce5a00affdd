"""
Corner clip paths for rounded avatars.

A corner path is the part of a ``radius x radius`` square that lies outside
the circle inscribed against its inner edges: the region that has to become
transparent so the image gets a rounded corner. One canonical top-left
shape is built, then placed at each image corner with a single affine
matrix, so all four corners are congruent by construction.

Pixel (x, y) is the unit square centred on (x, y). The canonical square
starts at (-0.5, -0.5), flush with the outer edge of pixel (0, 0).

Classes:
    Bounds: Axis-aligned bounding box
    CornerPath: Square-minus-circle region placed by an affine transform
    PathCollection: The four corner paths of one image

Functions:
    build_corners: Build the four corner paths for an image size and radius
"""

from dataclasses import dataclass, field
import logging
import math
from typing import Any, Iterator, Tuple

import numpy as np

from AV_Libs.GeometryLib.affine import AffineTransform
from AV_Libs.constants import DEFAULT_ARC_SEGMENTS, SEAM_BIAS
from AV_Libs.errors import require_dimensions, require_radius

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Bounds:
    """Axis-aligned bounding box in image coordinates."""
    left: float
    top: float
    right: float
    bottom: float

    @property
    def width(self) -> float:
        return self.right - self.left

    @property
    def height(self) -> float:
        return self.bottom - self.top

    @property
    def center(self) -> Tuple[float, float]:
        return ((self.left + self.right) / 2.0, (self.top + self.bottom) / 2.0)


@dataclass(frozen=True)
class CornerPath:
    """Square minus circle, placed in image space by an affine transform.

    Attributes:
        radius: Corner radius (side of the square, radius of the circle)
        transform: Maps canonical (top-left) coordinates to image coordinates
        bias: Outward offset of the canonical square (default 0.5 pixel)
    """
    radius: float
    transform: AffineTransform = field(default_factory=AffineTransform.identity)
    bias: float = SEAM_BIAS

    @property
    def circle_center(self) -> float:
        # The circle is centred at (c, c) in canonical coordinates
        return self.radius - self.bias

    @property
    def canonical_bounds(self) -> Bounds:
        low = -self.bias
        high = self.radius - self.bias
        return Bounds(low, low, high, high)

    @property
    def bounds(self) -> Bounds:
        """Bounding box of the placed path."""
        box = self.canonical_bounds
        xs, ys = self.transform.apply(
            [box.left, box.right, box.right, box.left],
            [box.top, box.top, box.bottom, box.bottom],
        )
        return Bounds(float(xs.min()), float(ys.min()), float(xs.max()), float(ys.max()))

    @property
    def area(self) -> float:
        # The square minus a quarter disk; rigid transforms preserve area
        return self.radius * self.radius * (1.0 - math.pi / 4.0)

    def placed(self, transform: AffineTransform) -> "CornerPath":
        """Return a new path with ``transform`` applied after the current one."""
        return CornerPath(self.radius, transform @ self.transform, self.bias)

    def contains(self, xs: Any, ys: Any) -> np.ndarray:
        """
        Test points for membership in the path.

        A point is inside when it lies in the (closed) square and strictly
        outside the circle, so a zero radius contains nothing.

        Args:
            xs: Array-like of x coordinates in image space
            ys: Array-like of y coordinates in image space

        Returns:
            Boolean array broadcast from xs and ys
        """
        u, v = self.transform.inverse().apply(xs, ys)
        box = self.canonical_bounds
        c = self.circle_center
        in_square = (u >= box.left) & (u <= box.right) & (v >= box.top) & (v <= box.bottom)
        outside_circle = (u - c) ** 2 + (v - c) ** 2 > self.radius * self.radius
        return in_square & outside_circle

    def outline(self, segments: int = DEFAULT_ARC_SEGMENTS) -> np.ndarray:
        """
        Closed polygon approximating the path boundary.

        The vertices run from the outer corner along the top edge, along the
        arc, then back up the left edge (in canonical orientation).

        Args:
            segments: Number of straight segments used for the arc (>= 1)

        Returns:
            (N, 2) float64 array of vertices in image space
        """
        if segments < 1:
            raise ValueError(f"segments must be >= 1, got {segments}")

        box = self.canonical_bounds
        c = self.circle_center
        angles = np.linspace(-math.pi / 2.0, -math.pi, segments + 1)
        arc_x = c + self.radius * np.cos(angles)
        arc_y = c + self.radius * np.sin(angles)

        xs = np.concatenate(([box.left], arc_x))
        ys = np.concatenate(([box.top], arc_y))
        out_x, out_y = self.transform.apply(xs, ys)
        return np.column_stack((out_x, out_y))

    def pixel_window(self, width: int, height: int) -> Tuple[int, int, int, int]:
        """
        Pixel index range touched by the path, clipped to the image.

        Returns:
            (x0, y0, x1, y1) half-open ranges; empty when x0 >= x1 or y0 >= y1
        """
        box = self.bounds
        x0 = max(0, math.floor(box.left + 0.5))
        y0 = max(0, math.floor(box.top + 0.5))
        x1 = min(width, math.ceil(box.right + 0.5))
        y1 = min(height, math.ceil(box.bottom + 0.5))
        return x0, y0, x1, y1


class PathCollection:
    """Exactly four corner paths, filled together as a union."""

    def __init__(self, *paths: CornerPath):
        if len(paths) != 4:
            raise ValueError(f"PathCollection needs exactly 4 paths, got {len(paths)}")
        self._paths: Tuple[CornerPath, ...] = tuple(paths)

    def __iter__(self) -> Iterator[CornerPath]:
        return iter(self._paths)

    def __len__(self) -> int:
        return len(self._paths)

    def __getitem__(self, index: int) -> CornerPath:
        return self._paths[index]

    def __repr__(self) -> str:
        return f"PathCollection(radius={self._paths[0].radius}, paths={len(self._paths)})"

    def contains(self, xs: Any, ys: Any) -> np.ndarray:
        """Union membership: True where any path contains the point."""
        result = None
        for path in self._paths:
            inside = path.contains(xs, ys)
            result = inside if result is None else (result | inside)
        return result


def build_corners(image_width: int, image_height: int, corner_radius: float) -> PathCollection:
    """
    Build the four corner paths for an image.

    The top-left path is the square [-0.5, r - 0.5]^2 minus the circle of
    radius r centred at (r - 0.5, r - 0.5). The other corners rotate it about
    its own bounding-box centre (90 for top-right, -90 for bottom-left, 180
    for bottom-right) and shift it by ``width - bounds.width`` and/or
    ``height - bounds.height``, so the placed boxes end at ``width - 0.5``
    and ``height - 0.5``, the outer edges of the last column and row. Each
    corner is the exact mirror image of the top-left one.

    Args:
        image_width: Image width in pixels (> 0)
        image_height: Image height in pixels (> 0)
        corner_radius: Corner radius in pixels (>= 0)

    Returns:
        PathCollection ordered top-left, bottom-left, top-right, bottom-right

    Raises:
        InvalidDimension: If width or height is not a positive integer
        InvalidRadius: If corner_radius is negative or not finite
    """
    image_width, image_height = require_dimensions(image_width, image_height)
    corner_radius = require_radius(corner_radius)

    top_left = CornerPath(corner_radius)
    bounds = top_left.bounds
    pivot = bounds.center

    # The pivot keeps the rotated box in place, so only the size difference remains
    right_offset = image_width - bounds.width
    bottom_offset = image_height - bounds.height

    top_right = top_left.placed(
        AffineTransform.translation(right_offset, 0)
        @ AffineTransform.rotation_degrees(90, pivot)
    )
    bottom_left = top_left.placed(
        AffineTransform.translation(0, bottom_offset)
        @ AffineTransform.rotation_degrees(-90, pivot)
    )
    bottom_right = top_left.placed(
        AffineTransform.translation(right_offset, bottom_offset)
        @ AffineTransform.rotation_degrees(180, pivot)
    )

    logger.debug(
        f"Built corners for {image_width}x{image_height}, radius {corner_radius}: "
        f"offsets ({right_offset}, {bottom_offset})"
    )
    return PathCollection(top_left, bottom_left, top_right, bottom_right)
