"""
2-D affine transforms for corner path placement.

Coordinates follow the image convention: x grows to the right, y grows
downward, so a positive rotation angle turns clockwise on screen.

Example:
    >>> move = AffineTransform.translation(10, 0)
    >>> turn = AffineTransform.rotation_degrees(90, center=(5.0, 5.0))
    >>> placed = move @ turn          # rotate first, then translate
    >>> placed.apply_point(0.0, 0.0)
    (20.0, 0.0)
"""

from dataclasses import dataclass
import math
from typing import Any, Tuple

import numpy as np


def _cos_sin(degrees: float) -> Tuple[float, float]:
    """Cosine and sine of an angle, exact for quarter turns."""
    quarter, remainder = divmod(float(degrees), 90.0)
    if remainder == 0.0:
        return {
            0: (1.0, 0.0),
            1: (0.0, 1.0),
            2: (-1.0, 0.0),
            3: (0.0, -1.0),
        }[int(quarter) % 4]

    radians = math.radians(degrees)
    return math.cos(radians), math.sin(radians)


@dataclass(frozen=True, eq=False)
class AffineTransform:
    """Immutable 3x3 homogeneous transform matrix.

    Attributes:
        matrix: 3x3 float64 array; the last row is always (0, 0, 1)
    """
    matrix: np.ndarray

    def __post_init__(self):
        matrix = np.array(self.matrix, dtype=np.float64)
        if matrix.shape != (3, 3):
            raise ValueError(f"affine matrix must be 3x3, got shape {matrix.shape}")
        matrix.setflags(write=False)
        object.__setattr__(self, "matrix", matrix)

    @classmethod
    def identity(cls) -> "AffineTransform":
        return cls(np.eye(3))

    @classmethod
    def translation(cls, dx: float, dy: float) -> "AffineTransform":
        return cls(np.array([
            [1.0, 0.0, float(dx)],
            [0.0, 1.0, float(dy)],
            [0.0, 0.0, 1.0],
        ]))

    @classmethod
    def rotation_degrees(
        cls,
        degrees: float,
        center: Tuple[float, float] = (0.0, 0.0),
    ) -> "AffineTransform":
        """
        Rotation about a center point.

        Args:
            degrees: Rotation angle; positive is clockwise on screen
            center: (x, y) point that stays fixed

        Returns:
            The rotation as an AffineTransform
        """
        cos, sin = _cos_sin(degrees)
        cx, cy = float(center[0]), float(center[1])
        rotate = np.array([
            [cos, -sin, 0.0],
            [sin, cos, 0.0],
            [0.0, 0.0, 1.0],
        ])
        return cls.translation(cx, cy) @ cls(rotate) @ cls.translation(-cx, -cy)

    def __matmul__(self, other: "AffineTransform") -> "AffineTransform":
        # (a @ b) applies b first, then a
        if not isinstance(other, AffineTransform):
            return NotImplemented
        return AffineTransform(self.matrix @ other.matrix)

    def inverse(self) -> "AffineTransform":
        return AffineTransform(np.linalg.inv(self.matrix))

    def apply(self, xs: Any, ys: Any) -> Tuple[np.ndarray, np.ndarray]:
        """
        Transform arrays of x and y coordinates.

        Args:
            xs: Array-like of x coordinates
            ys: Array-like of y coordinates (broadcast against xs)

        Returns:
            Tuple of transformed (xs, ys) float64 arrays
        """
        xs, ys = np.broadcast_arrays(
            np.asarray(xs, dtype=np.float64),
            np.asarray(ys, dtype=np.float64),
        )
        m = self.matrix
        out_x = m[0, 0] * xs + m[0, 1] * ys + m[0, 2]
        out_y = m[1, 0] * xs + m[1, 1] * ys + m[1, 2]
        return out_x, out_y

    def apply_point(self, x: float, y: float) -> Tuple[float, float]:
        out_x, out_y = self.apply(x, y)
        return float(out_x), float(out_y)

    def is_close(self, other: "AffineTransform", tolerance: float = 1e-9) -> bool:
        return bool(np.allclose(self.matrix, other.matrix, atol=tolerance))
