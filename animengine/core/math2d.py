# animengine/core/math2d.py
"""
Plane math: points in scene units and the affine matrices handed to renderers.
"""

from __future__ import annotations
import math
from dataclasses import dataclass
from typing import Iterable, Tuple

import numpy as np

# =============================================================================
# Points
# =============================================================================

@dataclass(frozen=True)
class Vec2:
    """A point or offset on the animation plane. Y grows downward."""
    x: float = 0.0
    y: float = 0.0

    @staticmethod
    def zero() -> Vec2:
        return Vec2()

    def to_tuple(self) -> Tuple[float, float]:
        return (self.x, self.y)

    # -------------------------------------------------------------------------
    # Arithmetic
    # -------------------------------------------------------------------------

    def __add__(self, other: Vec2) -> Vec2:
        return Vec2(self.x + other.x, self.y + other.y)

    def __sub__(self, other: Vec2) -> Vec2:
        return Vec2(self.x - other.x, self.y - other.y)

    def __neg__(self) -> Vec2:
        return Vec2(-self.x, -self.y)

    def __mul__(self, k: float) -> Vec2:
        return Vec2(k * self.x, k * self.y)

    __rmul__ = __mul__

    def rotated(self, radians: float) -> Vec2:
        """Counter-clockwise about the origin in a y-up frame."""
        cos_r, sin_r = math.cos(radians), math.sin(radians)
        return Vec2(cos_r * self.x - sin_r * self.y, sin_r * self.x + cos_r * self.y)

    def lerp(self, target: Vec2, t: float) -> Vec2:
        return self + (target - self) * t

    def is_close(self, other: Vec2, tol: float = 1e-6) -> bool:
        return math.isclose(self.x, other.x, abs_tol=tol) and math.isclose(self.y, other.y, abs_tol=tol)


# =============================================================================
# Affine Matrices
# =============================================================================

class Mat3:
    """
    Homogeneous 3x3 matrix for a resolved 2D affine map.

    Renderers that want a uniform upload call column_major(); everything
    else goes through transform_point or composition with @.
    """

    __slots__ = ('_rows',)

    def __init__(self, rows: Iterable[Iterable[float]] = None):
        if rows is None:
            self._rows = np.eye(3, dtype=np.float64)
        else:
            self._rows = np.asarray(rows, dtype=np.float64).reshape(3, 3)

    @staticmethod
    def identity() -> Mat3:
        return Mat3()

    @staticmethod
    def affine(a: float, b: float, c: float, d: float, tx: float, ty: float) -> Mat3:
        """[[a, b, tx], [c, d, ty], [0, 0, 1]]"""
        return Mat3(((a, b, tx), (c, d, ty), (0.0, 0.0, 1.0)))

    def __matmul__(self, other: Mat3) -> Mat3:
        if not isinstance(other, Mat3):
            return NotImplemented
        return Mat3(self._rows @ other._rows)

    def __eq__(self, other) -> bool:
        if not isinstance(other, Mat3):
            return NotImplemented
        return bool(np.array_equal(self._rows, other._rows))

    def __repr__(self) -> str:
        return f"Mat3({self._rows.tolist()!r})"

    def transform_point(self, p: Vec2) -> Vec2:
        x, y, _ = self._rows @ np.array((p.x, p.y, 1.0))
        return Vec2(float(x), float(y))

    def to_array(self) -> np.ndarray:
        return self._rows.copy()

    def column_major(self) -> Tuple[float, ...]:
        return tuple(float(v) for v in self._rows.T.ravel())
