# animengine/graph/transform.py
"""
Transform - 2D similarity transform of a scene node.

A transform maps a point p in the node's local frame to its parent frame:

    p' = position + R(rotation) * scale * (p - anchor)

The anchor is the local point that lands on `position`, and the pivot for
rotation and scale. Composition with and_then() is plain function
composition, so flattening an ancestor chain is a left fold.
"""

from __future__ import annotations
import math
from dataclasses import dataclass, field, replace

import numpy as np

from animengine.core.math2d import Vec2, Mat3
from animengine.graph.geometry import Rect


@dataclass(frozen=True)
class Transform:
    position: Vec2 = field(default_factory=Vec2.zero)
    rotation: float = 0.0
    scale: float = 1.0
    anchor: Vec2 = field(default_factory=Vec2.zero)

    @staticmethod
    def identity() -> Transform:
        return Transform()

    @staticmethod
    def at(x: float, y: float) -> Transform:
        return Transform(position=Vec2(x, y))

    # -------------------------------------------------------------------------
    # Field updates
    # -------------------------------------------------------------------------

    def with_position(self, position: Vec2) -> Transform:
        return replace(self, position=position)

    def with_rotation(self, rotation: float) -> Transform:
        return replace(self, rotation=rotation)

    def with_scale(self, scale: float) -> Transform:
        return replace(self, scale=scale)

    def with_anchor(self, anchor: Vec2) -> Transform:
        return replace(self, anchor=anchor)

    # -------------------------------------------------------------------------
    # Mapping
    # -------------------------------------------------------------------------

    def apply(self, point: Vec2) -> Vec2:
        """Transform a point from local to parent space."""
        return self.position + ((point - self.anchor) * self.scale).rotated(self.rotation)

    def and_then(self, child: Transform) -> Transform:
        """
        Compose with a child transform: the result maps child-local points
        straight into this transform's parent frame.
        """
        return Transform(
            position=self.apply(child.position),
            rotation=self.rotation + child.rotation,
            scale=self.scale * child.scale,
            anchor=child.anchor,
        )

    def to_mat3(self) -> Mat3:
        """Convert to 3x3 transformation matrix."""
        # T(pos) * R * S * T(-anchor)
        c = math.cos(self.rotation) * self.scale
        s = math.sin(self.rotation) * self.scale
        ax, ay = self.anchor.x, self.anchor.y
        px, py = self.position.x, self.position.y

        return Mat3.affine(
            c, -s,
            s, c,
            px - ax * c + ay * s,
            py - ax * s - ay * c,
        )

    def map_rect(self, rect: Rect) -> Rect:
        """AABB of a transformed box (all four corners are mapped)."""
        if rect.is_empty:
            return rect

        c = math.cos(self.rotation) * self.scale
        s = math.sin(self.rotation) * self.scale
        linear = np.array([[c, -s], [s, c]], dtype=np.float64)

        corners = rect.corners() - np.array([self.anchor.x, self.anchor.y])
        mapped = corners @ linear.T + np.array([self.position.x, self.position.y])
        return Rect.from_points(mapped)

    # -------------------------------------------------------------------------
    # Interpolation
    # -------------------------------------------------------------------------

    def lerp(self, other: Transform, t: float) -> Transform:
        """Interpolate every field linearly."""
        return Transform(
            position=self.position.lerp(other.position, t),
            rotation=self.rotation + (other.rotation - self.rotation) * t,
            scale=self.scale + (other.scale - self.scale) * t,
            anchor=self.anchor.lerp(other.anchor, t),
        )

    def is_close(self, other: Transform, tol: float = 1e-6) -> bool:
        return (
            self.position.is_close(other.position, tol) and
            abs(self.rotation - other.rotation) <= tol and
            abs(self.scale - other.scale) <= tol and
            self.anchor.is_close(other.anchor, tol)
        )
