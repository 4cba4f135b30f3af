# animengine/graph/geometry.py
"""
Axis-aligned bounding boxes.

Stored as min/max corners so the empty box can be represented exactly and
acts as the identity of union(). Y grows downward (top = min_y).
"""

from __future__ import annotations
import math
from dataclasses import dataclass
from typing import Iterable

import numpy as np

from animengine.core.math2d import Vec2


@dataclass(frozen=True)
class Rect:
    """Axis-aligned bounding box."""
    min_x: float
    min_y: float
    max_x: float
    max_y: float

    @staticmethod
    def nothing() -> Rect:
        return Rect(math.inf, math.inf, -math.inf, -math.inf)

    @staticmethod
    def from_min_max(min_p: Vec2, max_p: Vec2) -> Rect:
        return Rect(min_p.x, min_p.y, max_p.x, max_p.y)

    @staticmethod
    def from_points(points: Iterable) -> Rect:
        pts = np.asarray(list(points), dtype=np.float64).reshape(-1, 2)
        if len(pts) == 0:
            return Rect.nothing()
        lo = pts.min(axis=0)
        hi = pts.max(axis=0)
        return Rect(float(lo[0]), float(lo[1]), float(hi[0]), float(hi[1]))

    @property
    def is_empty(self) -> bool:
        return self.min_x > self.max_x or self.min_y > self.max_y

    @property
    def left(self) -> float:
        return self.min_x

    @property
    def right(self) -> float:
        return self.max_x

    @property
    def top(self) -> float:
        return self.min_y

    @property
    def bottom(self) -> float:
        return self.max_y

    @property
    def width(self) -> float:
        return 0.0 if self.is_empty else self.max_x - self.min_x

    @property
    def height(self) -> float:
        return 0.0 if self.is_empty else self.max_y - self.min_y

    @property
    def center(self) -> Vec2:
        return Vec2((self.min_x + self.max_x) / 2, (self.min_y + self.max_y) / 2)

    def corners(self) -> np.ndarray:
        return np.array([
            [self.min_x, self.min_y],
            [self.max_x, self.min_y],
            [self.max_x, self.max_y],
            [self.min_x, self.max_y],
        ], dtype=np.float64)

    def contains_point(self, p: Vec2) -> bool:
        return self.min_x <= p.x <= self.max_x and self.min_y <= p.y <= self.max_y

    def intersects(self, other: Rect) -> bool:
        return not (
            self.max_x < other.min_x or
            other.max_x < self.min_x or
            self.max_y < other.min_y or
            other.max_y < self.min_y
        )

    def union(self, other: Rect) -> Rect:
        return Rect(
            min(self.min_x, other.min_x),
            min(self.min_y, other.min_y),
            max(self.max_x, other.max_x),
            max(self.max_y, other.max_y),
        )

    def translate(self, offset: Vec2) -> Rect:
        if self.is_empty:
            return self
        return Rect(
            self.min_x + offset.x, self.min_y + offset.y,
            self.max_x + offset.x, self.max_y + offset.y,
        )

    def is_close(self, other: Rect, tol: float = 1e-6) -> bool:
        if self.is_empty or other.is_empty:
            return self.is_empty and other.is_empty
        return (
            abs(self.min_x - other.min_x) <= tol and
            abs(self.min_y - other.min_y) <= tol and
            abs(self.max_x - other.max_x) <= tol and
            abs(self.max_y - other.max_y) <= tol
        )
