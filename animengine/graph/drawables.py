# animengine/graph/drawables.py
"""
Drawables - Visual payloads carried by Model objects.

The engine treats a drawable as opaque apart from its local bounds.
Tessellation into triangles happens in the renderer, outside this package.

- Circle: circle by center and radius
- Rectangle: axis-aligned box in local coordinates
- Line: segment between two points
- Polyline: open or closed point sequence

Materials carry the optional fill and stroke that FadeIn adjusts.
"""

from __future__ import annotations
from dataclasses import dataclass, field, replace
from typing import Optional, Tuple
from abc import ABC, abstractmethod

import numpy as np

from animengine.core.math2d import Vec2
from animengine.graph.geometry import Rect


# =============================================================================
# Color Type
# =============================================================================

@dataclass(frozen=True)
class Color:
    """Straight (non-premultiplied) RGBA, each channel in [0, 1]."""
    r: float = 1.0
    g: float = 1.0
    b: float = 1.0
    a: float = 1.0

    def to_tuple(self) -> Tuple[float, float, float, float]:
        return (self.r, self.g, self.b, self.a)

    def with_alpha(self, alpha: float) -> Color:
        return replace(self, a=alpha)

    def lerp(self, other: Color, t: float) -> Color:
        mixed = (1.0 - t) * np.array(self.to_tuple()) + t * np.array(other.to_tuple())
        return Color(*(float(c) for c in mixed))

    @staticmethod
    def from_hex(text: str) -> Color:
        """'#rrggbb' or '#rrggbbaa'; the leading '#' is optional."""
        digits = text[1:] if text.startswith('#') else text
        if len(digits) not in (6, 8):
            raise ValueError(f"Invalid hex color: {text!r}")
        try:
            channels = bytes.fromhex(digits)
        except ValueError:
            raise ValueError(f"Invalid hex color: {text!r}") from None
        return Color(*(c / 255.0 for c in channels))

    @staticmethod
    def named(name: str) -> Color:
        try:
            return _NAMED_COLORS[name.lower()]
        except KeyError:
            raise ValueError(f"Unknown color name: {name!r}") from None

    @staticmethod
    def white() -> Color:
        return _NAMED_COLORS['white']

    @staticmethod
    def red() -> Color:
        return _NAMED_COLORS['red']


_NAMED_COLORS = {
    'white': Color(1.0, 1.0, 1.0),
    'black': Color(0.0, 0.0, 0.0),
    'red': Color(1.0, 0.0, 0.0),
    'green': Color(0.0, 1.0, 0.0),
    'blue': Color(0.0, 0.0, 1.0),
    'transparent': Color(0.0, 0.0, 0.0, 0.0),
}


# =============================================================================
# Material
# =============================================================================

@dataclass(frozen=True)
class Fill:
    color: Color = field(default_factory=Color.white)


@dataclass(frozen=True)
class Stroke:
    color: Color = field(default_factory=Color.white)
    width: float = 1.0


@dataclass(frozen=True)
class Material:
    """Optional fill and stroke; a Model with neither draws nothing."""
    fill: Optional[Fill] = None
    stroke: Optional[Stroke] = None

    @staticmethod
    def filled(color: Color) -> Material:
        return Material(fill=Fill(color))

    @staticmethod
    def stroked(color: Color, width: float = 1.0) -> Material:
        return Material(stroke=Stroke(color, width))

    def scale_alpha(self, factor: float) -> Material:
        def fade(part):
            if part is None:
                return None
            return replace(part, color=part.color.with_alpha(part.color.a * factor))
        return Material(fill=fade(self.fill), stroke=fade(self.stroke))


# =============================================================================
# Base Drawable
# =============================================================================

class Drawable(ABC):
    """
    Base class for visual payloads.

    Subclasses are frozen dataclasses so snapshots can share them freely.
    """

    @abstractmethod
    def get_bounds(self) -> Rect:
        """Get local-space bounding box."""
        pass


@dataclass(frozen=True)
class Circle(Drawable):
    cx: float = 0.0
    cy: float = 0.0
    radius: float = 50.0

    def get_bounds(self) -> Rect:
        r = abs(self.radius)
        return Rect(self.cx - r, self.cy - r, self.cx + r, self.cy + r)


@dataclass(frozen=True)
class Rectangle(Drawable):
    x: float = 0.0
    y: float = 0.0
    width: float = 100.0
    height: float = 100.0

    def get_bounds(self) -> Rect:
        return Rect.from_points([(self.x, self.y), (self.x + self.width, self.y + self.height)])


@dataclass(frozen=True)
class Line(Drawable):
    start: Vec2 = field(default_factory=Vec2.zero)
    end: Vec2 = field(default_factory=Vec2.zero)

    def get_bounds(self) -> Rect:
        return Rect.from_points([self.start.to_tuple(), self.end.to_tuple()])


@dataclass(frozen=True)
class Polyline(Drawable):
    # Tuple of (x, y) pairs; kept hashable so snapshots compare by value.
    points: Tuple[Tuple[float, float], ...] = ()
    closed: bool = False

    def __post_init__(self):
        object.__setattr__(
            self, 'points', tuple((float(x), float(y)) for x, y in self.points)
        )

    def as_array(self) -> np.ndarray:
        return np.asarray(self.points, dtype=np.float64).reshape(-1, 2)

    def get_bounds(self) -> Rect:
        return Rect.from_points(self.as_array())
