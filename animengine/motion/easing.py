# animengine/motion/easing.py
"""
Easing curves applied by Animation to its local alpha.

Every curve maps [0, 1] onto [0, 1] with f(0) == 0 and f(1) == 1.
"""

from __future__ import annotations
from enum import Enum


class Easing(Enum):
    LINEAR = 'linear'
    EASE_IN = 'ease_in'
    EASE_OUT = 'ease_out'
    EASE_IN_OUT = 'ease_in_out'

    def apply(self, t: float) -> float:
        if self is Easing.LINEAR:
            return t
        if self is Easing.EASE_IN:
            return t * t
        if self is Easing.EASE_OUT:
            return t * (2.0 - t)
        # Quadratic in, mirrored out
        if t < 0.5:
            return 2.0 * t * t
        u = 1.0 - t
        return 1.0 - 2.0 * u * u

    @staticmethod
    def parse(name: str) -> Easing:
        try:
            return Easing(name.lower())
        except ValueError:
            raise ValueError(f"Unknown easing: {name!r}") from None
