# animengine/motion/interpolation.py
"""
Value interpolation for property motions.
"""

from __future__ import annotations
from typing import Any


def interpolate(start: Any, end: Any, t: float) -> Any:
    """Interpolate between values based on type."""
    if isinstance(start, (int, float)) and isinstance(end, (int, float)):
        return start * (1.0 - t) + end * t
    elif hasattr(start, 'lerp'):
        return start.lerp(end, t)
    else:
        # No interpolation, snap at end
        return end if t >= 1.0 else start
