# animengine/motion/base.py
"""
Motion - the basic movement primitive.

A motion is a function of (World, alpha) that adds, mutates or animates
objects and variables. Alpha is normalized progress inside the motion's own
window, usually in [0, 1]. Motions hold no evaluation state: running the same
motion at the same alpha against a fresh World always gives the same result.

Durations live outside the motion. An Animation pairs a motion with a
duration and an easing curve; combinators read their children's length() to
split time between them.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Callable, TYPE_CHECKING
from abc import ABC, abstractmethod

from animengine.motion.easing import Easing

if TYPE_CHECKING:
    from animengine.scene.world import World
    from animengine.scene.registry import MotionRegistry

Alpha = float


class Motion(ABC):

    @abstractmethod
    def animate(self, world: World, alpha: Alpha):
        """Apply this motion to the world at the given progress."""
        pass

    def length(self, registry: MotionRegistry) -> float:
        """Intrinsic duration in seconds. Plain effects have none."""
        return 0.0

    def with_duration(self, duration: float, easing: Easing = Easing.LINEAR) -> Animation:
        return Animation(self, duration, easing)


class Instant(Motion):
    """
    Zero-length effect. Fires once per pass as soon as its window opens;
    alpha is ignored.
    """

    @abstractmethod
    def fire(self, world: World):
        pass

    def animate(self, world: World, alpha: Alpha):
        self.fire(world)


@dataclass
class Animation(Motion):
    """A motion stretched over a duration, with easing."""
    motion: Motion
    duration: float
    easing: Easing = Easing.LINEAR

    def __post_init__(self):
        if self.duration < 0:
            raise ValueError(f"Negative duration: {self.duration}")

    def animate(self, world: World, alpha: Alpha):
        self.motion.animate(world, self.easing.apply(alpha))

    def length(self, registry: MotionRegistry) -> float:
        return self.duration


class FunctionMotion(Motion):
    """Adapts a plain `fn(world, alpha)` callable."""

    def __init__(self, fn: Callable[[World, Alpha], None]):
        self.fn = fn

    def animate(self, world: World, alpha: Alpha):
        self.fn(world, alpha)

    def __repr__(self) -> str:
        return f"FunctionMotion({getattr(self.fn, '__name__', self.fn)!r})"
