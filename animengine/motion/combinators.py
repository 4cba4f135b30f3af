# animengine/motion/combinators.py
"""
Combinators - motions defined by how they hand alpha to other motions.

    Sequence      children one after another, in proportion to their lengths
    Concurrently  all children at once, shorter ones clamp at their end
    Keyframe      remaps a window of its parent's time onto the inner motion
    Trigger       fires the inner motion at 1.0 once a time is reached
    EmbeddedScene renders a finished Scene and splices its tree in
    Play          re-enters a motion registered by id
    Wait          nothing, for a while

Every combinator recomputes window membership from alpha alone, so any pass
can start from an empty World at any time, including backwards seeks.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import List, Tuple, TYPE_CHECKING

from animengine.core.ids import MotionId, ObjectId
from animengine.graph.object import Object
from animengine.graph.transform import Transform
from animengine.motion.base import Alpha, Animation, Motion

if TYPE_CHECKING:
    from animengine.scene.registry import MotionRegistry
    from animengine.scene.scene import Scene
    from animengine.scene.world import World


# =============================================================================
# Time Composition
# =============================================================================

@dataclass
class Sequence(Motion):
    """
    Children run back to back. A child whose window has not opened yet is
    not evaluated, and neither is anything after it, so later effects never
    fire early.
    """
    children: List[Motion] = field(default_factory=list)

    def append(self, motion: Motion):
        self.children.append(motion)

    def length(self, registry: MotionRegistry) -> float:
        return sum(child.length(registry) for child in self.children)

    def animate(self, world: World, alpha: Alpha):
        if not self.children:
            return

        lengths = [child.length(world.registry) for child in self.children]
        t = alpha * sum(lengths)
        start = 0.0
        for child, d in zip(self.children, lengths):
            if t < start:
                break
            if d == 0:
                child.animate(world, 1.0)
            else:
                child.animate(world, min((t - start) / d, 1.0))
            start += d


@dataclass
class Concurrently(Motion):
    """All children every pass; the longest one sets the pace."""
    children: List[Motion] = field(default_factory=list)

    def append(self, motion: Motion):
        self.children.append(motion)

    def length(self, registry: MotionRegistry) -> float:
        return max((child.length(registry) for child in self.children), default=0.0)

    def animate(self, world: World, alpha: Alpha):
        lengths = [child.length(world.registry) for child in self.children]
        total = max(lengths, default=0.0)
        for child, d in zip(self.children, lengths):
            if d == 0:
                child.animate(world, 1.0)
            else:
                child.animate(world, min(total * alpha / d, 1.0))


@dataclass
class Keyframe(Motion):
    """
    Maps the window [from_min, from_max] of governing time onto
    [to_min, to_max] of the inner motion's alpha.

    Governing time is `alpha * span`, so with a span in seconds the window
    bounds are seconds too. Before the window the inner motion is skipped
    entirely; after it the inner motion keeps running at to_max.
    """
    from_min: float
    from_max: float
    to_min: float
    to_max: float
    inner: Motion
    span: float = 1.0

    def __post_init__(self):
        if self.from_max < self.from_min:
            raise ValueError(f"Keyframe window is reversed: [{self.from_min}, {self.from_max}]")
        if self.span < 0:
            raise ValueError(f"Negative keyframe span: {self.span}")

    def length(self, registry: MotionRegistry) -> float:
        return self.span

    def animate(self, world: World, alpha: Alpha):
        t = alpha * self.span
        width = self.from_max - self.from_min
        if width == 0:
            if t < self.from_min:
                return
            adjusted = 1.0
        else:
            adjusted = (t - self.from_min) / width
            if adjusted < 0:
                return
            adjusted = min(adjusted, 1.0)

        self.inner.animate(world, self.to_min + adjusted * (self.to_max - self.to_min))


@dataclass
class Trigger(Motion):
    """Runs the inner motion at 1.0 on every pass at or after `time`."""
    time: float
    inner: Motion
    span: float = 1.0

    def __post_init__(self):
        if self.span < 0:
            raise ValueError(f"Negative trigger span: {self.span}")

    def length(self, registry: MotionRegistry) -> float:
        return self.span

    def animate(self, world: World, alpha: Alpha):
        if alpha * self.span >= self.time:
            self.inner.animate(world, 1.0)


@dataclass
class Wait(Motion):
    duration: float

    def __post_init__(self):
        if self.duration < 0:
            raise ValueError(f"Negative wait: {self.duration}")

    def length(self, registry: MotionRegistry) -> float:
        return self.duration

    def animate(self, world: World, alpha: Alpha):
        pass


# =============================================================================
# References
# =============================================================================

@dataclass(frozen=True)
class Play(Motion):
    """
    Reference to a registered motion. The id may be registered after this
    reference is built; it only has to exist by the time it is evaluated.
    """
    motion_id: MotionId

    def length(self, registry: MotionRegistry) -> float:
        return registry.duration(self.motion_id)

    def animate(self, world: World, alpha: Alpha):
        world.play_at(self.motion_id, alpha)


def weighted(kind: str, entries: List[Tuple[MotionId, float]]) -> Motion:
    """
    Sequence or Concurrently over registered motions, each stretched to its
    weight in seconds.
    """
    children: List[Motion] = [Animation(Play(motion_id), weight) for motion_id, weight in entries]
    if kind == 'sequence':
        return Sequence(children)
    if kind == 'concurrently':
        return Concurrently(children)
    raise ValueError(f"Unknown composition kind: {kind!r}")


# =============================================================================
# Nested Scenes
# =============================================================================

class EmbeddedScene(Motion):
    """
    Plays a finished Scene inside this one.

    Each pass renders `scene` on its own at `scene.length() * alpha * speed`
    and merges the result under `object_id`, wrapped in a Group carrying
    `transform`. The nested render size is divided by the transform's scale
    so render-relative units keep their on-screen size.
    """

    def __init__(self, scene: Scene, object_id: ObjectId, transform: Transform = None,
                 speed: float = 1.0, rooted: bool = True):
        if speed <= 0:
            raise ValueError(f"Embedded scene speed must be positive, got {speed}")
        self.scene = scene
        self.object_id = object_id
        self.transform = transform or Transform()
        self.speed = speed
        self.rooted = rooted

    def length(self, registry: MotionRegistry) -> float:
        return self.scene.length() / self.speed

    def animate(self, world: World, alpha: Alpha):
        time = self.scene.length() * alpha * self.speed
        width, height = world.render_size()
        scale = self.transform.scale
        if scale != 0:
            width, height = width / scale, height / scale

        sub_tree = self.scene.render_at(time, (width, height))
        rooted = world.objects.merge(sub_tree, self.object_id)
        world.objects.add(self.object_id, Object.group(rooted, self.transform), rooted=self.rooted)

    def __repr__(self) -> str:
        return f"EmbeddedScene({self.object_id!r}, length={self.scene.length()}, speed={self.speed})"
