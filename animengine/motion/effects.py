# animengine/motion/effects.py
"""
Leaf effects - motions that touch exactly one object or variable.

Endpoints are DynamicValues resolved on every pass, so an effect can move an
object to wherever another object currently is, or to a variable's value.
Plain values are accepted everywhere and wrapped with dynamic().
"""

from __future__ import annotations
from typing import Any, TYPE_CHECKING

from animengine.core.ids import ObjectId, Variable
from animengine.graph.object import Model
from animengine.motion.base import Alpha, Instant, Motion
from animengine.motion.dynamics import DynamicObject, dynamic, dynamic_pos
from animengine.motion.interpolation import interpolate

if TYPE_CHECKING:
    from animengine.scene.world import World


# =============================================================================
# Objects
# =============================================================================

class AddObject(Instant):
    """
    Inserts an object. The template is resolved to a fresh copy on every
    pass, so later effects may mutate the inserted object freely.
    """

    def __init__(self, object_id: ObjectId, obj: Any, rooted: bool = True):
        self.object_id = object_id
        self.obj = dynamic(obj)
        self.rooted = rooted

    def fire(self, world: World):
        obj = self.obj.get(world)
        if not isinstance(self.obj, DynamicObject):
            obj = obj.copy()
        world.objects.add(self.object_id, obj, rooted=self.rooted)

    def __repr__(self) -> str:
        return f"AddObject({self.object_id!r}, rooted={self.rooted})"


class SetTransform(Instant):

    def __init__(self, object_id: ObjectId, transform: Any):
        self.object_id = object_id
        self.transform = dynamic(transform)

    def fire(self, world: World):
        world.objects.get(self.object_id).transform = self.transform.get(world)


# =============================================================================
# Transform Animation
# =============================================================================

class AnimateTransform(Motion):
    """Lerps the whole transform between two resolved endpoints."""

    def __init__(self, object_id: ObjectId, start: Any, end: Any):
        self.object_id = object_id
        self.start = dynamic(start)
        self.end = dynamic(end)

    def animate(self, world: World, alpha: Alpha):
        obj = world.objects.get(self.object_id)
        obj.transform = self.start.get(world).lerp(self.end.get(world), alpha)

    def __repr__(self) -> str:
        return f"AnimateTransform({self.object_id!r})"


class Move(Motion):
    """Lerps position only; rotation, scale and anchor are left alone."""

    def __init__(self, object_id: ObjectId, start: Any, end: Any):
        self.object_id = object_id
        self.start = dynamic_pos(start)
        self.end = dynamic_pos(end)

    def animate(self, world: World, alpha: Alpha):
        obj = world.objects.get(self.object_id)
        position = self.start.get(world).lerp(self.end.get(world), alpha)
        obj.transform = obj.transform.with_position(position)


class MoveTo(Motion):
    """Like Move, starting from wherever the object is when evaluated."""

    def __init__(self, object_id: ObjectId, target: Any):
        self.object_id = object_id
        self.target = dynamic_pos(target)

    def animate(self, world: World, alpha: Alpha):
        obj = world.objects.get(self.object_id)
        position = obj.transform.position.lerp(self.target.get(world), alpha)
        obj.transform = obj.transform.with_position(position)


# =============================================================================
# Materials
# =============================================================================

class FadeIn(Motion):
    """
    Scales fill and stroke alpha by the current alpha, for a model or every
    model below a group.
    """

    def __init__(self, object_id: ObjectId):
        self.object_id = object_id

    def _fade(self, world: World, object_id: ObjectId, alpha: Alpha):
        obj = world.objects.get(object_id)
        if isinstance(obj.kind, Model):
            obj.kind = Model(obj.kind.drawable, obj.kind.material.scale_alpha(alpha))
            return
        for child_id in obj.kind.children:
            self._fade(world, child_id, alpha)

    def animate(self, world: World, alpha: Alpha):
        self._fade(world, self.object_id, alpha)

    def __repr__(self) -> str:
        return f"FadeIn({self.object_id!r})"


# =============================================================================
# Variables
# =============================================================================

class SetVariable(Motion):
    """
    Writes a variable. With `start` given it interpolates from start to value
    over the motion's alpha; otherwise it sets value outright.
    """

    def __init__(self, variable: Variable, value: Any, start: Any = None):
        self.variable = variable
        self.value = dynamic(value)
        self.start = dynamic(start) if start is not None else None

    def animate(self, world: World, alpha: Alpha):
        value = self.value.get(world)
        if self.start is not None:
            value = interpolate(self.start.get(world), value, alpha)
        world.update_variable(self.variable, value)

    def __repr__(self) -> str:
        return f"SetVariable({self.variable!r})"
