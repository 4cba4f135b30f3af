# animengine/motion/dynamics.py
"""
Dynamic values - values resolved against the World at evaluation time.

- Literal: a constant
- VariableRef: the current value of a Variable
- Derived: any function of the World (e.g. another object's bounds)

Composites (DynamicPos, DynamicTransform, DynamicObject) resolve each field
separately, so one coordinate can follow a variable while the rest stay
fixed.

A Derived value that reads an object's placement only sees correct data if
the motion placing that object ran earlier in the same pass.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Callable, Generic, List, TypeVar, TYPE_CHECKING
from abc import ABC, abstractmethod

from animengine.core.ids import ObjectId, Variable
from animengine.core.math2d import Vec2
from animengine.graph.object import Object, ObjectKind, Group
from animengine.graph.transform import Transform

if TYPE_CHECKING:
    from animengine.scene.world import World

T = TypeVar('T')


class DynamicValue(ABC, Generic[T]):

    @abstractmethod
    def get(self, world: World) -> T:
        pass


@dataclass(frozen=True)
class Literal(DynamicValue[T]):
    value: T

    def get(self, world: World) -> T:
        return self.value


@dataclass(frozen=True)
class VariableRef(DynamicValue[float]):
    variable: Variable

    def get(self, world: World) -> float:
        return world.get_variable(self.variable)


class Derived(DynamicValue[T]):
    """Value computed from the current World state."""

    def __init__(self, fn: Callable[[World], T]):
        self.fn = fn

    def get(self, world: World) -> T:
        return self.fn(world)

    def __repr__(self) -> str:
        return f"Derived({getattr(self.fn, '__name__', self.fn)!r})"


# =============================================================================
# Composites
# =============================================================================

@dataclass(frozen=True)
class DynamicPos(DynamicValue[Vec2]):
    x: DynamicValue[float]
    y: DynamicValue[float]

    def __post_init__(self):
        object.__setattr__(self, 'x', dynamic(self.x))
        object.__setattr__(self, 'y', dynamic(self.y))

    def get(self, world: World) -> Vec2:
        return Vec2(self.x.get(world), self.y.get(world))


@dataclass(frozen=True)
class DynamicTransform(DynamicValue[Transform]):
    position: DynamicValue[Vec2]
    rotation: DynamicValue[float]
    scale: DynamicValue[float]
    anchor: DynamicValue[Vec2]

    def __post_init__(self):
        # Plain values, Variables and (x, y) pairs are accepted per field
        object.__setattr__(self, 'position', dynamic_pos(self.position))
        object.__setattr__(self, 'rotation', dynamic(self.rotation))
        object.__setattr__(self, 'scale', dynamic(self.scale))
        object.__setattr__(self, 'anchor', dynamic_pos(self.anchor))

    def get(self, world: World) -> Transform:
        return Transform(
            position=self.position.get(world),
            rotation=self.rotation.get(world),
            scale=self.scale.get(world),
            anchor=self.anchor.get(world),
        )

    @staticmethod
    def from_transform(transform: Transform) -> DynamicTransform:
        return DynamicTransform(
            position=Literal(transform.position),
            rotation=Literal(transform.rotation),
            scale=Literal(transform.scale),
            anchor=Literal(transform.anchor),
        )


class DynamicObject(DynamicValue[Object]):
    """
    Object template. Every get() returns a fresh copy, so effects that mutate
    the inserted object never leak into the next pass.
    """

    def __init__(self, kind: ObjectKind, transform: DynamicValue[Transform] = None):
        self.kind = kind
        self.transform = transform or Literal(Transform())

    def get(self, world: World) -> Object:
        return Object(kind=self.kind.copy(), transform=self.transform.get(world))

    @staticmethod
    def from_object(obj: Object) -> DynamicObject:
        return DynamicObject(obj.kind.copy(), Literal(obj.transform))

    @staticmethod
    def new_group(children: List[ObjectId]) -> DynamicObject:
        return DynamicObject(Group(list(children)))

    def with_transform(self, transform: Any) -> DynamicObject:
        self.transform = dynamic(transform)
        return self

    def __repr__(self) -> str:
        return f"DynamicObject({self.kind!r}, {self.transform!r})"


# =============================================================================
# Coercion
# =============================================================================

def dynamic(value: Any) -> DynamicValue:
    """Wrap a plain value, Variable, callable, Transform or Object as a DynamicValue."""
    if isinstance(value, DynamicValue):
        return value
    if isinstance(value, Variable):
        return VariableRef(value)
    if isinstance(value, Transform):
        return DynamicTransform.from_transform(value)
    if isinstance(value, Object):
        return DynamicObject.from_object(value)
    if callable(value):
        return Derived(value)
    return Literal(value)


def dynamic_pos(value: Any) -> DynamicValue[Vec2]:
    """Like dynamic(), but (x, y) pairs become positions with dynamic fields."""
    if isinstance(value, (tuple, list)):
        if len(value) != 2:
            raise ValueError(f"Position needs two coordinates, got {value!r}")
        x, y = value
        if isinstance(x, (int, float)) and isinstance(y, (int, float)):
            return Literal(Vec2(float(x), float(y)))
        return DynamicPos(dynamic(x), dynamic(y))
    return dynamic(value)
