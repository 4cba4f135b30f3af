# animengine/motion/properties.py
"""
Properties - readable and writable handles on World state.

A Property is a DynamicValue that can also be written back. Motions built
from a property (set / animate / animate_from) work for any field without
knowing which one they target:

    TransformProperty(circle_id).rotation().animate(math.pi)
    TransformProperty(circle_id).position().animate_from((0, 0), (10, 0))
    VariableProperty(Variable("radius")).animate(40.0)
"""

from __future__ import annotations
from dataclasses import dataclass, replace
from typing import Any, TypeVar, TYPE_CHECKING
from abc import abstractmethod

from animengine.core.ids import ObjectId, Variable
from animengine.graph.transform import Transform
from animengine.motion.base import Alpha, Instant, Motion
from animengine.motion.dynamics import DynamicValue, dynamic, dynamic_pos
from animengine.motion.interpolation import interpolate

if TYPE_CHECKING:
    from animengine.scene.world import World

T = TypeVar('T')

TRANSFORM_FIELDS = ('position', 'rotation', 'scale', 'anchor')


class Property(DynamicValue[T]):

    @abstractmethod
    def update(self, world: World, value: T):
        pass

    def coerce(self, value: Any) -> DynamicValue[T]:
        return dynamic(value)

    def set(self, value: Any) -> Instant:
        return SetProperty(self, self.coerce(value))

    def animate_from(self, start: Any, end: Any) -> Motion:
        return PropertyFromTo(self, self.coerce(start), self.coerce(end))

    def animate(self, to: Any) -> Motion:
        """Animate from whatever value the property holds when evaluated."""
        return PropertyTo(self, self.coerce(to))


# =============================================================================
# Property Motions
# =============================================================================

@dataclass
class PropertyFromTo(Motion):
    property: Property
    start: DynamicValue
    end: DynamicValue

    def animate(self, world: World, alpha: Alpha):
        value = interpolate(self.start.get(world), self.end.get(world), alpha)
        self.property.update(world, value)


@dataclass
class PropertyTo(Motion):
    property: Property
    end: DynamicValue

    def animate(self, world: World, alpha: Alpha):
        value = interpolate(self.property.get(world), self.end.get(world), alpha)
        self.property.update(world, value)


@dataclass
class SetProperty(Instant):
    property: Property
    value: DynamicValue

    def fire(self, world: World):
        self.property.update(world, self.value.get(world))


# =============================================================================
# Concrete Properties
# =============================================================================

@dataclass(frozen=True)
class TransformFieldProperty(Property):
    """One field of an object's transform."""
    object_id: ObjectId
    field: str

    def __post_init__(self):
        if self.field not in TRANSFORM_FIELDS:
            raise ValueError(f"Unknown transform field: {self.field!r}")

    def coerce(self, value: Any) -> DynamicValue:
        if self.field in ('position', 'anchor'):
            return dynamic_pos(value)
        return dynamic(value)

    def get(self, world: World) -> Any:
        return getattr(world.objects.get(self.object_id).transform, self.field)

    def update(self, world: World, value: Any):
        obj = world.objects.get(self.object_id)
        obj.transform = replace(obj.transform, **{self.field: value})


@dataclass(frozen=True)
class TransformProperty(Property[Transform]):
    """An object's whole transform, with accessors for each field."""
    object_id: ObjectId

    def get(self, world: World) -> Transform:
        return world.objects.get(self.object_id).transform

    def update(self, world: World, value: Transform):
        world.objects.get(self.object_id).transform = value

    def position(self) -> TransformFieldProperty:
        return TransformFieldProperty(self.object_id, 'position')

    def rotation(self) -> TransformFieldProperty:
        return TransformFieldProperty(self.object_id, 'rotation')

    def scale(self) -> TransformFieldProperty:
        return TransformFieldProperty(self.object_id, 'scale')

    def anchor(self) -> TransformFieldProperty:
        return TransformFieldProperty(self.object_id, 'anchor')


@dataclass(frozen=True)
class VariableProperty(Property[float]):
    variable: Variable

    def get(self, world: World) -> float:
        return world.get_variable(self.variable)

    def update(self, world: World, value: float):
        world.update_variable(self.variable, value)
