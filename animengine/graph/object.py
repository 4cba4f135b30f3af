# animengine/graph/object.py
"""
Object - A node of the object tree.

An object is either a Model (a drawable with a material) or a Group (an
ordered list of child ids living in the same tree), plus its local transform.
Children are referenced by id, never owned, so a tree stays a flat map.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import List, Union

from animengine.core.ids import ObjectId
from animengine.graph.drawables import Drawable, Material
from animengine.graph.transform import Transform


@dataclass
class Model:
    drawable: Drawable
    material: Material = field(default_factory=Material)

    def copy(self) -> Model:
        return Model(drawable=self.drawable, material=self.material)


@dataclass
class Group:
    children: List[ObjectId] = field(default_factory=list)

    def copy(self) -> Group:
        return Group(children=list(self.children))


ObjectKind = Union[Model, Group]


@dataclass
class Object:
    kind: ObjectKind
    transform: Transform = field(default_factory=Transform)

    @staticmethod
    def model(drawable: Drawable, material: Material = None, transform: Transform = None) -> Object:
        return Object(
            kind=Model(drawable, material or Material()),
            transform=transform or Transform(),
        )

    @staticmethod
    def group(children: List[ObjectId] = None, transform: Transform = None) -> Object:
        return Object(
            kind=Group(list(children or [])),
            transform=transform or Transform(),
        )

    @property
    def is_group(self) -> bool:
        return isinstance(self.kind, Group)

    @property
    def children(self) -> List[ObjectId]:
        """Child ids of a group; empty for models."""
        if isinstance(self.kind, Group):
            return self.kind.children
        return []

    def copy(self) -> Object:
        """Copy that shares no mutable state with this object."""
        return Object(kind=self.kind.copy(), transform=self.transform)
