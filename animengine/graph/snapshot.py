# animengine/graph/snapshot.py
"""
Render Snapshots

Immutable records extracted from an evaluated ObjectTree. The external
renderer consumes these; it never touches the live tree.

Key principles:
1. Items are frozen once created
2. Item order is draw order (later items draw over earlier ones)
3. Transforms are fully resolved (all ancestors folded in)
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Tuple, TYPE_CHECKING

from animengine.core.ids import ObjectId
from animengine.core.math2d import Mat3
from animengine.graph.drawables import Drawable, Material
from animengine.graph.transform import Transform

if TYPE_CHECKING:
    from animengine.graph.tree import ObjectTree


@dataclass(frozen=True)
class RenderItem:
    """
    One drawable ready for the renderer.
    Contains all data needed to emit a draw call.
    """
    object_id: ObjectId
    drawable: Drawable
    material: Material
    transform: Transform

    def matrix(self) -> Mat3:
        return self.transform.to_mat3()


@dataclass(frozen=True)
class Snapshot:
    """
    Everything needed to draw one frame of a scene.
    """
    time: float
    render_size: Tuple[float, float]
    items: Tuple[RenderItem, ...]

    def __post_init__(self):
        assert isinstance(self.items, tuple)

    @staticmethod
    def from_tree(tree: ObjectTree, time: float, render_size: Tuple[float, float]) -> Snapshot:
        return Snapshot(
            time=time,
            render_size=tuple(render_size),
            items=tuple(tree.render()),
        )

    @property
    def object_ids(self) -> Tuple[ObjectId, ...]:
        return tuple(item.object_id for item in self.items)

    def item(self, object_id: ObjectId) -> RenderItem:
        for item in self.items:
            if item.object_id == object_id:
                return item
        raise KeyError(object_id)
