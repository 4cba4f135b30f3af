# animengine/scene/spatial.py
"""
Spatial helpers - positioning objects relative to each other.

- Alignment: a point on another object's bounding box (left/center/right x
  top/center/bottom). Used as a positioner it moves the source so its
  bounding box center lands on that point; used as a dynamic value it
  resolves to the point itself.
- Pixels: lengths relative to the render height.
- PlacementPlan: collects placements while authoring and resolves them once,
  in dependency order, when the scene is finished.

Placements read local bounding boxes (own transform, no ancestors), so an
object can be aligned before it is attached anywhere.
"""

from __future__ import annotations
from abc import ABC, abstractmethod
from dataclasses import dataclass, replace
from typing import Any, Dict, List, TYPE_CHECKING
import logging

import networkx as nx

from animengine.core.errors import SpatialCycleError
from animengine.core.ids import ObjectId
from animengine.core.math2d import Vec2
from animengine.graph.geometry import Rect
from animengine.graph.tree import ObjectTree
from animengine.motion.dynamics import Derived, DynamicValue

if TYPE_CHECKING:
    from animengine.scene.world import World

logger = logging.getLogger(__name__)


# =============================================================================
# Positioners
# =============================================================================

class Positioner(ABC):
    """Computes a new position for `source` from the current tree."""

    @abstractmethod
    def position(self, source: ObjectId, tree: ObjectTree) -> Vec2:
        pass

    def dependencies(self) -> List[ObjectId]:
        """Objects whose bounds this positioner reads."""
        return []


@dataclass(frozen=True)
class Absolute(Positioner):
    point: Vec2

    def position(self, source: ObjectId, tree: ObjectTree) -> Vec2:
        return self.point


@dataclass(frozen=True)
class Alignment(Positioner):
    target: ObjectId
    horizontal: str = 'center'
    vertical: str = 'center'

    def left(self) -> Alignment:
        return replace(self, horizontal='left')

    def center(self) -> Alignment:
        return replace(self, horizontal='center')

    def right(self) -> Alignment:
        return replace(self, horizontal='right')

    def top(self) -> Alignment:
        return replace(self, vertical='top')

    def bottom(self) -> Alignment:
        return replace(self, vertical='bottom')

    def point(self, tree: ObjectTree) -> Vec2:
        return self._point_of(tree.local_bounding_box(self.target))

    def _point_of(self, bb: Rect) -> Vec2:
        if self.horizontal == 'left':
            x = bb.left
        elif self.horizontal == 'right':
            x = bb.right
        else:
            x = bb.center.x

        if self.vertical == 'top':
            y = bb.top
        elif self.vertical == 'bottom':
            y = bb.bottom
        else:
            y = bb.center.y
        return Vec2(x, y)

    def position(self, source: ObjectId, tree: ObjectTree) -> Vec2:
        current = tree.get(source).transform.position
        source_center = tree.local_bounding_box(source).center
        return current + (self.point(tree) - source_center)

    def dependencies(self) -> List[ObjectId]:
        return [self.target]

    def dynamic(self) -> Derived:
        """The aligned point, resolved against the World on every pass."""
        return Derived(lambda world: self.point(world.objects))


def positioner(value: Any) -> Positioner:
    """Positioners pass through; (x, y) pairs and Vec2 become Absolute."""
    if isinstance(value, Positioner):
        return value
    if isinstance(value, Vec2):
        return Absolute(value)
    if isinstance(value, (tuple, list)) and len(value) == 2:
        return Absolute(Vec2(float(value[0]), float(value[1])))
    raise TypeError(f"Not a positioner: {value!r}")


# =============================================================================
# Units
# =============================================================================

@dataclass(frozen=True)
class Pixels(DynamicValue[float]):
    """A length in render pixels, converted to scene units."""
    amount: float

    def get(self, world: World) -> float:
        _, height = world.render_size()
        return self.amount * height / world.config.unit_grid_height


# =============================================================================
# Placement Plan
# =============================================================================

class PlacementPlan:
    """
    Deferred placements, resolved in topological order.

    Edges run from what is read to what is written: an aligned target must
    be placed before its source, and a group's children before anything that
    reads the group's bounds.
    """

    def __init__(self):
        self._placements: Dict[ObjectId, Positioner] = {}
        self._groups: Dict[ObjectId, List[ObjectId]] = {}

    def __len__(self) -> int:
        return len(self._placements)

    def place(self, source: ObjectId, rule: Any):
        self._placements[source] = positioner(rule)

    def add_group(self, group_id: ObjectId, children: List[ObjectId]):
        self._groups[group_id] = list(children)

    def graph(self) -> nx.DiGraph:
        graph = nx.DiGraph()
        for source, rule in self._placements.items():
            graph.add_node(source)
            for target in rule.dependencies():
                graph.add_edge(target, source)
        for group_id, children in self._groups.items():
            for child_id in children:
                graph.add_edge(child_id, group_id)
        return graph

    def order(self) -> List[ObjectId]:
        """Placed objects in resolution order. Raises on cycles."""
        graph = self.graph()
        if not nx.is_directed_acyclic_graph(graph):
            edges = nx.find_cycle(graph)
            cycle = [u for u, _ in edges]
            raise SpatialCycleError(cycle + [cycle[0]])
        return [node for node in nx.topological_sort(graph) if node in self._placements]

    def resolve(self, tree: ObjectTree) -> Dict[ObjectId, Vec2]:
        """Apply every placement to `tree`; returns the new positions."""
        positions: Dict[ObjectId, Vec2] = {}
        for source in self.order():
            obj = tree.get(source)
            position = self._placements[source].position(source, tree)
            obj.transform = obj.transform.with_position(position)
            positions[source] = position

        logger.debug(f"Resolved {len(positions)} placements")
        return positions
