# animengine/graph/tree.py
"""
ObjectTree - Flat store of scene nodes with a group hierarchy.

This is the MUTABLE side: leaf effects write into it during an evaluation
pass. Rendering extracts immutable RenderItems from it (see snapshot.py).

Layout:
- objects: id -> Object (flat registry)
- parents: child id -> parent id (for transform flattening and bounds)
- root: a Group created with the tree; rooted objects are its children

Looking up a missing id raises MissingObjectError. A malformed tree is a
programmer error, never something an evaluation pass recovers from.
"""

from __future__ import annotations
from typing import Dict, Iterator, List, Optional, Set
import logging

from animengine.core.errors import MissingObjectError, TreeStructureError
from animengine.core.ids import ObjectId, ROOT_OBJECT_ID
from animengine.graph.geometry import Rect
from animengine.graph.object import Group, Model, Object
from animengine.graph.snapshot import RenderItem
from animengine.graph.transform import Transform

logger = logging.getLogger(__name__)


class ObjectTree:

    def __init__(self):
        self.root: ObjectId = ROOT_OBJECT_ID
        self._objects: Dict[ObjectId, Object] = {self.root: Object.group()}
        self._parents: Dict[ObjectId, ObjectId] = {}

    # -------------------------------------------------------------------------
    # Access
    # -------------------------------------------------------------------------

    def __contains__(self, object_id: ObjectId) -> bool:
        return object_id in self._objects

    def __len__(self) -> int:
        return len(self._objects)

    def __iter__(self) -> Iterator[ObjectId]:
        return iter(self._objects)

    def get(self, object_id: ObjectId) -> Object:
        try:
            return self._objects[object_id]
        except KeyError:
            raise MissingObjectError(object_id) from None

    def parent(self, object_id: ObjectId) -> Optional[ObjectId]:
        return self._parents.get(object_id)

    def children(self, object_id: ObjectId) -> List[ObjectId]:
        return list(self.get(object_id).children)

    def rooted_ids(self) -> List[ObjectId]:
        return self.children(self.root)

    # -------------------------------------------------------------------------
    # Mutation
    # -------------------------------------------------------------------------

    def add(self, object_id: ObjectId, obj: Object, rooted: bool = False):
        """
        Insert or replace a node.

        Group children get their parent link set to this node. A rooted node
        is appended to the root group once; re-adding it keeps its slot.
        """
        if object_id == self.root:
            raise TreeStructureError("Cannot replace the root group")

        for child_id in obj.children:
            self._parents[child_id] = object_id

        if rooted:
            root = self._objects[self.root]
            if not isinstance(root.kind, Group):
                raise TreeStructureError("Root object is not a group")
            if object_id not in root.kind.children:
                root.kind.children.append(object_id)
            self._parents[object_id] = self.root

        self._objects[object_id] = obj

    def merge(self, other: ObjectTree, new_root_id: ObjectId) -> List[ObjectId]:
        """
        Splice another tree into this one.

        `other.root` becomes `new_root_id`; every other id `i` becomes
        `(new_root_id, i)` so independently built trees never collide.
        Returns the remapped ids that were rooted in `other`, in order. The
        caller attaches them by adding a Group under `new_root_id`.
        """
        def remap(object_id: ObjectId) -> ObjectId:
            if object_id == other.root:
                return new_root_id
            return (new_root_id, object_id)

        for object_id, obj in other._objects.items():
            if object_id == other.root:
                continue
            merged = obj.copy()
            if isinstance(merged.kind, Group):
                merged.kind.children = [remap(c) for c in merged.kind.children]
            self._objects[remap(object_id)] = merged

        for child_id, parent_id in other._parents.items():
            self._parents[remap(child_id)] = remap(parent_id)

        rooted = [remap(c) for c in other.get(other.root).children]
        logger.debug(f"Merged {len(other) - 1} objects under {new_root_id!r}")
        return rooted

    # -------------------------------------------------------------------------
    # Transforms
    # -------------------------------------------------------------------------

    def flattened_transform(self, object_id: ObjectId) -> Transform:
        """Composed transform of all ancestors (the node's own excluded)."""
        chain = []
        seen: Set[ObjectId] = {object_id}
        curr = object_id
        while curr in self._parents:
            parent_id = self._parents[curr]
            if parent_id in seen:
                raise TreeStructureError(f"Parent cycle through {parent_id!r}")
            seen.add(parent_id)
            chain.append(self.get(parent_id).transform)
            curr = parent_id

        result = Transform.identity()
        for transform in reversed(chain):
            result = result.and_then(transform)
        return result

    def world_transform(self, object_id: ObjectId) -> Transform:
        return self.flattened_transform(object_id).and_then(self.get(object_id).transform)

    # -------------------------------------------------------------------------
    # Bounding boxes
    # -------------------------------------------------------------------------

    def _bounds(self, obj: Object, transform: Transform, path: Set[ObjectId],
                boxes: Dict[ObjectId, Rect] = None) -> Rect:
        transform = transform.and_then(obj.transform)

        if isinstance(obj.kind, Model):
            return transform.map_rect(obj.kind.drawable.get_bounds())

        bounding_box = Rect.nothing()
        for child_id in obj.kind.children:
            if child_id in path:
                raise TreeStructureError(f"Group cycle through {child_id!r}")
            path.add(child_id)
            child_box = self._bounds(self.get(child_id), transform, path, boxes)
            path.discard(child_id)
            if boxes is not None:
                boxes[child_id] = child_box
            bounding_box = bounding_box.union(child_box)
        return bounding_box

    def local_bounding_box(self, object_id: ObjectId) -> Rect:
        """
        Bounds of a node in its parent's frame: its own transform applied,
        ancestors ignored.
        """
        return self._bounds(self.get(object_id), Transform.identity(), {object_id})

    def local_bounding_box_obj(self, obj: Object) -> Rect:
        """Same as local_bounding_box for an object not (yet) in the tree."""
        return self._bounds(obj, Transform.identity(), set())

    def bounding_box(self, object_id: ObjectId) -> Rect:
        """World-space bounds of a node."""
        return self._bounds(
            self.get(object_id), self.flattened_transform(object_id), {object_id}
        )

    def bounding_boxes(self) -> Dict[ObjectId, Rect]:
        """World-space bounds of every node reachable from the root."""
        boxes: Dict[ObjectId, Rect] = {}
        boxes[self.root] = self._bounds(
            self.get(self.root), Transform.identity(), {self.root}, boxes
        )
        return boxes

    # -------------------------------------------------------------------------
    # Rendering
    # -------------------------------------------------------------------------

    def _render_object(self, object_id: ObjectId, transform: Transform,
                       path: Set[ObjectId], items: List[RenderItem]):
        obj = self.get(object_id)
        transform = transform.and_then(obj.transform)

        if isinstance(obj.kind, Model):
            items.append(RenderItem(
                object_id=object_id,
                drawable=obj.kind.drawable,
                material=obj.kind.material,
                transform=transform,
            ))
            return

        for child_id in obj.kind.children:
            if child_id in path:
                raise TreeStructureError(f"Group cycle through {child_id!r}")
            path.add(child_id)
            self._render_object(child_id, transform, path, items)
            path.discard(child_id)

    def render(self) -> List[RenderItem]:
        """Depth-first flattening; list order is draw order."""
        items: List[RenderItem] = []
        self._render_object(self.root, Transform.identity(), {self.root}, items)
        return items

    # -------------------------------------------------------------------------
    # Validation / Debug
    # -------------------------------------------------------------------------

    def validate(self):
        """Check that group children exist and groups form no cycle."""
        if not isinstance(self.get(self.root).kind, Group):
            raise TreeStructureError("Root object is not a group")

        done: Set[ObjectId] = set()

        def visit(object_id: ObjectId, path: Set[ObjectId]):
            if object_id in done:
                return
            for child_id in self.get(object_id).children:
                if child_id in path:
                    raise TreeStructureError(f"Group cycle through {child_id!r}")
                if child_id not in self._objects:
                    raise MissingObjectError(child_id)
                path.add(child_id)
                visit(child_id, path)
                path.discard(child_id)
            done.add(object_id)

        for object_id in list(self._objects):
            visit(object_id, {object_id})

    def describe(self, object_id: ObjectId = None, indent: int = 0) -> List[str]:
        """Indented outline of the hierarchy, for debugging."""
        if object_id is None:
            object_id = self.root
        obj = self.get(object_id)
        kind = "group" if obj.is_group else type(obj.kind.drawable).__name__
        pos = obj.transform.position
        lines = [f"{'  ' * indent}{object_id!r} [{kind}] @ ({pos.x:g}, {pos.y:g})"]
        for child_id in obj.children:
            lines.extend(self.describe(child_id, indent + 1))
        return lines

    def __repr__(self) -> str:
        return f"ObjectTree(objects={len(self._objects)}, rooted={len(self.rooted_ids())})"
