# animengine/graph/__init__.py
"""
Graph Module - Object tree for 2D vector scenes

Key components:

- Transform: position / rotation / uniform scale / anchor, composable
- Object: Model (drawable + material) or Group (ordered child ids)
- ObjectTree: flat store with parent links, bounds, merge and render
- RenderItem / Snapshot: frozen output consumed by a renderer

Example usage:

    from animengine.graph import ObjectTree, Object, Circle, Material, Color

    tree = ObjectTree()
    tree.add(1, Object.model(Circle(radius=10), Material.filled(Color.red())), rooted=True)

    for item in tree.render():
        renderer.draw(item.drawable, item.material, item.matrix())
"""

from animengine.graph.geometry import Rect
from animengine.graph.transform import Transform

from animengine.graph.drawables import (
    Color,
    Fill,
    Stroke,
    Material,
    Drawable,
    Circle,
    Rectangle,
    Line,
    Polyline,
)

from animengine.graph.object import (
    Object,
    ObjectKind,
    Model,
    Group,
)

from animengine.graph.snapshot import RenderItem, Snapshot
from animengine.graph.tree import ObjectTree

__all__ = [
    'Rect',
    'Transform',

    'Color',
    'Fill',
    'Stroke',
    'Material',
    'Drawable',
    'Circle',
    'Rectangle',
    'Line',
    'Polyline',

    'Object',
    'ObjectKind',
    'Model',
    'Group',

    'RenderItem',
    'Snapshot',
    'ObjectTree',
]
