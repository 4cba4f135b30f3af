# animengine/scene/__init__.py
"""
Scene Module - evaluation context, finished scenes and authoring

Key components:

- MotionRegistry: flat id -> Motion map with forward references
- World: the mutable context of one evaluation pass
- Scene: finished timeline, render_at(time) from a fresh World
- SceneBuilder: authoring API with emulation and deferred placement
- build_scene / load_scene / SceneHost: declarative descriptions and reload

Example usage:

    from animengine.scene import SceneBuilder, Alignment

    builder = SceneBuilder()
    box = builder.rectangle(200, 100).with_position((300, 300)).add()
    dot = builder.circle(10).place(Alignment(box).right().top()).add()
    builder.animate(dot, 1.5, lambda a: a.rotate(3.14).fade_in())
    scene = builder.finish()

    snapshot = scene.snapshot_at(0.75)
"""

from animengine.scene.registry import MotionRegistry
from animengine.scene.world import World
from animengine.scene.scene import Scene

from animengine.scene.spatial import (
    Positioner,
    Absolute,
    Alignment,
    Pixels,
    PlacementPlan,
    positioner,
)

from animengine.scene.builder import (
    BuilderState,
    Builder,
    SceneBuilder,
    GroupBuilder,
    ObjectBuilder,
    AnimationBuilder,
)

from animengine.scene.description import (
    SceneCompiler,
    build_scene,
    load_scene,
)

from animengine.scene.host import SceneHost

__all__ = [
    'MotionRegistry',
    'World',
    'Scene',

    'Positioner',
    'Absolute',
    'Alignment',
    'Pixels',
    'PlacementPlan',
    'positioner',

    'BuilderState',
    'Builder',
    'SceneBuilder',
    'GroupBuilder',
    'ObjectBuilder',
    'AnimationBuilder',

    'SceneCompiler',
    'build_scene',
    'load_scene',

    'SceneHost',
]
