# animengine/__init__.py
"""
animengine - motion algebra and scene graph for procedural vector animation.

Subpackages, leaves first:

- core: math, ids, errors, configuration, signals
- graph: transforms, drawables, the object tree and render snapshots
- motion: motions, combinators, leaf effects, dynamic values and properties
- scene: registry, world, scenes, authoring builder, descriptions
- time: playback transport
"""

__version__ = "0.1.0"

from animengine.core import Variable, EngineConfig, configure_logging
from animengine.graph import ObjectTree, Object, Transform, Snapshot
from animengine.motion import Motion, Animation, Easing
from animengine.scene import Scene, SceneBuilder, SceneHost, build_scene, load_scene
from animengine.time import Transport

__all__ = [
    'Variable',
    'EngineConfig',
    'configure_logging',
    'ObjectTree',
    'Object',
    'Transform',
    'Snapshot',
    'Motion',
    'Animation',
    'Easing',
    'Scene',
    'SceneBuilder',
    'SceneHost',
    'build_scene',
    'load_scene',
    'Transport',
]
