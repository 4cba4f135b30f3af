# animengine/scene/scene.py
"""
Scene - a finished, immutable timeline.

A Scene is a root motion id, a frozen registry and a length in seconds.
Rendering at time t builds a fresh World, runs the root motion at
`t / length` and hands back the resulting tree. No state survives between
calls, so seeking anywhere (backwards included) is always correct, at the
cost of re-running the whole timeline per query.
"""

from __future__ import annotations
from typing import Mapping, Tuple, Union
import logging

from animengine.core.config import DEFAULT_CONFIG, EngineConfig
from animengine.core.ids import MotionId, Variable
from animengine.graph.snapshot import Snapshot
from animengine.graph.tree import ObjectTree
from animengine.motion.combinators import Sequence
from animengine.scene.registry import MotionRegistry
from animengine.scene.world import World

logger = logging.getLogger(__name__)


class Scene:

    def __init__(self, root: MotionId, registry: MotionRegistry, length: float,
                 config: EngineConfig = None):
        if length < 0:
            raise ValueError(f"Negative scene length: {length}")
        self.root = root
        self.registry = registry
        self._length = float(length)
        self.config = config or DEFAULT_CONFIG

    @staticmethod
    def null(config: EngineConfig = None) -> Scene:
        """Empty scene of length 0."""
        registry = MotionRegistry()
        root = registry.register(Sequence())
        registry.freeze()
        return Scene(root, registry, 0.0, config)

    def length(self) -> float:
        return self._length

    def time_to_alpha(self, time: float) -> float:
        time = max(time, 0.0)
        if self._length == 0:
            return 1.0
        return time / self._length

    # -------------------------------------------------------------------------
    # Rendering
    # -------------------------------------------------------------------------

    def render_at(self, time: float, render_size: Tuple[float, float] = None) -> ObjectTree:
        return self.render_with_input(time, {}, render_size)

    def render_with_input(self, time: float, variables: Mapping[Union[Variable, str], float],
                          render_size: Tuple[float, float] = None) -> ObjectTree:
        """Render with some variables already set, as if written before the pass."""
        seeded = {
            (key if isinstance(key, Variable) else Variable(key)): value
            for key, value in variables.items()
        }
        tree = ObjectTree()
        world = World(tree, self.registry, seeded, render_size, self.config)
        alpha = self.time_to_alpha(time)
        logger.debug(f"Rendering scene at t={time:g} (alpha={alpha:g})")
        world.play_at(self.root, alpha)
        return tree

    def snapshot_at(self, time: float, render_size: Tuple[float, float] = None) -> Snapshot:
        size = tuple(render_size) if render_size else self.config.render_size
        tree = self.render_at(time, size)
        return Snapshot.from_tree(tree, time, size)

    def __repr__(self) -> str:
        return f"Scene(root={self.root!r}, length={self._length:g}, motions={len(self.registry)})"
