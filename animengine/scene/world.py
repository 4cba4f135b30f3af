# animengine/scene/world.py
"""
World - the mutable context of one evaluation pass.

Holds the object tree being built, the (read-only) motion registry, the
variable store and the render size. A World lives for exactly one pass;
Scene.render_at always starts from a fresh one.
"""

from __future__ import annotations
from typing import Dict, Mapping, Tuple

from animengine.core.config import DEFAULT_CONFIG, EngineConfig
from animengine.core.errors import MissingVariableError
from animengine.core.ids import MotionId, Variable
from animengine.graph.tree import ObjectTree
from animengine.scene.registry import MotionRegistry


class World:

    def __init__(self, objects: ObjectTree, registry: MotionRegistry,
                 variables: Dict[Variable, float] = None,
                 render_size: Tuple[float, float] = None,
                 config: EngineConfig = None):
        self.objects = objects
        self.registry = registry
        self.variables: Dict[Variable, float] = variables if variables is not None else {}
        self.config = config or DEFAULT_CONFIG
        self._render_size = tuple(render_size) if render_size else self.config.render_size

    # -------------------------------------------------------------------------
    # Motions
    # -------------------------------------------------------------------------

    def play(self, motion_id: MotionId):
        self.play_at(motion_id, 1.0)

    def play_at(self, motion_id: MotionId, alpha: float):
        self.registry.get(motion_id).animate(self, alpha)

    def duration(self, motion_id: MotionId) -> float:
        return self.registry.duration(motion_id)

    # -------------------------------------------------------------------------
    # Variables
    # -------------------------------------------------------------------------

    def get_variable(self, variable: Variable) -> float:
        try:
            return self.variables[variable]
        except KeyError:
            raise MissingVariableError(variable) from None

    def update_variable(self, variable: Variable, value: float):
        self.variables[variable] = value

    def update_variables(self, values: Mapping[Variable, float]):
        self.variables.update(values)

    # -------------------------------------------------------------------------
    # Render context
    # -------------------------------------------------------------------------

    def render_size(self) -> Tuple[float, float]:
        return self._render_size

    def __repr__(self) -> str:
        return f"World({self.objects!r}, variables={len(self.variables)})"
