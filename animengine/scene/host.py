# animengine/scene/host.py
"""
SceneHost - keeps the last good Scene across rebuilds.

A rebuild compiles a description from scratch. If it fails, the host keeps
serving the previous Scene and remembers the error, so a live preview never
goes blank while the description is being edited.
"""

from __future__ import annotations
from typing import Optional, Tuple
import logging

from animengine.core.errors import SceneDescriptionError
from animengine.core.signal import SignalBridge, SignalEmitter, SIGNAL_SCENE_RELOADED, SIGNAL_SCENE_ERROR
from animengine.graph.snapshot import Snapshot
from animengine.scene.description import build_scene, load_scene
from animengine.scene.scene import Scene

logger = logging.getLogger(__name__)


class SceneHost(SignalEmitter):

    def __init__(self, scene: Scene = None, bridge: SignalBridge = None):
        self.scene = scene or Scene.null()
        self.last_error: Optional[SceneDescriptionError] = None
        self.generation = 0
        if bridge is not None:
            self.bind_bridge(bridge)

    def reload(self, data: dict) -> bool:
        """Rebuild from a description dict. Returns False if the old Scene was kept."""
        try:
            scene = build_scene(data)
        except SceneDescriptionError as e:
            return self._failed(e)
        return self._swap(scene)

    def reload_file(self, path: str) -> bool:
        try:
            scene = load_scene(path)
        except SceneDescriptionError as e:
            return self._failed(e)
        except OSError as e:
            return self._failed(SceneDescriptionError(e.strerror or str(e), path))
        return self._swap(scene)

    def _swap(self, scene: Scene) -> bool:
        self.scene = scene
        self.last_error = None
        self.generation += 1
        logger.debug(f"Reloaded scene (generation {self.generation}): {scene!r}")
        self.emit(SIGNAL_SCENE_RELOADED, scene)
        return True

    def _failed(self, error: SceneDescriptionError) -> bool:
        self.last_error = error
        logger.error(f"Scene reload failed, keeping previous scene: {error}")
        self.emit(SIGNAL_SCENE_ERROR, error)
        return False

    # -------------------------------------------------------------------------
    # Rendering
    # -------------------------------------------------------------------------

    def snapshot_at(self, time: float, render_size: Tuple[float, float] = None) -> Snapshot:
        return self.scene.snapshot_at(time, render_size)

    def __repr__(self) -> str:
        return f"SceneHost({self.scene!r}, generation={self.generation}, error={self.last_error is not None})"
