# animengine/core/errors.py
"""
Engine exceptions.

Malformed references (missing objects, motions, variables) are programmer
errors and propagate out of an evaluation pass. SceneDescriptionError is the
only recoverable one: it reports an authoring mistake with its location.
"""

from __future__ import annotations
from typing import Hashable, Optional, Sequence


class AnimEngineError(Exception):
    """Base class for all engine errors."""


class MissingObjectError(AnimEngineError, KeyError):
    def __init__(self, object_id: Hashable):
        self.object_id = object_id
        super().__init__(f"Object not found: {object_id!r}")

    def __str__(self) -> str:
        return self.args[0]


class MissingMotionError(AnimEngineError, KeyError):
    def __init__(self, motion_id: Hashable):
        self.motion_id = motion_id
        super().__init__(f"Motion not found: {motion_id!r}")

    def __str__(self) -> str:
        return self.args[0]


class MissingVariableError(AnimEngineError, KeyError):
    """Raised when a variable is read before any motion wrote it."""

    def __init__(self, variable):
        self.variable = variable
        super().__init__(f"Variable not found: {variable!r}")

    def __str__(self) -> str:
        return self.args[0]


class TreeStructureError(AnimEngineError):
    """Object tree violates the group invariant (cycle, non-group root)."""


class MotionCycleError(AnimEngineError):
    """A motion's duration depends on itself through registry references."""


class RegistryFrozenError(AnimEngineError):
    """Motion registered after the scene was finished."""


class SpatialCycleError(AnimEngineError):
    """Placement rules depend on each other's bounding boxes."""

    def __init__(self, cycle: Sequence[Hashable]):
        self.cycle = list(cycle)
        path = " -> ".join(repr(node) for node in self.cycle)
        super().__init__(f"Cyclic placement dependency: {path}")


class SceneDescriptionError(AnimEngineError):
    """Invalid declarative scene description."""

    def __init__(self, message: str, location: Optional[str] = None):
        self.message = message
        self.location = location
        if location:
            super().__init__(f"{location}: {message}")
        else:
            super().__init__(message)
