# animengine/core/__init__.py
"""
Core module - math, ids, errors, configuration and signals.
"""

from animengine.core.math2d import Vec2, Mat3

from animengine.core.ids import (
    IdAllocator,
    Variable,
    ObjectId,
    MotionId,
    ROOT_OBJECT_ID,
)

from animengine.core.errors import (
    AnimEngineError,
    MissingObjectError,
    MissingMotionError,
    MissingVariableError,
    TreeStructureError,
    MotionCycleError,
    RegistryFrozenError,
    SpatialCycleError,
    SceneDescriptionError,
)

from animengine.core.config import (
    EngineConfig,
    DEFAULT_CONFIG,
    configure_logging,
)

from animengine.core.signal import (
    SignalBridge,
    SignalEmitter,
    Connection,
)

__all__ = [
    'Vec2',
    'Mat3',

    'IdAllocator',
    'Variable',
    'ObjectId',
    'MotionId',
    'ROOT_OBJECT_ID',

    'AnimEngineError',
    'MissingObjectError',
    'MissingMotionError',
    'MissingVariableError',
    'TreeStructureError',
    'MotionCycleError',
    'RegistryFrozenError',
    'SpatialCycleError',
    'SceneDescriptionError',

    'EngineConfig',
    'DEFAULT_CONFIG',
    'configure_logging',

    'SignalBridge',
    'SignalEmitter',
    'Connection',
]
