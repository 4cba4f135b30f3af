# animengine/motion/__init__.py
"""
Motion Module - time composition over the object tree

Key components:

- Motion / Animation / Instant: the primitive and its timed wrapper
- Sequence / Concurrently / Keyframe / Trigger / EmbeddedScene: combinators
- AddObject / Move / MoveTo / AnimateTransform / FadeIn / ...: leaf effects
- DynamicValue / Property: values and fields resolved against the World

Example usage:

    from animengine.motion import Sequence, AddObject, Move, Wait

    intro = Sequence([
        AddObject(1, circle),
        Move(1, (0, 0), (200, 0)).with_duration(2.0),
        Wait(1.0),
    ])
"""

from animengine.motion.easing import Easing
from animengine.motion.interpolation import interpolate

from animengine.motion.base import (
    Alpha,
    Motion,
    Instant,
    Animation,
    FunctionMotion,
)

from animengine.motion.dynamics import (
    DynamicValue,
    Literal,
    VariableRef,
    Derived,
    DynamicPos,
    DynamicTransform,
    DynamicObject,
    dynamic,
    dynamic_pos,
)

from animengine.motion.properties import (
    Property,
    PropertyFromTo,
    PropertyTo,
    SetProperty,
    TransformProperty,
    TransformFieldProperty,
    VariableProperty,
)

from animengine.motion.combinators import (
    Sequence,
    Concurrently,
    Keyframe,
    Trigger,
    Wait,
    Play,
    EmbeddedScene,
    weighted,
)

from animengine.motion.effects import (
    AddObject,
    SetTransform,
    AnimateTransform,
    Move,
    MoveTo,
    FadeIn,
    SetVariable,
)

__all__ = [
    'Easing',
    'interpolate',

    'Alpha',
    'Motion',
    'Instant',
    'Animation',
    'FunctionMotion',

    'DynamicValue',
    'Literal',
    'VariableRef',
    'Derived',
    'DynamicPos',
    'DynamicTransform',
    'DynamicObject',
    'dynamic',
    'dynamic_pos',

    'Property',
    'PropertyFromTo',
    'PropertyTo',
    'SetProperty',
    'TransformProperty',
    'TransformFieldProperty',
    'VariableProperty',

    'Sequence',
    'Concurrently',
    'Keyframe',
    'Trigger',
    'Wait',
    'Play',
    'EmbeddedScene',
    'weighted',

    'AddObject',
    'SetTransform',
    'AnimateTransform',
    'Move',
    'MoveTo',
    'FadeIn',
    'SetVariable',
]
