# animengine/scene/description.py
"""
Declarative scene descriptions.

A description is a plain dict (usually loaded from JSON) that is compiled
through a SceneBuilder:

    {
        "config": {"render_size": [1280, 720]},
        "variables": {"radius": 20},
        "objects": {
            "ball": {"type": "circle", "radius": 20, "fill": "#ff3030",
                     "transform": {"position": [100, 100]}},
            "pair": {"type": "group", "children": ["left", "right"]},
            ...
        },
        "timeline": [
            {"type": "add", "object": "ball"},
            {"type": "move", "object": "ball", "to": [400, 100], "duration": 2.0},
            {"type": "wait", "duration": 1.0},
            {"type": "keyframe", "window": [2, 3], "span": 5,
             "step": {"type": "fade_in", "object": "ball", "duration": 1}}
        ]
    }

Numbers that may change during playback accept {"var": "name"}. Positions
accept [x, y] or {"align": "other", "h": "left", "v": "top"}.

Every problem is reported as a SceneDescriptionError carrying the path of
the offending entry (e.g. "timeline[2].to"). Nothing is partially applied:
a description either compiles into a complete Scene or raises.
"""

from __future__ import annotations
from typing import Any, Dict, List, Optional
import json
import logging

from animengine.core.config import EngineConfig
from animengine.core.errors import AnimEngineError, SceneDescriptionError
from animengine.core.ids import ObjectId, Variable
from animengine.core.math2d import Vec2
from animengine.graph.drawables import (
    Circle, Color, Drawable, Fill, Line, Material, Polyline, Rectangle, Stroke,
)
from animengine.graph.object import Group, Model
from animengine.graph.transform import Transform
from animengine.motion.base import Animation, Motion
from animengine.motion.combinators import Keyframe, Play, Sequence, Trigger, Wait
from animengine.motion.dynamics import Derived, DynamicObject, DynamicPos, DynamicTransform, Literal, dynamic
from animengine.motion.easing import Easing
from animengine.motion.effects import AddObject, AnimateTransform, FadeIn, Move, MoveTo, SetVariable
from animengine.motion.properties import TransformProperty
from animengine.scene.builder import SceneBuilder
from animengine.scene.scene import Scene
from animengine.scene.spatial import Alignment

logger = logging.getLogger(__name__)

SHAPE_TYPES = ('circle', 'rectangle', 'line', 'polyline')
STEP_TYPES = (
    'add', 'wait', 'move', 'move_to', 'rotate', 'scale', 'fade_in',
    'transform', 'set', 'sequence', 'concurrently', 'keyframe', 'trigger',
)


# =============================================================================
# Value Parsing
# =============================================================================

def _require(data: dict, key: str, loc: str) -> Any:
    if not isinstance(data, dict):
        raise SceneDescriptionError("expected an object", loc)
    if key not in data:
        raise SceneDescriptionError(f"missing required key '{key}'", loc)
    return data[key]


def _number(value: Any, loc: str) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise SceneDescriptionError(f"expected a number, got {value!r}", loc)
    return float(value)


def _check_span(span: float, loc: str):
    if span < 0:
        raise SceneDescriptionError("span must not be negative", f"{loc}.span")


def _point(value: Any, loc: str) -> Vec2:
    if not isinstance(value, (list, tuple)) or len(value) != 2:
        raise SceneDescriptionError(f"expected [x, y], got {value!r}", loc)
    return Vec2(_number(value[0], f"{loc}[0]"), _number(value[1], f"{loc}[1]"))


def _color(value: Any, loc: str) -> Color:
    if isinstance(value, str):
        try:
            if value.startswith('#'):
                return Color.from_hex(value)
            return Color.named(value)
        except ValueError as e:
            raise SceneDescriptionError(str(e), loc) from None
    if isinstance(value, (list, tuple)) and len(value) in (3, 4):
        return Color(*(_number(c, f"{loc}[{i}]") for i, c in enumerate(value)))
    raise SceneDescriptionError(f"expected a color, got {value!r}", loc)


def _transform(data: Any, loc: str) -> Transform:
    if data is None:
        return Transform()
    if not isinstance(data, dict):
        raise SceneDescriptionError("expected a transform object", loc)
    unknown = set(data) - {'position', 'rotation', 'scale', 'anchor'}
    if unknown:
        raise SceneDescriptionError(f"unknown transform keys {sorted(unknown)}", loc)
    return Transform(
        position=_point(data.get('position', [0, 0]), f"{loc}.position"),
        rotation=_number(data.get('rotation', 0.0), f"{loc}.rotation"),
        scale=_number(data.get('scale', 1.0), f"{loc}.scale"),
        anchor=_point(data.get('anchor', [0, 0]), f"{loc}.anchor"),
    )


def _material(data: dict, loc: str) -> Material:
    fill = None
    stroke = None
    if 'fill' in data:
        fill = Fill(_color(data['fill'], f"{loc}.fill"))
    if 'stroke' in data:
        entry = data['stroke']
        if isinstance(entry, dict):
            stroke = Stroke(
                _color(_require(entry, 'color', f"{loc}.stroke"), f"{loc}.stroke.color"),
                _number(entry.get('width', 1.0), f"{loc}.stroke.width"),
            )
        else:
            stroke = Stroke(_color(entry, f"{loc}.stroke"))
    if fill is None and stroke is None:
        fill = Fill(Color.white())
    return Material(fill=fill, stroke=stroke)


def _drawable(kind: str, data: dict, loc: str) -> Drawable:
    if kind == 'circle':
        return Circle(radius=_number(data.get('radius', 50.0), f"{loc}.radius"))
    if kind == 'rectangle':
        return Rectangle(
            width=_number(data.get('width', 100.0), f"{loc}.width"),
            height=_number(data.get('height', 100.0), f"{loc}.height"),
        )
    if kind == 'line':
        return Line(
            _point(_require(data, 'start', loc), f"{loc}.start"),
            _point(_require(data, 'end', loc), f"{loc}.end"),
        )
    points = _require(data, 'points', loc)
    if not isinstance(points, list):
        raise SceneDescriptionError("expected a list of points", f"{loc}.points")
    return Polyline(
        tuple(_point(p, f"{loc}.points[{i}]").to_tuple() for i, p in enumerate(points)),
        bool(data.get('closed', False)),
    )


# =============================================================================
# Compiler
# =============================================================================

class SceneCompiler:
    """Turns one description into one Scene through a fresh SceneBuilder."""

    def __init__(self, data: dict):
        if not isinstance(data, dict):
            raise SceneDescriptionError("scene description must be an object")
        self.data = data
        self.builder = SceneBuilder(self._config())
        self.objects: Dict[str, dict] = self._object_table()
        self.ids: Dict[str, ObjectId] = {}
        self.variables: Dict[str, Variable] = {}

    def _config(self) -> Optional[EngineConfig]:
        config = self.data.get('config')
        if config is None:
            return None
        try:
            return EngineConfig.from_dict(config)
        except (ValueError, TypeError) as e:
            raise SceneDescriptionError(str(e), "config") from None

    def _object_table(self) -> Dict[str, dict]:
        objects = self.data.get('objects', {})
        if not isinstance(objects, dict):
            raise SceneDescriptionError("expected a mapping of names to objects", "objects")
        for name, entry in objects.items():
            loc = f"objects.{name}"
            kind = _require(entry, 'type', loc)
            if kind not in SHAPE_TYPES and kind != 'group':
                raise SceneDescriptionError(f"unknown object type {kind!r}", f"{loc}.type")
        return objects

    def compile(self) -> Scene:
        variables = self.data.get('variables', {})
        if not isinstance(variables, dict):
            raise SceneDescriptionError("expected a mapping of names to numbers", "variables")
        for name, initial in variables.items():
            value = _number(initial, f"variables.{name}")
            self.variables[name] = self.builder.variable(name, value)

        timeline = self.data.get('timeline', [])
        if not isinstance(timeline, list):
            raise SceneDescriptionError("expected a list of steps", "timeline")
        for i, step in enumerate(timeline):
            loc = f"timeline[{i}]"
            motion = self.step(step, loc)
            try:
                self.builder.play(motion)
            except SceneDescriptionError:
                raise
            except (AnimEngineError, ValueError, TypeError) as e:
                raise SceneDescriptionError(str(e), loc) from e

        try:
            return self.builder.finish()
        except (AnimEngineError, ValueError, TypeError) as e:
            raise SceneDescriptionError(str(e), "timeline") from e

    # -------------------------------------------------------------------------
    # References
    # -------------------------------------------------------------------------

    def _object_ref(self, step: dict, loc: str) -> ObjectId:
        name = _require(step, 'object', loc)
        if name not in self.ids:
            if name in self.objects:
                raise SceneDescriptionError(f"object {name!r} is used before it is added", f"{loc}.object")
            raise SceneDescriptionError(f"unknown object {name!r}", f"{loc}.object")
        return self.ids[name]

    def _scalar(self, value: Any, loc: str) -> Any:
        """Number or {"var": name}."""
        if isinstance(value, dict) and 'var' in value:
            name = value['var']
            if name not in self.variables:
                raise SceneDescriptionError(f"unknown variable {name!r}", loc)
            return self.variables[name]
        return _number(value, loc)

    def _position(self, value: Any, loc: str) -> Any:
        if isinstance(value, dict) and 'align' in value:
            return self._alignment(value, loc).dynamic()
        if not isinstance(value, (list, tuple)) or len(value) != 2:
            raise SceneDescriptionError(f"expected [x, y] or an alignment, got {value!r}", loc)
        x = dynamic(self._scalar(value[0], f"{loc}[0]"))
        y = dynamic(self._scalar(value[1], f"{loc}[1]"))
        if isinstance(x, Literal) and isinstance(y, Literal):
            return Vec2(x.value, y.value)
        return DynamicPos(x, y)

    def _alignment(self, value: dict, loc: str) -> Alignment:
        target = value['align']
        if target not in self.ids:
            raise SceneDescriptionError(f"unknown or not yet added object {target!r}", f"{loc}.align")
        h = value.get('h', 'center')
        v = value.get('v', 'center')
        if h not in ('left', 'center', 'right'):
            raise SceneDescriptionError(f"invalid horizontal alignment {h!r}", f"{loc}.h")
        if v not in ('top', 'center', 'bottom'):
            raise SceneDescriptionError(f"invalid vertical alignment {v!r}", f"{loc}.v")
        return Alignment(self.ids[target], h, v)

    def _timed(self, motion: Motion, step: dict, loc: str, default: float = 1.0) -> Motion:
        duration = _number(step.get('duration', default), f"{loc}.duration")
        if duration < 0:
            raise SceneDescriptionError("duration must not be negative", f"{loc}.duration")
        name = step.get('easing', 'linear')
        if not isinstance(name, str):
            raise SceneDescriptionError(f"expected an easing name, got {name!r}", f"{loc}.easing")
        try:
            easing = Easing.parse(name)
        except ValueError as e:
            raise SceneDescriptionError(str(e), f"{loc}.easing") from None
        return Animation(motion, duration, easing)

    # -------------------------------------------------------------------------
    # Objects
    # -------------------------------------------------------------------------

    def _add(self, name: str, rooted: bool, loc: str, path: List[str]) -> List[Motion]:
        """AddObject motions for `name`, children first for groups."""
        if name not in self.objects:
            raise SceneDescriptionError(f"unknown object {name!r}", loc)
        if name in path:
            raise SceneDescriptionError(f"group cycle through {name!r}", loc)
        if name in self.ids:
            raise SceneDescriptionError(f"object {name!r} is added twice", loc)

        entry = self.objects[name]
        obj_loc = f"objects.{name}"
        kind = entry['type']
        transform = _transform(entry.get('transform'), f"{obj_loc}.transform")
        motions: List[Motion] = []

        if kind == 'group':
            children = entry.get('children', [])
            if not isinstance(children, list):
                raise SceneDescriptionError("expected a list of names", f"{obj_loc}.children")
            for child in children:
                motions.extend(self._add(child, False, f"{obj_loc}.children", path + [name]))
            payload = Group([self.ids[child] for child in children])
        else:
            payload = Model(_drawable(kind, entry, obj_loc), _material(entry, obj_loc))

        object_id = self.builder.state.object_ids.next()
        self.ids[name] = object_id
        template = DynamicObject(payload, DynamicTransform.from_transform(transform))
        motions.append(AddObject(object_id, template, rooted=rooted))
        return motions

    # -------------------------------------------------------------------------
    # Steps
    # -------------------------------------------------------------------------

    def step(self, step: Any, loc: str) -> Motion:
        kind = _require(step, 'type', loc)
        if kind not in STEP_TYPES:
            raise SceneDescriptionError(f"unknown step type {kind!r}", f"{loc}.type")
        try:
            return getattr(self, f"_step_{kind}")(step, loc)
        except SceneDescriptionError:
            raise
        except (ValueError, TypeError) as e:
            raise SceneDescriptionError(str(e), loc) from e

    def _step_add(self, step: dict, loc: str) -> Motion:
        name = _require(step, 'object', loc)
        motions = self._add(name, True, f"{loc}.object", [])
        return motions[0] if len(motions) == 1 else Sequence(motions)

    def _step_wait(self, step: dict, loc: str) -> Motion:
        duration = _number(_require(step, 'duration', loc), f"{loc}.duration")
        if duration < 0:
            raise SceneDescriptionError("duration must not be negative", f"{loc}.duration")
        return Wait(duration)

    def _step_move(self, step: dict, loc: str) -> Motion:
        object_id = self._object_ref(step, loc)
        end = self._position(_require(step, 'to', loc), f"{loc}.to")
        if 'from' in step:
            motion = Move(object_id, self._position(step['from'], f"{loc}.from"), end)
        else:
            motion = MoveTo(object_id, end)
        return self._timed(motion, step, loc)

    def _step_move_to(self, step: dict, loc: str) -> Motion:
        object_id = self._object_ref(step, loc)
        target = _require(step, 'to', loc)
        if isinstance(target, dict) and 'align' in target:
            rule = self._alignment(target, f"{loc}.to")
            end = Derived(lambda world: rule.position(object_id, world.objects))
        else:
            end = self._position(target, f"{loc}.to")
        return self._timed(TransformProperty(object_id).position().animate(end), step, loc)

    def _step_rotate(self, step: dict, loc: str) -> Motion:
        object_id = self._object_ref(step, loc)
        to = self._scalar(_require(step, 'to', loc), f"{loc}.to")
        return self._timed(TransformProperty(object_id).rotation().animate(to), step, loc)

    def _step_scale(self, step: dict, loc: str) -> Motion:
        object_id = self._object_ref(step, loc)
        to = self._scalar(_require(step, 'to', loc), f"{loc}.to")
        return self._timed(TransformProperty(object_id).scale().animate(to), step, loc)

    def _step_fade_in(self, step: dict, loc: str) -> Motion:
        return self._timed(FadeIn(self._object_ref(step, loc)), step, loc)

    def _step_transform(self, step: dict, loc: str) -> Motion:
        object_id = self._object_ref(step, loc)
        start = _transform(_require(step, 'from', loc), f"{loc}.from")
        end = _transform(_require(step, 'to', loc), f"{loc}.to")
        return self._timed(AnimateTransform(object_id, start, end), step, loc)

    def _step_set(self, step: dict, loc: str) -> Motion:
        name = _require(step, 'variable', loc)
        if name not in self.variables:
            self.variables[name] = Variable(name)
        value = self._scalar(_require(step, 'value', loc), f"{loc}.value")
        if 'from' in step:
            start = self._scalar(step['from'], f"{loc}.from")
            return self._timed(SetVariable(self.variables[name], value, start), step, loc)
        return SetVariable(self.variables[name], value)

    def _children(self, step: dict, loc: str) -> List[Motion]:
        steps = _require(step, 'steps', loc)
        if not isinstance(steps, list):
            raise SceneDescriptionError("expected a list of steps", f"{loc}.steps")
        return [self.step(s, f"{loc}.steps[{i}]") for i, s in enumerate(steps)]

    def _compose(self, kind: str, step: dict, loc: str) -> Motion:
        entries = []
        registry = self.builder.registry
        for child in self._children(step, loc):
            entries.append((self.builder.register_motion(child), child.length(registry)))
        return Play(self.builder.compose(kind, entries))

    def _step_sequence(self, step: dict, loc: str) -> Motion:
        return self._compose('sequence', step, loc)

    def _step_concurrently(self, step: dict, loc: str) -> Motion:
        return self._compose('concurrently', step, loc)

    def _window(self, step: dict, key: str, loc: str, default: Any = None) -> List[float]:
        value = step.get(key, default)
        if value is None:
            raise SceneDescriptionError(f"missing required key '{key}'", loc)
        if not isinstance(value, (list, tuple)) or len(value) != 2:
            raise SceneDescriptionError("expected [min, max]", f"{loc}.{key}")
        lo = _number(value[0], f"{loc}.{key}[0]")
        hi = _number(value[1], f"{loc}.{key}[1]")
        if hi < lo:
            raise SceneDescriptionError("window is reversed", f"{loc}.{key}")
        return [lo, hi]

    def _step_keyframe(self, step: dict, loc: str) -> Motion:
        from_min, from_max = self._window(step, 'window', loc)
        to_min, to_max = self._window(step, 'range', loc, [0.0, 1.0])
        span = _number(step.get('span', from_max), f"{loc}.span")
        _check_span(span, loc)
        inner = self.step(_require(step, 'step', loc), f"{loc}.step")
        return Keyframe(from_min, from_max, to_min, to_max, inner, span)

    def _step_trigger(self, step: dict, loc: str) -> Motion:
        time = _number(_require(step, 'time', loc), f"{loc}.time")
        span = _number(step.get('span', time), f"{loc}.span")
        _check_span(span, loc)
        inner = self.step(_require(step, 'step', loc), f"{loc}.step")
        return Trigger(time, inner, span)


# =============================================================================
# Entry Points
# =============================================================================

def build_scene(data: dict) -> Scene:
    return SceneCompiler(data).compile()


def load_scene(path: str) -> Scene:
    with open(path, 'r') as f:
        try:
            data = json.load(f)
        except json.JSONDecodeError as e:
            raise SceneDescriptionError(e.msg, f"{path}:{e.lineno}:{e.colno}") from None
    logger.debug(f"Loaded scene description from {path}")
    return build_scene(data)
