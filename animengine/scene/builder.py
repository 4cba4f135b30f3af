# animengine/scene/builder.py
"""
SceneBuilder - imperative authoring API.

The builder keeps an authoring tree that mirrors what the scene looks like
after everything played so far. Every motion handed to play() is run once
against that tree at alpha 1.0 (emulate_motion) before it is registered and
appended to the root Sequence, so later authoring steps can read bounding
boxes of earlier objects.

Usage:

    builder = SceneBuilder()
    ball = builder.circle(radius=20).with_position((100, 100)).add()
    label = builder.rectangle(width=80, height=20).place(Alignment(ball).bottom()).add()
    builder.animate(ball, 2.0, lambda a: a.translate((400, 100)).fade_in())
    builder.wait(1.0)
    scene = builder.finish()

Placements are collected in a PlacementPlan and resolved once in finish(),
against the objects as they stood when added.
Objects created through group() are not rooted; they are detached from the
root until the group object itself is added.
"""

from __future__ import annotations
from abc import ABC, abstractmethod
from dataclasses import replace
from typing import Any, Callable, Dict, List, Tuple
import logging

from animengine.core.config import DEFAULT_CONFIG, EngineConfig
from animengine.core.ids import IdAllocator, MotionId, ObjectId, Variable
from animengine.core.errors import RegistryFrozenError
from animengine.core.math2d import Vec2
from animengine.core.signal import (
    SignalBridge, SignalEmitter,
    SIGNAL_OBJECT_REGISTERED, SIGNAL_MOTION_REGISTERED, SIGNAL_SCENE_FINISHED,
)
from animengine.graph.drawables import Circle, Color, Drawable, Line, Material, Polyline, Rectangle
from animengine.graph.object import Group, Object, ObjectKind
from animengine.graph.transform import Transform
from animengine.graph.tree import ObjectTree
from animengine.motion.base import Animation, Motion
from animengine.motion.combinators import Concurrently, EmbeddedScene, Play, Sequence, Wait, weighted
from animengine.motion.dynamics import Derived, DynamicObject, DynamicTransform, Literal
from animengine.motion.easing import Easing
from animengine.motion.effects import AddObject, FadeIn, SetVariable
from animengine.motion.properties import TransformProperty
from animengine.scene.registry import MotionRegistry
from animengine.scene.scene import Scene
from animengine.scene.spatial import PlacementPlan, positioner
from animengine.scene.world import World

logger = logging.getLogger(__name__)

DEFAULT_MATERIAL = Material.filled(Color.white())


def _as_vec2(value: Any) -> Vec2:
    if isinstance(value, Vec2):
        return value
    x, y = value
    return Vec2(float(x), float(y))


# =============================================================================
# Shared State
# =============================================================================

class BuilderState:
    """Everything a SceneBuilder and its GroupBuilders author into."""

    def __init__(self, config: EngineConfig = None):
        self.config = config or DEFAULT_CONFIG
        self.objects = ObjectTree()
        self.object_ids = IdAllocator()
        self.registry = MotionRegistry(IdAllocator())
        self.timeline = Sequence()
        self.root_id = self.registry.register(self.timeline)
        self.templates: Dict[ObjectId, DynamicObject] = {}
        self.placements = PlacementPlan()
        # Objects as they stood when added; placements resolve against this.
        self.layout = ObjectTree()
        # Authoring-only; never seeds a Scene's World.
        self.variables: Dict[Variable, float] = {}

    def emulate_motion(self, motion: Motion):
        """Run `motion` at 1.0 so the authoring tree matches its end state."""
        world = World(self.objects, self.registry, self.variables,
                      self.config.render_size, self.config)
        motion.animate(world, 1.0)

    def record_layout(self, object_id: ObjectId, rooted: bool):
        """Copy a just-added object (and any children not yet seen) into the layout tree."""
        obj = self.objects.get(object_id)
        for child_id in obj.children:
            if child_id not in self.layout and child_id in self.objects:
                self.record_layout(child_id, False)
        self.layout.add(object_id, obj.copy(), rooted=rooted)


# =============================================================================
# Authoring Surface
# =============================================================================

class Builder(ABC):
    """
    Authoring entry points shared by SceneBuilder and GroupBuilder.
    Subclasses provide `state`, `rooted`, play() and emit().
    """

    state: BuilderState
    rooted: bool = True

    @abstractmethod
    def play(self, motion: Motion, duration: float = None,
             easing: Easing = Easing.LINEAR) -> MotionId:
        pass

    @abstractmethod
    def emit(self, signal: str, *args, **kwargs):
        pass

    # -------------------------------------------------------------------------
    # Motions
    # -------------------------------------------------------------------------

    def register_motion(self, motion: Motion, duration: float = None,
                        easing: Easing = Easing.LINEAR) -> MotionId:
        """Register without scheduling or emulating."""
        if duration is not None:
            motion = Animation(motion, duration, easing)
        motion_id = self.state.registry.register(motion)
        self.emit(SIGNAL_MOTION_REGISTERED, motion_id, motion)
        return motion_id

    def compose(self, kind: str, entries: List[Tuple[MotionId, float]]) -> MotionId:
        """Register a 'sequence' or 'concurrently' of registered motions with weights."""
        return self.register_motion(weighted(kind, entries))

    def schedule(self, motion_id: MotionId):
        """Append a registered motion to the end of the timeline."""
        self.state.timeline.append(Play(motion_id))

    def wait(self, duration: float) -> MotionId:
        return self.play(Wait(duration))

    def animate(self, object_id: ObjectId, duration: float,
                fn: Callable[[AnimationBuilder], AnimationBuilder],
                easing: Easing = Easing.LINEAR) -> MotionId:
        animation = fn(AnimationBuilder(object_id))
        return self.play(animation.build(duration, easing))

    def variable(self, name: str, initial: float = None) -> Variable:
        """Declare a variable, optionally setting it at this point of the timeline."""
        variable = Variable(name)
        if initial is not None:
            self.play(SetVariable(variable, initial))
        return variable

    def embed(self, scene: Scene, transform: Transform = None, speed: float = 1.0,
              object_id: ObjectId = None) -> ObjectId:
        """Play a finished scene inside this one; returns the wrapping group's id."""
        if object_id is None:
            object_id = self.state.object_ids.next()
        self.play(EmbeddedScene(scene, object_id, transform, speed, rooted=self.rooted))
        self.state.record_layout(object_id, self.rooted)
        self.emit(SIGNAL_OBJECT_REGISTERED, object_id)
        return object_id

    # -------------------------------------------------------------------------
    # Objects
    # -------------------------------------------------------------------------

    def add_object(self, object_id: ObjectId, obj: Any):
        """Add an Object (or DynamicObject template) when the timeline reaches this point."""
        template = obj if isinstance(obj, DynamicObject) else DynamicObject.from_object(obj)
        if isinstance(object_id, int):
            self.state.object_ids.reserve(object_id)
        self.state.templates[object_id] = template
        if isinstance(template.kind, Group):
            self.state.placements.add_group(object_id, template.kind.children)

        self.play(AddObject(object_id, template, rooted=self.rooted))
        self.state.record_layout(object_id, self.rooted)
        self.emit(SIGNAL_OBJECT_REGISTERED, object_id)

    def add_new_object(self, obj: Any) -> ObjectId:
        object_id = self.state.object_ids.next()
        self.add_object(object_id, obj)
        return object_id

    def register_object(self, kind: ObjectKind, transform: Transform = None) -> ObjectId:
        return self.add_new_object(Object(kind, transform or Transform()))

    def place(self, object_id: ObjectId, rule: Any):
        """Position an object relative to others once the scene is finished."""
        self.state.placements.place(object_id, rule)

    def object(self, obj: Object) -> ObjectBuilder:
        return ObjectBuilder(self, obj)

    def model(self, drawable: Drawable, material: Material = None) -> ObjectBuilder:
        return self.object(Object.model(drawable, material or DEFAULT_MATERIAL))

    def circle(self, radius: float = 50.0, material: Material = None) -> ObjectBuilder:
        return self.model(Circle(radius=radius), material)

    def rectangle(self, width: float = 100.0, height: float = 100.0,
                  material: Material = None) -> ObjectBuilder:
        return self.model(Rectangle(width=width, height=height), material)

    def line(self, start: Any, end: Any, material: Material = None) -> ObjectBuilder:
        return self.model(Line(_as_vec2(start), _as_vec2(end)),
                          material or Material.stroked(Color.white()))

    def polyline(self, points: List[Any], closed: bool = False,
                 material: Material = None) -> ObjectBuilder:
        pts = tuple(_as_vec2(p).to_tuple() for p in points)
        return self.model(Polyline(pts, closed), material)

    def group(self) -> GroupBuilder:
        return GroupBuilder(self)


# =============================================================================
# Scene Builder
# =============================================================================

class SceneBuilder(SignalEmitter, Builder):

    def __init__(self, config: EngineConfig = None, bridge: SignalBridge = None):
        self.state = BuilderState(config)
        self._finished = False
        if bridge is not None:
            self.bind_bridge(bridge)

    @property
    def objects(self) -> ObjectTree:
        """Authoring tree: the scene as of the end of everything played so far."""
        return self.state.objects

    @property
    def registry(self) -> MotionRegistry:
        return self.state.registry

    def emulate_motion(self, motion: Motion):
        self.state.emulate_motion(motion)

    def play(self, motion: Motion, duration: float = None,
             easing: Easing = Easing.LINEAR) -> MotionId:
        """Emulate, register and append to the timeline."""
        if self._finished:
            raise RegistryFrozenError("Scene is already finished")
        if duration is not None:
            motion = Animation(motion, duration, easing)
        self.emulate_motion(motion)
        motion_id = self.register_motion(motion)
        self.schedule(motion_id)
        return motion_id

    def finish(self) -> Scene:
        if self._finished:
            raise RegistryFrozenError("SceneBuilder.finish() called twice")

        state = self.state
        for object_id in state.placements.graph():
            if object_id not in state.layout and object_id in state.objects:
                state.record_layout(object_id, False)
        before = {object_id: state.layout.get(object_id).transform.position
                  for object_id in state.placements.order()}
        positions = state.placements.resolve(state.layout)
        for object_id, position in positions.items():
            template = state.templates.get(object_id)
            if template is not None:
                _shift_template(template, position - before[object_id])
        if positions:
            # Later motions may have moved placed objects; replay the timeline.
            state.objects = ObjectTree()
            state.variables = {}
            state.emulate_motion(state.timeline)

        state.registry.freeze()
        length = state.registry.duration(state.root_id)
        scene = Scene(state.root_id, state.registry, length, state.config)
        self._finished = True

        logger.debug(f"Finished {scene!r}")
        self.emit(SIGNAL_SCENE_FINISHED, scene)
        return scene


def _shift_template(template: DynamicObject, offset: Vec2):
    """Move a template's position by `offset`, keeping dynamic fields dynamic."""
    transform = template.transform
    if isinstance(transform, DynamicTransform):
        position = transform.position
        if isinstance(position, Literal):
            shifted = Literal(position.value + offset)
        else:
            shifted = Derived(lambda world: position.get(world) + offset)
        template.transform = replace(transform, position=shifted)
    elif isinstance(transform, Literal):
        value = transform.value
        template.transform = Literal(value.with_position(value.position + offset))
    else:
        def shifted_transform(world: World) -> Transform:
            value = transform.get(world)
            return value.with_position(value.position + offset)
        template.transform = Derived(shifted_transform)


# =============================================================================
# Group Builder
# =============================================================================

class GroupBuilder(Builder):
    """
    Collects children for a group. Children are added unrooted through the
    parent's timeline; finish() yields an ObjectBuilder for the group itself.
    """

    rooted = False

    def __init__(self, parent: Builder):
        self.parent = parent
        self.state = parent.state
        self.children: List[ObjectId] = []

    def play(self, motion: Motion, duration: float = None,
             easing: Easing = Easing.LINEAR) -> MotionId:
        return self.parent.play(motion, duration, easing)

    def emit(self, signal: str, *args, **kwargs):
        self.parent.emit(signal, *args, **kwargs)

    def add_object(self, object_id: ObjectId, obj: Any):
        super().add_object(object_id, obj)
        self.children.append(object_id)

    def embed(self, scene: Scene, transform: Transform = None, speed: float = 1.0,
              object_id: ObjectId = None) -> ObjectId:
        object_id = super().embed(scene, transform, speed, object_id)
        self.children.append(object_id)
        return object_id

    def finish(self) -> ObjectBuilder:
        return ObjectBuilder(self.parent, Object.group(self.children))


# =============================================================================
# Object Builder
# =============================================================================

class ObjectBuilder:
    """Fluent setup of one object before it is added."""

    def __init__(self, builder: Builder, obj: Object, object_id: ObjectId = None):
        self.builder = builder
        self.object = obj
        self.object_id = object_id if object_id is not None else builder.state.object_ids.next()
        self._placement = None

    def with_transform(self, transform: Transform) -> ObjectBuilder:
        self.object.transform = transform
        return self

    def with_position(self, position: Any) -> ObjectBuilder:
        self.object.transform = self.object.transform.with_position(_as_vec2(position))
        return self

    def with_rotation(self, rotation: float) -> ObjectBuilder:
        self.object.transform = self.object.transform.with_rotation(rotation)
        return self

    def with_scale(self, scale: float) -> ObjectBuilder:
        self.object.transform = self.object.transform.with_scale(scale)
        return self

    def with_anchor(self, anchor: Any) -> ObjectBuilder:
        self.object.transform = self.object.transform.with_anchor(_as_vec2(anchor))
        return self

    def with_centered_anchor(self) -> ObjectBuilder:
        """Rotate and scale about the payload's center without moving it."""
        payload = Object(self.object.kind.copy(), Transform())
        center = self.builder.state.objects.local_bounding_box_obj(payload).center
        old = self.object.transform
        self.object.transform = old.with_anchor(center).with_position(old.apply(center))
        return self

    def place(self, rule: Any) -> ObjectBuilder:
        self._placement = positioner(rule)
        return self

    def add(self) -> ObjectId:
        self.builder.add_object(self.object_id, self.object)
        if self._placement is not None:
            self.builder.place(self.object_id, self._placement)
        return self.object_id

    def animate(self, duration: float, fn: Callable[[AnimationBuilder], AnimationBuilder],
                easing: Easing = Easing.LINEAR) -> ObjectId:
        object_id = self.add()
        self.builder.animate(object_id, duration, fn, easing)
        return object_id


# =============================================================================
# Animation Builder
# =============================================================================

class AnimationBuilder:
    """
    Collects per-object animations that run side by side over one duration.
    Each reads its start value when evaluated, so it follows whatever earlier
    motions did to the object.
    """

    def __init__(self, object_id: ObjectId):
        self.object_id = object_id
        self.motions: List[Motion] = []
        self._property = TransformProperty(object_id)

    def translate(self, to: Any) -> AnimationBuilder:
        self.motions.append(self._property.position().animate(to))
        return self

    def move_to(self, rule: Any) -> AnimationBuilder:
        rule = positioner(rule)
        object_id = self.object_id
        target = Derived(lambda world: rule.position(object_id, world.objects))
        self.motions.append(self._property.position().animate(target))
        return self

    def rotate(self, rotation: float) -> AnimationBuilder:
        self.motions.append(self._property.rotation().animate(rotation))
        return self

    def scale(self, scale: float) -> AnimationBuilder:
        self.motions.append(self._property.scale().animate(scale))
        return self

    def fade_in(self) -> AnimationBuilder:
        self.motions.append(FadeIn(self.object_id))
        return self

    def build(self, duration: float, easing: Easing = Easing.LINEAR) -> Motion:
        if not self.motions:
            return Wait(duration)
        return Concurrently([Animation(m, duration, easing) for m in self.motions])
