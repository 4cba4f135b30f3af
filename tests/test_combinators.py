import pytest

from animengine.core.errors import MissingMotionError, MotionCycleError, RegistryFrozenError
from animengine.graph.tree import ObjectTree
from animengine.motion.base import Animation, FunctionMotion, Instant
from animengine.motion.combinators import Concurrently, Keyframe, Play, Sequence, Trigger, Wait, weighted
from animengine.motion.easing import Easing
from animengine.scene.registry import MotionRegistry
from animengine.scene.world import World


def make_world(registry=None):
    return World(ObjectTree(), registry or MotionRegistry())


class Recorder:
    """Collects (name, alpha) calls in evaluation order."""

    def __init__(self):
        self.calls = []

    def motion(self, name, duration=None):
        def fn(world, alpha):
            self.calls.append((name, alpha))
        motion = FunctionMotion(fn)
        if duration is not None:
            return motion.with_duration(duration)
        return motion

    def names(self):
        return [name for name, _ in self.calls]

    def alpha(self, name):
        return dict(self.calls)[name]


class Mark(Instant):
    def __init__(self, rec, name):
        self.rec = rec
        self.name = name

    def fire(self, world):
        self.rec.calls.append((self.name, 1.0))


# =============================================================================
# Sequence
# =============================================================================

def test_sequence_length_is_sum():
    rec = Recorder()
    seq = Sequence([rec.motion('a', 1.0), rec.motion('b', 3.0), Mark(rec, 'c')])
    assert seq.length(MotionRegistry()) == 4.0


def test_sequence_splits_alpha_by_duration():
    rec = Recorder()
    seq = Sequence([rec.motion('a', 2.0), rec.motion('b', 2.0)])

    seq.animate(make_world(), 0.25)
    assert rec.calls == [('a', 0.5)]

    rec.calls.clear()
    seq.animate(make_world(), 0.75)
    assert rec.calls == [('a', 1.0), ('b', 0.5)]


def test_sequence_does_not_fire_later_instants_early():
    rec = Recorder()
    seq = Sequence([rec.motion('a', 1.0), Mark(rec, 'b'), rec.motion('c', 1.0)])

    seq.animate(make_world(), 0.25)
    assert rec.names() == ['a']

    rec.calls.clear()
    seq.animate(make_world(), 0.5)
    assert rec.calls == [('a', 1.0), ('b', 1.0), ('c', 0.0)]


def test_zero_length_sequence_fires_everything_at_one():
    rec = Recorder()
    seq = Sequence([Mark(rec, 'a'), Mark(rec, 'b')])

    seq.animate(make_world(), 0.0)
    assert rec.calls == [('a', 1.0), ('b', 1.0)]


def test_empty_sequence_is_noop():
    seq = Sequence()
    seq.animate(make_world(), 0.5)
    assert seq.length(MotionRegistry()) == 0.0


# =============================================================================
# Concurrently
# =============================================================================

def test_concurrently_length_is_max():
    rec = Recorder()
    par = Concurrently([rec.motion('a', 1.0), rec.motion('b', 4.0)])
    assert par.length(MotionRegistry()) == 4.0


def test_concurrently_clamps_short_children():
    rec = Recorder()
    par = Concurrently([rec.motion('short', 1.0), rec.motion('long', 4.0), Mark(rec, 'now')])

    par.animate(make_world(), 0.5)
    assert rec.alpha('short') == 1.0
    assert rec.alpha('long') == 0.5
    assert rec.alpha('now') == 1.0

    rec.calls.clear()
    par.animate(make_world(), 0.125)
    assert rec.alpha('short') == 0.5
    assert rec.alpha('long') == 0.125


def test_concurrently_never_skips_children():
    rec = Recorder()
    par = Concurrently([rec.motion('a', 1.0), rec.motion('b', 2.0)])
    par.animate(make_world(), 0.0)
    assert rec.calls == [('a', 0.0), ('b', 0.0)]


# =============================================================================
# Keyframe / Trigger
# =============================================================================

def test_keyframe_skips_before_window_and_clamps_after():
    rec = Recorder()
    key = Keyframe(2.0, 3.0, 0.0, 1.0, rec.motion('inner'), span=5.0)
    assert key.length(MotionRegistry()) == 5.0

    key.animate(make_world(), 0.2)     # t = 1
    assert rec.calls == []

    key.animate(make_world(), 0.5)     # t = 2.5
    assert rec.calls == [('inner', 0.5)]

    rec.calls.clear()
    key.animate(make_world(), 1.0)     # t = 5
    assert rec.calls == [('inner', 1.0)]


def test_keyframe_scales_into_target_range():
    rec = Recorder()
    key = Keyframe(0.0, 1.0, 0.5, 1.0, rec.motion('inner'))
    key.animate(make_world(), 0.5)
    assert rec.calls == [('inner', 0.75)]


def test_zero_width_keyframe_is_immediate():
    rec = Recorder()
    key = Keyframe(2.0, 2.0, 0.0, 1.0, rec.motion('inner'), span=4.0)

    key.animate(make_world(), 0.25)    # t = 1
    assert rec.calls == []

    key.animate(make_world(), 0.5)     # t = 2
    assert rec.calls == [('inner', 1.0)]


def test_reversed_keyframe_window_is_rejected():
    with pytest.raises(ValueError):
        Keyframe(3.0, 2.0, 0.0, 1.0, Wait(1.0))


def test_trigger_is_a_level_condition():
    rec = Recorder()
    trig = Trigger(2.0, rec.motion('inner'), span=4.0)

    trig.animate(make_world(), 0.25)
    assert rec.calls == []

    for alpha in (0.5, 0.75, 1.0):
        trig.animate(make_world(), alpha)
    assert rec.calls == [('inner', 1.0)] * 3


# =============================================================================
# Registry references
# =============================================================================

def test_play_allows_forward_references():
    rec = Recorder()
    registry = MotionRegistry()
    root = registry.register(Sequence([Play(50), rec.motion('after', 1.0)]))
    registry.register(rec.motion('later', 2.0), motion_id=50)

    assert registry.duration(root) == 3.0

    world = make_world(registry)
    world.play_at(root, 0.5)
    assert rec.calls == [('later', 0.75)]


def test_shared_submotion_runs_for_each_reference():
    rec = Recorder()
    registry = MotionRegistry()
    shared = registry.register(rec.motion('shared', 1.0))
    root = registry.register(Sequence([Play(shared), Play(shared)]))

    make_world(registry).play(root)
    assert rec.calls == [('shared', 1.0), ('shared', 1.0)]


def test_registry_detects_self_containing_motions():
    registry = MotionRegistry()
    registry.register(Sequence([Play(1)]), motion_id=1)
    with pytest.raises(MotionCycleError):
        registry.duration(1)


def test_missing_motion_is_fatal():
    world = make_world()
    with pytest.raises(MissingMotionError):
        world.play(99)


def test_frozen_registry_rejects_registration():
    registry = MotionRegistry()
    registry.register(Wait(1.0))
    registry.freeze()
    with pytest.raises(RegistryFrozenError):
        registry.register(Wait(1.0))


def test_registry_allocates_after_reserved_ids():
    registry = MotionRegistry()
    registry.register(Wait(1.0), motion_id=10)
    assert registry.register(Wait(1.0)) == 11


def test_weighted_composition():
    rec = Recorder()
    registry = MotionRegistry()
    a = registry.register(rec.motion('a'))
    b = registry.register(rec.motion('b'))
    seq = weighted('sequence', [(a, 1.0), (b, 3.0)])

    assert seq.length(registry) == 4.0
    seq.animate(make_world(registry), 0.5)
    assert rec.calls == [('a', 1.0), ('b', 1.0 / 3.0)]

    with pytest.raises(ValueError):
        weighted('parallel', [(a, 1.0)])


# =============================================================================
# Animation / Wait
# =============================================================================

def test_animation_applies_easing_to_local_alpha():
    rec = Recorder()
    anim = Animation(rec.motion('eased'), 2.0, Easing.EASE_IN)
    anim.animate(make_world(), 0.5)
    assert rec.calls == [('eased', 0.25)]


def test_negative_durations_are_rejected():
    with pytest.raises(ValueError):
        Wait(-1.0)
    with pytest.raises(ValueError):
        Animation(Wait(0.0), -0.5)


def test_easing_parse():
    assert Easing.parse('EASE_OUT') is Easing.EASE_OUT
    with pytest.raises(ValueError):
        Easing.parse('bounce')
