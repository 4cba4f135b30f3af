import math
from dataclasses import FrozenInstanceError

import pytest

from animengine.core.math2d import Mat3, Vec2
from animengine.graph.geometry import Rect
from animengine.graph.transform import Transform


def test_identity_leaves_points_alone():
    p = Vec2(3.0, -4.0)
    assert Transform.identity().apply(p) == p


def test_apply_order_anchor_scale_rotate_translate():
    t = Transform(position=Vec2(10.0, 0.0), rotation=math.pi / 2, scale=2.0, anchor=Vec2(1.0, 0.0))

    # (2,0) - anchor = (1,0); scaled (2,0); rotated 90 deg (0,2); moved (10,2)
    assert t.apply(Vec2(2.0, 0.0)).is_close(Vec2(10.0, 2.0))
    # The anchor itself lands on the position
    assert t.apply(Vec2(1.0, 0.0)).is_close(Vec2(10.0, 0.0))


def test_and_then_matches_nested_application():
    parent = Transform(position=Vec2(5.0, 1.0), rotation=0.3, scale=2.0, anchor=Vec2(1.0, 1.0))
    child = Transform(position=Vec2(-2.0, 4.0), rotation=-1.1, scale=0.5, anchor=Vec2(3.0, 0.0))
    p = Vec2(7.0, -3.0)

    composed = parent.and_then(child)
    assert composed.apply(p).is_close(parent.apply(child.apply(p)))


def test_and_then_is_associative():
    a = Transform(position=Vec2(1.0, 2.0), rotation=0.5, scale=1.5, anchor=Vec2(0.5, 0.0))
    b = Transform(position=Vec2(-3.0, 0.0), rotation=1.0, scale=0.25, anchor=Vec2(2.0, 2.0))
    c = Transform(position=Vec2(4.0, 4.0), rotation=-0.75, scale=3.0, anchor=Vec2(1.0, -1.0))

    left = a.and_then(b).and_then(c)
    right = a.and_then(b.and_then(c))
    assert left.is_close(right)


def test_identity_is_neutral_for_and_then():
    t = Transform(position=Vec2(3.0, 3.0), rotation=0.2, scale=2.0, anchor=Vec2(1.0, 0.0))
    assert Transform.identity().and_then(t).is_close(t)

    p = Vec2(9.0, -1.0)
    assert t.and_then(Transform.identity()).apply(p).is_close(t.apply(p))


def test_matrix_agrees_with_apply():
    t = Transform(position=Vec2(10.0, -5.0), rotation=0.7, scale=1.25, anchor=Vec2(2.0, 3.0))
    p = Vec2(-4.0, 6.0)
    assert t.to_mat3().transform_point(p).is_close(t.apply(p))


def test_matrix_composition_matches_and_then():
    parent = Transform(position=Vec2(3.0, 1.0), rotation=0.4, scale=2.0)
    child = Transform(position=Vec2(-1.0, 2.0), rotation=-1.1, scale=0.5, anchor=Vec2(1.0, 1.0))
    p = Vec2(2.5, -0.5)

    combined = parent.to_mat3() @ child.to_mat3()
    assert combined.transform_point(p).is_close(parent.and_then(child).apply(p))
    assert Mat3.identity() @ combined == combined


def test_matrix_column_major_layout():
    m = Transform.at(7.0, 9.0).to_mat3()
    assert m.column_major() == (1.0, 0.0, 0.0, 0.0, 1.0, 0.0, 7.0, 9.0, 1.0)


def test_map_rect_rotated_quarter_turn():
    t = Transform(rotation=math.pi / 2)
    mapped = t.map_rect(Rect(0.0, 0.0, 2.0, 1.0))
    assert mapped.is_close(Rect(-1.0, 0.0, 0.0, 2.0))


def test_map_rect_keeps_empty_box_empty():
    assert Transform.at(5.0, 5.0).map_rect(Rect.nothing()).is_empty


def test_lerp_interpolates_every_field():
    start = Transform(position=Vec2(0.0, 0.0), rotation=0.0, scale=1.0, anchor=Vec2(0.0, 0.0))
    end = Transform(position=Vec2(10.0, 4.0), rotation=2.0, scale=3.0, anchor=Vec2(2.0, 2.0))

    mid = start.lerp(end, 0.5)
    assert mid.position == Vec2(5.0, 2.0)
    assert mid.rotation == 1.0
    assert mid.scale == 2.0
    assert mid.anchor == Vec2(1.0, 1.0)


def test_field_updates_return_new_transforms():
    t = Transform.at(1.0, 2.0)
    moved = t.with_position(Vec2(3.0, 4.0))

    assert t.position == Vec2(1.0, 2.0)
    assert moved.position == Vec2(3.0, 4.0)
    assert t.with_scale(2.0).scale == 2.0
    assert t.with_rotation(1.5).rotation == 1.5
    assert t.with_anchor(Vec2(1.0, 1.0)).anchor == Vec2(1.0, 1.0)


def test_rect_union_identity_and_center():
    box = Rect(0.0, 0.0, 4.0, 2.0)
    assert Rect.nothing().union(box) == box
    assert box.center == Vec2(2.0, 1.0)
    assert box.width == 4.0
    assert box.height == 2.0


def test_rect_from_points():
    box = Rect.from_points([(1.0, 5.0), (-2.0, 3.0), (4.0, -1.0)])
    assert box == Rect(-2.0, -1.0, 4.0, 5.0)
    assert Rect.from_points([]).is_empty


def test_transform_is_frozen():
    t = Transform()
    with pytest.raises(FrozenInstanceError):
        t.scale = 2.0
