from animengine.core.ids import Variable
from animengine.core.math2d import Vec2
from animengine.graph.drawables import Circle, Color, Fill, Material, Rectangle, Stroke
from animengine.graph.object import Object
from animengine.graph.transform import Transform
from animengine.graph.tree import ObjectTree
from animengine.motion.dynamics import DynamicObject, DynamicTransform, Literal, VariableRef
from animengine.motion.effects import (
    AddObject, AnimateTransform, FadeIn, Move, MoveTo, SetTransform, SetVariable,
)
from animengine.scene.registry import MotionRegistry
from animengine.scene.world import World


def make_world():
    return World(ObjectTree(), MotionRegistry())


def red_circle(x=0.0, y=0.0):
    return Object.model(Circle(radius=5.0), Material.filled(Color.red()), Transform.at(x, y))


def test_add_object_inserts_rooted_copy():
    template = red_circle(3.0, 4.0)
    world = make_world()
    AddObject(1, template).animate(world, 0.0)

    inserted = world.objects.get(1)
    assert world.objects.rooted_ids() == [1]
    assert inserted.transform.position == Vec2(3.0, 4.0)

    inserted.transform = Transform.at(100.0, 100.0)
    assert template.transform.position == Vec2(3.0, 4.0)


def test_add_object_each_pass_starts_from_template():
    add = AddObject(1, red_circle())
    move = Move(1, (0, 0), (10, 0))

    first = make_world()
    add.animate(first, 1.0)
    move.animate(first, 1.0)

    second = make_world()
    add.animate(second, 1.0)
    assert second.objects.get(1).transform.position == Vec2(0.0, 0.0)


def test_add_object_unrooted():
    world = make_world()
    AddObject(1, red_circle(), rooted=False).animate(world, 1.0)
    assert 1 in world.objects
    assert world.objects.rooted_ids() == []


def test_add_object_with_dynamic_transform():
    template = DynamicObject(
        Object.model(Circle(radius=1.0)).kind,
        DynamicTransform(
            position=Literal(Vec2(0.0, 0.0)),
            rotation=Literal(0.0),
            scale=VariableRef(Variable('size')),
            anchor=Literal(Vec2.zero()),
        ),
    )
    world = make_world()
    world.update_variable(Variable('size'), 4.0)
    AddObject(1, template).animate(world, 1.0)

    assert world.objects.get(1).transform.scale == 4.0


def test_animate_transform_lerps_between_endpoints():
    world = make_world()
    AddObject(1, red_circle()).animate(world, 1.0)
    AnimateTransform(1, Transform.at(0.0, 0.0), Transform(position=Vec2(10.0, 0.0), scale=3.0)).animate(world, 0.5)

    t = world.objects.get(1).transform
    assert t.position == Vec2(5.0, 0.0)
    assert t.scale == 2.0


def test_move_keeps_other_fields():
    world = make_world()
    world.objects.add(1, Object.model(Circle(), transform=Transform(rotation=0.5)), rooted=True)
    Move(1, (0, 0), (8, 4)).animate(world, 0.25)

    t = world.objects.get(1).transform
    assert t.position == Vec2(2.0, 1.0)
    assert t.rotation == 0.5


def test_move_to_starts_from_current_position():
    world = make_world()
    AddObject(1, red_circle(4.0, 0.0)).animate(world, 1.0)
    MoveTo(1, (8, 8)).animate(world, 0.5)
    assert world.objects.get(1).transform.position == Vec2(6.0, 4.0)


def test_set_transform():
    world = make_world()
    AddObject(1, red_circle()).animate(world, 1.0)
    SetTransform(1, Transform.at(7.0, 7.0)).animate(world, 0.0)
    assert world.objects.get(1).transform.position == Vec2(7.0, 7.0)


def test_fade_in_scales_alpha_recursively():
    material = Material(fill=Fill(Color(1.0, 0.0, 0.0, 1.0)), stroke=Stroke(Color(0.0, 0.0, 1.0, 0.5), 2.0))
    world = make_world()
    world.objects.add(2, Object.model(Circle(), material))
    world.objects.add(3, Object.model(Rectangle(), material))
    world.objects.add(1, Object.group([2, 3]), rooted=True)

    FadeIn(1).animate(world, 0.5)

    for object_id in (2, 3):
        faded = world.objects.get(object_id).kind.material
        assert faded.fill.color.a == 0.5
        assert faded.stroke.color.a == 0.25
        assert faded.stroke.width == 2.0

    # The shared source material is untouched
    assert material.fill.color.a == 1.0


def test_fade_in_at_one_is_identity():
    world = make_world()
    AddObject(1, red_circle()).animate(world, 1.0)
    FadeIn(1).animate(world, 1.0)
    assert world.objects.get(1).kind.material == Material.filled(Color.red())


def test_set_variable_outright_and_interpolated():
    world = make_world()
    v = Variable('radius')

    SetVariable(v, 10.0).animate(world, 0.0)
    assert world.get_variable(v) == 10.0

    SetVariable(v, 10.0, start=2.0).animate(world, 0.5)
    assert world.get_variable(v) == 6.0


def test_set_variable_from_another_variable():
    world = make_world()
    world.update_variable(Variable('a'), 3.0)
    SetVariable(Variable('b'), Variable('a')).animate(world, 1.0)
    assert world.get_variable(Variable('b')) == 3.0
