import pytest

from animengine.core.math2d import Vec2
from animengine.core.signal import SignalBridge, SIGNAL_PAUSE, SIGNAL_PLAY, SIGNAL_SEEK
from animengine.scene.builder import SceneBuilder
from animengine.scene.scene import Scene
from animengine.time.transport import Transport, TransportState


def slide_scene(length=4.0):
    builder = SceneBuilder()
    ball = builder.circle(radius=5).add()
    builder.animate(ball, length, lambda a: a.translate((length * 10, 0)))
    return builder.finish()


def test_transport_starts_paused_at_zero():
    transport = Transport(slide_scene())
    state = transport.state()

    assert state == TransportState(playing=False, time=0.0, length=4.0, speed=1.0, loop=False)
    assert state.progress == 0.0
    assert not state.at_end


def test_advance_only_moves_while_playing():
    transport = Transport(slide_scene())
    assert transport.advance(1.0) == 0.0

    transport.play()
    assert transport.advance(1.0) == 1.0
    assert transport.advance(0.5) == 1.5


def test_speed_scales_advance():
    transport = Transport(slide_scene(), speed=2.0)
    transport.play()
    assert transport.advance(1.0) == 2.0

    transport.set_speed(0.5)
    assert transport.advance(1.0) == 2.5

    with pytest.raises(ValueError):
        transport.set_speed(0.0)


def test_playback_stops_at_end():
    transport = Transport(slide_scene())
    transport.play()
    transport.advance(10.0)

    assert transport.time == 4.0
    assert not transport.playing
    assert transport.state().at_end

    # Playing again from the end restarts
    transport.play()
    assert transport.time == 0.0


def test_looping_wraps_around():
    transport = Transport(slide_scene(), loop=True)
    transport.play()
    assert transport.advance(5.0) == 1.0
    assert transport.playing


def test_seek_clamps_to_scene():
    transport = Transport(slide_scene())
    transport.seek(-2.0)
    assert transport.time == 0.0
    transport.seek(9.0)
    assert transport.time == 4.0


def test_frame_renders_current_time():
    transport = Transport(slide_scene())
    transport.seek(2.0)

    frame = transport.frame()
    assert frame.time == 2.0
    assert frame.item(1).transform.position == Vec2(20.0, 0.0)


def test_toggle_and_stop():
    transport = Transport(slide_scene())
    transport.toggle()
    assert transport.playing
    transport.advance(1.0)

    transport.stop()
    assert not transport.playing
    assert transport.time == 0.0


def test_set_scene_clamps_playhead():
    transport = Transport(slide_scene(4.0))
    transport.seek(3.0)
    transport.set_scene(slide_scene(2.0))
    assert transport.time == 2.0

    transport.set_scene(Scene.null())
    assert transport.time == 0.0
    assert transport.state().progress == 1.0


def test_transport_signals():
    bridge = SignalBridge()
    events = []
    bridge.connect(SIGNAL_PLAY, lambda t: events.append(('play', t)))
    bridge.connect(SIGNAL_PAUSE, lambda t: events.append(('pause', t)))
    bridge.connect(SIGNAL_SEEK, lambda t: events.append(('seek', t)))

    transport = Transport(slide_scene(), bridge=bridge)
    transport.play()
    transport.advance(1.0)
    transport.pause()
    transport.seek(3.0)

    assert events == [('play', 0.0), ('pause', 1.0), ('seek', 3.0)]


def test_invalid_speed_is_rejected():
    with pytest.raises(ValueError):
        Transport(Scene.null(), speed=-1.0)
