import json

from animengine.core.errors import SceneDescriptionError
from animengine.core.signal import SignalBridge, SIGNAL_SCENE_ERROR, SIGNAL_SCENE_RELOADED
from animengine.scene.host import SceneHost


GOOD = {
    "objects": {"ball": {"type": "circle"}},
    "timeline": [
        {"type": "add", "object": "ball"},
        {"type": "wait", "duration": 2},
    ],
}

BAD = {
    "objects": {"ball": {"type": "circle"}},
    "timeline": [{"type": "teleport", "object": "ball"}],
}


def test_host_starts_with_null_scene():
    host = SceneHost()
    assert host.scene.length() == 0.0
    assert host.generation == 0
    assert host.snapshot_at(0.0).items == ()


def test_successful_reload_swaps_scene():
    host = SceneHost()
    assert host.reload(GOOD)

    assert host.scene.length() == 2.0
    assert host.generation == 1
    assert host.last_error is None
    assert host.snapshot_at(1.0).object_ids == (1,)


def test_failed_reload_keeps_last_good_scene():
    host = SceneHost()
    host.reload(GOOD)
    good_scene = host.scene

    assert not host.reload(BAD)
    assert host.scene is good_scene
    assert host.generation == 1
    assert isinstance(host.last_error, SceneDescriptionError)
    assert host.last_error.location == "timeline[0].type"

    # A later good reload clears the error
    assert host.reload(GOOD)
    assert host.last_error is None
    assert host.generation == 2


def test_reload_signals():
    bridge = SignalBridge()
    reloaded = []
    errors = []
    bridge.connect(SIGNAL_SCENE_RELOADED, reloaded.append)
    bridge.connect(SIGNAL_SCENE_ERROR, errors.append)

    host = SceneHost(bridge=bridge)
    host.reload(GOOD)
    host.reload(BAD)

    assert reloaded == [host.scene]
    assert len(errors) == 1
    assert errors[0] is host.last_error


def test_reload_file(tmp_path):
    path = tmp_path / "scene.json"
    path.write_text(json.dumps(GOOD))

    host = SceneHost()
    assert host.reload_file(str(path))
    assert host.scene.length() == 2.0


def test_reload_missing_file_is_reported():
    host = SceneHost()
    assert not host.reload_file("/nonexistent/scene.json")
    assert host.last_error.location == "/nonexistent/scene.json"
    assert host.scene.length() == 0.0


def test_invalid_keyframe_span_keeps_last_good_scene():
    bad_span = {
        "objects": {"ball": {"type": "circle"}},
        "timeline": [
            {"type": "add", "object": "ball"},
            {"type": "keyframe", "window": [0, 1], "span": -1, "step": {"type": "wait", "duration": 1}},
        ],
    }
    host = SceneHost()
    host.reload(GOOD)
    good_scene = host.scene

    assert not host.reload(bad_span)
    assert host.scene is good_scene
    assert host.last_error.location == "timeline[1].span"
