import pytest

from animengine.core.config import EngineConfig
from animengine.core.ids import IdAllocator
from animengine.core.signal import SignalBridge, SignalEmitter

def test_connect_and_emit():
    bridge = SignalBridge()
    received = []
    bridge.connect('ping', lambda value: received.append(value))

    bridge.emit('ping', 1)
    bridge.emit('pong', 2)

    assert received == [1]
    assert bridge.is_connected('ping')
    assert not bridge.is_connected('pong')

def test_disconnect():
    bridge = SignalBridge()
    received = []
    connection = bridge.connect('ping', received.append)
    connection.disconnect()

    bridge.emit('ping', 1)
    assert received == []

def test_disconnect_during_emit_is_deferred():
    bridge = SignalBridge()
    received = []
    connections = []

    def first(value):
        received.append(('first', value))
        connections[1].disconnect()

    connections.append(bridge.connect('ping', first))
    connections.append(bridge.connect('ping', lambda value: received.append(('second', value))))

    bridge.emit('ping', 1)
    bridge.emit('ping', 2)

    assert received == [('first', 1), ('second', 1), ('first', 2)]

def test_block_and_unblock():
    bridge = SignalBridge()
    received = []
    bridge.connect('ping', received.append)

    bridge.block('ping')
    bridge.emit('ping', 1)
    bridge.unblock('ping')
    bridge.emit('ping', 2)

    assert received == [2]

def test_handler_errors_do_not_stop_other_handlers():
    bridge = SignalBridge()
    received = []

    def broken(value):
        raise RuntimeError("boom")

    bridge.connect('ping', broken)
    bridge.connect('ping', received.append)
    bridge.emit('ping', 1)

    assert received == [1]

def test_emitter_without_bridge_is_silent():
    emitter = SignalEmitter()
    emitter.emit('ping', 1)
    assert emitter.connect('ping', print) is None

def test_id_allocator_reserve():
    ids = IdAllocator()
    assert ids.next() == 1
    ids.reserve(5)
    assert ids.next() == 6
    ids.reserve(2)
    assert ids.next() == 7

def test_config_from_dict():
    config = EngineConfig.from_dict({"render_size": [640, 480], "unit_grid_height": 500})
    assert config.render_size == (640.0, 480.0)
    assert config.unit_grid_height == 500

    with pytest.raises(ValueError):
        EngineConfig.from_dict({"frame_rate": 30})
    with pytest.raises(ValueError):
        EngineConfig(render_size=(0, 100))

def test_disconnect_all_detaches_connections():
    bridge = SignalBridge()
    received = []
    connection = bridge.connect('ping', received.append)
    bridge.connect('pong', received.append)

    bridge.disconnect_all('ping')
    assert not connection.connected
    assert bridge.is_connected('pong')

    bridge.disconnect_all()
    bridge.emit('pong', 1)
    assert received == []
