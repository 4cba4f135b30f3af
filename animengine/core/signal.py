# animengine/core/signal.py
"""
Named-signal hub for authoring and playback notifications.

Builders, the scene host and the transport announce what they did here so
tooling can follow along. Evaluation passes never emit; a render stays free
of side effects outside its World.
"""

from __future__ import annotations
import itertools
import logging
from typing import Callable, Dict, List, Optional, Set

logger = logging.getLogger(__name__)

# =============================================================================
# Signal Names
# =============================================================================

# Authoring
SIGNAL_OBJECT_REGISTERED = 'object_registered'      # (object_id,)
SIGNAL_MOTION_REGISTERED = 'motion_registered'      # (motion_id, motion)
SIGNAL_SCENE_FINISHED = 'scene_finished'            # (scene,)

# Reload
SIGNAL_SCENE_RELOADED = 'scene_reloaded'            # (scene,)
SIGNAL_SCENE_ERROR = 'scene_error'                  # (error,)

# Transport
SIGNAL_PLAY = 'play'                                # (time,)
SIGNAL_PAUSE = 'pause'                              # (time,)
SIGNAL_SEEK = 'seek'                                # (time,)


class Connection:
    """Returned by connect(); call disconnect() to stop receiving."""

    __slots__ = ('signal', 'handler', '_bridge', '_token')

    def __init__(self, signal: str, handler: Callable, bridge: SignalBridge, token: int):
        self.signal = signal
        self.handler = handler
        self._bridge = bridge
        self._token = token

    @property
    def connected(self) -> bool:
        return self._bridge is not None

    def disconnect(self):
        if self._bridge is not None:
            self._bridge._drop(self)
            self._bridge = None


class SignalBridge:
    """
    Routes emitted signals to connected handlers in connection order.

    An emit works on the handler list as it stood when the emit began, so
    handlers that disconnect others (or themselves) only affect later emits.
    A failing handler is logged and the remaining handlers still run.
    """

    def __init__(self):
        self._slots: Dict[str, List[Connection]] = {}
        self._blocked: Set[str] = set()
        self._tokens = itertools.count()

    def connect(self, signal: str, handler: Callable) -> Connection:
        conn = Connection(signal, handler, self, next(self._tokens))
        self._slots.setdefault(signal, []).append(conn)
        return conn

    def emit(self, signal: str, *args, **kwargs):
        if signal in self._blocked:
            return
        for conn in tuple(self._slots.get(signal, ())):
            try:
                conn.handler(*args, **kwargs)
            except Exception:
                logger.exception("Handler for signal %r failed", signal)

    def is_connected(self, signal: str) -> bool:
        return bool(self._slots.get(signal))

    def disconnect_all(self, signal: str = None):
        names = [signal] if signal is not None else list(self._slots)
        for name in names:
            for conn in self._slots.pop(name, []):
                conn._bridge = None

    # -------------------------------------------------------------------------
    # Blocking
    # -------------------------------------------------------------------------

    def block(self, signal: str):
        self._blocked.add(signal)

    def unblock(self, signal: str):
        self._blocked.discard(signal)

    def _drop(self, conn: Connection):
        live = self._slots.get(conn.signal)
        if live is None:
            return
        live[:] = [c for c in live if c._token != conn._token]
        if not live:
            del self._slots[conn.signal]


class SignalEmitter:
    """Mixin for components that may or may not be wired to a bridge."""

    _bridge: Optional[SignalBridge] = None

    def bind_bridge(self, bridge: Optional[SignalBridge]):
        self._bridge = bridge

    def emit(self, signal: str, *args, **kwargs):
        if self._bridge is not None:
            self._bridge.emit(signal, *args, **kwargs)

    def connect(self, signal: str, handler: Callable) -> Optional[Connection]:
        if self._bridge is None:
            return None
        return self._bridge.connect(signal, handler)
