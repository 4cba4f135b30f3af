# animengine/time/transport.py
"""
Transport - Playback state and control over a Scene.

The transport only owns a playhead. Every frame is rendered from scratch by
the Scene, so seeking anywhere is just moving the playhead.
"""

from __future__ import annotations
from dataclasses import dataclass
import logging

from animengine.core.signal import SignalBridge, SignalEmitter, SIGNAL_PLAY, SIGNAL_PAUSE, SIGNAL_SEEK
from animengine.graph.snapshot import Snapshot
from animengine.scene.scene import Scene

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TransportState:
    """Immutable snapshot of transport state."""
    playing: bool
    time: float
    length: float
    speed: float
    loop: bool

    @property
    def progress(self) -> float:
        if self.length == 0:
            return 1.0
        return self.time / self.length

    @property
    def at_end(self) -> bool:
        return self.time >= self.length


class Transport(SignalEmitter):
    """Mutable transport control."""

    def __init__(self, scene: Scene, speed: float = 1.0, loop: bool = False,
                 bridge: SignalBridge = None):
        if speed <= 0:
            raise ValueError(f"Playback speed must be positive, got {speed}")
        self.scene = scene
        self.playing: bool = False
        self.time: float = 0.0
        self.speed: float = speed
        self.loop: bool = loop
        if bridge is not None:
            self.bind_bridge(bridge)

    @property
    def length(self) -> float:
        return self.scene.length()

    def set_scene(self, scene: Scene):
        """Swap scenes (e.g. after a reload) keeping the playhead where possible."""
        self.scene = scene
        self.time = min(self.time, self.length)

    def set_speed(self, speed: float):
        if speed <= 0:
            raise ValueError(f"Playback speed must be positive, got {speed}")
        self.speed = speed

    # -------------------------------------------------------------------------
    # Control
    # -------------------------------------------------------------------------

    def play(self):
        if not self.playing:
            if self.time >= self.length and not self.loop:
                self.time = 0.0
            self.playing = True
            self.emit(SIGNAL_PLAY, self.time)

    def pause(self):
        if self.playing:
            self.playing = False
            self.emit(SIGNAL_PAUSE, self.time)

    def toggle(self):
        if self.playing:
            self.pause()
        else:
            self.play()

    def stop(self):
        self.pause()
        self.seek(0.0)

    def seek(self, time: float):
        self.time = min(max(time, 0.0), self.length)
        self.emit(SIGNAL_SEEK, self.time)

    def advance(self, dt: float) -> float:
        """Move the playhead by dt seconds of wall time; returns the new time."""
        if not self.playing or dt <= 0:
            return self.time

        length = self.length
        time = self.time + dt * self.speed
        if time >= length:
            if self.loop and length > 0:
                time = time % length
            else:
                self.time = length
                self.pause()
                return self.time
        self.time = time
        return self.time

    # -------------------------------------------------------------------------
    # Output
    # -------------------------------------------------------------------------

    def frame(self) -> Snapshot:
        return self.scene.snapshot_at(self.time)

    def state(self) -> TransportState:
        return TransportState(
            playing=self.playing,
            time=self.time,
            length=self.length,
            speed=self.speed,
            loop=self.loop,
        )

    def __repr__(self) -> str:
        mode = "playing" if self.playing else "paused"
        return f"Transport({mode}, t={self.time:g}/{self.length:g})"
