# animengine/core/ids.py
"""
Deterministic id allocation for objects and motions.

Each SceneBuilder owns its own allocators, so building the same scene twice
yields the same ids and snapshot comparisons stay reproducible.
"""

from __future__ import annotations
import threading
from dataclasses import dataclass
from typing import Hashable

# Ids are opaque to the engine; allocators hand out ints, merged sub-trees
# produce (root, id) tuples.
ObjectId = Hashable
MotionId = Hashable

ROOT_OBJECT_ID = 0


@dataclass(frozen=True)
class Variable:
    """Named numeric slot in a World's variable store."""
    name: str

    def __repr__(self) -> str:
        return f"Variable({self.name!r})"


class IdAllocator:
    """Monotonic counter. Thread-safe."""

    def __init__(self, start: int = 1):
        self._lock = threading.Lock()
        self._next = start

    def next(self) -> int:
        with self._lock:
            value = self._next
            self._next += 1
            return value

    def reserve(self, value: int):
        """Make sure a caller-supplied id is never handed out later."""
        with self._lock:
            if value >= self._next:
                self._next = value + 1

    @property
    def peek(self) -> int:
        return self._next
