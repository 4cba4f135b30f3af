# animengine/scene/registry.py
"""
MotionRegistry - flat id -> Motion map.

Combinators reference registered motions by id (see Play), which is what
lets a Sequence name a child that is registered later and lets several
parents share one sub-motion. The registry is append-only while authoring
and frozen once a Scene is finished.
"""

from __future__ import annotations
from typing import Dict, Iterator, Optional, Set
import logging

from animengine.core.errors import MissingMotionError, MotionCycleError, RegistryFrozenError
from animengine.core.ids import IdAllocator, MotionId
from animengine.motion.base import Motion

logger = logging.getLogger(__name__)


class MotionRegistry:

    def __init__(self, allocator: IdAllocator = None):
        self._motions: Dict[MotionId, Motion] = {}
        self._allocator = allocator or IdAllocator()
        self._resolving: Set[MotionId] = set()
        self._frozen = False

    def __contains__(self, motion_id: MotionId) -> bool:
        return motion_id in self._motions

    def __len__(self) -> int:
        return len(self._motions)

    def __iter__(self) -> Iterator[MotionId]:
        return iter(self._motions)

    @property
    def frozen(self) -> bool:
        return self._frozen

    def register(self, motion: Motion, motion_id: Optional[MotionId] = None) -> MotionId:
        """Store a motion, allocating an id unless one is supplied."""
        if self._frozen:
            raise RegistryFrozenError("Motion registry is frozen")
        if motion_id is None:
            motion_id = self._allocator.next()
        elif isinstance(motion_id, int):
            self._allocator.reserve(motion_id)

        self._motions[motion_id] = motion
        logger.debug(f"Registered motion {motion_id!r}: {motion!r}")
        return motion_id

    def get(self, motion_id: MotionId) -> Motion:
        try:
            return self._motions[motion_id]
        except KeyError:
            raise MissingMotionError(motion_id) from None

    def duration(self, motion_id: MotionId) -> float:
        """Length of a registered motion, following Play references."""
        if motion_id in self._resolving:
            raise MotionCycleError(f"Motion {motion_id!r} contains itself")
        self._resolving.add(motion_id)
        try:
            return self.get(motion_id).length(self)
        finally:
            self._resolving.discard(motion_id)

    def freeze(self):
        self._frozen = True

    def __repr__(self) -> str:
        state = "frozen" if self._frozen else "open"
        return f"MotionRegistry(motions={len(self._motions)}, {state})"
