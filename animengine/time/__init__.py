# animengine/time/__init__.py
"""Time module - playback transport."""

from .transport import (
    Transport,
    TransportState,
)

__all__ = [
    'Transport',
    'TransportState',
]
