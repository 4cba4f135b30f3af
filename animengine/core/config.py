# animengine/core/config.py
"""
Engine configuration and logging setup.
"""

from __future__ import annotations
from dataclasses import dataclass, fields
from typing import Tuple
import logging


@dataclass
class EngineConfig:
    # Render target size used when a pass does not supply one.
    render_size: Tuple[float, float] = (1280.0, 720.0)
    # Scene units spanning the render height; Pixels are scaled by it.
    unit_grid_height: float = 1000.0
    log_level: str = "WARNING"

    def __post_init__(self):
        w, h = self.render_size
        if w <= 0 or h <= 0:
            raise ValueError(f"Invalid render size: {self.render_size}")
        if self.unit_grid_height <= 0:
            raise ValueError(f"Invalid unit grid height: {self.unit_grid_height}")
        self.render_size = (float(w), float(h))

    @staticmethod
    def from_dict(data: dict) -> EngineConfig:
        known = {f.name for f in fields(EngineConfig)}
        unknown = set(data) - known
        if unknown:
            raise ValueError(f"Unknown config keys: {sorted(unknown)}")
        kwargs = dict(data)
        if 'render_size' in kwargs:
            kwargs['render_size'] = tuple(kwargs['render_size'])
        return EngineConfig(**kwargs)


DEFAULT_CONFIG = EngineConfig()


def configure_logging(level: str = None, config: EngineConfig = None):
    """Install a basic handler for the animengine loggers."""
    if level is None:
        level = (config or DEFAULT_CONFIG).log_level
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.WARNING),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    logging.getLogger("animengine").setLevel(level.upper())
