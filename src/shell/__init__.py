"""Imperative Shell - I/O and side effects.

This module contains all code that interacts with external systems:
- USGS feed client (HTTP)
- Map surface (tile fetching and image rendering)
- Configuration loading (environment/files)

Keep this layer thin and simple. All business logic should be in core.
"""

from src.shell.feed_client import FeedClient
from src.shell.map_surface import MapSurface, StaticMapSurface
from src.shell.config_loader import load_config, Config

__all__ = [
    "FeedClient",
    "MapSurface",
    "StaticMapSurface",
    "load_config",
    "Config",
]
