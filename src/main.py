"""Local Entry Point.

Loads configuration, mounts a QuakeView against the live feed, and
optionally writes a snapshot of the map.
"""

import logging
import os
from pathlib import Path

from src.core.formatter import format_earthquake_summary
from src.core.severity import top_n
from src.core.view_model import FetchStatus
from src.shell.config_loader import load_config, load_config_from_env
from src.shell.map_surface import StaticMapSurface
from src.view import QuakeView


# Configure logging
log_level = os.environ.get("LOG_LEVEL", "INFO").upper()
logging.basicConfig(
    level=getattr(logging, log_level, logging.INFO),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


def _get_config():
    """Load configuration from file or environment."""
    config_path = os.environ.get("CONFIG_PATH")

    if config_path:
        return load_config(config_path)
    elif os.environ.get("FEED_URL"):
        # Simple env-based config
        return load_config_from_env()
    else:
        # Try default config path
        return load_config()


def run(snapshot_path: str | Path | None = None) -> QuakeView:
    """Mount a view, fetch once, and log what it shows.

    Args:
        snapshot_path: Where to write a PNG of the map (optional)

    Returns:
        The mounted view
    """
    config = _get_config()
    view = QuakeView(config)
    state = view.mount()

    if state.status == FetchStatus.FAILED:
        logger.error("View failed: %s", state.message)
        return view

    logger.info("Loaded %d earthquakes", len(state.earthquakes))
    for ranked in top_n(state.earthquakes, config.list_size):
        logger.info("[%s] %s", ranked.tier.value, format_earthquake_summary(ranked.earthquake))

    if state.earthquakes:
        view.select_event(state.earthquakes[0].id)

    if snapshot_path and isinstance(view.map_surface, StaticMapSurface):
        view.map_surface.settle()
        result = view.map_surface.render_snapshot()
        if result.success and result.image_bytes:
            Path(snapshot_path).write_bytes(result.image_bytes)
            logger.info("Wrote map snapshot to %s", snapshot_path)

    return view


# For local testing
if __name__ == "__main__":
    run(os.environ.get("SNAPSHOT_PATH"))
