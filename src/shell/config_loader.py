"""Configuration Loader - Imperative Shell.

This module handles loading configuration from YAML files and
environment variables. All I/O is contained here.

The Config model is defined in src/core/config.py to avoid information
leakage between layers.
"""

import logging
import os
from pathlib import Path
from typing import Any

import yaml

from src.core.config import Config, validate_config


logger = logging.getLogger(__name__)


DEFAULT_CONFIG_PATH = "config/config.yaml"


def _parse_center(data: Any) -> tuple[float, float]:
    """Parse a map center from config data.

    Accepts either {latitude, longitude} or a [lat, lon] pair.
    """
    if isinstance(data, dict):
        return (float(data["latitude"]), float(data["longitude"]))
    lat, lon = data
    return (float(lat), float(lon))


def load_config_from_dict(data: dict[str, Any]) -> Config:
    """Load configuration from a dictionary.

    Pure function. Missing keys fall back to Config defaults.

    Args:
        data: Configuration dictionary

    Returns:
        Parsed Config object
    """
    defaults = Config()

    center = defaults.default_center
    if "default_center" in data:
        center = _parse_center(data["default_center"])

    return Config(
        feed_url=str(data.get("feed_url", defaults.feed_url)),
        request_timeout_seconds=int(
            data.get("request_timeout_seconds", defaults.request_timeout_seconds)
        ),
        list_size=int(data.get("list_size", defaults.list_size)),
        narrow_breakpoint_px=int(data.get("narrow_breakpoint_px", defaults.narrow_breakpoint_px)),
        default_center=center,
        default_zoom=int(data.get("default_zoom", defaults.default_zoom)),
        fly_to_zoom=int(data.get("fly_to_zoom", defaults.fly_to_zoom)),
        fly_duration_seconds=float(data.get("fly_duration_seconds", defaults.fly_duration_seconds)),
        marker_size_px=int(data.get("marker_size_px", defaults.marker_size_px)),
        snapshot_width=int(data.get("snapshot_width", defaults.snapshot_width)),
        snapshot_height=int(data.get("snapshot_height", defaults.snapshot_height)),
    )


def _log_validation(config: Config) -> None:
    result = validate_config(config)
    for error in result.errors:
        if error.severity == "warning":
            logger.warning("Config warning in %s: %s", error.field, error.message)
        else:
            logger.error("Config error in %s: %s", error.field, error.message)


def load_config(config_path: str | Path | None = None) -> Config:
    """Load configuration from a YAML file.

    This method performs file I/O.

    Args:
        config_path: Path to YAML config file.
                    If None, uses CONFIG_PATH env var or default.

    Returns:
        Parsed Config object

    Raises:
        yaml.YAMLError: If config file is invalid YAML
    """
    if config_path is None:
        config_path = os.environ.get("CONFIG_PATH", DEFAULT_CONFIG_PATH)

    path = Path(config_path)

    logger.info("Loading configuration from %s", path)

    if not path.exists():
        logger.warning("Config file not found: %s, using defaults", path)
        return Config()

    with open(path, "r") as f:
        data = yaml.safe_load(f)

    if data is None:
        logger.warning("Config file is empty, using defaults")
        return Config()

    config = load_config_from_dict(data)
    _log_validation(config)

    logger.info(
        "Loaded config: feed %s, list size %d",
        config.feed_url,
        config.list_size,
    )

    return config


def load_config_from_env() -> Config:
    """Load configuration from environment variables.

    Useful for quick local runs without a YAML file.

    Environment variables:
        FEED_URL: GeoJSON feed to fetch
        REQUEST_TIMEOUT: Request timeout in seconds
        LIST_SIZE: Number of events in the list panel
        NARROW_BREAKPOINT_PX: Width below which the sidebar collapses

    Returns:
        Config object from environment
    """
    data: dict[str, Any] = {}

    env_keys = {
        "FEED_URL": "feed_url",
        "REQUEST_TIMEOUT": "request_timeout_seconds",
        "LIST_SIZE": "list_size",
        "NARROW_BREAKPOINT_PX": "narrow_breakpoint_px",
    }
    for env_name, key in env_keys.items():
        value = os.environ.get(env_name)
        if value:
            data[key] = value

    config = load_config_from_dict(data)
    _log_validation(config)

    return config
