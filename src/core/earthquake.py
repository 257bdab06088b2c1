"""Earthquake data models and parsing - Pure functions.

This module handles parsing the USGS GeoJSON summary feed into typed
Earthquake objects. All functions are pure with no side effects.

Parsing is all-or-nothing: a single malformed feature raises ParseError
for the whole document.
"""

import math
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any

from src.core.errors import ParseError


DEFAULT_PLACE = "Unknown location"


@dataclass(frozen=True)
class Earthquake:
    """Immutable earthquake data model.

    Attributes:
        id: Unique USGS event ID
        magnitude: Earthquake magnitude, None when the feed has no value
        place: Human-readable location description
        time_ms: Event timestamp in milliseconds since epoch
        latitude: Epicenter latitude
        longitude: Epicenter longitude
        depth_km: Depth in kilometers (optional)
        url: USGS event detail URL
    """
    id: str
    magnitude: float | None
    place: str
    time_ms: int
    latitude: float
    longitude: float
    depth_km: float | None = None
    url: str = ""

    @property
    def coordinates(self) -> tuple[float, float]:
        """Return (latitude, longitude) tuple."""
        return (self.latitude, self.longitude)


def ms_to_datetime(time_ms: int) -> datetime:
    """Convert epoch milliseconds to an aware UTC datetime.

    Raises:
        OverflowError, OSError, ValueError: If the platform cannot represent it
    """
    return datetime.fromtimestamp(time_ms / 1000, tz=timezone.utc)


def _require_number(value: Any, field_name: str, event_id: str) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ParseError(f"Feature {event_id!r}: {field_name} is not a number: {value!r}")
    if not math.isfinite(value):
        raise ParseError(f"Feature {event_id!r}: {field_name} is not finite")
    return float(value)


def parse_earthquake(feature: dict[str, Any]) -> Earthquake:
    """Parse a single GeoJSON feature into an Earthquake.

    Pure function. A null magnitude is accepted; anything else missing or
    mistyped is a schema violation.

    Args:
        feature: GeoJSON feature dict from the USGS feed

    Returns:
        Earthquake object

    Raises:
        ParseError: If the feature does not match the expected schema
    """
    if not isinstance(feature, dict):
        raise ParseError(f"Feature is not an object: {type(feature).__name__}")

    event_id = feature.get("id")
    if not isinstance(event_id, str) or not event_id:
        raise ParseError(f"Feature has no usable id: {event_id!r}")

    props = feature.get("properties")
    geometry = feature.get("geometry")
    if not isinstance(props, dict) or not isinstance(geometry, dict):
        raise ParseError(f"Feature {event_id!r}: missing properties or geometry")

    coords = geometry.get("coordinates")
    if not isinstance(coords, list) or len(coords) < 2:
        raise ParseError(f"Feature {event_id!r}: expected [lon, lat, ...] coordinates")

    longitude = _require_number(coords[0], "longitude", event_id)
    latitude = _require_number(coords[1], "latitude", event_id)
    depth_km = None
    if len(coords) > 2 and coords[2] is not None:
        depth_km = _require_number(coords[2], "depth", event_id)

    # USGS uses milliseconds since epoch
    time_ms = int(_require_number(props.get("time"), "time", event_id))
    try:
        ms_to_datetime(time_ms)
    except (OverflowError, OSError, ValueError) as e:
        raise ParseError(f"Feature {event_id!r}: time {time_ms} is out of range") from e

    magnitude = props.get("mag")
    if magnitude is not None:
        magnitude = _require_number(magnitude, "mag", event_id)

    place = props.get("place")
    if place is None:
        place = DEFAULT_PLACE
    elif not isinstance(place, str):
        raise ParseError(f"Feature {event_id!r}: place is not a string")

    return Earthquake(
        id=event_id,
        magnitude=magnitude,
        place=place,
        time_ms=time_ms,
        latitude=latitude,
        longitude=longitude,
        depth_km=depth_km,
        url=props.get("url") or "",
    )


def sort_by_recency(earthquakes: list[Earthquake]) -> list[Earthquake]:
    """Sort earthquakes newest first.

    Pure function. sorted() is stable with reverse=True, so events with
    equal timestamps keep their feed order.
    """
    return sorted(earthquakes, key=lambda e: e.time_ms, reverse=True)


def parse_earthquakes(geojson: Any) -> list[Earthquake]:
    """Parse a USGS GeoJSON FeatureCollection into a list of Earthquakes.

    Pure function.

    Args:
        geojson: Decoded JSON document from the feed

    Returns:
        List of Earthquake objects, sorted by time (newest first)

    Raises:
        ParseError: If the document or any feature is malformed, or an
            event id appears more than once
    """
    if not isinstance(geojson, dict):
        raise ParseError("Feed document is not a JSON object")

    features = geojson.get("features")
    if not isinstance(features, list):
        raise ParseError("Feed document has no 'features' list")

    earthquakes = [parse_earthquake(feature) for feature in features]

    seen: set[str] = set()
    for earthquake in earthquakes:
        if earthquake.id in seen:
            raise ParseError(f"Duplicate event id: {earthquake.id!r}")
        seen.add(earthquake.id)

    return sort_by_recency(earthquakes)
