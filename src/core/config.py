"""Configuration models - Pure data structures.

These are domain models for configuration. The actual loading
(I/O) is handled by the shell layer.
"""

from dataclasses import dataclass, field

from src.core.selection import DEFAULT_CENTER, DEFAULT_ZOOM, FLY_DURATION_SECONDS, FLY_TO_ZOOM
from src.core.severity import LIST_SIZE
from src.core.sidebar import NARROW_BREAKPOINT_PX
from src.core.view_model import MARKER_SIZE_PX


# USGS real-time summary feed: all earthquakes, past day
DEFAULT_FEED_URL = "https://earthquake.usgs.gov/earthquakes/feed/v1.0/summary/all_day.geojson"

# Highest zoom level served by OpenStreetMap tiles
MAX_ZOOM = 18


@dataclass
class Config:
    """Application configuration.

    This is a pure data structure - no I/O or side effects.

    Attributes:
        feed_url: GeoJSON summary feed to fetch
        request_timeout_seconds: Transport timeout for the feed request
        list_size: Number of events shown in the list panel
        narrow_breakpoint_px: Viewports narrower than this collapse the sidebar
        default_center: (lat, lon) of the initial world view
        default_zoom: Zoom of the initial world view
        fly_to_zoom: Minimum zoom after flying to a selection
        fly_duration_seconds: Length of the fly-to animation
        marker_size_px: Marker dot diameter
        snapshot_width: Width of rendered map snapshots
        snapshot_height: Height of rendered map snapshots
    """
    feed_url: str = DEFAULT_FEED_URL
    request_timeout_seconds: int = 30
    list_size: int = LIST_SIZE
    narrow_breakpoint_px: int = NARROW_BREAKPOINT_PX
    default_center: tuple[float, float] = DEFAULT_CENTER
    default_zoom: int = DEFAULT_ZOOM
    fly_to_zoom: int = FLY_TO_ZOOM
    fly_duration_seconds: float = FLY_DURATION_SECONDS
    marker_size_px: int = MARKER_SIZE_PX
    snapshot_width: int = 800
    snapshot_height: int = 400


@dataclass
class ValidationError:
    """A configuration validation error.

    Attributes:
        field: The field that has an error
        message: Human-readable error description
        severity: 'error' or 'warning'
    """
    field: str
    message: str
    severity: str = "error"


@dataclass
class ValidationResult:
    """Result of validating configuration.

    Attributes:
        valid: True if no errors (warnings are OK)
        errors: List of validation errors/warnings
    """
    valid: bool
    errors: list[ValidationError] = field(default_factory=list)

    @property
    def warnings(self) -> list[ValidationError]:
        """Get only warnings."""
        return [e for e in self.errors if e.severity == "warning"]

    @property
    def critical_errors(self) -> list[ValidationError]:
        """Get only critical errors."""
        return [e for e in self.errors if e.severity == "error"]


def validate_coordinates(lat: float, lon: float, field_name: str) -> list[ValidationError]:
    """Validate latitude/longitude coordinates.

    Pure function.

    Args:
        lat: Latitude value
        lon: Longitude value
        field_name: Name of the field for error messages

    Returns:
        List of validation errors (empty if valid)
    """
    errors = []

    if not -90 <= lat <= 90:
        errors.append(ValidationError(
            field=field_name,
            message=f"Latitude {lat} out of range [-90, 90]",
        ))

    if not -180 <= lon <= 180:
        errors.append(ValidationError(
            field=field_name,
            message=f"Longitude {lon} out of range [-180, 180]",
        ))

    return errors


def _validate_positive(value: float, field_name: str) -> list[ValidationError]:
    if value <= 0:
        return [ValidationError(
            field=field_name,
            message=f"Must be positive, got {value}",
        )]
    return []


def _validate_zoom(zoom: float, field_name: str) -> list[ValidationError]:
    if not 0 <= zoom <= MAX_ZOOM:
        return [ValidationError(
            field=field_name,
            message=f"Zoom {zoom} out of range [0, {MAX_ZOOM}]",
        )]
    return []


def validate_config(config: Config) -> ValidationResult:
    """Validate configuration for errors and warnings.

    Pure function.

    Args:
        config: Configuration to validate

    Returns:
        ValidationResult with any errors/warnings found
    """
    errors: list[ValidationError] = []

    if not config.feed_url.startswith(("http://", "https://")):
        errors.append(ValidationError(
            field="feed_url",
            message=f"Feed URL must be http(s), got {config.feed_url!r}",
        ))

    errors.extend(_validate_positive(config.request_timeout_seconds, "request_timeout_seconds"))
    errors.extend(_validate_positive(config.list_size, "list_size"))
    errors.extend(_validate_positive(config.narrow_breakpoint_px, "narrow_breakpoint_px"))
    errors.extend(_validate_positive(config.fly_duration_seconds, "fly_duration_seconds"))
    errors.extend(_validate_positive(config.marker_size_px, "marker_size_px"))
    errors.extend(_validate_positive(config.snapshot_width, "snapshot_width"))
    errors.extend(_validate_positive(config.snapshot_height, "snapshot_height"))

    lat, lon = config.default_center
    errors.extend(validate_coordinates(lat, lon, "default_center"))

    errors.extend(_validate_zoom(config.default_zoom, "default_zoom"))
    errors.extend(_validate_zoom(config.fly_to_zoom, "fly_to_zoom"))

    # Flying to an event should never zoom out past the world view
    if config.fly_to_zoom < config.default_zoom:
        errors.append(ValidationError(
            field="fly_to_zoom",
            message=f"fly_to_zoom ({config.fly_to_zoom}) < default_zoom ({config.default_zoom})",
            severity="warning",
        ))

    has_critical = any(e.severity == "error" for e in errors)

    return ValidationResult(
        valid=not has_critical,
        errors=errors,
    )
