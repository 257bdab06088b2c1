"""Display formatting - Pure functions.

This module formats earthquake data into the text shown in the list panel,
marker popups and log lines. All functions are pure with no side effects.

Magnitude may be None; every formatter degrades to a neutral marker
instead of raising.
"""

from src.core.earthquake import Earthquake, ms_to_datetime


MISSING_MAGNITUDE = "N/A"


def format_magnitude(magnitude: float | None) -> str:
    """Format a magnitude to one decimal place.

    Pure function.
    """
    if magnitude is None:
        return MISSING_MAGNITUDE
    return f"{magnitude:.1f}"


def format_list_time(time_ms: int) -> str:
    """Time-of-day label for the list panel (UTC)."""
    return ms_to_datetime(time_ms).strftime("%H:%M:%S")


def format_popup_time(time_ms: int) -> str:
    """Full date and time label for marker popups (UTC)."""
    return ms_to_datetime(time_ms).strftime("%Y-%m-%d %H:%M:%S UTC")


def format_earthquake_summary(earthquake: Earthquake) -> str:
    """Format a one-line summary of an earthquake.

    Pure function.

    Args:
        earthquake: Earthquake to summarize

    Returns:
        One-line summary string
    """
    return (
        f"M{format_magnitude(earthquake.magnitude)} - {earthquake.place} "
        f"at {format_popup_time(earthquake.time_ms)}"
    )


def format_popup(earthquake: Earthquake) -> list[str]:
    """Lines shown in a marker's info popup.

    Pure function.

    Returns:
        [place, "Magnitude: x.x", timestamp]
    """
    return [
        earthquake.place,
        f"Magnitude: {format_magnitude(earthquake.magnitude)}",
        format_popup_time(earthquake.time_ms),
    ]
