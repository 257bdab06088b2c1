"""Fetch state and the pure render step.

build_view_model() turns the current state into a plain ViewModel. It has
no side effects; the same inputs always produce the same output.
"""

from dataclasses import dataclass
from enum import Enum

from src.core.formatter import format_list_time, format_magnitude, format_popup
from src.core.severity import LIST_SIZE, LegendEntry, RankedEarthquake, legend_entries, top_n


FAILURE_MESSAGE = "Failed to fetch earthquake data."
LOADING_MESSAGE = "Loading earthquakes..."
NO_DATA_MESSAGE = "No earthquake data found."

# Marker dot diameter in pixels
MARKER_SIZE_PX = 12


class FetchStatus(str, Enum):
    LOADING = "loading"
    READY = "ready"
    FAILED = "failed"


@dataclass(frozen=True)
class FetchState:
    """Single source of truth for which view mode renders.

    Attributes:
        status: loading, ready or failed
        earthquakes: Ranked collection (only meaningful when ready)
        message: User-facing failure message (only when failed)
    """
    status: FetchStatus
    earthquakes: tuple[RankedEarthquake, ...] = ()
    message: str | None = None

    @classmethod
    def loading(cls) -> "FetchState":
        return cls(status=FetchStatus.LOADING)

    @classmethod
    def ready(cls, earthquakes: list[RankedEarthquake]) -> "FetchState":
        return cls(status=FetchStatus.READY, earthquakes=tuple(earthquakes))

    @classmethod
    def failed(cls, message: str = FAILURE_MESSAGE) -> "FetchState":
        return cls(status=FetchStatus.FAILED, message=message)


@dataclass(frozen=True)
class ListEntry:
    """One row in the ranked list panel."""
    id: str
    magnitude_text: str
    color: str
    time_text: str
    place: str


@dataclass(frozen=True)
class Marker:
    """One map marker: a colored dot with an info popup."""
    id: str
    latitude: float
    longitude: float
    color: str
    size_px: int
    popup: tuple[str, ...]


@dataclass(frozen=True)
class ViewModel:
    """Everything the rendering surface needs for one frame.

    Exactly one of the three modes is active. In loading and failed modes
    the list, markers and legend are empty.
    """
    mode: FetchStatus
    message: str | None = None
    retry_available: bool = False
    refresh_available: bool = False
    list_entries: tuple[ListEntry, ...] = ()
    no_data: bool = False
    markers: tuple[Marker, ...] = ()
    legend: tuple[LegendEntry, ...] = ()
    sidebar_expanded: bool = True
    sidebar_toggle_available: bool = False


def build_list_entry(ranked: RankedEarthquake) -> ListEntry:
    return ListEntry(
        id=ranked.id,
        magnitude_text=f"M{format_magnitude(ranked.magnitude)}",
        color=ranked.color,
        time_text=format_list_time(ranked.time_ms),
        place=ranked.place,
    )


def build_marker(ranked: RankedEarthquake, size_px: int = MARKER_SIZE_PX) -> Marker:
    latitude, longitude = ranked.coordinates
    return Marker(
        id=ranked.id,
        latitude=latitude,
        longitude=longitude,
        color=ranked.color,
        size_px=size_px,
        popup=tuple(format_popup(ranked.earthquake)),
    )


def build_view_model(
    state: FetchState,
    sidebar_expanded: bool = True,
    sidebar_toggle_available: bool = False,
    list_size: int = LIST_SIZE,
    marker_size_px: int = MARKER_SIZE_PX,
) -> ViewModel:
    """Render the current state into a ViewModel.

    Pure function.

    Args:
        state: Current fetch state
        sidebar_expanded: Effective sidebar state
        sidebar_toggle_available: Whether the toggle control is shown
        list_size: How many entries the list panel shows
        marker_size_px: Marker dot diameter

    Returns:
        ViewModel for the active mode
    """
    if state.status == FetchStatus.LOADING:
        return ViewModel(mode=FetchStatus.LOADING, message=LOADING_MESSAGE)

    if state.status == FetchStatus.FAILED:
        return ViewModel(
            mode=FetchStatus.FAILED,
            message=state.message or FAILURE_MESSAGE,
            retry_available=True,
        )

    earthquakes = list(state.earthquakes)

    return ViewModel(
        mode=FetchStatus.READY,
        message=NO_DATA_MESSAGE if not earthquakes else None,
        refresh_available=True,
        list_entries=tuple(build_list_entry(e) for e in top_n(earthquakes, list_size)),
        no_data=not earthquakes,
        markers=tuple(build_marker(e, marker_size_px) for e in earthquakes),
        legend=tuple(legend_entries()),
        sidebar_expanded=sidebar_expanded,
        sidebar_toggle_available=sidebar_toggle_available,
    )
