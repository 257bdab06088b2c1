"""Selection and camera coordination.

SelectionCoordinator holds the focused coordinates and notifies its
subscribers on every select() call. The camera helpers are pure functions
that describe an animated move; the map surface decides how to play it.
"""

import logging
from dataclasses import dataclass
from typing import Callable


logger = logging.getLogger(__name__)


# World view shown until the first selection
DEFAULT_CENTER = (20.0, 0.0)
DEFAULT_ZOOM = 2

# Zoom floor and duration for flying to a selected event
FLY_TO_ZOOM = 5
FLY_DURATION_SECONDS = 1.5


Coordinates = tuple[float, float]
SelectionListener = Callable[[Coordinates], None]


@dataclass(frozen=True)
class CameraState:
    """Map viewport: center (lat, lon) and zoom level."""
    center: Coordinates
    zoom: float


@dataclass(frozen=True)
class CameraMove:
    """An animated transition between two camera states.

    Attributes:
        start: Camera when the move begins
        target: Camera when the move ends
        duration_seconds: Length of the animation
    """
    start: CameraState
    target: CameraState
    duration_seconds: float


def default_camera() -> CameraState:
    return CameraState(center=DEFAULT_CENTER, zoom=DEFAULT_ZOOM)


def ease_in_out(t: float) -> float:
    """Cubic ease-in-out over [0, 1].

    Pure function. Input is clamped.
    """
    t = min(max(t, 0.0), 1.0)
    if t < 0.5:
        return 4 * t * t * t
    return 1 - (-2 * t + 2) ** 3 / 2


def plan_camera_move(
    current: CameraState,
    target: Coordinates,
    zoom_floor: float = FLY_TO_ZOOM,
    duration_seconds: float = FLY_DURATION_SECONDS,
) -> CameraMove:
    """Plan a fly-to from the current camera to the target coordinates.

    Pure function. The target zoom keeps the current zoom unless it is
    below the floor.

    Args:
        current: Camera at the moment of selection
        target: (latitude, longitude) to center on
        zoom_floor: Minimum zoom after the move
        duration_seconds: Animation length

    Returns:
        CameraMove describing the transition
    """
    return CameraMove(
        start=current,
        target=CameraState(center=target, zoom=max(current.zoom, zoom_floor)),
        duration_seconds=duration_seconds,
    )


def camera_at(move: CameraMove, elapsed_seconds: float) -> CameraState:
    """Camera position part-way through a move.

    Pure function. Returns the target once elapsed >= duration.
    """
    if move.duration_seconds <= 0 or elapsed_seconds >= move.duration_seconds:
        return move.target

    progress = ease_in_out(elapsed_seconds / move.duration_seconds)
    (lat0, lon0), (lat1, lon1) = move.start.center, move.target.center

    return CameraState(
        center=(
            lat0 + (lat1 - lat0) * progress,
            lon0 + (lon1 - lon0) * progress,
        ),
        zoom=move.start.zoom + (move.target.zoom - move.start.zoom) * progress,
    )


class SelectionCoordinator:
    """Tracks the focused event's coordinates.

    The selection starts empty and is only ever replaced, never cleared.
    Selecting the same coordinates twice notifies subscribers twice.
    """

    def __init__(self) -> None:
        self._selected: Coordinates | None = None
        self._listeners: list[SelectionListener] = []

    @property
    def selected(self) -> Coordinates | None:
        return self._selected

    def subscribe(self, listener: SelectionListener) -> Callable[[], None]:
        """Register a listener for selection changes.

        Returns:
            Callable that removes the listener
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def select(self, coordinates: Coordinates) -> None:
        """Focus the given coordinates and notify every subscriber once.

        Raises:
            ValueError: If coordinates is None
        """
        if coordinates is None:
            raise ValueError("Selection requires concrete coordinates")

        self._selected = (float(coordinates[0]), float(coordinates[1]))
        logger.debug("Selected %.4f, %.4f", *self._selected)

        for listener in list(self._listeners):
            listener(self._selected)
