"""Map Surface - Imperative Shell.

The map is an external rendering surface. MapSurface is the contract the
view binding drives; StaticMapSurface implements it by rendering PNG
snapshots from OpenStreetMap tiles.
"""

import io
import logging
import time
from dataclasses import dataclass
from typing import Callable, Protocol

from staticmap import CircleMarker, StaticMap

from src.core.selection import CameraMove, CameraState, camera_at, default_camera
from src.core.view_model import Marker


logger = logging.getLogger(__name__)


OSM_TILE_URL = "https://tile.openstreetmap.org/{z}/{x}/{y}.png"

# White ring drawn around each marker dot (pixels per side)
MARKER_BORDER_PX = 2


class MapSurface(Protocol):
    """Operations the view binding needs from a map."""

    @property
    def camera(self) -> CameraState:
        ...

    def fly_to(self, move: CameraMove) -> None:
        ...

    def set_markers(self, markers: tuple[Marker, ...]) -> None:
        ...


@dataclass
class SnapshotResult:
    """Result of rendering a map snapshot.

    Attributes:
        success: Whether the image was rendered successfully
        image_bytes: PNG image data if successful
        error: Error message if failed
    """
    success: bool
    image_bytes: bytes | None = None
    error: str | None = None


class StaticMapSurface:
    """Map surface that renders still images.

    fly_to() starts a move; the camera follows it along the eased path as
    the clock advances, so a snapshot taken mid-flight shows the camera
    part-way there. Popups are exposed as text per marker.
    """

    def __init__(
        self,
        width: int = 800,
        height: int = 400,
        tile_url: str | None = None,
        camera: CameraState | None = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        """Initialize static map surface.

        Args:
            width: Snapshot width in pixels
            height: Snapshot height in pixels
            tile_url: Custom tile URL template. Defaults to OpenStreetMap.
            camera: Initial camera. Defaults to the world view.
            clock: Seconds source used to time camera moves
        """
        self.width = width
        self.height = height
        self.tile_url = tile_url or OSM_TILE_URL
        self.clock = clock
        self._resting_camera = camera or default_camera()
        self._move: CameraMove | None = None
        self._move_started = 0.0
        self.moves: list[CameraMove] = []
        self.markers: tuple[Marker, ...] = ()

    @property
    def camera(self) -> CameraState:
        """Camera at the current clock time."""
        if self._move is None:
            return self._resting_camera
        return camera_at(self._move, self.clock() - self._move_started)

    @property
    def in_flight(self) -> bool:
        if self._move is None:
            return False
        return self.clock() - self._move_started < self._move.duration_seconds

    def fly_to(self, move: CameraMove) -> None:
        self.moves.append(move)
        self._move = move
        self._move_started = self.clock()
        logger.info(
            "Camera to (%.4f, %.4f) zoom %.1f over %.1fs",
            move.target.center[0],
            move.target.center[1],
            move.target.zoom,
            move.duration_seconds,
        )

    def settle(self) -> None:
        """Finish the active move immediately."""
        if self._move is not None:
            self._resting_camera = self._move.target
            self._move = None

    def set_markers(self, markers: tuple[Marker, ...]) -> None:
        self.markers = tuple(markers)
        logger.debug("Map now shows %d markers", len(self.markers))

    def popup_for(self, marker_id: str) -> tuple[str, ...] | None:
        """Popup lines for a marker, or None if no such marker."""
        for marker in self.markers:
            if marker.id == marker_id:
                return marker.popup
        return None

    def render_snapshot(self) -> SnapshotResult:
        """Render the current camera and markers to PNG.

        This method performs I/O (fetches map tiles from tile server).

        Returns:
            SnapshotResult with image bytes or error
        """
        camera = self.camera
        lat, lon = camera.center
        zoom = int(round(camera.zoom))

        logger.info(
            "Rendering map snapshot at (%.4f, %.4f) zoom %d with %d markers",
            lat,
            lon,
            zoom,
            len(self.markers),
        )

        try:
            static_map = StaticMap(
                self.width,
                self.height,
                url_template=self.tile_url,
            )

            for marker in self.markers:
                # staticmap takes (lon, lat) order
                position = (marker.longitude, marker.latitude)
                static_map.add_marker(CircleMarker(
                    position,
                    "white",
                    marker.size_px + 2 * MARKER_BORDER_PX,
                ))
                static_map.add_marker(CircleMarker(position, marker.color, marker.size_px))

            image = static_map.render(zoom=zoom, center=[lon, lat])

            buffer = io.BytesIO()
            image.save(buffer, format="PNG")
            image_bytes = buffer.getvalue()

            logger.info("Rendered map snapshot: %d bytes", len(image_bytes))

            return SnapshotResult(success=True, image_bytes=image_bytes)

        except Exception as e:
            logger.error("Failed to render map snapshot: %s", str(e))
            return SnapshotResult(success=False, error=str(e))
