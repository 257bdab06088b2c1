"""View Binding - Wires Functional Core and Imperative Shell.

QuakeView owns all state for one mounted view: the fetch state, the
selection, and the sidebar. Every state change re-renders through the
pure build_view_model() and is pushed to subscribers and the map surface.
"""

import logging
from typing import Callable

from src.core.config import Config
from src.core.earthquake import Earthquake
from src.core.errors import FetchError
from src.core.selection import CameraState, Coordinates, SelectionCoordinator, plan_camera_move
from src.core.severity import RankedEarthquake, rank_earthquakes
from src.core.sidebar import FixedViewport, SidebarController, Viewport
from src.core.view_model import FetchState, FetchStatus, ViewModel, build_view_model
from src.shell.feed_client import FeedClient
from src.shell.map_surface import MapSurface, StaticMapSurface


logger = logging.getLogger(__name__)


# Width assumed when no viewport is injected
DEFAULT_VIEWPORT_WIDTH = 1280

ViewListener = Callable[[ViewModel], None]


class QuakeView:
    """Coordinates the feed, the ranked list, and the map.

    This class wires together:
    - Feed client (fetches the earthquake feed)
    - Core functions (ranking, classification, rendering)
    - Selection coordinator (drives the map camera)
    - Sidebar controller (collapses the list on narrow viewports)
    - Map surface (draws markers and follows the selection)

    Overlapping refreshes are resolved with a request token: only the most
    recently started fetch may change the state when it completes.
    """

    def __init__(
        self,
        config: Config,
        feed_client: FeedClient | None = None,
        map_surface: MapSurface | None = None,
        viewport: Viewport | None = None,
    ) -> None:
        """Initialize the view.

        Args:
            config: Application configuration
            feed_client: Feed client (created if not provided)
            map_surface: Map surface (created if not provided)
            viewport: Viewport width query (fixed wide viewport if not provided)
        """
        self.config = config
        self.feed_client = feed_client or FeedClient(
            feed_url=config.feed_url,
            timeout=config.request_timeout_seconds,
        )
        self.map_surface = map_surface or StaticMapSurface(
            width=config.snapshot_width,
            height=config.snapshot_height,
            camera=CameraState(center=config.default_center, zoom=config.default_zoom),
        )
        self.viewport = viewport or FixedViewport(DEFAULT_VIEWPORT_WIDTH)
        self.selection = SelectionCoordinator()
        self.sidebar = SidebarController(self.viewport, config.narrow_breakpoint_px)
        self.state = FetchState.loading()

        self._request_token = 0
        self._listeners: list[ViewListener] = []
        self.selection.subscribe(self._on_selection)

    def subscribe(self, listener: ViewListener) -> Callable[[], None]:
        """Register a listener that receives every rendered ViewModel.

        Returns:
            Callable that removes the listener
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def render(self) -> ViewModel:
        """Render the current state. No side effects."""
        return build_view_model(
            self.state,
            sidebar_expanded=self.sidebar.is_expanded,
            sidebar_toggle_available=self.sidebar.toggle_available,
            list_size=self.config.list_size,
            marker_size_px=self.config.marker_size_px,
        )

    def _publish(self) -> None:
        view_model = self.render()
        self.map_surface.set_markers(view_model.markers)
        for listener in list(self._listeners):
            listener(view_model)

    def _on_selection(self, coordinates: Coordinates) -> None:
        move = plan_camera_move(
            self.map_surface.camera,
            coordinates,
            zoom_floor=self.config.fly_to_zoom,
            duration_seconds=self.config.fly_duration_seconds,
        )
        self.map_surface.fly_to(move)

    def begin_fetch(self) -> int:
        """Enter the loading state and issue a new request token."""
        self._request_token += 1
        self.state = FetchState.loading()
        self._publish()
        return self._request_token

    def _is_stale(self, token: int) -> bool:
        if token != self._request_token:
            logger.debug(
                "Discarding stale fetch result (token %d, latest %d)",
                token,
                self._request_token,
            )
            return True
        return False

    def complete_fetch(self, token: int, earthquakes: list[Earthquake]) -> bool:
        """Apply a successful fetch.

        Returns:
            False if the result was stale and discarded
        """
        if self._is_stale(token):
            return False

        self.state = FetchState.ready(rank_earthquakes(earthquakes))
        logger.info("Showing %d earthquakes", len(self.state.earthquakes))
        self._publish()
        return True

    def fail_fetch(self, token: int, error: FetchError) -> bool:
        """Apply a failed fetch.

        The user sees one generic message; the error kind is only logged.

        Returns:
            False if the result was stale and discarded
        """
        if self._is_stale(token):
            return False

        logger.error("Feed fetch failed (%s): %s", error.kind, error)
        self.state = FetchState.failed()
        self._publish()
        return True

    def refresh(self) -> FetchState:
        """Fetch the feed once and update the view.

        Returns:
            The fetch state after this refresh
        """
        token = self.begin_fetch()

        try:
            earthquakes = self.feed_client.fetch_events()
        except FetchError as e:
            self.fail_fetch(token, e)
        else:
            self.complete_fetch(token, earthquakes)

        return self.state

    def retry(self) -> FetchState:
        """User-initiated retry after a failure."""
        logger.info("Retrying feed fetch")
        return self.refresh()

    def mount(self) -> FetchState:
        """Show the initial loading view and run the first fetch."""
        self._publish()
        return self.refresh()

    def find_event(self, event_id: str) -> RankedEarthquake:
        """Look up an event in the ready collection.

        Raises:
            KeyError: If the view is not ready or the id is unknown
        """
        if self.state.status != FetchStatus.READY:
            raise KeyError(f"No events loaded (state is {self.state.status.value})")

        for ranked in self.state.earthquakes:
            if ranked.id == event_id:
                return ranked
        raise KeyError(f"Unknown event: {event_id}")

    def select_event(self, event_id: str) -> RankedEarthquake:
        """Handle a click on a list entry.

        Focuses the event (which flies the camera) and collapses the
        sidebar on narrow viewports.

        Returns:
            The selected event

        Raises:
            KeyError: If the event is not in the current collection
        """
        ranked = self.find_event(event_id)

        self.selection.select(ranked.coordinates)
        self.sidebar.collapse_if_narrow()

        logger.info("Selected %s (%s)", ranked.id, ranked.place)
        self._publish()
        return ranked

    def toggle_sidebar(self) -> None:
        self.sidebar.toggle()
        self._publish()
