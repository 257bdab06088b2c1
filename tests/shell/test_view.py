"""Tests for the QuakeView binding.

Tests the coordination between functional core and imperative shell.
Uses mocks for the feed client; the map surface is a real
StaticMapSurface, which does no I/O until a snapshot is rendered.
"""

from unittest.mock import Mock

import pytest

from src.core.config import Config
from src.core.earthquake import Earthquake, parse_earthquakes
from src.core.errors import NetworkError, ParseError
from src.core.severity import SeverityTier
from src.core.sidebar import FixedViewport
from src.core.view_model import FAILURE_MESSAGE, NO_DATA_MESSAGE, FetchStatus
from src.shell.map_surface import StaticMapSurface
from src.view import QuakeView


def make_earthquake(event_id, time_ms, magnitude, lat=10.0, lon=20.0):
    return Earthquake(
        id=event_id,
        magnitude=magnitude,
        place=f"Place {event_id}",
        time_ms=time_ms,
        latitude=lat,
        longitude=lon,
    )


class FakeClock:
    def __init__(self):
        self.now = 0.0

    def __call__(self):
        return self.now

    def advance(self, seconds):
        self.now += seconds


@pytest.fixture
def sample_earthquakes():
    """Feed order: magnitudes [6.5, 3.2, 1.0] at times [100, 300, 200]."""
    return [
        make_earthquake("a", 100, 6.5, lat=1.0, lon=2.0),
        make_earthquake("b", 300, 3.2, lat=3.0, lon=4.0),
        make_earthquake("c", 200, 1.0, lat=5.0, lon=6.0),
    ]


@pytest.fixture
def mock_feed_client(sample_earthquakes):
    client = Mock()
    client.fetch_events.return_value = sample_earthquakes
    return client


@pytest.fixture
def surface():
    return StaticMapSurface()


def make_view(feed_client, surface, width=1280):
    return QuakeView(
        Config(),
        feed_client=feed_client,
        map_surface=surface,
        viewport=FixedViewport(width),
    )


class TestInitialState:

    def test_starts_loading_without_focus(self, mock_feed_client, surface):
        view = make_view(mock_feed_client, surface)

        assert view.state.status == FetchStatus.LOADING
        assert view.selection.selected is None
        assert surface.moves == []
        mock_feed_client.fetch_events.assert_not_called()

    def test_creates_default_collaborators(self):
        view = QuakeView(Config())

        assert view.feed_client.feed_url == Config().feed_url
        assert view.map_surface.camera.zoom == Config().default_zoom
        assert view.sidebar.is_expanded is True


class TestRefresh:

    def test_mount_fetches_and_renders_ready(self, mock_feed_client, surface):
        view = make_view(mock_feed_client, surface)
        rendered = []
        view.subscribe(rendered.append)

        state = view.mount()

        assert state.status == FetchStatus.READY
        assert [vm.mode for vm in rendered] == [
            FetchStatus.LOADING,
            FetchStatus.LOADING,
            FetchStatus.READY,
        ]
        mock_feed_client.fetch_events.assert_called_once()

    def test_ranked_order_and_tiers(self, mock_feed_client, surface):
        view = make_view(mock_feed_client, surface)
        state = view.refresh()

        assert [e.time_ms for e in state.earthquakes] == [300, 200, 100]
        assert [e.tier for e in state.earthquakes] == [
            SeverityTier.LIGHT,
            SeverityTier.MINOR,
            SeverityTier.SEVERE,
        ]

    def test_markers_pushed_to_surface(self, mock_feed_client, surface):
        view = make_view(mock_feed_client, surface)
        view.refresh()

        assert [m.id for m in surface.markers] == ["b", "c", "a"]
        assert surface.popup_for("a")[1] == "Magnitude: 6.5"

    def test_empty_feed_is_ready_with_no_data(self, surface):
        client = Mock()
        client.fetch_events.return_value = []
        view = make_view(client, surface)

        state = view.refresh()
        vm = view.render()

        assert state.status == FetchStatus.READY
        assert state.earthquakes == ()
        assert vm.no_data is True
        assert vm.message == NO_DATA_MESSAGE
        assert surface.markers == ()

    def test_network_error_fails_with_generic_message(self, surface):
        client = Mock()
        client.fetch_events.side_effect = NetworkError("503 Service Unavailable")
        view = make_view(client, surface)

        state = view.refresh()

        assert state.status == FetchStatus.FAILED
        assert state.message == FAILURE_MESSAGE
        assert view.render().retry_available is True

    def test_parse_error_shows_same_message(self, surface):
        client = Mock()
        client.fetch_events.side_effect = ParseError("bad json")
        view = make_view(client, surface)

        assert view.refresh().message == FAILURE_MESSAGE

    def test_error_kind_is_logged(self, surface, caplog):
        client = Mock()
        client.fetch_events.side_effect = ParseError("bad json")
        view = make_view(client, surface)

        with caplog.at_level("ERROR"):
            view.refresh()

        assert "parse" in caplog.text
        assert "bad json" in caplog.text

    def test_retry_after_failure_becomes_ready(self, sample_earthquakes, surface):
        client = Mock()
        client.fetch_events.side_effect = [
            NetworkError("500 Server Error"),
            sample_earthquakes,
        ]
        view = make_view(client, surface)

        assert view.refresh().status == FetchStatus.FAILED

        state = view.retry()

        assert state.status == FetchStatus.READY
        assert state.message is None
        assert len(state.earthquakes) == 3
        assert client.fetch_events.call_count == 2

    def test_refresh_while_ready_passes_through_loading(self, mock_feed_client, surface):
        view = make_view(mock_feed_client, surface)
        view.refresh()
        modes = []
        view.subscribe(lambda vm: modes.append(vm.mode))

        view.refresh()

        assert modes == [FetchStatus.LOADING, FetchStatus.READY]

    def test_out_of_range_time_fails_cleanly(self, surface):
        feed = {
            "features": [{
                "id": "far-future",
                "properties": {"mag": 3.0, "place": "Nowhere", "time": 10**20},
                "geometry": {"coordinates": [0.0, 0.0, 1.0]},
            }]
        }
        client = Mock()
        client.fetch_events.side_effect = lambda: parse_earthquakes(feed)
        view = make_view(client, surface)
        modes = []
        view.subscribe(lambda vm: modes.append(vm.mode))

        state = view.refresh()

        assert state.status == FetchStatus.FAILED
        assert modes == [FetchStatus.LOADING, FetchStatus.FAILED]
        assert surface.markers == ()


class TestStaleResults:
    """Only the latest fetch may update the state."""

    def test_older_completion_is_discarded(self, sample_earthquakes, surface):
        view = make_view(Mock(), surface)

        first = view.begin_fetch()
        second = view.begin_fetch()

        assert view.complete_fetch(second, sample_earthquakes[:1]) is True
        assert view.complete_fetch(first, sample_earthquakes) is False

        assert [e.id for e in view.state.earthquakes] == ["a"]

    def test_older_failure_is_discarded(self, sample_earthquakes, surface):
        view = make_view(Mock(), surface)

        first = view.begin_fetch()
        second = view.begin_fetch()
        view.complete_fetch(second, sample_earthquakes)

        assert view.fail_fetch(first, NetworkError("timeout")) is False
        assert view.state.status == FetchStatus.READY

    def test_pending_newer_fetch_keeps_loading(self, sample_earthquakes, surface):
        view = make_view(Mock(), surface)

        first = view.begin_fetch()
        view.begin_fetch()
        view.complete_fetch(first, sample_earthquakes)

        assert view.state.status == FetchStatus.LOADING


class TestSelection:

    def test_select_flies_camera_once(self, mock_feed_client, surface):
        view = make_view(mock_feed_client, surface)
        view.refresh()

        view.select_event("a")

        assert view.selection.selected == (1.0, 2.0)
        assert len(surface.moves) == 1
        assert surface.moves[0].target.center == (1.0, 2.0)
        assert surface.moves[0].target.zoom == Config().fly_to_zoom
        assert surface.moves[0].duration_seconds == Config().fly_duration_seconds

    def test_same_event_twice_animates_twice(self, mock_feed_client, surface):
        view = make_view(mock_feed_client, surface)
        view.refresh()
        listener = Mock()
        view.selection.subscribe(listener)

        view.select_event("b")
        view.select_event("b")

        assert listener.call_count == 2
        assert len(surface.moves) == 2

    def test_selection_survives_refresh(self, mock_feed_client, surface):
        view = make_view(mock_feed_client, surface)
        view.refresh()
        view.select_event("c")

        view.refresh()

        assert view.selection.selected == (5.0, 6.0)

    def test_unknown_event_raises(self, mock_feed_client, surface):
        view = make_view(mock_feed_client, surface)
        view.refresh()

        with pytest.raises(KeyError):
            view.select_event("missing")
        assert surface.moves == []

    def test_select_before_ready_raises(self, mock_feed_client, surface):
        view = make_view(mock_feed_client, surface)

        with pytest.raises(KeyError):
            view.select_event("a")

    def test_reselect_mid_flight_starts_from_current_position(self, mock_feed_client):
        clock = FakeClock()
        surface = StaticMapSurface(clock=clock)
        view = make_view(mock_feed_client, surface)
        view.refresh()

        view.select_event("a")
        clock.advance(Config().fly_duration_seconds / 2)
        view.select_event("b")

        second = surface.moves[1]
        assert second.start.center == (10.5, 1.0)
        assert second.start.zoom == 3.5
        assert second.target.center == (3.0, 4.0)


class TestSidebar:

    def test_narrow_selection_collapses_sidebar(self, mock_feed_client, surface):
        view = make_view(mock_feed_client, surface, width=375)
        view.refresh()
        view.toggle_sidebar()
        assert view.render().sidebar_expanded is True

        view.select_event("a")

        assert view.render().sidebar_expanded is False

    def test_wide_selection_leaves_sidebar(self, mock_feed_client, surface):
        view = make_view(mock_feed_client, surface, width=1280)
        view.refresh()

        view.select_event("a")

        assert view.sidebar.collapsed is False
        assert view.render().sidebar_expanded is True
        assert view.render().sidebar_toggle_available is False

    def test_toggle_publishes(self, mock_feed_client, surface):
        view = make_view(mock_feed_client, surface, width=375)
        view.refresh()
        rendered = []
        view.subscribe(rendered.append)

        view.toggle_sidebar()

        assert len(rendered) == 1
        assert rendered[0].sidebar_expanded is True


class TestSubscribe:

    def test_unsubscribe(self, mock_feed_client, surface):
        view = make_view(mock_feed_client, surface)
        listener = Mock()
        unsubscribe = view.subscribe(listener)

        unsubscribe()
        view.refresh()

        listener.assert_not_called()
