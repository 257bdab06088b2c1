"""Functional Core - Pure functions with no side effects.

This module contains all business logic as pure functions:
- Earthquake feed parsing
- Severity classification and recency ranking
- Camera planning and selection state
- Sidebar visibility rules
- The render step from state to ViewModel

All functions here are deterministic and have no I/O.
"""

from src.core.earthquake import Earthquake, parse_earthquakes
from src.core.errors import FetchError, NetworkError, ParseError
from src.core.severity import SeverityTier, RankedEarthquake, classify, rank_earthquakes, top_n
from src.core.selection import SelectionCoordinator, plan_camera_move, camera_at
from src.core.sidebar import SidebarController, Viewport, FixedViewport
from src.core.view_model import FetchState, ViewModel, build_view_model

__all__ = [
    # Earthquake
    "Earthquake",
    "parse_earthquakes",
    # Errors
    "FetchError",
    "NetworkError",
    "ParseError",
    # Severity
    "SeverityTier",
    "RankedEarthquake",
    "classify",
    "rank_earthquakes",
    "top_n",
    # Selection
    "SelectionCoordinator",
    "plan_camera_move",
    "camera_at",
    # Sidebar
    "SidebarController",
    "Viewport",
    "FixedViewport",
    # View model
    "FetchState",
    "ViewModel",
    "build_view_model",
]
