"""USGS Feed Client - Imperative Shell.

This module handles HTTP communication with the USGS real-time summary
feed. All I/O is contained here; parsing is in the core module.
"""

import logging

import requests

from src.core.config import DEFAULT_FEED_URL
from src.core.earthquake import Earthquake, parse_earthquakes
from src.core.errors import NetworkError, ParseError


logger = logging.getLogger(__name__)


# Default timeout for feed requests (seconds)
DEFAULT_TIMEOUT = 30


class FeedClient:
    """Client for fetching the earthquake feed.

    This is part of the imperative shell - it handles HTTP I/O. One call to
    fetch_events() issues exactly one GET; retrying is up to the caller.
    """

    def __init__(
        self,
        feed_url: str = DEFAULT_FEED_URL,
        timeout: int = DEFAULT_TIMEOUT,
        session: requests.Session | None = None,
    ) -> None:
        """Initialize feed client.

        Args:
            feed_url: GeoJSON feed URL
            timeout: Request timeout in seconds
            session: Optional requests session to reuse connections
        """
        self.feed_url = feed_url
        self.timeout = timeout
        self.session = session or requests.Session()

    def fetch_events(self) -> list[Earthquake]:
        """Fetch and parse the feed.

        This method performs HTTP I/O.

        Returns:
            Earthquakes sorted newest first

        Raises:
            NetworkError: If the request fails or the status is not 2xx
            ParseError: If the body is not a valid earthquake feed
        """
        logger.info("Fetching earthquake feed from %s", self.feed_url)

        try:
            response = self.session.get(self.feed_url, timeout=self.timeout)
            response.raise_for_status()
        except requests.RequestException as e:
            raise NetworkError(f"Feed request failed: {e}") from e

        try:
            data = response.json()
        except ValueError as e:
            raise ParseError(f"Feed body is not valid JSON: {e}") from e

        earthquakes = parse_earthquakes(data)

        logger.info("Fetched %d earthquakes from feed", len(earthquakes))

        return earthquakes
