"""Unit tests for display formatting.

Pure function tests - no mocks needed.
"""

import pytest

from src.core.earthquake import Earthquake
from src.core.formatter import (
    MISSING_MAGNITUDE,
    format_earthquake_summary,
    format_list_time,
    format_magnitude,
    format_popup,
    format_popup_time,
)


# 2023-12-19 16:00:00 UTC
SAMPLE_TIME_MS = 1703001600000


@pytest.fixture
def sample_earthquake():
    """Create a sample earthquake for testing."""
    return Earthquake(
        id="test",
        magnitude=4.46,
        place="10km NE of San Francisco, CA",
        time_ms=SAMPLE_TIME_MS,
        latitude=37.7749,
        longitude=-122.4194,
    )


class TestFormatMagnitude:
    """Tests for format_magnitude() function."""

    def test_one_decimal_place(self):
        assert format_magnitude(4.46) == "4.5"
        assert format_magnitude(6) == "6.0"

    def test_negative(self):
        assert format_magnitude(-0.5) == "-0.5"

    def test_none_is_neutral(self):
        assert format_magnitude(None) == MISSING_MAGNITUDE


class TestFormatTimes:
    """Tests for time labels."""

    def test_list_time(self):
        assert format_list_time(SAMPLE_TIME_MS) == "16:00:00"

    def test_popup_time(self):
        assert format_popup_time(SAMPLE_TIME_MS) == "2023-12-19 16:00:00 UTC"


class TestFormatEarthquakeSummary:
    """Tests for format_earthquake_summary() function."""

    def test_includes_key_info(self, sample_earthquake):
        summary = format_earthquake_summary(sample_earthquake)

        assert summary == (
            "M4.5 - 10km NE of San Francisco, CA at 2023-12-19 16:00:00 UTC"
        )

    def test_missing_magnitude(self, sample_earthquake):
        eq = Earthquake(**{**sample_earthquake.__dict__, "magnitude": None})
        assert format_earthquake_summary(eq).startswith("MN/A - ")


class TestFormatPopup:
    """Tests for format_popup() function."""

    def test_popup_lines(self, sample_earthquake):
        assert format_popup(sample_earthquake) == [
            "10km NE of San Francisco, CA",
            "Magnitude: 4.5",
            "2023-12-19 16:00:00 UTC",
        ]

    def test_popup_without_magnitude(self, sample_earthquake):
        eq = Earthquake(**{**sample_earthquake.__dict__, "magnitude": None})
        assert format_popup(eq)[1] == "Magnitude: N/A"
