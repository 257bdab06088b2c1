"""Severity ranking and classification - Pure functions.

Derives a severity tier and display color from magnitude, and produces
the recency-ordered collection that drives the list panel and the map.
"""

import math
from dataclasses import dataclass
from enum import Enum
from typing import Sequence, TypeVar

from src.core.earthquake import Earthquake, sort_by_recency


class SeverityTier(str, Enum):
    """Discrete magnitude bucket used for color-coding."""
    MINOR = "minor"
    LIGHT = "light"
    MODERATE = "moderate"
    SEVERE = "severe"


# Lower magnitude bound of each tier, strongest first
TIER_THRESHOLDS: tuple[tuple[SeverityTier, float], ...] = (
    (SeverityTier.SEVERE, 6.0),
    (SeverityTier.MODERATE, 4.0),
    (SeverityTier.LIGHT, 2.0),
)

TIER_COLORS: dict[SeverityTier, str] = {
    SeverityTier.SEVERE: "#dc2626",  # red-600
    SeverityTier.MODERATE: "#f97316",  # orange-500
    SeverityTier.LIGHT: "#facc15",  # yellow-400
    SeverityTier.MINOR: "#16a34a",  # green-600
}

TIER_LABELS: dict[SeverityTier, str] = {
    SeverityTier.SEVERE: ">=6.0",
    SeverityTier.MODERATE: "4.0-5.9",
    SeverityTier.LIGHT: "2.0-3.9",
    SeverityTier.MINOR: "<2.0",
}

# Number of entries shown in the list panel
LIST_SIZE = 10

T = TypeVar("T")


@dataclass(frozen=True)
class RankedEarthquake:
    """An Earthquake annotated with its severity tier and display color."""
    earthquake: Earthquake
    tier: SeverityTier
    color: str

    @property
    def id(self) -> str:
        return self.earthquake.id

    @property
    def magnitude(self) -> float | None:
        return self.earthquake.magnitude

    @property
    def place(self) -> str:
        return self.earthquake.place

    @property
    def time_ms(self) -> int:
        return self.earthquake.time_ms

    @property
    def coordinates(self) -> tuple[float, float]:
        return self.earthquake.coordinates


@dataclass(frozen=True)
class LegendEntry:
    """One row of the map legend."""
    tier: SeverityTier
    color: str
    label: str


def classify(magnitude: float | None) -> SeverityTier:
    """Get the severity tier for a magnitude.

    Pure function. Total over every input: None and NaN are minor.
    """
    if magnitude is None or math.isnan(magnitude):
        return SeverityTier.MINOR

    for tier, threshold in TIER_THRESHOLDS:
        if magnitude >= threshold:
            return tier
    return SeverityTier.MINOR


def get_tier_color(tier: SeverityTier) -> str:
    """Get the hex display color for a tier."""
    return TIER_COLORS[tier]


def rank_earthquake(earthquake: Earthquake) -> RankedEarthquake:
    """Annotate a single earthquake with tier and color."""
    tier = classify(earthquake.magnitude)
    return RankedEarthquake(
        earthquake=earthquake,
        tier=tier,
        color=get_tier_color(tier),
    )


def rank_earthquakes(earthquakes: list[Earthquake]) -> list[RankedEarthquake]:
    """Order earthquakes newest first and classify each one.

    Pure function. The sort is stable, so equal timestamps keep their
    input order.

    Args:
        earthquakes: Earthquakes in feed order (or already sorted)

    Returns:
        Ranked earthquakes, newest first
    """
    return [rank_earthquake(e) for e in sort_by_recency(earthquakes)]


def top_n(collection: Sequence[T], n: int) -> list[T]:
    """Return the first n items of an already-sorted collection.

    Pure function. Never mutates the input and never returns more than
    min(n, len(collection)) items.
    """
    if n <= 0:
        return []
    return list(collection[:n])


def legend_entries() -> list[LegendEntry]:
    """Legend rows, strongest tier first."""
    order = [
        SeverityTier.SEVERE,
        SeverityTier.MODERATE,
        SeverityTier.LIGHT,
        SeverityTier.MINOR,
    ]
    return [
        LegendEntry(tier=tier, color=TIER_COLORS[tier], label=TIER_LABELS[tier])
        for tier in order
    ]
