"""
Filter service module for the year selector.

Provides the visualization frame, the available years with their
flight counts, and the per-year subset handed back to the map.
"""

import logging
from typing import Dict, List, Optional, Sequence

import pandas as pd

from flightmap.schemas.visualization import (
    FlightVisualization,
    VisualizationFrame,
    VisualizationFrameSchema,
)

logger = logging.getLogger(__name__)

__all__ = [
    "to_frame",
    "get_year_counts",
    "get_available_years",
    "filter_by_year",
]

_FRAME_COLUMNS = [
    "position",
    "airline",
    "flight_number",
    "from_code",
    "to_code",
    "departure",
    "arrival",
    "year",
]


def to_frame(visualizations: Sequence[FlightVisualization]) -> VisualizationFrame:
    """
    Convert visualizations to a validated DataFrame.

    Args:
        visualizations: Resolved flights in upload order.

    Returns:
        DataFrame matching VisualizationFrameSchema, one row per flight.
    """
    if not visualizations:
        empty = pd.DataFrame(columns=_FRAME_COLUMNS)
        return VisualizationFrameSchema.validate(empty)

    df = pd.DataFrame(
        {
            "position": range(len(visualizations)),
            "airline": [v.airline for v in visualizations],
            "flight_number": [v.flight_number for v in visualizations],
            "from_code": [v.from_code for v in visualizations],
            "to_code": [v.to_code for v in visualizations],
            "departure": pd.to_datetime([v.departure_timestamp for v in visualizations]),
            "arrival": pd.to_datetime([v.arrival_timestamp for v in visualizations]),
        }
    )
    df["year"] = df["departure"].dt.year
    return VisualizationFrameSchema.validate(df)


def get_year_counts(visualizations: Sequence[FlightVisualization]) -> Dict[int, int]:
    """
    Count flights per departure year.

    Returns:
        Dict of year to flight count, sorted by year ascending.
    """
    df = to_frame(visualizations)
    if df.empty:
        return {}

    counts = df["year"].value_counts().sort_index()
    return {int(year): int(count) for year, count in counts.items()}


def get_available_years(visualizations: Sequence[FlightVisualization]) -> List[int]:
    """Years present in the data, ascending."""
    return list(get_year_counts(visualizations))


def filter_by_year(
    visualizations: Sequence[FlightVisualization], year: Optional[int]
) -> List[FlightVisualization]:
    """
    Keep the flights departing in the given year.

    Args:
        visualizations: Resolved flights in upload order.
        year: Departure year, or None for all flights.

    Returns:
        Matching visualizations, order preserved.
    """
    if year is None:
        return list(visualizations)

    df = to_frame(visualizations)
    if df.empty:
        return []

    positions = df.loc[df["year"] == year, "position"].tolist()
    logger.debug("Year filter %s: %d of %d flights", year, len(positions), len(df))
    return [visualizations[position] for position in positions]
