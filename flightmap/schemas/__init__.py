"""
Schema definitions for the flight map.

Immutable records for flights, airports and resolved visualizations,
plus the pandera contract for the visualization frame.
"""

from .airport import Airport, AirportsMap, CodeReplacements, Coordinates, ReferenceData
from .flight import Flight, ParseResult
from .visualization import (
    FlightVisualization,
    VisualizationFrame,
    VisualizationFrameSchema,
    VisualizationResult,
    create_flight_visualization,
    route_key,
)

__all__ = [
    # Flight schemas
    "Flight",
    "ParseResult",
    # Airport schemas
    "Airport",
    "AirportsMap",
    "CodeReplacements",
    "Coordinates",
    "ReferenceData",
    # Visualization schemas
    "FlightVisualization",
    "VisualizationResult",
    "VisualizationFrameSchema",
    "VisualizationFrame",
    "create_flight_visualization",
    "route_key",
]
