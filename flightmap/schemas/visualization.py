"""
Flight visualization schemas.

FlightVisualization joins a Flight with its resolved airports. The
pandera model defines the tabular contract used by the year filter.
Schema validation happens at layer boundaries only, not per-row.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import List, Set

import pandera as pa
from pandera.typing import DataFrame, Series

from flightmap.schemas.airport import Airport, Coordinates
from flightmap.schemas.flight import Flight


@dataclass(frozen=True)
class FlightVisualization:
    """
    Immutable join of one flight with both of its resolved airports.

    Timestamps and flight identifiers are denormalized from the flight
    for rendering convenience.
    """

    flight: Flight
    from_airport: Airport
    to_airport: Airport
    from_coordinates: Coordinates
    to_coordinates: Coordinates
    departure_timestamp: datetime
    arrival_timestamp: datetime
    flight_number: str
    airline: str

    @property
    def from_code(self) -> str:
        return self.from_airport.iata_code

    @property
    def to_code(self) -> str:
        return self.to_airport.iata_code

    @property
    def route_key(self) -> str:
        """Direction-independent key for the airport pair."""
        return route_key(self.from_code, self.to_code)


def route_key(code_a: str, code_b: str) -> str:
    """
    Build the canonical key for an airport pair.

    Examples:
        >>> route_key('JFK', 'HEL')
        'HEL-JFK'
        >>> route_key('HEL', 'JFK')
        'HEL-JFK'
    """
    return "-".join(sorted((code_a, code_b)))


def create_flight_visualization(
    flight: Flight, from_airport: Airport, to_airport: Airport
) -> FlightVisualization:
    """Join a flight with its resolved departure and arrival airports."""
    return FlightVisualization(
        flight=flight,
        from_airport=from_airport,
        to_airport=to_airport,
        from_coordinates=from_airport.coordinates,
        to_coordinates=to_airport.coordinates,
        departure_timestamp=flight.departure_timestamp_local,
        arrival_timestamp=flight.arrival_timestamp_local,
        flight_number=flight.flight_code,
        airline=flight.airline,
    )


@dataclass
class VisualizationResult:
    """
    Outcome of resolving one upload's flights against the airport table.

    Attributes:
        visualizations: Resolved flights, in input order.
        total_flights_parsed: Number of flights handed to the builder.
        distinct_airports: Every code seen, resolved or not.
        errors: One message per unresolved endpoint.
        unresolved_airports: Codes that could not be resolved.
    """

    visualizations: List[FlightVisualization] = field(default_factory=list)
    total_flights_parsed: int = 0
    distinct_airports: Set[str] = field(default_factory=set)
    errors: List[str] = field(default_factory=list)
    unresolved_airports: Set[str] = field(default_factory=set)


class VisualizationFrameSchema(pa.DataFrameModel):
    """
    Tabular contract for visualizations handed to the filter layer.

    One row per FlightVisualization, with 'position' pointing back into
    the ordered visualization list.
    """

    position: Series[int] = pa.Field(ge=0, unique=True)
    airline: Series[str] = pa.Field(nullable=False)
    flight_number: Series[str] = pa.Field(nullable=False)
    from_code: Series[str] = pa.Field(nullable=False)
    to_code: Series[str] = pa.Field(nullable=False)
    departure: Series[pa.DateTime] = pa.Field(nullable=False)
    arrival: Series[pa.DateTime] = pa.Field(nullable=False)
    year: Series[int] = pa.Field(ge=1)

    class Config:
        strict = False
        coerce = True
        name = "VisualizationFrameSchema"
        description = "Resolved flights prepared for filtering"


VisualizationFrame = DataFrame[VisualizationFrameSchema]
