"""
Visualization builder.

Joins parsed flights against the airport reference table. A flight is
only drawn when both of its airports resolve; every unresolved endpoint
is reported.
"""

import logging
from typing import Mapping, Optional, Sequence

from flightmap.exceptions import AirportNotFoundError
from flightmap.schemas.airport import Airport
from flightmap.schemas.flight import Flight
from flightmap.schemas.visualization import (
    VisualizationResult,
    create_flight_visualization,
)
from flightmap.services.airport_service import resolve_airport

logger = logging.getLogger(__name__)

__all__ = ["build_flight_visualizations"]


def build_flight_visualizations(
    flights: Sequence[Flight],
    airports: Mapping[str, Airport],
    replacements: Optional[Mapping[str, str]] = None,
) -> VisualizationResult:
    """
    Build visualization records from parsed flights.

    Args:
        flights: Parsed flights, in upload order.
        airports: Airport lookup table keyed by IATA code.
        replacements: Optional retired-code replacement table.

    Returns:
        VisualizationResult with visualizations in flight order. Both
        endpoints are checked, so a flight can contribute two errors.
    """
    result = VisualizationResult(total_flights_parsed=len(flights))

    for flight in flights:
        result.distinct_airports.add(flight.departure_airport)
        result.distinct_airports.add(flight.arrival_airport)

        from_airport = resolve_airport(flight.departure_airport, airports, replacements)
        to_airport = resolve_airport(flight.arrival_airport, airports, replacements)

        for code, field, airport in (
            (flight.departure_airport, "departure", from_airport),
            (flight.arrival_airport, "arrival", to_airport),
        ):
            if airport is None:
                result.unresolved_airports.add(code)
                result.errors.append(
                    str(AirportNotFoundError(flight.flight_number, code, field))
                )

        if from_airport is None or to_airport is None:
            continue

        result.visualizations.append(
            create_flight_visualization(flight, from_airport, to_airport)
        )

    logger.info(
        "Built %d visualizations from %d flights (%d unresolved airports)",
        len(result.visualizations),
        result.total_flights_parsed,
        len(result.unresolved_airports),
    )
    return result
