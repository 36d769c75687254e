"""
Pytest fixtures for flightmap tests.

Provides airports, flights and visualizations shared across test modules.
"""

from datetime import datetime, timedelta
from typing import Callable, Dict, List

import pytest

from flightmap.schemas.airport import Airport, ReferenceData
from flightmap.schemas.flight import Flight
from flightmap.schemas.visualization import (
    FlightVisualization,
    create_flight_visualization,
)


@pytest.fixture
def anyio_backend():
    """Use only asyncio backend (trio not installed)."""
    return "asyncio"


@pytest.fixture
def make_airport() -> Callable[..., Airport]:
    """Factory for Airport records with defaults for the fields tests ignore."""

    def factory(iata_code: str, lat: float, lon: float, **overrides) -> Airport:
        values = dict(
            id="1",
            ident=f"X{iata_code}",
            type="large_airport",
            name=f"{iata_code} Airport",
            coordinates=(lat, lon),
            elevation_ft=100.0,
            continent="EU",
            iso_country="FI",
            iso_region="FI-18",
            municipality="Testville",
            scheduled_service=True,
            icao_code=f"X{iata_code}",
            iata_code=iata_code,
            gps_code="",
            local_code="",
        )
        values.update(overrides)
        return Airport(**values)

    return factory


@pytest.fixture
def make_flight() -> Callable[..., Flight]:
    """Factory for Flight records lasting two hours."""

    def factory(
        departure: str,
        arrival: str,
        departure_time: datetime,
        airline: str = "Finnair",
        flight_code: str = "AY1",
    ) -> Flight:
        return Flight(
            airline=airline,
            flight_code=flight_code,
            departure_airport=departure,
            arrival_airport=arrival,
            departure_timestamp_local=departure_time,
            arrival_timestamp_local=departure_time + timedelta(hours=2),
        )

    return factory


@pytest.fixture
def airports(make_airport: Callable[..., Airport]) -> Dict[str, Airport]:
    """Small airport table covering Europe and New York."""
    return {
        "HEL": make_airport(
            "HEL",
            60.3172,
            24.9633,
            name="Helsinki Vantaa Airport",
            icao_code="EFHK",
            municipality="Helsinki",
        ),
        "JFK": make_airport("JFK", 40.6398, -73.7789, iso_country="US"),
        "ARN": make_airport("ARN", 59.6519, 17.9186, iso_country="SE"),
        "LHR": make_airport("LHR", 51.4706, -0.4619, iso_country="GB"),
        "BER": make_airport("BER", 52.3514, 13.4939, iso_country="DE"),
    }


@pytest.fixture
def reference(airports: Dict[str, Airport]) -> ReferenceData:
    """Read-only reference data with one retired code."""
    return ReferenceData.freeze(airports, {"TXL": "BER"})


@pytest.fixture
def flights(make_flight: Callable[..., Flight]) -> List[Flight]:
    """Five flights over two years, listed out of departure order."""
    return [
        make_flight("HEL", "JFK", datetime(2019, 7, 28, 20, 20), flight_code="AY5"),
        make_flight(
            "ARN", "HEL", datetime(2019, 3, 1, 8, 0), airline="SAS", flight_code="SK700"
        ),
        make_flight("JFK", "HEL", datetime(2020, 1, 5, 17, 45), flight_code="AY6"),
        make_flight("HEL", "LHR", datetime(2020, 6, 10, 7, 15), flight_code="AY1331"),
        make_flight("HEL", "ARN", datetime(2019, 12, 24, 9, 30), flight_code="AY641"),
    ]


@pytest.fixture
def visualizations(
    flights: List[Flight], airports: Dict[str, Airport]
) -> List[FlightVisualization]:
    """Visualizations for every fixture flight, in flight order."""
    return [
        create_flight_visualization(
            flight,
            airports[flight.departure_airport],
            airports[flight.arrival_airport],
        )
        for flight in flights
    ]


@pytest.fixture
def sample_csv() -> str:
    """Upload with one good row per timestamp layout."""
    return (
        "airline,flight_code,departure_airport,arrival_airport,"
        "departure_timestamp_local,arrival_timestamp_local\n"
        "Finnair,AY5,HEL,JFK,2019-07-28 20:20:00,2019-07-28 22:05:00\n"
        "Finnair,AY6,JFK,HEL,28.07.2020 18:00:00,29.07.2020 08:40:00\n"
    )
