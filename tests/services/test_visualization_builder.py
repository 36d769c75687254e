"""Tests for the visualization builder."""

from datetime import datetime

from flightmap.services.visualization_builder import build_flight_visualizations


class TestBuildFlightVisualizations:
    """Tests for build_flight_visualizations."""

    def test_all_resolved(self, flights, airports) -> None:
        result = build_flight_visualizations(flights, airports)

        assert result.errors == []
        assert result.total_flights_parsed == 5
        assert len(result.visualizations) == 5
        assert [v.flight for v in result.visualizations] == flights
        assert result.distinct_airports == {"HEL", "JFK", "ARN", "LHR"}

    def test_visualization_fields(self, flights, airports) -> None:
        visualization = build_flight_visualizations(flights[:1], airports).visualizations[0]

        assert visualization.from_code == "HEL"
        assert visualization.to_code == "JFK"
        assert visualization.from_coordinates == airports["HEL"].coordinates
        assert visualization.to_coordinates == airports["JFK"].coordinates
        assert visualization.departure_timestamp == datetime(2019, 7, 28, 20, 20)
        assert visualization.flight_number == "AY5"
        assert visualization.airline == "Finnair"
        assert visualization.route_key == "HEL-JFK"

    def test_unknown_arrival(self, make_flight, airports) -> None:
        flight = make_flight("HEL", "ZZZ", datetime(2019, 1, 1, 10, 0), flight_code="AY9")

        result = build_flight_visualizations([flight], airports)

        assert result.visualizations == []
        assert result.errors == [
            'Flight Finnair AY9: Arrival airport "ZZZ" not found in airports database'
        ]
        assert result.unresolved_airports == {"ZZZ"}
        assert result.distinct_airports == {"HEL", "ZZZ"}

    def test_both_endpoints_reported(self, make_flight, airports) -> None:
        flight = make_flight("QQQ", "ZZZ", datetime(2019, 1, 1, 10, 0), flight_code="AY9")

        result = build_flight_visualizations([flight], airports)

        assert result.errors == [
            'Flight Finnair AY9: Departure airport "QQQ" not found in airports database',
            'Flight Finnair AY9: Arrival airport "ZZZ" not found in airports database',
        ]
        assert result.unresolved_airports == {"QQQ", "ZZZ"}

    def test_replacement_code(self, make_flight, airports) -> None:
        flight = make_flight("TXL", "HEL", datetime(2015, 5, 1, 6, 0))

        result = build_flight_visualizations([flight], airports, {"TXL": "BER"})

        assert result.errors == []
        assert result.visualizations[0].from_code == "BER"
        assert result.visualizations[0].flight.departure_airport == "TXL"

    def test_drawn_iff_both_resolve(self, make_flight, airports) -> None:
        """Each flight is either drawn or reported, never both."""
        when = datetime(2019, 1, 1, 10, 0)
        flights = [
            make_flight("HEL", "JFK", when),
            make_flight("HEL", "ZZZ", when),
            make_flight("ZZZ", "HEL", when),
            make_flight("ARN", "LHR", when),
        ]

        result = build_flight_visualizations(flights, airports)

        drawn = [v.flight for v in result.visualizations]
        assert drawn == [flights[0], flights[3]]
        assert len(result.errors) == 2

    def test_empty_input(self, airports) -> None:
        result = build_flight_visualizations([], airports)

        assert result.visualizations == []
        assert result.total_flights_parsed == 0
