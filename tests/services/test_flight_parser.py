"""Tests for the flight CSV parser."""

from datetime import datetime

from flightmap.services.flight_parser import find_missing_columns, parse_flights_csv

HEADER = (
    "airline,flight_code,departure_airport,arrival_airport,"
    "departure_timestamp_local,arrival_timestamp_local"
)


class TestParseFlightsCsv:
    """Tests for parse_flights_csv."""

    def test_parses_valid_rows(self, sample_csv: str) -> None:
        result = parse_flights_csv(sample_csv)

        assert result.errors == []
        assert result.total_rows == 2
        assert result.successful_rows == 2
        assert result.failed_rows == 0

        first, second = result.flights
        assert first.airline == "Finnair"
        assert first.flight_code == "AY5"
        assert first.route == "HEL → JFK"
        assert first.departure_timestamp_local == datetime(2019, 7, 28, 20, 20)
        assert second.departure_timestamp_local == datetime(2020, 7, 28, 18, 0)

    def test_empty_file(self) -> None:
        result = parse_flights_csv("  \n\n")

        assert result.errors == ["CSV file is empty"]
        assert result.flights == []
        assert result.total_rows == 0

    def test_header_only(self) -> None:
        result = parse_flights_csv(HEADER + "\n")

        assert result.errors == []
        assert result.total_rows == 0

    def test_missing_column_rejects_every_row(self) -> None:
        """A missing required column stops parsing before any row is read."""
        csv = (
            "airline,departure_airport,arrival_airport,"
            "departure_timestamp_local,arrival_timestamp_local\n"
            "Finnair,HEL,JFK,2019-07-28 20:20:00,2019-07-28 22:05:00\n"
            "Finnair,JFK,HEL,2019-07-29 20:20:00,2019-07-30 09:05:00\n"
        )

        result = parse_flights_csv(csv)

        assert result.errors == ["Missing required columns: flight_code"]
        assert result.flights == []
        assert result.total_rows == 2
        assert result.failed_rows == 2

    def test_header_order_and_case_ignored(self) -> None:
        csv = (
            "Arrival_Timestamp_Local,DEPARTURE_AIRPORT,airline,Flight_Code,"
            "arrival_airport,departure_timestamp_local,notes\n"
            "2019-07-28 22:05:00,HEL,Finnair,AY5,JFK,2019-07-28 20:20:00,window seat\n"
        )

        result = parse_flights_csv(csv)

        assert result.successful_rows == 1
        assert result.flights[0].departure_airport == "HEL"
        assert result.flights[0].arrival_airport == "JFK"

    def test_missing_values_message(self) -> None:
        csv = HEADER + "\nFinnair,,HEL,,2019-07-28 20:20:00,2019-07-28 22:05:00\n"

        result = parse_flights_csv(csv)

        assert result.errors == [
            "Row 2: Missing values for flight_code, arrival_airport "
            "(empty or not provided)"
        ]
        assert result.failed_rows == 1

    def test_short_row_reports_missing_values(self) -> None:
        result = parse_flights_csv(HEADER + "\nFinnair,AY5,HEL\n")

        assert result.errors == [
            "Row 2: Missing values for arrival_airport, departure_timestamp_local, "
            "arrival_timestamp_local (empty or not provided)"
        ]

    def test_invalid_timestamp_is_truncated(self) -> None:
        """The offending value is quoted and cut to 30 characters."""
        bad = "x" * 40
        csv = HEADER + f"\nFinnair,AY5,HEL,JFK,{bad},2019-07-28 22:05:00\n"

        result = parse_flights_csv(csv)

        assert result.errors == [
            f'Row 2: Invalid timestamp format: departure_timestamp_local="{"x" * 30}"'
        ]

    def test_both_timestamps_invalid(self) -> None:
        csv = HEADER + "\nFinnair,AY5,HEL,JFK,soon,later\n"

        result = parse_flights_csv(csv)

        assert result.errors == [
            'Row 2: Invalid timestamp format: departure_timestamp_local="soon", '
            'arrival_timestamp_local="later"'
        ]

    def test_row_numbers_skip_blank_lines(self) -> None:
        """Rows are numbered among non-blank lines, header counted as row 1."""
        csv = (
            HEADER
            + "\n\nFinnair,AY5,HEL,JFK,2019-07-28 20:20:00,2019-07-28 22:05:00\n"
            + "\nFinnair,,HEL,JFK,2019-07-28 20:20:00,2019-07-28 22:05:00\n"
        )

        result = parse_flights_csv(csv)

        assert result.errors[0].startswith("Row 3:")

    def test_counts_add_up(self) -> None:
        csv = (
            HEADER
            + "\nFinnair,AY5,HEL,JFK,2019-07-28 20:20:00,2019-07-28 22:05:00"
            + "\nFinnair,,HEL,JFK,2019-07-28 20:20:00,2019-07-28 22:05:00"
            + "\nFinnair,AY7,HEL,JFK,bad,2019-07-28 22:05:00"
            + "\nSAS,SK1,ARN,HEL,28.07.2019 10:00:00,28.07.2019 12:00:00\n"
        )

        result = parse_flights_csv(csv)

        assert result.total_rows == 4
        assert result.successful_rows == len(result.flights) == 2
        assert result.failed_rows == len(result.errors) == 2
        assert result.successful_rows + result.failed_rows == result.total_rows

    def test_quoted_fields(self) -> None:
        csv = HEADER + '\n"Air, Inc",AY5,HEL,JFK,2019-07-28 20:20:00,2019-07-28 22:05:00\n'

        result = parse_flights_csv(csv)

        assert result.flights[0].airline == "Air, Inc"

    def test_unexpected_error_without_message(self, monkeypatch) -> None:
        """A row error with an empty message is reported by its type name."""

        def fail(*args, **kwargs):
            raise RuntimeError()

        monkeypatch.setattr("flightmap.services.flight_parser._parse_row", fail)
        csv = HEADER + "\nFinnair,AY5,HEL,JFK,2019-07-28 20:20:00,2019-07-28 22:05:00\n"

        result = parse_flights_csv(csv)

        assert result.errors == ["Row 2: RuntimeError"]
        assert result.failed_rows == 1


class TestFindMissingColumns:
    """Tests for find_missing_columns."""

    def test_reports_in_required_order(self) -> None:
        missing = find_missing_columns({"b": 0}, ("a", "b", "c"))

        assert missing == ["a", "c"]
