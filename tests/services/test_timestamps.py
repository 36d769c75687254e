"""Tests for timestamp parsing."""

from datetime import datetime

import pytest

from flightmap.services.timestamps import normalize_dotted_date, parse_timestamp


class TestNormalizeDottedDate:
    """Tests for normalize_dotted_date."""

    def test_rewrites_dotted_layout(self) -> None:
        assert normalize_dotted_date("28.07.2019 20:20:00") == "2019-07-28 20:20:00"

    def test_ignores_iso_layout(self) -> None:
        assert normalize_dotted_date("2019-07-28 20:20:00") is None

    def test_requires_time_part(self) -> None:
        assert normalize_dotted_date("28.07.2019") is None


class TestParseTimestamp:
    """Tests for parse_timestamp."""

    @pytest.mark.parametrize(
        "value",
        ["2019-07-28 20:20:00", "28.07.2019 20:20:00", "  2019-07-28 20:20:00  "],
    )
    def test_supported_layouts(self, value: str) -> None:
        assert parse_timestamp(value) == datetime(2019, 7, 28, 20, 20)

    def test_general_fallback(self) -> None:
        """Layouts outside the two primary ones go through pandas."""
        assert parse_timestamp("2019-07-28T20:20") == datetime(2019, 7, 28, 20, 20)

    def test_timezone_is_dropped(self) -> None:
        """Offsets are discarded and the wall-clock time is kept."""
        result = parse_timestamp("2019-07-28T20:20:00+03:00")

        assert result == datetime(2019, 7, 28, 20, 20)
        assert result.tzinfo is None

    @pytest.mark.parametrize("value", [None, "", "   ", "not-a-date"])
    def test_invalid_values(self, value) -> None:
        assert parse_timestamp(value) is None

    @pytest.mark.parametrize(
        "value", ["1500-01-01 10:00:00", "01.01.1500 10:00:00", "2300-01-01 10:00:00"]
    )
    def test_out_of_pandas_range(self, value: str) -> None:
        """Dates pandas cannot hold as timestamps are treated as invalid."""
        assert parse_timestamp(value) is None

    def test_range_edges_accepted(self) -> None:
        assert parse_timestamp("1678-01-01 00:00:00") == datetime(1678, 1, 1)
        assert parse_timestamp("2262-01-01 00:00:00") == datetime(2262, 1, 1)
