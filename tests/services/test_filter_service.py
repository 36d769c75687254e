"""Tests for the year filter service."""

import pandera as pa
import pytest

from flightmap.schemas.visualization import VisualizationFrameSchema
from flightmap.services.filter_service import (
    filter_by_year,
    get_available_years,
    get_year_counts,
    to_frame,
)


class TestToFrame:
    """Tests for to_frame."""

    def test_one_row_per_visualization(self, visualizations) -> None:
        df = to_frame(visualizations)

        assert len(df) == 5
        assert df["position"].tolist() == [0, 1, 2, 3, 4]
        assert df["year"].tolist() == [2019, 2019, 2020, 2020, 2019]

    def test_empty(self) -> None:
        df = to_frame([])

        assert df.empty
        assert "year" in df.columns

    def test_schema_rejects_bad_year(self, visualizations) -> None:
        df = to_frame(visualizations)
        df.loc[0, "year"] = 0

        with pytest.raises(pa.errors.SchemaError):
            VisualizationFrameSchema.validate(df)


class TestYearCounts:
    """Tests for get_year_counts and get_available_years."""

    def test_counts_sorted_by_year(self, visualizations) -> None:
        counts = get_year_counts(visualizations)

        assert counts == {2019: 3, 2020: 2}
        assert list(counts) == [2019, 2020]

    def test_available_years(self, visualizations) -> None:
        assert get_available_years(visualizations) == [2019, 2020]

    def test_empty(self) -> None:
        assert get_year_counts([]) == {}


class TestFilterByYear:
    """Tests for filter_by_year."""

    def test_none_returns_everything(self, visualizations) -> None:
        assert filter_by_year(visualizations, None) == visualizations

    def test_keeps_order(self, visualizations) -> None:
        result = filter_by_year(visualizations, 2019)

        assert result == [visualizations[0], visualizations[1], visualizations[4]]

    def test_year_without_flights(self, visualizations) -> None:
        assert filter_by_year(visualizations, 2005) == []

    def test_counts_match_filter(self, visualizations) -> None:
        """Every year count equals the size of that year's filter."""
        for year, count in get_year_counts(visualizations).items():
            assert len(filter_by_year(visualizations, year)) == count
