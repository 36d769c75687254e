"""Tests for the static route map scene."""

from datetime import datetime

import pytest

from flightmap.charts.route_map import (
    collect_airports,
    fit_viewport,
    group_routes,
    render_static_scene,
)
from flightmap.charts.scene import SceneState, Viewport
from flightmap.schemas.visualization import create_flight_visualization


class TestGroupRoutes:
    """Tests for group_routes."""

    def test_directions_share_one_route(self, visualizations) -> None:
        groups = group_routes(visualizations)

        assert list(groups) == ["HEL-JFK", "ARN-HEL", "HEL-LHR"]
        hel_jfk = groups["HEL-JFK"]
        assert hel_jfk.from_airport.iata_code == "HEL"
        assert [v.flight_number for v in hel_jfk.outbound] == ["AY5"]
        assert [v.flight_number for v in hel_jfk.returning] == ["AY6"]
        assert hel_jfk.flight_count == 2

    def test_first_flight_sets_direction(self, visualizations) -> None:
        group = group_routes(visualizations)["ARN-HEL"]

        assert group.from_airport.iata_code == "ARN"
        assert group.to_airport.iata_code == "HEL"


class TestCollectAirports:
    """Tests for collect_airports."""

    def test_first_seen_order(self, visualizations) -> None:
        assert list(collect_airports(visualizations)) == ["HEL", "JFK", "ARN", "LHR"]


class TestFitViewport:
    """Tests for fit_viewport."""

    def test_no_airports(self) -> None:
        assert fit_viewport([]) == Viewport(center=(54.0, 15.0), zoom=4)

    def test_padded_bounds(self, airports) -> None:
        viewport = fit_viewport([airports["HEL"], airports["LHR"]])

        (south, west), (north, east) = viewport.bounds
        lat_span = 60.3172 - 51.4706
        lon_span = 24.9633 - -0.4619
        assert south == pytest.approx(51.4706 - lat_span * 0.1)
        assert north == pytest.approx(60.3172 + lat_span * 0.1)
        assert west == pytest.approx(-0.4619 - lon_span * 0.1)
        assert east == pytest.approx(24.9633 + lon_span * 0.1)
        assert viewport.center == pytest.approx(((south + north) / 2, (west + east) / 2))

    def test_never_zooms_past_four(self, airports) -> None:
        """A single airport fits at any zoom, so the cap applies."""
        assert fit_viewport([airports["HEL"]]).zoom == 4

    def test_wide_region_zooms_out(self, airports) -> None:
        viewport = fit_viewport([airports["HEL"], airports["JFK"]])

        assert 1 <= viewport.zoom < 4


class TestRenderStaticScene:
    """Tests for render_static_scene."""

    def test_draws_routes_and_markers(self, visualizations) -> None:
        scene = render_static_scene(SceneState(), visualizations)

        assert set(scene.markers) == {"HEL", "JFK", "ARN", "LHR"}
        assert set(scene.routes) == {"HEL-JFK", "ARN-HEL", "HEL-LHR"}
        assert all(len(route.segments) == 10 for route in scene.routes.values())
        assert scene.viewport.bounds is not None

    def test_marker_colors_and_popups(self, visualizations) -> None:
        scene = render_static_scene(SceneState(), visualizations)

        assert scene.markers["HEL"].color == "#ef4444"
        assert scene.markers["HEL"].frequency == 5
        assert "Flights: 5" in scene.markers["HEL"].popup

    def test_route_popup_lists_both_directions(self, visualizations) -> None:
        scene = render_static_scene(SceneState(), visualizations)

        popup = scene.routes["HEL-JFK"].popup
        assert "HEL ↔ JFK" in popup
        assert "HEL → JFK (1)" in popup
        assert "JFK → HEL (1)" in popup
        assert "Finnair AY5, 2019-07-28 20:20" in popup
        assert "Finnair AY6, 2020-01-05 17:45" in popup
        assert scene.routes["HEL-JFK"].popup_segment == 4

    def test_gradient_runs_from_departure_color(self, visualizations) -> None:
        scene = render_static_scene(SceneState(), visualizations)

        segments = scene.routes["HEL-LHR"].segments
        assert segments[0].color == scene.markers["HEL"].color
        assert segments[-1].color == scene.markers["LHR"].color

    def test_rerender_replaces_everything(self, visualizations) -> None:
        scene = render_static_scene(SceneState(), visualizations)
        scene.open_marker("HEL")

        render_static_scene(scene, visualizations[:1])

        assert set(scene.markers) == {"HEL", "JFK"}
        assert set(scene.routes) == {"HEL-JFK"}
        assert scene.open_marker_code is None

    def test_empty_resets_view(self, visualizations) -> None:
        scene = render_static_scene(SceneState(), visualizations)

        render_static_scene(scene, [])

        assert scene.is_empty
        assert scene.viewport == Viewport(center=(54.0, 15.0), zoom=4)

    def test_same_airport_route(self, make_flight, airports) -> None:
        """A flight from and to the same airport draws a degenerate route."""
        loop = create_flight_visualization(
            make_flight("HEL", "HEL", datetime(2019, 1, 1, 10, 0), flight_code="AY0"),
            airports["HEL"],
            airports["HEL"],
        )

        scene = render_static_scene(SceneState(), [loop])

        assert set(scene.routes) == {"HEL-HEL"}
        assert scene.markers["HEL"].frequency == 2
