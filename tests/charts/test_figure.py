"""Tests for the Plotly scene figure."""

import plotly.graph_objects as go
import pytest

from flightmap.charts.figure import build_scene_figure, viewport_ranges
from flightmap.charts.route_map import render_static_scene
from flightmap.charts.scene import SceneState, Viewport


class TestViewportRanges:
    """Tests for viewport_ranges."""

    def test_uses_bounds(self) -> None:
        viewport = Viewport(center=(0, 0), zoom=3, bounds=((40.0, -80.0), (62.0, 30.0)))

        assert viewport_ranges(viewport) == ([40.0, 62.0], [-80.0, 30.0])

    def test_window_around_center(self) -> None:
        lat_range, lon_range = viewport_ranges(Viewport(center=(54.0, 15.0), zoom=4))

        assert lat_range[0] < 54.0 < lat_range[1]
        assert lon_range[0] < 15.0 < lon_range[1]
        assert lon_range[1] - lon_range[0] == pytest.approx(2 * 180 * 1024 / (256 * 16))


class TestBuildSceneFigure:
    """Tests for build_scene_figure."""

    def test_empty_scene(self) -> None:
        fig = build_scene_figure(SceneState())

        assert isinstance(fig, go.Figure)
        assert len(fig.data) == 0

    def test_trace_per_segment_and_marker(self, visualizations) -> None:
        scene = render_static_scene(SceneState(), visualizations)

        fig = build_scene_figure(scene)

        # 3 routes x 10 segments + 4 airports
        assert len(fig.data) == 34
        assert all(isinstance(trace, go.Scattergeo) for trace in fig.data)

    def test_every_segment_shows_route_popup(self, visualizations) -> None:
        """Hovering any segment of a route shows the same route popup."""
        scene = render_static_scene(SceneState(), visualizations[:1])

        fig = build_scene_figure(scene)

        lines = [trace for trace in fig.data if trace.mode == "lines"]
        assert len(lines) == 10
        assert all(trace.hoverinfo == "text" for trace in lines)
        assert {trace.text for trace in lines} == {scene.routes["HEL-JFK"].popup}
        assert "HEL ↔ JFK" in lines[0].text

    def test_moving_marker_trace(self, visualizations) -> None:
        scene = render_static_scene(SceneState(), visualizations[:1])
        scene.set_moving_marker("HEL-JFK", (62.0, -10.0))

        fig = build_scene_figure(scene)

        playback = [trace for trace in fig.data if trace.name == "playback"]
        assert len(playback) == 1
        assert playback[0].marker.symbol == "diamond"

    def test_highlighted_marker_outline(self, visualizations) -> None:
        scene = render_static_scene(SceneState(), visualizations[:1])
        scene.highlight("HEL")

        fig = build_scene_figure(scene)

        hel = next(trace for trace in fig.data if trace.name == "HEL")
        assert hel.marker.line.color == "#facc15"
