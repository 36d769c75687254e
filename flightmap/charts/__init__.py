"""
Charts module for the route map.

Provides frequency coloring, great-circle geometry, zoom-adaptive
styling, the scene state and its Plotly rendering.
"""

from flightmap.charts.colors import (
    AirportColoring,
    build_airport_coloring,
    compute_airport_frequencies,
    frequency_color,
    interpolate_color,
    ratio_color,
)
from flightmap.charts.figure import build_scene_figure
from flightmap.charts.geodesic import (
    SegmentGeometry,
    build_route_segments,
    great_circle_points,
    split_segments,
)
from flightmap.charts.route_map import (
    RouteGroup,
    fit_viewport,
    group_routes,
    render_static_scene,
)
from flightmap.charts.scene import SceneState, Viewport
from flightmap.charts.styling import line_weight, marker_size

__all__ = [
    # Colors
    "AirportColoring",
    "build_airport_coloring",
    "compute_airport_frequencies",
    "frequency_color",
    "ratio_color",
    "interpolate_color",
    # Geometry
    "SegmentGeometry",
    "great_circle_points",
    "split_segments",
    "build_route_segments",
    # Styling
    "line_weight",
    "marker_size",
    # Scene
    "SceneState",
    "Viewport",
    "RouteGroup",
    "group_routes",
    "fit_viewport",
    "render_static_scene",
    # Figure
    "build_scene_figure",
]
