"""
Plotly rendering of the route map scene.

Turns the current SceneState into a Scattergeo figure: one trace per
route segment, one per airport marker, and one for the playback marker.
"""

from typing import Optional

import plotly.graph_objects as go

from flightmap.charts.route_map import TILE_SIZE
from flightmap.charts.scene import SceneState, Viewport
from flightmap.config import FlightMapConfig, MapConfig

__all__ = ["build_scene_figure", "viewport_ranges"]

# Highlighted markers get a thick outline in the highlight color
HIGHLIGHT_OUTLINE = 4
MARKER_OUTLINE = 1


def viewport_ranges(viewport: Viewport, config: Optional[MapConfig] = None) -> tuple:
    """
    Latitude and longitude axis ranges for a viewport.

    Uses the fitted bounds when present, otherwise derives a window from
    the zoom level around the center.
    """
    if viewport.bounds is not None:
        (south, west), (north, east) = viewport.bounds
        return [south, north], [west, east]

    config = config or FlightMapConfig.map
    lat, lon = viewport.center
    lon_half = 180 * config.map_width / (TILE_SIZE * 2 ** viewport.zoom)
    lat_half = 90 * config.map_height / (TILE_SIZE * 2 ** viewport.zoom)
    return (
        [max(lat - lat_half, -90), min(lat + lat_half, 90)],
        [lon - lon_half, lon + lon_half],
    )


def build_scene_figure(
    scene: SceneState, config: Optional[MapConfig] = None
) -> go.Figure:
    """
    Create a Plotly figure showing everything drawn in the scene.

    Args:
        scene: Current scene state.
        config: Map settings. Uses FlightMapConfig.map if not specified.

    Returns:
        Plotly Figure object.
    """
    config = config or FlightMapConfig.map
    style = FlightMapConfig.style
    fig = go.Figure()

    # Draw route segments; every segment opens the popup of its route
    for route in scene.routes.values():
        for segment in route.segments:
            fig.add_trace(
                go.Scattergeo(
                    lat=[point[0] for point in segment.points],
                    lon=[point[1] for point in segment.points],
                    mode="lines",
                    line=dict(width=segment.weight, color=segment.color),
                    opacity=segment.opacity,
                    text=route.popup,
                    hoverinfo="text",
                    name=route.key,
                    showlegend=False,
                )
            )

    # Draw airport markers
    for marker in scene.markers.values():
        outline = HIGHLIGHT_OUTLINE if marker.highlighted else MARKER_OUTLINE
        outline_color = style.highlight_color if marker.highlighted else "#ffffff"
        fig.add_trace(
            go.Scattergeo(
                lat=[marker.position[0]],
                lon=[marker.position[1]],
                mode="markers",
                marker=dict(
                    size=marker.size,
                    color=marker.color,
                    symbol="circle",
                    line=dict(width=outline, color=outline_color),
                ),
                text=marker.popup,
                hoverinfo="text",
                name=marker.code,
                showlegend=False,
            )
        )

    # Draw playback marker
    if scene.moving_marker is not None:
        fig.add_trace(
            go.Scattergeo(
                lat=[scene.moving_marker.position[0]],
                lon=[scene.moving_marker.position[1]],
                mode="markers",
                marker=dict(
                    size=style.moving_marker_size,
                    color=style.moving_marker_color,
                    symbol="diamond",
                ),
                hoverinfo="skip",
                name="playback",
                showlegend=False,
            )
        )

    lat_range, lon_range = viewport_ranges(scene.viewport, config)
    fig.update_layout(
        geo=dict(
            projection_type=config.projection,
            showland=True,
            landcolor=config.land_color,
            showocean=True,
            oceancolor=config.ocean_color,
            showcountries=True,
            countrycolor=config.country_border_color,
            lataxis_range=lat_range,
            lonaxis_range=lon_range,
        ),
        margin={"r": 0, "t": 0, "l": 0, "b": 0},
        height=config.map_height,
    )

    return fig
