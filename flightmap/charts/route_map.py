"""
Route map scene builder.

Draws the static (non-animated) scene for a visualization set: airport
markers colored by traffic frequency and one gradient great-circle line
per airport pair, then fits the view to the visible airports.
"""

import logging
import math
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional, Sequence

from flightmap.charts.colors import AirportColoring, build_airport_coloring
from flightmap.charts.geodesic import build_route_segments, popup_segment_index
from flightmap.charts.popups import airport_popup, route_popup
from flightmap.charts.scene import SceneState, Viewport
from flightmap.config import FlightMapConfig, MapConfig
from flightmap.schemas.airport import Airport
from flightmap.schemas.visualization import FlightVisualization

logger = logging.getLogger(__name__)

__all__ = [
    "RouteGroup",
    "assign_to_group",
    "group_routes",
    "collect_airports",
    "fit_viewport",
    "draw_airport_marker",
    "draw_route",
    "render_static_scene",
]

# Leaflet-style tile size used to estimate the zoom that fits a region
TILE_SIZE = 256


@dataclass
class RouteGroup:
    """
    All flights between one airport pair.

    Attributes:
        first: The first-encountered flight; its direction is the one drawn.
        outbound: Flights in the drawn direction (first included).
        returning: Flights in the opposite direction.
    """

    key: str
    first: FlightVisualization
    outbound: List[FlightVisualization] = field(default_factory=list)
    returning: List[FlightVisualization] = field(default_factory=list)

    @property
    def from_airport(self) -> Airport:
        return self.first.from_airport

    @property
    def to_airport(self) -> Airport:
        return self.first.to_airport

    @property
    def flight_count(self) -> int:
        return len(self.outbound) + len(self.returning)


def assign_to_group(
    groups: Dict[str, RouteGroup], visualization: FlightVisualization
) -> RouteGroup:
    """
    Add a flight to the group for its airport pair, creating it if needed.

    The direction is compared against the group's first flight.
    """
    key = visualization.route_key
    group = groups.get(key)
    if group is None:
        group = groups[key] = RouteGroup(key=key, first=visualization)

    if visualization.from_code == group.first.from_code:
        group.outbound.append(visualization)
    else:
        group.returning.append(visualization)
    return group


def group_routes(visualizations: Iterable[FlightVisualization]) -> Dict[str, RouteGroup]:
    """
    Group flights by direction-independent route key.

    Returns:
        Route groups in first-encounter order.
    """
    groups: Dict[str, RouteGroup] = {}
    for visualization in visualizations:
        assign_to_group(groups, visualization)
    return groups


def collect_airports(visualizations: Iterable[FlightVisualization]) -> Dict[str, Airport]:
    """Distinct airports in first-seen order."""
    airports: Dict[str, Airport] = {}
    for visualization in visualizations:
        airports.setdefault(visualization.from_code, visualization.from_airport)
        airports.setdefault(visualization.to_code, visualization.to_airport)
    return airports


def _fit_zoom(lat_span: float, lon_span: float, config: MapConfig) -> float:
    if lat_span <= 0 and lon_span <= 0:
        return config.max_fit_zoom

    candidates = []
    if lon_span > 0:
        candidates.append(math.log2(config.map_width * 360 / (TILE_SIZE * lon_span)))
    if lat_span > 0:
        candidates.append(math.log2(config.map_height * 180 / (TILE_SIZE * lat_span)))

    zoom = math.floor(min(candidates))
    return float(min(max(zoom, config.min_zoom), config.max_fit_zoom))


def fit_viewport(
    airports: Sequence[Airport], config: Optional[MapConfig] = None
) -> Viewport:
    """
    Viewport covering all airports, padded, never zoomed in past max_fit_zoom.

    Falls back to the default regional view when there are no airports.
    """
    config = config or FlightMapConfig.map
    if not airports:
        return Viewport(center=config.default_center, zoom=config.default_zoom)

    lats = [airport.latitude for airport in airports]
    lons = [airport.longitude for airport in airports]
    south, north = min(lats), max(lats)
    west, east = min(lons), max(lons)

    lat_pad = (north - south) * config.fit_padding_ratio
    lon_pad = (east - west) * config.fit_padding_ratio
    south, north = max(south - lat_pad, -90.0), min(north + lat_pad, 90.0)
    west, east = west - lon_pad, east + lon_pad

    center = ((south + north) / 2, (west + east) / 2)
    zoom = _fit_zoom(north - south, east - west, config)
    return Viewport(center=center, zoom=zoom, bounds=((south, west), (north, east)))


def draw_airport_marker(
    scene: SceneState, airport: Airport, coloring: AirportColoring
) -> None:
    """Add one airport marker colored by its frequency band."""
    code = airport.iata_code
    frequency = coloring.frequency_for(code)
    scene.add_marker(
        code=code,
        position=airport.coordinates,
        color=coloring.color_for(code),
        popup=airport_popup(airport, frequency),
        frequency=frequency,
    )


def draw_route(scene: SceneState, group: RouteGroup, coloring: AirportColoring) -> None:
    """Add one deduplicated route with all of its gradient segments."""
    segments = build_route_segments(
        group.from_airport.coordinates,
        group.to_airport.coordinates,
        coloring.color_for(group.from_airport.iata_code),
        coloring.color_for(group.to_airport.iata_code),
    )
    scene.add_route(
        key=group.key,
        from_code=group.from_airport.iata_code,
        to_code=group.to_airport.iata_code,
        popup=route_popup(
            group.from_airport.iata_code,
            group.to_airport.iata_code,
            group.outbound,
            group.returning,
        ),
        popup_segment=popup_segment_index(segments),
    )
    for segment in segments:
        scene.add_segment(group.key, segment)


def render_static_scene(
    scene: SceneState,
    visualizations: Sequence[FlightVisualization],
    coloring: Optional[AirportColoring] = None,
) -> SceneState:
    """
    Rebuild the full non-animated scene.

    Clears everything first, draws routes then markers, and fits the
    viewport to the drawn airports (or resets it when there is no data).

    Args:
        scene: Scene to redraw.
        visualizations: Current (possibly year-filtered) flights.
        coloring: Precomputed frequency colors; computed from the flights
            if not given.

    Returns:
        The same scene, for chaining.
    """
    scene.clear()
    coloring = coloring or build_airport_coloring(visualizations)

    for group in group_routes(visualizations).values():
        draw_route(scene, group, coloring)

    airports = collect_airports(visualizations)
    for airport in airports.values():
        draw_airport_marker(scene, airport, coloring)

    scene.set_viewport(fit_viewport(list(airports.values())))

    logger.info(
        "Rendered %d airports and %d routes from %d flights",
        len(scene.markers),
        len(scene.routes),
        len(visualizations),
    )
    return scene
