"""
Scene state for the route map.

Tracks what is currently drawn (airport markers, route segments, the
playback marker) and what is currently selected (the open marker
popup). Shapes are mutable so zoom changes restyle them in place
instead of rebuilding the scene.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

from flightmap.charts.geodesic import LatLon, SegmentGeometry
from flightmap.charts.styling import expanded_marker_size, line_weight, marker_size
from flightmap.config import FlightMapConfig, MapConfig, StyleConfig

logger = logging.getLogger(__name__)

__all__ = [
    "MarkerShape",
    "SegmentShape",
    "RouteShape",
    "MovingMarker",
    "Viewport",
    "SceneState",
]


@dataclass
class MarkerShape:
    """
    Airport marker.

    A marker is expanded while hovered or while its popup is open, so an
    open marker stays expanded after the pointer leaves it.
    """

    code: str
    position: LatLon
    color: str
    popup: str
    frequency: int = 0
    size: float = 0.0
    hovered: bool = False
    popup_open: bool = False
    highlighted: bool = False

    @property
    def expanded(self) -> bool:
        return self.hovered or self.popup_open


@dataclass
class SegmentShape:
    """One drawn run of a route line."""

    route_key: str
    index: int
    points: Tuple[LatLon, ...]
    color: str
    weight: float
    opacity: float


@dataclass
class RouteShape:
    """
    A drawn route: its segments plus the popup they share.

    Attributes:
        popup_segment: Index of the segment that owns the popup.
    """

    key: str
    from_code: str
    to_code: str
    popup: str
    popup_segment: Optional[int] = None
    segments: List[SegmentShape] = field(default_factory=list)


@dataclass
class MovingMarker:
    """Playback marker travelling along the route being animated."""

    route_key: str
    position: LatLon


@dataclass(frozen=True)
class Viewport:
    """
    Visible map region.

    Attributes:
        bounds: ((south, west), (north, east)) when fitted to data.
    """

    center: LatLon
    zoom: float
    bounds: Optional[Tuple[LatLon, LatLon]] = None


class SceneState:
    """
    Registry of drawn shapes and the current selection.

    Owned by the rendering layer; the playback engine mutates it through
    the same operations.
    """

    def __init__(
        self,
        style: Optional[StyleConfig] = None,
        map_config: Optional[MapConfig] = None,
    ) -> None:
        self._style = style or FlightMapConfig.style
        self._map = map_config or FlightMapConfig.map
        self.markers: Dict[str, MarkerShape] = {}
        self.routes: Dict[str, RouteShape] = {}
        self.moving_marker: Optional[MovingMarker] = None
        self.open_marker_code: Optional[str] = None
        self.viewport = self.default_viewport()

    def default_viewport(self) -> Viewport:
        return Viewport(center=self._map.default_center, zoom=self._map.default_zoom)

    @property
    def zoom(self) -> float:
        return self.viewport.zoom

    @property
    def is_empty(self) -> bool:
        return not self.markers and not self.routes

    # -------------------------
    # Drawing
    # -------------------------

    def clear(self) -> None:
        """Remove every marker, route and selection."""
        self.markers.clear()
        self.routes.clear()
        self.moving_marker = None
        self.open_marker_code = None

    def has_marker(self, code: str) -> bool:
        return code in self.markers

    def add_marker(
        self,
        code: str,
        position: LatLon,
        color: str,
        popup: str,
        frequency: int = 0,
    ) -> MarkerShape:
        """Draw an airport marker sized for the current zoom."""
        marker = MarkerShape(
            code=code,
            position=position,
            color=color,
            popup=popup,
            frequency=frequency,
        )
        self._restyle_marker(marker)
        self.markers[code] = marker
        return marker

    def add_route(
        self,
        key: str,
        from_code: str,
        to_code: str,
        popup: str,
        popup_segment: Optional[int] = None,
    ) -> RouteShape:
        """Register a route; its segments are added separately."""
        route = RouteShape(
            key=key,
            from_code=from_code,
            to_code=to_code,
            popup=popup,
            popup_segment=popup_segment,
        )
        self.routes[key] = route
        return route

    def add_segment(self, key: str, geometry: SegmentGeometry) -> SegmentShape:
        """Draw one segment of a registered route."""
        segment = SegmentShape(
            route_key=key,
            index=geometry.index,
            points=geometry.points,
            color=geometry.color,
            weight=line_weight(self.zoom, self._style),
            opacity=self._style.line_opacity,
        )
        self.routes[key].segments.append(segment)
        return segment

    def route_popup(self, key: str, segment_index: int) -> str:
        """
        Popup opened by clicking a route segment.

        Every segment of a route opens the popup owned by its middle segment.

        Raises:
            KeyError: If the route or segment is not drawn.
        """
        route = self.routes[key]
        if not any(segment.index == segment_index for segment in route.segments):
            raise KeyError(f"Segment {segment_index} of route {key} is not drawn")
        return route.popup

    def set_moving_marker(self, key: str, position: LatLon) -> None:
        self.moving_marker = MovingMarker(route_key=key, position=position)

    def remove_moving_marker(self) -> None:
        self.moving_marker = None

    # -------------------------
    # Zoom
    # -------------------------

    def set_viewport(self, viewport: Viewport) -> None:
        """Move the view, restyling shapes if the zoom changed."""
        zoom_changed = viewport.zoom != self.viewport.zoom
        self.viewport = viewport
        if zoom_changed:
            self.restyle()

    def set_zoom(self, zoom: float) -> None:
        """
        Change the zoom level and restyle existing shapes in place.

        The center is kept. Fitted bounds are dropped on a real change so the
        visible window follows the new zoom.
        """
        if zoom == self.viewport.zoom:
            return
        self.set_viewport(Viewport(center=self.viewport.center, zoom=zoom))

    def restyle(self) -> None:
        """Reapply zoom-dependent sizes to every drawn shape."""
        weight = line_weight(self.zoom, self._style)
        for route in self.routes.values():
            for segment in route.segments:
                segment.weight = weight
        for marker in self.markers.values():
            self._restyle_marker(marker)
        logger.debug("Restyled scene for zoom %s", self.zoom)

    def _restyle_marker(self, marker: MarkerShape) -> None:
        if marker.expanded:
            marker.size = expanded_marker_size(self.zoom, self._style)
        else:
            marker.size = marker_size(self.zoom, self._style)

    # -------------------------
    # Selection
    # -------------------------

    def open_marker(self, code: str) -> str:
        """
        Open a marker's popup, closing any other open popup first.

        Returns:
            The popup content.

        Raises:
            KeyError: If no marker is drawn for the code.
        """
        marker = self.markers[code]
        if self.open_marker_code is not None and self.open_marker_code != code:
            self.close_marker()

        marker.popup_open = True
        self.open_marker_code = code
        self._restyle_marker(marker)
        return marker.popup

    def close_marker(self) -> None:
        """Close the open popup and revert its marker's expanded state."""
        if self.open_marker_code is None:
            return
        marker = self.markers.get(self.open_marker_code)
        self.open_marker_code = None
        if marker is not None:
            marker.popup_open = False
            self._restyle_marker(marker)

    def set_hover(self, code: str, hovered: bool) -> None:
        marker = self.markers[code]
        marker.hovered = hovered
        self._restyle_marker(marker)

    def highlight(self, code: str) -> None:
        """Start the transient highlight of an already drawn marker."""
        if code in self.markers:
            self.markers[code].highlighted = True

    def clear_highlight(self, code: str) -> None:
        if code in self.markers:
            self.markers[code].highlighted = False

    # -------------------------
    # Inspection
    # -------------------------

    def snapshot(self) -> Dict[str, Any]:
        """
        Comparable description of everything drawn.

        Two scenes with equal snapshots show the same markers and routes.
        """
        return {
            "markers": sorted(
                (m.code, m.position, m.color, m.size, m.popup, m.highlighted)
                for m in self.markers.values()
            ),
            "routes": sorted(
                (
                    r.key,
                    r.from_code,
                    r.to_code,
                    r.popup,
                    r.popup_segment,
                    tuple(
                        (s.index, s.points, s.color, s.weight, s.opacity)
                        for s in r.segments
                    ),
                )
                for r in self.routes.values()
            ),
            "moving_marker": self.moving_marker,
            "viewport": self.viewport,
        }
