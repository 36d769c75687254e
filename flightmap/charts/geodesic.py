"""
Great-circle route geometry.

Computes the geodesic path between two airports and cuts it into a
fixed number of runs so each run can carry its own gradient color.
"""

from dataclasses import dataclass
from typing import List, Optional, Tuple

import numpy as np

from flightmap.charts.colors import interpolate_color
from flightmap.config import FlightMapConfig, GeodesicConfig
from flightmap.schemas.airport import Coordinates

__all__ = [
    "SegmentGeometry",
    "great_circle_points",
    "split_segments",
    "build_route_segments",
    "popup_segment_index",
]

LatLon = Tuple[float, float]


@dataclass(frozen=True)
class SegmentGeometry:
    """One colored run of a geodesic path."""

    index: int
    points: Tuple[LatLon, ...]
    color: str

    @property
    def trailing_point(self) -> LatLon:
        """Last point of the run, where the moving marker sits during playback."""
        return self.points[-1]


def _to_cartesian(lat: float, lon: float) -> np.ndarray:
    phi, lam = np.radians(lat), np.radians(lon)
    return np.array([np.cos(phi) * np.cos(lam), np.cos(phi) * np.sin(lam), np.sin(phi)])


def great_circle_points(start: Coordinates, end: Coordinates, n: int = 100) -> np.ndarray:
    """
    Sample the great circle between two points.

    Args:
        start: (lat, lon) of the departure airport.
        end: (lat, lon) of the arrival airport.
        n: Number of points, endpoints included.

    Returns:
        Array of shape (n, 2) with (lat, lon) rows. Longitudes are
        unwrapped so paths across the antimeridian stay continuous.
    """
    lat1, lon1 = start
    lat2, lon2 = end
    n = max(n, 2)

    p1 = _to_cartesian(lat1, lon1)
    p2 = _to_cartesian(lat2, lon2)
    omega = np.arccos(np.clip(np.dot(p1, p2), -1.0, 1.0))

    if np.isclose(omega, 0) or np.isclose(omega, np.pi):
        return np.linspace([lat1, lon1], [lat2, lon2], n)

    ts = np.linspace(0, 1, n)
    s1 = np.sin((1 - ts) * omega) / np.sin(omega)
    s2 = np.sin(ts * omega) / np.sin(omega)
    pts = (p1[:, None] * s1 + p2[:, None] * s2).T
    xs, ys, zs = pts[:, 0], pts[:, 1], pts[:, 2]

    lats = np.degrees(np.arctan2(zs, np.sqrt(xs**2 + ys**2)))
    lons = np.degrees(np.unwrap(np.arctan2(ys, xs)))

    # Anchor the unwrapped longitudes to the departure longitude
    lons += lon1 - lons[0]
    lats[0], lats[-1] = lat1, lat2
    return np.column_stack([lats, lons])


def split_segments(points: np.ndarray, count: int = 10) -> List[Tuple[int, np.ndarray]]:
    """
    Cut a path into `count` consecutive runs.

    Each run takes floor(len/count) points (at least one) plus the first
    point of the next run, so runs join without gaps. The remainder is
    folded into the last run. Runs with fewer than two points are dropped.

    Returns:
        List of (segment index, points) pairs in path order.
    """
    total = len(points)
    step = max(1, total // count)
    segments = []

    for index in range(count):
        start = index * step
        end = total if index == count - 1 else min((index + 1) * step + 1, total)
        run = points[start:end]
        if len(run) < 2:
            continue
        segments.append((index, run))

    return segments


def popup_segment_index(
    segments: List[SegmentGeometry], config: Optional[GeodesicConfig] = None
) -> Optional[int]:
    """
    Index of the segment that owns the route popup.

    The configured middle segment, or the nearest drawn one before it on
    very short paths.
    """
    config = config or FlightMapConfig.geodesic
    indexes = [segment.index for segment in segments]
    if not indexes:
        return None
    if config.popup_segment_index in indexes:
        return config.popup_segment_index
    earlier = [index for index in indexes if index < config.popup_segment_index]
    return earlier[-1] if earlier else indexes[0]


def build_route_segments(
    start: Coordinates,
    end: Coordinates,
    start_color: str,
    end_color: str,
    config: Optional[GeodesicConfig] = None,
) -> List[SegmentGeometry]:
    """
    Build the colored segments of one route.

    Segment i is colored at ratio i / (count - 1) between the departure
    and arrival colors, producing a gradient along the route.
    """
    config = config or FlightMapConfig.geodesic
    points = great_circle_points(start, end, config.points)
    last = max(config.segment_count - 1, 1)

    return [
        SegmentGeometry(
            index=index,
            points=tuple((float(lat), float(lon)) for lat, lon in run),
            color=interpolate_color(start_color, end_color, index / last),
        )
        for index, run in split_segments(points, config.segment_count)
    ]
