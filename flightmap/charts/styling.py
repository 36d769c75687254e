"""
Zoom-adaptive styling for route lines and airport markers.
"""

from typing import Optional

from flightmap.config import FlightMapConfig, StyleConfig

__all__ = ["line_weight", "marker_size", "expanded_marker_size"]


def line_weight(zoom: float, config: Optional[StyleConfig] = None) -> float:
    """
    Route line thickness for a zoom level.

    Grows by line_weight_factor per zoom level from base_line_weight at
    base_zoom, clamped to [min_line_weight, max_line_weight].

    Examples:
        >>> line_weight(4)
        2.0
        >>> round(line_weight(5), 2)
        2.8
    """
    config = config or FlightMapConfig.style
    weight = config.base_line_weight * config.line_weight_factor ** (
        zoom - config.base_zoom
    )
    return min(max(weight, config.min_line_weight), config.max_line_weight)


def marker_size(zoom: float, config: Optional[StyleConfig] = None) -> float:
    """
    Airport marker diameter in pixels for a zoom level.

    Fixed at marker_size from base_zoom upwards; shrinks linearly to
    min_marker_size at marker_shrink_zoom and stays there below it.
    """
    config = config or FlightMapConfig.style
    if zoom >= config.base_zoom:
        return config.marker_size
    if zoom <= config.marker_shrink_zoom:
        return config.min_marker_size

    progress = (zoom - config.marker_shrink_zoom) / (
        config.base_zoom - config.marker_shrink_zoom
    )
    return config.min_marker_size + progress * (
        config.marker_size - config.min_marker_size
    )


def expanded_marker_size(zoom: float, config: Optional[StyleConfig] = None) -> float:
    """Diameter of a hovered or selected marker."""
    config = config or FlightMapConfig.style
    return marker_size(zoom, config) * config.expanded_marker_scale
