"""
Flight map configuration module.

Centralizes all configuration values, magic numbers, and defaults
used throughout the flight map application.
"""

import os
from dataclasses import dataclass, field
from typing import Tuple

from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()


@dataclass(frozen=True)
class PageConfig:
    """Streamlit page configuration."""

    title: str = "Flight Route Map"
    icon: str = "airplane"
    layout: str = "wide"
    sidebar_state: str = "expanded"


@dataclass(frozen=True)
class DataConfig:
    """Reference data locations."""

    airports_csv_path: str = field(
        default_factory=lambda: os.getenv(
            "FLIGHTMAP_AIRPORTS_CSV", "data/airports.csv"
        )
    )
    replacements_csv_path: str = field(
        default_factory=lambda: os.getenv(
            "FLIGHTMAP_REPLACEMENTS_CSV", "data/airport-code-replacements.csv"
        )
    )
    encoding: str = "utf-8-sig"


@dataclass(frozen=True)
class ParserConfig:
    """Flight CSV parsing configuration."""

    required_columns: Tuple[str, ...] = (
        "airline",
        "flight_code",
        "departure_airport",
        "arrival_airport",
        "departure_timestamp_local",
        "arrival_timestamp_local",
    )
    timestamp_preview_length: int = 30
    delimiter: str = ","


@dataclass(frozen=True)
class ColorConfig:
    """Airport frequency band colors."""

    # (upper bound of frequency ratio, color), lower band wins on a tie
    bands: Tuple[Tuple[float, str], ...] = (
        (0.15, "#3b82f6"),  # blue
        (0.30, "#06b6d4"),  # cyan
        (0.50, "#10b981"),  # green
        (0.75, "#f97316"),  # orange
    )
    top_color: str = "#ef4444"  # red
    default_color: str = "#6b7280"


@dataclass(frozen=True)
class GeodesicConfig:
    """Great-circle route geometry."""

    points: int = 100
    segment_count: int = 10
    popup_segment_index: int = 4


@dataclass(frozen=True)
class StyleConfig:
    """Zoom-adaptive line and marker styling."""

    base_zoom: int = 4
    base_line_weight: float = 2.0
    line_weight_factor: float = 1.4
    min_line_weight: float = 0.5
    max_line_weight: float = 8.0
    line_opacity: float = 0.8

    marker_size: float = 16.0
    min_marker_size: float = 10.0
    marker_shrink_zoom: int = 2
    expanded_marker_scale: float = 1.5

    moving_marker_size: float = 8.0
    moving_marker_color: str = "#111827"
    highlight_color: str = "#facc15"


@dataclass(frozen=True)
class MapConfig:
    """Map viewport and geo settings."""

    default_center: Tuple[float, float] = (54.0, 15.0)
    default_zoom: int = 4
    max_fit_zoom: int = 4
    min_zoom: int = 1
    max_zoom: int = 8
    fit_padding_ratio: float = 0.1
    map_width: int = 1024
    map_height: int = 650

    projection: str = "natural earth"
    land_color: str = "#f3f4f6"
    ocean_color: str = "#e0f2fe"
    country_border_color: str = "#d1d5db"


@dataclass(frozen=True)
class PlaybackConfig:
    """Sequential playback timing."""

    segment_delay_seconds: float = 0.05
    highlight_seconds: float = 0.6


@dataclass(frozen=True)
class DisplayConfig:
    """Result banner and popup formatting."""

    max_errors_shown: int = 10
    timestamp_format: str = "%Y-%m-%d %H:%M"


class FlightMapConfig:
    """Main configuration container providing access to all config sections."""

    page = PageConfig()
    data = DataConfig()
    parser = ParserConfig()
    colors = ColorConfig()
    geodesic = GeodesicConfig()
    style = StyleConfig()
    map = MapConfig()
    playback = PlaybackConfig()
    display = DisplayConfig()
