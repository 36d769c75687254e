"""
Components module for reusable UI elements.

Provides the upload panel, year filter, map controls, result banner
and styling components for the map page.
"""

from flightmap.components.map_controls import (
    apply_marker_selection,
    marker_code_for_selection,
    render_open_popup,
    render_zoom_control,
    zoom_slider_value,
)
from flightmap.components.result_banner import render_result_banner, store_banner
from flightmap.components.styles import apply_custom_css, apply_page_config
from flightmap.components.upload_panel import render_upload_panel
from flightmap.components.year_filter import (
    create_year_histogram,
    render_year_filter,
    year_options,
)

__all__ = [
    "apply_page_config",
    "apply_custom_css",
    "render_upload_panel",
    "render_year_filter",
    "year_options",
    "create_year_histogram",
    "render_result_banner",
    "store_banner",
    "render_zoom_control",
    "zoom_slider_value",
    "marker_code_for_selection",
    "apply_marker_selection",
    "render_open_popup",
]
