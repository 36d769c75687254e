"""
Map interaction controls.

Provides the sidebar zoom slider and turns point selections made on the
route map into opened or closed airport popups.
"""

import logging
from typing import Any, Iterable, Mapping, Optional

import streamlit as st

from flightmap.charts.figure import build_scene_figure
from flightmap.charts.scene import SceneState
from flightmap.config import FlightMapConfig, MapConfig

logger = logging.getLogger(__name__)


def zoom_slider_value(zoom: float, config: Optional[MapConfig] = None) -> int:
    """Scene zoom rounded and clamped to the slider range."""
    config = config or FlightMapConfig.map
    return min(max(int(round(zoom)), config.min_zoom), config.max_zoom)


def render_zoom_control(scene: SceneState, disabled: bool = False) -> None:
    """
    Render the zoom slider and apply a changed value to the scene.

    Args:
        scene: Scene whose viewport the slider controls.
        disabled: Lock the control, e.g. during playback.
    """
    config = FlightMapConfig.map
    current = zoom_slider_value(scene.zoom, config)

    st.sidebar.markdown("---")
    st.sidebar.subheader("Map")
    zoom = st.sidebar.slider(
        "Zoom",
        min_value=config.min_zoom,
        max_value=config.max_zoom,
        value=current,
        disabled=disabled,
    )
    if zoom != current:
        logger.debug("Zoom changed %s -> %s", current, zoom)
        scene.set_zoom(zoom)


def marker_code_for_selection(
    scene: SceneState, points: Iterable[Mapping[str, Any]]
) -> Optional[str]:
    """
    Airport code of the first selected marker point.

    Args:
        scene: Scene the selection was made on.
        points: Plotly selection points, each carrying a curve_number.

    Returns:
        The marker's airport code, or None if no marker point was selected.
    """
    traces = build_scene_figure(scene).data
    for point in points:
        curve = point.get("curve_number")
        if curve is None or not 0 <= curve < len(traces):
            continue
        trace = traces[curve]
        if trace.mode == "markers" and trace.name in scene.markers:
            return trace.name
    return None


def apply_marker_selection(
    scene: SceneState, points: Iterable[Mapping[str, Any]]
) -> Optional[str]:
    """
    Open the popup of the selected marker, or close the open popup.

    Returns:
        Code of the marker now open, if any.
    """
    code = marker_code_for_selection(scene, points)
    if code is None:
        scene.close_marker()
        return None
    scene.open_marker(code)
    return code


def render_open_popup(scene: SceneState) -> None:
    """Show the open marker's popup below the map."""
    code = scene.open_marker_code
    if code is None or code not in scene.markers:
        return
    st.markdown(scene.markers[code].popup, unsafe_allow_html=True)
