"""
Main map view.

Provides the primary page: upload and year filter in the sidebar, the
result banner, playback controls and the route map.
"""

import asyncio
import itertools
from typing import Callable

import streamlit as st

from flightmap.charts.figure import build_scene_figure
from flightmap.charts.scene import SceneState
from flightmap.components.map_controls import (
    apply_marker_selection,
    render_open_popup,
    render_zoom_control,
)
from flightmap.components.result_banner import render_result_banner, store_banner
from flightmap.components.upload_panel import render_upload_panel
from flightmap.components.year_filter import render_year_filter
from flightmap.config import FlightMapConfig
from flightmap.schemas.airport import ReferenceData
from flightmap.services.airport_service import load_reference_data
from flightmap.session import FlightMapSession, SessionEvent

_SESSION_KEY = "flightmap_session"
_MAP_KEY = "route_map"
_SELECTION_KEY = "route_map_selection"


@st.cache_resource
def get_reference_data() -> ReferenceData:
    """
    Load the airport tables once per server process.

    The tables are read-only and shared by every user session.
    """
    return load_reference_data(FlightMapConfig.data)


def get_session() -> FlightMapSession:
    """Return this browser session's map session, creating it on first use."""
    if _SESSION_KEY not in st.session_state:
        session = FlightMapSession(get_reference_data())
        session.subscribe(SessionEvent.UPLOAD_COMPLETE, store_banner)
        st.session_state[_SESSION_KEY] = session
    return st.session_state[_SESSION_KEY]


def _apply_map_selection(session: FlightMapSession) -> None:
    """Apply a new point selection from the last static map render."""
    state = st.session_state.get(_MAP_KEY)
    points = list(state["selection"]["points"]) if state else []
    signature = [(p.get("curve_number"), p.get("point_number")) for p in points]
    if signature == st.session_state.get(_SELECTION_KEY, []):
        return
    st.session_state[_SELECTION_KEY] = signature
    apply_marker_selection(session.scene, points)


def _frame_renderer(placeholder) -> Callable[[SceneState], None]:
    counter = itertools.count()

    def render(scene: SceneState) -> None:
        placeholder.plotly_chart(
            build_scene_figure(scene),
            use_container_width=True,
            key=f"map_frame_{next(counter)}",
        )

    return render


def render_main_view() -> None:
    """Render the map page for the current session."""
    session = get_session()
    if not session.engine.is_playing:
        _apply_map_selection(session)

    if not session.reference.airports:
        st.error(
            "Airport database is empty. Check FLIGHTMAP_AIRPORTS_CSV "
            f"(currently '{FlightMapConfig.data.airports_csv_path}')."
        )

    render_upload_panel(session)

    year = render_year_filter(
        session.year_counts(),
        session.selected_year,
        disabled=session.engine.is_playing,
    )
    if year != session.selected_year:
        session.set_year(year)

    render_zoom_control(session.scene, disabled=session.engine.is_playing)

    st.title(FlightMapConfig.page.title)
    render_result_banner()

    visible = session.visible_visualizations
    play_col, stop_col, info_col = st.columns([1, 1, 6])
    with play_col:
        play = st.button("Play", disabled=not visible, use_container_width=True)
    with stop_col:
        stop = st.button("Stop", disabled=not visible, use_container_width=True)
    with info_col:
        if visible:
            st.caption(f"{len(visible)} flights shown")
        else:
            st.caption("Upload a flight CSV to draw routes")

    if stop:
        # The rerun already interrupted the running replay; restore the full map
        session.stop_playback()
        session.set_year(session.selected_year)

    placeholder = st.empty()
    render = _frame_renderer(placeholder)

    if play:
        asyncio.run(session.start_playback(on_frame=render))
    else:
        placeholder.plotly_chart(
            build_scene_figure(session.scene),
            use_container_width=True,
            key=_MAP_KEY,
            on_select="rerun",
            selection_mode="points",
        )
        render_open_popup(session.scene)
