"""
Upload result banner.

Summarizes the latest upload and lists its errors, capped for display.
The banner stays until the user dismisses it or uploads another file.
"""

import html
from typing import List

import streamlit as st

from flightmap.schemas.flight import ParseResult
from flightmap.schemas.visualization import VisualizationResult
from flightmap.services.upload_service import summarize_errors

_BANNER_KEY = "flightmap_banner"


def store_banner(
    parse_result: ParseResult, visualization_result: VisualizationResult
) -> None:
    """Keep the banner contents for the upload that just finished."""
    st.session_state[_BANNER_KEY] = {
        "parse_result": parse_result,
        "visualization_result": visualization_result,
    }


def banner_summary(
    parse_result: ParseResult, visualization_result: VisualizationResult
) -> str:
    """One-line summary of an upload."""
    shown = len(visualization_result.visualizations)
    summary = (
        f"{parse_result.successful_rows} of {parse_result.total_rows} rows parsed, "
        f"{shown} flights on the map"
    )
    if visualization_result.unresolved_airports:
        summary += (
            f", {len(visualization_result.unresolved_airports)} unknown airports"
        )
    return summary


def _error_list(errors: List[str]) -> str:
    items = "".join(f"<li>{html.escape(error)}</li>" for error in errors)
    return f'<ul class="flightmap-errors">{items}</ul>'


def render_result_banner() -> None:
    """Render the stored banner with a dismiss button."""
    banner = st.session_state.get(_BANNER_KEY)
    if not banner:
        return

    parse_result = banner["parse_result"]
    visualization_result = banner["visualization_result"]
    errors = parse_result.errors + visualization_result.errors
    summary = banner_summary(parse_result, visualization_result)

    message_col, button_col = st.columns([10, 1])
    with message_col:
        if errors:
            box = st.error if not visualization_result.visualizations else st.warning
            box(summary)
            st.markdown(_error_list(summarize_errors(errors)), unsafe_allow_html=True)
        else:
            st.success(summary)
    with button_col:
        if st.button("Dismiss", key="dismiss_banner"):
            del st.session_state[_BANNER_KEY]
            st.rerun()
