"""
Styling module for the map page.

Provides functions for applying page configuration and custom CSS.
"""

import streamlit as st

from flightmap.config import FlightMapConfig


def apply_page_config() -> None:
    """
    Apply Streamlit page configuration.

    Must be called before any other Streamlit commands.
    """
    config = FlightMapConfig.page
    st.set_page_config(
        page_title=config.title,
        page_icon=config.icon,
        layout=config.layout,
        initial_sidebar_state=config.sidebar_state,
    )


def apply_custom_css() -> None:
    """
    Apply custom CSS styling to the map page.

    Tightens the banner spacing and the sidebar year histogram.
    """
    css = """
    <style>
        /* Error banner list */
        .flightmap-errors {
            margin: 0;
            padding-left: 18px;
            font-size: 0.9rem;
        }

        /* Keep the map flush with the page edges */
        [data-testid="stPlotlyChart"] {
            margin-top: -8px;
        }

        /* Compact sidebar chart */
        [data-testid="stSidebar"] [data-testid="stPlotlyChart"] {
            margin-top: 0;
        }
    </style>
    """
    st.markdown(css, unsafe_allow_html=True)
