"""
Upload component for the sidebar.

Hands a newly selected CSV file to the session exactly once; Streamlit
reruns keep returning the same file until the user picks another one.
"""

from typing import Optional

import streamlit as st

from flightmap.services.upload_service import UploadOutcome
from flightmap.session import FlightMapSession

_LAST_UPLOAD_KEY = "flightmap_last_upload"


def render_upload_panel(session: FlightMapSession) -> Optional[UploadOutcome]:
    """
    Render the file uploader and process a new file.

    Args:
        session: Current user session.

    Returns:
        The outcome if a new file was processed on this run, else None.
    """
    st.sidebar.header("Flights")
    uploaded = st.sidebar.file_uploader(
        "Upload flight CSV",
        type=["csv"],
        help="Columns: airline, flight_code, departure_airport, "
        "arrival_airport, departure_timestamp_local, arrival_timestamp_local",
    )
    if uploaded is None:
        return None

    marker = (uploaded.name, uploaded.size)
    if st.session_state.get(_LAST_UPLOAD_KEY) == marker:
        return None

    st.session_state[_LAST_UPLOAD_KEY] = marker
    return session.upload(uploaded.name, uploaded.getvalue())
