"""
Flight Route Map - Entry Point.

A Streamlit application that turns an uploaded flight CSV into an
interactive great-circle route map with a year filter and sequential
flight playback.

Usage:
    streamlit run app.py
"""

import logging

from flightmap import run_app
from flightmap.components.styles import apply_custom_css, apply_page_config

# Configure logging for console output
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)

# Apply Streamlit page configuration (must be first st call)
apply_page_config()
apply_custom_css()

run_app()
