"""
Flight route map application.

Parses uploaded flight CSV files, resolves their airports and draws the
flights as great-circle routes on an interactive map, with a year filter
and a sequential playback of flights in departure order.

Usage:
    from flightmap import run_app
    run_app()
"""


def run_app() -> None:
    """
    Main application entry point.

    Renders the map page for the current Streamlit session.
    """
    from flightmap.pages.main_view import render_main_view

    render_main_view()


__all__ = ["run_app"]
