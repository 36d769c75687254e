"""
Pages module for the map application.
"""

from flightmap.pages.main_view import render_main_view

__all__ = ["render_main_view"]
