"""
Services module for data loading and processing.

Provides CSV tokenizing, timestamp normalization, flight and airport
parsing, visualization building, filtering and upload handling.
"""

from flightmap.services.airport_service import (
    load_airports,
    load_code_replacements,
    load_reference_data,
    parse_airports_csv,
    parse_code_replacements,
    resolve_airport,
)
from flightmap.services.filter_service import (
    filter_by_year,
    get_available_years,
    get_year_counts,
    to_frame,
)
from flightmap.services.flight_parser import parse_flights_csv
from flightmap.services.timestamps import parse_timestamp
from flightmap.services.tokenizer import split_csv_line
from flightmap.services.upload_service import (
    UploadOutcome,
    process_upload,
    summarize_errors,
)
from flightmap.services.visualization_builder import build_flight_visualizations

__all__ = [
    # Parsing
    "split_csv_line",
    "parse_timestamp",
    "parse_flights_csv",
    # Reference data
    "parse_airports_csv",
    "parse_code_replacements",
    "load_airports",
    "load_code_replacements",
    "load_reference_data",
    "resolve_airport",
    # Visualization
    "build_flight_visualizations",
    # Filter service
    "to_frame",
    "get_year_counts",
    "get_available_years",
    "filter_by_year",
    # Upload service
    "UploadOutcome",
    "process_upload",
    "summarize_errors",
]
