"""
Custom exceptions for the flightmap package.

Provides a hierarchy of exceptions for the ingestion pipeline and the
playback engine. The pipeline raises them internally and converts their
messages into error data, so none of them reach the caller of a parse.
"""

from typing import Sequence


class FlightMapError(Exception):
    """Base exception for all flightmap errors."""

    pass


class ParseError(FlightMapError):
    """Base exception for flight CSV parsing errors."""

    pass


class EmptyFileError(ParseError):
    """Raised when the uploaded CSV has no non-blank lines."""

    def __init__(self, message: str = "CSV file is empty") -> None:
        super().__init__(message)


class MissingColumnsError(ParseError):
    """Raised when required header columns are missing."""

    def __init__(self, missing: Sequence[str]) -> None:
        self.missing = list(missing)
        columns_str = ", ".join(self.missing)
        message = f"Missing required columns: {columns_str}"
        super().__init__(message)


class MissingFieldsError(ParseError):
    """Raised when a data row leaves required fields empty."""

    def __init__(self, row_number: int, fields: Sequence[str]) -> None:
        self.row_number = row_number
        self.fields = list(fields)
        message = (
            f"Row {row_number}: Missing values for {', '.join(self.fields)} "
            "(empty or not provided)"
        )
        super().__init__(message)


class InvalidTimestampError(ParseError):
    """Raised when a data row carries timestamps that cannot be parsed."""

    def __init__(self, row_number: int, invalid: Sequence[str]) -> None:
        self.row_number = row_number
        self.invalid = list(invalid)
        message = (
            f"Row {row_number}: Invalid timestamp format: {', '.join(self.invalid)}"
        )
        super().__init__(message)


class AirportNotFoundError(FlightMapError):
    """Raised when a flight's airport code does not resolve."""

    def __init__(self, flight_number: str, code: str, field: str) -> None:
        self.flight_number = flight_number
        self.code = code
        self.field = field
        message = (
            f'Flight {flight_number}: {field.capitalize()} airport "{code}" '
            "not found in airports database"
        )
        super().__init__(message)


class UnsupportedFileError(FlightMapError):
    """Raised when an upload is not a CSV file."""

    def __init__(self, filename: str) -> None:
        self.filename = filename
        message = f"Unsupported file '{filename}': only .csv files are accepted"
        super().__init__(message)


class PlaybackError(FlightMapError):
    """Base exception for playback engine errors."""

    pass


class PlaybackInProgressError(PlaybackError):
    """Raised when a playback is started while another one is running."""

    def __init__(self, message: str = "A playback is already in progress") -> None:
        super().__init__(message)
