"""
Upload service for flight CSV files.

Reads an uploaded file into memory and runs it through the parser and
the visualization builder. Every failure is returned as data; only a
file that cannot be read at all is reduced to a single generic error.
"""

import logging
from dataclasses import dataclass, field
from typing import List, Optional

from flightmap.config import DisplayConfig, FlightMapConfig
from flightmap.exceptions import UnsupportedFileError
from flightmap.schemas.airport import ReferenceData
from flightmap.schemas.flight import ParseResult
from flightmap.schemas.visualization import VisualizationResult
from flightmap.services.flight_parser import parse_flights_csv
from flightmap.services.visualization_builder import build_flight_visualizations

logger = logging.getLogger(__name__)

__all__ = [
    "UploadOutcome",
    "decode_upload",
    "process_upload",
    "summarize_errors",
]


@dataclass
class UploadOutcome:
    """Parse and visualization results for one upload."""

    filename: str
    parse_result: ParseResult
    visualization_result: VisualizationResult = field(
        default_factory=VisualizationResult
    )

    @property
    def errors(self) -> List[str]:
        """Row-level errors followed by airport resolution errors."""
        return self.parse_result.errors + self.visualization_result.errors

    @property
    def has_visualizations(self) -> bool:
        return bool(self.visualization_result.visualizations)


def decode_upload(data: bytes, encoding: str = "utf-8-sig") -> str:
    """Decode uploaded bytes, dropping a UTF-8 byte order mark if present."""
    return data.decode(encoding)


def _failed_read(filename: str, message: str) -> UploadOutcome:
    return UploadOutcome(
        filename=filename,
        parse_result=ParseResult(errors=[message]),
    )


def process_upload(
    filename: str,
    data: bytes,
    reference: ReferenceData,
) -> UploadOutcome:
    """
    Parse an uploaded flight CSV and resolve its airports.

    Args:
        filename: Original file name, used to check the .csv extension.
        data: Full file content.
        reference: Airport and replacement tables loaded at startup.

    Returns:
        UploadOutcome with both results. Never raises.
    """
    if not filename.lower().endswith(".csv"):
        error = UnsupportedFileError(filename)
        logger.warning("%s", error)
        return _failed_read(filename, str(error))

    try:
        text = decode_upload(data, FlightMapConfig.data.encoding)
    except (UnicodeDecodeError, AttributeError) as error:
        logger.exception("Failed to read uploaded file %s", filename)
        return _failed_read(filename, f"Failed to read file: {error}")

    parse_result = parse_flights_csv(text)
    visualization_result = build_flight_visualizations(
        parse_result.flights, reference.airports, reference.replacements
    )

    logger.info(
        "Upload %s: %d rows, %d flights, %d visualized",
        filename,
        parse_result.total_rows,
        parse_result.successful_rows,
        len(visualization_result.visualizations),
    )
    return UploadOutcome(
        filename=filename,
        parse_result=parse_result,
        visualization_result=visualization_result,
    )


def summarize_errors(
    errors: List[str], config: Optional[DisplayConfig] = None
) -> List[str]:
    """
    Cap an error list for display.

    Returns:
        At most max_errors_shown messages, plus a trailing '... and N more'
        line when messages were dropped.
    """
    config = config or FlightMapConfig.display
    limit = config.max_errors_shown

    if len(errors) <= limit:
        return list(errors)
    return errors[:limit] + [f"... and {len(errors) - limit} more"]
