"""
Flight CSV parser.

Turns uploaded CSV text into validated Flight records. Parsing never
aborts on a bad row: every rejection is recorded as a message and the
remaining rows are still processed.
"""

import logging
from typing import Dict, List, Optional, Tuple

from flightmap.config import FlightMapConfig, ParserConfig
from flightmap.exceptions import (
    EmptyFileError,
    InvalidTimestampError,
    MissingColumnsError,
    MissingFieldsError,
)
from flightmap.schemas.flight import Flight, ParseResult
from flightmap.services.timestamps import parse_timestamp
from flightmap.services.tokenizer import (
    build_column_index,
    get_field,
    split_csv_line,
    split_lines,
)

logger = logging.getLogger(__name__)

__all__ = [
    "parse_flights_csv",
    "find_missing_columns",
]


def find_missing_columns(
    column_index: Dict[str, int], required: Tuple[str, ...]
) -> List[str]:
    """Return required column names absent from the header, in required order."""
    return [column for column in required if column not in column_index]


def _parse_row(
    values: List[str],
    column_index: Dict[str, int],
    row_number: int,
    config: ParserConfig,
) -> Flight:
    """
    Build a Flight from one tokenized data row.

    Raises:
        MissingFieldsError: If any required field is empty.
        InvalidTimestampError: If either timestamp cannot be parsed.
    """
    fields = {
        name: get_field(values, column_index, name)
        for name in config.required_columns
    }

    missing = [name for name, value in fields.items() if not value]
    if missing:
        raise MissingFieldsError(row_number, missing)

    departure = parse_timestamp(fields["departure_timestamp_local"])
    arrival = parse_timestamp(fields["arrival_timestamp_local"])

    if departure is None or arrival is None:
        limit = config.timestamp_preview_length
        invalid = []
        if departure is None:
            preview = fields["departure_timestamp_local"][:limit]
            invalid.append(f'departure_timestamp_local="{preview}"')
        if arrival is None:
            preview = fields["arrival_timestamp_local"][:limit]
            invalid.append(f'arrival_timestamp_local="{preview}"')
        raise InvalidTimestampError(row_number, invalid)

    return Flight(
        airline=fields["airline"],
        flight_code=fields["flight_code"],
        departure_airport=fields["departure_airport"],
        arrival_airport=fields["arrival_airport"],
        departure_timestamp_local=departure,
        arrival_timestamp_local=arrival,
    )


def parse_flights_csv(
    csv_content: str, config: Optional[ParserConfig] = None
) -> ParseResult:
    """
    Parse uploaded flight CSV text.

    The header is matched case-insensitively and in any order; extra
    columns are ignored. Row numbers in messages count the header as
    row 1, so the first data row is row 2.

    Args:
        csv_content: Full text of the uploaded file.
        config: Parser settings. Uses FlightMapConfig.parser if not specified.

    Returns:
        ParseResult with flights in file order and one message per failed row.
        A missing required column short-circuits to zero flights with every
        data row counted as failed.
    """
    config = config or FlightMapConfig.parser
    lines = split_lines(csv_content)

    if not lines:
        logger.warning("Uploaded CSV is empty")
        return ParseResult(errors=[str(EmptyFileError())])

    column_index = build_column_index(lines[0], config.delimiter)
    data_lines = lines[1:]
    total_rows = len(data_lines)

    missing_columns = find_missing_columns(column_index, config.required_columns)
    if missing_columns:
        error = MissingColumnsError(missing_columns)
        logger.warning("%s (%d data rows rejected)", error, total_rows)
        return ParseResult(
            errors=[str(error)],
            total_rows=total_rows,
            successful_rows=0,
            failed_rows=total_rows,
        )

    result = ParseResult(total_rows=total_rows)

    for offset, line in enumerate(data_lines):
        row_number = offset + 2
        try:
            values = split_csv_line(line, config.delimiter)
            flight = _parse_row(values, column_index, row_number, config)
        except (MissingFieldsError, InvalidTimestampError) as error:
            logger.debug("Rejected row: %s", error)
            result.errors.append(str(error))
            result.failed_rows += 1
            continue
        except Exception as error:  # noqa: BLE001
            logger.exception("Unexpected error parsing row %d", row_number)
            message = str(error) or type(error).__name__
            result.errors.append(f"Row {row_number}: {message}")
            result.failed_rows += 1
            continue

        result.flights.append(flight)
        result.successful_rows += 1

    logger.info(
        "Parsed %d/%d flight rows (%d failed)",
        result.successful_rows,
        result.total_rows,
        result.failed_rows,
    )
    return result
