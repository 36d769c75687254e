"""
Airport reference data service.

Parses the bundled airports CSV into a lookup table keyed by IATA code,
loads the optional retired-code replacement table, and resolves codes
against both. Reference rows are curated data, so malformed rows are
skipped rather than reported.
"""

import logging
import math
import re
from pathlib import Path
from typing import Dict, Mapping, Optional, Union

from flightmap.config import DataConfig, FlightMapConfig
from flightmap.schemas.airport import Airport, AirportsMap, ReferenceData
from flightmap.services.tokenizer import (
    build_column_index,
    get_field,
    split_csv_line,
    split_lines,
)

logger = logging.getLogger(__name__)

__all__ = [
    "parse_number",
    "parse_boolean",
    "parse_airports_csv",
    "parse_code_replacements",
    "load_airports",
    "load_code_replacements",
    "load_reference_data",
    "resolve_airport",
]

# Leading decimal number, the way a permissive float parse reads "12.5ft"
_FLOAT_PREFIX = re.compile(r"^[+-]?(\d+\.?\d*|\.\d+)([eE][+-]?\d+)?")

_TRUE_VALUES = {"yes", "1", "true"}


def parse_number(value: Optional[str]) -> Optional[float]:
    """
    Parse a numeric reference field.

    Args:
        value: Raw field text.

    Returns:
        Finite float value, or None for empty, unparseable, NaN or infinite
        input. Zero is a real value and is returned as 0.0.

    Examples:
        >>> parse_number('60.3172')
        60.3172
        >>> parse_number('') is None
        True
        >>> parse_number('179ft')
        179.0
    """
    if not value or not value.strip():
        return None

    text = value.strip()
    try:
        number = float(text)
    except ValueError:
        match = _FLOAT_PREFIX.match(text)
        if not match:
            return None
        number = float(match.group(0))

    if not math.isfinite(number):
        return None
    return number


def parse_boolean(value: Optional[str]) -> bool:
    """Accept 'yes', '1' and 'true' (any case) as True."""
    return bool(value) and value.strip().lower() in _TRUE_VALUES


def _parse_airport_row(
    values: list, column_index: Dict[str, int]
) -> Optional[Airport]:
    iata_code = get_field(values, column_index, "iata_code")
    if not iata_code:
        return None

    latitude = parse_number(get_field(values, column_index, "latitude_deg"))
    longitude = parse_number(get_field(values, column_index, "longitude_deg"))
    if latitude is None or longitude is None:
        return None

    def text(name: str) -> str:
        return get_field(values, column_index, name)

    return Airport(
        id=text("id"),
        ident=text("ident"),
        type=text("type"),
        name=text("name"),
        coordinates=(latitude, longitude),
        elevation_ft=parse_number(text("elevation_ft")),
        continent=text("continent"),
        iso_country=text("iso_country"),
        iso_region=text("iso_region"),
        municipality=text("municipality"),
        scheduled_service=parse_boolean(text("scheduled_service")),
        icao_code=text("icao_code"),
        iata_code=iata_code,
        gps_code=text("gps_code"),
        local_code=text("local_code"),
    )


def parse_airports_csv(csv_content: str) -> AirportsMap:
    """
    Parse the airports reference CSV.

    Only airports with an IATA code and numeric coordinates are kept.
    A later row with the same IATA code replaces an earlier one.

    Args:
        csv_content: Full text of the reference file.

    Returns:
        Dict mapping IATA code to Airport.
    """
    lines = split_lines(csv_content)
    airports: AirportsMap = {}

    if not lines:
        return airports

    column_index = build_column_index(lines[0])
    skipped = 0

    for row_number, line in enumerate(lines[1:], start=2):
        try:
            airport = _parse_airport_row(split_csv_line(line), column_index)
        except Exception as error:  # noqa: BLE001
            logger.warning("Failed to parse airport row %d: %s", row_number, error)
            skipped += 1
            continue

        if airport is None:
            skipped += 1
            continue

        airports[airport.iata_code] = airport

    logger.info(
        "Parsed %d airports with IATA codes (%d rows skipped)",
        len(airports),
        skipped,
    )
    return airports


def parse_code_replacements(csv_content: str) -> Dict[str, str]:
    """
    Parse the two-column replacement table (old code, new code).

    The header row is skipped, as are rows with a blank code.
    """
    replacements: Dict[str, str] = {}

    for line in split_lines(csv_content)[1:]:
        values = split_csv_line(line)
        if len(values) < 2:
            continue
        old_code, new_code = values[0].strip(), values[1].strip()
        if old_code and new_code:
            replacements[old_code] = new_code

    return replacements


def _read_text(path: Union[str, Path], encoding: str) -> str:
    return Path(path).read_text(encoding=encoding)


def load_airports(
    path: Optional[Union[str, Path]] = None, config: Optional[DataConfig] = None
) -> AirportsMap:
    """
    Load the airports reference file.

    Args:
        path: Path to the airports CSV. Uses config if not specified.
        config: Data settings. Uses FlightMapConfig.data if not specified.

    Returns:
        Airport lookup table. Empty if the file cannot be read.
    """
    config = config or FlightMapConfig.data
    path = path or config.airports_csv_path

    try:
        logger.info("Loading airports from %s", path)
        return parse_airports_csv(_read_text(path, config.encoding))
    except (OSError, UnicodeDecodeError) as error:
        logger.error("Error loading airports from %s: %s", path, error)
        return {}


def load_code_replacements(
    path: Optional[Union[str, Path]] = None, config: Optional[DataConfig] = None
) -> Dict[str, str]:
    """
    Load the retired-code replacement table.

    A missing file is expected in many deployments and yields an empty table.
    """
    config = config or FlightMapConfig.data
    path = path or config.replacements_csv_path

    if not Path(path).exists():
        logger.warning("Airport code replacements file %s not found, skipping", path)
        return {}

    try:
        replacements = parse_code_replacements(_read_text(path, config.encoding))
    except (OSError, UnicodeDecodeError) as error:
        logger.warning("Failed to load airport code replacements: %s", error)
        return {}

    logger.info("Loaded %d airport code replacements", len(replacements))
    return replacements


def load_reference_data(config: Optional[DataConfig] = None) -> ReferenceData:
    """Load airports and code replacements as one read-only bundle."""
    config = config or FlightMapConfig.data
    return ReferenceData.freeze(
        airports=load_airports(config=config),
        replacements=load_code_replacements(config=config),
    )


def resolve_airport(
    code: str,
    airports: Mapping[str, Airport],
    replacements: Optional[Mapping[str, str]] = None,
) -> Optional[Airport]:
    """
    Look up an airport by IATA code, falling back to its replacement code.

    Args:
        code: IATA code as written in the flight data.
        airports: Airport lookup table.
        replacements: Optional mapping of retired codes to current codes.

    Returns:
        The resolved Airport, or None.
    """
    airport = airports.get(code)
    if airport is not None or not replacements or code not in replacements:
        return airport

    new_code = replacements[code]
    logger.debug("Airport code %s has been replaced with %s", code, new_code)
    return airports.get(new_code)
