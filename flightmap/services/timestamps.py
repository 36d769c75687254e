"""
Timestamp normalization for uploaded flight data.

Accepts the two layouts seen in exported flight logs and falls back to
pandas' general-purpose parser for anything else.
"""

import logging
from datetime import datetime
from typing import Optional

import pandas as pd

logger = logging.getLogger(__name__)

__all__ = ["parse_timestamp", "normalize_dotted_date"]

ISO_LAYOUT = "%Y-%m-%d %H:%M:%S"


def normalize_dotted_date(value: str) -> Optional[str]:
    """
    Rewrite 'DD.MM.YYYY HH:mm:ss' as 'YYYY-MM-DD HH:mm:ss'.

    Args:
        value: Trimmed timestamp string.

    Returns:
        The rewritten string, or None if the value is not in dotted layout.

    Examples:
        >>> normalize_dotted_date('28.07.2019 20:20:00')
        '2019-07-28 20:20:00'
        >>> normalize_dotted_date('2019-07-28 20:20:00') is None
        True
    """
    if "." not in value or len(value.split(".")) != 3:
        return None

    parts = value.split(" ")
    if len(parts) != 2:
        return None

    date_part, time_part = parts
    date_components = date_part.split(".")
    if len(date_components) != 3:
        return None

    day, month, year = date_components
    return f"{year}-{month}-{day} {time_part}"


def _general_parse(value: str) -> Optional[datetime]:
    try:
        parsed = pd.to_datetime(value)
    except (ValueError, TypeError, OverflowError):
        return None

    if pd.isna(parsed):
        return None
    # Keep the wall-clock time so every flight compares as a naive datetime
    if parsed.tzinfo is not None:
        parsed = parsed.tz_localize(None)
    return parsed.to_pydatetime()


def parse_timestamp(value: Optional[str]) -> Optional[datetime]:
    """
    Parse a local-time string into a datetime.

    Recognized layouts:
    - 2019-07-28 20:20:00 (YYYY-MM-DD HH:mm:ss)
    - 28.07.2019 20:20:00 (DD.MM.YYYY HH:mm:ss), rewritten to the first
    - anything else pandas.to_datetime understands

    Args:
        value: Raw timestamp string from the CSV.

    Returns:
        Naive datetime, or None if the value is empty, unparseable or
        outside the range pandas can represent (1677-09-21 to 2262-04-11).
    """
    if value is None or not value.strip():
        return None

    trimmed = value.strip()

    parsed = None
    rewritten = normalize_dotted_date(trimmed)
    if rewritten is not None:
        parsed = _parse_iso(rewritten) or _general_parse(rewritten)
    if parsed is None:
        parsed = _parse_iso(trimmed) or _general_parse(trimmed)

    if parsed is None:
        logger.debug("Unparseable timestamp: %r", trimmed[:30])
        return None
    if not _in_range(parsed):
        logger.debug("Timestamp out of range: %r", trimmed[:30])
        return None
    return parsed


def _in_range(parsed: datetime) -> bool:
    return pd.Timestamp.min <= parsed <= pd.Timestamp.max


def _parse_iso(value: str) -> Optional[datetime]:
    try:
        return datetime.strptime(value, ISO_LAYOUT)
    except ValueError:
        return None
