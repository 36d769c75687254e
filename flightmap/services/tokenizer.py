"""
CSV line tokenizer.

Provides the minimal CSV handling shared by the flight and airport
parsers: quote-aware field splitting and header indexing.
"""

from typing import Dict, List, Optional

__all__ = [
    "split_csv_line",
    "split_lines",
    "build_column_index",
    "get_field",
]


def split_csv_line(line: str, delimiter: str = ",") -> List[str]:
    """
    Split one CSV line into trimmed fields.

    A double quote toggles the in-quotes state; delimiters inside quotes
    are kept as field content. Quote characters themselves are dropped
    and escaped quotes ("") are not supported.

    Args:
        line: One line of CSV text, without the line terminator.
        delimiter: Field separator character.

    Returns:
        List of trimmed field values. Never empty: a blank line yields [''].

    Examples:
        >>> split_csv_line('a, "b,c" ,d')
        ['a', 'b,c', 'd']
    """
    fields: List[str] = []
    current: List[str] = []
    in_quotes = False

    for char in line:
        if char == '"':
            in_quotes = not in_quotes
        elif char == delimiter and not in_quotes:
            fields.append("".join(current).strip())
            current = []
        else:
            current.append(char)

    fields.append("".join(current).strip())
    return fields


def split_lines(text: str) -> List[str]:
    """Split text on line feeds, dropping a trailing CR and blank lines."""
    return [line.rstrip("\r") for line in text.split("\n") if line.strip()]


def build_column_index(header_line: str, delimiter: str = ",") -> Dict[str, int]:
    """
    Map lower-cased header names to their column position.

    Duplicate header names resolve to the last occurrence.
    """
    headers = [h.lower().strip() for h in split_csv_line(header_line, delimiter)]
    return {header: index for index, header in enumerate(headers)}


def get_field(values: List[str], column_index: Dict[str, int], name: str) -> str:
    """
    Fetch a trimmed field by column name.

    Returns an empty string when the column is not in the header or the
    row is too short to contain it.
    """
    index: Optional[int] = column_index.get(name)
    if index is None or index >= len(values):
        return ""
    return values[index].strip()
