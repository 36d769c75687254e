"""
Flight record schemas.

Defines the immutable Flight record produced by the flight CSV parser
and the ParseResult returned once per upload.
"""

from dataclasses import dataclass, field
from datetime import datetime, timedelta
from typing import List


@dataclass(frozen=True)
class Flight:
    """
    Immutable representation of one uploaded flight.

    Airport codes are taken from the CSV as-is and are not validated
    against the reference data until visualization building.
    """

    airline: str
    flight_code: str
    departure_airport: str
    arrival_airport: str
    departure_timestamp_local: datetime
    arrival_timestamp_local: datetime

    @property
    def route(self) -> str:
        """Human-readable route string (e.g., 'HEL → JFK')."""
        return f"{self.departure_airport} → {self.arrival_airport}"

    @property
    def flight_number(self) -> str:
        """Airline and flight code, as shown in messages and popups."""
        return f"{self.airline} {self.flight_code}"

    @property
    def duration(self) -> timedelta:
        """Local arrival minus local departure (may be negative across zones)."""
        return self.arrival_timestamp_local - self.departure_timestamp_local

    @property
    def duration_hours(self) -> float:
        return self.duration.total_seconds() / 3600


@dataclass
class ParseResult:
    """
    Outcome of parsing one flight CSV upload.

    Attributes:
        flights: Successfully parsed flights, in file order.
        errors: Human-readable messages for every rejected row.
        total_rows: Number of non-blank data lines (header excluded).
        successful_rows: Rows that became a Flight.
        failed_rows: Rows that were rejected.
    """

    flights: List[Flight] = field(default_factory=list)
    errors: List[str] = field(default_factory=list)
    total_rows: int = 0
    successful_rows: int = 0
    failed_rows: int = 0
