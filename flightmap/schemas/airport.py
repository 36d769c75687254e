"""
Airport reference data schemas.

Airports are loaded once from the bundled reference CSV and shared
read-only for the lifetime of the process.
"""

from dataclasses import dataclass
from types import MappingProxyType
from typing import Dict, Mapping, Optional, Tuple

Coordinates = Tuple[float, float]


@dataclass(frozen=True)
class Airport:
    """
    Immutable airport reference record, one per IATA code.

    Attributes:
        coordinates: (latitude, longitude) in decimal degrees.
        elevation_ft: Elevation in feet, or None when the source has no value.
    """

    id: str
    ident: str
    type: str
    name: str
    coordinates: Coordinates
    elevation_ft: Optional[float]
    continent: str
    iso_country: str
    iso_region: str
    municipality: str
    scheduled_service: bool
    icao_code: str
    iata_code: str
    gps_code: str
    local_code: str

    @property
    def latitude(self) -> float:
        return self.coordinates[0]

    @property
    def longitude(self) -> float:
        return self.coordinates[1]

    @property
    def display_name(self) -> str:
        """Name with IATA code, falling back to ICAO (e.g., 'Helsinki Airport (HEL)')."""
        return f"{self.name} ({self.iata_code or self.icao_code})"

    @property
    def has_iata_code(self) -> bool:
        return self.iata_code != ""


AirportsMap = Dict[str, Airport]
CodeReplacements = Mapping[str, str]


@dataclass(frozen=True)
class ReferenceData:
    """Airport table plus the retired-code replacement table."""

    airports: Mapping[str, Airport]
    replacements: CodeReplacements

    @classmethod
    def freeze(
        cls, airports: AirportsMap, replacements: Dict[str, str]
    ) -> "ReferenceData":
        """Wrap both tables in read-only views."""
        return cls(
            airports=MappingProxyType(dict(airports)),
            replacements=MappingProxyType(dict(replacements)),
        )
