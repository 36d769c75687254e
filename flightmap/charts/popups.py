"""
Popup content for airport markers and routes.

Content uses the small HTML subset plotly hover labels understand
(<b>, <br>).
"""

from html import escape
from typing import List, Optional, Sequence

from flightmap.config import DisplayConfig, FlightMapConfig
from flightmap.schemas.airport import Airport
from flightmap.schemas.visualization import FlightVisualization

__all__ = ["airport_popup", "route_popup", "format_flight_line"]


def airport_popup(airport: Airport, frequency: int) -> str:
    """
    Popup for an airport marker.

    Examples:
        Helsinki Airport (HEL)
        ICAO: EFHK
        Helsinki, FI
        Flights: 12
    """
    lines = [f"<b>{escape(airport.display_name)}</b>"]
    if airport.icao_code:
        lines.append(f"ICAO: {escape(airport.icao_code)}")

    location = ", ".join(part for part in (airport.municipality, airport.iso_country) if part)
    if location:
        lines.append(escape(location))

    lines.append(f"Flights: {frequency}")
    return "<br>".join(lines)


def format_flight_line(
    visualization: FlightVisualization, config: Optional[DisplayConfig] = None
) -> str:
    """One flight as shown in a route popup (e.g., 'Finnair AY123, 2024-01-15 12:30')."""
    config = config or FlightMapConfig.display
    departure = visualization.departure_timestamp.strftime(config.timestamp_format)
    return (
        f"{escape(visualization.airline)} {escape(visualization.flight_number)}, "
        f"{departure}"
    )


def _section(title: str, flights: Sequence[FlightVisualization]) -> List[str]:
    if not flights:
        return []
    return [f"<b>{title} ({len(flights)})</b>"] + [
        format_flight_line(flight) for flight in flights
    ]


def route_popup(
    from_code: str,
    to_code: str,
    outbound: Sequence[FlightVisualization],
    returning: Sequence[FlightVisualization],
) -> str:
    """
    Popup shared by all segments of a route.

    Lists flights in the drawn direction, then flights in the opposite one.
    """
    lines = [f"<b>{escape(from_code)} ↔ {escape(to_code)}</b>"]
    lines += _section(f"{escape(from_code)} → {escape(to_code)}", outbound)
    lines += _section(f"{escape(to_code)} → {escape(from_code)}", returning)
    return "<br>".join(lines)
