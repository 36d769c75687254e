"""
Airport frequency coloring.

Counts how many flights touch each airport and maps the count, relative
to the busiest airport, onto five fixed color bands. Route segments are
colored by blending the two endpoint colors in RGB space.
"""

from collections import Counter
from dataclasses import dataclass, field
from typing import Dict, Iterable, Optional, Tuple

from flightmap.config import ColorConfig, FlightMapConfig
from flightmap.schemas.visualization import FlightVisualization

__all__ = [
    "AirportColoring",
    "compute_airport_frequencies",
    "ratio_color",
    "frequency_color",
    "build_airport_coloring",
    "hex_to_rgb",
    "rgb_to_hex",
    "interpolate_color",
]

RGB = Tuple[int, int, int]


def compute_airport_frequencies(
    visualizations: Iterable[FlightVisualization],
) -> Dict[str, int]:
    """
    Count flights per airport code.

    Each flight increments both of its endpoints, so a flight from and to
    the same airport counts twice for it.
    """
    counts: Counter = Counter()
    for visualization in visualizations:
        counts[visualization.from_code] += 1
        counts[visualization.to_code] += 1
    return dict(counts)


def ratio_color(ratio: float, config: Optional[ColorConfig] = None) -> str:
    """
    Map a frequency ratio in [0, 1] to its band color.

    Band upper bounds are inclusive: 0.15 is still blue, 0.151 is cyan.

    Examples:
        >>> ratio_color(0.15)
        '#3b82f6'
        >>> ratio_color(1.0)
        '#ef4444'
    """
    config = config or FlightMapConfig.colors
    for upper_bound, color in config.bands:
        if ratio <= upper_bound:
            return color
    return config.top_color


def frequency_color(
    count: int, max_count: int, config: Optional[ColorConfig] = None
) -> str:
    """Color for an airport with `count` flights when the busiest has `max_count`."""
    config = config or FlightMapConfig.colors
    if max_count <= 0:
        return config.default_color
    return ratio_color(count / max_count, config)


@dataclass(frozen=True)
class AirportColoring:
    """
    Frequency and color tables for one visualization set.

    Attributes:
        frequencies: Flights touching each airport code.
        max_frequency: Largest count, the normalization denominator.
        colors: Band color per airport code.
    """

    frequencies: Dict[str, int] = field(default_factory=dict)
    max_frequency: int = 0
    colors: Dict[str, str] = field(default_factory=dict)

    def color_for(self, code: str) -> str:
        return self.colors.get(code, FlightMapConfig.colors.default_color)

    def frequency_for(self, code: str) -> int:
        return self.frequencies.get(code, 0)


def build_airport_coloring(
    visualizations: Iterable[FlightVisualization],
    config: Optional[ColorConfig] = None,
) -> AirportColoring:
    """Compute frequencies and band colors for every airport in the set."""
    config = config or FlightMapConfig.colors
    frequencies = compute_airport_frequencies(visualizations)
    max_frequency = max(frequencies.values(), default=0)

    colors = {
        code: frequency_color(count, max_frequency, config)
        for code, count in frequencies.items()
    }
    return AirportColoring(
        frequencies=frequencies, max_frequency=max_frequency, colors=colors
    )


def hex_to_rgb(color: str) -> RGB:
    """Parse '#rrggbb' into an (r, g, b) tuple."""
    value = color.lstrip("#")
    return (int(value[0:2], 16), int(value[2:4], 16), int(value[4:6], 16))


def rgb_to_hex(rgb: RGB) -> str:
    return "#{:02x}{:02x}{:02x}".format(*rgb)


def interpolate_color(start: str, end: str, ratio: float) -> str:
    """
    Blend two hex colors linearly in RGB space.

    Args:
        start: Color at ratio 0.
        end: Color at ratio 1.
        ratio: Position between the two, clamped to [0, 1].

    Returns:
        Hex color string.
    """
    ratio = min(max(ratio, 0.0), 1.0)
    start_rgb = hex_to_rgb(start)
    end_rgb = hex_to_rgb(end)
    blended = tuple(
        round(a + (b - a) * ratio) for a, b in zip(start_rgb, end_rgb)
    )
    return rgb_to_hex(blended)
