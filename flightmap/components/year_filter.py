"""
Year filter component for the sidebar.

Shows a select box of the years present in the upload, each with its
flight count, above a small histogram of flights per year.
"""

from typing import Dict, List, Optional

import plotly.graph_objects as go
import streamlit as st

from flightmap.config import FlightMapConfig

ALL_YEARS_LABEL = "All years"


def year_options(year_counts: Dict[int, int]) -> Dict[str, Optional[int]]:
    """
    Select box labels mapped to the year they select.

    Examples:
        >>> year_options({2019: 3, 2020: 1})
        {'All years (4)': None, '2019 (3)': 2019, '2020 (1)': 2020}
    """
    total = sum(year_counts.values())
    options: Dict[str, Optional[int]] = {f"{ALL_YEARS_LABEL} ({total})": None}
    for year, count in year_counts.items():
        options[f"{year} ({count})"] = year
    return options


def create_year_histogram(
    year_counts: Dict[int, int], selected_year: Optional[int] = None
) -> Optional[go.Figure]:
    """
    Create a bar chart of flights per year.

    Args:
        year_counts: Flight count per year, ascending.
        selected_year: Year drawn in the highlight color, if any.

    Returns:
        Plotly Figure object, or None if there are no flights.
    """
    if not year_counts:
        return None

    colors = FlightMapConfig.colors
    years: List[int] = list(year_counts.keys())
    bar_colors = [
        colors.top_color if year == selected_year else colors.bands[0][1]
        for year in years
    ]

    fig = go.Figure(
        go.Bar(
            x=[str(year) for year in years],
            y=list(year_counts.values()),
            marker_color=bar_colors,
            hovertemplate="%{x}: %{y} flights<extra></extra>",
        )
    )
    fig.update_layout(
        height=160,
        margin={"r": 0, "t": 0, "l": 0, "b": 0},
        xaxis=dict(type="category"),
        yaxis=dict(showgrid=False),
    )
    return fig


def render_year_filter(
    year_counts: Dict[int, int],
    selected_year: Optional[int],
    disabled: bool = False,
) -> Optional[int]:
    """
    Render the year select box and histogram.

    Args:
        year_counts: Flight count per year of the current upload.
        selected_year: Year currently applied to the map.
        disabled: Lock the control, e.g. during playback.

    Returns:
        The year chosen by the user, or None for all years.
    """
    if not year_counts:
        return None

    st.sidebar.markdown("---")
    st.sidebar.subheader("Year")

    options = year_options(year_counts)
    labels = list(options.keys())
    values = list(options.values())
    index = values.index(selected_year) if selected_year in values else 0

    label = st.sidebar.selectbox(
        "Show flights from:",
        labels,
        index=index,
        disabled=disabled,
    )

    fig = create_year_histogram(year_counts, options[label])
    if fig:
        st.sidebar.plotly_chart(fig, use_container_width=True)
    return options[label]
