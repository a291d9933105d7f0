"""Map of project participants by country."""

import logging
import re
from pathlib import Path
from typing import Dict, List, Optional

import pandas as pd
import plotly.express as px
import plotly.graph_objects as go

logger = logging.getLogger(__name__)

# Roster spellings -> names recognised by the map
COUNTRY_REPLACEMENTS: Dict[str, str] = {
    "USA": "United States",
    "UK": "United Kingdom",
    "Brunei Darussalam": "Brunei",
}

LEGEND_BREAKS = [5, 15, 30, 45]
CM_PER_INCH = 2.54


def normalize_countries(roster: pd.DataFrame,
                        replacements: Optional[Dict[str, str]] = None) -> pd.DataFrame:
    """Rewrite country spellings in the roster.

    Replacements match whole words so "UK" does not alter "Ukraine". Rows
    with a blank country are dropped.
    """
    replacements = COUNTRY_REPLACEMENTS if replacements is None else replacements
    country = roster["country"].where(roster["country"].notna(), "").astype(str).str.strip()
    blank = country == ""
    if blank.any():
        logger.warning(f"Dropping {int(blank.sum())} participants without a country")
    roster = roster.loc[~blank].copy()
    country = country[~blank]
    for old, new in replacements.items():
        country = country.str.replace(rf"\b{re.escape(old)}\b", new, regex=True)
    roster["country"] = country
    return roster


def count_participants(roster: pd.DataFrame) -> pd.DataFrame:
    """Count participants per country.

    Returns:
        DataFrame with columns country, n sorted by country
    """
    roster = normalize_countries(roster)
    return (
        roster.groupby("country", sort=True)
        .size()
        .reset_index(name="n")
    )


def make_ppg_plot(roster: pd.DataFrame, breaks: List[int] = LEGEND_BREAKS,
                  legend_title: str = "Participants") -> go.Figure:
    """Bubble map with one marker per country sized and coloured by head count.

    Args:
        roster: Participant roster with a ``country`` column
        breaks: Head counts labelled on the colour bar

    Returns:
        Plotly figure
    """
    counts = count_participants(roster)
    logger.info(f"{int(counts['n'].sum()):,} participants from {len(counts)} countries")

    fig = px.scatter_geo(
        counts,
        locations="country",
        locationmode="country names",
        size="n",
        color="n",
        hover_name="country",
        color_continuous_scale="Viridis",
        projection="natural earth",
        labels={"n": legend_title},
    )
    fig.update_traces(marker={"line": {"width": 0.5, "color": "black"}})
    fig.update_geos(showcountries=True, countrycolor="grey", showland=False,
                    showframe=False, bgcolor="rgba(0,0,0,0)")
    fig.update_layout(
        coloraxis_colorbar={"title": legend_title, "tickvals": breaks, "ticktext": breaks},
        paper_bgcolor="rgba(0,0,0,0)",
        plot_bgcolor="rgba(0,0,0,0)",
        font={"size": 18},
        margin={"l": 0, "r": 0, "t": 0, "b": 0},
    )
    return fig


def save_map(fig: go.Figure, file_path: Path, width_cm: float = 32, height_cm: float = 14,
             dpi: int = 96) -> Path:
    """Write a plotly figure to a static image (requires kaleido).

    Args:
        fig: Figure to save
        file_path: Destination path; format follows the suffix
        width_cm: Width in centimetres
        height_cm: Height in centimetres
        dpi: Pixels per inch used to convert the size

    Returns:
        The destination path
    """
    file_path = Path(file_path)
    file_path.parent.mkdir(parents=True, exist_ok=True)
    fig.write_image(
        str(file_path),
        width=int(width_cm / CM_PER_INCH * dpi),
        height=int(height_cm / CM_PER_INCH * dpi),
        scale=2,
    )
    logger.info(f"Saved map to {file_path}")
    return file_path
