"""Plot species accumulated in GenBank against phylogeny sampling."""

import logging
from pathlib import Path
from typing import Optional

import matplotlib

# Ensure matplotlib uses non-GUI backend BEFORE any other matplotlib imports
matplotlib.use("Agg")

import matplotlib.dates as mdates
import matplotlib.pyplot as plt
import pandas as pd
from matplotlib.figure import Figure

from ..genbank.schema import Compartment

logger = logging.getLogger(__name__)

CM_PER_INCH = 2.54
MARKERS = ["o", "^", "s", "+", "x", "D", "v", "*"]


def species_by_date(gb_species_by_year: pd.DataFrame, compartment: str) -> pd.DataFrame:
    """Select one compartment and place each year on January 1st."""
    selected = gb_species_by_year[gb_species_by_year["type"] == str(compartment)].copy()
    selected["date"] = pd.to_datetime(selected["year"].astype(int).astype(str) + "-01-01")
    return selected.sort_values("date")


def make_gb_plot(gb_species_by_year: pd.DataFrame, fern_tree_sampling: pd.DataFrame,
                 compartment: str = Compartment.PLASTID.value,
                 base_size: float = 16,
                 legend_title: str = "Representative studies",
                 xlabel: str = "Year",
                 ylabel: str = "Number of species") -> Figure:
    """Line of species in GenBank per year with phylogeny sampling as points.

    Args:
        gb_species_by_year: Output of ``count_ncbi_species_by_year``
        fern_tree_sampling: Output of ``define_tree_sampling``
        compartment: Genomic compartment drawn as the line
        base_size: Base font size in points

    Returns:
        Matplotlib figure
    """
    line = species_by_date(gb_species_by_year, compartment)
    if line.empty:
        logger.warning(f"No {compartment} rows to plot")

    fig, ax = plt.subplots(figsize=(17 / CM_PER_INCH, 14 / CM_PER_INCH))

    sources = fern_tree_sampling["source"]
    categories = sources.cat.categories if hasattr(sources, "cat") else pd.unique(sources)
    for i, source in enumerate(categories):
        points = fern_tree_sampling[fern_tree_sampling["source"] == source]
        if points.empty:
            continue
        ax.scatter(points["date"], points["n_species"], marker=MARKERS[i % len(MARKERS)],
                   color="black", s=30, label=str(source), zorder=3, clip_on=False)

    ax.plot(line["date"], line["n_species"], color="black", linewidth=1, zorder=2)

    ax.xaxis.set_major_locator(mdates.YearLocator(5))
    ax.xaxis.set_major_formatter(mdates.DateFormatter("%Y"))
    ax.margins(x=0, y=0)
    ax.set_ylim(bottom=0)
    ax.set_xlabel(xlabel, fontsize=base_size)
    ax.set_ylabel(ylabel, fontsize=base_size)
    ax.tick_params(labelsize=base_size * 0.8)
    ax.grid(True, color="0.9")
    for spine in ax.spines.values():
        spine.set_visible(False)

    n_sources = len(ax.get_legend_handles_labels()[1])
    if n_sources:
        ax.legend(title=legend_title, loc="upper center", bbox_to_anchor=(0.5, -0.15),
                  ncol=max(1, -(-n_sources // 2)), frameon=False,
                  fontsize=base_size * 0.7, title_fontsize=base_size * 0.8)

    fig.tight_layout()
    return fig


def save_figure(fig: Figure, file_path: Path, width_cm: float = 17, height_cm: float = 14,
                dpi: int = 300) -> Path:
    """Save a matplotlib figure as an image of the given size in centimetres.

    Args:
        fig: Figure to save
        file_path: Destination path; format follows the suffix
        width_cm: Width in centimetres
        height_cm: Height in centimetres
        dpi: Resolution for raster formats

    Returns:
        The destination path
    """
    file_path = Path(file_path)
    file_path.parent.mkdir(parents=True, exist_ok=True)
    fig.set_size_inches(width_cm / CM_PER_INCH, height_cm / CM_PER_INCH)
    fig.savefig(file_path, dpi=dpi, bbox_inches="tight")
    plt.close(fig)
    logger.info(f"Saved plot to {file_path}")
    return file_path
