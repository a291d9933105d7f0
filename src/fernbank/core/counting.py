"""Accumulate species and accession counts per year."""

import logging
from typing import Iterable

import pandas as pd

from ..genbank.schema import SUMMARY_COLUMNS, TAXON_COUNT_COLUMNS, TAXON_NAME_COLUMNS, TOTAL_LABEL

logger = logging.getLogger(__name__)


def join_species(gb_taxa: pd.DataFrame, ncbi_names: pd.DataFrame) -> pd.DataFrame:
    """Attach species names to per-year taxon counts.

    Rows without a taxon ID and taxon IDs without an accepted species name
    are dropped.

    Args:
        gb_taxa: DataFrame with columns taxid, n, type, year
        ncbi_names: DataFrame with columns taxid, species

    Returns:
        DataFrame with columns taxid, n, type, year, species
    """
    missing = set(TAXON_COUNT_COLUMNS) - set(gb_taxa.columns)
    if missing:
        raise ValueError(f"Taxon counts missing columns: {sorted(missing)}")
    missing = set(TAXON_NAME_COLUMNS) - set(ncbi_names.columns)
    if missing:
        raise ValueError(f"Species names missing columns: {sorted(missing)}")

    gb_taxa = gb_taxa[gb_taxa["taxid"].notna()].copy()
    gb_taxa["taxid"] = gb_taxa["taxid"].astype(str)

    names = ncbi_names[TAXON_NAME_COLUMNS].copy()
    names["taxid"] = names["taxid"].astype(str)

    return gb_taxa.merge(names, on="taxid", how="inner")


def sum_species(gb_species: pd.DataFrame, year_select: int) -> pd.DataFrame:
    """Count species and accessions accumulated up to and including a year.

    Args:
        gb_species: Output of ``join_species``
        year_select: Last year included

    Returns:
        One row per compartment present plus a ``total`` row
    """
    upto = gb_species[gb_species["year"] <= year_select]

    by_type = (
        upto.groupby("type", sort=True)
        .agg(n_species=("species", "nunique"), n_acc=("n", "sum"))
        .reset_index()
    )
    total = pd.DataFrame({
        "type": [TOTAL_LABEL],
        "n_species": [upto["species"].nunique()],
        "n_acc": [upto["n"].sum()],
    })

    summary = pd.concat([by_type, total], ignore_index=True)
    summary["year"] = int(year_select)
    summary["n_species"] = summary["n_species"].astype(int)
    summary["n_acc"] = summary["n_acc"].astype(int)
    return summary[SUMMARY_COLUMNS]


def count_ncbi_species_by_year(gb_taxa: pd.DataFrame, ncbi_names: pd.DataFrame,
                               year_range: Iterable[int]) -> pd.DataFrame:
    """Count the number of species accumulated in GenBank each year by
    genomic compartment.

    Counts are cumulative: the row for year ``y`` covers every accession
    published in or before ``y``.

    Args:
        gb_taxa: DataFrame with columns taxid, n (number of accessions with
            that ID), type (plastid, nuclear, or mitochondrial) and year
        ncbi_names: DataFrame with columns taxid and species
        year_range: Years to calculate

    Returns:
        DataFrame with columns type, n_species, n_acc, year
    """
    gb_species = join_species(gb_taxa, ncbi_names)
    logger.info(f"{len(gb_species):,} taxon counts resolved to "
                f"{gb_species['species'].nunique():,} species")

    frames = [sum_species(gb_species, year) for year in year_range]
    if not frames:
        return pd.DataFrame(columns=SUMMARY_COLUMNS)

    return pd.concat(frames, ignore_index=True)
