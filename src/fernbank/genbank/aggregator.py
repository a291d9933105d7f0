"""Count GenBank accessions per taxon for each year and compartment."""

import logging
from typing import List, Union

import pandas as pd
from tqdm import tqdm

from .client import GenBankClient
from .fetcher import fetch_metadata, CHUNK_SIZE
from .queries import publication_date_query
from .schema import Compartment, TAXON_COUNT_COLUMNS, YearTypeQuery

logger = logging.getLogger(__name__)


def fetch_taxa_by_year(client: GenBankClient, query: str, year: int,
                       compartment: Union[Compartment, str],
                       chunk_size: int = CHUNK_SIZE) -> pd.DataFrame:
    """Count accessions per taxon ID published in a single year.

    Args:
        client: GenBank client
        query: Search template for the compartment
        year: Publication year
        compartment: Genomic compartment the template selects
        chunk_size: Ids per esummary request

    Returns:
        DataFrame with columns taxid, n, type, year; a query with no hits
        gives one row with a null taxid
    """
    full_query = publication_date_query(query, year)
    records = fetch_metadata(client, full_query, ["taxid"], chunk_size=chunk_size)

    counts = (
        records.groupby("taxid", dropna=False, sort=True)
        .size()
        .reset_index(name="n")
    )
    counts["type"] = Compartment(compartment).value
    counts["year"] = int(year)

    return counts[TAXON_COUNT_COLUMNS]


def fetch_all_taxa(client: GenBankClient, queries: List[YearTypeQuery],
                   chunk_size: int = CHUNK_SIZE, progress: bool = True) -> pd.DataFrame:
    """Run ``fetch_taxa_by_year`` for every query and stack the results.

    Args:
        client: GenBank client
        queries: Queries from ``make_gb_query``
        chunk_size: Ids per esummary request
        progress: Whether to show a progress bar

    Returns:
        DataFrame with columns taxid, n, type, year
    """
    frames = []
    for q in tqdm(queries, desc="Fetching GenBank taxa", unit="query", disable=not progress):
        logger.debug(f"Fetching {q.compartment.value} taxa for {q.year}")
        frames.append(fetch_taxa_by_year(client, q.query, q.year, q.compartment,
                                         chunk_size=chunk_size))

    if not frames:
        return pd.DataFrame(columns=TAXON_COUNT_COLUMNS)

    gb_taxa = pd.concat(frames, ignore_index=True)
    logger.info(f"Collected {len(gb_taxa):,} taxon counts from {len(queries)} queries")
    return gb_taxa
