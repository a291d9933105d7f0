"""Fetch GenBank record metadata for a search query."""

import logging
from typing import Any, Dict, List, Optional

import pandas as pd

from .client import GenBankClient
from .schema import BatchResult, DEFAULT_FIELDS, SUMMARY_KEYS, empty_records
from ..utils.file_utils import chunked, count_chunks

logger = logging.getLogger(__name__)

# Number of ids sent per esummary request
CHUNK_SIZE = 200


class MissingTaxonIdError(ValueError):
    """A successfully retrieved record has no taxon ID."""


def project_records(records: List[Dict[str, Any]], col_select: List[str]) -> pd.DataFrame:
    """Keep only the requested fields from raw document summaries.

    Args:
        records: Document summaries as returned by ``GenBankClient.summaries``
        col_select: Lowercase field names to keep

    Returns:
        DataFrame with one row per record and taxid as string

    Raises:
        ValueError: If a requested field is unknown
        MissingTaxonIdError: If any record lacks a taxon ID
    """
    unknown = set(col_select) - set(SUMMARY_KEYS)
    if unknown:
        raise ValueError(f"Unknown GenBank fields: {sorted(unknown)}")

    rows = []
    for record in records:
        row = {}
        for field in col_select:
            value = record.get(SUMMARY_KEYS[field])
            row[field] = str(value) if value is not None else None
        rows.append(row)

    df = pd.DataFrame(rows, columns=col_select)
    if "slen" in df.columns:
        df["slen"] = pd.to_numeric(df["slen"], errors="coerce").astype("Int64")

    if "taxid" in df.columns:
        df["taxid"] = df["taxid"].astype("object")
        missing = df["taxid"].isna() | (df["taxid"] == "")
        if missing.any():
            raise MissingTaxonIdError(
                f"{int(missing.sum())} of {len(df)} retrieved records have no taxon ID"
            )

    return df


def fetch_batch(client: GenBankClient, ids: List[str]) -> BatchResult:
    """Download summaries for one batch of ids, capturing retrieval faults.

    Args:
        client: GenBank client
        ids: Record ids in this batch

    Returns:
        Successful result with the raw records, or a failed result with the reason
    """
    try:
        records = client.summaries(ids)
    except Exception as e:
        return BatchResult.failure(ids, f"{type(e).__name__}: {e}")

    if not records:
        return BatchResult.failure(ids, "No esummary records found")

    return BatchResult.success(ids, records)


def fetch_metadata(client: GenBankClient, query: str,
                   col_select: Optional[List[str]] = None,
                   chunk_size: int = CHUNK_SIZE) -> pd.DataFrame:
    """Fetch metadata of all GenBank records matching a query.

    A query with no hits returns a single row with a null taxid rather than
    an empty table. A batch that cannot be retrieved is replaced by that same
    row and logged as a warning; the remaining batches are still fetched.

    Args:
        client: GenBank client
        query: Entrez search term
        col_select: Metadata fields to retain (default: DEFAULT_FIELDS)
        chunk_size: Ids per esummary request

    Returns:
        DataFrame of record metadata

    Raises:
        MissingTaxonIdError: If a retrieved record has no taxon ID
    """
    if not isinstance(query, str):
        raise TypeError(f"query must be a string, got {type(query).__name__}")
    col_select = list(col_select or DEFAULT_FIELDS)

    # Count hits first without downloading any ids
    count = client.count(query)
    if count < 1:
        logger.info(f"No records found for query: {query}")
        return empty_records(col_select)

    ids = client.search_ids(query, retmax=count + 1)
    if not ids:
        # The index can change between the count and the id search
        logger.warning(f"Count reported {count:,} records but the search returned no ids, "
                       f"returning empty records: {query}")
        return empty_records(col_select)

    if len(ids) == 1:
        return project_records(client.summaries(ids), col_select)

    logger.info(f"Fetching {len(ids):,} records in "
                f"{count_chunks(len(ids), chunk_size)} batches")

    frames = []
    for batch_ids in chunked(ids, chunk_size):
        result = fetch_batch(client, batch_ids)
        if not result.ok:
            logger.warning(f"Batch of {len(batch_ids)} ids failed ({result.error}), "
                           f"returning empty records")
            frames.append(empty_records(col_select))
            continue
        frames.append(project_records(result.records, col_select))

    return pd.concat(frames, ignore_index=True)
