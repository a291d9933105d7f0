"""Data loading utilities for pipeline tables."""

import logging
import re
from pathlib import Path
from typing import List, Optional, Union

import pandas as pd

from .validators import validate_columns
from ..genbank.schema import SUMMARY_COLUMNS, TAXON_COUNT_COLUMNS, TAXON_NAME_COLUMNS

logger = logging.getLogger(__name__)


def load_table_from_tsv(
    file_path: Path,
    required_columns: Optional[List[str]] = None,
    dtype: Optional[dict] = None
) -> pd.DataFrame:
    """Load a pipeline table from a TSV file.

    Args:
        file_path: Path to TSV file
        required_columns: List of required columns to validate
        dtype: Column types passed to pandas

    Returns:
        DataFrame with the table

    Raises:
        FileNotFoundError: If file doesn't exist
        ValueError: If required columns are missing
    """
    file_path = Path(file_path)
    if not file_path.exists():
        raise FileNotFoundError(f"File not found: {file_path}")

    df = pd.read_csv(file_path, sep='\t', dtype=dtype)

    if required_columns:
        is_valid, errors = validate_columns(df, required_columns)
        if not is_valid:
            raise ValueError(f"{file_path}: {'; '.join(errors)}")

    return df


def load_taxon_counts(file_path: Path) -> pd.DataFrame:
    """Load per-year taxon counts written by ``genbank fetch``.

    Taxon IDs stay strings; empty cells become nulls.
    """
    df = load_table_from_tsv(file_path, TAXON_COUNT_COLUMNS, dtype={'taxid': str, 'type': str})
    df['taxid'] = df['taxid'].astype('object').where(df['taxid'].notna(), None)
    return df


def load_species_names(file_path: Path) -> pd.DataFrame:
    """Load taxon ID to species name pairs written by ``genbank names``."""
    return load_table_from_tsv(file_path, TAXON_NAME_COLUMNS, dtype={'taxid': str, 'species': str})


def load_species_by_year(file_path: Path) -> pd.DataFrame:
    """Load species-by-year summaries written by ``genbank count``."""
    return load_table_from_tsv(file_path, SUMMARY_COLUMNS, dtype={'type': str})


def save_table(df: pd.DataFrame, file_path: Path) -> Path:
    """Write a pipeline table as TSV, creating parent directories.

    Args:
        df: Table to write
        file_path: Destination path

    Returns:
        The destination path
    """
    file_path = Path(file_path)
    file_path.parent.mkdir(parents=True, exist_ok=True)
    df.to_csv(file_path, sep='\t', index=False)
    logger.info(f"Wrote {len(df):,} rows to {file_path}")
    return file_path


def clean_column_name(name: str) -> str:
    """Convert a spreadsheet header to snake_case."""
    name = re.sub(r'([a-z0-9])([A-Z])', r'\1_\2', str(name).strip())
    name = re.sub(r'[^0-9a-zA-Z]+', '_', name).strip('_').lower()
    return name or 'x'


def load_participant_roster(source: Union[str, Path]) -> pd.DataFrame:
    """Load the participant roster from a CSV file or URL.

    Column names are converted to snake_case. A Google Sheets link is
    rewritten to its CSV export URL.

    Args:
        source: Local CSV path, CSV URL, or Google Sheets sharing link

    Returns:
        DataFrame with at least a ``country`` column

    Raises:
        FileNotFoundError: If a local file doesn't exist
        ValueError: If the roster has no country column
    """
    source_str = str(source)
    if source_str.startswith(('http://', 'https://')):
        match = re.search(r'docs\.google\.com/spreadsheets/d/([^/]+)', source_str)
        if match:
            source_str = (f"https://docs.google.com/spreadsheets/d/{match.group(1)}"
                          f"/export?format=csv")
        logger.info(f"Downloading participant roster from {source_str}")
    elif not Path(source_str).exists():
        raise FileNotFoundError(f"File not found: {source_str}")

    roster = pd.read_csv(source_str)
    roster.columns = [clean_column_name(col) for col in roster.columns]

    is_valid, errors = validate_columns(roster, ['country'])
    if not is_valid:
        raise ValueError(f"Participant roster: {'; '.join(errors)}")

    return roster
