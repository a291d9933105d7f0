"""Record and table definitions for GenBank accession data."""

from dataclasses import dataclass, asdict
from enum import Enum
from typing import Dict, Any, List, Optional

import pandas as pd


class Compartment(str, Enum):
    """Genomic compartment a sequence originates from."""
    PLASTID = "plastid"
    NUCLEAR = "nuclear"
    MITOCHONDRIAL = "mitochondrial"

    def __str__(self) -> str:
        return self.value


# Label of the all-compartments row in species-by-year summaries
TOTAL_LABEL = "total"

# Default metadata fields retained from each document summary
DEFAULT_FIELDS = ["gi", "caption", "taxid", "title", "slen", "subtype", "subname"]

# Lowercase field name -> key in NCBI esummary (version 2.0) documents
SUMMARY_KEYS = {
    "gi": "Gi",
    "caption": "Caption",
    "taxid": "TaxId",
    "title": "Title",
    "slen": "Slen",
    "subtype": "SubType",
    "subname": "SubName",
    "accession": "AccessionVersion",
    "organism": "Organism",
    "create_date": "CreateDate",
}

TAXON_COUNT_COLUMNS = ["taxid", "n", "type", "year"]
TAXON_NAME_COLUMNS = ["taxid", "species"]
SUMMARY_COLUMNS = ["type", "n_species", "n_acc", "year"]


@dataclass(frozen=True)
class YearTypeQuery:
    """Search term for one year and genomic compartment."""
    year: int
    compartment: Compartment
    query: str

    def to_dict(self) -> Dict[str, Any]:
        """Convert query to a table row."""
        row = asdict(self)
        row["type"] = self.compartment.value
        del row["compartment"]
        return row


@dataclass
class BatchResult:
    """Outcome of fetching document summaries for one batch of ids.

    Either ``ok`` is True and ``records`` holds the raw summaries, or
    ``ok`` is False and ``error`` says why the batch could not be retrieved.
    """
    ids: List[str]
    ok: bool
    records: Optional[List[Dict[str, Any]]] = None
    error: Optional[str] = None

    @classmethod
    def success(cls, ids: List[str], records: List[Dict[str, Any]]) -> 'BatchResult':
        return cls(ids=ids, ok=True, records=records)

    @classmethod
    def failure(cls, ids: List[str], error: str) -> 'BatchResult':
        return cls(ids=ids, ok=False, error=error)


def empty_records(col_select: Optional[List[str]] = None) -> pd.DataFrame:
    """Build the "no data" frame: a single row with a null taxid.

    Args:
        col_select: Columns to include; taxid is always present

    Returns:
        One-row DataFrame where every column is null
    """
    columns = list(col_select or ["taxid"])
    if "taxid" not in columns:
        columns.append("taxid")
    return pd.DataFrame({col: pd.Series([None], dtype="object") for col in columns})
