"""Thin client over NCBI E-utilities for the nucleotide database."""

import logging
from typing import Any, Dict, List, Optional

from Bio import Entrez

logger = logging.getLogger(__name__)


class GenBankClient:
    """Searches GenBank and downloads document summaries via Biopython."""

    DATABASE = "nucleotide"
    TOOL_NAME = "fernbank"

    def __init__(self, email: Optional[str] = None, api_key: Optional[str] = None,
                 database: str = DATABASE):
        """Initialize client.

        Args:
            email: Contact address sent with every request (NCBI policy)
            api_key: Optional NCBI API key raising the request rate limit
            database: Entrez database to query
        """
        self.database = database
        if email:
            Entrez.email = email
        if api_key:
            Entrez.api_key = api_key
        Entrez.tool = self.TOOL_NAME

    def count(self, query: str) -> int:
        """Return the number of records matching a query without fetching ids."""
        handle = Entrez.esearch(db=self.database, term=query, retmax=0)
        try:
            record = Entrez.read(handle)
        finally:
            handle.close()
        count = int(record["Count"])
        logger.debug(f"{count:,} records match: {query}")
        return count

    def search_ids(self, query: str, retmax: int) -> List[str]:
        """Return up to ``retmax`` record ids matching a query."""
        handle = Entrez.esearch(db=self.database, term=query, retmax=retmax)
        try:
            record = Entrez.read(handle)
        finally:
            handle.close()
        return [str(uid) for uid in record["IdList"]]

    def summaries(self, ids: List[str]) -> List[Dict[str, Any]]:
        """Download document summaries for a list of record ids.

        Args:
            ids: Record ids (GI numbers)

        Returns:
            One dictionary per document, keyed as in esummary version 2.0
        """
        if not ids:
            return []

        handle = Entrez.esummary(db=self.database, id=",".join(ids), version="2.0")
        try:
            result = Entrez.read(handle)
        finally:
            handle.close()

        documents = result["DocumentSummarySet"]["DocumentSummary"]
        return [dict(document) for document in documents]
