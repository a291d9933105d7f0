"""GenBank search, retrieval and per-year aggregation."""

# Submodules are available for import but not loaded at package level
# Import submodules explicitly when needed:
#   from fernbank.genbank.client import GenBankClient
#   from fernbank.genbank.fetcher import fetch_metadata
#   from fernbank.genbank.queries import make_gb_query

__all__ = [
    "aggregator",
    "client",
    "fetcher",
    "queries",
    "schema",
]
