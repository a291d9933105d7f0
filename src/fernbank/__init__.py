"""
fernbank - fern sampling in GenBank

Counts fern species and accessions deposited in GenBank per year and genomic
compartment, resolves taxon IDs against the NCBI taxonomy, and plots the
results.
"""

try:
    from .__version__ import __version__
except ImportError:
    __version__ = "dev"

# Submodules are available for import but not loaded at package level
# Import submodules explicitly when needed:
#   from fernbank.genbank.fetcher import fetch_metadata
#   from fernbank.data.taxonomy import load_ncbi_names
#   from fernbank.core.counting import count_ncbi_species_by_year

__all__ = [
    "__version__",
]
