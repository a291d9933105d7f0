"""Taxonomy dump access and table loading utilities."""

# Submodules are available for import but not loaded at package level
# Import submodules explicitly when needed:
#   from fernbank.data.taxonomy import load_ncbi_names
#   from fernbank.data.archive_reader import extracted_member
#   from fernbank.data.validators import validate_species_name

__all__ = [
    "archive_reader",
    "downloader",
    "loaders",
    "taxonomy",
    "validators",
]
