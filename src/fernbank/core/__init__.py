"""Core species accumulation analysis."""

# Submodules are available for import but not loaded at package level
# Import submodules explicitly when needed:
#   from fernbank.core.counting import count_ncbi_species_by_year
#   from fernbank.core.sampling import define_tree_sampling

__all__ = [
    "counting",
    "sampling",
]
