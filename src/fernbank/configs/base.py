"""Base configuration system for GenBank sampling surveys."""

from abc import ABC, abstractmethod
from typing import Dict, List

from ..genbank.schema import Compartment


class BaseConfig(ABC):
    """Base class for all survey configurations.

    A configuration names the taxon being surveyed and supplies one Entrez
    search template per genomic compartment, plus the year ranges used when
    querying and when counting.
    """

    # First and last publication year queried (inclusive)
    first_query_year = 1990
    last_query_year = 2023

    # Last year reported in species-by-year summaries; the final query year
    # is usually incomplete
    last_count_year = 2022

    chunk_size = 200
    taxdump_member = "names.dmp"

    def __init__(self, name: str, description: str):
        """Initialize base configuration.

        Args:
            name: Configuration name
            description: Human-readable description
        """
        self.name = name
        self.description = description

    @abstractmethod
    def get_query_templates(self) -> Dict[Compartment, str]:
        """Get the Entrez search template for each genomic compartment.

        Returns:
            Dictionary mapping compartment to search term
        """
        pass

    def get_description(self) -> str:
        """Get configuration description.

        Returns:
            Configuration description string
        """
        return self.description

    @property
    def query_years(self) -> List[int]:
        return list(range(self.first_query_year, self.last_query_year + 1))

    @property
    def count_years(self) -> List[int]:
        return list(range(self.first_query_year, self.last_count_year + 1))
