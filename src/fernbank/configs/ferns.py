"""
Fern (Polypodiopsida) survey configuration.

Counts fern accessions deposited in GenBank from 1990 onwards, split into
plastid, nuclear and mitochondrial sequences.
"""

from typing import Dict

from .base import BaseConfig
from ..genbank.schema import Compartment


class FernConfig(BaseConfig):
    """GenBank sampling of ferns by genomic compartment."""

    organism = "Polypodiopsida"

    def __init__(self):
        super().__init__(
            name="ferns",
            description="Fern (Polypodiopsida) accessions in GenBank by genomic compartment"
        )

    def get_query_templates(self) -> Dict[Compartment, str]:
        return {
            Compartment.PLASTID: f"({self.organism}[Organism] AND gene_in_plastid[PROP])",
            Compartment.NUCLEAR: f"({self.organism}[Organism] gene_in_genomic[PROP])",
            Compartment.MITOCHONDRIAL: f"({self.organism}[Organism] gene_in_mitochondrion[PROP])",
        }
