"""Build per-year GenBank search terms."""

from typing import List, Optional

import pandas as pd

from .schema import YearTypeQuery
from ..configs.base import BaseConfig
from ..configs.ferns import FernConfig


def make_gb_query(config: Optional[BaseConfig] = None) -> List[YearTypeQuery]:
    """Cross every query year with every compartment search template.

    Args:
        config: Survey configuration (default: ferns, 1990 to 2023)

    Returns:
        One YearTypeQuery per (year, compartment) pair, grouped by compartment
    """
    config = config or FernConfig()

    return [
        YearTypeQuery(year=year, compartment=compartment, query=template)
        for compartment, template in config.get_query_templates().items()
        for year in config.query_years
    ]


def queries_to_frame(queries: List[YearTypeQuery]) -> pd.DataFrame:
    """Convert queries to a DataFrame with columns year, query, type."""
    return pd.DataFrame([q.to_dict() for q in queries], columns=["year", "query", "type"])


def publication_date_query(query: str, year: int) -> str:
    """Restrict a search term to records published from ``year`` to ``year + 1``."""
    return f'{query} AND ("{year}"[Publication Date] : "{year + 1}"[Publication Date]) '
