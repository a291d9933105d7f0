"""Data validation utilities."""

import re
from typing import Iterable, List, Tuple

import pandas as pd

# Names not fully identified to species, hybrid formulas and environmental
# samples. Hybrid names like "Equisetum x ferrissii" or
# "x Cystocarpium roskamianum" pass; "Cystopteris alpina x Cystopteris fragilis"
# does not.
EXCLUDED_NAME_PATTERN = re.compile(
    r" sp\.| aff\.| cf\.| × [A-Z]| x [A-Z]|environmental sample"
)


def validate_species_name(name: str) -> Tuple[bool, List[str]]:
    """Check whether a scientific name is a fully identified species.

    Args:
        name: Scientific name from the taxonomy dump

    Returns:
        Tuple of (is_valid, list_of_errors)
    """
    errors = []

    if not isinstance(name, str):
        errors.append(f"Name must be a string, got: {name!r}")
        return False, errors

    match = EXCLUDED_NAME_PATTERN.search(name)
    if match:
        errors.append(f"Name contains excluded term {match.group(0).strip()!r}")

    if name.count(" ") < 1:
        errors.append("Name is a single word")

    return len(errors) == 0, errors


def is_fully_identified(name: str) -> bool:
    """True if ``validate_species_name`` finds no problems."""
    is_valid, _ = validate_species_name(name)
    return is_valid


def validate_name_class(name_class: str) -> Tuple[bool, List[str]]:
    """Validate the raw name-class field of a names.dmp record.

    The field must carry exactly one trailing ``|`` separator; any other
    count means the record has hidden fields.

    Args:
        name_class: Raw fourth field, e.g. "scientific name\\t|"

    Returns:
        Tuple of (is_valid, list_of_errors)
    """
    errors = []

    if not isinstance(name_class, str):
        errors.append(f"Name class must be a string, got: {name_class!r}")
        return False, errors

    n_separators = name_class.count("|")
    if n_separators != 1:
        errors.append(f"Name class {name_class!r} has {n_separators} field separators, expected 1")

    return len(errors) == 0, errors


def validate_columns(df: pd.DataFrame, required_columns: Iterable[str]) -> Tuple[bool, List[str]]:
    """Check that a DataFrame has every required column.

    Args:
        df: Table to check
        required_columns: Columns that must be present

    Returns:
        Tuple of (is_valid, list_of_errors)
    """
    missing = [col for col in required_columns if col not in df.columns]
    errors = [f"Missing required column: {col}" for col in missing]
    return len(errors) == 0, errors
