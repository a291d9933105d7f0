"""Load species names from an NCBI taxonomy dump."""

import csv
import logging
from pathlib import Path
from typing import Iterable, Union

import pandas as pd

from .archive_reader import extracted_member
from .validators import is_fully_identified, validate_name_class
from ..genbank.schema import TAXON_NAME_COLUMNS

logger = logging.getLogger(__name__)

NAMES_MEMBER = "names.dmp"
SCIENTIFIC_NAME = "scientific name"

# names.dmp columns: tax_id | name_txt | unique name | name class |
NAMES_COLUMNS = ["taxid", "name", "unique_name", "class"]
FIELD_SEPARATOR = r"\t\|\t"
READ_CHUNK_SIZE = 500_000


class MalformedTaxdumpError(ValueError):
    """The taxonomy dump does not have the expected record layout."""


def read_names_dmp(names_path: Path, taxid_keep: Iterable[str]) -> pd.DataFrame:
    """Read names.dmp records for a set of taxon IDs.

    Every record must split into exactly four fields. A record with too
    few or too many fields aborts the read even when its taxon ID is not in
    ``taxid_keep``, since the whole file is parsed before filtering. This is
    stricter than a lenient reader that would warn and keep going.

    Args:
        names_path: Path to an extracted names.dmp file
        taxid_keep: Taxon IDs to retain

    Returns:
        DataFrame with columns taxid, name, class (class still carrying its
        trailing field separator)

    Raises:
        MalformedTaxdumpError: If a record cannot be split into four fields
    """
    keep = {str(taxid) for taxid in taxid_keep if pd.notna(taxid)}

    chunks = []
    try:
        reader = pd.read_csv(
            names_path,
            sep=FIELD_SEPARATOR,
            engine="python",
            header=None,
            dtype=str,
            keep_default_na=False,
            quoting=csv.QUOTE_NONE,
            chunksize=READ_CHUNK_SIZE,
        )
        for chunk in reader:
            if chunk.shape[1] != len(NAMES_COLUMNS):
                raise MalformedTaxdumpError(
                    f"{names_path} has {chunk.shape[1]} fields per record, "
                    f"expected {len(NAMES_COLUMNS)}"
                )
            chunk = chunk.iloc[:, :len(NAMES_COLUMNS)]
            chunk.columns = NAMES_COLUMNS
            chunks.append(chunk.loc[chunk["taxid"].isin(keep), ["taxid", "name", "class"]])
    except pd.errors.EmptyDataError:
        logger.warning(f"{names_path} is empty")
    except pd.errors.ParserError as e:
        raise MalformedTaxdumpError(f"Could not parse {names_path}: {e}") from e

    if not chunks:
        return pd.DataFrame(columns=["taxid", "name", "class"])
    return pd.concat(chunks, ignore_index=True)


def clean_name_class(names: pd.DataFrame) -> pd.DataFrame:
    """Verify and strip the trailing separator of the name-class field.

    Raises:
        MalformedTaxdumpError: If any name class has other than one ``|``
    """
    for name_class in names["class"]:
        is_valid, errors = validate_name_class(name_class)
        if not is_valid:
            raise MalformedTaxdumpError("; ".join(errors))

    names = names.copy()
    names["class"] = names["class"].str.replace("\t|", "", regex=False)
    return names


def load_ncbi_names(taxdump_zip_file: Union[str, Path], taxid_keep: Iterable[str],
                    member: str = NAMES_MEMBER) -> pd.DataFrame:
    """Load NCBI species names corresponding to taxon IDs.

    Excludes any taxon names that are not fully identified to species,
    hybrid formulas, and environmental samples.

    Args:
        taxdump_zip_file: Path to zip file with the NCBI taxonomy database;
            must contain names.dmp
        taxid_keep: NCBI taxon IDs of the names to extract

    Returns:
        DataFrame with columns taxid, species

    Raises:
        FileNotFoundError: If the archive or its names.dmp is missing
        MalformedTaxdumpError: If names.dmp is not in the expected format
    """
    with extracted_member(taxdump_zip_file, member) as names_path:
        names = read_names_dmp(names_path, taxid_keep)

    logger.debug(f"{len(names):,} name records match the requested taxon IDs")

    names = clean_name_class(names)
    names = names[names["class"] == SCIENTIFIC_NAME]
    names = names[names["name"].map(is_fully_identified).astype(bool)]

    species = names.rename(columns={"name": "species"})[TAXON_NAME_COLUMNS]
    logger.info(f"Resolved {len(species):,} species names from {taxdump_zip_file}")
    return species.reset_index(drop=True)
