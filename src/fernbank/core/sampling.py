"""Species sampling of published fern phylogenies."""

import pandas as pd

# source, date, n_species, label
FERN_TREE_SAMPLING = [
    ("Hasebe 1995", "1995-01-01", 107, "Hasebe et al. 1995"),
    ("Schuettpelz 2007", "2007-01-01", 400, "Schuettpelz et al. 2007"),
    ("Lehtonen 2011", "2011-01-01", 2957, "Lehtonen 2011"),
    ("Testo 2016", "2016-01-01", 3973, "Testo and Sundue 2016"),
    ("FTOL", "2022-04-15", 5582, "FTOL v1.1.0"),
    ("FTOL", "2022-12-15", 5685, "FTOL v1.4.0"),
    ("FTOL", "2023-06-15", 5750, "FTOL v1.5.0"),
]


def define_tree_sampling(include_ftol: bool = True) -> pd.DataFrame:
    """Number of species sampled by representative fern phylogenies.

    Args:
        include_ftol: Include the Fern Tree of Life (FTOL) releases

    Returns:
        DataFrame with columns source, date, n_species, label; ``source`` is
        an ordered categorical sorted by the earliest date of each source
    """
    sampling = pd.DataFrame(FERN_TREE_SAMPLING, columns=["source", "date", "n_species", "label"])
    sampling["date"] = pd.to_datetime(sampling["date"])

    order = sampling.groupby("source")["date"].min().sort_values().index.tolist()
    sampling["source"] = pd.Categorical(sampling["source"], categories=order, ordered=True)

    if not include_ftol:
        sampling = sampling[sampling["source"] != "FTOL"].reset_index(drop=True)
        sampling["source"] = sampling["source"].cat.remove_unused_categories()

    return sampling
