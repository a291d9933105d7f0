"""Pytest configuration and shared fixtures."""

import zipfile

import matplotlib

matplotlib.use("Agg")

import pandas as pd
import pytest


class FakeGenBankClient:
    """In-memory stand-in for GenBankClient.

    Args:
        hits: Mapping of query -> list of record ids
        taxa: Mapping of record id -> taxon ID (None for a record without one)
        failing_batches: Indexes of esummary calls that raise
    """

    def __init__(self, hits=None, taxa=None, failing_batches=()):
        self.hits = hits or {}
        self.taxa = taxa or {}
        self.failing_batches = set(failing_batches)
        self.count_calls = []
        self.search_calls = []
        self.summary_calls = []

    def count(self, query):
        self.count_calls.append(query)
        return len(self.hits.get(query, []))

    def search_ids(self, query, retmax):
        self.search_calls.append((query, retmax))
        return list(self.hits.get(query, []))[:retmax]

    def summaries(self, ids):
        call_index = len(self.summary_calls)
        self.summary_calls.append(list(ids))
        if call_index in self.failing_batches:
            raise RuntimeError("HTTP Error 502: Bad Gateway")
        return [
            {
                "Gi": uid,
                "Caption": f"AB{uid}",
                "TaxId": self.taxa.get(uid, "9"),
                "Title": f"Fern sequence {uid}",
                "Slen": "1200",
                "SubType": "specimen_voucher",
                "SubName": "voucher",
            }
            for uid in ids
        ]


def names_dmp_line(taxid, name, name_class, unique_name=""):
    """Format one names.dmp record."""
    return f"{taxid}\t|\t{name}\t|\t{unique_name}\t|\t{name_class}\t|\n"


@pytest.fixture
def fake_client_factory():
    """Factory for FakeGenBankClient instances."""
    return FakeGenBankClient


@pytest.fixture
def names_dmp_records():
    """Sample names.dmp content covering every exclusion rule."""
    return [
        names_dmp_line("9", "Equisetum giganteum", "scientific name"),
        names_dmp_line("9", "Giant horsetail", "common name"),
        names_dmp_line("10", "Equisetum x ferrissii", "scientific name"),
        names_dmp_line("11", "Cystopteris alpina x Cystopteris fragilis", "scientific name"),
        names_dmp_line("12", "Asplenium sp. ABC-2020", "scientific name"),
        names_dmp_line("13", "Polypodium aff. vulgare", "scientific name"),
        names_dmp_line("14", "Pteris cf. vittata", "scientific name"),
        names_dmp_line("15", "uncultured fern environmental sample", "scientific name"),
        names_dmp_line("16", "Polypodiopsida", "scientific name"),
        names_dmp_line("17", "x Cystocarpium roskamianum", "scientific name"),
        names_dmp_line("18", "Osmunda regalis", "scientific name"),
        names_dmp_line("18", "Osmunda regalis L.", "authority"),
        names_dmp_line("99", "Ginkgo biloba", "scientific name"),
    ]


@pytest.fixture
def taxdump_factory(tmp_path):
    """Build a taxonomy zip archive from names.dmp lines."""
    def _make(lines, name="taxdmp.zip", member="names.dmp"):
        archive_path = tmp_path / name
        with zipfile.ZipFile(archive_path, "w") as archive:
            archive.writestr(member, "".join(lines))
            archive.writestr("nodes.dmp", "1\t|\t1\t|\tno rank\t|\n")
        return archive_path
    return _make


@pytest.fixture
def sample_taxdump(taxdump_factory, names_dmp_records):
    """Taxonomy archive with the sample names."""
    return taxdump_factory(names_dmp_records)


@pytest.fixture
def sample_gb_taxa():
    """Per-year taxon counts for two compartments, with a no-data row."""
    return pd.DataFrame({
        "taxid": ["9", "9", "18", "9", "10", None, "12"],
        "n": [3, 2, 4, 1, 5, 1, 7],
        "type": ["plastid", "plastid", "plastid", "nuclear", "nuclear",
                 "mitochondrial", "plastid"],
        "year": [2000, 2001, 2001, 2000, 2002, 2000, 2000],
    })


@pytest.fixture
def sample_ncbi_names():
    """Resolved species names for the sample taxa."""
    return pd.DataFrame({
        "taxid": ["9", "10", "18"],
        "species": ["Equisetum giganteum", "Equisetum x ferrissii", "Osmunda regalis"],
    })


@pytest.fixture
def sample_roster():
    """Participant roster as read from the spreadsheet."""
    return pd.DataFrame({
        "name": ["A", "B", "C", "D", "E", "F"],
        "country": ["Japan", "Japan", "USA", "UK", "Brunei Darussalam", "Ukraine"],
    })
