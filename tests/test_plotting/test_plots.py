"""Tests for the summary plots."""

import pandas as pd
import plotly.graph_objects as go
from matplotlib.figure import Figure

from fernbank.core.counting import count_ncbi_species_by_year
from fernbank.core.sampling import define_tree_sampling
from fernbank.plotting.participants import count_participants, make_ppg_plot, normalize_countries
from fernbank.plotting.timeseries import make_gb_plot, save_figure, species_by_date


class TestSamplingPlot:
    """Species in GenBank against phylogeny sampling."""

    def test_species_by_date(self, sample_gb_taxa, sample_ncbi_names):
        summary = count_ncbi_species_by_year(sample_gb_taxa, sample_ncbi_names, range(2000, 2003))
        line = species_by_date(summary, "plastid")

        assert line["type"].unique().tolist() == ["plastid"]
        assert line["date"].tolist() == list(pd.to_datetime(["2000-01-01", "2001-01-01",
                                                              "2002-01-01"]))

    def test_make_and_save(self, tmp_path, sample_gb_taxa, sample_ncbi_names):
        summary = count_ncbi_species_by_year(sample_gb_taxa, sample_ncbi_names, range(2000, 2003))
        fig = make_gb_plot(summary, define_tree_sampling())

        assert isinstance(fig, Figure)
        labels = fig.axes[0].get_legend_handles_labels()[1]
        assert labels == ["Hasebe 1995", "Schuettpelz 2007", "Lehtonen 2011", "Testo 2016", "FTOL"]

        path = save_figure(fig, tmp_path / "plots" / "sampling.png", dpi=50)
        assert path.exists()
        assert path.read_bytes()[:4] == b"\x89PNG"

    def test_without_ftol(self, sample_gb_taxa, sample_ncbi_names):
        summary = count_ncbi_species_by_year(sample_gb_taxa, sample_ncbi_names, [2000])
        fig = make_gb_plot(summary, define_tree_sampling(include_ftol=False))

        assert "FTOL" not in fig.axes[0].get_legend_handles_labels()[1]


class TestParticipantMap:
    """Participant counts and the bubble map."""

    def test_normalize_countries(self, sample_roster):
        countries = normalize_countries(sample_roster)["country"].tolist()

        assert countries == ["Japan", "Japan", "United States", "United Kingdom", "Brunei",
                             "Ukraine"]

    def test_count_participants(self, sample_roster):
        counts = count_participants(sample_roster)

        assert counts.set_index("country")["n"].to_dict() == {
            "Brunei": 1,
            "Japan": 2,
            "Ukraine": 1,
            "United Kingdom": 1,
            "United States": 1,
        }

    def test_blank_countries_dropped(self, sample_roster):
        roster = pd.concat([
            sample_roster,
            pd.DataFrame({"name": ["G", "H", "I"], "country": [None, float("nan"), "  "]}),
        ], ignore_index=True)

        counts = count_participants(roster)

        assert "nan" not in counts["country"].tolist()
        assert "" not in counts["country"].tolist()
        assert counts["n"].sum() == len(sample_roster)

    def test_replacement_keys_are_literal(self):
        roster = pd.DataFrame({"country": ["St. Lucia", "Stx Lucia"]})
        normalized = normalize_countries(roster, {"St. Lucia": "Saint Lucia"})

        assert normalized["country"].tolist() == ["Saint Lucia", "Stx Lucia"]

    def test_make_ppg_plot(self, sample_roster):
        fig = make_ppg_plot(sample_roster)

        assert isinstance(fig, go.Figure)
        assert sorted(fig.data[0].locations) == sorted(
            ["Brunei", "Japan", "Ukraine", "United Kingdom", "United States"])
        assert list(fig.layout.coloraxis.colorbar.tickvals) == [5, 15, 30, 45]
