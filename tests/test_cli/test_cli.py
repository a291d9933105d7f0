"""Tests for the command line interface."""

from unittest.mock import patch

import pandas as pd
from click.testing import CliRunner

from fernbank.cli.main import main
from fernbank.core.counting import count_ncbi_species_by_year
from fernbank.data.loaders import save_table
from fernbank.genbank.queries import publication_date_query

PLASTID = "(Polypodiopsida[Organism] AND gene_in_plastid[PROP])"


class TestMainGroup:
    """Top-level commands."""

    def test_help(self):
        result = CliRunner().invoke(main, ["--help"])

        assert result.exit_code == 0
        for command in ("genbank", "plot", "run", "configs"):
            assert command in result.output

    def test_configs(self):
        result = CliRunner().invoke(main, ["configs"])

        assert result.exit_code == 0
        assert result.output.startswith("ferns: ")


class TestGenbankCommands:
    """genbank subcommands without network access."""

    def test_queries_to_file(self, tmp_path):
        output = tmp_path / "queries.tsv"
        result = CliRunner().invoke(main, ["genbank", "queries", "--output", str(output)])

        assert result.exit_code == 0, result.output
        queries = pd.read_csv(output, sep="\t")
        assert len(queries) == 3 * 34
        assert queries["type"].unique().tolist() == ["plastid", "nuclear", "mitochondrial"]

    def test_queries_unknown_config(self):
        result = CliRunner().invoke(main, ["genbank", "queries", "--config", "mosses"])

        assert result.exit_code != 0
        assert "Unknown configuration" in result.output

    def test_fetch(self, tmp_path, fake_client_factory):
        client = fake_client_factory(
            hits={publication_date_query(PLASTID, 2000): ["1", "2", "3"]},
            taxa={"1": "9", "2": "9", "3": "18"},
        )
        output = tmp_path / "gb_taxa.tsv"

        with patch("fernbank.cli.genbank.GenBankClient", return_value=client):
            result = CliRunner().invoke(main, [
                "genbank", "fetch", "--email", "me@example.org",
                "--year", "2000", "--output", str(output),
            ])

        assert result.exit_code == 0, result.output
        assert "Running 3 GenBank queries" in result.output
        gb_taxa = pd.read_csv(output, sep="\t", dtype={"taxid": str})
        plastid = gb_taxa[gb_taxa["type"] == "plastid"]
        assert dict(zip(plastid["taxid"], plastid["n"])) == {"9": 2, "18": 1}
        # nuclear and mitochondrial had no hits
        assert gb_taxa["taxid"].isna().sum() == 2

    def test_names(self, tmp_path, sample_taxdump, sample_gb_taxa):
        taxa = save_table(sample_gb_taxa, tmp_path / "gb_taxa.tsv")
        output = tmp_path / "ncbi_names.tsv"

        result = CliRunner().invoke(main, [
            "genbank", "names", "--taxa", str(taxa), "--taxdump", str(sample_taxdump),
            "--output", str(output),
        ])

        assert result.exit_code == 0, result.output
        names = pd.read_csv(output, sep="\t", dtype=str)
        assert sorted(names["taxid"]) == ["10", "18", "9"]

    def test_names_uses_configured_member(self, tmp_path, taxdump_factory, names_dmp_records,
                                          sample_gb_taxa):
        config_path = tmp_path / "renamed_dump.py"
        config_path.write_text(
            "from fernbank.configs.ferns import FernConfig\n\n\n"
            "class RenamedDumpConfig(FernConfig):\n"
            "    taxdump_member = 'fern_names.dmp'\n"
        )
        archive = taxdump_factory(names_dmp_records, member="fern_names.dmp")
        taxa = save_table(sample_gb_taxa, tmp_path / "gb_taxa.tsv")
        output = tmp_path / "ncbi_names.tsv"

        result = CliRunner().invoke(main, [
            "genbank", "names", "--config", str(config_path), "--taxa", str(taxa),
            "--taxdump", str(archive), "--output", str(output),
        ])

        assert result.exit_code == 0, result.output
        assert sorted(pd.read_csv(output, sep="\t", dtype=str)["taxid"]) == ["10", "18", "9"]

    def test_count(self, tmp_path, sample_gb_taxa, sample_ncbi_names):
        taxa = save_table(sample_gb_taxa, tmp_path / "gb_taxa.tsv")
        names = save_table(sample_ncbi_names, tmp_path / "ncbi_names.tsv")
        output = tmp_path / "summary.tsv"

        result = CliRunner().invoke(main, [
            "genbank", "count", "--taxa", str(taxa), "--names", str(names),
            "--first-year", "2000", "--last-year", "2001", "--output", str(output),
        ])

        assert result.exit_code == 0, result.output
        summary = pd.read_csv(output, sep="\t")
        assert summary["year"].unique().tolist() == [2000, 2001]
        total_2001 = summary[(summary["type"] == "total") & (summary["year"] == 2001)]
        assert total_2001[["n_species", "n_acc"]].iloc[0].tolist() == [2, 10]


class TestPlotCommands:
    """plot subcommands."""

    def test_sampling(self, tmp_path, sample_gb_taxa, sample_ncbi_names):
        summary = count_ncbi_species_by_year(sample_gb_taxa, sample_ncbi_names, range(2000, 2003))
        summary_path = save_table(summary, tmp_path / "summary.tsv")

        result = CliRunner().invoke(main, [
            "plot", "sampling", "--summary", str(summary_path), "--output-dir", str(tmp_path),
        ])

        assert result.exit_code == 0, result.output
        assert (tmp_path / "sampling_plot_full.png").exists()
        assert (tmp_path / "sampling_plot_small.png").exists()
