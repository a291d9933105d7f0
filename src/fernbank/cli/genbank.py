"""CLI commands for GenBank sampling data."""

import click
import logging
from pathlib import Path
from typing import Optional

from ..configs.config_loader import config_loader
from ..core.counting import count_ncbi_species_by_year
from ..data.downloader import TaxdumpDownloader
from ..data.loaders import load_species_names, load_taxon_counts, save_table
from ..data.taxonomy import load_ncbi_names
from ..genbank.aggregator import fetch_all_taxa
from ..genbank.client import GenBankClient
from ..genbank.queries import make_gb_query, queries_to_frame

logger = logging.getLogger(__name__)


def setup_logging(verbose: bool):
    """Configure root logging for a command."""
    if verbose:
        logging.basicConfig(level=logging.DEBUG)
    else:
        logging.basicConfig(level=logging.INFO)


config_option = click.option(
    '--config', '-c', 'config_name', default='ferns', show_default=True,
    help='Built-in configuration name or path to a Python configuration file')
verbose_option = click.option('--verbose', '-v', is_flag=True, help='Enable verbose logging')
email_option = click.option(
    '--email', envvar='NCBI_EMAIL', help='Contact email sent to NCBI [env: NCBI_EMAIL]')
api_key_option = click.option(
    '--api-key', envvar='NCBI_API_KEY', help='NCBI API key [env: NCBI_API_KEY]')


@click.group()
def genbank():
    """GenBank accession and taxonomy commands."""
    pass


@genbank.command()
@config_option
@click.option('--output', '-o', type=click.Path(path_type=Path),
              help='Write queries to a TSV file instead of printing them')
def queries(config_name: str, output: Optional[Path]):
    """Show the per-year search terms for each genomic compartment.

    Examples:

    \b
    fernbank genbank queries
    fernbank genbank queries --output queries.tsv
    """
    try:
        config = config_loader.load(config_name)
        query_df = queries_to_frame(make_gb_query(config))
    except Exception as e:
        raise click.ClickException(str(e))

    if output:
        save_table(query_df, output)
        click.echo(f"Wrote {len(query_df)} queries to {output}")
    else:
        click.echo(query_df.to_string(index=False))


@genbank.command()
@config_option
@email_option
@api_key_option
@click.option('--output', '-o', type=click.Path(path_type=Path),
              default='results/gb_taxa.tsv', show_default=True,
              help='TSV file for taxon counts')
@click.option('--year', '-y', 'years', type=int, multiple=True,
              help='Only fetch these years (repeatable)')
@verbose_option
def fetch(config_name: str, email: Optional[str], api_key: Optional[str],
          output: Path, years: tuple, verbose: bool):
    """Count accessions per taxon for every year and compartment.

    Examples:

    \b
    fernbank genbank fetch --email me@example.org
    fernbank genbank fetch --year 2000 --year 2001 -o taxa.tsv
    """
    setup_logging(verbose)

    try:
        config = config_loader.load(config_name)
        query_list = make_gb_query(config)
        if years:
            query_list = [q for q in query_list if q.year in set(years)]

        click.echo(f"Running {len(query_list)} GenBank queries ({config.name})...")
        client = GenBankClient(email=email, api_key=api_key)
        gb_taxa = fetch_all_taxa(client, query_list, chunk_size=config.chunk_size)
        save_table(gb_taxa, output)
    except Exception as e:
        click.echo(f"Error fetching GenBank taxa: {e}", err=True)
        raise click.ClickException(str(e))

    click.echo(f"Taxon counts written to {output}")


@genbank.command('download-taxdump')
@click.option('--download-dir', '-d', type=click.Path(path_type=Path),
              default='data_raw', show_default=True, help='Directory for the archive')
@click.option('--version', 'taxdump_version', type=str, default=None,
              help='Dated archive to fetch (YYYY-MM-DD); default is the current dump')
@click.option('--force-download', '-f', is_flag=True,
              help='Force redownload even if file exists')
@verbose_option
def download_taxdump(download_dir: Path, taxdump_version: Optional[str],
                     force_download: bool, verbose: bool):
    """Download the NCBI taxonomy dump (taxdmp.zip).

    Examples:

    \b
    fernbank genbank download-taxdump --version 2023-09-01
    """
    setup_logging(verbose)

    try:
        downloader = TaxdumpDownloader(download_dir, progress=True)
        path = downloader.download_taxdump(taxdump_version, force_download)
    except Exception as e:
        click.echo(f"Error downloading taxonomy dump: {e}", err=True)
        raise click.ClickException(str(e))

    click.echo(f"Taxonomy dump: {path}")


@genbank.command()
@config_option
@click.option('--taxa', '-t', type=click.Path(exists=True, path_type=Path),
              default='results/gb_taxa.tsv', show_default=True,
              help='Taxon counts from "genbank fetch"')
@click.option('--taxdump', '-z', type=click.Path(exists=True, path_type=Path), required=True,
              help='NCBI taxonomy zip archive containing names.dmp')
@click.option('--output', '-o', type=click.Path(path_type=Path),
              default='results/ncbi_names.tsv', show_default=True,
              help='TSV file for species names')
@verbose_option
def names(config_name: str, taxa: Path, taxdump: Path, output: Path, verbose: bool):
    """Resolve taxon IDs to fully identified species names."""
    setup_logging(verbose)

    try:
        config = config_loader.load(config_name)
        gb_taxa = load_taxon_counts(taxa)
        taxid_keep = gb_taxa['taxid'].dropna().unique()
        ncbi_names = load_ncbi_names(taxdump, taxid_keep, member=config.taxdump_member)
        save_table(ncbi_names, output)
    except Exception as e:
        click.echo(f"Error loading species names: {e}", err=True)
        raise click.ClickException(str(e))

    click.echo(f"{len(ncbi_names):,} species names written to {output}")


@genbank.command()
@config_option
@click.option('--taxa', '-t', type=click.Path(exists=True, path_type=Path),
              default='results/gb_taxa.tsv', show_default=True,
              help='Taxon counts from "genbank fetch"')
@click.option('--names', '-n', 'names_path', type=click.Path(exists=True, path_type=Path),
              default='results/ncbi_names.tsv', show_default=True,
              help='Species names from "genbank names"')
@click.option('--first-year', type=int, default=None, help='First year reported')
@click.option('--last-year', type=int, default=None, help='Last year reported')
@click.option('--output', '-o', type=click.Path(path_type=Path),
              default='results/gb_species_by_year.tsv', show_default=True,
              help='TSV file for the species-by-year summary')
@verbose_option
def count(config_name: str, taxa: Path, names_path: Path, first_year: Optional[int],
          last_year: Optional[int], output: Path, verbose: bool):
    """Count species and accessions accumulated per year and compartment."""
    setup_logging(verbose)

    try:
        config = config_loader.load(config_name)
        year_range = range(first_year or config.first_query_year,
                           (last_year or config.last_count_year) + 1)
        summary = count_ncbi_species_by_year(
            load_taxon_counts(taxa), load_species_names(names_path), year_range)
        save_table(summary, output)
    except Exception as e:
        click.echo(f"Error counting species: {e}", err=True)
        raise click.ClickException(str(e))

    click.echo(f"Species-by-year summary written to {output}")
