"""Main CLI entry point for fernbank package."""

import click
import logging
from pathlib import Path
from typing import Optional

from .genbank import genbank, setup_logging, config_option, email_option, api_key_option
from .plot import plot
from ..configs.config_loader import config_loader
from ..core.counting import count_ncbi_species_by_year
from ..core.sampling import define_tree_sampling
from ..data.loaders import load_participant_roster, save_table
from ..data.taxonomy import load_ncbi_names
from ..genbank.aggregator import fetch_all_taxa
from ..genbank.client import GenBankClient
from ..genbank.queries import make_gb_query
from ..plotting.participants import make_ppg_plot, save_map
from ..plotting.timeseries import make_gb_plot, save_figure
from ..utils.file_utils import ensure_output_dir

logger = logging.getLogger(__name__)


@click.group()
@click.version_option(package_name='fernbank')
@click.pass_context
def main(ctx):
    """fernbank - fern sampling in GenBank

    Counts species and accessions deposited in GenBank per year and genomic
    compartment, and plots the results.
    """
    ctx.ensure_object(dict)


# Add subcommands
main.add_command(genbank, name='genbank')
main.add_command(plot, name='plot')


@main.command()
@config_option
@email_option
@api_key_option
@click.option('--taxdump', '-z', type=click.Path(exists=True, path_type=Path), required=True,
              help='NCBI taxonomy zip archive containing names.dmp')
@click.option('--roster', '-r', default=None,
              help='Participant roster (CSV file, URL or Google Sheets link); '
                   'the participant map is skipped if omitted')
@click.option('--output-dir', '-o', type=click.Path(path_type=Path),
              default='results', show_default=True, help='Directory for tables and plots')
@click.option('--verbose', '-v', is_flag=True, help='Enable verbose logging')
def run(config_name: str, email: Optional[str], api_key: Optional[str], taxdump: Path,
        roster: Optional[str], output_dir: Path, verbose: bool):
    """Run the whole pipeline: fetch, resolve names, count and plot.

    Examples:

    \b
    fernbank run --email me@example.org --taxdump data_raw/taxdmp_2023-09-01.zip
    """
    setup_logging(verbose)
    output_dir = ensure_output_dir(output_dir)

    try:
        config = config_loader.load(config_name)

        click.echo(f"Fetching GenBank taxa ({config.name})...")
        client = GenBankClient(email=email, api_key=api_key)
        gb_taxa = fetch_all_taxa(client, make_gb_query(config), chunk_size=config.chunk_size)
        save_table(gb_taxa, output_dir / "gb_taxa.tsv")

        click.echo("Resolving species names...")
        ncbi_names = load_ncbi_names(taxdump, gb_taxa['taxid'].dropna().unique(),
                                     member=config.taxdump_member)
        save_table(ncbi_names, output_dir / "ncbi_names.tsv")

        click.echo("Counting species by year...")
        species_by_year = count_ncbi_species_by_year(gb_taxa, ncbi_names, config.count_years)
        save_table(species_by_year, output_dir / "gb_species_by_year.tsv")

        for name, include_ftol in (('full', True), ('small', False)):
            fig = make_gb_plot(species_by_year, define_tree_sampling(include_ftol))
            save_figure(fig, output_dir / f"sampling_plot_{name}.png")

        if roster:
            save_map(make_ppg_plot(load_participant_roster(roster)),
                     output_dir / "ppg_participants.png")

    except Exception as e:
        click.echo(f"Error running pipeline: {e}", err=True)
        raise click.ClickException(str(e))

    click.echo("\n" + "="*60)
    click.echo("PIPELINE COMPLETED")
    click.echo("="*60)
    click.echo(f"Taxon counts: {len(gb_taxa):,}")
    click.echo(f"Species names: {len(ncbi_names):,}")
    click.echo(f"Results: {output_dir}")


@main.command('configs')
def list_configs():
    """List built-in survey configurations."""
    for name, description in config_loader.list_available_configs().items():
        click.echo(f"{name}: {description}")


if __name__ == '__main__':
    main()
