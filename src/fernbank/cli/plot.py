"""CLI commands for rendering summary plots."""

import click
import logging
from pathlib import Path

from ..core.sampling import define_tree_sampling
from ..data.loaders import load_participant_roster, load_species_by_year
from ..plotting.participants import make_ppg_plot, save_map
from ..plotting.timeseries import make_gb_plot, save_figure
from .genbank import setup_logging, verbose_option

logger = logging.getLogger(__name__)


@click.group()
def plot():
    """Summary plot commands."""
    pass


@plot.command()
@click.option('--summary', '-s', type=click.Path(exists=True, path_type=Path),
              default='results/gb_species_by_year.tsv', show_default=True,
              help='Species-by-year summary from "genbank count"')
@click.option('--output-dir', '-o', type=click.Path(path_type=Path),
              default='results', show_default=True, help='Directory for the plots')
@click.option('--compartment', type=click.Choice(['plastid', 'nuclear', 'mitochondrial', 'total']),
              default='plastid', show_default=True, help='Compartment drawn as the line')
@verbose_option
def sampling(summary: Path, output_dir: Path, compartment: str, verbose: bool):
    """Plot GenBank species over time against phylogeny sampling.

    Writes sampling_plot_full.png (with FTOL releases) and
    sampling_plot_small.png (without).
    """
    setup_logging(verbose)

    try:
        species_by_year = load_species_by_year(summary)
        for name, include_ftol in (('full', True), ('small', False)):
            fig = make_gb_plot(species_by_year, define_tree_sampling(include_ftol),
                               compartment=compartment)
            path = save_figure(fig, output_dir / f"sampling_plot_{name}.png")
            click.echo(f"Saved {path}")
    except Exception as e:
        click.echo(f"Error plotting sampling: {e}", err=True)
        raise click.ClickException(str(e))


@plot.command()
@click.option('--roster', '-r', required=True,
              help='Participant roster: CSV file, CSV URL or Google Sheets link')
@click.option('--output', '-o', type=click.Path(path_type=Path),
              default='results/ppg_participants.png', show_default=True,
              help='Image file for the map')
@verbose_option
def participants(roster: str, output: Path, verbose: bool):
    """Map participants by country."""
    setup_logging(verbose)

    try:
        fig = make_ppg_plot(load_participant_roster(roster))
        path = save_map(fig, output)
    except Exception as e:
        click.echo(f"Error plotting participants: {e}", err=True)
        raise click.ClickException(str(e))

    click.echo(f"Saved {path}")
