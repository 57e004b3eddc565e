"""Command line interface for music sorter."""

import logging
import sys
from pathlib import Path
from typing import Optional

import click
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from .core.metadata import read_tag
from .core.naming import build_destination
from .core.sorter import MusicSorter, FileKind, classify_extension
from .models.config import Config, load_config, create_default_config
from .exceptions import MusicSorterError, MetadataError

console = Console()
error_console = Console(stderr=True)


def _configure_logging(verbose: bool) -> None:
    """Send diagnostics to stderr; progress lines stay on stdout."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s: %(message)s",
        stream=sys.stderr,
    )


@click.group()
@click.version_option(package_name="music-sorter")
def cli():
    """Sort MP3 files into an artist/album/track tree using their ID3 tags."""
    pass


@cli.command()
@click.argument('source', required=False, type=click.Path(path_type=Path))
@click.option(
    '--sorted-dir',
    type=click.Path(file_okay=False, path_type=Path),
    help='Root of the sorted tree (default: music-sorted next to SOURCE)'
)
@click.option(
    '--tagless-dir',
    type=click.Path(file_okay=False, path_type=Path),
    help='Folder for files without usable tags (default: music-tagless next to SOURCE)'
)
@click.option(
    '--config',
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help='Configuration file path'
)
@click.option(
    '--dry-run',
    is_flag=True,
    help='Show what would be done without making changes'
)
@click.option(
    '--keep-going',
    is_flag=True,
    help='Report fatal file errors and continue instead of stopping'
)
@click.option(
    '--cycle-detection/--no-cycle-detection',
    default=None,
    help='Skip directories already visited through a symlink (default: on)'
)
@click.option(
    '--verbose',
    is_flag=True,
    help='Verbose output'
)
def sort(
    source: Optional[Path],
    sorted_dir: Optional[Path],
    tagless_dir: Optional[Path],
    config: Optional[Path],
    dry_run: bool,
    keep_going: bool,
    cycle_detection: Optional[bool],
    verbose: bool
):
    """Sort the music under SOURCE into the sorted and tagless folders."""
    _configure_logging(verbose)

    try:
        cfg = _build_config(source, sorted_dir, tagless_dir, config)
        cfg.dry_run = cfg.dry_run or dry_run
        cfg.keep_going = cfg.keep_going or keep_going
        if cycle_detection is not None:
            cfg.detect_cycles = cycle_detection

        if cfg.dry_run:
            error_console.print("[yellow]Dry run: no files will be changed[/yellow]")

        summary = MusicSorter(cfg, console=console).run()

    except MusicSorterError as e:
        error_console.print(f"[red]Error: {escape(str(e))}[/red]", soft_wrap=True)
        sys.exit(1)

    results_table = Table(title="Results")
    results_table.add_column("Outcome", style="cyan")
    results_table.add_column("Count", justify="right")
    results_table.add_row("Sorted", str(summary.sorted))
    results_table.add_row("Tagless", str(summary.quarantined))
    results_table.add_row("Deleted", str(summary.deleted))
    results_table.add_row("Ignored", str(summary.ignored))
    results_table.add_row("Failed", str(len(summary.failures)))
    console.print(results_table)

    if summary.failures:
        error_console.print("\n[red]Errors encountered:[/red]")
        for path, error in summary.failures[:10]:
            error_console.print(f"  • {escape(str(error))}", soft_wrap=True)
        if len(summary.failures) > 10:
            error_console.print(f"  ... and {len(summary.failures) - 10} more errors")
        sys.exit(1)


def _build_config(
    source: Optional[Path],
    sorted_dir: Optional[Path],
    tagless_dir: Optional[Path],
    config_path: Optional[Path],
) -> Config:
    """Merge the configuration file and command line options."""
    if config_path:
        cfg = load_config(config_path)
        if source:
            cfg.source_directory = source
        if sorted_dir:
            cfg.sorted_directory = sorted_dir
        if tagless_dir:
            cfg.tagless_directory = tagless_dir
        return cfg

    if source is None:
        raise click.UsageError("SOURCE is required unless --config is given")

    return Config.from_source(source, sorted_directory=sorted_dir, tagless_directory=tagless_dir)


@cli.command()
@click.argument('file_path', type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option(
    '--sorted-dir',
    type=click.Path(file_okay=False, path_type=Path),
    default=Path("music-sorted"),
    show_default=True,
    help='Sorted root used to show the destination'
)
def inspect(file_path: Path, sorted_dir: Path):
    """Show the tags of a single file and where it would be sorted."""
    kind = classify_extension(file_path)
    if kind is FileKind.INDEX:
        console.print("[yellow]Index file: would be deleted[/yellow]")
        return
    if kind is FileKind.OTHER:
        console.print("[dim]Not an MP3 file: would be left alone[/dim]")
        return

    try:
        metadata = read_tag(file_path)
    except MetadataError as e:
        console.print(f"[yellow]{escape(str(e))}[/yellow]", soft_wrap=True)
        console.print("[yellow]Would be moved to the tagless folder[/yellow]")
        return

    console.print(f"\n[bold]File: {escape(file_path.name)}[/bold]")

    info_table = Table()
    info_table.add_column("Tag", style="cyan")
    info_table.add_column("Value")

    for name in ('artist', 'album', 'title', 'year', 'track', 'disc', 'total_discs'):
        value = getattr(metadata, name)
        info_table.add_row(name, escape(str(value)) if value is not None else "[dim]-[/dim]")

    console.print(info_table)

    if not metadata.is_placeable:
        console.print("\n[yellow]Missing artist or album: would be moved to the tagless folder[/yellow]")
        return

    destination = build_destination(sorted_dir, metadata, file_path.name)
    console.print(f"\n[cyan]Destination:[/cyan] {escape(str(destination))}", soft_wrap=True)


@cli.command(name='init-config')
@click.argument('config_path', type=click.Path(dir_okay=False, path_type=Path))
@click.option('--force', is_flag=True, help='Overwrite an existing file')
def init_config(config_path: Path, force: bool):
    """Write a default configuration file to CONFIG_PATH."""
    if config_path.exists() and not force:
        error_console.print(f"[red]Error: {escape(str(config_path))} already exists (use --force)[/red]")
        sys.exit(1)

    create_default_config(config_path)
    console.print(f"[green]Wrote default configuration to {escape(str(config_path))}[/green]")


def main():
    """Entry point for the CLI."""
    cli()


if __name__ == '__main__':
    main()
