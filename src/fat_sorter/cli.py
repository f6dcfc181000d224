"""Command line interface for the FAT folder sorter."""

import logging
import sys
from datetime import datetime
from enum import IntEnum
from pathlib import Path
from typing import Optional, Tuple

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.prompt import Confirm
from rich.table import Table

from . import __version__
from .core.reorganizer import DirectoryReorganizer, Outcome
from .core.runner import ReorganizationJob, format_summary
from .exceptions import FatSorterError
from .models.config import Config, create_default_config, load_config
from .progress_sink import RecordingProgressSink, TeeProgressSink
from .rich_progress_renderer import RichProgressSink

console = Console()

ORDER_CHOICES = click.Choice(['first', 'last', 'mixed'], case_sensitive=False)
ORDER_DESCRIPTIONS = {
    'first': 'subfolders before files',
    'last': 'subfolders after files',
    'mixed': 'files and subfolders mixed by name',
}

# Seconds between checks for Ctrl-C while the worker runs
JOIN_INTERVAL = 0.2


class ExitStatus(IntEnum):
    """Process exit codes for scripted use."""
    WORK_DONE = 0
    FAILURE = 1
    NOTHING_DONE = 3


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


def _build_config(config_path: Optional[Path], order: Optional[str], case_sensitive: Optional[bool],
                  recurse: Optional[bool], create_delay: Optional[int] = None,
                  delete_delay: Optional[int] = None, move_delay: Optional[int] = None,
                  rename_delay: Optional[int] = None) -> Config:
    """Load the config file, if any, and apply command line overrides."""
    cfg = load_config(config_path) if config_path else Config.default()

    if order is not None:
        cfg.sorting.order = order.lower()
    if case_sensitive is not None:
        cfg.sorting.case_sensitive = case_sensitive
    if recurse is not None:
        cfg.sorting.recurse = recurse
    if create_delay is not None:
        cfg.throttle.create_ms = create_delay
    if delete_delay is not None:
        cfg.throttle.delete_ms = delete_delay
    if move_delay is not None:
        cfg.throttle.move_ms = move_delay
    if rename_delay is not None:
        cfg.throttle.rename_ms = rename_delay

    cfg.validate()
    return cfg


def _wait_for_worker(job: ReorganizationJob) -> None:
    """Wait for a cancelled job to stop; further Ctrl-C presses don't cut it short."""
    while True:
        try:
            if job.join(JOIN_INTERVAL):
                return
        except KeyboardInterrupt:
            console.print("[yellow]Still cancelling, waiting for the current operation to finish...[/yellow]")


def _order_options(func):
    """Options shared by commands that decide an order."""
    func = click.option(
        '--recurse/--no-recurse',
        default=None,
        help='Also sort subfolders (default) or only the given folders'
    )(func)
    func = click.option(
        '--case-sensitive/--ignore-case',
        default=None,
        help='Strict Unicode order for uppercase/lowercase, or ignore case (default)'
    )(func)
    func = click.option(
        '--order',
        type=ORDER_CHOICES,
        default=None,
        help='Put subfolders first (default), last, or mixed with files by name'
    )(func)
    func = click.option(
        '--config',
        type=click.Path(exists=True, dir_okay=False, path_type=Path),
        help='Configuration file path'
    )(func)
    return func


@click.group()
@click.version_option(version=__version__)
def cli():
    """Sort the entries of folders on FAT16/FAT32 drives."""
    pass


@cli.command()
@click.argument('folders', nargs=-1, required=True, type=click.Path(path_type=Path))
@_order_options
@click.option('--create-delay', type=click.IntRange(min=0), default=None,
              help='Milliseconds to wait before creating a subfolder')
@click.option('--delete-delay', type=click.IntRange(min=0), default=None,
              help='Milliseconds to wait before deleting a subfolder')
@click.option('--move-delay', type=click.IntRange(min=0), default=None,
              help='Milliseconds to wait before moving a file or subfolder')
@click.option('--rename-delay', type=click.IntRange(min=0), default=None,
              help='Milliseconds to wait before replacing the original folder')
@click.option(
    '--output',
    type=click.Path(dir_okay=False, path_type=Path),
    help='Save the output as a text file'
)
@click.option('--yes', '-y', is_flag=True, help='Don\'t ask for confirmation')
@click.option('--verbose', is_flag=True, help='Verbose output')
def sort(
    folders: Tuple[Path, ...],
    config: Optional[Path],
    order: Optional[str],
    case_sensitive: Optional[bool],
    recurse: Optional[bool],
    create_delay: Optional[int],
    delete_delay: Optional[int],
    move_delay: Optional[int],
    rename_delay: Optional[int],
    output: Optional[Path],
    yes: bool,
    verbose: bool
):
    """Rewrite FOLDERS so their entries are stored in sorted order.

    \b
    Exit status:
      0  entries were moved or subfolders sorted
      1  an error stopped the run, or it was cancelled
      3  nothing to do, or the confirmation was declined
    """
    _configure_logging(verbose)

    try:
        cfg = _build_config(config, order, case_sensitive, recurse,
                            create_delay, delete_delay, move_delay, rename_delay)
    except FatSorterError as e:
        console.print(f"\n[red]Error: {e}[/red]")
        sys.exit(ExitStatus.FAILURE)

    # Show plan
    console.print("\n[bold cyan]Folder Sorting Plan[/bold cyan]")
    for folder in folders:
        console.print(f"Folder: {folder}")
    console.print(f"Order: {ORDER_DESCRIPTIONS[cfg.sorting.policy.value]}")
    console.print(f"Case: {'strict' if cfg.sorting.case_sensitive else 'ignored'}")
    console.print(f"Subfolders: {'Yes' if cfg.sorting.recurse else 'No'}")

    if not yes:
        if not Confirm.ask("\nFiles will be moved between folders. Proceed?", console=console):
            console.print("[yellow]Cancelled[/yellow]")
            sys.exit(ExitStatus.NOTHING_DONE)

    recorder = RecordingProgressSink()
    sink = TeeProgressSink(RichProgressSink(console), recorder)
    reorganizer = DirectoryReorganizer.from_config(cfg, sink=sink)
    job = ReorganizationJob(reorganizer, folders)

    job.start()
    try:
        while not job.join(JOIN_INTERVAL):
            pass
    except KeyboardInterrupt:
        console.print("[yellow]Cancelling after the current operation...[/yellow]")
        job.cancel()
        _wait_for_worker(job)

    try:
        batch = job.result()
    except Exception as e:
        console.print(f"\n[red]Unexpected error: {e}[/red]")
        if verbose:
            import traceback
            console.print(traceback.format_exc())
        sys.exit(ExitStatus.FAILURE)
    finally:
        sink.close()

    for line in format_summary(batch):
        sink.log(line)

    if output:
        try:
            recorder.save(output)
        except OSError as e:
            console.print(f"[red]Can't write to text file: {e}[/red]")

    if batch.outcome is not Outcome.SUCCESS:
        sys.exit(ExitStatus.FAILURE)
    elif batch.counters.total > 0:
        sys.exit(ExitStatus.WORK_DONE)
    else:
        sys.exit(ExitStatus.NOTHING_DONE)


@cli.command()
@click.argument('folder', type=click.Path(exists=True, file_okay=False, path_type=Path))
@_order_options
def preview(
    folder: Path,
    config: Optional[Path],
    order: Optional[str],
    case_sensitive: Optional[bool],
    recurse: Optional[bool]
):
    """Show the order FOLDER's entries would be written in, without changing anything."""

    try:
        cfg = _build_config(config, order, case_sensitive, recurse)
    except FatSorterError as e:
        console.print(f"\n[red]Error: {e}[/red]")
        sys.exit(ExitStatus.FAILURE)

    reorganizer = DirectoryReorganizer.from_config(cfg)
    entries = reorganizer.list_entries(folder)

    if not entries:
        console.print("[yellow]Folder is empty[/yellow]")
        return

    table = Table(title=f"{folder} ({ORDER_DESCRIPTIONS[cfg.sorting.policy.value]})")
    table.add_column("#", justify="right", style="dim")
    table.add_column("Name", style="cyan")
    table.add_column("Kind")
    table.add_column("Modified")

    for position, entry in enumerate(entries, 1):
        modified = datetime.fromtimestamp(entry.mod_time / 1e9).strftime("%Y-%m-%d %H:%M:%S")
        table.add_row(str(position), entry.name, entry.kind, modified)

    console.print(table)


@cli.command('init-config')
@click.argument('config_path', type=click.Path(dir_okay=False, path_type=Path))
@click.option('--force', is_flag=True, help='Replace an existing file')
def init_config(config_path: Path, force: bool):
    """Write a default configuration file to CONFIG_PATH."""
    if config_path.exists() and not force:
        console.print(f"[red]{config_path} already exists (use --force to replace it)[/red]")
        sys.exit(ExitStatus.FAILURE)

    try:
        create_default_config(config_path)
    except OSError as e:
        console.print(f"[red]Can't write configuration file: {e}[/red]")
        sys.exit(ExitStatus.FAILURE)

    console.print(f"[green]Wrote default configuration to {config_path}[/green]")


def main():
    """Entry point for the CLI."""
    cli()


if __name__ == '__main__':
    main()
