"""Command-line interface for pairsync."""

import sys
from pathlib import Path

import click
from pydantic import ValidationError
from rich import print as rprint
from rich.console import Console
from rich.table import Table

from . import __version__
from .config.settings import LoggingConfig, PairConfig, SyncConfig, SyncOptions
from .sync.pair_manager import PairSyncManager
from .utils.file_utils import FileHelper
from .utils.logging import setup_logging

console = Console()

DIRECTION_ARROWS = {
    'first_to_second': 'first → second',
    'second_to_first': 'second → first',
    'none': 'in sync',
}

@click.group()
@click.version_option(version=__version__)
def cli():
    """pairsync - keep two copies of a file identical.

    Compares the modification times of both copies and overwrites the older
    one with the newer, optionally keeping a timestamped backup.
    """
    pass

def _load_config(config: Path) -> SyncConfig:
    try:
        return SyncConfig.from_yaml(config)
    except (OSError, ValidationError) as e:
        console.print(f"❌ Error loading {config}: {e}", style="red bold")
        sys.exit(1)

def _configure_logging(logging_config: LoggingConfig):
    setup_logging(
        log_level=logging_config.level,
        log_file=Path(logging_config.file) if logging_config.file else None,
        log_to_console=logging_config.console,
        max_file_size=logging_config.max_file_size,
        backup_count=logging_config.backup_count,
    )

@cli.command()
@click.option('--config', '-c',
              type=click.Path(path_type=Path),
              default=Path('config/pairsync.yaml'),
              help='Path to configuration file')
@click.option('--pair', '-p', 'pair_name',
              help='Synchronize a single pair by name (default: all enabled pairs)')
@click.option('--dry-run', '-d',
              is_flag=True,
              help='Show what would be synchronized without changing any file')
def sync(config: Path, pair_name: str, dry_run: bool):
    """Synchronize the configured pairs."""
    sync_config = _load_config(config)
    _configure_logging(sync_config.logging)

    manager = PairSyncManager(sync_config)

    if dry_run:
        console.print("🔍 DRY RUN MODE - No files will be changed", style="yellow bold")

    if pair_name:
        pair_config = sync_config.get_pair_by_name(pair_name)
        if not pair_config:
            console.print(f"❌ Pair '{pair_name}' not found", style="red")
            sys.exit(1)
        results = [manager.run_pair(pair_config, dry_run=dry_run)]
    else:
        results = manager.run_all(dry_run=dry_run)

    _display_sync_results(results, manager)

    if any(result['status'] == 'failed' for result in results):
        sys.exit(1)

@cli.command('sync-pair')
@click.argument('first', type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.argument('second', type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option('--backup', '-b',
              is_flag=True,
              help='Back up the stale file before overwriting it')
@click.option('--backup-dir',
              default='backup',
              show_default=True,
              help='Directory receiving backups')
@click.option('--dry-run', '-d',
              is_flag=True,
              help='Show what would be synchronized without changing any file')
@click.option('--log-level',
              type=click.Choice(['DEBUG', 'INFO', 'WARNING', 'ERROR'], case_sensitive=False),
              default='WARNING',
              help='Console log level')
def sync_pair(first: Path, second: Path, backup: bool, backup_dir: str, dry_run: bool,
              log_level: str):
    """Synchronize FIRST and SECOND, two copies of the same file."""
    try:
        pair_config = PairConfig(
            name=first.name,
            first=str(first),
            second=str(second),
            need_backup=backup,
            backup_dir=backup_dir,
        )
    except ValidationError as e:
        console.print(f"❌ Invalid pair: {e.errors()[0]['msg']}", style="red bold")
        sys.exit(1)

    sync_config = SyncConfig(
        pairs=[pair_config],
        sync_options=SyncOptions(),
        logging=LoggingConfig(level=log_level),
    )
    _configure_logging(sync_config.logging)

    manager = PairSyncManager(sync_config)
    result = manager.run_pair(pair_config, dry_run=dry_run)
    _display_sync_results([result], manager)

    if result['status'] == 'failed':
        sys.exit(1)

def _display_sync_results(results, manager):
    """Display sync results in a table."""
    table = Table(title="Sync Results")
    table.add_column("Pair", style="cyan")
    table.add_column("Status", style="magenta")
    table.add_column("Direction")
    table.add_column("Backup", style="yellow")
    table.add_column("Duration", justify="right")

    status_styles = {
        'completed': 'green',
        'planned': 'yellow',
        'unchanged': 'dim',
        'failed': 'red',
    }

    for result in results:
        status_style = status_styles.get(result['status'], 'white')
        table.add_row(
            result['pair_name'],
            f"[{status_style}]{result['status']}[/{status_style}]",
            DIRECTION_ARROWS.get(result['direction'], result['direction']),
            result.get('backup_path') or "-",
            f"{result.get('duration', 0):.2f}s",
        )

    console.print(table)

    summary = manager.get_summary(results)
    rprint(f"\n📊 [bold]Summary:[/bold]")
    rprint(f"   • Pairs: {summary['total_pairs']}")
    rprint(f"   • Synchronized: [green]{summary['synchronized']}[/green]")
    if summary['planned']:
        rprint(f"   • Would synchronize: [yellow]{summary['planned']}[/yellow]")
    rprint(f"   • Unchanged: {summary['unchanged']}")
    rprint(f"   • Failed: [red]{summary['failed']}[/red]")

    if summary['failed']:
        rprint(f"\n⚠️ [yellow]{summary['failed']} pair(s) failed:[/yellow]")
        for result in results:
            if result['error']:
                rprint(f"   • {result['pair_name']}: {result['error']}")

@cli.command()
@click.option('--config', '-c',
              type=click.Path(path_type=Path),
              default=Path('config/pairsync.yaml'),
              help='Path to configuration file')
@click.option('--checksum',
              is_flag=True,
              help='Also compare file contents')
def status(config: Path, checksum: bool):
    """Show the configured pairs and which side is newer."""
    sync_config = _load_config(config)
    _configure_logging(sync_config.logging)
    manager = PairSyncManager(sync_config)

    table = Table(title="Sync Pairs")
    table.add_column("Pair", style="cyan")
    table.add_column("First modified")
    table.add_column("Second modified")
    table.add_column("Sizes", justify="right")
    table.add_column("State", style="magenta")
    if checksum:
        table.add_column("Content")
    table.add_column("Enabled")

    for pair_config in sync_config.pairs:
        info = manager.inspect_pair(pair_config, checksum=checksum)

        first, second = info['first'], info['second']
        if info['error']:
            state = f"[red]{info['error']}[/red]"
        else:
            state = DIRECTION_ARROWS.get(info['direction'], info['direction'])

        row = [
            pair_config.name,
            _format_time(first),
            _format_time(second),
            f"{_format_size(first)} / {_format_size(second)}",
            state,
        ]
        if checksum:
            if info['identical'] is None:
                row.append("-")
            else:
                row.append("[green]identical[/green]" if info['identical'] else "[red]differs[/red]")
        row.append("✅" if pair_config.enabled else "❌")

        table.add_row(*row)

    console.print(table)

def _format_time(file_info) -> str:
    if file_info is None:
        return "[red]missing[/red]"
    return file_info['modified_time'].strftime('%Y-%m-%d %H:%M:%S')

def _format_size(file_info) -> str:
    if file_info is None:
        return "-"
    return FileHelper.format_file_size(file_info['size'])

@cli.command()
@click.option('--config', '-c',
              type=click.Path(path_type=Path),
              default=Path('config/pairsync.yaml'),
              help='Path to save configuration file')
def init(config: Path):
    """Initialize a new configuration file."""
    if config.exists():
        if not click.confirm(f"Configuration file {config} already exists. Overwrite?"):
            return

    SyncConfig.sample().to_yaml(config)

    console.print(f"✅ Configuration saved to {config}", style="green")
    console.print("\n📝 Next steps:")
    console.print("1. Edit the configuration file to list your pairs")
    console.print("2. Run 'pairsync status' to see which copies are newer")
    console.print("3. Run 'pairsync sync --dry-run' to preview, then 'pairsync sync'")

if __name__ == '__main__':
    cli()
