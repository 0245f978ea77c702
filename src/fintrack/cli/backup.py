#!/usr/bin/env python3
"""
Backup CLI - Create, list and restore full-book backups.
"""

from datetime import datetime
from pathlib import Path

import click

from ..core.config import get_config
from ..storage.backup import BackupError, BackupStore
from .common import book_session


def backup_store() -> BackupStore:
    config = get_config()
    return BackupStore(config.storage.backup_dir, config.storage.backup_format)


@click.group()
def backup() -> None:
    """Backups of all finance data."""
    pass


@backup.command("create")
@click.option("--format", "backup_format", type=click.Choice(["json", "yaml"]), help="Override the configured format")
def create(backup_format) -> None:
    """Write a dated backup of every record."""
    store = backup_store()

    with book_session(save=False) as book:
        try:
            path = store.save(book, backup_format)
        except (BackupError, OSError) as e:
            raise click.ClickException(f"Backup failed: {e}") from e
        count = book.record_count()

    click.echo(f"✅ Backed up {count} records to {path}")


@backup.command("list")
def list_backups() -> None:
    """Show existing backups, newest first."""
    store = backup_store()
    backups = store.list_backups()

    if not backups:
        click.echo("No backups found.")
        return

    for path in backups:
        modified = datetime.fromtimestamp(path.stat().st_mtime).strftime("%Y-%m-%d %H:%M")
        click.echo(f"{modified}  {path.stat().st_size:>10} bytes  {path.name}")


@backup.command("restore")
@click.argument("path", required=False, type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--yes", is_flag=True, help="Skip confirmation prompt")
def restore(path, yes) -> None:
    """
    Replace all data with a backup (default: the newest one).

    The backup is validated before anything is replaced.
    """
    store = backup_store()
    source = path or next(iter(store.list_backups()), None)
    if source is None:
        raise click.ClickException(f"No backups found in {store.backup_dir}")

    if not yes:
        click.confirm(f"Replace all current data with {source.name}?", abort=True)

    with book_session() as book:
        try:
            store.restore(book, source)
        except (BackupError, FileNotFoundError) as e:
            raise click.ClickException(f"Restore failed: {e}") from e

    click.echo(f"✅ Restored {book.record_count()} records from {source.name}")
