#!/usr/bin/env python3
"""
Main CLI Entry Point for fintrack

Provides a unified command-line interface for recording transactions and
tracking wallets, bills, goals and debts.
"""

import click

from ..core.config import get_config, reload_config


@click.group()
@click.option(
    "--config-env",
    type=click.Choice(["development", "test", "production"]),
    help="Override environment configuration",
)
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output")
@click.option("--debug", is_flag=True, help="Enable debug logging")
@click.pass_context
def main(ctx: click.Context, config_env: str | None, verbose: bool, debug: bool) -> None:
    """
    fintrack - Personal and Small-Business Finance Tracker

    Keeps wallet balances in step with every transaction, schedules debt
    installments, and summarizes spending in dashboards and reports.
    """
    # Ensure context object exists
    ctx.ensure_object(dict)

    # Set environment if specified
    if config_env:
        import os

        os.environ["FINTRACK_ENV"] = config_env

    # Configure debug logging if requested
    if debug:
        import logging
        import os

        os.environ["LOG_LEVEL"] = "DEBUG"
        logging.getLogger().setLevel(logging.DEBUG)
        logging.getLogger("fintrack").setLevel(logging.DEBUG)

    # Store global options
    ctx.obj["verbose"] = verbose
    ctx.obj["debug"] = debug
    ctx.obj["config"] = reload_config() if (config_env or debug) else get_config()

    if verbose:
        click.echo(f"Environment: {ctx.obj['config'].environment.value}")
        click.echo(f"Data directory: {ctx.obj['config'].data_dir}")

    if debug:
        click.echo("Debug logging enabled")


@main.command()
@click.pass_context
def version(ctx: click.Context) -> None:
    """Show version information."""
    from fintrack import __author__, __version__

    click.echo(f"fintrack v{__version__}")
    click.echo(f"Author: {__author__}")


@main.command()
@click.pass_context
def config(ctx: click.Context) -> None:
    """Show current configuration."""
    config_obj = ctx.obj["config"]

    click.echo("Current Configuration:")
    click.echo(f"  Environment: {config_obj.environment.value}")
    click.echo(f"  Data Directory: {config_obj.data_dir}")
    click.echo(f"  State File: {config_obj.storage.state_file}")
    click.echo(f"  Backup Directory: {config_obj.storage.backup_dir} ({config_obj.storage.backup_format})")
    click.echo(f"  Reports Directory: {config_obj.reports.output_dir}")
    click.echo(f"  Currency Symbol: {config_obj.dashboard.currency_symbol}")
    click.echo(f"  Debug Mode: {config_obj.debug}")
    click.echo(f"  Log Level: {config_obj.log_level}")


@main.command()
@click.pass_context
def status(ctx: click.Context) -> None:
    """Show what is stored on disk."""
    from .backup import backup_store
    from .common import state_store

    for label, store in (("Data", state_store()), ("Backups", backup_store())):
        click.echo(f"{label}: {store.summary_text()}")
        modified = store.last_modified()
        if modified:
            click.echo(f"  Last modified: {modified:%Y-%m-%d %H:%M} ({store.size_bytes()} bytes)")


@main.command()
@click.option("--yes", is_flag=True, help="Skip confirmation prompt")
def reset(yes: bool) -> None:
    """Delete every record and restore the default wallets and categories."""
    from .common import book_session

    if not yes:
        click.confirm("This erases all transactions, bills, goals and debts. Continue?", abort=True)

    with book_session() as book:
        book.reset_all_data()

    click.echo("✅ All data reset to defaults")


# Import domain command groups
from .backup import backup  # noqa: E402
from .planning import bill, debt, goal  # noqa: E402
from .records import category, person, wallet  # noqa: E402
from .reports import dashboard, report  # noqa: E402
from .transactions import transaction  # noqa: E402

# Register domain commands
for command in (transaction, wallet, category, person, goal, bill, debt, dashboard, report, backup):
    main.add_command(command)


if __name__ == "__main__":
    main()
