#!/usr/bin/env python3
"""
Reporting CLI - Dashboard summary, filtered reports and CSV export.
"""

from pathlib import Path

import click

from ..analysis.dashboard import bill_status, build_dashboard
from ..analysis.reports import ReportFilter, build_report, default_export_name, export_csv
from ..core.config import get_config
from ..core.dates import FinancialDate
from ..core.models import TransactionType
from .common import DATE, book_session, enum_choice, fmt


@click.command()
@click.option("--date", "date_", type=DATE, help="Show the dashboard as of this date (default: today)")
def dashboard(date_) -> None:
    """
    Show balances, this month's totals, bills and goals.

    Example:
      fintrack dashboard
    """
    config = get_config()
    today = date_ or FinancialDate.today()

    with book_session(save=False) as book:
        summary = build_dashboard(
            book.transactions,
            book.wallets,
            book.categories,
            book.goals,
            book.bills,
            today=today,
            upcoming_days=config.dashboard.upcoming_days,
            recent_days=config.dashboard.recent_days,
            expense_alert_ratio=config.dashboard.expense_alert_ratio,
        )

    click.echo(f"Dashboard - {today}")
    click.echo("=" * 50)
    click.echo(f"💰 Total balance:      {fmt(summary.total_balance)}")
    click.echo(f"📈 Income this month:  {fmt(summary.monthly_income)}")
    click.echo(f"📉 Expenses this month: {fmt(summary.monthly_expenses)}")
    click.echo(f"   Net this month:     {fmt(summary.monthly_net)}")
    click.echo(f"   vs last month:      {summary.previous_month_comparison:+.1f}%")
    click.echo(f"   Last {config.dashboard.recent_days} days spent: {fmt(summary.weekly_expenses)}")

    if summary.most_used_category:
        click.echo(f"   Top category:       {summary.most_used_category.name}")
    if summary.most_active_wallet:
        click.echo(f"   Busiest wallet:     {summary.most_active_wallet.name}")

    if summary.overdue_bills or summary.upcoming_bills:
        click.echo("\n🧾 Bills:")
        for b in summary.overdue_bills + summary.upcoming_bills:
            status = bill_status(b, today, config.dashboard.upcoming_days)
            click.echo(f"   {b.due_date}  {b.description:<28} {fmt(b.amount):>14}  {status.label}")

    if summary.goals:
        click.echo("\n🎯 Goals:")
        for p in summary.goals:
            click.echo(f"   {p.goal.name:<28} {p.percent:6.1f}%  ({fmt(p.spent)} of {fmt(p.goal.target_amount)})")

    if summary.alerts:
        click.echo("")
        icons = {"success": "✅", "warning": "⚠️ ", "info": "ℹ️ "}
        for alert in summary.alerts:
            click.echo(f"{icons.get(alert.level, '')} {alert.message}")


def _report_filter(start, end, category_id, type_) -> ReportFilter:
    if start and end and start > end:
        raise click.BadParameter("--start must not be after --end")
    return ReportFilter(
        start=start,
        end=end,
        category_id=category_id,
        type=TransactionType(type_) if type_ else None,
    )


def report_filter_options(f):
    """Shared filter options for report commands."""
    f = click.option("--type", "type_", type=enum_choice(TransactionType), help="Only income or expense")(f)
    f = click.option("--category", "category_id", help="Only this category id")(f)
    f = click.option("--end", type=DATE, help="Last date included (YYYY-MM-DD)")(f)
    f = click.option("--start", type=DATE, help="First date included (YYYY-MM-DD)")(f)
    return f


@click.group()
def report() -> None:
    """Filtered reports over the transaction log."""
    pass


@report.command("summary")
@report_filter_options
def summary(start, end, category_id, type_) -> None:
    """
    Totals, category distribution and monthly trend.

    Example:
      fintrack report summary --start 2024-01-01 --end 2024-03-31
    """
    report_filter = _report_filter(start, end, category_id, type_)

    with book_session(save=False) as book:
        result = build_report(book.transactions, book.categories, report_filter)

    click.echo(f"Report: {len(result.transactions)} transaction(s)")
    click.echo(f"  Income:   {fmt(result.totals.income)}")
    click.echo(f"  Expenses: {fmt(result.totals.expenses)}")
    click.echo(f"  Balance:  {fmt(result.totals.balance)}")

    if result.categories:
        click.echo("\nBy category:")
        for share in result.categories:
            click.echo(f"  {share.category.name:<24} {fmt(share.total):>14}")

    if result.trend:
        click.echo("\nBy month:")
        for month in result.trend:
            click.echo(
                f"  {month.month}  +{fmt(month.income):>14}  -{fmt(month.expense):>14}  = {fmt(month.net):>14}"
            )


@report.command("export")
@report_filter_options
@click.option("--output", "-o", type=click.Path(path_type=Path), help="CSV file (default: data/reports/report-<today>.csv)")
def export(start, end, category_id, type_, output) -> None:
    """Export the filtered transactions to CSV."""
    config = get_config()
    report_filter = _report_filter(start, end, category_id, type_)

    with book_session(save=False) as book:
        result = build_report(book.transactions, book.categories, report_filter)
        categories = list(book.categories)
        wallets = list(book.wallets)

    output_path = output or config.reports.output_dir / default_export_name()
    written = export_csv(result.transactions, categories, wallets, output_path, config.reports.csv_date_format)

    click.echo(f"✅ Exported {len(result.transactions)} transaction(s) to {written}")
