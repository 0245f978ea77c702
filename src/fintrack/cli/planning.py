#!/usr/bin/env python3
"""
Planning CLI - Spending goals, bills and debts.
"""

import click

from ..analysis.dashboard import bill_status, goal_progress
from ..core.config import get_config
from ..core.dates import FinancialDate
from ..core.models import BillStatus, BillType, DebtType, GoalPeriod
from ..debts.schedule import build_schedule, next_installment, summarize_debts
from .common import (
    DATE,
    MONEY,
    RATE,
    book_session,
    drop_unset,
    enum_choice,
    fmt,
    require_changes,
)

# ---------------------------------------------------------------------------
# Goals


@click.group()
def goal() -> None:
    """Spending goals per category."""
    pass


@goal.command("add")
@click.argument("name")
@click.option("--category", "category_id", required=True, help="Category whose spending counts")
@click.option("--target", type=MONEY, required=True, help="Spending limit")
@click.option("--start", "start_date", type=DATE, help="Count spending from this date (default: today)")
@click.option(
    "--period",
    type=enum_choice(GoalPeriod),
    default=GoalPeriod.MONTHLY.value,
    show_default=True,
)
def add_goal(name, category_id, target, start_date, period) -> None:
    """Create a spending goal."""
    with book_session() as book:
        created = book.add_goal(name, category_id, target, start_date, GoalPeriod(period))

    click.echo(f"✅ Added goal {created.id}: {name} (target {fmt(target)})")


@goal.command("list")
def list_goals() -> None:
    """Show goals with their progress."""
    with book_session(save=False) as book:
        progress = [goal_progress(g, book.transactions) for g in book.goals]

    if not progress:
        click.echo("No goals.")
        return

    for p in progress:
        marker = "🎯" if p.achieved else "  "
        click.echo(
            f"{marker} {p.goal.id:<16} {p.goal.name:<24} {fmt(p.spent):>14} / {fmt(p.goal.target_amount):<14}"
            f" {p.percent:6.1f}%"
        )


@goal.command("progress")
@click.argument("goal_id")
def show_goal_progress(goal_id) -> None:
    """Detailed progress of one goal."""
    with book_session(save=False) as book:
        found = book.get_goal(goal_id)
        progress = goal_progress(found, book.transactions)

    click.echo(f"Goal: {found.name} ({found.period.value}, since {found.start_date})")
    click.echo(f"  Spent:     {fmt(progress.spent)}")
    click.echo(f"  Target:    {fmt(found.target_amount)}")
    click.echo(f"  Remaining: {fmt(progress.remaining)}")
    click.echo(f"  Progress:  {progress.percent:.1f}%")
    if progress.achieved:
        click.echo("🎯 Goal reached!")


@goal.command("edit")
@click.argument("goal_id")
@click.option("--name")
@click.option("--category", "category_id")
@click.option("--target", "target_amount", type=MONEY)
@click.option("--start", "start_date", type=DATE)
@click.option("--period", type=enum_choice(GoalPeriod))
def edit_goal(goal_id, name, category_id, target_amount, start_date, period) -> None:
    """Change a goal's fields."""
    changes = drop_unset(
        name=name,
        category_id=category_id,
        target_amount=target_amount,
        start_date=start_date,
        period=GoalPeriod(period) if period else None,
    )
    require_changes(changes)

    with book_session() as book:
        book.update_goal(goal_id, **changes)

    click.echo(f"✅ Updated goal {goal_id}")


@goal.command("delete")
@click.argument("goal_id")
def delete_goal(goal_id) -> None:
    """Delete a goal."""
    with book_session() as book:
        removed = book.delete_goal(goal_id)

    click.echo(f"🗑️  Deleted goal {goal_id}: {removed.name}")


# ---------------------------------------------------------------------------
# Bills


@click.group()
def bill() -> None:
    """Bills to pay and to receive."""
    pass


@bill.command("add")
@click.argument("description")
@click.option("--type", "type_", type=enum_choice(BillType), required=True, help="payable or receivable")
@click.option("--amount", type=MONEY, required=True)
@click.option("--category", "category_id", required=True)
@click.option("--due", "due_date", type=DATE, required=True, help="Due date (YYYY-MM-DD)")
@click.option("--person", "person_id", help="Client or supplier id")
def add_bill(description, type_, amount, category_id, due_date, person_id) -> None:
    """Register a bill."""
    with book_session() as book:
        created = book.add_bill(
            type=BillType(type_),
            description=description,
            amount=amount,
            category_id=category_id,
            due_date=due_date,
            person_id=person_id,
        )

    click.echo(f"✅ Added {type_} bill {created.id}: {description} {fmt(amount)} due {due_date}")


@bill.command("list")
@click.option("--open", "open_only", is_flag=True, help="Hide paid bills")
def list_bills(open_only) -> None:
    """Show bills ordered by due date."""
    soon_days = get_config().dashboard.upcoming_days
    today = FinancialDate.today()

    with book_session(save=False) as book:
        bills = sorted(
            (b for b in book.bills if b.is_open or not open_only),
            key=lambda b: b.due_date,
        )

    if not bills:
        click.echo("No bills.")
        return

    for b in bills:
        status = bill_status(b, today, soon_days)
        click.echo(
            f"{b.due_date}  {b.id:<16} {b.type.value:<10} {fmt(b.amount):>14}  {b.description:<28} {status.label}"
        )


@bill.command("pay")
@click.argument("bill_id")
@click.option("--wallet", "wallet_id", help="Wallet to pay from or receive into (default: first wallet)")
@click.option("--date", "date_", type=DATE, help="Payment date (default: today)")
def pay_bill(bill_id, wallet_id, date_) -> None:
    """Mark a bill as paid and record its transaction."""
    with book_session() as book:
        transaction = book.mark_bill_as_paid(bill_id, wallet_id, date_)
        wallet = book.get_wallet(transaction.wallet_id)

    click.echo(f"✅ Paid bill {bill_id}: {transaction.description} {fmt(transaction.amount)}")
    click.echo(f"   {wallet.name} balance: {fmt(wallet.balance)}")


@bill.command("edit")
@click.argument("bill_id")
@click.option("--description", "-d")
@click.option("--type", "type_", type=enum_choice(BillType))
@click.option("--amount", type=MONEY)
@click.option("--category", "category_id")
@click.option("--due", "due_date", type=DATE)
@click.option("--status", type=enum_choice(BillStatus))
@click.option("--person", "person_id")
def edit_bill(bill_id, description, type_, amount, category_id, due_date, status, person_id) -> None:
    """Change a bill's fields."""
    changes = drop_unset(
        description=description,
        type=BillType(type_) if type_ else None,
        amount=amount,
        category_id=category_id,
        due_date=due_date,
        status=BillStatus(status) if status else None,
        person_id=person_id,
    )
    require_changes(changes)

    with book_session() as book:
        book.update_bill(bill_id, **changes)

    click.echo(f"✅ Updated bill {bill_id}")


@bill.command("delete")
@click.argument("bill_id")
def delete_bill(bill_id) -> None:
    """Delete a bill."""
    with book_session() as book:
        removed = book.delete_bill(bill_id)

    click.echo(f"🗑️  Deleted bill {bill_id}: {removed.description}")


@bill.command("refresh")
def refresh_bills() -> None:
    """Flag pending bills past their due date as overdue."""
    with book_session() as book:
        flagged = book.refresh_bill_statuses()

    if not flagged:
        click.echo("No bills became overdue.")
        return

    click.echo(f"⚠️  {len(flagged)} bill(s) now overdue:")
    for b in flagged:
        click.echo(f"   {b.due_date}  {b.description} {fmt(b.amount)}")


# ---------------------------------------------------------------------------
# Debts


@click.group()
def debt() -> None:
    """Loans, financing and card debts paid in installments."""
    pass


@debt.command("add")
@click.argument("description")
@click.option("--amount", "total_amount", type=MONEY, required=True, help="Principal")
@click.option("--installments", type=int, required=True)
@click.option("--rate", "interest_rate", type=RATE, default="0", show_default=True, help="Total interest in %")
@click.option("--start", "start_date", type=DATE, help="Start date (default: today)")
@click.option("--due-day", type=int, default=10, show_default=True, help="Day of month installments fall due")
@click.option("--creditor", default="")
@click.option(
    "--type",
    "type_",
    type=enum_choice(DebtType),
    default=DebtType.OTHER.value,
    show_default=True,
)
def add_debt(description, total_amount, installments, interest_rate, start_date, due_day, creditor, type_) -> None:
    """
    Register a debt.

    Example:
      fintrack debt add "Car loan" --amount 12000 --installments 24 --rate 15 --due-day 5
    """
    with book_session() as book:
        created = book.add_debt(
            description=description,
            total_amount=total_amount,
            installments=installments,
            interest_rate=interest_rate,
            start_date=start_date,
            due_day=due_day,
            creditor=creditor,
            type=DebtType(type_),
        )

    click.echo(f"✅ Added debt {created.id}: {description}")
    click.echo(f"   {installments}x {fmt(created.installment_value)} = {fmt(created.total_with_interest)}")


@debt.command("list")
def list_debts() -> None:
    """Show debts and overall totals."""
    with book_session(save=False) as book:
        if not book.debts:
            click.echo("No debts.")
            return

        for d in book.debts:
            upcoming = next_installment(d)
            next_due = f"next {upcoming.due_date}" if upcoming else "settled"
            click.echo(
                f"{d.id:<16} {d.description:<24} {d.paid_installments}/{d.installments}"
                f"  remaining {fmt(d.remaining_amount):>14}  {d.progress_percent:5.1f}%  {next_due}"
            )
        debts = list(book.debts)

    summary = summarize_debts(debts)
    click.echo(
        f"Total remaining: {fmt(summary.total_remaining)}  paid: {fmt(summary.total_paid)}"
        f"  settled: {summary.settled_count}/{summary.debt_count}"
    )


@debt.command("schedule")
@click.argument("debt_id")
def show_schedule(debt_id) -> None:
    """Show every installment of a debt with due dates."""
    with book_session(save=False) as book:
        found = book.get_debt(debt_id)
        schedule = build_schedule(found)

    click.echo(f"{found.description} ({found.interest_rate}% interest, due day {found.due_day})")
    for item in schedule:
        mark = "✅" if item.paid else "  "
        click.echo(f"{mark} {item.number:>3}  {item.due_date}  {fmt(item.amount):>14}")


@debt.command("pay")
@click.argument("debt_id")
@click.option("--wallet", "wallet_id", help="Wallet to pay from (default: first wallet)")
@click.option("--date", "date_", type=DATE, help="Payment date (default: today)")
def pay_debt(debt_id, wallet_id, date_) -> None:
    """Pay the next installment of a debt."""
    with book_session() as book:
        transaction = book.pay_debt_installment(debt_id, wallet_id, date_)
        found = book.get_debt(debt_id)

    click.echo(f"✅ {transaction.description}: {fmt(transaction.amount)}")
    if found.is_settled:
        click.echo("🎉 Debt settled!")
    else:
        click.echo(f"   Remaining: {fmt(found.remaining_amount)}")


@debt.command("edit")
@click.argument("debt_id")
@click.option("--description", "-d")
@click.option("--amount", "total_amount", type=MONEY)
@click.option("--installments", type=int)
@click.option("--rate", "interest_rate", type=RATE)
@click.option("--due-day", type=int)
@click.option("--creditor")
@click.option("--type", "type_", type=enum_choice(DebtType))
def edit_debt(debt_id, description, total_amount, installments, interest_rate, due_day, creditor, type_) -> None:
    """Change a debt's fields; term changes recompute the installments."""
    changes = drop_unset(
        description=description,
        total_amount=total_amount,
        installments=installments,
        interest_rate=interest_rate,
        due_day=due_day,
        creditor=creditor,
        type=DebtType(type_) if type_ else None,
    )
    require_changes(changes)

    with book_session() as book:
        book.update_debt(debt_id, **changes)

    click.echo(f"✅ Updated debt {debt_id}")


@debt.command("delete")
@click.argument("debt_id")
def delete_debt(debt_id) -> None:
    """Delete a debt."""
    with book_session() as book:
        removed = book.delete_debt(debt_id)

    click.echo(f"🗑️  Deleted debt {debt_id}: {removed.description}")
