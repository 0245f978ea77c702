#!/usr/bin/env python3
"""
Transaction CLI - Recording income, expenses and transfers.
"""

import click

from ..core.dates import FinancialDate
from ..core.models import PaymentMethod, TransactionType
from .common import DATE, MONEY, book_session, drop_unset, enum_choice, fmt, require_changes


@click.group()
def transaction() -> None:
    """Income, expense and transfer commands."""
    pass


@transaction.command("add")
@click.option("--type", "type_", type=enum_choice(TransactionType), required=True, help="income or expense")
@click.option("--amount", type=MONEY, required=True, help="Amount, e.g. 120.50")
@click.option("--description", "-d", required=True, help="What the money was for")
@click.option("--category", "category_id", required=True, help="Category id")
@click.option("--wallet", "wallet_id", required=True, help="Wallet id")
@click.option("--date", "date_", type=DATE, help="Transaction date (YYYY-MM-DD, default: today)")
@click.option(
    "--method",
    type=enum_choice(PaymentMethod),
    default=PaymentMethod.CASH.value,
    show_default=True,
    help="Payment method",
)
@click.option("--person", "person_id", help="Client or supplier id")
def add(type_, amount, description, category_id, wallet_id, date_, method, person_id) -> None:
    """
    Record a transaction and update its wallet balance.

    Examples:
      fintrack transaction add --type expense --amount 45.90 -d Lunch --category 3 --wallet 2
      fintrack transaction add --type income --amount "5.000,00" -d Salary --category 1 --wallet 1
    """
    with book_session() as book:
        created = book.add_transaction(
            type=TransactionType(type_),
            description=description,
            amount=amount,
            category_id=category_id,
            wallet_id=wallet_id,
            date=date_,
            payment_method=PaymentMethod(method),
            person_id=person_id,
        )
        wallet = book.get_wallet(wallet_id)

    click.echo(f"✅ Added {created.type.value} {created.id}: {description} {fmt(amount)}")
    click.echo(f"   {wallet.name} balance: {fmt(wallet.balance)}")


@transaction.command("list")
@click.option("--month", help="Only this month (YYYY-MM)")
@click.option("--wallet", "wallet_id", help="Only this wallet id")
@click.option("--category", "category_id", help="Only this category id")
@click.option("--limit", type=int, default=50, show_default=True, help="Most recent N transactions")
def list_transactions(month, wallet_id, category_id, limit) -> None:
    """List transactions, newest first."""
    with book_session(save=False) as book:
        selected = [
            t
            for t in book.transactions
            if (month is None or t.date.month_key() == month)
            and (wallet_id is None or t.wallet_id == wallet_id)
            and (category_id is None or t.category_id == category_id)
        ]
        categories = {c.id: c.name for c in book.categories}
        wallets = {w.id: w.name for w in book.wallets}

    if not selected:
        click.echo("No transactions found.")
        return

    selected.sort(key=lambda t: (t.date, t.id), reverse=True)
    for t in selected[:limit]:
        sign = "+" if t.is_income else "-"
        click.echo(
            f"{t.date}  {t.id:<16} {sign}{fmt(t.amount):>16}  {t.description}"
            f"  [{categories.get(t.category_id, '?')} / {wallets.get(t.wallet_id, '?')}]"
        )

    if len(selected) > limit:
        click.echo(f"... {len(selected) - limit} more")


@transaction.command("edit")
@click.argument("transaction_id")
@click.option("--type", "type_", type=enum_choice(TransactionType))
@click.option("--amount", type=MONEY)
@click.option("--description", "-d")
@click.option("--category", "category_id")
@click.option("--wallet", "wallet_id")
@click.option("--date", "date_", type=DATE)
@click.option("--method", type=enum_choice(PaymentMethod))
@click.option("--person", "person_id")
def edit(transaction_id, type_, amount, description, category_id, wallet_id, date_, method, person_id) -> None:
    """Change fields of a transaction, moving wallet balances as needed."""
    changes = drop_unset(
        type=TransactionType(type_) if type_ else None,
        amount=amount,
        description=description,
        category_id=category_id,
        wallet_id=wallet_id,
        date=date_,
        payment_method=PaymentMethod(method) if method else None,
        person_id=person_id,
    )
    require_changes(changes)

    with book_session() as book:
        book.update_transaction(transaction_id, **changes)

    click.echo(f"✅ Updated transaction {transaction_id}")


@transaction.command("delete")
@click.argument("transaction_id")
def delete(transaction_id) -> None:
    """Delete a transaction and revert its wallet balance."""
    with book_session() as book:
        removed = book.delete_transaction(transaction_id)

    click.echo(f"🗑️  Deleted transaction {transaction_id}: {removed.description}")


@transaction.command("transfer")
@click.option("--from", "from_wallet_id", required=True, help="Source wallet id")
@click.option("--to", "to_wallet_id", required=True, help="Destination wallet id")
@click.option("--amount", type=MONEY, required=True)
@click.option("--description", "-d", default="", help="Transfer note")
@click.option("--date", "date_", type=DATE, help="Transfer date (default: today)")
def transfer(from_wallet_id, to_wallet_id, amount, description, date_) -> None:
    """
    Move money between two wallets.

    Example:
      fintrack transaction transfer --from 1 --to 2 --amount 200 -d "ATM withdrawal"
    """
    with book_session() as book:
        book.transfer_between_wallets(
            from_wallet_id, to_wallet_id, amount, description, date=date_ or FinancialDate.today()
        )
        source = book.get_wallet(from_wallet_id)
        target = book.get_wallet(to_wallet_id)

    click.echo(f"✅ Transferred {fmt(amount)} from {source.name} to {target.name}")
    click.echo(f"   {source.name}: {fmt(source.balance)}")
    click.echo(f"   {target.name}: {fmt(target.balance)}")
