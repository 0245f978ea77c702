#!/usr/bin/env python3
"""
Reference Record CLI - Wallets, categories and people.
"""

import click

from ..analysis.dashboard import total_balance
from ..core.models import PersonType, TransactionType
from ..core.money import Money
from .common import MONEY, book_session, drop_unset, enum_choice, fmt, require_changes

# ---------------------------------------------------------------------------
# Wallets


@click.group()
def wallet() -> None:
    """Bank accounts, cash and cards."""
    pass


@wallet.command("add")
@click.argument("name")
@click.option("--balance", type=MONEY, default="0", show_default=True, help="Opening balance")
@click.option("--type", "type_", default="Bank", show_default=True, help="Free-form wallet type")
@click.option("--color", default="#3b82f6", show_default=True)
def add_wallet(name: str, balance: Money, type_: str, color: str) -> None:
    """Create a wallet."""
    with book_session() as book:
        created = book.add_wallet(name, balance, type_, color)

    click.echo(f"✅ Added wallet {created.id}: {name} ({fmt(balance)})")


@wallet.command("list")
def list_wallets() -> None:
    """Show wallets and the total balance."""
    with book_session(save=False) as book:
        wallets = list(book.wallets)

    if not wallets:
        click.echo("No wallets.")
        return

    for w in wallets:
        click.echo(f"{w.id:<16} {w.name:<24} {w.type:<12} {fmt(w.balance):>16}")
    click.echo(f"{'Total':<54} {fmt(total_balance(wallets)):>16}")


@wallet.command("edit")
@click.argument("wallet_id")
@click.option("--name")
@click.option("--balance", type=MONEY, help="Overwrite the balance directly")
@click.option("--type", "type_")
@click.option("--color")
def edit_wallet(wallet_id, name, balance, type_, color) -> None:
    """Change a wallet's fields."""
    changes = drop_unset(name=name, balance=balance, type=type_, color=color)
    require_changes(changes)

    with book_session() as book:
        book.update_wallet(wallet_id, **changes)

    click.echo(f"✅ Updated wallet {wallet_id}")


@wallet.command("delete")
@click.argument("wallet_id")
def delete_wallet(wallet_id) -> None:
    """Delete a wallet; its transactions are kept."""
    with book_session() as book:
        removed = book.delete_wallet(wallet_id)

    click.echo(f"🗑️  Deleted wallet {wallet_id}: {removed.name}")


# ---------------------------------------------------------------------------
# Categories


@click.group()
def category() -> None:
    """Income and expense categories."""
    pass


@category.command("add")
@click.argument("name")
@click.option("--type", "type_", type=enum_choice(TransactionType), required=True)
@click.option("--color", default="#6b7280", show_default=True)
@click.option("--icon", default="")
def add_category(name, type_, color, icon) -> None:
    """Create a category."""
    with book_session() as book:
        created = book.add_category(name, TransactionType(type_), color, icon)

    click.echo(f"✅ Added {type_} category {created.id}: {name}")


@category.command("list")
@click.option("--type", "type_", type=enum_choice(TransactionType), help="Only this kind")
def list_categories(type_) -> None:
    """Show categories."""
    with book_session(save=False) as book:
        categories = [c for c in book.categories if type_ is None or c.type.value == type_]

    if not categories:
        click.echo("No categories.")
        return

    for c in categories:
        label = f"{c.icon} {c.name}".strip()
        click.echo(f"{c.id:<16} {label:<28} {c.type.value}")


@category.command("edit")
@click.argument("category_id")
@click.option("--name")
@click.option("--type", "type_", type=enum_choice(TransactionType))
@click.option("--color")
@click.option("--icon")
def edit_category(category_id, name, type_, color, icon) -> None:
    """Change a category's fields."""
    changes = drop_unset(
        name=name,
        type=TransactionType(type_) if type_ else None,
        color=color,
        icon=icon,
    )
    require_changes(changes)

    with book_session() as book:
        book.update_category(category_id, **changes)

    click.echo(f"✅ Updated category {category_id}")


@category.command("delete")
@click.argument("category_id")
def delete_category(category_id) -> None:
    """Delete a category; records using it keep the id."""
    with book_session() as book:
        removed = book.delete_category(category_id)

    click.echo(f"🗑️  Deleted category {category_id}: {removed.name}")


# ---------------------------------------------------------------------------
# People


@click.group()
def person() -> None:
    """Clients and suppliers."""
    pass


@person.command("add")
@click.argument("name")
@click.option("--type", "type_", type=enum_choice(PersonType), required=True)
@click.option("--contact", default="", help="Phone, e-mail or other contact")
def add_person(name, type_, contact) -> None:
    """Register a client or supplier."""
    with book_session() as book:
        created = book.add_person(name, PersonType(type_), contact)

    click.echo(f"✅ Added {type_} {created.id}: {name}")


@person.command("list")
@click.option("--type", "type_", type=enum_choice(PersonType), help="Only clients or suppliers")
def list_persons(type_) -> None:
    """Show clients and suppliers."""
    with book_session(save=False) as book:
        persons = [p for p in book.persons if type_ is None or p.type.value == type_]

    if not persons:
        click.echo("No people registered.")
        return

    for p in persons:
        click.echo(f"{p.id:<16} {p.name:<28} {p.type.value:<10} {p.contact}")


@person.command("edit")
@click.argument("person_id")
@click.option("--name")
@click.option("--type", "type_", type=enum_choice(PersonType))
@click.option("--contact")
def edit_person(person_id, name, type_, contact) -> None:
    """Change a person's fields."""
    changes = drop_unset(name=name, type=PersonType(type_) if type_ else None, contact=contact)
    require_changes(changes)

    with book_session() as book:
        book.update_person(person_id, **changes)

    click.echo(f"✅ Updated person {person_id}")


@person.command("delete")
@click.argument("person_id")
def delete_person(person_id) -> None:
    """Delete a person."""
    with book_session() as book:
        removed = book.delete_person(person_id)

    click.echo(f"🗑️  Deleted person {person_id}: {removed.name}")
