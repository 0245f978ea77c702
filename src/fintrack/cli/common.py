#!/usr/bin/env python3
"""
Shared CLI helpers: parameter types, book sessions and display formatting.
"""

import logging
from collections.abc import Iterator
from contextlib import contextmanager
from decimal import Decimal, InvalidOperation
from enum import Enum
from typing import Any

import click

from ..core.config import get_config
from ..core.currency import CurrencyParseError
from ..core.dates import FinancialDate
from ..core.money import Money
from ..debts.schedule import ScheduleError
from ..ledger.book import FinanceBook
from ..ledger.errors import LedgerError
from ..storage.state_store import StateStore

logger = logging.getLogger(__name__)


class MoneyParamType(click.ParamType):
    """Amount option accepting "12.34", "1.234,56", "R$ 10,50" or the configured symbol."""

    name = "amount"

    def convert(self, value: Any, param: click.Parameter | None, ctx: click.Context | None) -> Money:
        if isinstance(value, Money):
            return value
        try:
            return Money.parse(str(value), get_config().dashboard.currency_symbol)
        except CurrencyParseError as e:
            self.fail(str(e), param, ctx)


class DateParamType(click.ParamType):
    """Date option in YYYY-MM-DD form."""

    name = "date"

    def convert(self, value: Any, param: click.Parameter | None, ctx: click.Context | None) -> FinancialDate:
        if isinstance(value, FinancialDate):
            return value
        try:
            return FinancialDate.from_string(str(value))
        except ValueError:
            self.fail(f"Invalid date format: {value}. Use YYYY-MM-DD", param, ctx)


class RateParamType(click.ParamType):
    """Percentage option such as "2.5" or "2,5"."""

    name = "rate"

    def convert(self, value: Any, param: click.Parameter | None, ctx: click.Context | None) -> Decimal:
        if isinstance(value, Decimal):
            return value
        try:
            rate = Decimal(str(value).strip().rstrip("%").replace(",", "."))
        except InvalidOperation:
            self.fail(f"Invalid rate: {value}", param, ctx)
        if not rate.is_finite() or rate < 0:
            self.fail(f"Rate must be a non-negative number: {value}", param, ctx)
        return rate


MONEY = MoneyParamType()
DATE = DateParamType()
RATE = RateParamType()


def enum_choice(enum_type: type[Enum]) -> click.Choice:
    """click.Choice over an Enum's values."""
    return click.Choice([member.value for member in enum_type])


def state_store() -> StateStore:
    return StateStore(get_config().storage.state_file)


@contextmanager
def book_session(save: bool = True) -> Iterator[FinanceBook]:
    """
    Load the book, yield it for mutation, then save it.

    Domain errors raised inside the block become click errors and the book is
    not saved.
    """
    store = state_store()
    try:
        book = store.load()
    except ValueError as e:
        logger.error(f"Failed to load {store.state_file}: {e}")
        raise click.ClickException(str(e)) from e

    try:
        yield book
    except (LedgerError, ScheduleError) as e:
        raise click.ClickException(str(e)) from e

    if save:
        store.save(book)


def fmt(money: Money) -> str:
    """Format an amount with the configured currency symbol."""
    return money.format(get_config().dashboard.currency_symbol)


def drop_unset(**options: Any) -> dict[str, Any]:
    """Keep only options the user actually passed."""
    return {name: value for name, value in options.items() if value is not None}


def require_changes(changes: dict[str, Any]) -> None:
    if not changes:
        raise click.UsageError("Nothing to change; pass at least one option")
