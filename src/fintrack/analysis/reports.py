#!/usr/bin/env python3
"""
Transaction Reports

Filtered views of the transaction log with totals, per-category distribution,
a month-by-month trend and CSV export. Aggregation runs on a pandas DataFrame
holding one row per transaction with amounts in integer cents.
"""

import logging
from collections.abc import Iterable
from dataclasses import dataclass, field
from pathlib import Path

import pandas as pd

from ..core.dates import FinancialDate
from ..core.models import Category, Transaction, TransactionType, Wallet
from ..core.money import Money

logger = logging.getLogger(__name__)

FRAME_COLUMNS = [
    "id",
    "date",
    "month",
    "type",
    "description",
    "category_id",
    "category",
    "wallet_id",
    "wallet",
    "amount_cents",
    "payment_method",
]

EXPORT_COLUMNS = ["Date", "Type", "Description", "Category", "Wallet", "Amount", "Payment Method"]


@dataclass
class ReportFilter:
    """Criteria selecting the transactions a report covers. Date bounds are inclusive."""

    start: FinancialDate | None = None
    end: FinancialDate | None = None
    category_id: str | None = None
    type: TransactionType | None = None

    def matches(self, transaction: Transaction) -> bool:
        if self.start is not None and transaction.date < self.start:
            return False
        if self.end is not None and transaction.date > self.end:
            return False
        if self.category_id is not None and transaction.category_id != self.category_id:
            return False
        if self.type is not None and transaction.type != self.type:
            return False
        return True


@dataclass
class ReportTotals:
    income: Money
    expenses: Money

    @property
    def balance(self) -> Money:
        return self.income - self.expenses


@dataclass
class CategoryShare:
    """Total amount booked under one category."""

    category: Category
    total: Money


@dataclass
class MonthTrend:
    """Income, expense and net for one YYYY-MM month."""

    month: str
    income: Money
    expense: Money

    @property
    def net(self) -> Money:
        return self.income - self.expense


@dataclass
class Report:
    """A filtered report over the transaction log."""

    report_filter: ReportFilter
    transactions: list[Transaction]
    totals: ReportTotals
    categories: list[CategoryShare] = field(default_factory=list)
    trend: list[MonthTrend] = field(default_factory=list)


def filter_transactions(
    transactions: Iterable[Transaction], report_filter: ReportFilter | None = None
) -> list[Transaction]:
    """Transactions matching the filter, oldest first."""
    report_filter = report_filter or ReportFilter()
    selected = [t for t in transactions if report_filter.matches(t)]
    return sorted(selected, key=lambda t: t.date)


def transactions_frame(
    transactions: Iterable[Transaction],
    categories: Iterable[Category] = (),
    wallets: Iterable[Wallet] = (),
) -> pd.DataFrame:
    """
    One row per transaction with category and wallet names resolved.

    Unknown category or wallet ids resolve to an empty name.
    """
    category_names = {c.id: c.name for c in categories}
    wallet_names = {w.id: w.name for w in wallets}

    rows = [
        {
            "id": t.id,
            "date": pd.Timestamp(t.date.date),
            "month": t.date.month_key(),
            "type": t.type.value,
            "description": t.description,
            "category_id": t.category_id,
            "category": category_names.get(t.category_id, ""),
            "wallet_id": t.wallet_id,
            "wallet": wallet_names.get(t.wallet_id, ""),
            "amount_cents": t.amount.to_cents(),
            "payment_method": t.payment_method.value,
        }
        for t in transactions
    ]

    df = pd.DataFrame(rows, columns=FRAME_COLUMNS)
    df["date"] = pd.to_datetime(df["date"])
    df["amount_cents"] = df["amount_cents"].astype("int64")
    return df


def report_totals(transactions: Iterable[Transaction]) -> ReportTotals:
    df = transactions_frame(transactions)
    by_type = df.groupby("type")["amount_cents"].sum()
    return ReportTotals(
        income=Money.from_cents(int(by_type.get(TransactionType.INCOME.value, 0))),
        expenses=Money.from_cents(int(by_type.get(TransactionType.EXPENSE.value, 0))),
    )


def category_distribution(
    transactions: Iterable[Transaction], categories: Iterable[Category]
) -> list[CategoryShare]:
    """
    Total amount per category, in category order, omitting empty categories.

    Amounts are summed regardless of transaction type.
    """
    df = transactions_frame(transactions)
    totals = df.groupby("category_id")["amount_cents"].sum()

    shares = []
    for category in categories:
        cents = int(totals.get(category.id, 0))
        if cents > 0:
            shares.append(CategoryShare(category=category, total=Money.from_cents(cents)))
    return shares


def monthly_trend(transactions: Iterable[Transaction]) -> list[MonthTrend]:
    """Income and expense per calendar month, oldest month first."""
    df = transactions_frame(transactions)
    if df.empty:
        return []

    pivot = df.pivot_table(index="month", columns="type", values="amount_cents", aggfunc="sum", fill_value=0)
    pivot = pivot.reindex(columns=[TransactionType.INCOME.value, TransactionType.EXPENSE.value], fill_value=0)
    pivot = pivot.sort_index()

    return [
        MonthTrend(
            month=str(month),
            income=Money.from_cents(int(row[TransactionType.INCOME.value])),
            expense=Money.from_cents(int(row[TransactionType.EXPENSE.value])),
        )
        for month, row in pivot.iterrows()
    ]


def build_report(
    transactions: Iterable[Transaction],
    categories: list[Category],
    report_filter: ReportFilter | None = None,
) -> Report:
    """Filter the log and compute totals, category distribution and trend."""
    report_filter = report_filter or ReportFilter()
    selected = filter_transactions(transactions, report_filter)

    return Report(
        report_filter=report_filter,
        transactions=selected,
        totals=report_totals(selected),
        categories=category_distribution(selected, categories),
        trend=monthly_trend(selected),
    )


def export_frame(
    transactions: Iterable[Transaction],
    categories: Iterable[Category],
    wallets: Iterable[Wallet],
    date_format: str = "%Y-%m-%d",
) -> pd.DataFrame:
    """Rows as written to the CSV export, with display column names."""
    df = transactions_frame(transactions, categories, wallets)

    return pd.DataFrame(
        {
            "Date": df["date"].dt.strftime(date_format),
            "Type": df["type"].str.capitalize(),
            "Description": df["description"],
            "Category": df["category"],
            "Wallet": df["wallet"],
            "Amount": [Money.from_cents(int(c)).to_amount_str() for c in df["amount_cents"]],
            "Payment Method": df["payment_method"],
        },
        columns=EXPORT_COLUMNS,
    )


def default_export_name(today: FinancialDate | None = None) -> str:
    """File name for a report export made today."""
    return f"report-{(today or FinancialDate.today()).to_iso_string()}.csv"


def export_csv(
    transactions: Iterable[Transaction],
    categories: Iterable[Category],
    wallets: Iterable[Wallet],
    output_path: Path,
    date_format: str = "%Y-%m-%d",
) -> Path:
    """
    Write transactions to a CSV file.

    Args:
        transactions: Transactions to export, typically a Report's selection
        categories: Categories used to resolve names
        wallets: Wallets used to resolve names
        output_path: Destination file; parent directories are created
        date_format: strftime format for the Date column

    Returns:
        Path of the written file
    """
    frame = export_frame(transactions, categories, wallets, date_format)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    frame.to_csv(output_path, index=False, encoding="utf-8")

    logger.info(f"Exported {len(frame)} transaction(s) to {output_path}")
    return output_path
