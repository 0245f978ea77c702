#!/usr/bin/env python3
"""
Dashboard Metrics

Aggregates derived from the raw transaction log, wallets, goals and bills.
Every function is a pure computation over lists of records; time-dependent
metrics take an optional `today` so results are reproducible.

Windows are inclusive on both ends: a 7-day recent window ending today
covers today and the seven days before it.
"""

from collections import Counter
from collections.abc import Iterable
from dataclasses import dataclass, field
from decimal import Decimal

from ..core.currency import percent_of
from ..core.dates import FinancialDate
from ..core.models import Bill, BillStatus, Category, Goal, Transaction, TransactionType, Wallet
from ..core.money import Money

DEFAULT_WINDOW_DAYS = 7
DEFAULT_EXPENSE_ALERT_RATIO = Decimal("0.8")


@dataclass
class GoalProgress:
    """Spend counted toward a goal and how far along it is."""

    goal: Goal
    spent: Money
    percent: float

    @property
    def achieved(self) -> bool:
        return self.percent >= 100

    @property
    def remaining(self) -> Money:
        left = self.goal.target_amount - self.spent
        return left if left > Money.zero() else Money.zero()


@dataclass
class BillStatusInfo:
    """Display state of a bill relative to today."""

    state: str  # "paid", "overdue", "due_soon", "pending"
    label: str
    days_until_due: int | None = None


@dataclass
class Alert:
    """A dashboard notice."""

    level: str  # "success", "warning", "info"
    message: str


@dataclass
class DashboardSummary:
    """All dashboard figures for one day."""

    today: FinancialDate
    total_balance: Money
    monthly_income: Money
    monthly_expenses: Money
    weekly_expenses: Money
    most_used_category: Category | None
    most_active_wallet: Wallet | None
    previous_month_comparison: float
    upcoming_bills: list[Bill] = field(default_factory=list)
    overdue_bills: list[Bill] = field(default_factory=list)
    goals: list[GoalProgress] = field(default_factory=list)
    alerts: list[Alert] = field(default_factory=list)

    @property
    def monthly_net(self) -> Money:
        return self.monthly_income - self.monthly_expenses


def _today(today: FinancialDate | None) -> FinancialDate:
    return today or FinancialDate.today()


def _sum_amounts(transactions: Iterable[Transaction]) -> Money:
    total = Money.zero()
    for transaction in transactions:
        total += transaction.amount
    return total


def total_balance(wallets: Iterable[Wallet]) -> Money:
    """Sum of all wallet balances."""
    total = Money.zero()
    for wallet in wallets:
        total += wallet.balance
    return total


def transactions_in_month(transactions: Iterable[Transaction], month: FinancialDate) -> list[Transaction]:
    """Transactions dated in the same calendar month as `month`."""
    return [t for t in transactions if t.date.same_month(month)]


def monthly_total(
    transactions: Iterable[Transaction],
    transaction_type: TransactionType,
    today: FinancialDate | None = None,
) -> Money:
    """Total of one transaction type in the current calendar month."""
    month = transactions_in_month(transactions, _today(today))
    return _sum_amounts(t for t in month if t.type == transaction_type)


def monthly_income(transactions: Iterable[Transaction], today: FinancialDate | None = None) -> Money:
    return monthly_total(transactions, TransactionType.INCOME, today)


def monthly_expenses(transactions: Iterable[Transaction], today: FinancialDate | None = None) -> Money:
    return monthly_total(transactions, TransactionType.EXPENSE, today)


def recent_transactions(
    transactions: Iterable[Transaction],
    today: FinancialDate | None = None,
    days: int = DEFAULT_WINDOW_DAYS,
) -> list[Transaction]:
    """Transactions dated within the last `days` days, today included."""
    end = _today(today)
    start = end.add_days(-(days - 1))
    return [t for t in transactions if start <= t.date <= end]


def weekly_expenses(
    transactions: Iterable[Transaction],
    today: FinancialDate | None = None,
    days: int = DEFAULT_WINDOW_DAYS,
) -> Money:
    """Expense total over the recent window."""
    return _sum_amounts(t for t in recent_transactions(transactions, today, days) if t.is_expense)


def _most_common(ids: Iterable[str]) -> str | None:
    """Most frequent id; equal counts resolve to the id seen first."""
    ranked = Counter(ids).most_common(1)
    return ranked[0][0] if ranked else None


def most_used_category(
    transactions: Iterable[Transaction],
    categories: Iterable[Category],
    today: FinancialDate | None = None,
    days: int = DEFAULT_WINDOW_DAYS,
) -> Category | None:
    """Category with the most transactions in the recent window."""
    top_id = _most_common(t.category_id for t in recent_transactions(transactions, today, days))
    return next((c for c in categories if c.id == top_id), None)


def most_active_wallet(
    transactions: Iterable[Transaction],
    wallets: Iterable[Wallet],
    today: FinancialDate | None = None,
    days: int = DEFAULT_WINDOW_DAYS,
) -> Wallet | None:
    """Wallet with the most transactions in the recent window."""
    top_id = _most_common(t.wallet_id for t in recent_transactions(transactions, today, days))
    return next((w for w in wallets if w.id == top_id), None)


def net_for_month(transactions: Iterable[Transaction], month: FinancialDate) -> Money:
    """Income minus expenses for the calendar month containing `month`."""
    net = Money.zero()
    for transaction in transactions_in_month(transactions, month):
        net += transaction.signed_amount
    return net


def previous_month_comparison(
    transactions: Iterable[Transaction], today: FinancialDate | None = None
) -> float:
    """
    Percent change of this month's net against last month's net.

    Returns 0.0 when last month's net is zero. The divisor keeps its sign, so
    a negative previous month flips the direction of the result.
    """
    transactions = list(transactions)
    current = _today(today)
    current_net = net_for_month(transactions, current)
    previous_net = net_for_month(transactions, current.previous_month())

    if previous_net.is_zero():
        return 0.0
    return percent_of((current_net - previous_net).to_cents(), previous_net.to_cents())


def upcoming_bills(
    bills: Iterable[Bill],
    today: FinancialDate | None = None,
    days: int = DEFAULT_WINDOW_DAYS,
) -> list[Bill]:
    """Open bills due between today and `days` days from now, inclusive."""
    start = _today(today)
    end = start.add_days(days)
    return sorted((b for b in bills if b.is_open and start <= b.due_date <= end), key=lambda b: b.due_date)


def overdue_bills(bills: Iterable[Bill], today: FinancialDate | None = None) -> list[Bill]:
    """Open bills whose due date is before today. A bill due today is not overdue."""
    current = _today(today)
    return sorted((b for b in bills if b.is_open and b.due_date < current), key=lambda b: b.due_date)


def bill_status(
    bill: Bill, today: FinancialDate | None = None, soon_days: int = DEFAULT_WINDOW_DAYS
) -> BillStatusInfo:
    """Classify a bill as paid, overdue, due soon, or pending."""
    if bill.status == BillStatus.PAID:
        return BillStatusInfo(state="paid", label="Paid")

    days_left = _today(today).age_days(bill.due_date)
    if days_left < 0:
        return BillStatusInfo(state="overdue", label="Overdue", days_until_due=days_left)
    if days_left == 0:
        return BillStatusInfo(state="due_soon", label="Due today", days_until_due=0)
    if days_left <= soon_days:
        return BillStatusInfo(state="due_soon", label=f"Due in {days_left} day(s)", days_until_due=days_left)
    return BillStatusInfo(state="pending", label="Pending", days_until_due=days_left)


def goal_spent(goal: Goal, transactions: Iterable[Transaction]) -> Money:
    """Expense spend in the goal's category on or after its start date."""
    return _sum_amounts(
        t for t in transactions if t.is_expense and t.category_id == goal.category_id and t.date >= goal.start_date
    )


def goal_progress(goal: Goal, transactions: Iterable[Transaction]) -> GoalProgress:
    """Spend toward a goal as a percentage of its target (0 for a zero target)."""
    spent = goal_spent(goal, transactions)
    return GoalProgress(
        goal=goal,
        spent=spent,
        percent=percent_of(spent.to_cents(), goal.target_amount.to_cents()),
    )


def achieved_goals(goals: Iterable[Goal], transactions: Iterable[Transaction]) -> list[Goal]:
    transactions = list(transactions)
    return [goal for goal in goals if goal_progress(goal, transactions).achieved]


def category_spending(
    transactions: Iterable[Transaction],
    category_id: str,
    start: FinancialDate | None = None,
    end: FinancialDate | None = None,
) -> Money:
    """
    Net spend in a category over an optional inclusive date range.

    Expenses add and income subtracts, so refunds booked as income in an
    expense category reduce the figure.
    """
    spent = Money.zero()
    for transaction in transactions:
        if transaction.category_id != category_id:
            continue
        if start is not None and transaction.date < start:
            continue
        if end is not None and transaction.date > end:
            continue
        spent -= transaction.signed_amount
    return spent


def build_alerts(
    achieved_count: int,
    income: Money,
    expenses: Money,
    upcoming_count: int,
    expense_alert_ratio: Decimal = DEFAULT_EXPENSE_ALERT_RATIO,
) -> list[Alert]:
    """Dashboard notices for achieved goals, heavy spending and bills due soon."""
    alerts = []
    if achieved_count > 0:
        alerts.append(Alert(level="success", message=f"{achieved_count} goal(s) reached!"))
    if Decimal(expenses.to_cents()) > Decimal(income.to_cents()) * expense_alert_ratio:
        ratio_pct = (expense_alert_ratio * 100).normalize()
        alerts.append(Alert(level="warning", message=f"Expenses are above {ratio_pct:f}% of income this month"))
    if upcoming_count > 0:
        alerts.append(Alert(level="info", message=f"{upcoming_count} bill(s) due soon"))
    return alerts


def build_dashboard(
    transactions: list[Transaction],
    wallets: list[Wallet],
    categories: list[Category],
    goals: list[Goal],
    bills: list[Bill],
    today: FinancialDate | None = None,
    upcoming_days: int = DEFAULT_WINDOW_DAYS,
    recent_days: int = DEFAULT_WINDOW_DAYS,
    expense_alert_ratio: Decimal = DEFAULT_EXPENSE_ALERT_RATIO,
) -> DashboardSummary:
    """Compute every dashboard figure in one pass over the book's collections."""
    current = _today(today)
    income = monthly_income(transactions, current)
    expenses = monthly_expenses(transactions, current)
    upcoming = upcoming_bills(bills, current, upcoming_days)
    progress = [goal_progress(goal, transactions) for goal in goals]

    return DashboardSummary(
        today=current,
        total_balance=total_balance(wallets),
        monthly_income=income,
        monthly_expenses=expenses,
        weekly_expenses=weekly_expenses(transactions, current, recent_days),
        most_used_category=most_used_category(transactions, categories, current, recent_days),
        most_active_wallet=most_active_wallet(transactions, wallets, current, recent_days),
        previous_month_comparison=previous_month_comparison(transactions, current),
        upcoming_bills=upcoming,
        overdue_bills=overdue_bills(bills, current),
        goals=progress,
        alerts=build_alerts(
            achieved_count=sum(1 for p in progress if p.achieved),
            income=income,
            expenses=expenses,
            upcoming_count=len(upcoming),
            expense_alert_ratio=expense_alert_ratio,
        ),
    )
