#!/usr/bin/env python3
"""Tests for dashboard metrics."""

from decimal import Decimal

import pytest

from fintrack.analysis.dashboard import (
    achieved_goals,
    bill_status,
    build_alerts,
    build_dashboard,
    category_spending,
    goal_progress,
    monthly_expenses,
    monthly_income,
    most_active_wallet,
    most_used_category,
    overdue_bills,
    previous_month_comparison,
    recent_transactions,
    total_balance,
    upcoming_bills,
    weekly_expenses,
)
from fintrack.core.dates import FinancialDate
from fintrack.core.models import Bill, BillStatus, BillType, Goal, TransactionType
from fintrack.core.money import Money


def day(text: str) -> FinancialDate:
    return FinancialDate.from_string(text)


def make_bill(bill_id: str, due: str, status: BillStatus = BillStatus.PENDING) -> Bill:
    return Bill(
        id=bill_id,
        type=BillType.PAYABLE,
        description=f"Bill {bill_id}",
        amount=Money.from_cents(1000),
        category_id="5",
        due_date=day(due),
        status=status,
    )


@pytest.mark.unit
class TestTotals:
    """Test balance and monthly totals."""

    def test_total_balance(self, populated_book):
        """Sum of every wallet balance."""
        assert total_balance(populated_book.wallets).to_cents() == 1465000 + 32610

    def test_monthly_income_and_expenses(self, populated_book, today):
        """Only the current calendar month counts."""
        assert monthly_income(populated_book.transactions, today).to_cents() == 500000
        assert monthly_expenses(populated_book.transactions, today).to_cents() == 12000 + 800 + 4590

    def test_recent_window_is_inclusive(self, populated_book, today):
        """A window of N days covers today and the N - 1 days before it."""
        recent = recent_transactions(populated_book.transactions, today, 7)
        assert [t.description for t in recent] == ["Market", "Bus", "Lunch"]

        six_days = recent_transactions(populated_book.transactions, today, 6)
        assert "Market" in [t.description for t in six_days]

        five_days = recent_transactions(populated_book.transactions, today, 5)
        assert [t.description for t in five_days] == ["Bus", "Lunch"]

        one_day = recent_transactions(populated_book.transactions, today.add_days(-1), 1)
        assert [t.description for t in one_day] == ["Lunch"]

    def test_weekly_expenses(self, populated_book, today):
        """Expenses inside the recent window."""
        assert weekly_expenses(populated_book.transactions, today).to_cents() == 17390

    def test_weekly_expenses_counts_seven_calendar_days(self, book, today):
        """One expense per day over nine days: only the last seven count."""
        for offset in range(9):
            book.add_transaction(
                TransactionType.EXPENSE, "Coffee", Money.from_cents(100), "3", "1", today.add_days(-offset)
            )
        assert weekly_expenses(book.transactions, today, 7).to_cents() == 700


@pytest.mark.unit
class TestActivity:
    """Test most used category and most active wallet."""

    def test_most_used_category_and_wallet(self, populated_book, today):
        """Food and Cash lead the recent window."""
        category = most_used_category(populated_book.transactions, populated_book.categories, today)
        wallet = most_active_wallet(populated_book.transactions, populated_book.wallets, today)
        assert category is not None and category.name == "Food"
        assert wallet is not None and wallet.name == "Cash"

    def test_ties_go_to_first_seen(self, book, today):
        """Equal counts resolve to the id recorded first."""
        book.add_transaction(TransactionType.EXPENSE, "Bus", Money.from_cents(500), "4", "1", today)
        book.add_transaction(TransactionType.EXPENSE, "Lunch", Money.from_cents(500), "3", "2", today)
        assert most_used_category(book.transactions, book.categories, today).id == "4"
        assert most_active_wallet(book.transactions, book.wallets, today).id == "1"

    def test_no_recent_activity(self, book, today):
        """An empty window yields None."""
        assert most_used_category(book.transactions, book.categories, today) is None
        assert most_active_wallet(book.transactions, book.wallets, today) is None


@pytest.mark.unit
class TestPreviousMonthComparison:
    """Test month-over-month net change."""

    def test_growth_against_previous_month(self, populated_book, today):
        """Percent change of this month's net against last month's."""
        current_net = 500000 - 17390
        previous_net = 500000 - 35000
        expected = (current_net - previous_net) / previous_net * 100
        assert previous_month_comparison(populated_book.transactions, today) == pytest.approx(expected)

    def test_zero_previous_month(self, book, today):
        """No activity last month gives zero instead of dividing by zero."""
        book.add_transaction(TransactionType.INCOME, "Gig", Money.from_cents(1000), "2", "1", today)
        assert previous_month_comparison(book.transactions, today) == 0.0

    def test_negative_previous_month_keeps_sign(self, book, today):
        """The divisor keeps its sign."""
        book.add_transaction(TransactionType.EXPENSE, "Trip", Money.from_cents(10000), "5", "1", day("2024-02-10"))
        book.add_transaction(TransactionType.EXPENSE, "Snack", Money.from_cents(5000), "3", "1", today)
        # (-5000 - -10000) / -10000 * 100
        assert previous_month_comparison(book.transactions, today) == pytest.approx(-50.0)

    def test_january_compares_with_december(self, book):
        """The previous month wraps the year."""
        book.add_transaction(TransactionType.INCOME, "Dec", Money.from_cents(1000), "1", "1", day("2023-12-20"))
        book.add_transaction(TransactionType.INCOME, "Jan", Money.from_cents(3000), "1", "1", day("2024-01-10"))
        assert previous_month_comparison(book.transactions, day("2024-01-15")) == pytest.approx(200.0)


@pytest.mark.unit
class TestBills:
    """Test bill windows and status labels."""

    def test_upcoming_bills_window(self, today):
        """Open bills due from today through seven days ahead."""
        bills = [
            make_bill("late", "2024-03-14"),
            make_bill("today", "2024-03-15"),
            make_bill("edge", "2024-03-22"),
            make_bill("far", "2024-03-23"),
            make_bill("paid", "2024-03-16", BillStatus.PAID),
        ]
        assert [b.id for b in upcoming_bills(bills, today, 7)] == ["today", "edge"]

    def test_overdue_bills_excludes_today(self, today):
        """A bill due today is not overdue."""
        bills = [
            make_bill("today", "2024-03-15"),
            make_bill("late", "2024-03-14"),
            make_bill("flagged", "2024-03-01", BillStatus.OVERDUE),
            make_bill("paid", "2024-03-01", BillStatus.PAID),
        ]
        assert [b.id for b in overdue_bills(bills, today)] == ["flagged", "late"]

    @pytest.mark.parametrize(
        ("due", "status", "state", "label"),
        [
            ("2024-03-10", BillStatus.PAID, "paid", "Paid"),
            ("2024-03-10", BillStatus.PENDING, "overdue", "Overdue"),
            ("2024-03-15", BillStatus.PENDING, "due_soon", "Due today"),
            ("2024-03-18", BillStatus.PENDING, "due_soon", "Due in 3 day(s)"),
            ("2024-04-30", BillStatus.PENDING, "pending", "Pending"),
        ],
    )
    def test_bill_status(self, today, due, status, state, label):
        """Each bill maps to one display state."""
        info = bill_status(make_bill("b", due, status), today)
        assert info.state == state
        assert info.label == label


@pytest.mark.unit
class TestGoals:
    """Test goal progress."""

    def test_goal_progress(self, populated_book):
        """Spend in the goal category from its start date."""
        goal = Goal(
            id="g1",
            name="Food cap",
            category_id="3",
            target_amount=Money.from_cents(20000),
            start_date=day("2024-03-01"),
        )
        progress = goal_progress(goal, populated_book.transactions)
        assert progress.spent.to_cents() == 16590
        assert progress.percent == pytest.approx(82.95)
        assert progress.remaining.to_cents() == 3410
        assert not progress.achieved

    def test_achieved_goals(self, populated_book):
        """Goals at or past 100% are achieved."""
        goal = Goal(
            id="g1",
            name="Transport",
            category_id="4",
            target_amount=Money.from_cents(800),
            start_date=day("2024-03-01"),
        )
        assert achieved_goals([goal], populated_book.transactions) == [goal]
        assert goal_progress(goal, populated_book.transactions).remaining.is_zero()

    def test_zero_target(self, populated_book):
        """A zero target reports zero percent."""
        goal = Goal(id="g", name="x", category_id="3", target_amount=Money.zero(), start_date=day("2024-01-01"))
        assert goal_progress(goal, populated_book.transactions).percent == 0.0

    def test_category_spending_subtracts_income(self, book):
        """Refunds booked as income reduce category spend."""
        book.add_transaction(TransactionType.EXPENSE, "Shoes", Money.from_cents(20000), "5", "1", day("2024-03-02"))
        book.add_transaction(TransactionType.INCOME, "Refund", Money.from_cents(5000), "5", "1", day("2024-03-04"))
        book.add_transaction(TransactionType.EXPENSE, "Later", Money.from_cents(999), "5", "1", day("2024-04-01"))

        spent = category_spending(book.transactions, "5", day("2024-03-01"), day("2024-03-31"))
        assert spent.to_cents() == 15000


@pytest.mark.unit
class TestDashboard:
    """Test alerts and the combined dashboard."""

    def test_alerts(self):
        """Each alert fires on its own condition."""
        alerts = build_alerts(
            achieved_count=2,
            income=Money.from_cents(1000),
            expenses=Money.from_cents(900),
            upcoming_count=1,
            expense_alert_ratio=Decimal("0.8"),
        )
        assert [a.level for a in alerts] == ["success", "warning", "info"]
        assert "80%" in alerts[1].message

    def test_no_alerts(self):
        """Quiet month, no alerts."""
        alerts = build_alerts(0, Money.from_cents(1000), Money.from_cents(800), 0)
        assert alerts == []

    def test_build_dashboard(self, populated_book, today):
        """All figures together."""
        bills = [make_bill("soon", "2024-03-18"), make_bill("late", "2024-03-01")]
        summary = build_dashboard(
            populated_book.transactions,
            populated_book.wallets,
            populated_book.categories,
            populated_book.goals,
            bills,
            today=today,
        )

        assert summary.total_balance.to_cents() == 1497610
        assert summary.monthly_net.to_cents() == 500000 - 17390
        assert summary.most_used_category.name == "Food"
        assert [b.id for b in summary.upcoming_bills] == ["soon"]
        assert [b.id for b in summary.overdue_bills] == ["late"]
        assert [a.level for a in summary.alerts] == ["info"]
