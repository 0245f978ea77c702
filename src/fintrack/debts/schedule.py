#!/usr/bin/env python3
"""
Debt Installment Schedule

Computes installment values and monthly payment schedules for debts.

Interest is simple: the rate is applied once to the principal and the
resulting total is split evenly over the installments. Equal shares are
rounded down to whole cents and the final installment absorbs the remainder,
so the schedule always sums exactly to the total with interest.
"""

import logging
from dataclasses import dataclass
from decimal import Decimal

from ..core.currency import allocate_remainder, validate_sum_equals_total
from ..core.dates import FinancialDate
from ..core.models import Debt
from ..core.money import Money

logger = logging.getLogger(__name__)


class ScheduleError(ValueError):
    """Raised when debt terms cannot produce a schedule"""

    pass


@dataclass(frozen=True)
class Installment:
    """One scheduled payment of a debt."""

    number: int
    due_date: FinancialDate
    amount: Money
    paid: bool


@dataclass
class DebtSummary:
    """Totals across a set of debts."""

    debt_count: int
    total_remaining: Money
    total_paid: Money
    settled_count: int


def _check_terms(installments: int, due_day: int | None = None) -> None:
    if installments < 1:
        raise ScheduleError(f"Installments must be at least 1, got {installments}")
    if due_day is not None and not 1 <= due_day <= 31:
        raise ScheduleError(f"Due day must be between 1 and 31, got {due_day}")


def total_with_interest(total: Money, interest_rate: Decimal | int | float) -> Money:
    """Principal grown by a simple percentage rate, rounded to cents."""
    return total.with_interest(interest_rate)


def installment_value(total: Money, interest_rate: Decimal | int | float, installments: int) -> Money:
    """
    Regular installment amount for a debt.

    Args:
        total: Principal
        interest_rate: Simple interest rate in percent (10 means 10%)
        installments: Number of monthly installments

    Returns:
        Equal share of the total with interest, rounded down to cents
    """
    _check_terms(installments)
    return total_with_interest(total, interest_rate) // installments


def installment_amounts(total: Money, interest_rate: Decimal | int | float, installments: int) -> list[Money]:
    """
    Amount of every installment, last one absorbing the rounding remainder.

    Raises:
        ScheduleError: If the amounts do not sum to the total with interest
    """
    _check_terms(installments)
    grand_total = total_with_interest(total, interest_rate)
    share = (grand_total // installments).to_cents()
    cents = allocate_remainder([share] * installments, grand_total.to_cents())

    if not validate_sum_equals_total(cents, grand_total.to_cents()):
        raise ScheduleError(f"Installments total {sum(cents)} doesn't match {grand_total.to_cents()}")

    return [Money.from_cents(c) for c in cents]


def first_due_date(start_date: FinancialDate, due_day: int) -> FinancialDate:
    """First occurrence of due_day on or after start_date, clamped to month length."""
    candidate = start_date.add_months(0, day=due_day)
    if candidate < start_date:
        candidate = start_date.add_months(1, day=due_day)
    return candidate


def build_schedule(debt: Debt) -> list[Installment]:
    """
    Build the full installment schedule for a debt.

    Due dates fall on the debt's due day each month, starting with the first
    such day on or after the start date. Installments numbered up to
    `paid_installments` are marked paid.
    """
    _check_terms(debt.installments, debt.due_day)
    amounts = installment_amounts(debt.total_amount, debt.interest_rate, debt.installments)
    first = first_due_date(debt.start_date, debt.due_day)

    schedule = []
    for index, amount in enumerate(amounts):
        schedule.append(
            Installment(
                number=index + 1,
                due_date=first.add_months(index, day=debt.due_day),
                amount=amount,
                paid=index < debt.paid_installments,
            )
        )

    logger.debug(f"Built {len(schedule)} installments for debt {debt.id}")
    return schedule


def next_installment(debt: Debt) -> Installment | None:
    """Next unpaid installment, or None once the debt is settled."""
    if debt.is_settled:
        return None
    return build_schedule(debt)[debt.paid_installments]


def overdue_installments(debt: Debt, today: FinancialDate | None = None) -> list[Installment]:
    """Unpaid installments whose due date is before today."""
    today = today or FinancialDate.today()
    return [item for item in build_schedule(debt) if not item.paid and item.due_date < today]


def summarize_debts(debts: list[Debt]) -> DebtSummary:
    """Total remaining and paid amounts across debts."""
    total_remaining = Money.zero()
    total_paid = Money.zero()
    for debt in debts:
        total_remaining += debt.remaining_amount
        total_paid += debt.amount_paid

    return DebtSummary(
        debt_count=len(debts),
        total_remaining=total_remaining,
        total_paid=total_paid,
        settled_count=sum(1 for debt in debts if debt.is_settled),
    )
