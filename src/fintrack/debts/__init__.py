"""
Debt Management Package

Installment values, payment schedules and debt totals.

Key Components:
- schedule: simple-interest installment schedules with exact-sum rounding
"""

from .schedule import (
    DebtSummary,
    Installment,
    ScheduleError,
    build_schedule,
    first_due_date,
    installment_amounts,
    installment_value,
    next_installment,
    overdue_installments,
    summarize_debts,
    total_with_interest,
)

__all__ = [
    "DebtSummary",
    "Installment",
    "ScheduleError",
    "build_schedule",
    "first_due_date",
    "installment_amounts",
    "installment_value",
    "next_installment",
    "overdue_installments",
    "summarize_debts",
    "total_with_interest",
]
