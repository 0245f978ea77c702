"""
Core Utilities Package

Shared primitives, data models, and utilities used across fintrack.

This package provides:
- Currency handling with integer arithmetic for precision
- Money and FinancialDate value types
- Data models for transactions, wallets, categories, goals, bills, people and debts
- Configuration management for environment-specific settings
"""

from .config import (
    Config,
    Environment,
    get_config,
    get_data_dir,
    is_test,
    reload_config,
)
from .currency import (
    CurrencyParseError,
    allocate_remainder,
    apply_rate,
    format_cents,
    parse_amount_to_cents,
    percent_of,
    validate_sum_equals_total,
)
from .dates import FinancialDate
from .models import (
    Bill,
    BillStatus,
    BillType,
    Category,
    Debt,
    DebtType,
    Goal,
    GoalPeriod,
    PaymentMethod,
    Person,
    PersonType,
    Transaction,
    TransactionType,
    Wallet,
)
from .money import Money

__all__ = [
    "Bill",
    "BillStatus",
    "BillType",
    "Category",
    # Configuration
    "Config",
    "CurrencyParseError",
    "Debt",
    "DebtType",
    "Environment",
    "FinancialDate",
    "Goal",
    "GoalPeriod",
    "Money",
    "PaymentMethod",
    "Person",
    "PersonType",
    # Data models
    "Transaction",
    "TransactionType",
    "Wallet",
    # Currency utilities
    "allocate_remainder",
    "apply_rate",
    "format_cents",
    "get_config",
    "get_data_dir",
    "is_test",
    "parse_amount_to_cents",
    "percent_of",
    "reload_config",
    "validate_sum_equals_total",
]
