"""
fintrack - Personal and Small-Business Finance Tracker

Records income, expenses and transfers across wallets, keeping every wallet
balance consistent with the transactions routed through it.

Key Features:
- Transactions with automatic wallet balance maintenance
- Wallet-to-wallet transfers as paired expense/income legs
- Bills to pay and receive, with overdue tracking
- Spending goals per category
- Debts with simple-interest installment schedules
- Dashboard metrics, filtered reports and CSV export
- JSON state file with JSON/YAML backups

Domain Packages:
- core: Money, dates, data models, configuration
- ledger: FinanceBook, the mutating operations over all collections
- debts: Installment schedules and debt summaries
- analysis: Dashboard metrics and reports
- storage: State file and backups
- cli: Command-line interface

Example Usage:
    from fintrack import FinanceBook, Money, TransactionType

    book = FinanceBook()
    book.add_transaction(TransactionType.EXPENSE, "Lunch", Money.parse("45,90"), "3", "1")

Version: 0.1.0
"""

__version__ = "0.1.0"
__author__ = "fintrack contributors"

# Export core value types and models
from .core.config import Environment, get_config
from .core.dates import FinancialDate
from .core.models import (
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
from .core.money import Money

# Export key domain functionality
from .ledger.book import FinanceBook
from .ledger.errors import LedgerError
from .storage.state_store import StateStore

__all__ = [
    # Value types
    "Money",
    "FinancialDate",
    # Models
    "Bill",
    "BillStatus",
    "BillType",
    "Category",
    "Debt",
    "DebtType",
    "Goal",
    "GoalPeriod",
    "PaymentMethod",
    "Person",
    "PersonType",
    "Transaction",
    "TransactionType",
    "Wallet",
    # Ledger and storage
    "FinanceBook",
    "LedgerError",
    "StateStore",
    # Configuration
    "get_config",
    "Environment",
]
