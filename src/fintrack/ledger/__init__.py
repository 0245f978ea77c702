"""
Ledger Package

The FinanceBook state container and the rules that keep wallet balances
consistent with the transaction log.

Key Components:
- book: FinanceBook with every add/update/delete operation, transfers,
  bill settlement and debt installment payment
- errors: exceptions for rejected mutations
- seed: default wallets and categories
- ids: millisecond-timestamp id generation
"""

from .book import COLLECTIONS, FinanceBook
from .errors import (
    BillAlreadyPaidError,
    DebtSettledError,
    InsufficientFundsError,
    LedgerError,
    RecordNotFoundError,
)
from .ids import IdGenerator
from .seed import default_categories, default_wallets

__all__ = [
    "COLLECTIONS",
    "BillAlreadyPaidError",
    "DebtSettledError",
    "FinanceBook",
    "IdGenerator",
    "InsufficientFundsError",
    "LedgerError",
    "RecordNotFoundError",
    "default_categories",
    "default_wallets",
]
