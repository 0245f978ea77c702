#!/usr/bin/env python3
"""Exceptions raised by FinanceBook mutations."""


class LedgerError(Exception):
    """Raised when a book mutation is rejected"""

    pass


class RecordNotFoundError(LedgerError):
    """Raised when an id does not match any record of the expected kind"""

    def __init__(self, kind: str, record_id: str):
        super().__init__(f"{kind} not found: {record_id}")
        self.kind = kind
        self.record_id = record_id


class InsufficientFundsError(LedgerError):
    """Raised when a transfer source cannot cover the amount"""

    pass


class BillAlreadyPaidError(LedgerError):
    """Raised when settling a bill that is already paid"""

    pass


class DebtSettledError(LedgerError):
    """Raised when paying an installment on a debt with none left"""

    pass
