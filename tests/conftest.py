"""
Pytest Configuration and Shared Fixtures

Provides common test fixtures and configuration for the entire test suite.
"""

import tempfile
from pathlib import Path

import pytest

from fintrack.core.dates import FinancialDate
from fintrack.core.models import TransactionType
from fintrack.core.money import Money
from fintrack.ledger.book import FinanceBook
from fintrack.ledger.ids import IdGenerator


@pytest.fixture
def temp_dir():
    """Create a temporary directory for test files."""
    with tempfile.TemporaryDirectory() as temp_path:
        yield Path(temp_path)


@pytest.fixture
def today() -> FinancialDate:
    """Fixed reference date so date-window tests do not depend on the clock."""
    return FinancialDate.from_string("2024-03-15")


@pytest.fixture
def book() -> FinanceBook:
    """Fresh book with seed wallets/categories and a deterministic id clock."""
    clock = iter(range(1_700_000_000, 1_800_000_000))
    return FinanceBook(id_generator=IdGenerator(clock=lambda: float(next(clock))))


@pytest.fixture
def populated_book(book: FinanceBook) -> FinanceBook:
    """Book with a few transactions spread over February and March 2024."""
    entries = [
        (TransactionType.INCOME, "Salary", 500000, "1", "1", "2024-02-05"),
        (TransactionType.EXPENSE, "Groceries", 35000, "3", "1", "2024-02-10"),
        (TransactionType.INCOME, "Salary", 500000, "1", "1", "2024-03-05"),
        (TransactionType.EXPENSE, "Market", 12000, "3", "2", "2024-03-10"),
        (TransactionType.EXPENSE, "Bus", 800, "4", "2", "2024-03-12"),
        (TransactionType.EXPENSE, "Lunch", 4590, "3", "2", "2024-03-14"),
    ]
    for type_, description, cents, category_id, wallet_id, date_str in entries:
        book.add_transaction(
            type=type_,
            description=description,
            amount=Money.from_cents(cents),
            category_id=category_id,
            wallet_id=wallet_id,
            date=FinancialDate.from_string(date_str),
        )
    return book


@pytest.fixture(autouse=True)
def setup_test_environment(monkeypatch, tmp_path):
    """Set up test environment variables."""
    # Ensure tests don't use real data
    monkeypatch.setenv("FINTRACK_ENV", "test")
    monkeypatch.setenv("FINTRACK_DATA_DIR", str(tmp_path / "fintrack_data"))
    for name in (
        "FINTRACK_BACKUP_FORMAT",
        "FINTRACK_CURRENCY_SYMBOL",
        "FINTRACK_UPCOMING_DAYS",
        "FINTRACK_RECENT_DAYS",
        "FINTRACK_EXPENSE_ALERT_RATIO",
        "FINTRACK_CSV_DATE_FORMAT",
        "DEBUG",
        "LOG_LEVEL",
    ):
        monkeypatch.delenv(name, raising=False)

    # Drop any configuration cached by an earlier test
    monkeypatch.setattr("fintrack.core.config._config", None)


# Test markers for categorizing tests
def pytest_configure(config):
    """Configure custom pytest markers."""
    config.addinivalue_line("markers", "unit: Unit tests for individual components")
    config.addinivalue_line("markers", "integration: Integration tests for complete workflows")
    config.addinivalue_line("markers", "currency: Tests for currency handling and precision")
    config.addinivalue_line("markers", "ledger: Tests for wallet balance maintenance")
    config.addinivalue_line("markers", "debts: Tests for installment schedules")
    config.addinivalue_line("markers", "slow: Tests that take significant time to run")
