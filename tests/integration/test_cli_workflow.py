#!/usr/bin/env python3
"""
Integration tests for the domain CLI commands.

Each test drives the CLI end to end against a temporary data directory and
checks both the printed output and the persisted state.
"""

import pandas as pd
import pytest
from click.testing import CliRunner

from fintrack.cli.main import main
from fintrack.core.config import get_config
from fintrack.ledger.book import FinanceBook
from fintrack.storage.state_store import StateStore


def saved_book() -> FinanceBook:
    return StateStore(get_config().storage.state_file).load()


@pytest.mark.integration
class TestTransactionCLI:
    """Test transaction commands."""

    def setup_method(self):
        self.runner = CliRunner()

    def invoke(self, *args: str, **kwargs):
        return self.runner.invoke(main, list(args), **kwargs)

    def test_add_expense_updates_wallet(self):
        """Adding an expense persists it and debits the wallet."""
        result = self.invoke(
            "transaction", "add", "--type", "expense", "--amount", "45,90",
            "-d", "Lunch", "--category", "3", "--wallet", "2", "--date", "2024-03-14",
        )

        assert result.exit_code == 0, result.output
        assert "R$ 45,90" in result.output
        assert "Cash balance: R$ 454,10" in result.output

        book = saved_book()
        assert len(book.transactions) == 1
        assert book.transactions[0].amount.to_cents() == 4590
        assert book.get_wallet("2").balance.to_cents() == 45410

    def test_add_with_unknown_wallet_fails_cleanly(self):
        """Domain errors become CLI errors and nothing is saved."""
        result = self.invoke(
            "transaction", "add", "--type", "expense", "--amount", "10",
            "-d", "Ghost", "--category", "3", "--wallet", "99",
        )

        assert result.exit_code != 0
        assert "Wallet not found: 99" in result.output
        assert not get_config().storage.state_file.exists()

    def test_invalid_amount_is_usage_error(self):
        """Unparseable amounts are rejected by the option type."""
        result = self.invoke(
            "transaction", "add", "--type", "income", "--amount", "lots",
            "-d", "x", "--category", "1", "--wallet", "1",
        )
        assert result.exit_code == 2
        assert "Invalid amount" in result.output

    def test_edit_and_delete(self):
        """Edits move balances and deletes revert them."""
        self.invoke(
            "transaction", "add", "--type", "expense", "--amount", "100",
            "-d", "Market", "--category", "3", "--wallet", "1",
        )
        transaction_id = saved_book().transactions[0].id

        edited = self.invoke("transaction", "edit", transaction_id, "--amount", "250")
        assert edited.exit_code == 0, edited.output
        assert saved_book().get_wallet("1").balance.to_cents() == 500000 - 25000

        nothing = self.invoke("transaction", "edit", transaction_id)
        assert nothing.exit_code != 0

        deleted = self.invoke("transaction", "delete", transaction_id)
        assert deleted.exit_code == 0
        assert saved_book().get_wallet("1").balance.to_cents() == 500000

    def test_list_filters_by_month(self):
        """Listing shows newest first and honours filters."""
        for date_str, description in (("2024-02-10", "February"), ("2024-03-10", "March")):
            self.invoke(
                "transaction", "add", "--type", "expense", "--amount", "10",
                "-d", description, "--category", "3", "--wallet", "1", "--date", date_str,
            )

        everything = self.invoke("transaction", "list")
        assert everything.output.index("March") < everything.output.index("February")

        march = self.invoke("transaction", "list", "--month", "2024-03")
        assert "March" in march.output
        assert "February" not in march.output

        empty = self.invoke("transaction", "list", "--month", "2020-01")
        assert "No transactions found." in empty.output

    def test_transfer(self):
        """Transfers move money and refuse to overdraw."""
        ok = self.invoke("transaction", "transfer", "--from", "1", "--to", "2", "--amount", "200", "-d", "ATM")
        assert ok.exit_code == 0, ok.output
        book = saved_book()
        assert book.get_wallet("1").balance.to_cents() == 480000
        assert book.get_wallet("2").balance.to_cents() == 70000
        assert len(book.transactions) == 2

        too_much = self.invoke("transaction", "transfer", "--from", "2", "--to", "1", "--amount", "1.000,00")
        assert too_much.exit_code != 0
        assert "Insufficient balance" in too_much.output


@pytest.mark.integration
class TestRecordCLI:
    """Test wallet, category and person commands."""

    def setup_method(self):
        self.runner = CliRunner()

    def invoke(self, *args: str, **kwargs):
        return self.runner.invoke(main, list(args), **kwargs)

    def test_wallet_commands(self):
        """Wallets can be created, listed, edited and removed."""
        added = self.invoke("wallet", "add", "Savings", "--balance", "1.500,00", "--type", "Bank")
        assert added.exit_code == 0, added.output
        wallet_id = saved_book().wallets[-1].id

        listing = self.invoke("wallet", "list")
        assert "Savings" in listing.output
        assert "R$ 7.000,00" in listing.output  # 5000 + 500 + 1500

        self.invoke("wallet", "edit", wallet_id, "--name", "Emergency fund")
        assert saved_book().get_wallet(wallet_id).name == "Emergency fund"

        removed = self.invoke("wallet", "delete", wallet_id)
        assert removed.exit_code == 0
        assert len(saved_book().wallets) == 2

    def test_category_commands(self):
        """Categories can be created, filtered and removed."""
        self.invoke("category", "add", "Pets", "--type", "expense", "--icon", "🐶")
        category_id = saved_book().categories[-1].id

        incomes = self.invoke("category", "list", "--type", "income")
        assert "Salary" in incomes.output
        assert "Pets" not in incomes.output

        self.invoke("category", "edit", category_id, "--name", "Pet care")
        assert saved_book().get_category(category_id).name == "Pet care"

        self.invoke("category", "delete", category_id)
        assert len(saved_book().categories) == 6

    def test_person_commands(self):
        """People can be registered and removed."""
        self.invoke("person", "add", "Acme", "--type", "supplier", "--contact", "acme@example.com")
        person_id = saved_book().persons[0].id

        listing = self.invoke("person", "list", "--type", "supplier")
        assert "acme@example.com" in listing.output

        self.invoke("person", "edit", person_id, "--type", "client")
        assert saved_book().get_person(person_id).type.value == "client"

        missing = self.invoke("person", "delete", "nobody")
        assert missing.exit_code != 0
        assert "Person not found" in missing.output


@pytest.mark.integration
class TestPlanningCLI:
    """Test goal, bill and debt commands."""

    def setup_method(self):
        self.runner = CliRunner()

    def invoke(self, *args: str, **kwargs):
        return self.runner.invoke(main, list(args), **kwargs)

    def test_goal_progress(self):
        """Goals report spend toward their target."""
        self.invoke("goal", "add", "Food cap", "--category", "3", "--target", "100", "--start", "2024-03-01")
        self.invoke(
            "transaction", "add", "--type", "expense", "--amount", "120",
            "-d", "Feast", "--category", "3", "--wallet", "1", "--date", "2024-03-05",
        )
        goal_id = saved_book().goals[0].id

        progress = self.invoke("goal", "progress", goal_id)
        assert progress.exit_code == 0, progress.output
        assert "120.0%" in progress.output
        assert "Goal reached!" in progress.output
        assert saved_book().goals[0].current_amount.to_cents() == 12000

        listing = self.invoke("goal", "list")
        assert "Food cap" in listing.output

    def test_bill_lifecycle(self):
        """Bills can be paid once; refresh flags late ones."""
        self.invoke("bill", "add", "Internet", "--type", "payable", "--amount", "99,90", "--category", "5", "--due", "2030-01-10")
        self.invoke("bill", "add", "Old rent", "--type", "payable", "--amount", "10", "--category", "5", "--due", "2020-01-10")
        book = saved_book()
        internet_id = book.bills[0].id

        paid = self.invoke("bill", "pay", internet_id, "--wallet", "1")
        assert paid.exit_code == 0, paid.output
        assert saved_book().get_wallet("1").balance.to_cents() == 500000 - 9990

        twice = self.invoke("bill", "pay", internet_id)
        assert twice.exit_code != 0
        assert "already paid" in twice.output

        refreshed = self.invoke("bill", "refresh")
        assert "1 bill(s) now overdue" in refreshed.output

        open_bills = self.invoke("bill", "list", "--open")
        assert "Old rent" in open_bills.output
        assert "Internet" not in open_bills.output
        assert "Overdue" in open_bills.output

    def test_debt_lifecycle(self):
        """Debts show a schedule and settle after the last installment."""
        added = self.invoke(
            "debt", "add", "Phone", "--amount", "1000", "--installments", "3",
            "--rate", "0", "--start", "2024-01-15", "--due-day", "10",
        )
        assert added.exit_code == 0, added.output
        assert "3x R$ 333,33" in added.output
        debt_id = saved_book().debts[0].id

        schedule = self.invoke("debt", "schedule", debt_id)
        assert "2024-02-10" in schedule.output
        assert "2024-04-10" in schedule.output
        assert "R$ 333,34" in schedule.output

        for _ in range(3):
            paid = self.invoke("debt", "pay", debt_id)
            assert paid.exit_code == 0, paid.output
        assert "Debt settled!" in paid.output

        again = self.invoke("debt", "pay", debt_id)
        assert again.exit_code != 0

        listing = self.invoke("debt", "list")
        assert "settled: 1/1" in listing.output

    def test_debt_invalid_terms(self):
        """Schedule errors surface as CLI errors."""
        result = self.invoke("debt", "add", "Bad", "--amount", "100", "--installments", "0")
        assert result.exit_code != 0
        assert "Installments must be at least 1" in result.output

    def test_debt_edit_rejects_bad_due_day(self):
        """A rejected edit is not saved and the debt still lists."""
        self.invoke("debt", "add", "Loan", "--amount", "400", "--installments", "4", "--due-day", "10")
        debt_id = saved_book().debts[0].id

        edited = self.invoke("debt", "edit", debt_id, "--due-day", "40")
        assert edited.exit_code != 0
        assert "Due day must be between 1 and 31" in edited.output
        assert saved_book().debts[0].due_day == 10

        zero = self.invoke("debt", "edit", debt_id, "--installments", "0")
        assert zero.exit_code != 0
        assert saved_book().debts[0].installments == 4

        listing = self.invoke("debt", "list")
        assert listing.exit_code == 0, listing.output
        assert "Loan" in listing.output


@pytest.mark.integration
class TestReportingCLI:
    """Test dashboard, report and backup commands."""

    def setup_method(self):
        self.runner = CliRunner()

    def invoke(self, *args: str, **kwargs):
        return self.runner.invoke(main, list(args), **kwargs)

    def seed(self):
        for type_, amount, category, date_str in (
            ("income", "5000", "1", "2024-02-05"),
            ("expense", "350", "3", "2024-02-10"),
            ("income", "5000", "1", "2024-03-05"),
            ("expense", "120", "3", "2024-03-10"),
        ):
            self.invoke(
                "transaction", "add", "--type", type_, "--amount", amount, "-d", f"{type_} {date_str}",
                "--category", category, "--wallet", "1", "--date", date_str,
            )

    def test_dashboard(self):
        """The dashboard prints totals as of a date."""
        self.seed()
        result = self.invoke("dashboard", "--date", "2024-03-15")

        assert result.exit_code == 0, result.output
        assert "Income this month:  R$ 5.000,00" in result.output
        assert "Top category:       Food" in result.output

    def test_report_summary(self):
        """Report totals honour the date filter."""
        self.seed()
        result = self.invoke("report", "summary", "--start", "2024-03-01", "--end", "2024-03-31")

        assert result.exit_code == 0, result.output
        assert "Report: 2 transaction(s)" in result.output
        assert "Balance:  R$ 4.880,00" in result.output
        assert "2024-03" in result.output

    def test_report_rejects_reversed_range(self):
        """Start after end is a usage error."""
        result = self.invoke("report", "summary", "--start", "2024-03-31", "--end", "2024-03-01")
        assert result.exit_code == 2

    def test_report_export(self, temp_dir):
        """Export writes a CSV of the filtered transactions."""
        self.seed()
        output = temp_dir / "march.csv"
        result = self.invoke("report", "export", "--type", "expense", "-o", str(output))

        assert result.exit_code == 0, result.output
        df = pd.read_csv(output, dtype=str)
        assert len(df) == 2
        assert set(df["Type"]) == {"Expense"}

    def test_report_export_default_location(self):
        """Without -o the CSV lands in the reports directory."""
        result = self.invoke("report", "export")
        assert result.exit_code == 0, result.output
        assert list(get_config().reports.output_dir.glob("report-*.csv"))

    def test_backup_and_restore(self):
        """A backup restores the data it captured."""
        self.seed()
        created = self.invoke("backup", "create", "--format", "yaml")
        assert created.exit_code == 0, created.output

        listing = self.invoke("backup", "list")
        assert ".yaml" in listing.output

        self.invoke("reset", "--yes")
        assert saved_book().transactions == []

        restored = self.invoke("backup", "restore", "--yes")
        assert restored.exit_code == 0, restored.output
        assert len(saved_book().transactions) == 4

    def test_restore_without_backups(self):
        """Restoring with no backups is an error."""
        result = self.invoke("backup", "restore", "--yes")
        assert result.exit_code != 0
        assert "No backups found" in result.output
