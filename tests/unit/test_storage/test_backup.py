#!/usr/bin/env python3
"""Tests for backup creation and restore."""

import json
import os

import pytest
import yaml

from fintrack.core.dates import FinancialDate
from fintrack.ledger.book import FinanceBook
from fintrack.storage.backup import BackupError, BackupStore, parse_backup


@pytest.fixture
def backups(temp_dir) -> BackupStore:
    return BackupStore(temp_dir / "backups")


class TestBackupSave:
    """Test writing backups."""

    def test_json_backup(self, backups, populated_book, today):
        """A JSON backup holds every collection plus an export timestamp."""
        path = backups.save(populated_book, today=today)

        assert path.name == "backup-2024-03-15.json"
        data = json.loads(path.read_text(encoding="utf-8"))
        assert "exported_at" in data
        assert len(data["transactions"]) == 6
        assert "debts" in data

    def test_yaml_backup(self, backups, populated_book, today):
        """YAML backups are readable by any YAML loader."""
        path = backups.save(populated_book, backup_format="yaml", today=today)

        assert path.suffix == ".yaml"
        data = yaml.safe_load(path.read_text(encoding="utf-8"))
        assert len(data["wallets"]) == 2

    def test_same_day_backups_do_not_overwrite(self, backups, book, today):
        """A second backup on the same day gets a suffix."""
        first = backups.save(book, today=today)
        second = backups.save(book, today=today)
        assert first.name == "backup-2024-03-15.json"
        assert second.name == "backup-2024-03-15-2.json"
        assert first.exists() and second.exists()

    def test_unsupported_format(self, backups, book, temp_dir):
        """Only json and yaml are accepted."""
        with pytest.raises(BackupError):
            backups.save(book, backup_format="xml")
        with pytest.raises(BackupError):
            BackupStore(temp_dir, backup_format="csv")


class TestBackupListing:
    """Test listing and metadata."""

    def test_empty_directory(self, backups):
        """No directory means no backups."""
        assert backups.list_backups() == []
        assert not backups.exists()
        assert backups.item_count() is None
        assert backups.summary_text() == "No backups found"

    def test_newest_first(self, backups, book):
        """Backups list by modification time, newest first."""
        older = backups.save(book, today=FinancialDate.from_string("2024-01-01"))
        newer = backups.save(book, today=FinancialDate.from_string("2024-02-01"))
        os.utime(older, (1_700_000_000, 1_700_000_000))
        os.utime(newer, (1_700_100_000, 1_700_100_000))

        assert backups.list_backups() == [newer, older]
        assert backups.item_count() == 2
        assert backups.size_bytes() > 0
        assert backups.summary_text() == "Backups: 2 file(s)"

    def test_ignores_unrelated_files(self, backups, book):
        """Only backup-* files with known suffixes count."""
        backups.save(book)
        (backups.backup_dir / "notes.txt").write_text("hi", encoding="utf-8")
        (backups.backup_dir / "backup-old.bak").write_text("hi", encoding="utf-8")
        assert len(backups.list_backups()) == 1


class TestBackupRestore:
    """Test restoring backups."""

    def test_restore_latest(self, backups, populated_book):
        """Restoring replaces every collection of the target book."""
        backups.save(populated_book, backup_format="yaml")
        target = FinanceBook()

        backups.restore(target)

        assert target == populated_book

    def test_restore_specific_json(self, backups, populated_book):
        """A specific backup path can be restored."""
        path = backups.save(populated_book)
        target = FinanceBook()
        backups.restore(target, path)
        assert len(target.transactions) == 6

    def test_restore_without_backups(self, backups):
        """Restoring with nothing saved raises FileNotFoundError."""
        with pytest.raises(FileNotFoundError):
            backups.restore(FinanceBook())

    def test_invalid_backup_leaves_book_untouched(self, backups, populated_book):
        """A bad record aborts the restore before anything changes."""
        backups.backup_dir.mkdir(parents=True)
        bad = backups.backup_dir / "backup-2024-03-15.json"
        bad.write_text(json.dumps({"wallets": [{"id": "1", "name": "x", "balance": "lots"}]}), encoding="utf-8")

        before = populated_book.to_dict()
        with pytest.raises(BackupError):
            backups.restore(populated_book, bad)
        assert populated_book.to_dict() == before

    def test_unparseable_yaml(self, backups):
        """Broken YAML is reported as a BackupError."""
        backups.backup_dir.mkdir(parents=True)
        bad = backups.backup_dir / "backup-2024-03-15.yaml"
        bad.write_text("wallets: [unclosed", encoding="utf-8")
        with pytest.raises(BackupError):
            backups.load(bad)


class TestParseBackup:
    """Test backup document validation."""

    def test_rejects_non_mapping(self):
        """A list is not a backup."""
        with pytest.raises(BackupError):
            parse_backup([1, 2, 3])

    def test_rejects_mapping_without_collections(self):
        """A mapping needs at least one finance collection."""
        with pytest.raises(BackupError):
            parse_backup({"hello": "world"})

    def test_partial_backup_uses_seed_data(self):
        """Missing wallets and categories fall back to the defaults."""
        book = parse_backup({"transactions": []})
        assert len(book.wallets) == 2
        assert len(book.categories) == 6
