#!/usr/bin/env python3
"""
Backup and Restore

Writes dated full-book snapshots to a backup directory as JSON or YAML and
restores them. A backup is validated by parsing every record before the live
book is touched, so a bad file never half-replaces the current state.
"""

import json
import logging
from datetime import datetime
from pathlib import Path
from typing import Any

import yaml

from ..core.dates import FinancialDate
from ..core.json_utils import read_json, write_json
from ..ledger.book import COLLECTIONS, FinanceBook
from .base import DataStoreMixin

logger = logging.getLogger(__name__)

BACKUP_SUFFIXES = {".json": "json", ".yaml": "yaml", ".yml": "yaml"}


class BackupError(Exception):
    """Raised when a backup cannot be written, read or restored"""

    pass


def _read_backup_file(path: Path) -> Any:
    fmt = BACKUP_SUFFIXES.get(path.suffix.lower())
    if fmt is None:
        raise BackupError(f"Unsupported backup file type: {path.name}")

    try:
        if fmt == "json":
            return read_json(path)
        with open(path, encoding="utf-8") as f:
            return yaml.safe_load(f)
    except (json.JSONDecodeError, yaml.YAMLError) as e:
        raise BackupError(f"Cannot parse backup {path.name}: {e}") from e
    except OSError as e:
        raise BackupError(f"Cannot read backup {path}: {e}") from e


def parse_backup(data: Any, source: str = "backup") -> FinanceBook:
    """
    Turn a backup document into a book, validating every record.

    Raises:
        BackupError: If the document is not a book snapshot
    """
    if not isinstance(data, dict):
        raise BackupError(f"Invalid {source}: expected a mapping, got {type(data).__name__}")
    if not any(name in data for name in COLLECTIONS):
        raise BackupError(f"Invalid {source}: no finance collections found")

    try:
        return FinanceBook.from_dict(data)
    except (KeyError, TypeError, ValueError, ArithmeticError) as e:
        raise BackupError(f"Invalid record in {source}: {e}") from e


class BackupStore(DataStoreMixin):
    """
    DataStore for dated backups of the finance book.

    Files are named backup-YYYY-MM-DD.<ext>; a second backup on the same day
    gets a numeric suffix instead of overwriting the first.
    """

    def __init__(self, backup_dir: Path, backup_format: str = "json"):
        """
        Initialize backup store.

        Args:
            backup_dir: Directory holding backup files (data/backups)
            backup_format: Default format for new backups, "json" or "yaml"
        """
        if backup_format not in ("json", "yaml"):
            raise BackupError(f"Unsupported backup format: {backup_format}")
        self.backup_dir = backup_dir
        self.backup_format = backup_format

    def list_backups(self) -> list[Path]:
        """Backup files, newest first."""
        if not self.backup_dir.exists():
            return []
        files = [p for p in self.backup_dir.glob("backup-*") if p.suffix.lower() in BACKUP_SUFFIXES]
        return sorted(files, key=lambda p: (p.stat().st_mtime, p.name), reverse=True)

    def _next_path(self, fmt: str, today: FinancialDate) -> Path:
        stem = f"backup-{today.to_iso_string()}"
        candidate = self.backup_dir / f"{stem}.{fmt}"
        counter = 2
        while candidate.exists():
            candidate = self.backup_dir / f"{stem}-{counter}.{fmt}"
            counter += 1
        return candidate

    def save(self, data: FinanceBook, backup_format: str | None = None, today: FinancialDate | None = None) -> Path:
        """
        Write a backup of the book.

        Returns:
            Path of the new backup file
        """
        fmt = backup_format or self.backup_format
        if fmt not in ("json", "yaml"):
            raise BackupError(f"Unsupported backup format: {fmt}")

        self.backup_dir.mkdir(parents=True, exist_ok=True)
        path = self._next_path(fmt, today or FinancialDate.today())
        document = {"exported_at": datetime.now().isoformat(timespec="seconds"), **data.to_dict()}

        if fmt == "json":
            write_json(path, document)
        else:
            with open(path, "w", encoding="utf-8") as f:
                yaml.safe_dump(document, f, allow_unicode=True, sort_keys=False)

        logger.info(f"Backup written to {path} ({data.record_count()} records)")
        return path

    def load(self, path: Path | None = None) -> FinanceBook:
        """
        Load a backup as a book; defaults to the newest backup.

        Raises:
            FileNotFoundError: If no backup exists
            BackupError: If the backup is unreadable or invalid
        """
        if path is None:
            backups = self.list_backups()
            if not backups:
                raise FileNotFoundError(f"No backups found in {self.backup_dir}")
            path = backups[0]
        elif not path.exists():
            raise FileNotFoundError(f"Backup not found: {path}")

        return parse_backup(_read_backup_file(path), source=path.name)

    def restore(self, book: FinanceBook, path: Path | None = None) -> FinanceBook:
        """
        Replace the contents of `book` with a backup.

        The backup is fully parsed first; on any error `book` is unchanged.
        """
        restored = self.load(path)
        book.replace_with(restored)
        logger.info(f"Restored {restored.record_count()} records from backup")
        return book

    def exists(self) -> bool:
        return bool(self.list_backups())

    def last_modified(self) -> datetime | None:
        latest = self._get_latest_file(self.list_backups())
        if latest is None:
            return None
        return self._modified_at(latest)

    def item_count(self) -> int | None:
        """Number of backup files."""
        if not self.exists():
            return None
        return len(self.list_backups())

    def size_bytes(self) -> int | None:
        if not self.exists():
            return None
        return self._get_total_size(self.list_backups())

    def summary_text(self) -> str:
        count = self.item_count()
        if count is None:
            return "No backups found"
        return f"Backups: {count} file(s)"
