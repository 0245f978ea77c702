#!/usr/bin/env python3
"""
Book State Store

Persists the whole FinanceBook as a single JSON document. Every mutation is
followed by a full rewrite of the file.
"""

import json
import logging
from datetime import datetime
from pathlib import Path

from ..core.json_utils import read_json, write_json
from ..ledger.book import COLLECTIONS, FinanceBook
from .base import DataStoreMixin

logger = logging.getLogger(__name__)

STATE_FILE_NAME = "finance-data.json"


class StateStore(DataStoreMixin):
    """
    DataStore for the live finance book.

    A missing file loads as a fresh book with seed wallets and categories.
    """

    def __init__(self, state_file: Path):
        """
        Initialize state store.

        Args:
            state_file: Path of the JSON state file (data/finance-data.json)
        """
        self.state_file = state_file

    def exists(self) -> bool:
        return self.state_file.exists()

    def load(self) -> FinanceBook:
        """
        Load the book, or a fresh default book when no state is stored.

        Raises:
            ValueError: If the file is not valid JSON or not a book snapshot
        """
        if not self.exists():
            logger.debug(f"No state at {self.state_file}; starting a fresh book")
            return FinanceBook()

        try:
            data = read_json(self.state_file)
        except json.JSONDecodeError as e:
            raise ValueError(f"Corrupted state file {self.state_file}: {e}") from e

        if not isinstance(data, dict):
            raise ValueError(f"Invalid state format: expected dict, got {type(data).__name__}")

        try:
            return FinanceBook.from_dict(data)
        except (KeyError, TypeError, ValueError, ArithmeticError) as e:
            raise ValueError(f"Invalid record in {self.state_file}: {e}") from e

    def save(self, data: FinanceBook) -> None:
        write_json(self.state_file, data.to_dict())
        logger.debug(f"Saved {data.record_count()} records to {self.state_file}")

    def clear(self) -> None:
        """Delete the stored state."""
        self.state_file.unlink(missing_ok=True)
        logger.info(f"Removed state file {self.state_file}")

    def last_modified(self) -> datetime | None:
        if not self.exists():
            return None
        return self._modified_at(self.state_file)

    def item_count(self) -> int | None:
        """Number of records across all collections."""
        if not self.exists():
            return None

        try:
            data = read_json(self.state_file)
        except json.JSONDecodeError:
            return 0
        if not isinstance(data, dict):
            return 0
        return sum(len(data.get(name) or []) for name in COLLECTIONS)

    def size_bytes(self) -> int | None:
        if not self.exists():
            return None
        return self.state_file.stat().st_size

    def summary_text(self) -> str:
        count = self.item_count()
        if count is None:
            return "No saved data (defaults in use)"
        return f"Finance data: {count} records"
