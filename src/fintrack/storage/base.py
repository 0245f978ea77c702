#!/usr/bin/env python3
"""
DataStore Protocol and shared file-metadata helpers.

Separates persistence of the finance book from the code that mutates it.
Both the live state file and the backup directory expose the same metadata
queries (age, size, record counts) for display in the CLI.
"""

from abc import abstractmethod
from datetime import datetime
from pathlib import Path
from typing import Protocol, TypeVar

T = TypeVar("T")


class DataStore(Protocol[T]):
    """
    Protocol for data persistence and metadata queries.

    Type parameter T is the data type the store loads and saves.
    """

    def exists(self) -> bool:
        """Check if data exists in storage."""
        ...

    def load(self) -> T:
        """
        Load data from storage.

        Raises:
            FileNotFoundError: If data doesn't exist
            ValueError: If data is invalid/corrupted
        """
        ...

    def save(self, data: T) -> None:
        """Save data to storage."""
        ...

    def last_modified(self) -> datetime | None:
        """Timestamp of most recent modification, or None if data doesn't exist."""
        ...

    def age_days(self) -> int | None:
        """Days since last modification, or None if data doesn't exist."""
        ...

    def item_count(self) -> int | None:
        """Count of records in stored data, or None if data doesn't exist."""
        ...

    def size_bytes(self) -> int | None:
        """Total storage size in bytes, or None if data doesn't exist."""
        ...

    def summary_text(self) -> str:
        """Brief human-readable description of the stored data."""
        ...


class DataStoreMixin:
    """
    Common DataStore functionality.

    Subclasses must implement:
    - exists() -> bool
    - last_modified() -> datetime | None
    - item_count() -> int | None
    - size_bytes() -> int | None
    - summary_text() -> str
    """

    @staticmethod
    def _modified_at(path: Path) -> datetime:
        return datetime.fromtimestamp(path.stat().st_mtime)

    @staticmethod
    def _get_latest_file(files: list[Path]) -> Path | None:
        """Most recently modified file from list, or None if the list is empty."""
        if not files:
            return None
        return max(files, key=lambda p: p.stat().st_mtime)

    @staticmethod
    def _get_total_size(files: list[Path]) -> int:
        """Sum of file sizes in bytes."""
        return sum(f.stat().st_size for f in files)

    @abstractmethod
    def exists(self) -> bool: ...

    @abstractmethod
    def last_modified(self) -> datetime | None: ...

    @abstractmethod
    def item_count(self) -> int | None: ...

    @abstractmethod
    def size_bytes(self) -> int | None: ...

    @abstractmethod
    def summary_text(self) -> str: ...

    def age_days(self) -> int | None:
        """
        Get age of data in days since last modification.

        Returns:
            Number of days since last modification, or None if data doesn't exist
        """
        last_mod = self.last_modified()
        if last_mod is None:
            return None
        return (datetime.now() - last_mod).days
