"""
Storage Package

Local persistence for the finance book.

Key Components:
- state_store: the live book as one JSON document, rewritten after each change
- backup: dated JSON/YAML snapshots with validated restore
- base: DataStore protocol and shared file-metadata helpers
"""

from .backup import BackupError, BackupStore, parse_backup
from .base import DataStore, DataStoreMixin
from .state_store import STATE_FILE_NAME, StateStore

__all__ = [
    "STATE_FILE_NAME",
    "BackupError",
    "BackupStore",
    "DataStore",
    "DataStoreMixin",
    "StateStore",
    "parse_backup",
]
