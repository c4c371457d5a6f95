"""Storage layer for jobledger application."""

from jobledger.storage.base import KeyValueStore
from jobledger.storage.factories import create_sqlite_store
from jobledger.storage.memory import InMemoryKeyValueStore
from jobledger.storage.repository import LedgerRepository, STORAGE_KEY

__all__ = [
    "KeyValueStore",
    "create_sqlite_store",
    "InMemoryKeyValueStore",
    "LedgerRepository",
    "STORAGE_KEY",
]
