"""
Storage Services Package

Provides the abstract storage interface and its blob-backed implementations:
JSON files for local use, a dict for tests.
"""

from expense_tracker.services.storage.interface import (
    ExpenseStorageInterface,
    StorageError,
)
from expense_tracker.services.storage.blob import (
    EXPENSES_KEY,
    HISTORY_KEY,
    SCHEDULE_KEY,
    SERVICES_KEY,
    SHARES_KEY,
    BlobStorage,
)
from expense_tracker.services.storage.memory import InMemoryStorage
from expense_tracker.services.storage.json_file import JsonFileStorage

__all__ = [
    # Interface
    "ExpenseStorageInterface",
    "StorageError",
    # Blob storage
    "BlobStorage",
    "EXPENSES_KEY",
    "HISTORY_KEY",
    "SCHEDULE_KEY",
    "SERVICES_KEY",
    "SHARES_KEY",
    # Implementations
    "InMemoryStorage",
    "JsonFileStorage",
]
