"""
Abstract Storage Interface

DESIGN DECISION: We define an abstract interface for storage operations.
This allows us to:
1. Keep every collection in a single key-value blob
2. Use in-memory storage for testing
3. Keep business logic decoupled from where the blobs live

The interface is intentionally simple - every collection is loaded and
saved whole. There is no indexing and no partial write.
"""

from abc import ABC, abstractmethod
from typing import Optional

from expense_tracker.models.expense import Expense
from expense_tracker.models.export import ExportHistoryEntry, ScheduleConfig, ShareLink


class ExpenseStorageInterface(ABC):
    """
    Abstract interface for the expense collection and the export hub
    collections.

    Load methods never raise on absent or malformed data; they return an
    empty collection (or None) instead.
    """

    # -- Expenses -----------------------------------------------------------

    @abstractmethod
    def load_expenses(self) -> list[Expense]:
        """
        Load the full expense collection.

        Returns:
            Expenses in persisted order (newest created first)
        """
        pass

    @abstractmethod
    def save_expenses(self, expenses: list[Expense]) -> None:
        """
        Overwrite the full expense collection.

        Raises:
            StorageError: If the backend cannot write
        """
        pass

    # -- Export history ------------------------------------------------------

    @abstractmethod
    def load_history(self) -> list[ExportHistoryEntry]:
        """Load the export history (newest first)."""
        pass

    @abstractmethod
    def save_history(self, entries: list[ExportHistoryEntry]) -> None:
        pass

    @abstractmethod
    def clear_history(self) -> None:
        pass

    # -- Schedule ------------------------------------------------------------

    @abstractmethod
    def load_schedule(self) -> Optional[ScheduleConfig]:
        """Load the schedule config, or None when none was saved."""
        pass

    @abstractmethod
    def save_schedule(self, config: ScheduleConfig) -> None:
        pass

    # -- Service connections -------------------------------------------------

    @abstractmethod
    def load_service_connections(self) -> dict[str, bool]:
        """Load the service-id -> connected map of user toggles."""
        pass

    @abstractmethod
    def save_service_connections(self, connections: dict[str, bool]) -> None:
        pass

    # -- Share links ---------------------------------------------------------

    @abstractmethod
    def load_shares(self) -> list[ShareLink]:
        """Load share links (newest first)."""
        pass

    @abstractmethod
    def save_shares(self, links: list[ShareLink]) -> None:
        pass


class StorageError(Exception):
    """Base exception for storage operations."""
    pass
