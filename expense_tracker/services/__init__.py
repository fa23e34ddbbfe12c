"""Services package."""

from expense_tracker.services.storage import (
    ExpenseStorageInterface,
    InMemoryStorage,
    JsonFileStorage,
    StorageError,
)
from expense_tracker.services.history import ExportHistoryService
from expense_tracker.services.schedule import ScheduleService, compute_next_run
from expense_tracker.services.connections import (
    CLOUD_SERVICES,
    ServiceConnectionService,
    UnknownServiceError,
)
from expense_tracker.services.sharing import ShareLinkService
from expense_tracker.services.expenses import (
    ExpenseNotFoundError,
    ExpenseService,
    ExpenseValidationError,
)

__all__ = [
    # Storage
    "ExpenseStorageInterface",
    "InMemoryStorage",
    "JsonFileStorage",
    "StorageError",
    # Expenses
    "ExpenseNotFoundError",
    "ExpenseService",
    "ExpenseValidationError",
    # Export hub
    "CLOUD_SERVICES",
    "ExportHistoryService",
    "ScheduleService",
    "ServiceConnectionService",
    "ShareLinkService",
    "UnknownServiceError",
    "compute_next_run",
]
