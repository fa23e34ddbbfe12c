"""
Blob-backed storage

Every collection lives under its own key as one JSON document. Concrete
backends only need to read, write and remove a blob; the collection
methods, (de)serialization and the "malformed means empty" rule live here.
"""

from abc import abstractmethod
from typing import Any, Optional, TypeVar

from pydantic import TypeAdapter, ValidationError

from expense_tracker.audit import AuditLogger
from expense_tracker.models.expense import Expense
from expense_tracker.models.export import ExportHistoryEntry, ScheduleConfig, ShareLink
from expense_tracker.services.storage.interface import ExpenseStorageInterface

T = TypeVar("T")

EXPENSES_KEY = "expense-tracker-data"
HISTORY_KEY = "expense-export-history"
SCHEDULE_KEY = "expense-export-schedule"
SERVICES_KEY = "expense-cloud-services"
SHARES_KEY = "expense-export-shares"

_expenses_adapter = TypeAdapter(list[Expense])
_history_adapter = TypeAdapter(list[ExportHistoryEntry])
_schedule_adapter = TypeAdapter(Optional[ScheduleConfig])
_services_adapter = TypeAdapter(dict[str, bool])
_shares_adapter = TypeAdapter(list[ShareLink])


class BlobStorage(ExpenseStorageInterface):
    """
    Storage over a key -> JSON text backend.

    Unreadable blobs (bad JSON or data failing model validation) are
    logged and treated as absent.
    """

    def __init__(self, audit_logger: Optional[AuditLogger] = None):
        self._audit_logger = audit_logger or AuditLogger()

    @abstractmethod
    def _read_blob(self, key: str) -> Optional[str]:
        """Return the raw blob, or None when the key is absent."""
        pass

    @abstractmethod
    def _write_blob(self, key: str, data: str) -> None:
        pass

    @abstractmethod
    def _remove_blob(self, key: str) -> None:
        """Remove the blob; absent keys are ignored."""
        pass

    def _load(self, key: str, adapter: TypeAdapter, default: Any) -> Any:
        raw = self._read_blob(key)
        if not raw:
            return default
        try:
            value = adapter.validate_json(raw)
        except ValidationError as e:
            self._audit_logger.log_storage_read_failed(key, str(e))
            return default
        return default if value is None else value

    def _save(self, key: str, adapter: TypeAdapter, value: Any) -> None:
        data = adapter.dump_json(value, by_alias=True)
        self._write_blob(key, data.decode("utf-8"))

    # -- Expenses -----------------------------------------------------------

    def load_expenses(self) -> list[Expense]:
        return self._load(EXPENSES_KEY, _expenses_adapter, [])

    def save_expenses(self, expenses: list[Expense]) -> None:
        self._save(EXPENSES_KEY, _expenses_adapter, list(expenses))

    # -- Export history ------------------------------------------------------

    def load_history(self) -> list[ExportHistoryEntry]:
        return self._load(HISTORY_KEY, _history_adapter, [])

    def save_history(self, entries: list[ExportHistoryEntry]) -> None:
        self._save(HISTORY_KEY, _history_adapter, list(entries))

    def clear_history(self) -> None:
        self._remove_blob(HISTORY_KEY)

    # -- Schedule ------------------------------------------------------------

    def load_schedule(self) -> Optional[ScheduleConfig]:
        return self._load(SCHEDULE_KEY, _schedule_adapter, None)

    def save_schedule(self, config: ScheduleConfig) -> None:
        self._save(SCHEDULE_KEY, _schedule_adapter, config)

    # -- Service connections -------------------------------------------------

    def load_service_connections(self) -> dict[str, bool]:
        return self._load(SERVICES_KEY, _services_adapter, {})

    def save_service_connections(self, connections: dict[str, bool]) -> None:
        self._save(SERVICES_KEY, _services_adapter, dict(connections))

    # -- Share links ---------------------------------------------------------

    def load_shares(self) -> list[ShareLink]:
        return self._load(SHARES_KEY, _shares_adapter, [])

    def save_shares(self, links: list[ShareLink]) -> None:
        self._save(SHARES_KEY, _shares_adapter, list(links))
