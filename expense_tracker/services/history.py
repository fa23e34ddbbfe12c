"""Export history log: newest entries first, capped."""

from datetime import datetime
from decimal import Decimal
from typing import Callable, Optional

from expense_tracker.audit import AuditLogger
from expense_tracker.models.audit import AuditEventBuilder
from expense_tracker.models.expense import utc_now
from expense_tracker.models.export import ExportHistoryEntry, ExportStatus
from expense_tracker.services.storage import ExpenseStorageInterface


class ExportHistoryService:
    """Append-and-read access to the export history blob."""

    def __init__(
        self,
        storage: ExpenseStorageInterface,
        limit: int = 50,
        clock: Callable[[], datetime] = utc_now,
        audit_logger: Optional[AuditLogger] = None,
    ):
        self._storage = storage
        self._limit = limit
        self._clock = clock
        self._audit_logger = audit_logger or AuditLogger()

    def list(self) -> list[ExportHistoryEntry]:
        return self._storage.load_history()

    def add(
        self,
        destination: str,
        template_name: str,
        record_count: int,
        total_amount: Decimal,
        status: ExportStatus = ExportStatus.COMPLETED,
    ) -> ExportHistoryEntry:
        """Record an export; assigns id and timestamp and trims to the cap."""
        entry = ExportHistoryEntry(
            timestamp=self._clock(),
            destination=destination,
            template_name=template_name,
            record_count=record_count,
            total_amount=total_amount,
            status=status,
        )
        history = [entry, *self._storage.load_history()][: self._limit]
        self._storage.save_history(history)
        return entry

    def clear(self) -> None:
        self._storage.clear_history()
        self._audit_logger.log(AuditEventBuilder.history_cleared())
