"""In-memory storage, used by tests and throwaway sessions."""

from typing import Optional

from expense_tracker.audit import AuditLogger
from expense_tracker.services.storage.blob import BlobStorage


class InMemoryStorage(BlobStorage):
    """Keeps blobs in a dict. `blobs` can be pre-seeded with raw JSON."""

    def __init__(
        self,
        blobs: Optional[dict[str, str]] = None,
        audit_logger: Optional[AuditLogger] = None,
    ):
        super().__init__(audit_logger)
        self.blobs: dict[str, str] = dict(blobs or {})

    def _read_blob(self, key: str) -> Optional[str]:
        return self.blobs.get(key)

    def _write_blob(self, key: str, data: str) -> None:
        self.blobs[key] = data

    def _remove_blob(self, key: str) -> None:
        self.blobs.pop(key, None)
