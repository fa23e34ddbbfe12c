"""
JSON File Storage Implementation

DESIGN DECISION: Each collection is one `<key>.json` file in the data
directory, the local counterpart of a browser's key-value storage:
1. Users can open and back up their data with any text editor
2. No database setup required
3. Easy to wipe: delete the directory

TRADEOFFS:
- Every save rewrites the whole file (fine for personal use)
- No transactions; a crash mid-write can lose the previous state
- Two processes writing the same directory race, last write wins
"""

from pathlib import Path
from typing import Optional

from expense_tracker.audit import AuditLogger
from expense_tracker.services.storage.blob import BlobStorage
from expense_tracker.services.storage.interface import StorageError


class JsonFileStorage(BlobStorage):
    """Stores each blob as a UTF-8 JSON file under `data_dir`."""

    def __init__(self, data_dir: Path, audit_logger: Optional[AuditLogger] = None):
        super().__init__(audit_logger)
        self._data_dir = Path(data_dir)

    @property
    def data_dir(self) -> Path:
        return self._data_dir

    def _path(self, key: str) -> Path:
        return self._data_dir / f"{key}.json"

    def _read_blob(self, key: str) -> Optional[str]:
        path = self._path(key)
        try:
            return path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return None
        except (OSError, UnicodeDecodeError) as e:
            self._audit_logger.log_storage_read_failed(key, str(e))
            return None

    def _write_blob(self, key: str, data: str) -> None:
        try:
            self._data_dir.mkdir(parents=True, exist_ok=True)
            self._path(key).write_text(data, encoding="utf-8")
        except OSError as e:
            raise StorageError(f"Failed to write {key}: {e}") from e

    def _remove_blob(self, key: str) -> None:
        try:
            self._path(key).unlink(missing_ok=True)
        except OSError as e:
            raise StorageError(f"Failed to remove {key}: {e}") from e
