"""
Share link registry.

Links are simulated: the URL is never served, so creating one does not
let anybody else fetch the data.
"""

import secrets
from datetime import datetime, timedelta
from typing import Callable, Optional

from expense_tracker.audit import AuditLogger
from expense_tracker.models.audit import AuditEventBuilder
from expense_tracker.models.expense import utc_now
from expense_tracker.models.export import ShareLink
from expense_tracker.services.storage import ExpenseStorageInterface


class ShareLinkService:
    def __init__(
        self,
        storage: ExpenseStorageInterface,
        base_url: str = "https://expenses.app/shared",
        expiry_days: int = 7,
        limit: int = 10,
        clock: Callable[[], datetime] = utc_now,
        audit_logger: Optional[AuditLogger] = None,
    ):
        self._storage = storage
        self._base_url = base_url.rstrip("/")
        self._expiry = timedelta(days=expiry_days)
        self._limit = limit
        self._clock = clock
        self._audit_logger = audit_logger or AuditLogger()

    def list(self) -> list[ShareLink]:
        return self._storage.load_shares()

    def create(self) -> ShareLink:
        """Create a link expiring `expiry_days` after creation; newest first, capped."""
        created_at = self._clock()
        link = ShareLink(
            id=secrets.token_hex(4),
            url=f"{self._base_url}/{secrets.token_urlsafe(9)}",
            created_at=created_at,
            expires_at=created_at + self._expiry,
            access_count=0,
        )
        shares = [link, *self._storage.load_shares()][: self._limit]
        self._storage.save_shares(shares)
        self._audit_logger.log(AuditEventBuilder.share_created(link.id, link.expires_at))
        return link

    def revoke(self, link_id: str) -> None:
        """Remove a link by id; unknown ids are a no-op."""
        shares = [s for s in self._storage.load_shares() if s.id != link_id]
        self._storage.save_shares(shares)
        self._audit_logger.log(AuditEventBuilder.share_revoked(link_id))
