"""
Cloud service connection toggles.

Connecting a service only flips a stored flag; no credentials are
exchanged and nothing is sent anywhere.
"""

from typing import Optional

from expense_tracker.audit import AuditLogger
from expense_tracker.models.audit import AuditEventBuilder
from expense_tracker.models.export import CloudService
from expense_tracker.services.storage import ExpenseStorageInterface

CLOUD_SERVICES: list[CloudService] = [
    CloudService(id="google-sheets", name="Google Sheets", color="#34a853"),
    CloudService(id="dropbox", name="Dropbox", color="#0061ff"),
    CloudService(id="onedrive", name="OneDrive", color="#0078d4"),
    CloudService(id="notion", name="Notion", color="#000000"),
    CloudService(id="email", name="Email", color="#ea4335", connected=True),
    CloudService(id="slack", name="Slack", color="#4a154b"),
]


class UnknownServiceError(LookupError):
    """Service id is not one of CLOUD_SERVICES."""

    def __init__(self, service_id: str):
        self.service_id = service_id
        super().__init__(f"Unknown cloud service: {service_id}")


class ServiceConnectionService:
    """Stored toggles layered over the built-in service defaults."""

    def __init__(
        self,
        storage: ExpenseStorageInterface,
        audit_logger: Optional[AuditLogger] = None,
    ):
        self._storage = storage
        self._audit_logger = audit_logger or AuditLogger()
        self._defaults = {service.id: service for service in CLOUD_SERVICES}

    def _default(self, service_id: str) -> CloudService:
        try:
            return self._defaults[service_id]
        except KeyError:
            raise UnknownServiceError(service_id) from None

    def list(self) -> list[CloudService]:
        """All services with the user's stored toggles applied."""
        connections = self._storage.load_service_connections()
        return [
            service.model_copy(update={"connected": connections.get(service.id, service.connected)})
            for service in CLOUD_SERVICES
        ]

    def is_connected(self, service_id: str) -> bool:
        default = self._default(service_id)
        return self._storage.load_service_connections().get(service_id, default.connected)

    def set_connected(self, service_id: str, connected: bool) -> None:
        self._default(service_id)
        connections = self._storage.load_service_connections()
        connections[service_id] = connected
        self._storage.save_service_connections(connections)
        self._audit_logger.log(AuditEventBuilder.service_toggled(service_id, connected))

    def toggle(self, service_id: str) -> bool:
        """Flip a service's connection flag and return the new value."""
        connected = not self.is_connected(service_id)
        self.set_connected(service_id, connected)
        return connected
