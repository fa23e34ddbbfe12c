"""
Audit Models for Expense Tracker

Every mutation of stored data and every export is described by an
AuditEvent and written to the structured log. This provides:
1. Traceability of what changed and when
2. Debugging information when a stored blob turns out to be unreadable
3. A record of simulated exports and shares

DESIGN DECISION: Audit events go to the log only. They are not persisted
next to the expense data, which stays a plain single-collection blob.
"""

from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Any, Optional
from uuid import UUID, uuid4

from pydantic import BaseModel, Field


class AuditEventType(str, Enum):
    """Types of events we audit."""
    # Expense records
    EXPENSE_ADDED = "expense_added"
    EXPENSE_UPDATED = "expense_updated"
    EXPENSE_DELETED = "expense_deleted"
    EXPENSE_REJECTED = "expense_rejected"

    # Exports
    EXPORT_COMPLETED = "export_completed"
    QUICK_EXPORT_COMPLETED = "quick_export_completed"
    HISTORY_CLEARED = "history_cleared"

    # Simulated export hub
    SHARE_CREATED = "share_created"
    SHARE_REVOKED = "share_revoked"
    SCHEDULE_SAVED = "schedule_saved"
    SERVICE_TOGGLED = "service_toggled"

    # Storage
    STORAGE_READ_FAILED = "storage_read_failed"


class AuditSeverity(str, Enum):
    """Severity level for audit events."""
    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


class AuditEvent(BaseModel):
    """
    A single audit event.

    This is the core unit of the activity trail.
    """

    event_id: UUID = Field(
        default_factory=uuid4,
        description="Unique event identifier"
    )
    timestamp: datetime = Field(
        default_factory=lambda: datetime.now().astimezone(),
        description="When the event occurred"
    )

    event_type: AuditEventType
    severity: AuditSeverity = AuditSeverity.INFO

    # What entity is this about?
    entity_type: Optional[str] = Field(
        default=None,
        description="Type of entity (e.g., 'expense', 'export', 'share')"
    )
    entity_id: Optional[str] = None

    description: str = Field(
        ...,
        max_length=500,
        description="Human-readable description of what happened"
    )
    details: dict[str, Any] = Field(default_factory=dict)

    error_message: Optional[str] = None

    def to_log_dict(self) -> dict:
        """
        Convert to a dictionary suitable for structured logging.
        """
        return {
            "event_id": str(self.event_id),
            "timestamp": self.timestamp.isoformat(),
            "event_type": self.event_type.value,
            "severity": self.severity.value,
            "entity_type": self.entity_type,
            "entity_id": self.entity_id,
            "description": self.description,
            "details": self.details,
            "error_message": self.error_message,
        }


class AuditEventBuilder:
    """
    Helper class to build audit events with common patterns.

    Usage:
        event = AuditEventBuilder.expense_added(expense_id, "Food", amount)
        event = AuditEventBuilder.share_revoked(link_id)
    """

    @staticmethod
    def expense_added(expense_id: str, category: str, amount: Decimal) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.EXPENSE_ADDED,
            entity_type="expense",
            entity_id=expense_id,
            description=f"Expense added: {category} {amount}",
            details={"category": category, "amount": str(amount)},
        )

    @staticmethod
    def expense_updated(expense_id: str, changed_fields: list[str]) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.EXPENSE_UPDATED,
            entity_type="expense",
            entity_id=expense_id,
            description=f"Expense updated ({len(changed_fields)} fields changed)",
            details={"changed_fields": changed_fields},
        )

    @staticmethod
    def expense_deleted(expense_id: str) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.EXPENSE_DELETED,
            entity_type="expense",
            entity_id=expense_id,
            description="Expense deleted",
        )

    @staticmethod
    def expense_rejected(issues: list[dict]) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.EXPENSE_REJECTED,
            severity=AuditSeverity.WARNING,
            entity_type="expense",
            description=f"Expense form rejected with {len(issues)} issues",
            details={"issues": issues},
        )

    @staticmethod
    def export_completed(
        entry_id: str,
        template_name: str,
        destination: str,
        record_count: int,
        total_amount: Decimal,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.EXPORT_COMPLETED,
            entity_type="export",
            entity_id=entry_id,
            description=f"Export '{template_name}' sent to {destination}",
            details={
                "template_name": template_name,
                "destination": destination,
                "record_count": record_count,
                "total_amount": str(total_amount),
            },
        )

    @staticmethod
    def quick_export_completed(filename: str, export_format: str, record_count: int) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.QUICK_EXPORT_COMPLETED,
            entity_type="export",
            description=f"Exported {record_count} records to {filename}",
            details={"filename": filename, "format": export_format, "record_count": record_count},
        )

    @staticmethod
    def history_cleared() -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.HISTORY_CLEARED,
            entity_type="history",
            description="Export history cleared",
        )

    @staticmethod
    def share_created(link_id: str, expires_at: datetime) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.SHARE_CREATED,
            entity_type="share",
            entity_id=link_id,
            description="Share link created",
            details={"expires_at": expires_at.isoformat()},
        )

    @staticmethod
    def share_revoked(link_id: str) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.SHARE_REVOKED,
            entity_type="share",
            entity_id=link_id,
            description="Share link revoked",
        )

    @staticmethod
    def schedule_saved(enabled: bool, frequency: str, destination: str) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.SCHEDULE_SAVED,
            entity_type="schedule",
            description=f"Export schedule saved ({'on' if enabled else 'off'}, {frequency})",
            details={"enabled": enabled, "frequency": frequency, "destination": destination},
        )

    @staticmethod
    def service_toggled(service_id: str, connected: bool) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.SERVICE_TOGGLED,
            entity_type="service",
            entity_id=service_id,
            description=f"{service_id} {'connected' if connected else 'disconnected'}",
            details={"connected": connected},
        )

    @staticmethod
    def storage_read_failed(key: str, error_message: str) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.STORAGE_READ_FAILED,
            severity=AuditSeverity.WARNING,
            entity_type="blob",
            entity_id=key,
            description=f"Stored data under '{key}' is unreadable; treating it as empty",
            error_message=error_message,
        )
