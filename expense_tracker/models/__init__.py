"""
Data Models Package

This package contains all Pydantic models used in the Expense Tracker.
All data flowing through the system must conform to these schemas.
"""

from expense_tracker.models.expense import (
    ALL_CATEGORIES,
    MAX_AMOUNT,
    MAX_DESCRIPTION_LENGTH,
    Category,
    CategoryTotal,
    DailyTotal,
    Expense,
    ExpenseInput,
    FilterCriteria,
    MonthlyTotal,
    SortKey,
    SortOrder,
    SpendingSummary,
    ValidationIssue,
    ValidationResult,
)
from expense_tracker.models.export import (
    DEFAULT_COLUMNS,
    CloudService,
    DateBounds,
    DateRangeKind,
    ExportArtifact,
    ExportColumn,
    ExportFormat,
    ExportHistoryEntry,
    ExportOptions,
    ExportStatus,
    ExportTemplate,
    ScheduleConfig,
    ScheduleFrequency,
    ShareLink,
)
from expense_tracker.models.audit import (
    AuditEvent,
    AuditEventBuilder,
    AuditEventType,
    AuditSeverity,
)

__all__ = [
    # Expense models
    "ALL_CATEGORIES",
    "MAX_AMOUNT",
    "MAX_DESCRIPTION_LENGTH",
    "Category",
    "CategoryTotal",
    "DailyTotal",
    "Expense",
    "ExpenseInput",
    "FilterCriteria",
    "MonthlyTotal",
    "SortKey",
    "SortOrder",
    "SpendingSummary",
    "ValidationIssue",
    "ValidationResult",
    # Export models
    "DEFAULT_COLUMNS",
    "CloudService",
    "DateBounds",
    "DateRangeKind",
    "ExportArtifact",
    "ExportColumn",
    "ExportFormat",
    "ExportHistoryEntry",
    "ExportOptions",
    "ExportStatus",
    "ExportTemplate",
    "ScheduleConfig",
    "ScheduleFrequency",
    "ShareLink",
    # Audit models
    "AuditEvent",
    "AuditEventBuilder",
    "AuditEventType",
    "AuditSeverity",
]
