"""
Export and Export Hub Models

Templates, history entries, schedules, share links and cloud service
descriptors. Apart from the templates these are simulated-service records:
they are persisted so the UI can show them, but nothing behind them talks
to a real network service.
"""

from datetime import date, datetime
from decimal import Decimal
from enum import Enum
from typing import Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_serializer, field_validator

from expense_tracker.models.expense import Category, new_id, utc_now


class ExportFormat(str, Enum):
    """
    Output formats.

    PDF is rendered as a self-contained printable HTML document that
    opens the print dialog on load.
    """
    CSV = "csv"
    JSON = "json"
    PDF = "pdf"


FORMAT_EXTENSIONS = {
    ExportFormat.CSV: "csv",
    ExportFormat.JSON: "json",
    ExportFormat.PDF: "html",
}

FORMAT_MEDIA_TYPES = {
    ExportFormat.CSV: "text/csv;charset=utf-8",
    ExportFormat.JSON: "application/json",
    ExportFormat.PDF: "text/html;charset=utf-8",
}


class DateRangeKind(str, Enum):
    ALL = "all"
    THIS_MONTH = "this-month"
    LAST_MONTH = "last-month"
    THIS_YEAR = "this-year"
    LAST_90_DAYS = "last-90-days"


class ExportColumn(str, Enum):
    """Columns a template can include, in display form."""
    DATE = "Date"
    CATEGORY = "Category"
    DESCRIPTION = "Description"
    AMOUNT = "Amount"


DEFAULT_COLUMNS = [
    ExportColumn.DATE,
    ExportColumn.CATEGORY,
    ExportColumn.DESCRIPTION,
    ExportColumn.AMOUNT,
]


class ExportStatus(str, Enum):
    """
    Status of an export history entry.

    Only COMPLETED is produced; FAILED and PENDING are kept so that
    persisted history carrying them still loads.
    """
    COMPLETED = "completed"
    FAILED = "failed"
    PENDING = "pending"


class ScheduleFrequency(str, Enum):
    DAILY = "daily"
    WEEKLY = "weekly"
    MONTHLY = "monthly"


# =============================================================================
# TEMPLATES
# =============================================================================

class ExportTemplate(BaseModel):
    """
    A named, predefined combination of category filter, date range and
    output format used for one-click export.
    """
    model_config = ConfigDict(frozen=True)

    id: str = Field(..., min_length=1)
    name: str = Field(..., min_length=1)
    description: str = ""
    icon: str = "file"
    categories: Union[list[Category], Literal["all"]] = "all"
    date_range: DateRangeKind = DateRangeKind.ALL
    format: ExportFormat = ExportFormat.CSV
    columns: list[ExportColumn] = Field(
        default_factory=lambda: list(DEFAULT_COLUMNS),
        min_length=1,
    )


class DateBounds(BaseModel):
    """Inclusive date bounds; None means unbounded on that side."""

    date_from: Optional[date] = None
    date_to: Optional[date] = None


class ExportOptions(BaseModel):
    """Options chosen in the ad-hoc export dialog."""

    format: ExportFormat = ExportFormat.CSV
    filename: Optional[str] = Field(
        default=None,
        max_length=200,
        description="Name without extension; None means expenses-<today>"
    )
    date_from: Optional[date] = None
    date_to: Optional[date] = None
    categories: list[Category] = Field(
        default_factory=list,
        description="Categories to include; empty means all"
    )

    @field_validator("date_from", "date_to", mode="before")
    @classmethod
    def empty_date_is_none(cls, v):
        if v == "":
            return None
        return v

    @field_validator("filename")
    @classmethod
    def no_path_separators(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return None
        v = v.strip()
        if "/" in v or "\\" in v:
            raise ValueError("Filename cannot contain path separators")
        return v or None


class ExportArtifact(BaseModel):
    """A serialized export ready to be handed to a sink."""

    filename: str
    media_type: str
    content: str
    record_count: int = Field(ge=0)


# =============================================================================
# SIMULATED EXPORT HUB RECORDS
# =============================================================================

class ExportHistoryEntry(BaseModel):
    """One executed export, newest entries first in the history log."""
    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(default_factory=lambda: new_id()[:8])
    timestamp: datetime = Field(default_factory=utc_now)
    destination: str
    template_name: str = Field(..., alias="templateName")
    record_count: int = Field(..., ge=0, alias="recordCount")
    total_amount: Decimal = Field(..., ge=0, alias="totalAmount")
    status: ExportStatus = ExportStatus.COMPLETED

    @field_serializer("total_amount", when_used="json")
    def serialize_total(self, total: Decimal) -> float:
        return float(total)


class ScheduleConfig(BaseModel):
    """Recurring export configuration (simulated; nothing runs it)."""
    model_config = ConfigDict(populate_by_name=True)

    enabled: bool = False
    frequency: ScheduleFrequency = ScheduleFrequency.WEEKLY
    destination: str = "email"
    template: str = "monthly-summary"
    next_run: Optional[date] = Field(default=None, alias="nextRun")


class ShareLink(BaseModel):
    """A simulated, time-limited share URL."""
    model_config = ConfigDict(populate_by_name=True)

    id: str
    url: str
    created_at: datetime = Field(..., alias="createdAt")
    expires_at: datetime = Field(..., alias="expiresAt")
    access_count: int = Field(default=0, ge=0, alias="accessCount")

    def is_expired(self, now: datetime) -> bool:
        return now >= self.expires_at


class CloudService(BaseModel):
    """An export destination shown in the integrations tab."""

    id: str
    name: str
    color: str
    connected: bool = False
    last_sync: Optional[datetime] = None
