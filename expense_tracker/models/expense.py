"""
Core Data Models for Expense Tracker

These models define the strict schemas for all data flowing through the system.
They are designed to:
1. Enforce the expense invariants at runtime (amount bounds, description length)
2. Be serializable to the persisted JSON shape
3. Carry the derived aggregates handed to the rendering layer

DESIGN DECISION: Amounts are Decimal everywhere inside the package.
They are only converted to JSON numbers at the persistence and export
boundaries, so sums never drift the way binary floats do.
"""

from datetime import date, datetime, timezone
from decimal import Decimal
from enum import Enum
from typing import Literal, Optional, Union
from uuid import uuid4

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    field_serializer,
    field_validator,
)

# Field named `date` below would shadow the type inside the class body.
CalendarDate = date

MAX_AMOUNT = Decimal("999999.99")
MAX_DESCRIPTION_LENGTH = 100


def utc_now() -> datetime:
    """Current time as a timezone-aware UTC datetime."""
    return datetime.now(timezone.utc)


def new_id() -> str:
    return str(uuid4())


# =============================================================================
# ENUMS - Finite set of valid values
# =============================================================================

class Category(str, Enum):
    """
    Supported expense categories.

    DESIGN DECISION: The set is closed. Values double as display names
    and are matched by the list search.
    """
    FOOD = "Food"
    TRANSPORT = "Transport"
    BILLS = "Bills"
    ENTERTAINMENT = "Entertainment"
    SHOPPING = "Shopping"
    HEALTH = "Health"
    EDUCATION = "Education"
    OTHER = "Other"


ALL_CATEGORIES = "All"


class SortKey(str, Enum):
    """Fields the expense list can be sorted by."""
    DATE = "date"
    AMOUNT = "amount"
    CATEGORY = "category"


class SortOrder(str, Enum):
    ASC = "asc"
    DESC = "desc"


# =============================================================================
# CORE EXPENSE MODEL
# =============================================================================

class Expense(BaseModel):
    """
    A single recorded spending event.

    `id` and `created_at` are assigned once at creation and never change.
    The persisted form uses the keys id, amount, category, description,
    date and createdAt.
    """
    model_config = ConfigDict(
        str_strip_whitespace=True,
        populate_by_name=True,
    )

    id: str = Field(
        default_factory=new_id,
        min_length=1,
        description="Opaque unique identifier"
    )
    amount: Decimal = Field(
        ...,
        gt=0,
        le=MAX_AMOUNT,
        decimal_places=2,
        description="Amount spent, two-decimal precision"
    )
    category: Category = Field(
        ...,
        description="Expense category"
    )
    description: str = Field(
        ...,
        min_length=1,
        max_length=MAX_DESCRIPTION_LENGTH,
        description="What the money was spent on"
    )
    date: CalendarDate = Field(
        ...,
        description="Calendar date of the expense"
    )
    created_at: datetime = Field(
        default_factory=utc_now,
        alias="createdAt",
        description="When the record was created"
    )

    @field_serializer("amount", when_used="json")
    def serialize_amount(self, amount: Decimal) -> float:
        return float(amount)

    def to_storage_dict(self) -> dict:
        """Convert to the persisted JSON-compatible shape."""
        return self.model_dump(mode="json", by_alias=True)


class ExpenseInput(BaseModel):
    """
    Raw entry-form data.

    All fields are the strings the user typed; nothing is trusted until
    ExpenseValidator has checked it.
    """

    amount: str = ""
    category: str = Category.FOOD.value
    description: str = ""
    date: str = ""


# =============================================================================
# FILTER MODELS
# =============================================================================

class FilterCriteria(BaseModel):
    """
    Interactive list filter state.

    Empty strings coming from form inputs are treated as "not set".
    """

    search: str = ""
    category: Union[Category, Literal["All"]] = ALL_CATEGORIES
    date_from: Optional[CalendarDate] = None
    date_to: Optional[CalendarDate] = None
    sort_by: SortKey = SortKey.DATE
    sort_order: SortOrder = SortOrder.DESC

    @field_validator("date_from", "date_to", mode="before")
    @classmethod
    def empty_date_is_none(cls, v):
        if v == "":
            return None
        return v

    @field_validator("search", mode="before")
    @classmethod
    def none_search_is_empty(cls, v):
        return "" if v is None else v


# =============================================================================
# DERIVED AGGREGATES
# =============================================================================

class CategoryTotal(BaseModel):
    """Sum and count of expenses in one category."""

    category: Category
    total: Decimal
    count: int = Field(ge=0)


class DailyTotal(BaseModel):
    """Spending on a single calendar day."""

    date: CalendarDate
    total: Decimal

    @property
    def label(self) -> str:
        """Short chart label, e.g. 'Jan 5'."""
        return f"{self.date.strftime('%b')} {self.date.day}"


class MonthlyTotal(BaseModel):
    """Spending in one calendar month (month is 'YYYY-MM')."""

    month: str = Field(pattern=r"^\d{4}-\d{2}$")
    total: Decimal

    @property
    def label(self) -> str:
        """Chart label, e.g. 'Jan 2024'."""
        return datetime.strptime(self.month, "%Y-%m").strftime("%b %Y")


class SpendingSummary(BaseModel):
    """Figures shown on the dashboard summary cards."""

    total: Decimal
    count: int
    month_total: Decimal
    month_count: int
    today_total: Decimal
    top_category: Optional[CategoryTotal] = None


# =============================================================================
# VALIDATION MODELS
# =============================================================================

class ValidationIssue(BaseModel):
    """A single validation issue found on the entry form."""

    field: str = Field(
        ...,
        description="Form field with the issue"
    )
    issue_type: str = Field(
        ...,
        description="Type of issue (e.g., 'missing', 'invalid_format', 'too_large')"
    )
    message: str = Field(
        ...,
        description="Human-readable description of the issue"
    )
    severity: str = Field(
        default="error",
        pattern="^(error|warning|info)$",
        description="Issue severity"
    )


class ValidationResult(BaseModel):
    """
    Result of validating one entry form.

    `cleaned` carries the normalized field values when the form is valid.
    """

    validated_at: datetime = Field(
        default_factory=utc_now
    )
    is_valid: bool
    issues: list[ValidationIssue] = Field(
        default_factory=list,
        description="All validation issues found"
    )
    cleaned: Optional[dict] = None

    @property
    def has_errors(self) -> bool:
        """Check if there are any error-level issues."""
        return any(issue.severity == "error" for issue in self.issues)

    @property
    def error_count(self) -> int:
        """Count error-level issues."""
        return sum(1 for issue in self.issues if issue.severity == "error")

    def field_errors(self) -> dict[str, str]:
        """First error message per field, the way the form displays them."""
        errors: dict[str, str] = {}
        for issue in self.issues:
            if issue.severity == "error" and issue.field not in errors:
                errors[issue.field] = issue.message
        return errors
