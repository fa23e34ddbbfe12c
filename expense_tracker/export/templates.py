"""
Export Templates

Canned filter + format presets for one-click export, and the date-range
policies they refer to.
"""

from datetime import date, timedelta
from typing import Iterable, Optional

from expense_tracker.engine.filtering import select_expenses
from expense_tracker.models.expense import Category, Expense, SortKey, SortOrder
from expense_tracker.models.export import (
    DateBounds,
    DateRangeKind,
    ExportColumn,
    ExportFormat,
    ExportTemplate,
)


class TemplateNotFoundError(LookupError):
    """No template with the requested id."""

    def __init__(self, template_id: str):
        self.template_id = template_id
        super().__init__(f"Unknown export template: {template_id}")


EXPORT_TEMPLATES: list[ExportTemplate] = [
    ExportTemplate(
        id="tax-report",
        name="Tax Report",
        description="All deductible expenses formatted for tax filing",
        icon="receipt",
        categories="all",
        date_range=DateRangeKind.THIS_YEAR,
        format=ExportFormat.PDF,
    ),
    ExportTemplate(
        id="monthly-summary",
        name="Monthly Summary",
        description="Current month breakdown by category with totals",
        icon="calendar",
        categories="all",
        date_range=DateRangeKind.THIS_MONTH,
        format=ExportFormat.CSV,
    ),
    ExportTemplate(
        id="category-analysis",
        name="Category Analysis",
        description="Deep dive into spending patterns per category",
        icon="chart",
        categories="all",
        date_range=DateRangeKind.LAST_90_DAYS,
        format=ExportFormat.JSON,
    ),
    ExportTemplate(
        id="bills-only",
        name="Bills & Utilities",
        description="Recurring bills and utility payments only",
        icon="bolt",
        categories=[Category.BILLS],
        date_range=DateRangeKind.THIS_YEAR,
        format=ExportFormat.CSV,
        columns=[ExportColumn.DATE, ExportColumn.DESCRIPTION, ExportColumn.AMOUNT],
    ),
]


def get_template(template_id: str) -> ExportTemplate:
    """Look up a built-in template by id."""
    for template in EXPORT_TEMPLATES:
        if template.id == template_id:
            return template
    raise TemplateNotFoundError(template_id)


def resolve_date_range(kind: DateRangeKind, today: date) -> DateBounds:
    """
    Turn a date-range policy into inclusive bounds relative to `today`.

    this-month    first of the month .. today
    last-month    first .. last day of the previous month
    this-year     Jan 1 .. today
    last-90-days  today - 90 days .. today
    all           unbounded
    """
    kind = DateRangeKind(kind)

    if kind == DateRangeKind.THIS_MONTH:
        return DateBounds(date_from=today.replace(day=1), date_to=today)

    if kind == DateRangeKind.LAST_MONTH:
        last_day = today.replace(day=1) - timedelta(days=1)
        return DateBounds(date_from=last_day.replace(day=1), date_to=last_day)

    if kind == DateRangeKind.THIS_YEAR:
        return DateBounds(date_from=date(today.year, 1, 1), date_to=today)

    if kind == DateRangeKind.LAST_90_DAYS:
        return DateBounds(date_from=today - timedelta(days=90), date_to=today)

    return DateBounds()


def apply_template(
    expenses: Iterable[Expense],
    template: ExportTemplate,
    today: Optional[date] = None,
) -> list[Expense]:
    """
    Select the expenses a template exports.

    Date range first, then the category subset, then ascending by date.
    There is no text search and the user's list sort is ignored.
    """
    bounds = resolve_date_range(template.date_range, today or date.today())
    categories = None if template.categories == "all" else template.categories

    return select_expenses(
        expenses,
        categories=categories,
        date_from=bounds.date_from,
        date_to=bounds.date_to,
        sort_by=SortKey.DATE,
        sort_order=SortOrder.ASC,
    )
