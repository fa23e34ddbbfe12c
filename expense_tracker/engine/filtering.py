"""
Filter/Sort Engine

One selection primitive serves both the interactive expense list and the
export templates, so the two can't drift apart:

- the list passes a search term, one category (or "All"), optional date
  bounds and the user's sort choice;
- templates pass no search term, a category subset and always sort by
  date ascending.

Stages run in a fixed order (search, category, date from, date to, sort);
only the last stage reorders.

Tie behaviour: Python's sort is stable in both directions, so records
with equal sort keys keep their input order whether the list is sorted
ascending or descending. That makes filtering idempotent.
"""

from datetime import date
from typing import Callable, Iterable, Optional

from expense_tracker.models.expense import (
    ALL_CATEGORIES,
    Category,
    Expense,
    FilterCriteria,
    SortKey,
    SortOrder,
)

SORT_KEYS: dict[SortKey, Callable[[Expense], object]] = {
    SortKey.DATE: lambda e: e.date.isoformat(),
    SortKey.AMOUNT: lambda e: e.amount,
    SortKey.CATEGORY: lambda e: e.category.value,
}


def matches_search(expense: Expense, search: str) -> bool:
    """Case-insensitive substring match on description or category name."""
    needle = search.lower()
    return needle in expense.description.lower() or needle in expense.category.value.lower()


def select_expenses(
    expenses: Iterable[Expense],
    *,
    search: Optional[str] = None,
    categories: Optional[Iterable[Category]] = None,
    date_from: Optional[date] = None,
    date_to: Optional[date] = None,
    sort_by: SortKey = SortKey.DATE,
    sort_order: SortOrder = SortOrder.ASC,
) -> list[Expense]:
    """
    Narrow and sort a list of expenses.

    Args:
        search: Text to look for; None or "" matches everything
        categories: Allowed categories; None means all
        date_from: Inclusive lower date bound
        date_to: Inclusive upper date bound
        sort_by: Sort key (amount numeric, date and category lexicographic)
        sort_order: Direction of the sort

    Returns:
        A new list; the input is not modified
    """
    result = list(expenses)

    if search:
        result = [e for e in result if matches_search(e, search)]

    if categories is not None:
        allowed = set(categories)
        result = [e for e in result if e.category in allowed]

    if date_from is not None:
        result = [e for e in result if e.date >= date_from]

    if date_to is not None:
        result = [e for e in result if e.date <= date_to]

    return sorted(
        result,
        key=SORT_KEYS[SortKey(sort_by)],
        reverse=SortOrder(sort_order) == SortOrder.DESC,
    )


def filter_expenses(expenses: Iterable[Expense], criteria: FilterCriteria) -> list[Expense]:
    """Apply the interactive list filter."""
    categories = None
    if criteria.category != ALL_CATEGORIES:
        categories = [Category(criteria.category)]

    return select_expenses(
        expenses,
        search=criteria.search,
        categories=categories,
        date_from=criteria.date_from,
        date_to=criteria.date_to,
        sort_by=criteria.sort_by,
        sort_order=criteria.sort_order,
    )
