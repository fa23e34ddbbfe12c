"""Aggregation and filter/sort engine."""

from expense_tracker.engine.aggregation import (
    category_totals,
    daily_totals,
    monthly_totals,
    spending_summary,
    total_amount,
)
from expense_tracker.engine.filtering import (
    filter_expenses,
    matches_search,
    select_expenses,
)

__all__ = [
    "category_totals",
    "daily_totals",
    "filter_expenses",
    "matches_search",
    "monthly_totals",
    "select_expenses",
    "spending_summary",
    "total_amount",
]
