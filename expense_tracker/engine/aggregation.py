"""
Aggregation Engine

Pure functions turning a flat list of expenses into the series the
dashboard renders: category totals, a zero-filled daily series, monthly
totals and the summary-card figures.

DESIGN DECISION: Every sum is a Decimal sum, so totals are exact to the
cent no matter how many records are added.
"""

from datetime import date, timedelta
from decimal import Decimal
from typing import Iterable, Optional

from expense_tracker.models.expense import (
    Category,
    CategoryTotal,
    DailyTotal,
    Expense,
    MonthlyTotal,
    SpendingSummary,
)

ZERO = Decimal("0")


def total_amount(expenses: Iterable[Expense]) -> Decimal:
    """Sum of all amounts."""
    return sum((e.amount for e in expenses), ZERO)


def category_totals(expenses: Iterable[Expense]) -> list[CategoryTotal]:
    """
    Group by category, summing amounts and counting records.

    Sorted by total, highest first. Ties keep the order in which the
    categories were first encountered. Categories without expenses are
    left out.
    """
    totals: dict[Category, Decimal] = {}
    counts: dict[Category, int] = {}

    for expense in expenses:
        totals[expense.category] = totals.get(expense.category, ZERO) + expense.amount
        counts[expense.category] = counts.get(expense.category, 0) + 1

    ordered = sorted(totals.items(), key=lambda item: item[1], reverse=True)
    return [
        CategoryTotal(category=category, total=total, count=counts[category])
        for category, total in ordered
    ]


def daily_totals(
    expenses: Iterable[Expense],
    window_days: int = 30,
    today: Optional[date] = None,
) -> list[DailyTotal]:
    """
    Spending per day for `today - window_days` .. `today`.

    Always returns exactly window_days + 1 entries in ascending order;
    days without expenses are zero. Expenses outside the window are
    ignored.
    """
    if window_days < 0:
        raise ValueError("window_days cannot be negative")

    today = today or date.today()
    start = today - timedelta(days=window_days)

    by_day: dict[date, Decimal] = {}
    for expense in expenses:
        if start <= expense.date <= today:
            by_day[expense.date] = by_day.get(expense.date, ZERO) + expense.amount

    return [
        DailyTotal(date=day, total=by_day.get(day, ZERO))
        for day in (start + timedelta(days=offset) for offset in range(window_days + 1))
    ]


def monthly_totals(expenses: Iterable[Expense]) -> list[MonthlyTotal]:
    """Spending per calendar month, oldest month first."""
    by_month: dict[str, Decimal] = {}
    for expense in expenses:
        month = expense.date.strftime("%Y-%m")
        by_month[month] = by_month.get(month, ZERO) + expense.amount

    return [
        MonthlyTotal(month=month, total=total)
        for month, total in sorted(by_month.items())
    ]


def spending_summary(
    expenses: Iterable[Expense],
    today: Optional[date] = None,
) -> SpendingSummary:
    """Overall, this-month and today figures plus the top category."""
    expenses = list(expenses)
    today = today or date.today()
    month_start = today.replace(day=1)

    month_expenses = [e for e in expenses if e.date >= month_start]
    today_expenses = [e for e in expenses if e.date == today]
    by_category = category_totals(expenses)

    return SpendingSummary(
        total=total_amount(expenses),
        count=len(expenses),
        month_total=total_amount(month_expenses),
        month_count=len(month_expenses),
        today_total=total_amount(today_expenses),
        top_category=by_category[0] if by_category else None,
    )
