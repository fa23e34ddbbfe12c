"""Money and date formatting.

Centralized so summaries, serializers and the printable document use
identical rounding and display rules.
"""

from datetime import date
from decimal import ROUND_HALF_UP, Decimal

CENT = Decimal("0.01")


def quantize_amount(value) -> Decimal:
    """Round to whole cents (half up)."""
    return Decimal(str(value)).quantize(CENT, rounding=ROUND_HALF_UP)


def format_amount(value) -> str:
    """Plain two-decimal amount, no thousands separators: '1234.50'."""
    return f"{quantize_amount(value):f}"


def format_currency(value, symbol: str = "$") -> str:
    """Display amount with symbol and thousands separators: '$1,234.50'."""
    amount = quantize_amount(value)
    sign = "-" if amount < 0 else ""
    return f"{sign}{symbol}{abs(amount):,.2f}"


def format_long_date(value: date) -> str:
    """Long date, e.g. 'January 5, 2024'."""
    return f"{value.strftime('%B')} {value.day}, {value.year}"


def pluralize(count: int, word: str) -> str:
    return f"{count} {word}{'' if count == 1 else 's'}"
