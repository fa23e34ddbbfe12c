"""
Shared fixtures.

Test strategy:
1. Pure engine functions are tested directly with hand-built expenses
2. Services run against InMemoryStorage with a fixed clock
3. Simulated export delays use a recording no-op sleep (no real waiting)
"""

from datetime import date, datetime, timezone
from decimal import Decimal

import pytest

from expense_tracker.config import AppSettings
from expense_tracker.models.expense import Category, Expense
from expense_tracker.services.storage import InMemoryStorage

FIXED_NOW = datetime(2024, 3, 15, 12, 0, tzinfo=timezone.utc)


def make_expense(
    amount="10.00",
    category=Category.FOOD,
    description="Lunch",
    on=date(2024, 3, 10),
    expense_id=None,
) -> Expense:
    """Build an Expense with sensible defaults."""
    kwargs = dict(
        amount=Decimal(str(amount)),
        category=category,
        description=description,
        date=on,
        created_at=FIXED_NOW,
    )
    if expense_id is not None:
        kwargs["id"] = expense_id
    return Expense(**kwargs)


class RecordingSleep:
    """Async sleep replacement that records requested delays."""

    def __init__(self):
        self.calls: list[float] = []

    async def __call__(self, seconds: float) -> None:
        self.calls.append(seconds)


class RecordingSink:
    """Artifact sink that keeps artifacts in memory."""

    def __init__(self):
        self.artifacts = []

    def __call__(self, artifact) -> None:
        self.artifacts.append(artifact)


@pytest.fixture
def settings() -> AppSettings:
    return AppSettings(_env_file=None, storage_backend="memory")


@pytest.fixture
def storage() -> InMemoryStorage:
    return InMemoryStorage()


@pytest.fixture
def clock():
    return lambda: FIXED_NOW


@pytest.fixture
def sleep() -> RecordingSleep:
    return RecordingSleep()


@pytest.fixture
def sink() -> RecordingSink:
    return RecordingSink()


@pytest.fixture
def sample_expenses() -> list[Expense]:
    return [
        make_expense("12.50", Category.FOOD, "Groceries", date(2024, 1, 5), "e1"),
        make_expense("40", Category.BILLS, "Electricity bill", date(2024, 1, 6), "e2"),
        make_expense("7.25", Category.TRANSPORT, "Bus pass", date(2024, 2, 20), "e3"),
        make_expense("99.99", Category.SHOPPING, "Winter jacket", date(2024, 3, 1), "e4"),
        make_expense("15", Category.FOOD, "Pizza night", date(2024, 3, 14), "e5"),
        make_expense("60", Category.BILLS, "Internet", date(2024, 3, 15), "e6"),
    ]
