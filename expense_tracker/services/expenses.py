"""
Expense Service

Add, update, delete and list expenses over the storage interface.

Every mutation loads the whole collection, changes it and saves it back.
New expenses go to the front so the persisted order is newest first.
"""

from datetime import datetime
from typing import Callable, Optional

from expense_tracker.audit import AuditLogger
from expense_tracker.models.audit import AuditEventBuilder
from expense_tracker.models.expense import (
    Expense,
    ExpenseInput,
    ValidationResult,
    new_id,
    utc_now,
)
from expense_tracker.services.storage import ExpenseStorageInterface
from expense_tracker.validation import ExpenseValidator


class ExpenseValidationError(ValueError):
    """The entry form failed validation; `result` holds the field issues."""

    def __init__(self, result: ValidationResult):
        self.result = result
        fields = ", ".join(result.field_errors()) or "form"
        super().__init__(f"Invalid expense: {fields}")


class ExpenseNotFoundError(LookupError):
    """No expense with the requested id."""

    def __init__(self, expense_id: str):
        self.expense_id = expense_id
        super().__init__(f"Expense not found: {expense_id}")


class ExpenseService:
    """
    Record-level operations on the expense collection.

    The storage, validator, clock and id factory are injected so tests can
    run against an in-memory store with a fixed time.
    """

    def __init__(
        self,
        storage: ExpenseStorageInterface,
        validator: Optional[ExpenseValidator] = None,
        audit_logger: Optional[AuditLogger] = None,
        clock: Callable[[], datetime] = utc_now,
        id_factory: Callable[[], str] = new_id,
    ):
        self._storage = storage
        self._validator = validator or ExpenseValidator()
        self._audit_logger = audit_logger or AuditLogger()
        self._clock = clock
        self._id_factory = id_factory

    def _validated(self, form: ExpenseInput) -> dict:
        result = self._validator.validate(form)
        if not result.is_valid:
            self._audit_logger.log(AuditEventBuilder.expense_rejected(
                [issue.model_dump() for issue in result.issues]
            ))
            raise ExpenseValidationError(result)
        return result.cleaned

    def list(self) -> list[Expense]:
        return self._storage.load_expenses()

    def get(self, expense_id: str) -> Expense:
        for expense in self._storage.load_expenses():
            if expense.id == expense_id:
                return expense
        raise ExpenseNotFoundError(expense_id)

    def add(self, form: ExpenseInput) -> Expense:
        """
        Validate and store a new expense.

        Raises:
            ExpenseValidationError: If the form is invalid
        """
        cleaned = self._validated(form)
        expense = Expense(
            id=self._id_factory(),
            created_at=self._clock(),
            **cleaned,
        )

        self._storage.save_expenses([expense, *self._storage.load_expenses()])
        self._audit_logger.log(AuditEventBuilder.expense_added(
            expense.id, expense.category.value, expense.amount
        ))
        return expense

    def update(self, expense_id: str, form: ExpenseInput) -> Expense:
        """
        Replace every field except id and created_at.

        Raises:
            ExpenseValidationError: If the form is invalid
            ExpenseNotFoundError: If no expense has this id
        """
        cleaned = self._validated(form)
        expenses = self._storage.load_expenses()

        for index, existing in enumerate(expenses):
            if existing.id == expense_id:
                break
        else:
            raise ExpenseNotFoundError(expense_id)

        updated = existing.model_copy(update=cleaned)
        expenses[index] = updated
        self._storage.save_expenses(expenses)

        changed = [name for name in cleaned if getattr(existing, name) != getattr(updated, name)]
        self._audit_logger.log(AuditEventBuilder.expense_updated(expense_id, changed))
        return updated

    def delete(self, expense_id: str) -> bool:
        """Remove an expense. Returns False when the id was not present."""
        expenses = self._storage.load_expenses()
        remaining = [e for e in expenses if e.id != expense_id]
        if len(remaining) == len(expenses):
            return False

        self._storage.save_expenses(remaining)
        self._audit_logger.log(AuditEventBuilder.expense_deleted(expense_id))
        return True
