"""
Entry-Form Validation

DESIGN DECISION: The form is validated as a whole and every problem is
reported as a field-level ValidationIssue, so the UI can show all messages
at once next to the offending inputs.

Checks:
- amount parses as a number, is greater than zero and within the cap
- category is one of the closed set
- description is non-empty after trimming and within the length limit
- date is present and a valid YYYY-MM-DD calendar date

IMPORTANT: Validation normalizes (trims the description, rounds the amount
to cents) but never guesses a replacement for a bad value.
"""

from datetime import datetime
from decimal import Decimal, InvalidOperation
from typing import Optional

from expense_tracker.config import AppSettings, get_settings
from expense_tracker.engine.formatting import format_currency, quantize_amount
from expense_tracker.models.expense import (
    Category,
    ExpenseInput,
    ValidationIssue,
    ValidationResult,
)


class ExpenseValidator:
    """Validates expense entry forms."""

    def __init__(self, settings: Optional[AppSettings] = None):
        """
        Initialize validator.

        Args:
            settings: Limits to validate against. Defaults to the
                      application settings.
        """
        self._settings = settings or get_settings().app

    def _validate_amount(self, raw: str) -> tuple[Optional[Decimal], list[ValidationIssue]]:
        invalid = ValidationIssue(
            field="amount",
            issue_type="invalid_value",
            message="Enter a valid amount greater than 0",
        )
        raw = (raw or "").strip()
        if not raw:
            return None, [invalid.model_copy(update={"issue_type": "missing"})]

        try:
            amount = Decimal(raw)
        except InvalidOperation:
            return None, [invalid.model_copy(update={"issue_type": "invalid_format"})]

        if not amount.is_finite():
            return None, [invalid.model_copy(update={"issue_type": "invalid_format"})]

        amount = quantize_amount(amount)
        if amount <= 0:
            return None, [invalid]

        max_amount = self._settings.max_amount
        if amount > max_amount:
            return None, [ValidationIssue(
                field="amount",
                issue_type="too_large",
                message=f"Amount cannot exceed {format_currency(max_amount, self._settings.currency_symbol)}",
            )]

        return amount, []

    def _validate_category(self, raw: str) -> tuple[Optional[Category], list[ValidationIssue]]:
        try:
            return Category((raw or "").strip()), []
        except ValueError:
            return None, [ValidationIssue(
                field="category",
                issue_type="invalid_value",
                message="Select a valid category",
            )]

    def _validate_description(self, raw: str) -> tuple[Optional[str], list[ValidationIssue]]:
        description = (raw or "").strip()
        if not description:
            return None, [ValidationIssue(
                field="description",
                issue_type="missing",
                message="Description is required",
            )]

        limit = self._settings.max_description_length
        if len(description) > limit:
            return None, [ValidationIssue(
                field="description",
                issue_type="too_long",
                message=f"Description must be under {limit} characters",
            )]

        return description, []

    def _validate_date(self, raw: str):
        raw = (raw or "").strip()
        if not raw:
            return None, [ValidationIssue(
                field="date",
                issue_type="missing",
                message="Date is required",
            )]

        try:
            return datetime.strptime(raw, "%Y-%m-%d").date(), []
        except ValueError:
            return None, [ValidationIssue(
                field="date",
                issue_type="invalid_format",
                message="Enter a valid date",
            )]

    def validate(self, form: ExpenseInput) -> ValidationResult:
        """
        Validate a complete entry form.

        Returns:
            ValidationResult; when valid, `cleaned` holds amount (Decimal),
            category (Category), description (str) and date (date).
        """
        amount, amount_issues = self._validate_amount(form.amount)
        category, category_issues = self._validate_category(form.category)
        description, description_issues = self._validate_description(form.description)
        expense_date, date_issues = self._validate_date(form.date)

        issues = amount_issues + category_issues + description_issues + date_issues
        if issues:
            return ValidationResult(is_valid=False, issues=issues)

        return ValidationResult(
            is_valid=True,
            cleaned={
                "amount": amount,
                "category": category,
                "description": description,
                "date": expense_date,
            },
        )
