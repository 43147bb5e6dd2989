"""Validation package."""

from expense_tracker.validation.validator import (
    ExpenseValidationError,
    ExpenseValidator,
    normalize_category,
    parse_amount,
    parse_expense_date,
)

__all__ = [
    "ExpenseValidationError",
    "ExpenseValidator",
    "normalize_category",
    "parse_amount",
    "parse_expense_date",
]
