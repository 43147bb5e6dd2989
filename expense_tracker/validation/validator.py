"""
Expense Input Validation

DESIGN DECISION: The form hands us raw input (untrimmed strings,
locale-formatted numbers, date pickers or ISO text). All normalization
and checking happens here, before anything reaches the ledger.

Checks come in two severities:
- ERRORS block the add (empty description, missing date, bad amount)
- WARNINGS are shown but don't block (suspiciously large amount,
  date far in the future)

IMPORTANT: Validation never silently fixes bad input. The only
rewrites are the documented normalizations: trimming, the decimal
separator and the default category.
"""

import re
from datetime import date, datetime, timedelta
from decimal import Decimal, InvalidOperation
from typing import Optional

from expense_tracker.config import AppSettings, get_settings
from expense_tracker.models.expense import (
    DEFAULT_CATEGORY,
    fits_stored_number,
    ValidationIssue,
    ValidationResult,
)


_DATE_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}$")
_NUMBER_PATTERN = re.compile(r"^[+-]?(\d+(\.\d*)?|\.\d+)$")

MAX_DESCRIPTION_LENGTH = 200
MAX_CATEGORY_LENGTH = 100


class ExpenseValidationError(ValueError):
    """
    Raised when raw input cannot become an expense.
    
    str(error) is the first human-readable reason; the full
    ValidationResult is available as error.result.
    """
    
    def __init__(self, result: ValidationResult):
        self.result = result
        super().__init__(result.message or "Invalid expense")


def _normalize_separators(text: str) -> str:
    """
    Turn '1.500,75', '1,500.75' and '12,5' into Python decimal notation.
    
    The right-most of ',' and '.' is the decimal separator when both
    appear; a lone comma is always decimal.
    """
    has_comma = "," in text
    has_dot = "." in text
    
    if has_comma and has_dot:
        if text.rfind(",") > text.rfind("."):
            return text.replace(".", "").replace(",", ".")
        return text.replace(",", "")
    
    if has_comma:
        if text.count(",") > 1:
            raise ValueError(f"'{text}' has more than one decimal separator")
        return text.replace(",", ".")
    
    return text


def parse_amount(value: object) -> Decimal:
    """
    Parse an amount typed by a user.
    
    Accepts Decimal, int, float, or text using '.' or ',' as decimal
    separator. Does not check the sign; that's the validator's job.
    
    Raises:
        ValueError: If the value is missing or not a finite number
    """
    if value is None:
        raise ValueError("Amount is required")
    if isinstance(value, bool):
        raise ValueError("Amount must be a number")
    
    if isinstance(value, Decimal):
        amount = value
    elif isinstance(value, int):
        amount = Decimal(value)
    elif isinstance(value, float):
        amount = Decimal(repr(value))
    elif isinstance(value, str):
        text = value.strip()
        if not text:
            raise ValueError("Amount is required")
        normalized = _normalize_separators(text)
        if not _NUMBER_PATTERN.match(normalized):
            raise ValueError(f"'{text}' is not a number")
        try:
            amount = Decimal(normalized)
        except InvalidOperation as e:
            raise ValueError(f"'{text}' is not a number") from e
    else:
        raise ValueError(f"Unsupported amount type: {type(value).__name__}")
    
    if not amount.is_finite():
        raise ValueError("Amount must be a finite number")
    
    return amount


def parse_expense_date(value: object) -> date:
    """
    Parse a YYYY-MM-DD string or date object into a calendar date.
    
    Raises:
        ValueError: If the value is missing, malformed or not a real date
    """
    if value is None or (isinstance(value, str) and not value.strip()):
        raise ValueError("Date is required")
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        text = value.strip()
        if not _DATE_PATTERN.match(text):
            raise ValueError(f"Date '{text}' must look like YYYY-MM-DD")
        try:
            return date.fromisoformat(text)
        except ValueError as e:
            raise ValueError(f"Date '{text}' is not a real calendar date") from e
    raise ValueError(f"Unsupported date type: {type(value).__name__}")


def normalize_category(value: Optional[str]) -> str:
    """Trim the category, falling back to the default for blank input."""
    if value is None:
        return DEFAULT_CATEGORY
    text = str(value).strip()
    return text or DEFAULT_CATEGORY


class ExpenseValidator:
    """
    Validates and normalizes raw expense input.
    
    Errors are reported in form order: description, date, amount.
    """
    
    def __init__(self, settings: Optional[AppSettings] = None):
        self._settings = settings or get_settings().app
    
    def _check_description(
        self,
        description: Optional[str],
    ) -> tuple[Optional[str], list[ValidationIssue]]:
        text = (description or "").strip()
        if not text:
            return None, [ValidationIssue(
                field="description",
                issue_type="missing",
                message="Description is required.",
                severity="error",
                suggested_fix="Say what the money was spent on",
            )]
        if len(text) > MAX_DESCRIPTION_LENGTH:
            return None, [ValidationIssue(
                field="description",
                issue_type="too_long",
                message=f"Description must be at most {MAX_DESCRIPTION_LENGTH} characters.",
                severity="error",
            )]
        return text, []
    
    def _check_category(
        self,
        category: Optional[str],
    ) -> tuple[Optional[str], list[ValidationIssue]]:
        text = normalize_category(category)
        if len(text) > MAX_CATEGORY_LENGTH:
            return None, [ValidationIssue(
                field="category",
                issue_type="too_long",
                message=f"Category must be at most {MAX_CATEGORY_LENGTH} characters.",
                severity="error",
            )]
        return text, []
    
    def _check_date(
        self,
        occurred_on: object,
        today: date,
    ) -> tuple[Optional[date], list[ValidationIssue]]:
        try:
            parsed = parse_expense_date(occurred_on)
        except ValueError as e:
            missing = occurred_on is None or (
                isinstance(occurred_on, str) and not occurred_on.strip()
            )
            return None, [ValidationIssue(
                field="date",
                issue_type="missing" if missing else "invalid_format",
                message="Date is required." if missing else f"{e}.",
                severity="error",
                suggested_fix="Pick the day the expense happened",
            )]
        
        issues = []
        max_future_date = today + timedelta(days=self._settings.future_date_tolerance_days)
        if parsed > max_future_date:
            issues.append(ValidationIssue(
                field="date",
                issue_type="future_date",
                message=f"Date ({parsed.isoformat()}) is in the future",
                severity="warning",
                suggested_fix="Please verify the date is correct",
            ))
        return parsed, issues
    
    def _check_amount(
        self,
        amount: object,
    ) -> tuple[Optional[Decimal], list[ValidationIssue]]:
        try:
            parsed = parse_amount(amount)
        except ValueError:
            parsed = None
        
        if parsed is None or parsed <= 0:
            return None, [ValidationIssue(
                field="amount",
                issue_type="invalid_value",
                message="Amount must be greater than zero.",
                severity="error",
                suggested_fix="Type the amount, e.g. 12,50",
            )]
        
        if not fits_stored_number(parsed):
            return None, [ValidationIssue(
                field="amount",
                issue_type="out_of_range",
                message="Amount is too large or has too many decimal places.",
                severity="error",
                suggested_fix="Round the amount to cents",
            )]
        
        issues = []
        if parsed > Decimal(str(self._settings.max_expense_amount)):
            issues.append(ValidationIssue(
                field="amount",
                issue_type="suspicious_value",
                message=f"Amount ({parsed}) is unusually large",
                severity="warning",
                suggested_fix="Check for a misplaced separator",
            ))
        return parsed, issues
    
    def validate(
        self,
        description: Optional[str],
        amount: object,
        occurred_on: object,
        category: Optional[str] = None,
        today: Optional[date] = None,
    ) -> ValidationResult:
        """
        Validate raw input.
        
        Returns a ValidationResult; is_valid is True when there are
        no error-level issues, in which case the normalized fields
        are set.
        """
        today = today or date.today()
        
        clean_description, issues = self._check_description(description)
        clean_date, date_issues = self._check_date(occurred_on, today)
        clean_amount, amount_issues = self._check_amount(amount)
        clean_category, category_issues = self._check_category(category)
        issues = issues + date_issues + amount_issues + category_issues
        
        is_valid = not any(issue.severity == "error" for issue in issues)
        
        if not is_valid:
            return ValidationResult(is_valid=False, issues=issues)
        
        return ValidationResult(
            is_valid=True,
            issues=issues,
            description=clean_description,
            category=clean_category,
            amount=clean_amount,
            occurred_on=clean_date,
        )
    
    def require_valid(
        self,
        description: Optional[str],
        amount: object,
        occurred_on: object,
        category: Optional[str] = None,
        today: Optional[date] = None,
    ) -> ValidationResult:
        """
        Same as validate(), but raises on failure.
        
        Raises:
            ExpenseValidationError: If any error-level issue was found
        """
        result = self.validate(
            description=description,
            amount=amount,
            occurred_on=occurred_on,
            category=category,
            today=today,
        )
        if not result.is_valid:
            raise ExpenseValidationError(result)
        return result
