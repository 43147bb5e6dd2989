"""
Core Data Models for Expense Tracker

These models define the strict schemas for all data flowing through the system.
They are designed to:
1. Enforce the record invariants at runtime (positive amount, real date)
2. Provide clear validation error messages
3. Be serializable for storage and logging

DESIGN DECISION: Expense records are frozen. An "edit" is a remove
followed by an add, so a record never changes after creation.
"""

from datetime import date, datetime
from decimal import Decimal
from typing import Optional, Union

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    field_serializer,
    field_validator,
)


DEFAULT_CATEGORY = "General"

# Exclusive upper bound for a single amount
MAX_STORED_AMOUNT = Decimal("1E+15")


def fits_stored_number(amount: Decimal) -> bool:
    """
    True if amount comes back unchanged from the stored JSON number.

    Whole amounts are written as integers, anything else as a float,
    so fractional amounts must survive a float round trip.
    """
    if not amount.is_finite() or abs(amount) >= MAX_STORED_AMOUNT:
        return False
    if amount == amount.to_integral_value():
        return True
    return Decimal(repr(float(amount))) == amount


# =============================================================================
# CORE EXPENSE MODEL
# =============================================================================

class Expense(BaseModel):
    """
    A single recorded expense.
    
    CRITICAL: Expenses are only created by the ledger's add operation,
    which assigns the id. Loading from storage rebuilds them from the
    serialized form.
    
    Serialized field names match the stored format:
    {id, description, category, amount, date}.
    """
    model_config = ConfigDict(
        frozen=True,
        populate_by_name=True,
        str_strip_whitespace=True,
    )
    
    id: str = Field(
        ...,
        min_length=1,
        description="Opaque unique identifier"
    )
    description: str = Field(
        ...,
        min_length=1,
        max_length=200,
        description="What the money was spent on"
    )
    category: str = Field(
        default=DEFAULT_CATEGORY,
        max_length=100,
        description="Free-text category"
    )
    amount: Decimal = Field(
        ...,
        gt=0,
        description="Amount spent, always positive"
    )
    occurred_on: date = Field(
        ...,
        alias="date",
        description="Calendar date of the expense"
    )
    
    @field_validator('category', mode='before')
    @classmethod
    def default_blank_category(cls, v: Optional[str]) -> str:
        """Older stored rows may carry an empty category."""
        if v is None or (isinstance(v, str) and not v.strip()):
            return DEFAULT_CATEGORY
        return v
    
    @field_validator('amount', mode='before')
    @classmethod
    def float_to_decimal(cls, v: object) -> object:
        """Stored amounts are JSON numbers; go through repr to avoid binary noise."""
        if isinstance(v, bool):
            raise ValueError("Amount must be a number")
        if isinstance(v, float):
            return Decimal(repr(v))
        return v

    @field_validator('amount')
    @classmethod
    def amount_fits_storage(cls, v: Decimal) -> Decimal:
        if not fits_stored_number(v):
            raise ValueError("Amount is too large or too precise to store")
        return v

    @field_validator('occurred_on', mode='before')
    @classmethod
    def reject_datetimes(cls, v: object) -> object:
        """A timestamp is not a calendar date; keep only the date part."""
        if isinstance(v, datetime):
            return v.date()
        return v
    
    @field_serializer('amount', when_used='json')
    def amount_as_number(self, v: Decimal) -> Union[float, int]:
        """The stored format keeps amounts as plain numbers."""
        if v == v.to_integral_value():
            return int(v)
        return float(v)
    
    @property
    def month_key(self) -> str:
        """YYYY-MM of the expense date."""
        return self.occurred_on.isoformat()[:7]
    
    def to_log_dict(self) -> dict:
        """
        Convert to a dictionary suitable for structured logging.
        """
        return {
            "expense_id": self.id,
            "description": self.description,
            "category": self.category,
            "amount": str(self.amount),
            "date": self.occurred_on.isoformat(),
        }


# =============================================================================
# VALIDATION MODELS
# =============================================================================

class ValidationIssue(BaseModel):
    """A single validation issue found."""
    
    field: str = Field(
        ...,
        description="Field with the issue"
    )
    issue_type: str = Field(
        ...,
        description="Type of issue (e.g., 'missing', 'invalid_format', 'invalid_value')"
    )
    message: str = Field(
        ...,
        description="Human-readable description of the issue"
    )
    severity: str = Field(
        ...,
        pattern="^(error|warning|info)$",
        description="Issue severity"
    )
    suggested_fix: Optional[str] = Field(
        default=None,
        description="Suggested fix if available"
    )


class ValidationResult(BaseModel):
    """
    Result of validating raw expense input.
    
    When is_valid is True the normalized fields are filled in and
    ready to become an Expense.
    """
    
    is_valid: bool = Field(
        ...,
        description="Overall validation result"
    )
    issues: list[ValidationIssue] = Field(
        default_factory=list,
        description="All validation issues found"
    )
    
    # Normalized values (only set when the matching field passed)
    description: Optional[str] = None
    category: Optional[str] = None
    amount: Optional[Decimal] = None
    occurred_on: Optional[date] = None
    
    @property
    def has_errors(self) -> bool:
        """Check if there are any error-level issues."""
        return any(issue.severity == "error" for issue in self.issues)
    
    @property
    def error_count(self) -> int:
        """Count error-level issues."""
        return sum(1 for issue in self.issues if issue.severity == "error")
    
    @property
    def message(self) -> str:
        """First error message, the one shown next to the form."""
        for issue in self.issues:
            if issue.severity == "error":
                return issue.message
        return ""


# =============================================================================
# QUERY MODELS
# =============================================================================

class MonthSummary(BaseModel):
    """
    Everything the monthly view needs in one object.
    
    expenses is already filtered to the month and sorted newest first.
    """
    
    month: str = Field(
        ...,
        pattern=r"^\d{4}-\d{2}$",
        description="Month key (YYYY-MM)"
    )
    expenses: list[Expense] = Field(default_factory=list)
    total: Decimal = Field(
        default=Decimal("0"),
        ge=0,
    )
    
    @property
    def count(self) -> int:
        return len(self.expenses)
    
    @property
    def is_empty(self) -> bool:
        return not self.expenses
