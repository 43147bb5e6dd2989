"""
Month-scoped queries over the ledger.

DESIGN DECISION: These are pure functions over a sequence of expenses.
They never touch storage, so the monthly list and the monthly total
are always computed from the same snapshot.

Ordering: newest date first. Expenses sharing a date keep the order
they had in the input sequence (Python's sort is stable, including
with reverse=True).
"""

import re
from datetime import date
from decimal import Decimal
from typing import Iterable, Optional, Union

from expense_tracker.models.expense import Expense, MonthSummary


_MONTH_PATTERN = re.compile(r"^(\d{4})-(\d{2})$")


def month_key(value: Union[date, str]) -> str:
    """YYYY-MM of a date, or the first 7 characters of an ISO date string."""
    if isinstance(value, date):
        return value.isoformat()[:7]
    return value[:7]


def current_month_key(today: Optional[date] = None) -> str:
    """Month key for today; the default month shown by the filter."""
    return month_key(today or date.today())


def parse_month_key(text: str) -> str:
    """
    Validate month filter input.
    
    Raises:
        ValueError: If text is not YYYY-MM with a month from 01 to 12
    """
    candidate = (text or "").strip()
    match = _MONTH_PATTERN.match(candidate)
    if not match:
        raise ValueError(f"Month '{candidate}' must look like YYYY-MM")
    if not 1 <= int(match.group(2)) <= 12:
        raise ValueError(f"Month '{candidate}' is not a real month")
    return candidate


def filter_by_month(expenses: Iterable[Expense], month: str) -> list[Expense]:
    """Expenses whose month key equals month, newest date first."""
    matching = [expense for expense in expenses if expense.month_key == month]
    return sorted(matching, key=lambda expense: expense.occurred_on, reverse=True)


def sum_by_month(expenses: Iterable[Expense], month: str) -> Decimal:
    """Total amount spent in month; Decimal('0') when nothing matches."""
    return sum(
        (expense.amount for expense in filter_by_month(expenses, month)),
        Decimal("0"),
    )


def summarize_month(expenses: Iterable[Expense], month: str) -> MonthSummary:
    """
    Filtered list and total for one month, from a single pass over the input.
    
    month must already be a valid key (see parse_month_key); MonthSummary
    rejects anything else.
    """
    filtered = filter_by_month(expenses, month)
    total = sum((expense.amount for expense in filtered), Decimal("0"))
    return MonthSummary(month=month, expenses=filtered, total=total)


def available_months(expenses: Iterable[Expense]) -> list[str]:
    """Distinct month keys present in the ledger, newest first."""
    return sorted({expense.month_key for expense in expenses}, reverse=True)
