"""Month query package."""

from expense_tracker.queries.monthly import (
    available_months,
    current_month_key,
    filter_by_month,
    month_key,
    parse_month_key,
    sum_by_month,
    summarize_month,
)

__all__ = [
    "available_months",
    "current_month_key",
    "filter_by_month",
    "month_key",
    "parse_month_key",
    "sum_by_month",
    "summarize_month",
]
