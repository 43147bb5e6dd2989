"""
Ledger serialization.

The stored format is a JSON array of objects:

    [{"id": "...", "description": "...", "category": "...",
      "amount": 120.5, "date": "2025-08-03"}, ...]

Field order is irrelevant. Amounts are plain JSON numbers.
"""

import json
from typing import Sequence

from pydantic import TypeAdapter, ValidationError

from expense_tracker.models.expense import Expense
from expense_tracker.services.storage.interface import CorruptDataError


_EXPENSE_LIST = TypeAdapter(list[Expense])


def encode_expenses(expenses: Sequence[Expense]) -> str:
    """Serialize the whole ledger, preserving order."""
    payload = [
        expense.model_dump(mode="json", by_alias=True)
        for expense in expenses
    ]
    return json.dumps(payload, ensure_ascii=False, indent=2)


def decode_expenses(text: str) -> list[Expense]:
    """
    Parse stored text back into expenses.
    
    Blank text is an empty ledger. Anything else that is not a list of
    valid expense objects raises CorruptDataError.
    """
    if not text.strip():
        return []
    
    try:
        raw = json.loads(text)
    except json.JSONDecodeError as e:
        raise CorruptDataError(f"Stored ledger is not valid JSON: {e}") from e
    
    if not isinstance(raw, list):
        raise CorruptDataError(
            f"Stored ledger must be a JSON array, got {type(raw).__name__}"
        )
    
    try:
        return _EXPENSE_LIST.validate_python(raw)
    except ValidationError as e:
        raise CorruptDataError(
            f"Stored ledger has {e.error_count()} invalid field(s): {e}"
        ) from e
