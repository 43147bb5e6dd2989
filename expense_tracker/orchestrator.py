"""
Main Orchestrator for Expense Tracker

This module ties the components together:
1. Storage slot chosen by configuration
2. Audit logger
3. Ledger store (loaded on construction)

and defines the entry flow the UI calls when the form is submitted
or a row is deleted.

DESIGN DECISION: The UI never catches validation exceptions itself.
The flow turns a rejection into (None, message) so the page only has
to display the message.
"""

from datetime import date
from typing import Optional

import structlog

from expense_tracker.audit import AuditLogger
from expense_tracker.config import Settings, StorageBackend, StorageSettings, get_settings
from expense_tracker.ledger import LedgerStore
from expense_tracker.models.expense import Expense, MonthSummary
from expense_tracker.queries import current_month_key, parse_month_key
from expense_tracker.services.storage import (
    DurableSlotInterface,
    InMemorySlot,
    JsonFileSlot,
)
from expense_tracker.validation import ExpenseValidationError, ExpenseValidator


logger = structlog.get_logger(__name__)


class ExpenseEntryFlow:
    """
    What the page can do with the ledger.
    
    Flow:
    1. Submit → validate raw form input → add (or report why not)
    2. Delete → remove by id
    3. View → summary for the selected month
    """
    
    def __init__(self, store: LedgerStore):
        self._store = store
    
    @property
    def store(self) -> LedgerStore:
        return self._store
    
    def submit(
        self,
        description: Optional[str],
        amount: object,
        occurred_on: object,
        category: Optional[str] = None,
        today: Optional[date] = None,
    ) -> tuple[Optional[Expense], str]:
        """
        Add an expense from raw form input.
        
        Returns:
            (expense, message). expense is None when rejected and
            message holds the reason; otherwise message is a short
            confirmation, with any warnings appended.
        """
        try:
            expense, result = self._store.add_with_result(
                description=description,
                amount=amount,
                occurred_on=occurred_on,
                category=category,
                today=today,
            )
        except ExpenseValidationError as e:
            return None, str(e)

        message = f"Added: {expense.description}"
        warnings = [issue.message for issue in result.issues if issue.severity == "warning"]
        if warnings:
            message += " (" + "; ".join(warnings) + ")"
        return expense, message

    def delete(self, expense_id: str) -> bool:
        """Remove an expense; False if it was already gone."""
        return self._store.remove(expense_id)
    
    def view_month(self, month: Optional[str] = None) -> MonthSummary:
        """
        Summary for month (YYYY-MM), defaulting to the current month.
        
        Raises:
            ValueError: If month is malformed
        """
        key = parse_month_key(month) if month else current_month_key()
        return self._store.summarize_month(key)


def build_slot(storage_settings: StorageSettings) -> DurableSlotInterface:
    """Create the durable slot selected by configuration."""
    if storage_settings.backend == StorageBackend.MEMORY:
        logger.info("storage_backend_selected", backend="memory")
        return InMemorySlot()
    
    logger.info(
        "storage_backend_selected",
        backend="json_file",
        data_dir=str(storage_settings.data_dir),
    )
    return JsonFileSlot.from_settings(storage_settings)


def create_ledger(
    settings: Optional[Settings] = None,
    slot: Optional[DurableSlotInterface] = None,
) -> LedgerStore:
    """
    Build a ready-to-use, loaded ledger.
    
    Args:
        settings: Defaults to the cached application settings
        slot: Overrides the configured storage backend (tests)
    """
    settings = settings or get_settings()
    storage_settings = settings.storage
    
    return LedgerStore(
        slot=slot or build_slot(storage_settings),
        slot_key=storage_settings.slot_key,
        validator=ExpenseValidator(settings.app),
        audit_logger=AuditLogger(),
    )


def create_app_components(
    settings: Optional[Settings] = None,
    slot: Optional[DurableSlotInterface] = None,
) -> ExpenseEntryFlow:
    """Everything the Streamlit page needs."""
    return ExpenseEntryFlow(create_ledger(settings=settings, slot=slot))
