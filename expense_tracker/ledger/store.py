"""
Ledger Store

The authoritative, ordered collection of expenses for a session.

DESIGN DECISION: Persistence timing is explicit.
- load() runs once, from the constructor
- save() runs after every successful add/remove
Nothing else reads or writes the slot.

GUARANTEES:
- ids are unique for the lifetime of the ledger
- every stored expense has a positive amount and a real date
- newest additions come first (prepend)
- storage failures are logged and swallowed; the in-memory ledger
  stays the source of truth until the next successful write

Mutations hold a re-entrant lock around the full read-modify-write,
so a threaded host (Streamlit serves sessions from threads) still
sees one writer at a time.
"""

import threading
from datetime import date
from decimal import Decimal
from typing import Iterator, Optional

import structlog

from expense_tracker.audit import AuditLogger
from expense_tracker.ledger.ids import IdGenerator
from expense_tracker.models.expense import Expense, MonthSummary, ValidationResult
from expense_tracker.queries import filter_by_month, sum_by_month, summarize_month
from expense_tracker.services.storage import (
    DurableSlotInterface,
    StorageError,
    decode_expenses,
    encode_expenses,
)
from expense_tracker.validation import ExpenseValidationError, ExpenseValidator


DEFAULT_SLOT_KEY = "expenses"

logger = structlog.get_logger(__name__)


class LedgerStore:
    """
    Owns the expense sequence and keeps it in sync with a durable slot.
    
    Usage:
        store = LedgerStore(JsonFileSlot(Path("data")))
        expense = store.add("Groceries", "120,50", "2025-08-03", "Food")
        store.remove(expense.id)
        total = store.sum_by_month("2025-08")
    """
    
    def __init__(
        self,
        slot: DurableSlotInterface,
        slot_key: str = DEFAULT_SLOT_KEY,
        id_generator: Optional[IdGenerator] = None,
        validator: Optional[ExpenseValidator] = None,
        audit_logger: Optional[AuditLogger] = None,
    ):
        self._slot = slot
        self._slot_key = slot_key
        self._id_generator = id_generator or IdGenerator()
        self._validator = validator or ExpenseValidator()
        self._audit_logger = audit_logger or AuditLogger()
        self._lock = threading.RLock()
        self._expenses: list[Expense] = []
        # Every id handed out during this ledger's lifetime, removed ones included
        self._issued_ids: set[str] = set()
        
        self.load()
    
    # -------------------------------------------------------------------------
    # Persistence
    # -------------------------------------------------------------------------
    
    def _read_slot(self) -> list[Expense]:
        """Read and decode the slot, falling back to an empty ledger."""
        try:
            text = self._slot.read(self._slot_key)
            if text is None:
                return []
            return decode_expenses(text)
        except StorageError as e:
            logger.warning(
                "ledger_load_failed",
                slot_key=self._slot_key,
                error=str(e),
                error_type=type(e).__name__,
            )
            self._audit_logger.log_storage_read_failed(self._slot_key, str(e))
            return []
        except Exception as e:
            logger.exception("ledger_load_crashed", slot_key=self._slot_key)
            self._audit_logger.log_error(
                error_type=type(e).__name__,
                error_message=str(e),
                details={"operation": "load", "slot_key": self._slot_key},
            )
            return []
    
    def load(self) -> list[Expense]:
        """
        Replace in-memory state with the stored ledger.
        
        Never raises. Absent or unreadable data gives an empty ledger.
        Duplicate ids in stored data keep only their first occurrence.
        
        Returns:
            A copy of the loaded sequence
        """
        loaded = self._read_slot()
        
        unique: list[Expense] = []
        seen: set[str] = set()
        for expense in loaded:
            if expense.id in seen:
                logger.warning(
                    "duplicate_expense_id_dropped",
                    slot_key=self._slot_key,
                    expense_id=expense.id,
                )
                continue
            seen.add(expense.id)
            unique.append(expense)
        
        with self._lock:
            self._expenses = unique
            self._issued_ids |= seen
        
        self._audit_logger.log_ledger_loaded(self._slot_key, len(unique))
        return list(unique)
    
    def save(self) -> bool:
        """
        Write the full sequence to the slot.
        
        Returns False (after logging) if the write failed.
        """
        with self._lock:
            snapshot = list(self._expenses)
        
        try:
            written = self._slot.write(self._slot_key, encode_expenses(snapshot))
        except StorageError as e:
            logger.error(
                "ledger_save_failed",
                slot_key=self._slot_key,
                error=str(e),
                error_type=type(e).__name__,
            )
            self._audit_logger.log_storage_write_failed(self._slot_key, str(e))
            return False
        except Exception as e:
            logger.exception("ledger_save_crashed", slot_key=self._slot_key)
            self._audit_logger.log_error(
                error_type=type(e).__name__,
                error_message=str(e),
                details={"operation": "save", "slot_key": self._slot_key},
            )
            return False
        
        if not written:
            self._audit_logger.log_storage_write_failed(
                self._slot_key, "slot reported an unsuccessful write"
            )
            return False
        
        self._audit_logger.log_ledger_saved(self._slot_key, len(snapshot))
        return True
    
    # -------------------------------------------------------------------------
    # Mutations
    # -------------------------------------------------------------------------
    
    def add(
        self,
        description: Optional[str],
        amount: object,
        occurred_on: object,
        category: Optional[str] = None,
        today: Optional[date] = None,
    ) -> Expense:
        """
        Validate raw input, create an expense and put it first.
        
        Args:
            description: Free text, trimmed; must not be blank
            amount: Positive number; text may use ',' or '.' as decimal separator
            occurred_on: date or 'YYYY-MM-DD'
            category: Optional; blank becomes 'General'
            today: Reference day for the future-date warning
            
        Returns:
            The stored expense

        Raises:
            ExpenseValidationError: If the input is rejected (ledger unchanged)
        """
        expense, _ = self.add_with_result(
            description=description,
            amount=amount,
            occurred_on=occurred_on,
            category=category,
            today=today,
        )
        return expense

    def add_with_result(
        self,
        description: Optional[str],
        amount: object,
        occurred_on: object,
        category: Optional[str] = None,
        today: Optional[date] = None,
    ) -> tuple[Expense, ValidationResult]:
        """Like add(), but also returns the validation result and its warnings."""
        try:
            result = self._validator.require_valid(
                description=description,
                amount=amount,
                occurred_on=occurred_on,
                category=category,
                today=today,
            )
        except ExpenseValidationError as e:
            self._audit_logger.log_expense_rejected(e.result)
            raise
        
        with self._lock:
            expense = Expense(
                id=self._id_generator.new_id(self._issued_ids),
                description=result.description,
                category=result.category,
                amount=result.amount,
                occurred_on=result.occurred_on,
            )
            self._issued_ids.add(expense.id)
            self._expenses.insert(0, expense)
            self.save()
        
        self._audit_logger.log_expense_added(expense)
        return expense, result
    
    def remove(self, expense_id: str) -> bool:
        """
        Remove the expense with this id.
        
        Unknown ids are a no-op, not an error. The ledger is saved
        either way.
        
        Returns:
            True if an expense was removed
        """
        with self._lock:
            before = len(self._expenses)
            self._expenses = [e for e in self._expenses if e.id != expense_id]
            removed = len(self._expenses) < before
            remaining = len(self._expenses)
            self.save()
        
        if removed:
            self._audit_logger.log_expense_removed(expense_id, remaining)
        else:
            self._audit_logger.log_remove_not_found(expense_id)
        return removed
    
    # -------------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------------
    
    @property
    def slot_key(self) -> str:
        return self._slot_key
    
    @property
    def expenses(self) -> tuple[Expense, ...]:
        """Snapshot of the ledger, newest additions first."""
        with self._lock:
            return tuple(self._expenses)
    
    def get(self, expense_id: str) -> Optional[Expense]:
        with self._lock:
            for expense in self._expenses:
                if expense.id == expense_id:
                    return expense
        return None
    
    def filter_by_month(self, month: str) -> list[Expense]:
        return filter_by_month(self.expenses, month)
    
    def sum_by_month(self, month: str) -> Decimal:
        return sum_by_month(self.expenses, month)
    
    def summarize_month(self, month: str) -> MonthSummary:
        return summarize_month(self.expenses, month)
    
    def __len__(self) -> int:
        with self._lock:
            return len(self._expenses)
    
    def __iter__(self) -> Iterator[Expense]:
        return iter(self.expenses)
    
    def __contains__(self, expense_id: object) -> bool:
        return isinstance(expense_id, str) and self.get(expense_id) is not None
