"""Ledger package: the expense store and its id generator."""

from expense_tracker.ledger.ids import IdGenerator
from expense_tracker.ledger.store import DEFAULT_SLOT_KEY, LedgerStore

__all__ = ["DEFAULT_SLOT_KEY", "IdGenerator", "LedgerStore"]
