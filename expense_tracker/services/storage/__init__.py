"""
Storage Services Package

Provides the durable slot interface, its implementations and the ledger codec.
"""

from expense_tracker.services.storage.interface import (
    CorruptDataError,
    DurableSlotInterface,
    SlotReadError,
    SlotWriteError,
    StorageError,
)
from expense_tracker.services.storage.codec import decode_expenses, encode_expenses
from expense_tracker.services.storage.json_file import JsonFileSlot
from expense_tracker.services.storage.memory import InMemorySlot

__all__ = [
    # Interfaces
    "DurableSlotInterface",
    # Exceptions
    "CorruptDataError",
    "SlotReadError",
    "SlotWriteError",
    "StorageError",
    # Codec
    "decode_expenses",
    "encode_expenses",
    # Implementations
    "InMemorySlot",
    "JsonFileSlot",
]
