"""Services package."""

from expense_tracker.services.storage import (
    CorruptDataError,
    DurableSlotInterface,
    InMemorySlot,
    JsonFileSlot,
    SlotReadError,
    SlotWriteError,
    StorageError,
    decode_expenses,
    encode_expenses,
)

__all__ = [
    "CorruptDataError",
    "DurableSlotInterface",
    "InMemorySlot",
    "JsonFileSlot",
    "SlotReadError",
    "SlotWriteError",
    "StorageError",
    "decode_expenses",
    "encode_expenses",
]
