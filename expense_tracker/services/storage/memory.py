"""
In-memory slot.

Used for session-only mode (EXPENSE_STORAGE_BACKEND=memory) and in tests.
Nothing survives the process, but the slot outlives any one ledger object,
so a "restart" is simulated by building a new ledger on the same slot.
"""

from typing import Optional

from expense_tracker.services.storage.interface import DurableSlotInterface


class InMemorySlot(DurableSlotInterface):
    """Dict-backed durable slot."""
    
    def __init__(self, initial: Optional[dict[str, str]] = None):
        self._data: dict[str, str] = dict(initial or {})
        self.write_count = 0
    
    def read(self, key: str) -> Optional[str]:
        return self._data.get(key)
    
    def write(self, key: str, data: str) -> bool:
        self._data[key] = data
        self.write_count += 1
        return True
    
    def delete(self, key: str) -> bool:
        return self._data.pop(key, None) is not None
    
    def keys(self) -> list[str]:
        return sorted(self._data)
