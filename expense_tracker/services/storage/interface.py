"""
Abstract Storage Interface

DESIGN DECISION: The ledger talks to a named durable slot, not to a file.
This allows us to:
1. Keep the JSON file layout out of the ledger
2. Use in-memory storage for testing and session-only mode
3. Swap in another backend without touching ledger logic

The interface is intentionally tiny: read a slot, write a slot.
Serialization is the codec's job, slots only move text around.
"""

from abc import ABC, abstractmethod
from typing import Optional


class DurableSlotInterface(ABC):
    """
    Abstract interface for a durable key-value slot.
    
    Any storage implementation must implement these methods.
    """
    
    @abstractmethod
    def read(self, key: str) -> Optional[str]:
        """
        Read the serialized content of a slot.
        
        Args:
            key: The slot name
            
        Returns:
            The stored text, or None if the slot has never been written
            
        Raises:
            SlotReadError: If the slot exists but cannot be read
        """
        pass
    
    @abstractmethod
    def write(self, key: str, data: str) -> bool:
        """
        Replace the content of a slot.
        
        Args:
            key: The slot name
            data: Serialized content
            
        Returns:
            True if written successfully
            
        Raises:
            SlotWriteError: If the write fails
        """
        pass
    
    @abstractmethod
    def delete(self, key: str) -> bool:
        """
        Remove a slot.
        
        Returns:
            True if the slot existed and was removed
        """
        pass


class StorageError(Exception):
    """Base exception for storage operations."""
    pass


class SlotReadError(StorageError):
    """Slot exists but could not be read."""
    pass


class SlotWriteError(StorageError):
    """Slot could not be written."""
    pass


class CorruptDataError(StorageError):
    """Stored content could not be decoded into expenses."""
    pass
