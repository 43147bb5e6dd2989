"""Unique id generation for expenses."""

from typing import Callable, Container, Optional
from uuid import uuid4


def _random_id() -> str:
    return str(uuid4())


class IdGenerator:
    """
    Hands out ids that are unique within one ledger.
    
    The factory defaults to random UUID4 text. Whatever the factory
    returns, an id already in use is never handed out: the generator
    draws again, up to max_attempts times.
    """
    
    def __init__(
        self,
        factory: Optional[Callable[[], str]] = None,
        max_attempts: int = 100,
    ):
        self._factory = factory or _random_id
        self._max_attempts = max_attempts
    
    def new_id(self, taken: Container[str] = ()) -> str:
        """
        Return a fresh id not present in taken.
        
        Raises:
            RuntimeError: If the factory keeps producing taken or empty ids
        """
        for _ in range(self._max_attempts):
            candidate = str(self._factory()).strip()
            if candidate and candidate not in taken:
                return candidate
        raise RuntimeError(
            f"Could not generate a unique id after {self._max_attempts} attempts"
        )
    
    __call__ = new_id
