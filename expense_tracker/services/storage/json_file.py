"""
JSON File Storage Implementation

DESIGN DECISION: Each slot is one UTF-8 file, <data_dir>/<key>.json, because:
1. Users can open and read their data with any text editor
2. No database setup required
3. Easy to back up (copy one file)

TRADEOFFS:
- The whole ledger is rewritten on every change (fine for hundreds of rows)
- No concurrent writers (the ledger is single-writer anyway)

Writes go to a temporary file in the same directory which is then renamed
over the target, so readers see either the old or the new ledger, never
half of one.
"""

import os
import tempfile
from pathlib import Path
from typing import Optional

from expense_tracker.config import StorageSettings
from expense_tracker.services.storage.interface import (
    DurableSlotInterface,
    SlotReadError,
    SlotWriteError,
)


class JsonFileSlot(DurableSlotInterface):
    """
    File-per-key durable slot.
    
    The data directory is created lazily on first write.
    """
    
    SUFFIX = ".json"
    
    def __init__(self, data_dir: Path):
        self._data_dir = Path(data_dir)
    
    @classmethod
    def from_settings(cls, settings: StorageSettings) -> "JsonFileSlot":
        return cls(settings.data_dir)
    
    @property
    def data_dir(self) -> Path:
        return self._data_dir
    
    def path_for(self, key: str) -> Path:
        """File backing a slot key."""
        if not key or os.sep in key or (os.altsep and os.altsep in key) or key.startswith("."):
            raise ValueError(f"Invalid slot key: {key!r}")
        return self._data_dir / f"{key}{self.SUFFIX}"
    
    def read(self, key: str) -> Optional[str]:
        path = self.path_for(key)
        try:
            return path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return None
        except (OSError, UnicodeDecodeError) as e:
            raise SlotReadError(f"Failed to read slot '{key}' from {path}: {e}") from e
    
    def write(self, key: str, data: str) -> bool:
        path = self.path_for(key)
        tmp_name = None
        try:
            self._data_dir.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                prefix=f".{key}.", suffix=".tmp", dir=self._data_dir
            )
            with os.fdopen(fd, "w", encoding="utf-8") as handle:
                handle.write(data)
                handle.flush()
                os.fsync(handle.fileno())
            os.replace(tmp_name, path)
            tmp_name = None
            return True
        except OSError as e:
            raise SlotWriteError(f"Failed to write slot '{key}' to {path}: {e}") from e
        finally:
            if tmp_name is not None:
                Path(tmp_name).unlink(missing_ok=True)
    
    def delete(self, key: str) -> bool:
        path = self.path_for(key)
        try:
            path.unlink()
            return True
        except FileNotFoundError:
            return False
        except OSError as e:
            raise SlotWriteError(f"Failed to delete slot '{key}' at {path}: {e}") from e
