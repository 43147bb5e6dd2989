"""
Tests for the durable slots and the ledger codec.

JSON file tests run against pytest's tmp_path; nothing touches the
real data directory.
"""

import json
import pytest
from decimal import Decimal

from expense_tracker.config import StorageSettings
from expense_tracker.services.storage import (
    CorruptDataError,
    InMemorySlot,
    JsonFileSlot,
    SlotReadError,
    SlotWriteError,
    StorageError,
    decode_expenses,
    encode_expenses,
)

from tests.conftest import make_expense


class TestInMemorySlot:
    
    def test_absent_slot_reads_none(self):
        assert InMemorySlot().read("expenses") is None
    
    def test_write_then_read(self):
        slot = InMemorySlot()
        assert slot.write("expenses", "[]") is True
        assert slot.read("expenses") == "[]"
        assert slot.write_count == 1
    
    def test_initial_content(self):
        slot = InMemorySlot({"expenses": "[1]"})
        assert slot.read("expenses") == "[1]"
        assert slot.keys() == ["expenses"]
    
    def test_delete(self):
        slot = InMemorySlot({"expenses": "[]"})
        assert slot.delete("expenses") is True
        assert slot.delete("expenses") is False
        assert slot.read("expenses") is None


class TestJsonFileSlot:
    """Tests for the file-per-key slot."""
    
    def test_absent_slot_reads_none(self, tmp_path):
        assert JsonFileSlot(tmp_path / "data").read("expenses") is None
    
    def test_write_creates_directory_and_file(self, tmp_path):
        data_dir = tmp_path / "nested" / "data"
        slot = JsonFileSlot(data_dir)
        
        assert slot.write("expenses", '[{"a": 1}]') is True
        
        assert (data_dir / "expenses.json").read_text(encoding="utf-8") == '[{"a": 1}]'
        assert slot.read("expenses") == '[{"a": 1}]'
    
    def test_write_replaces_content_without_leftovers(self, tmp_path):
        slot = JsonFileSlot(tmp_path)
        slot.write("expenses", "old")
        slot.write("expenses", "new")
        
        assert slot.read("expenses") == "new"
        assert sorted(p.name for p in tmp_path.iterdir()) == ["expenses.json"]
    
    def test_unicode_round_trip(self, tmp_path):
        slot = JsonFileSlot(tmp_path)
        slot.write("expenses", "Pão de açúcar")
        assert slot.read("expenses") == "Pão de açúcar"
    
    def test_delete(self, tmp_path):
        slot = JsonFileSlot(tmp_path)
        slot.write("expenses", "[]")
        assert slot.delete("expenses") is True
        assert slot.delete("expenses") is False
    
    @pytest.mark.parametrize("key", ["", "../escape", "a/b", ".hidden"])
    def test_rejects_unsafe_keys(self, tmp_path, key):
        with pytest.raises(ValueError):
            JsonFileSlot(tmp_path).path_for(key)
    
    def test_read_failure_raises_slot_read_error(self, tmp_path):
        (tmp_path / "expenses.json").mkdir()
        with pytest.raises(SlotReadError):
            JsonFileSlot(tmp_path).read("expenses")
    
    def test_write_failure_raises_slot_write_error(self, tmp_path):
        blocker = tmp_path / "data"
        blocker.write_text("not a directory", encoding="utf-8")
        with pytest.raises(SlotWriteError):
            JsonFileSlot(blocker).write("expenses", "[]")
    
    def test_errors_share_a_base_class(self):
        assert issubclass(SlotReadError, StorageError)
        assert issubclass(SlotWriteError, StorageError)
        assert issubclass(CorruptDataError, StorageError)
    
    def test_from_settings(self, tmp_path):
        settings = StorageSettings(data_dir=tmp_path / "ledger")
        slot = JsonFileSlot.from_settings(settings)
        assert slot.data_dir == tmp_path / "ledger"


class TestCodec:
    """Tests for the stored JSON format."""
    
    def test_encoded_format(self):
        text = encode_expenses([
            make_expense("e1", "2025-08-03", "120.50", "Groceries", "Food"),
        ])
        assert json.loads(text) == [{
            "id": "e1",
            "description": "Groceries",
            "category": "Food",
            "amount": 120.5,
            "date": "2025-08-03",
        }]
    
    def test_round_trip_preserves_order_and_values(self):
        expenses = [
            make_expense("e2", "2025-08-01", "1500", "Rent", "Housing"),
            make_expense("e1", "2025-08-03", "120.50", "Groceries", "Food"),
        ]
        decoded = decode_expenses(encode_expenses(expenses))
        assert [e.id for e in decoded] == ["e2", "e1"]
        assert decoded == expenses
    
    def test_non_ascii_is_kept_readable(self):
        text = encode_expenses([make_expense("e1", "2025-08-03", description="Pão")])
        assert "Pão" in text
    
    def test_decode_accepts_any_field_order(self):
        text = '[{"date": "2025-08-01", "amount": 12.5, "category": "Food", "description": "Lunch", "id": "x"}]'
        (expense,) = decode_expenses(text)
        assert expense.amount == Decimal("12.5")
        assert expense.description == "Lunch"
    
    def test_decode_fills_missing_category(self):
        text = '[{"id": "x", "description": "Lunch", "amount": 12, "date": "2025-08-01"}]'
        assert decode_expenses(text)[0].category == "General"
    
    @pytest.mark.parametrize("text", ["", "   \n"])
    def test_blank_text_is_an_empty_ledger(self, text):
        assert decode_expenses(text) == []
    
    @pytest.mark.parametrize(
        "text",
        [
            "{not json",
            "null",
            '{"id": "x"}',
            '[{"id": "x", "description": "Lunch", "amount": -1, "date": "2025-08-01"}]',
            '[{"id": "x", "description": "Lunch", "amount": 5, "date": "yesterday"}]',
            '[{"id": "x", "description": "", "amount": 5, "date": "2025-08-01"}]',
        ],
    )
    def test_corrupt_text_raises(self, text):
        with pytest.raises(CorruptDataError):
            decode_expenses(text)


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
