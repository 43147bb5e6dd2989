"""
Tests for application wiring and the entry flow used by the page.
"""

import pytest
from datetime import date
from decimal import Decimal

from expense_tracker.config import Settings, StorageBackend, StorageSettings
from expense_tracker.ledger import LedgerStore
from expense_tracker.orchestrator import (
    ExpenseEntryFlow,
    build_slot,
    create_app_components,
    create_ledger,
)
from expense_tracker.queries import current_month_key
from expense_tracker.services.storage import InMemorySlot, JsonFileSlot


@pytest.fixture
def flow(store) -> ExpenseEntryFlow:
    return ExpenseEntryFlow(store)


class TestBuildSlot:
    
    def test_memory_backend(self):
        slot = build_slot(StorageSettings(backend=StorageBackend.MEMORY))
        assert isinstance(slot, InMemorySlot)
    
    def test_json_file_backend(self, tmp_path):
        slot = build_slot(StorageSettings(backend="json_file", data_dir=tmp_path))
        assert isinstance(slot, JsonFileSlot)
        assert slot.data_dir == tmp_path


class TestCreateLedger:
    
    def test_uses_configured_backend_and_key(self, monkeypatch, tmp_path):
        monkeypatch.setenv("EXPENSE_STORAGE_BACKEND", "json_file")
        monkeypatch.setenv("EXPENSE_STORAGE_DATA_DIR", str(tmp_path))
        monkeypatch.setenv("EXPENSE_STORAGE_SLOT_KEY", "household")
        
        store = create_ledger(Settings())
        store.add("Coffee", "5", date.today())
        
        assert isinstance(store, LedgerStore)
        assert store.slot_key == "household"
        assert (tmp_path / "household.json").exists()
    
    def test_explicit_slot_wins(self, monkeypatch):
        monkeypatch.setenv("EXPENSE_STORAGE_BACKEND", "json_file")
        slot = InMemorySlot()
        
        store = create_ledger(Settings(), slot=slot)
        store.add("Coffee", "5", date.today())
        
        assert slot.read("expenses") is not None
    
    def test_create_app_components(self, monkeypatch):
        monkeypatch.setenv("EXPENSE_STORAGE_BACKEND", "memory")
        flow = create_app_components()
        assert isinstance(flow, ExpenseEntryFlow)
        assert len(flow.store) == 0


class TestExpenseEntryFlow:
    """Tests for what the page calls."""
    
    def test_submit_success(self, flow, today):
        expense, message = flow.submit(
            description="Groceries",
            amount="120,50",
            occurred_on=date(2025, 8, 3),
            category="Food",
            today=today,
        )
        assert expense is not None
        assert expense.amount == Decimal("120.50")
        assert message == "Added: Groceries"
        assert len(flow.store) == 1
    
    def test_submit_rejection_returns_reason(self, flow, today):
        expense, message = flow.submit(
            description="",
            amount="10",
            occurred_on="2025-08-01",
            today=today,
        )
        assert expense is None
        assert message == "Description is required."
        assert len(flow.store) == 0
    
    def test_submit_zero_amount(self, flow, today):
        expense, message = flow.submit(
            description="Coffee",
            amount="0",
            occurred_on="2025-08-01",
            today=today,
        )
        assert expense is None
        assert message == "Amount must be greater than zero."
    
    def test_submit_appends_warnings(self, flow, today):
        expense, message = flow.submit(
            description="Concert",
            amount="80",
            occurred_on="2026-01-10",
            today=today,
        )
        assert expense is not None
        assert message.startswith("Added: Concert (")
        assert "in the future" in message
    
    def test_submit_validates_once(self, make_store, validator, today):
        calls = []
        original = validator.validate

        def counting_validate(*args, **kwargs):
            calls.append(kwargs)
            return original(*args, **kwargs)

        validator.validate = counting_validate
        flow = ExpenseEntryFlow(make_store())

        expense, message = flow.submit("Concert", "80", "2026-01-10", today=today)

        assert expense is not None
        assert "in the future" in message
        assert len(calls) == 1

    def test_delete(self, flow, today):
        expense, _ = flow.submit("Coffee", "5", "2025-08-01", today=today)
        assert flow.delete(expense.id) is True
        assert flow.delete(expense.id) is False
    
    def test_view_month(self, flow, today):
        flow.submit("Groceries", "120.50", "2025-08-03", today=today)
        flow.submit("Rent", "1500", "2025-08-01", today=today)
        summary = flow.view_month("2025-08")
        assert summary.total == Decimal("1620.50")
        assert summary.count == 2
    
    def test_view_month_defaults_to_current(self, flow):
        assert flow.view_month().month == current_month_key()
    
    def test_view_month_rejects_malformed(self, flow):
        with pytest.raises(ValueError):
            flow.view_month("08/2025")


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
