"""Shared fixtures for the expense tracker tests."""

from datetime import date
from decimal import Decimal

import pytest

from expense_tracker.config import AppSettings, get_settings
from expense_tracker.ledger import IdGenerator, LedgerStore
from expense_tracker.models.expense import Expense
from expense_tracker.services.storage import InMemorySlot
from expense_tracker.validation import ExpenseValidator


@pytest.fixture(autouse=True)
def clear_settings_cache():
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def app_settings() -> AppSettings:
    return AppSettings(
        currency_symbol="R$",
        decimal_separator=",",
        thousands_separator=".",
        max_expense_amount=1000000.0,
        future_date_tolerance_days=7,
    )


@pytest.fixture
def validator(app_settings) -> ExpenseValidator:
    return ExpenseValidator(app_settings)


@pytest.fixture
def slot() -> InMemorySlot:
    return InMemorySlot()


@pytest.fixture
def make_store(slot, validator):
    """Build a store on the shared slot; call again to simulate a restart."""
    def _make(id_generator=None, target_slot=None) -> LedgerStore:
        return LedgerStore(
            slot=target_slot or slot,
            id_generator=id_generator,
            validator=validator,
        )
    return _make


@pytest.fixture
def store(make_store) -> LedgerStore:
    return make_store()


@pytest.fixture
def today() -> date:
    return date(2025, 8, 15)


def make_expense(
    expense_id: str,
    occurred_on: str,
    amount: str = "10",
    description: str = "Something",
    category: str = "General",
) -> Expense:
    return Expense(
        id=expense_id,
        description=description,
        category=category,
        amount=Decimal(amount),
        occurred_on=date.fromisoformat(occurred_on),
    )
