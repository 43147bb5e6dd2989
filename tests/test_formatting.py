"""
Tests for the display helpers.
"""

import pytest
from datetime import date
from decimal import Decimal

from expense_tracker.config import AppSettings
from expense_tracker.formatting import escape_markdown, format_currency, format_date


@pytest.fixture
def us_settings() -> AppSettings:
    return AppSettings(currency_symbol="$", decimal_separator=".", thousands_separator=",")


class TestFormatCurrency:
    
    def test_default_style(self, app_settings):
        assert format_currency(Decimal("1620.5"), app_settings) == "R$ 1.620,50"
    
    def test_small_amount(self, app_settings):
        assert format_currency(Decimal("4.5"), app_settings) == "R$ 4,50"
    
    def test_millions_are_grouped(self, app_settings):
        assert format_currency(Decimal("1234567.891"), app_settings) == "R$ 1.234.567,89"
    
    def test_rounds_half_up(self, app_settings):
        assert format_currency(Decimal("0.005"), app_settings) == "R$ 0,01"
    
    def test_other_locale(self, us_settings):
        assert format_currency(Decimal("1620.5"), us_settings) == "$ 1,620.50"
    
    def test_without_symbol(self):
        settings = AppSettings(currency_symbol="", decimal_separator=",", thousands_separator=".")
        assert format_currency(Decimal("1500"), settings) == "1.500,00"
    
    def test_without_thousands_separator(self):
        settings = AppSettings(currency_symbol="€", decimal_separator=",", thousands_separator="")
        assert format_currency(Decimal("1500"), settings) == "€ 1500,00"
    
    def test_zero_total(self, app_settings):
        assert format_currency(Decimal("0"), app_settings) == "R$ 0,00"


class TestFormatDate:
    
    def test_day_first(self):
        assert format_date(date(2025, 8, 3)) == "03/08/2025"


class TestEscapeMarkdown:

    def test_plain_text_unchanged(self):
        assert escape_markdown("Groceries at the market") == "Groceries at the market"

    @pytest.mark.parametrize("raw, expected", [
        ("*bold*", r"\*bold\*"),
        ("__under__", r"\_\_under\_\_"),
        ("[link](http://x)", r"\[link\]\(http\://x\)"),
        ("# Rent", r"\# Rent"),
        ("<b>tag</b>", r"\<b\>tag\</b\>"),
        ("$5 lunch", r"\$5 lunch"),
    ])
    def test_markdown_characters_are_escaped(self, raw, expected):
        assert escape_markdown(raw) == expected


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
