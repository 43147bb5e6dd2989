"""
Display helpers for amounts and dates.

Kept out of the Streamlit page so they can be tested without a UI.
Defaults follow the configured locale settings (pt-BR style out of the box:
R$ 1.620,50 and 03/08/2025).
"""

import re
from datetime import date
from decimal import ROUND_HALF_UP, Decimal
from typing import Optional

from expense_tracker.config import AppSettings, get_settings


_CENT = Decimal("0.01")
_MARKDOWN_SPECIALS = re.compile(r"([\\`*_{}\[\]()#+\-.!|<>~$:])")


def format_currency(amount: Decimal, settings: Optional[AppSettings] = None) -> str:
    """Render an amount with two decimals, the currency symbol and separators."""
    settings = settings or get_settings().app
    
    quantized = Decimal(amount).quantize(_CENT, rounding=ROUND_HALF_UP)
    sign = "-" if quantized < 0 else ""
    grouped = f"{abs(quantized):,.2f}"  # e.g. 1,620.50
    integer_part, fraction = grouped.split(".")
    integer_part = integer_part.replace(",", settings.thousands_separator)
    number = f"{integer_part}{settings.decimal_separator}{fraction}"
    
    if settings.currency_symbol:
        return f"{sign}{settings.currency_symbol} {number}"
    return f"{sign}{number}"


def format_date(value: date) -> str:
    """DD/MM/YYYY."""
    return value.strftime("%d/%m/%Y")


def escape_markdown(text: str) -> str:
    """Backslash-escape user text so st.markdown shows it literally."""
    return _MARKDOWN_SPECIALS.sub(r"\\\1", text)
