"""Supported currencies and amount formatting."""

from __future__ import annotations

import math
from dataclasses import dataclass


@dataclass(frozen=True)
class Currency:
    value: str  # ISO 4217 code
    label: str
    locale: str


CURRENCIES: tuple[Currency, ...] = (
    Currency("USD", "$ US Dollar (USD)", "en-US"),
    Currency("EUR", "€ Euro (EUR)", "de-DE"),
    Currency("INR", "₹ Indian Rupee (INR)", "en-IN"),
    Currency("GBP", "£ British Pound (GBP)", "en-GB"),
    Currency("JPY", "¥ Japanese Yen (JPY)", "ja-JP"),
    Currency("CAD", "$ Canadian Dollar (CAD)", "en-CA"),
    Currency("AUD", "$ Australian Dollar (AUD)", "en-AU"),
    Currency("CNY", "¥ Chinese Yuan (CNY)", "zh-CN"),
    Currency("CHF", "₣ Swiss Franc (CHF)", "de-CH"),
)

_CURRENCY_BY_CODE = {c.value: c for c in CURRENCIES}

# Display prefixes; a code missing here is printed verbatim.
CURRENCY_SYMBOLS: dict[str, str] = {
    "INR": "₹",
    "USD": "$",
    "EUR": "€",
    "GBP": "£",
    "JPY": "¥",
    "CAD": "C$",
    "AUD": "A$",
    "CHF": "CHF",
    "CNY": "¥",
    "SEK": "kr",
    "NZD": "NZ$",
}


def get_currency(code: str | None) -> Currency | None:
    if not code:
        return None
    return _CURRENCY_BY_CODE.get(code.strip().upper())


def is_supported_currency(code: str | None) -> bool:
    return get_currency(code) is not None


def currency_symbol(code: str | None) -> str:
    if code is None:
        return ""
    return CURRENCY_SYMBOLS.get(code, code)


def format_amount(amount: float | int | None, currency: str | None) -> str:
    """Format ``amount`` for display in ``currency``.

    The sign is dropped (direction is carried by the transaction type) and the
    value always has two decimals with comma thousands separators:

    >>> format_amount(1234.5, "USD")
    '$1,234.50'
    >>> format_amount(-3, "ZZZ")
    'ZZZ3.00'

    Never raises: unknown codes become the prefix, non-finite amounts format
    as zero.
    """
    try:
        value = abs(float(amount or 0))
    except (TypeError, ValueError):
        value = 0.0
    if not math.isfinite(value):
        value = 0.0
    return f"{currency_symbol(currency)}{value:,.2f}"
