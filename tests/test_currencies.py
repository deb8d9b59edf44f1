import math

from budget_tracker.currencies import (
    CURRENCIES,
    currency_symbol,
    format_amount,
    get_currency,
    is_supported_currency,
)


class TestFormatAmount:
    def test_usd_thousands_and_two_decimals(self):
        assert format_amount(1234.5, "USD") == "$1,234.50"

    def test_unknown_code_is_used_as_prefix(self):
        formatted = format_amount(1234.5, "ZZZ")
        assert formatted.startswith("ZZZ")
        assert formatted == "ZZZ1,234.50"

    def test_sign_is_dropped(self):
        assert format_amount(-42, "EUR") == "€42.00"

    def test_symbols_from_table(self):
        assert format_amount(5, "INR") == "₹5.00"
        assert format_amount(5, "CAD") == "C$5.00"
        assert format_amount(5, "NZD") == "NZ$5.00"
        assert format_amount(5, "CHF") == "CHF5.00"

    def test_never_raises_on_bad_input(self):
        assert format_amount(None, "USD") == "$0.00"
        assert format_amount(10, None) == "10.00"
        assert format_amount(10, "") == "10.00"
        assert format_amount(math.nan, "USD") == "$0.00"
        assert format_amount("oops", "USD") == "$0.00"

    def test_large_amount(self):
        assert format_amount(1234567.891, "GBP") == "£1,234,567.89"


class TestCurrencyTable:
    def test_lookup_is_case_insensitive(self):
        cur = get_currency("eur")
        assert cur is not None
        assert cur.locale == "de-DE"

    def test_supported_list(self):
        codes = [c.value for c in CURRENCIES]
        assert codes == ["USD", "EUR", "INR", "GBP", "JPY", "CAD", "AUD", "CNY", "CHF"]
        assert is_supported_currency("JPY")
        # has a display symbol but is not selectable as a default currency
        assert not is_supported_currency("SEK")
        assert not is_supported_currency(None)

    def test_symbol_fallback(self):
        assert currency_symbol("USD") == "$"
        assert currency_symbol("XYZ") == "XYZ"
