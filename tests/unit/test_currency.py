"""
Tests for the supported-currency registry and currency value objects.

- Registry lookups are exact and case-sensitive.
- Unknown codes degrade to the code itself for symbol and display name.
- Currency and ExchangeRate validate at construction.
"""

from datetime import date
from decimal import Decimal

import pytest

from payroll_kernel.domain.currency import CurrencyInfo, CurrencyRegistry
from payroll_kernel.domain.values import Currency, ExchangeRate
from payroll_kernel.exceptions import InvalidCurrencyError, InvalidExchangeRateError


class TestCurrencyRegistry:
    """Tests for the fixed registry of display currencies."""

    def test_all_supported_codes_present(self):
        expected = {
            "USD", "EUR", "GBP", "JPY", "INR", "PHP", "AUD", "CAD",
            "CNY", "SGD", "MYR", "LKR", "NZD", "CHF", "HKD", "AED",
        }
        assert CurrencyRegistry.all_codes() == expected

    def test_lookup_is_case_sensitive(self):
        assert CurrencyRegistry.is_valid("USD")
        assert not CurrencyRegistry.is_valid("usd")
        assert not CurrencyRegistry.is_valid("Usd")

    def test_empty_and_non_string_codes_invalid(self):
        assert not CurrencyRegistry.is_valid("")
        assert not CurrencyRegistry.is_valid(None)
        assert CurrencyRegistry.get_info(None) is None

    def test_symbols(self):
        assert CurrencyRegistry.get_symbol("INR") == "₹"
        assert CurrencyRegistry.get_symbol("PHP") == "₱"
        assert CurrencyRegistry.get_symbol("AUD") == "A$"
        assert CurrencyRegistry.get_symbol("EUR") == "€"
        assert CurrencyRegistry.get_symbol("GBP") == "£"

    def test_unknown_code_falls_back_to_code(self):
        assert CurrencyRegistry.get_symbol("XYZ") == "XYZ"
        assert CurrencyRegistry.get_display_name("XYZ") == "XYZ"
        assert CurrencyRegistry.get_decimal_places("XYZ") == 2

    def test_jpy_has_no_minor_unit(self):
        info = CurrencyRegistry.get_info("JPY")
        assert isinstance(info, CurrencyInfo)
        assert info.decimal_places == 0
        assert info.rounding_tolerance == Decimal("1")

    def test_symbols_sorted_longest_first(self):
        symbols = CurrencyRegistry.all_symbols()
        assert symbols.index("A$") < symbols.index("$")
        assert symbols.index("CN¥") < symbols.index("¥")


class TestCurrencyValueObject:
    """Currency carries backend-configured precision."""

    def test_from_code_uses_registry(self):
        inr = Currency.from_code("INR")
        assert inr == Currency(code="INR", name="Indian Rupee", symbol="₹", decimal_places=2)

    def test_from_code_rejects_unknown(self):
        with pytest.raises(InvalidCurrencyError) as exc_info:
            Currency.from_code("XYZ")
        assert exc_info.value.currency == "XYZ"
        assert exc_info.value.code == "INVALID_CURRENCY"

    def test_negative_decimal_places_rejected(self):
        with pytest.raises(InvalidCurrencyError):
            Currency(code="KWD", name="Kuwaiti Dinar", symbol="KD", decimal_places=-1)

    def test_custom_currency_allowed(self):
        kwd = Currency(code="KWD", name="Kuwaiti Dinar", symbol="KD", decimal_places=3)
        assert kwd.decimal_places == 3
        assert str(kwd) == "KWD"

    def test_from_dict_accepts_camel_case(self):
        cur = Currency.from_dict({"code": "JPY", "decimalPlaces": 0})
        assert cur.decimal_places == 0
        assert cur.symbol == "¥"
        assert cur.name == "Japanese Yen"


class TestExchangeRate:
    """Directional rates with derived reverse."""

    def test_rate_coerced_to_decimal(self):
        rate = ExchangeRate("USD", "INR", 83.5, date(2024, 7, 1))
        assert rate.rate == Decimal("83.5")

    def test_zero_rate_rejected(self):
        with pytest.raises(InvalidExchangeRateError):
            ExchangeRate("USD", "INR", Decimal("0"), date(2024, 7, 1))

    def test_negative_rate_rejected(self):
        with pytest.raises(InvalidExchangeRateError):
            ExchangeRate("USD", "INR", Decimal("-1"), date(2024, 7, 1))

    def test_same_currency_rejected(self):
        with pytest.raises(InvalidExchangeRateError, match="must be different"):
            ExchangeRate("USD", "USD", Decimal("1"), date(2024, 7, 1))

    def test_reverse_rate_display(self):
        rate = ExchangeRate("USD", "INR", Decimal("83.5"), date(2024, 7, 1))
        assert rate.reverse_rate_display == "0.011976"

    def test_inverse_swaps_pair(self):
        rate = ExchangeRate("USD", "INR", Decimal("80"), date(2024, 7, 1))
        inverse = rate.inverse()
        assert inverse.pair == ("INR", "USD")
        assert inverse.rate == Decimal("0.0125")
        assert inverse.effective_date == rate.effective_date

    def test_cache_key_is_directional(self):
        rate = ExchangeRate("USD", "INR", Decimal("83.5"), date(2024, 7, 1))
        assert rate.cache_key == "USD-INR"
        assert rate.inverse().cache_key == "INR-USD"

    def test_from_dict_with_nested_currencies(self):
        rate = ExchangeRate.from_dict({
            "fromCurrency": {"code": "USD"},
            "toCurrency": {"code": "PHP"},
            "rate": "56.10",
            "effectiveDate": "2024-06-01T00:00:00.000Z",
            "isActive": True,
        })
        assert rate.pair == ("USD", "PHP")
        assert rate.rate == Decimal("56.10")
        assert rate.effective_date == date(2024, 6, 1)
