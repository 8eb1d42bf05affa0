"""
Tests for currency arithmetic, formatting and parsing.

Rounding is half away from zero; every result is a Decimal at the
requested precision.
"""

from decimal import Decimal

import pytest

from payroll_kernel.domain.money import (
    calculate_net_amount,
    calculate_percentage,
    calculate_tax,
    compare_currency_amounts,
    convert_currency,
    divide_currency_amount,
    format_currency,
    format_reverse_rate,
    get_currency_display_name,
    get_currency_symbol,
    is_valid_currency_code,
    multiply_currency_amount,
    normalize_currency_amount,
    parse_currency,
    round_currency,
    round_to_currency,
    subtract_currency_amounts,
    sum_currency_amounts,
    validate_currency_amount,
)
from payroll_kernel.domain.values import Currency


class TestFormatCurrency:

    def test_symbols_and_grouping(self):
        assert format_currency(1000, "INR", 2) == "₹1,000.00"
        assert format_currency(1234.56, "USD", 2) == "$1,234.56"
        assert format_currency(5000, "PHP", 2) == "₱5,000.00"
        assert format_currency(999.99, "AUD", 2) == "A$999.99"

    def test_zero(self):
        assert format_currency(0, "USD", 2) == "$0.00"

    def test_sign_precedes_symbol(self):
        assert format_currency(-500, "USD", 2) == "-$500.00"

    def test_rounding_to_negative_zero_has_no_sign(self):
        assert format_currency(Decimal("-0.001"), "USD", 2) == "$0.00"

    def test_explicit_decimal_places(self):
        assert format_currency(100.123, "USD", 3) == "$100.123"
        assert format_currency(100.12, "USD", 0) == "$100"

    def test_currency_precision_used_by_default(self):
        assert format_currency(1234.5, "JPY") == "¥1,235"
        kwd = Currency(code="KWD", name="Kuwaiti Dinar", symbol="KD", decimal_places=3)
        assert format_currency(Decimal("12.3456"), kwd) == "KD12.346"

    def test_show_code_and_hide_symbol(self):
        assert format_currency(1000, "EUR", 2, show_code=True) == "€1,000.00 EUR"
        assert format_currency(1000, "EUR", 2, show_symbol=False) == "1,000.00"

    def test_unknown_code_uses_code_as_symbol(self):
        assert format_currency(10, "XYZ", 2) == "XYZ10.00"

    def test_large_amount_grouping(self):
        assert format_currency(Decimal("1234567890.5"), "USD", 2) == "$1,234,567,890.50"


class TestParseCurrency:

    def test_parses_formatted_strings(self):
        assert parse_currency("₹1,000.00") == Decimal("1000")
        assert parse_currency("$1,234.56") == Decimal("1234.56")
        assert parse_currency("₱5,000.00") == Decimal("5000")

    def test_plain_numbers(self):
        assert parse_currency("1000.50") == Decimal("1000.5")
        assert parse_currency("1,000") == Decimal("1000")

    def test_negative(self):
        assert parse_currency("-$500.00") == Decimal("-500")

    def test_multi_character_symbols(self):
        assert parse_currency("A$999.99") == Decimal("999.99")
        assert parse_currency("HK$12") == Decimal("12")

    def test_code_suffix_removed(self):
        assert parse_currency("€1,000.00 EUR") == Decimal("1000")

    def test_custom_currency_symbol(self):
        kwd = Currency(code="KWD", name="Kuwaiti Dinar", symbol="KD", decimal_places=3)
        assert parse_currency("KD12.346", kwd) == Decimal("12.346")

    @pytest.mark.parametrize("text", ["invalid", "", "   ", "$", "1.2.3", "NaN", "1e5"])
    def test_garbage_yields_zero(self, text):
        assert parse_currency(text) == Decimal("0")

    def test_non_string_input(self):
        assert parse_currency(None) == Decimal("0")
        assert parse_currency(12.5) == Decimal("12.5")


class TestValidateCurrencyAmount:

    def test_positive_amounts(self):
        assert validate_currency_amount(100, 2).valid
        assert validate_currency_amount(0.01, 2).valid

    def test_negative_rejected_by_default(self):
        result = validate_currency_amount(-10, 2)
        assert not result.valid
        assert result.error == "Amount cannot be negative"

    def test_negative_allowed_when_requested(self):
        assert validate_currency_amount(-10, 2, allow_negative=True).valid

    @pytest.mark.parametrize("value", [float("nan"), float("inf"), "abc", None, True])
    def test_non_numeric(self, value):
        result = validate_currency_amount(value, 2)
        assert not result
        assert result.error == "Amount must be a valid number"

    def test_range(self):
        assert validate_currency_amount(50, 2, 10, 100).valid
        below = validate_currency_amount(5, 2, 10, 100)
        assert below.error == "Amount must be at least 10"
        above = validate_currency_amount(150, 2, 10, 100)
        assert above.error == "Amount cannot exceed 100"

    def test_decimal_places(self):
        assert validate_currency_amount(100.12, 2).valid
        assert validate_currency_amount(100, 0).valid
        assert validate_currency_amount("100.120", 2).valid
        too_precise = validate_currency_amount(100.123, 2)
        assert too_precise.error == "Amount cannot have more than 2 decimal places"
        assert not validate_currency_amount(100.5, 0).valid

    def test_precision_from_currency(self):
        jpy = Currency.from_code("JPY")
        assert not validate_currency_amount(Decimal("10.5"), jpy).valid


class TestRounding:

    def test_half_away_from_zero(self):
        assert round_currency(100.123, 2) == Decimal("100.12")
        assert round_currency(100.126, 2) == Decimal("100.13")
        assert round_currency(100.5, 0) == Decimal("101")
        assert round_currency(100.125, 2) == Decimal("100.13")

    def test_negative(self):
        assert round_currency(-100.126, 2) == Decimal("-100.13")
        assert round_currency(-100.125, 2) == Decimal("-100.13")

    def test_result_has_exact_exponent(self):
        assert str(round_currency(5, 2)) == "5.00"

    def test_round_to_currency(self):
        assert round_to_currency(1234.5, "JPY") == Decimal("1235")
        assert round_to_currency(Decimal("1.005"), Currency.from_code("USD")) == Decimal("1.01")

    def test_negative_places_rejected(self):
        with pytest.raises(ValueError):
            round_currency(1, -1)


class TestConversion:

    def test_convert(self):
        assert convert_currency(100, 83.5, 2) == Decimal("8350")
        assert convert_currency(8350, 0.012, 2) == Decimal("100.2")

    def test_respects_decimal_places(self):
        # 100 * 1.5678 = 156.78 exactly
        assert convert_currency(100, 1.5678, 2) == Decimal("156.78")
        assert convert_currency(100, 1.5678, 4) == Decimal("156.78")
        assert convert_currency(1, 1.5678, 2) == Decimal("1.57")

    def test_zero_rate(self):
        assert convert_currency(100, 0, 2) == Decimal("0")

    def test_reverse_rate_display(self):
        assert format_reverse_rate(83.5) == "0.011976"
        assert format_reverse_rate(Decimal("1")) == "1.000000"

    @pytest.mark.parametrize("rate", [0, -1, "abc", None])
    def test_reverse_rate_of_invalid_rate(self, rate):
        assert format_reverse_rate(rate) == "-"


class TestPercentageAndTax:

    def test_percentage(self):
        assert calculate_percentage(1000, 10, 2) == Decimal("100")
        assert calculate_percentage(5000, 12, 2) == Decimal("600")
        assert calculate_percentage(100, 0.75, 2) == Decimal("0.75")
        assert calculate_percentage(0, 10, 2) == Decimal("0")
        assert calculate_percentage(1000, 0, 2) == Decimal("0")

    def test_tax(self):
        assert calculate_tax(1000, 10, 2) == Decimal("100")
        assert calculate_tax(5000, 18, 2) == Decimal("900")
        assert calculate_tax(1000, 12.5, 2) == Decimal("125")

    def test_net_amount(self):
        assert calculate_net_amount(1000, 10, 2) == Decimal("900")
        assert calculate_net_amount(5000, 20, 2) == Decimal("4000")
        assert calculate_net_amount(1000, 0, 2) == Decimal("1000")

    def test_net_amount_subtracts_rounded_tax(self):
        # tax on 10.05 at 5% is 0.5025 -> 0.50
        assert calculate_net_amount(Decimal("10.05"), 5, 2) == Decimal("9.55")


class TestAggregateArithmetic:

    def test_sum(self):
        assert sum_currency_amounts([100, 200, 300], 2) == Decimal("600")
        assert sum_currency_amounts([10.5, 20.3, 30.7], 2) == Decimal("61.5")
        assert sum_currency_amounts([], 2) == Decimal("0")
        assert sum_currency_amounts([100], 2) == Decimal("100")
        assert sum_currency_amounts([100, -50, 25], 2) == Decimal("75")

    def test_sum_has_no_float_drift(self):
        assert sum_currency_amounts([0.1, 0.2], 2) == Decimal("0.30")

    def test_subtract(self):
        assert subtract_currency_amounts(1000, 300, 2) == Decimal("700")
        assert subtract_currency_amounts(100.5, 50.3, 2) == Decimal("50.2")
        assert subtract_currency_amounts(100, 150, 2) == Decimal("-50")

    def test_multiply(self):
        assert multiply_currency_amount(100, 2, 2) == Decimal("200")
        assert multiply_currency_amount(50.5, 3, 2) == Decimal("151.5")
        assert multiply_currency_amount(100, 0.5, 2) == Decimal("50")
        assert multiply_currency_amount(100, 1.5, 2) == Decimal("150")

    def test_divide(self):
        assert divide_currency_amount(100, 2, 2) == Decimal("50")
        assert divide_currency_amount(150, 3, 2) == Decimal("50")
        assert divide_currency_amount(100, 3, 2) == Decimal("33.33")

    def test_divide_by_zero(self):
        assert divide_currency_amount(100, 0, 2) == Decimal("0")


class TestCompare:

    def test_equal(self):
        assert compare_currency_amounts(100, 100, 2) == 0
        assert compare_currency_amounts(50.5, 50.5, 2) == 0

    def test_ordering(self):
        assert compare_currency_amounts(200, 100, 2) == 1
        assert compare_currency_amounts(100, 200, 2) == -1

    def test_compares_after_rounding(self):
        assert compare_currency_amounts(100.001, 100.002, 2) == 0
        assert compare_currency_amounts(100.004, 100.005, 2) == -1

    def test_precision_from_currency_code(self):
        assert compare_currency_amounts(100.4, 100.1, "JPY") == 0


class TestRegistryLookups:

    def test_symbols(self):
        assert get_currency_symbol("INR") == "₹"
        assert get_currency_symbol("USD") == "$"
        assert get_currency_symbol("XYZ") == "XYZ"

    def test_display_names(self):
        assert get_currency_display_name("INR") == "Indian Rupee"
        assert get_currency_display_name("USD") == "US Dollar"
        assert get_currency_display_name("PHP") == "Philippine Peso"
        assert get_currency_display_name("AUD") == "Australian Dollar"
        assert get_currency_display_name("EUR") == "Euro"
        assert get_currency_display_name("XYZ") == "XYZ"

    def test_validity(self):
        for code in ("INR", "USD", "PHP", "AUD", "EUR", "GBP"):
            assert is_valid_currency_code(code)
        assert not is_valid_currency_code("XYZ")
        assert not is_valid_currency_code("")
        assert not is_valid_currency_code("usd")
        assert not is_valid_currency_code("Usd")


class TestNormalize:

    def test_strings(self):
        assert normalize_currency_amount("100", 2) == Decimal("100")
        assert normalize_currency_amount("100.50", 2) == Decimal("100.5")

    def test_numbers(self):
        assert normalize_currency_amount(100, 2) == Decimal("100")
        assert normalize_currency_amount(100.5, 2) == Decimal("100.5")

    def test_formatted_strings(self):
        assert normalize_currency_amount("$1,000.00", 2) == Decimal("1000")
        assert normalize_currency_amount("₹5,000.50", 2) == Decimal("5000.5")

    def test_rounds(self):
        assert normalize_currency_amount("100.126", 2) == Decimal("100.13")
        assert normalize_currency_amount(100.126, 2) == Decimal("100.13")

    def test_invalid(self):
        assert normalize_currency_amount("invalid", 2) == Decimal("0")
        assert normalize_currency_amount(float("nan"), 2) == Decimal("0")
        assert normalize_currency_amount(float("inf"), 2) == Decimal("0")
