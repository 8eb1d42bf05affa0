"""
Tests for selecting the exchange rate in force from a rate history.
"""

from datetime import date
from decimal import Decimal

import pytest

from payroll_kernel.domain.values import ExchangeRate
from payroll_kernel.exceptions import ExchangeRateNotFoundError, InvalidExchangeRateError
from payroll_modules.payroll.exchange_rates import (
    find_current_rate,
    latest_rates_for_currency,
    validate_exchange_rate_pair,
)


class TestFindCurrentRate:

    def test_latest_effective_on_clock_date(self, usd_inr_history, deterministic_clock):
        rate = find_current_rate(usd_inr_history, "USD", "INR", clock=deterministic_clock)
        assert rate.rate == Decimal("83.50")

    def test_inactive_rates_skipped(self, usd_inr_history):
        rate = find_current_rate(usd_inr_history, "USD", "INR", date(2024, 9, 15))
        assert rate.effective_date == date(2024, 7, 1)

    def test_effective_on_the_day(self, usd_inr_history):
        rate = find_current_rate(usd_inr_history, "USD", "INR", date(2024, 12, 1))
        assert rate.rate == Decimal("85.25")

    def test_before_first_rate(self, usd_inr_history):
        with pytest.raises(ExchangeRateNotFoundError) as exc_info:
            find_current_rate(usd_inr_history, "USD", "INR", date(2023, 12, 31))
        assert exc_info.value.as_of == "2023-12-31"

    def test_pairs_are_directional(self, usd_inr_history):
        rate = find_current_rate(usd_inr_history, "INR", "USD", date(2024, 10, 1))
        assert rate.rate == Decimal("0.012")
        with pytest.raises(ExchangeRateNotFoundError):
            find_current_rate(usd_inr_history, "INR", "USD", date(2024, 7, 31))

    def test_unknown_pair(self, usd_inr_history):
        with pytest.raises(ExchangeRateNotFoundError) as exc_info:
            find_current_rate(usd_inr_history, "USD", "PHP", date(2024, 10, 1))
        assert exc_info.value.code == "EXCHANGE_RATE_NOT_FOUND"
        assert exc_info.value.to_currency == "PHP"

    def test_first_listed_wins_on_same_date(self):
        rates = [
            ExchangeRate("USD", "INR", Decimal("83.40"), date(2024, 7, 1)),
            ExchangeRate("USD", "INR", Decimal("83.60"), date(2024, 7, 1)),
        ]
        assert find_current_rate(rates, "USD", "INR", date(2024, 8, 1)).rate == Decimal("83.40")

    def test_order_of_history_irrelevant(self, usd_inr_history, deterministic_clock):
        reversed_history = list(reversed(usd_inr_history))
        rate = find_current_rate(reversed_history, "USD", "INR", clock=deterministic_clock)
        assert rate.rate == Decimal("83.50")


class TestLatestRatesForCurrency:

    def test_both_directions_newest_first(self, usd_inr_history):
        rates = latest_rates_for_currency(usd_inr_history, "USD")
        assert [(r.pair, r.effective_date) for r in rates] == [
            (("USD", "INR"), date(2024, 12, 1)),
            (("INR", "USD"), date(2024, 8, 1)),
            (("USD", "INR"), date(2024, 7, 1)),
            (("USD", "INR"), date(2024, 1, 1)),
        ]

    def test_uninvolved_currency(self, usd_inr_history):
        assert latest_rates_for_currency(usd_inr_history, "PHP") == []


class TestPairValidation:

    def test_distinct_pair(self):
        validate_exchange_rate_pair("USD", "INR")

    def test_same_currency(self):
        with pytest.raises(InvalidExchangeRateError, match="From and to currencies must be different"):
            validate_exchange_rate_pair("PHP", "PHP")
