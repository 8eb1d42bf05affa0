"""
Values -- Immutable, self-validating payroll value objects.

Responsibility:
    Provides the Currency and ExchangeRate records that the backend hands to
    the payroll configuration screens.  Unlike ``CurrencyRegistry`` (a fixed
    display table), these carry whatever the backend has configured,
    including each currency's own ``decimal_places``.

Architecture position:
    Kernel > Domain -- pure functional core, zero I/O.

Invariants enforced:
    - ``Currency.decimal_places`` is a non-negative integer.
    - ``ExchangeRate.rate`` is a positive Decimal and the pair is directional
      between two distinct currencies.  The reverse rate is derived, never
      stored.

Failure modes:
    - InvalidCurrencyError on a malformed currency definition.
    - InvalidExchangeRateError on a zero/negative rate or same-currency pair.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from decimal import Decimal, InvalidOperation
from typing import Any

from payroll_kernel.domain.currency import CurrencyRegistry
from payroll_kernel.domain.money import format_reverse_rate
from payroll_kernel.exceptions import InvalidCurrencyError, InvalidExchangeRateError


@dataclass(frozen=True, slots=True)
class Currency:
    """
    Currency as configured for payroll.

    Contract:
        ``code`` is unique (ISO 4217-like), ``decimal_places`` governs every
        formatting and rounding operation performed in this currency.
    """

    code: str
    name: str
    symbol: str
    decimal_places: int = 2

    def __post_init__(self) -> None:
        if not self.code or not isinstance(self.code, str):
            raise InvalidCurrencyError(str(self.code), "code must be a non-empty string")
        if (
            isinstance(self.decimal_places, bool)
            or not isinstance(self.decimal_places, int)
            or self.decimal_places < 0
        ):
            raise InvalidCurrencyError(
                self.code, f"decimal_places must be an integer >= 0, got {self.decimal_places!r}"
            )

    @classmethod
    def from_code(cls, code: str) -> Currency:
        """Build a Currency from the built-in registry."""
        info = CurrencyRegistry.get_info(code)
        if info is None:
            raise InvalidCurrencyError(str(code), "not a supported currency code")
        return cls(
            code=info.code,
            name=info.name,
            symbol=info.symbol,
            decimal_places=info.decimal_places,
        )

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Currency:
        """Build from a backend payload (camelCase keys accepted)."""
        code = data["code"]
        return cls(
            code=code,
            name=data.get("name") or CurrencyRegistry.get_display_name(code),
            symbol=data.get("symbol") or CurrencyRegistry.get_symbol(code),
            decimal_places=int(
                data.get("decimalPlaces", data.get("decimal_places", 2))
            ),
        )

    def __str__(self) -> str:
        return self.code


@dataclass(frozen=True, slots=True)
class ExchangeRate:
    """
    Directional exchange rate: 1 unit of from_currency = rate units of to_currency.

    Non-goals:
        - Does NOT store the reverse rate; ``inverse()`` derives it.
        - Does NOT select the current rate among many (see
          ``payroll_modules.payroll.exchange_rates``).
    """

    from_currency: str
    to_currency: str
    rate: Decimal
    effective_date: date
    is_active: bool = True

    def __post_init__(self) -> None:
        if not isinstance(self.rate, Decimal):
            try:
                object.__setattr__(self, "rate", Decimal(str(self.rate)))
            except (InvalidOperation, ValueError) as e:
                raise InvalidExchangeRateError(
                    self.from_currency, self.to_currency, f"not a number: {self.rate!r}"
                ) from e
        if not self.rate.is_finite() or self.rate <= 0:
            raise InvalidExchangeRateError(
                self.from_currency, self.to_currency, f"rate must be positive: {self.rate}"
            )
        if self.from_currency == self.to_currency:
            raise InvalidExchangeRateError(
                self.from_currency, self.to_currency, "From and to currencies must be different"
            )
        if isinstance(self.effective_date, str):
            object.__setattr__(self, "effective_date", date.fromisoformat(self.effective_date))

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ExchangeRate:
        """Build from a backend payload carrying nested currency objects or codes."""

        def _code(key: str) -> str:
            nested = data.get(key)
            if isinstance(nested, dict):
                return nested["code"]
            return data[f"{key}Code"] if f"{key}Code" in data else data[key]

        effective = data.get("effectiveDate", data.get("effective_date"))
        if isinstance(effective, str):
            effective = date.fromisoformat(effective[:10])
        return cls(
            from_currency=_code("fromCurrency"),
            to_currency=_code("toCurrency"),
            rate=data["rate"],
            effective_date=effective,
            is_active=bool(data.get("isActive", data.get("is_active", True))),
        )

    @property
    def pair(self) -> tuple[str, str]:
        return (self.from_currency, self.to_currency)

    @property
    def cache_key(self) -> str:
        return f"{self.from_currency}-{self.to_currency}"

    def inverse(self) -> ExchangeRate:
        """The derived reverse rate (1 / rate), same effective date."""
        return ExchangeRate(
            from_currency=self.to_currency,
            to_currency=self.from_currency,
            rate=Decimal(1) / self.rate,
            effective_date=self.effective_date,
            is_active=self.is_active,
        )

    @property
    def reverse_rate_display(self) -> str:
        """Reverse rate at six fixed decimals, for rate inspection screens."""
        return format_reverse_rate(self.rate)

    def __str__(self) -> str:
        return f"{self.from_currency}/{self.to_currency} = {self.rate}"
