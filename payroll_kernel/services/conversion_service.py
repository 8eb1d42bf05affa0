"""
CurrencyConversionService -- cached amount conversion between currencies.

Responsibility:
    Converts payroll amounts from one currency to another using the current
    rate reported by an external rate source.  Rates are cached per
    directional pair so repeated conversions on a screen do not refetch.

Architecture position:
    Kernel > Services -- imperative shell.  Owns its ``RateCache``; there is
    no module-global cache.  The rate source and the clock are injected.

Invariants enforced:
    - Cache keys are directional: ``"INR-USD"`` and ``"USD-INR"`` are
      distinct entries.
    - An entry is served only while ``now - fetched_at < ttl``.
    - Same-currency conversion uses rate 1 and never calls the source.
    - Converted amounts are rounded half away from zero.

Failure modes:
    - ExchangeRateNotFoundError when the source has no rate for the pair
      (returns None or raises LookupError).  Nothing is cached on failure.
    - Any other exception raised by the source propagates unchanged.

Audit relevance:
    Each fetch from the source is logged with the pair and the rate used,
    so a converted figure on screen can be traced to its rate.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta
from decimal import Decimal
from typing import Protocol

from payroll_kernel.domain.clock import Clock, SystemClock
from payroll_kernel.domain.money import AmountLike, convert_currency
from payroll_kernel.domain.values import ExchangeRate
from payroll_kernel.exceptions import ExchangeRateNotFoundError
from payroll_kernel.logging_config import get_logger

logger = get_logger("services.conversion")


class ExchangeRateSource(Protocol):
    """External collaborator that knows the current rate for a pair."""

    def get_current_exchange_rate(
        self, from_currency: str, to_currency: str
    ) -> ExchangeRate | None: ...


@dataclass(frozen=True)
class ConversionConfig:
    """Tunables for ``CurrencyConversionService``."""

    cache_ttl_seconds: int = 300
    default_decimal_places: int = 2

    def __post_init__(self) -> None:
        if self.cache_ttl_seconds < 0:
            raise ValueError("cache_ttl_seconds cannot be negative")
        if self.default_decimal_places < 0:
            raise ValueError("default_decimal_places cannot be negative")
        logger.debug(
            "conversion_config_loaded",
            extra={
                "cache_ttl_seconds": self.cache_ttl_seconds,
                "default_decimal_places": self.default_decimal_places,
            },
        )


@dataclass
class _CacheEntry:
    rate: Decimal
    fetched_at: datetime


class RateCache:
    """TTL-bound cache of directional rates keyed ``"FROM-TO"``."""

    def __init__(self, ttl_seconds: int, clock: Clock):
        self._ttl = timedelta(seconds=ttl_seconds)
        self._clock = clock
        self._entries: dict[str, _CacheEntry] = {}

    @staticmethod
    def key(from_currency: str, to_currency: str) -> str:
        return f"{from_currency}-{to_currency}"

    def get(self, from_currency: str, to_currency: str) -> Decimal | None:
        """Fresh rate for the pair, or None.  Expired entries are evicted."""
        key = self.key(from_currency, to_currency)
        entry = self._entries.get(key)
        if entry is None:
            return None
        if self._clock.now() - entry.fetched_at >= self._ttl:
            del self._entries[key]
            return None
        return entry.rate

    def put(self, from_currency: str, to_currency: str, rate: Decimal) -> None:
        self._entries[self.key(from_currency, to_currency)] = _CacheEntry(
            rate=rate, fetched_at=self._clock.now()
        )

    def invalidate(self, from_currency: str, to_currency: str) -> bool:
        return self._entries.pop(self.key(from_currency, to_currency), None) is not None

    def clear(self) -> None:
        self._entries.clear()

    def __len__(self) -> int:
        return len(self._entries)


class CurrencyConversionService:
    """
    Convert amounts using cached current exchange rates.

    Contract:
        ``get_rate(from, to)`` returns the directional rate; ``convert``
        multiplies and rounds.

    Non-goals:
        - Does NOT choose among historical rates (see
          ``payroll_modules.payroll.exchange_rates``).
        - Does NOT derive a missing pair from its reverse.
    """

    def __init__(
        self,
        source: ExchangeRateSource,
        clock: Clock | None = None,
        config: ConversionConfig | None = None,
    ):
        self._source = source
        self._clock = clock or SystemClock()
        self._config = config or ConversionConfig()
        self._cache = RateCache(self._config.cache_ttl_seconds, self._clock)

    @property
    def cache(self) -> RateCache:
        return self._cache

    def get_rate(self, from_currency: str, to_currency: str) -> Decimal:
        if from_currency == to_currency:
            return Decimal("1")

        cached = self._cache.get(from_currency, to_currency)
        if cached is not None:
            return cached

        try:
            exchange_rate = self._source.get_current_exchange_rate(from_currency, to_currency)
        except LookupError as e:
            logger.warning(
                "exchange_rate_lookup_failed",
                extra={"from_currency": from_currency, "to_currency": to_currency},
            )
            raise ExchangeRateNotFoundError(from_currency, to_currency) from e

        if exchange_rate is None:
            logger.warning(
                "exchange_rate_missing",
                extra={"from_currency": from_currency, "to_currency": to_currency},
            )
            raise ExchangeRateNotFoundError(from_currency, to_currency)

        rate = exchange_rate.rate
        self._cache.put(from_currency, to_currency, rate)
        logger.info(
            "exchange_rate_fetched",
            extra={
                "from_currency": from_currency,
                "to_currency": to_currency,
                "rate": rate,
            },
        )
        return rate

    def convert(
        self,
        amount: AmountLike,
        from_currency: str,
        to_currency: str,
        decimal_places: int | None = None,
    ) -> Decimal:
        """Convert ``amount`` and round to ``decimal_places`` (default 2)."""
        places = (
            self._config.default_decimal_places if decimal_places is None else decimal_places
        )
        rate = self.get_rate(from_currency, to_currency)
        return convert_currency(amount, rate, places)
