"""
Exchange Rate Selection (``payroll_modules.payroll.exchange_rates``).

Responsibility
--------------
Picks the exchange rate in force for a currency pair on a date from the
rate history fetched from the backend, and checks a pair before a new
rate is submitted.

Architecture position
---------------------
**Modules layer** -- pure selection over a list of ``ExchangeRate``.
Caching of current rates lives in
``payroll_kernel.services.conversion_service``.

Invariants enforced
-------------------
* Only active rates are candidates.
* The winner is the candidate with the latest ``effective_date`` on or
  before ``as_of``; future-dated rates are never selected.
* Pairs are directional; a USD->INR rate never answers INR->USD.

Failure modes
-------------
* ``ExchangeRateNotFoundError`` when no candidate exists.
* ``InvalidExchangeRateError`` for a same-currency pair.
"""

from __future__ import annotations

from collections.abc import Iterable
from datetime import date

from payroll_kernel.domain.clock import Clock, SystemClock
from payroll_kernel.domain.values import ExchangeRate
from payroll_kernel.exceptions import ExchangeRateNotFoundError, InvalidExchangeRateError
from payroll_kernel.logging_config import get_logger

logger = get_logger("modules.payroll.exchange_rates")


def validate_exchange_rate_pair(from_currency: str, to_currency: str) -> None:
    if from_currency == to_currency:
        raise InvalidExchangeRateError(
            from_currency, to_currency, "From and to currencies must be different"
        )


def find_current_rate(
    rates: Iterable[ExchangeRate],
    from_currency: str,
    to_currency: str,
    as_of: date | None = None,
    *,
    clock: Clock | None = None,
) -> ExchangeRate:
    """
    Rate in force for ``from_currency -> to_currency`` on ``as_of``.

    ``as_of`` defaults to the clock's current date.  Among rates sharing the
    winning effective date, the first one listed wins.
    """
    on = as_of if as_of is not None else (clock or SystemClock()).today()
    best: ExchangeRate | None = None
    for rate in rates:
        if not rate.is_active:
            continue
        if rate.from_currency != from_currency or rate.to_currency != to_currency:
            continue
        if rate.effective_date > on:
            continue
        if best is None or rate.effective_date > best.effective_date:
            best = rate

    if best is None:
        logger.warning(
            "exchange_rate_not_found",
            extra={
                "from_currency": from_currency,
                "to_currency": to_currency,
                "as_of": on,
            },
        )
        raise ExchangeRateNotFoundError(from_currency, to_currency, on.isoformat())
    return best


def latest_rates_for_currency(
    rates: Iterable[ExchangeRate], currency_code: str
) -> list[ExchangeRate]:
    """Active rates involving ``currency_code`` in either direction, newest first."""
    involved = [
        r
        for r in rates
        if r.is_active and currency_code in (r.from_currency, r.to_currency)
    ]
    return sorted(involved, key=lambda r: r.effective_date, reverse=True)
