"""
Money (``payroll_kernel.domain.money``).

Responsibility
--------------
Currency arithmetic, formatting and parsing for payroll screens: rounding
to a currency's precision, converting with an exchange rate, percentage
and tax math, and the user-facing string forms of amounts.

Architecture position
---------------------
**Kernel > Domain** -- pure functions.  No I/O, no clock, no network.
Rate lookup and caching live in
``payroll_kernel.services.conversion_service``.

Invariants enforced
-------------------
* Every result is ``Decimal`` rounded **half away from zero**
  (``ROUND_HALF_UP``) to exactly the requested decimal places.
* Inputs may be ``Decimal``, ``int``, ``float`` or numeric ``str``.  Floats
  enter through ``Decimal(str(x))`` so ``100.126`` rounds as typed.
* Precision comes from a ``Currency`` (or registry ``CurrencyInfo``, or a
  bare currency code) or from an explicit ``decimal_places`` integer.

Failure modes
-------------
* Unparseable, NaN or infinite input -> ``Decimal("0")``, never an
  exception.  ``validate_currency_amount`` is the operation that reports
  bad input, as a result object.
* Division by zero -> ``Decimal("0")``.
* Non-positive rate in ``format_reverse_rate`` -> ``"-"``.
* Negative ``decimal_places`` -> ``ValueError`` (programming error).

Audit relevance
---------------
Amounts displayed on payroll configuration screens and converted between
payroll currencies pass through here, so display and arithmetic always
agree on the rounding rule.
"""

from __future__ import annotations

import re
from collections.abc import Iterable
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Any, Protocol, Union

from payroll_kernel.domain.currency import CurrencyRegistry

ZERO = Decimal("0")

# Display precision for reverse exchange rates
REVERSE_RATE_DECIMAL_PLACES = 6

AmountLike = Union[Decimal, int, float, str]


class CurrencyLike(Protocol):
    """Anything carrying a code, a symbol and a precision."""

    code: str
    symbol: str
    decimal_places: int


PrecisionLike = Union[int, str, CurrencyLike, None]

_NUMERIC = re.compile(r"[-+]?(?:\d+(?:\.\d*)?|\.\d+)")
_SEPARATORS = re.compile(r"[,\s]")


@dataclass(frozen=True, slots=True)
class CurrencyValidationResult:
    """Outcome of ``validate_currency_amount``."""

    valid: bool
    error: str | None = None

    def __bool__(self) -> bool:
        return self.valid


# ---------------------------------------------------------------------------
# Coercion helpers
# ---------------------------------------------------------------------------


def _to_decimal(value: Any) -> Decimal | None:
    """Exact Decimal for a numeric input, or None when not a finite number."""
    if isinstance(value, bool):
        return None
    if isinstance(value, Decimal):
        result = value
    elif isinstance(value, int):
        result = Decimal(value)
    elif isinstance(value, float):
        result = Decimal(str(value))
    elif isinstance(value, str):
        try:
            result = Decimal(value.strip())
        except InvalidOperation:
            return None
    else:
        return None
    return result if result.is_finite() else None


def _coerce(value: Any) -> Decimal:
    result = _to_decimal(value)
    return ZERO if result is None else result


def _decimal_places(precision: PrecisionLike) -> int:
    if precision is None:
        return CurrencyRegistry.DEFAULT_DECIMAL_PLACES
    if isinstance(precision, bool):
        raise ValueError(f"decimal_places must be an integer, got {precision!r}")
    if isinstance(precision, int):
        places = precision
    elif isinstance(precision, str):
        places = CurrencyRegistry.get_decimal_places(precision)
    else:
        places = precision.decimal_places
    if places < 0:
        raise ValueError(f"decimal_places must be >= 0, got {places}")
    return places


def _quantum(places: int) -> Decimal:
    return Decimal(1).scaleb(-places)


def _symbol_and_code(currency: str | CurrencyLike) -> tuple[str, str]:
    if isinstance(currency, str):
        return CurrencyRegistry.get_symbol(currency), currency
    return currency.symbol, currency.code


# ---------------------------------------------------------------------------
# Rounding
# ---------------------------------------------------------------------------


def round_currency(amount: AmountLike, decimal_places: int = 2) -> Decimal:
    """
    Round half away from zero to ``decimal_places``.

    ``100.123 -> 100.12``, ``100.126 -> 100.13``, ``-100.126 -> -100.13``,
    ``100.5`` at 0 places ``-> 101``.
    """
    places = _decimal_places(decimal_places)
    return _coerce(amount).quantize(_quantum(places), rounding=ROUND_HALF_UP)


def round_to_currency(amount: AmountLike, currency: str | CurrencyLike) -> Decimal:
    """Round to the precision of ``currency``."""
    return round_currency(amount, _decimal_places(currency))


# ---------------------------------------------------------------------------
# Formatting and parsing
# ---------------------------------------------------------------------------


def format_currency(
    amount: AmountLike,
    currency: str | CurrencyLike,
    decimal_places: int | None = None,
    *,
    show_symbol: bool = True,
    show_code: bool = False,
) -> str:
    """
    Format an amount for display, e.g. ``₹1,000.00`` or ``-$500.00``.

    The sign precedes the symbol.  Grouping uses ``,`` and the fraction
    always has exactly ``decimal_places`` digits.  When ``decimal_places``
    is omitted the currency's own precision is used.
    """
    places = _decimal_places(currency if decimal_places is None else decimal_places)
    rounded = round_currency(amount, places)
    symbol, code = _symbol_and_code(currency)

    sign = "-" if rounded < 0 else ""
    body = f"{abs(rounded):,.{places}f}"
    text = f"{sign}{symbol if show_symbol else ''}{body}"
    if show_code:
        text = f"{text} {code}"
    return text


def parse_currency(text: Any, currency: str | CurrencyLike | None = None) -> Decimal:
    """
    Parse a formatted amount back to a Decimal.

    Removes currency symbols and codes (the given currency's plus every
    registry entry, longest token first), thousands separators and
    whitespace.  Anything that is not then a plain signed decimal number
    yields ``Decimal("0")``.
    """
    if not isinstance(text, str):
        return _coerce(text)

    tokens = set(CurrencyRegistry.all_symbols()) | set(CurrencyRegistry.all_codes())
    if currency is not None:
        tokens.update(t for t in _symbol_and_code(currency) if t)

    cleaned = text
    for token in sorted(tokens, key=lambda t: (-len(t), t)):
        cleaned = cleaned.replace(token, "")
    cleaned = _SEPARATORS.sub("", cleaned)

    if not _NUMERIC.fullmatch(cleaned):
        return ZERO
    return Decimal(cleaned)


def normalize_currency_amount(value: Any, decimal_places: int = 2) -> Decimal:
    """Accept a number or a formatted string and return the rounded amount."""
    if isinstance(value, str):
        return round_currency(parse_currency(value), decimal_places)
    return round_currency(_coerce(value), decimal_places)


def format_reverse_rate(rate: AmountLike) -> str:
    """
    Display ``1 / rate`` at six fixed decimals (``83.5 -> "0.011976"``).

    Display only: arithmetic always uses the stored directional rate.
    """
    value = _to_decimal(rate)
    if value is None or value <= 0:
        return "-"
    reverse = (Decimal(1) / value).quantize(
        _quantum(REVERSE_RATE_DECIMAL_PLACES), rounding=ROUND_HALF_UP
    )
    return f"{reverse:.{REVERSE_RATE_DECIMAL_PLACES}f}"


# ---------------------------------------------------------------------------
# Validation
# ---------------------------------------------------------------------------


def validate_currency_amount(
    value: Any,
    decimal_places: PrecisionLike = 2,
    min_amount: AmountLike | None = None,
    max_amount: AmountLike | None = None,
    *,
    allow_negative: bool = False,
) -> CurrencyValidationResult:
    """
    Check an entered amount against sign, range and precision constraints.

    Checks run in order and the first failure wins: numeric, sign, minimum,
    maximum, fraction digits.
    """
    places = _decimal_places(decimal_places)
    amount = _to_decimal(value)
    if amount is None:
        return CurrencyValidationResult(False, "Amount must be a valid number")

    if amount < 0 and not allow_negative:
        return CurrencyValidationResult(False, "Amount cannot be negative")

    if min_amount is not None and amount < _coerce(min_amount):
        return CurrencyValidationResult(False, f"Amount must be at least {min_amount}")

    if max_amount is not None and amount > _coerce(max_amount):
        return CurrencyValidationResult(False, f"Amount cannot exceed {max_amount}")

    exponent = amount.normalize().as_tuple().exponent
    fraction_digits = max(0, -exponent) if isinstance(exponent, int) else 0
    if fraction_digits > places:
        return CurrencyValidationResult(
            False, f"Amount cannot have more than {places} decimal places"
        )

    return CurrencyValidationResult(True)


# ---------------------------------------------------------------------------
# Arithmetic
# ---------------------------------------------------------------------------


def convert_currency(amount: AmountLike, rate: AmountLike, decimal_places: int = 2) -> Decimal:
    """``amount * rate`` rounded to the target precision."""
    return round_currency(_coerce(amount) * _coerce(rate), decimal_places)


def calculate_percentage(
    amount: AmountLike, percentage: AmountLike, decimal_places: int = 2
) -> Decimal:
    return round_currency(_coerce(amount) * _coerce(percentage) / 100, decimal_places)


def calculate_tax(amount: AmountLike, tax_rate: AmountLike, decimal_places: int = 2) -> Decimal:
    """Tax on ``amount`` at ``tax_rate`` percent."""
    return calculate_percentage(amount, tax_rate, decimal_places)


def calculate_net_amount(
    amount: AmountLike, tax_rate: AmountLike, decimal_places: int = 2
) -> Decimal:
    """``amount`` less its rounded tax."""
    tax = calculate_tax(amount, tax_rate, decimal_places)
    return round_currency(_coerce(amount) - tax, decimal_places)


def sum_currency_amounts(amounts: Iterable[AmountLike], decimal_places: int = 2) -> Decimal:
    total = sum((_coerce(a) for a in amounts), ZERO)
    return round_currency(total, decimal_places)


def subtract_currency_amounts(
    minuend: AmountLike, subtrahend: AmountLike, decimal_places: int = 2
) -> Decimal:
    return round_currency(_coerce(minuend) - _coerce(subtrahend), decimal_places)


def multiply_currency_amount(
    amount: AmountLike, multiplier: AmountLike, decimal_places: int = 2
) -> Decimal:
    return round_currency(_coerce(amount) * _coerce(multiplier), decimal_places)


def divide_currency_amount(
    amount: AmountLike, divisor: AmountLike, decimal_places: int = 2
) -> Decimal:
    """Rounded quotient; a zero divisor yields ``Decimal("0")``."""
    denominator = _coerce(divisor)
    if denominator == 0:
        return round_currency(ZERO, decimal_places)
    return round_currency(_coerce(amount) / denominator, decimal_places)


def compare_currency_amounts(
    a: AmountLike, b: AmountLike, decimal_places: PrecisionLike = 2
) -> int:
    """Compare after rounding both sides: -1, 0 or 1."""
    places = _decimal_places(decimal_places)
    left = round_currency(a, places)
    right = round_currency(b, places)
    if left < right:
        return -1
    if left > right:
        return 1
    return 0


# ---------------------------------------------------------------------------
# Registry lookups
# ---------------------------------------------------------------------------


def get_currency_symbol(code: str) -> str:
    """Symbol for a supported code; unknown codes return themselves."""
    return CurrencyRegistry.get_symbol(code)


def get_currency_display_name(code: str) -> str:
    return CurrencyRegistry.get_display_name(code)


def is_valid_currency_code(code: str) -> bool:
    """Case-sensitive membership in the supported currency set."""
    return CurrencyRegistry.is_valid(code)
