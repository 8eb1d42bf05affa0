"""
Typed Exception Hierarchy for the Payroll Kernel.

===============================================================================
WHEN EXCEPTIONS ARE RAISED
===============================================================================

Form input is NEVER validated by raising.  Field validators return
structured ``FieldValidationResult`` objects and numeric parsing coerces
garbage to ``Decimal("0")``.  Exceptions in this module are reserved for:

  1. Programming errors at a domain boundary (constructing a Currency with
     negative decimal places, an ExchangeRate with a zero rate).
  2. Missing collaborator data (no exchange rate for a pair, no tax year
     covering a date).
  3. Broken static configuration (a YAML table that fails validation).

Every exception carries a ``code`` class attribute (machine-readable) and
its context as attributes (never parsed out of the message).

===============================================================================
EXCEPTION HIERARCHY
===============================================================================

    PayrollKernelError (base)
    |
    +-- CurrencyError
    |   +-- InvalidCurrencyError
    |   +-- ExchangeRateNotFoundError
    |   +-- InvalidExchangeRateError
    |
    +-- TaxYearError
    |   +-- InvalidTaxYearError
    |   +-- TaxYearOverlapError
    |   +-- TaxYearNotFoundError
    |
    +-- ConfigurationError

===============================================================================
ERROR CODES - QUICK REFERENCE
===============================================================================

Category        | Code                        | When Raised
----------------|-----------------------------|-----------------------------------------
Currency        | INVALID_CURRENCY            | Malformed currency definition
                | EXCHANGE_RATE_NOT_FOUND     | No active rate for pair/date
                | INVALID_EXCHANGE_RATE       | Zero/negative rate or same-currency pair
----------------|-----------------------------|-----------------------------------------
Tax year        | INVALID_TAX_YEAR            | Start date not before end date
                | TAX_YEAR_OVERLAP            | Start date inside an existing tax year
                | TAX_YEAR_NOT_FOUND          | No tax year covers the requested date
----------------|-----------------------------|-----------------------------------------
Configuration   | CONFIGURATION_INVALID       | Regional YAML tables failed validation
"""


class PayrollKernelError(Exception):
    """
    Base exception for all payroll kernel errors.

    All subclasses must have a `code` class attribute for machine-readable
    error identification.
    """

    code: str = "PAYROLL_KERNEL_ERROR"


# Currency-related exceptions


class CurrencyError(PayrollKernelError):
    """Base exception for currency-related errors."""

    code: str = "CURRENCY_ERROR"


class InvalidCurrencyError(CurrencyError):
    """Currency definition is malformed."""

    code: str = "INVALID_CURRENCY"

    def __init__(self, currency: str, reason: str):
        self.currency = currency
        self.reason = reason
        super().__init__(f"Invalid currency {currency!r}: {reason}")


class ExchangeRateNotFoundError(CurrencyError):
    """No exchange rate available for the currency pair."""

    code: str = "EXCHANGE_RATE_NOT_FOUND"

    def __init__(self, from_currency: str, to_currency: str, as_of: str | None = None):
        self.from_currency = from_currency
        self.to_currency = to_currency
        self.as_of = as_of
        suffix = f" as of {as_of}" if as_of else ""
        super().__init__(
            f"No exchange rate found from {from_currency} to {to_currency}{suffix}"
        )


class InvalidExchangeRateError(CurrencyError):
    """Exchange rate value or pair is invalid."""

    code: str = "INVALID_EXCHANGE_RATE"

    def __init__(self, from_currency: str, to_currency: str, reason: str):
        self.from_currency = from_currency
        self.to_currency = to_currency
        self.reason = reason
        super().__init__(
            f"Invalid exchange rate {from_currency} -> {to_currency}: {reason}"
        )


# Tax year exceptions


class TaxYearError(PayrollKernelError):
    """Base exception for tax year errors."""

    code: str = "TAX_YEAR_ERROR"


class InvalidTaxYearError(TaxYearError):
    """Tax year date range is invalid."""

    code: str = "INVALID_TAX_YEAR"

    def __init__(self, year: str, start_date: str, end_date: str):
        self.year = year
        self.start_date = start_date
        self.end_date = end_date
        super().__init__(
            f"Start date must be before end date for tax year {year}: "
            f"{start_date} >= {end_date}"
        )


class TaxYearOverlapError(TaxYearError):
    """Tax year overlaps an existing tax year for the same country."""

    code: str = "TAX_YEAR_OVERLAP"

    def __init__(self, year: str, existing_year: str, country_code: str):
        self.year = year
        self.existing_year = existing_year
        self.country_code = country_code
        super().__init__(
            f"Tax year {year} overlaps with existing tax year {existing_year} "
            f"for country {country_code}"
        )


class TaxYearNotFoundError(TaxYearError):
    """No tax year covers the requested date."""

    code: str = "TAX_YEAR_NOT_FOUND"

    def __init__(self, country_code: str, on_date: str):
        self.country_code = country_code
        self.on_date = on_date
        super().__init__(
            f"No current tax year found for country {country_code} on {on_date}"
        )


# Configuration exceptions


class ConfigurationError(PayrollKernelError):
    """Regional configuration tables failed validation."""

    code: str = "CONFIGURATION_INVALID"

    def __init__(self, source: str, errors: list[str]):
        self.source = source
        self.errors = errors
        super().__init__(
            f"Configuration from {source} failed validation: "
            f"{len(errors)} error(s): {'; '.join(errors)}"
        )
