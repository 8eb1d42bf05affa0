"""
Payroll Module (``payroll_modules.payroll``).

Responsibility
--------------
Country-level payroll rules used by payroll configuration screens:
which statutory components apply, which exchange rate is in force, and
which tax year is current.

Architecture position
---------------------
**Modules layer** -- pure selection and validation over data fetched
elsewhere.  Raises typed ``payroll_kernel.exceptions`` errors when the
data needed to answer is missing.
"""

from payroll_modules.payroll.exchange_rates import (
    find_current_rate,
    latest_rates_for_currency,
    validate_exchange_rate_pair,
)
from payroll_modules.payroll.statutory import (
    StatutoryComponentType,
    get_statutory_components_for_country,
    is_statutory_component_applicable,
)
from payroll_modules.payroll.tax_year import (
    TaxYear,
    check_tax_year_overlap,
    find_current_tax_year,
    find_tax_year_for_date,
    set_current_tax_year,
    validate_tax_year,
)

__all__ = [
    "StatutoryComponentType",
    "TaxYear",
    "check_tax_year_overlap",
    "find_current_rate",
    "find_current_tax_year",
    "find_tax_year_for_date",
    "get_statutory_components_for_country",
    "is_statutory_component_applicable",
    "latest_rates_for_currency",
    "set_current_tax_year",
    "validate_exchange_rate_pair",
    "validate_tax_year",
]
