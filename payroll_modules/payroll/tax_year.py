"""
Tax Years (``payroll_modules.payroll.tax_year``).

Responsibility
--------------
Validation and lookup rules for per-country tax years: date-range sanity,
overlap detection against existing years, and selection of the year that
covers a date or is flagged current.

Architecture position
---------------------
**Modules layer** -- pure functions over already-fetched ``TaxYear``
lists.  Persistence stays with the backend.

Invariants enforced
-------------------
* ``start_date`` is strictly before ``end_date``.
* Tax years of one country never overlap (inclusive ranges).
* At most one tax year per country is current after
  ``set_current_tax_year``.

Failure modes
-------------
* ``InvalidTaxYearError`` -- start not before end.
* ``TaxYearOverlapError`` -- ranges intersect within a country.
* ``TaxYearNotFoundError`` -- no current or covering year.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, replace
from datetime import date
from typing import Any

from payroll_kernel.domain.clock import Clock, SystemClock
from payroll_kernel.exceptions import (
    InvalidTaxYearError,
    TaxYearNotFoundError,
    TaxYearOverlapError,
)
from payroll_kernel.logging_config import get_logger

logger = get_logger("modules.payroll.tax_year")


@dataclass(frozen=True)
class TaxYear:
    """A country's tax year, e.g. India "2024-25" from 1 April to 31 March."""

    country_code: str
    year: str
    start_date: date
    end_date: date
    is_current: bool = False
    id: str | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> TaxYear:
        def _date(value: Any) -> date:
            return value if isinstance(value, date) else date.fromisoformat(str(value)[:10])

        return cls(
            country_code=data.get("countryCode") or data["country_code"],
            year=str(data["year"]),
            start_date=_date(data.get("startDate", data.get("start_date"))),
            end_date=_date(data.get("endDate", data.get("end_date"))),
            is_current=bool(data.get("isCurrent", data.get("is_current", False))),
            id=data.get("id"),
        )

    def covers(self, day: date) -> bool:
        return self.start_date <= day <= self.end_date

    def overlaps(self, other: TaxYear) -> bool:
        return self.start_date <= other.end_date and other.start_date <= self.end_date


def validate_tax_year(tax_year: TaxYear) -> None:
    if tax_year.start_date >= tax_year.end_date:
        raise InvalidTaxYearError(
            tax_year.year,
            tax_year.start_date.isoformat(),
            tax_year.end_date.isoformat(),
        )


def check_tax_year_overlap(new: TaxYear, existing: Iterable[TaxYear]) -> None:
    """Raise if ``new`` intersects any other tax year of the same country."""
    validate_tax_year(new)
    for other in existing:
        if other.country_code != new.country_code:
            continue
        if new.id is not None and other.id == new.id:
            continue
        if new.overlaps(other):
            logger.warning(
                "tax_year_overlap_detected",
                extra={
                    "country_code": new.country_code,
                    "year": new.year,
                    "existing_year": other.year,
                },
            )
            raise TaxYearOverlapError(new.year, other.year, new.country_code)


def find_tax_year_for_date(
    tax_years: Iterable[TaxYear], country_code: str, on: date
) -> TaxYear | None:
    for tax_year in tax_years:
        if tax_year.country_code == country_code and tax_year.covers(on):
            return tax_year
    return None


def find_current_tax_year(
    tax_years: Iterable[TaxYear],
    country_code: str,
    *,
    clock: Clock | None = None,
) -> TaxYear:
    """
    The country's current tax year.

    A year flagged ``is_current`` wins; otherwise the year covering the
    clock's date is used.
    """
    candidates = [t for t in tax_years if t.country_code == country_code]
    for tax_year in candidates:
        if tax_year.is_current:
            return tax_year

    today = (clock or SystemClock()).today()
    covering = find_tax_year_for_date(candidates, country_code, today)
    if covering is None:
        raise TaxYearNotFoundError(country_code, today.isoformat())
    return covering


def set_current_tax_year(tax_years: Iterable[TaxYear], target: TaxYear) -> list[TaxYear]:
    """Mark ``target`` current and clear the flag on the country's other years."""
    updated: list[TaxYear] = []
    for tax_year in tax_years:
        if tax_year.country_code != target.country_code:
            updated.append(tax_year)
            continue
        is_target = tax_year == target or (target.id is not None and tax_year.id == target.id)
        updated.append(replace(tax_year, is_current=is_target))
    logger.info(
        "tax_year_set_current",
        extra={"country_code": target.country_code, "year": target.year},
    )
    return updated
