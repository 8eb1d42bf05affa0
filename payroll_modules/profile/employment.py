"""
Employment Countries (``payroll_modules.profile.employment``).

Responsibility
--------------
Derives the set of countries an employee currently works in from their
employment records.  The country codes drive which government-ID fields
are requested; ``has_employment_records`` gates the Government IDs and
Banking tabs.

Architecture position
---------------------
**Modules layer** -- pure functions over already-fetched records.

Invariants enforced
-------------------
* Only records with status onboarding, active or offboarding count.
* Records without a country (or with an empty country code) are ignored.
* One entry per country code; on collision the higher status wins
  (active > onboarding > offboarding), ties keep the first record.
* Output preserves the order in which each country first appeared.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

from payroll_kernel.logging_config import get_logger
from payroll_modules.profile.models import EmploymentCountry, EmploymentRecord

logger = get_logger("modules.profile.employment")

STATUS_PRIORITY: dict[str, int] = {
    "active": 3,
    "onboarding": 2,
    "offboarding": 1,
}

RELEVANT_STATUSES = frozenset(STATUS_PRIORITY)


@dataclass(frozen=True)
class EmploymentCountries:
    countries: tuple[EmploymentCountry, ...]

    @property
    def country_codes(self) -> list[str]:
        return [c.code for c in self.countries]

    @property
    def has_employment_records(self) -> bool:
        return len(self.countries) > 0

    @property
    def has_onboarding_record(self) -> bool:
        return any(c.employment_status == "onboarding" for c in self.countries)


def employment_country_for_record(record: EmploymentRecord) -> EmploymentCountry | None:
    """Country of a single record regardless of status; None without a country."""
    if record.country is None or not record.country.code:
        return None
    return EmploymentCountry(
        id=record.country.id,
        code=record.country.code,
        name=record.country.name,
        employment_status=record.status,
    )


def extract_employment_countries(records: Iterable[EmploymentRecord]) -> EmploymentCountries:
    by_code: dict[str, EmploymentCountry] = {}
    considered = 0
    for record in records:
        if record.status not in RELEVANT_STATUSES:
            continue
        considered += 1
        candidate = employment_country_for_record(record)
        if candidate is None:
            continue
        existing = by_code.get(candidate.code)
        if existing is None or (
            STATUS_PRIORITY[candidate.employment_status]
            > STATUS_PRIORITY.get(existing.employment_status, 0)
        ):
            by_code[candidate.code] = candidate

    result = EmploymentCountries(countries=tuple(by_code.values()))
    logger.debug(
        "employment_countries_extracted",
        extra={
            "relevant_records": considered,
            "country_codes": result.country_codes,
        },
    )
    return result
