"""
Statutory Components (``payroll_modules.payroll.statutory``).

Responsibility
--------------
Maps a country to the statutory payroll components (provident fund,
social security, health insurance, withholding tax...) that apply there.

Architecture position
---------------------
**Modules layer** -- pure lookup over the regional configuration.

Invariants enforced
-------------------
* Lookup is exact and case-sensitive: ``"in"`` is not ``"IN"``.
* Unknown or empty country codes return an empty list.  Unlike the
  government-ID registry there is no DEFAULT fallback: a country with no
  configured components has none.
* Components are returned in configured order.
"""

from __future__ import annotations

from payroll_config import RegionalConfiguration, StatutoryComponentType, get_active_config


def get_statutory_components_for_country(
    country_code: str, config: RegionalConfiguration | None = None
) -> list[StatutoryComponentType]:
    if not country_code:
        return []
    table = (config if config is not None else get_active_config()).statutory_components
    return [StatutoryComponentType(tag) for tag in table.get(country_code, ())]


def is_statutory_component_applicable(
    country_code: str,
    component_type: StatutoryComponentType,
    config: RegionalConfiguration | None = None,
) -> bool:
    return component_type in get_statutory_components_for_country(country_code, config)


__all__ = [
    "StatutoryComponentType",
    "get_statutory_components_for_country",
    "is_statutory_component_applicable",
]
