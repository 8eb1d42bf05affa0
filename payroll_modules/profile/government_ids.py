"""
Country Field Registry (``payroll_modules.profile.government_ids``).

Responsibility
--------------
Answers "which government identification fields must this employee fill
in?" from the countries of their employment records, and validates the
entered values against each field's format.

Architecture position
---------------------
**Modules layer** -- pure lookups over ``payroll_config.get_active_config()``.
No I/O beyond the cached configuration load.

Invariants enforced
-------------------
* Unknown country codes fall back to the ``DEFAULT`` entry; lookup never
  fails and never returns an empty list.
* Merging is first-wins by field ``name`` in the order countries are
  given, so merging is idempotent under repeated codes.
* A blank value is valid unless the field is required.

Failure modes
-------------
* None at runtime; broken tables are rejected when configuration loads.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping

from payroll_config import (
    DEFAULT_COUNTRY,
    GovernmentIDField,
    RegionalConfiguration,
    get_active_config,
)
from payroll_kernel.logging_config import get_logger
from payroll_modules.profile.models import FieldValidationResult, FormValidationResult

logger = get_logger("modules.profile.government_ids")


def _config(config: RegionalConfiguration | None) -> RegionalConfiguration:
    return config if config is not None else get_active_config()


def get_country_fields(
    country_code: str, config: RegionalConfiguration | None = None
) -> tuple[GovernmentIDField, ...]:
    """Fields for ``country_code`` (exact match), else the DEFAULT fields."""
    table = _config(config).government_id_fields
    fields = table.get(country_code)
    if fields is None:
        return table[DEFAULT_COUNTRY]
    return fields


def get_merged_country_fields(
    country_codes: Iterable[str], config: RegionalConfiguration | None = None
) -> list[GovernmentIDField]:
    """
    Union of the fields of every country, first occurrence of a name wins.

    ``["IN", "PH"]`` yields pan, aadhaar, pfNumber, uan, tin (India's TIN),
    sss, philhealth, pagibig.
    """
    cfg = _config(config)
    merged: list[GovernmentIDField] = []
    seen: set[str] = set()
    for code in country_codes:
        for f in get_country_fields(code, cfg):
            if f.name not in seen:
                seen.add(f.name)
                merged.append(f)
    return merged


def validate_field(field: GovernmentIDField, value: str | None) -> FieldValidationResult:
    """Validate one entered value against its field definition."""
    if value is None or value.strip() == "":
        if field.required:
            return FieldValidationResult.fail(field.name, f"{field.label} is required")
        return FieldValidationResult.ok(field.name)

    if field.validation is not None and not field.validation.matches(value):
        return FieldValidationResult.fail(
            field.name,
            field.validation.message or f"Invalid {field.label} format",
        )

    return FieldValidationResult.ok(field.name)


def validate_government_id_fields(
    fields: Iterable[GovernmentIDField], values: Mapping[str, str | None]
) -> FormValidationResult:
    results = [(f.name, validate_field(f, values.get(f.name) or "")) for f in fields]
    outcome = FormValidationResult.from_results(results)
    if not outcome.valid:
        logger.info(
            "government_id_validation_failed",
            extra={"invalid_fields": sorted(outcome.errors)},
        )
    return outcome


def _is_blank(value: str | None) -> bool:
    return value is None or value.strip() == ""


def has_all_required_fields(
    fields: Iterable[GovernmentIDField], values: Mapping[str, str | None]
) -> bool:
    return all(not _is_blank(values.get(f.name)) for f in fields if f.required)


def get_missing_required_fields(
    fields: Iterable[GovernmentIDField], values: Mapping[str, str | None]
) -> list[str]:
    """Labels of required fields that have no value."""
    return [f.label for f in fields if f.required and _is_blank(values.get(f.name))]


def get_country_name(country_code: str, config: RegionalConfiguration | None = None) -> str:
    return _config(config).country_names.get(country_code, country_code)
