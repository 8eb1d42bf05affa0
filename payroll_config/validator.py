"""
Configuration Validator (``payroll_config.validator``).

Responsibility
--------------
Checks a loaded ``RegionalConfiguration`` for structural integrity before
it is handed to the profile and payroll modules.

Architecture position
---------------------
**Config layer** -- load-time validation.  Called by
``payroll_config.get_active_config`` after loading.

Invariants enforced
-------------------
* A ``DEFAULT`` government-ID entry exists and is non-empty.
* Field names are unique within each country.
* Every validation and postal-code pattern compiles.
* Every statutory tag belongs to ``StatutoryComponentType``.

Failure modes
-------------
* ``ConfigValidationResult.errors``  -> configuration MUST NOT be used.
* ``ConfigValidationResult.warnings``  -> usable, but should be reviewed
  (for example a required field with no helper text).

Audit relevance
---------------
The result is a machine-readable record of configuration health.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field

from payroll_config.schema import (
    DEFAULT_COUNTRY,
    RegionalConfiguration,
    StatutoryComponentType,
)

_KNOWN_STATUTORY_TAGS = frozenset(t.value for t in StatutoryComponentType)


@dataclass
class ConfigValidationResult:
    """
    Result of configuration validation.

    Contract
    --------
    * ``is_valid`` returns ``True`` only when ``errors`` is empty.
    """

    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return len(self.errors) == 0

    def add_error(self, msg: str) -> None:
        self.errors.append(msg)

    def add_warning(self, msg: str) -> None:
        self.warnings.append(msg)


def _check_pattern(pattern: str, where: str, result: ConfigValidationResult) -> None:
    try:
        re.compile(pattern)
    except re.error as e:
        result.add_error(f"{where}: pattern {pattern!r} does not compile: {e}")
        return
    if "\\d" in pattern:
        result.add_warning(
            f"{where}: pattern {pattern!r} uses \\d, which also matches non-ASCII digits; use [0-9]"
        )


def validate_government_ids(
    config: RegionalConfiguration, result: ConfigValidationResult
) -> None:
    fields_by_country = config.government_id_fields
    if not fields_by_country.get(DEFAULT_COUNTRY):
        result.add_error(f"Government ID table must define a non-empty {DEFAULT_COUNTRY} entry")

    for code, fields in fields_by_country.items():
        seen: set[str] = set()
        for f in fields:
            if f.name in seen:
                result.add_error(f"Government ID field {f.name!r} duplicated for {code}")
            seen.add(f.name)
            if f.validation is not None:
                _check_pattern(f.validation.pattern, f"{code}.{f.name}", result)
            if f.required and not f.helper_text:
                result.add_warning(f"Required field {code}.{f.name} has no helper text")


def validate_statutory_components(
    config: RegionalConfiguration, result: ConfigValidationResult
) -> None:
    for code, tags in config.statutory_components.items():
        if code == DEFAULT_COUNTRY:
            result.add_error("Statutory component table must not define a DEFAULT entry")
        for tag in tags:
            if tag not in _KNOWN_STATUTORY_TAGS:
                result.add_error(f"Unknown statutory component {tag!r} for {code}")
        if len(set(tags)) != len(tags):
            result.add_error(f"Duplicate statutory components for {code}")


def validate_postal_code_rules(
    config: RegionalConfiguration, result: ConfigValidationResult
) -> None:
    for code, rule in config.postal_code_rules.items():
        _check_pattern(rule.pattern, f"postal code {code}", result)


def validate_configuration(config: RegionalConfiguration) -> ConfigValidationResult:
    """
    Validate a regional configuration.

    Postconditions:
        - Returns a ``ConfigValidationResult``; all checks run, errors are
          accumulated rather than raised.
    """
    result = ConfigValidationResult()
    validate_government_ids(config, result)
    validate_statutory_components(config, result)
    validate_postal_code_rules(config, result)
    return result
