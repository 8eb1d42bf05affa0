"""
Configuration Schema (``payroll_config.schema``).

Responsibility
--------------
Frozen dataclass definitions for the regional payroll configuration:
government identification fields, statutory component tags, postal-code
formats and country display names.  Every table produced by the loader is
an instance of these types.

Architecture position
---------------------
**Config layer** -- pure data definitions.  Imported by the loader, the
validator and ``payroll_modules``; depends on nothing in the repo.

Invariants enforced
-------------------
* All schema objects are ``frozen=True``: immutable once constructed.
* Per-country tables are exposed as ``MappingProxyType`` over tuples, so
  callers cannot mutate shared configuration.
* ``StatutoryComponentType`` is a closed vocabulary; wire values are the
  lowercase tags used in the YAML tables.
* Field and postal-code patterns must match the whole value, with no
  trailing newline allowed.  Shipped patterns spell digits as ``[0-9]``
  because ``\\d`` also matches Devanagari and Arabic-Indic digits.

Failure modes
-------------
* Construction with wrong types is not checked here; the validator is the
  structural gate.

Audit relevance
---------------
``RegionalConfiguration.checksum`` identifies the exact tables that were
in force when a profile or payroll setting was validated.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Mapping

DEFAULT_COUNTRY = "DEFAULT"


def pattern_matches(pattern: str, value: str, ignore_case: bool = False) -> bool:
    """Whole-value match of a configured pattern."""
    flags = re.IGNORECASE if ignore_case else 0
    return re.fullmatch(pattern, value, flags) is not None


class StatutoryComponentType(Enum):
    """Statutory payroll deductions and contributions."""

    # India
    EPF = "epf"
    ESI = "esi"
    PT = "pt"
    TDS = "tds"
    # Philippines
    SSS = "sss"
    PHILHEALTH = "philhealth"
    PAGIBIG = "pagibig"
    # Australia
    SUPERANNUATION = "superannuation"
    # Malaysia
    EPF_MY = "epf_my"
    SOCSO = "socso"
    EIS = "eis"
    # Singapore
    CPF = "cpf"


@dataclass(frozen=True)
class FieldValidationDef:
    """Regex a field value must match, with its failure message."""

    pattern: str
    message: str | None = None

    def matches(self, value: str) -> bool:
        return pattern_matches(self.pattern, value)


@dataclass(frozen=True)
class GovernmentIDField:
    """One government identification input for a country."""

    name: str
    label: str
    placeholder: str
    required: bool = False
    validation: FieldValidationDef | None = None
    helper_text: str | None = None


@dataclass(frozen=True)
class PostalCodeRule:
    """Postal code format for one country."""

    country_code: str
    pattern: str
    message: str
    ignore_case: bool = False

    def matches(self, value: str) -> bool:
        return pattern_matches(self.pattern, value, self.ignore_case)


def _empty_mapping() -> Mapping:
    return MappingProxyType({})


@dataclass(frozen=True)
class RegionalConfiguration:
    """
    The complete, immutable regional configuration.

    Contract
    --------
    * ``government_id_fields`` always contains ``DEFAULT`` once validated.
    * ``statutory_components`` has no fallback entry.
    * ``checksum`` is the SHA-256 of the canonical source tables.
    """

    government_id_fields: Mapping[str, tuple[GovernmentIDField, ...]] = field(
        default_factory=_empty_mapping
    )
    statutory_components: Mapping[str, tuple[str, ...]] = field(
        default_factory=_empty_mapping
    )
    postal_code_rules: Mapping[str, PostalCodeRule] = field(default_factory=_empty_mapping)
    country_names: Mapping[str, str] = field(default_factory=_empty_mapping)
    checksum: str = ""
    source: str = ""
