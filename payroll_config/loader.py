"""
Configuration Loader (``payroll_config.loader``).

Responsibility
--------------
Reads the regional YAML tables from a configuration directory and parses
them into the frozen types of ``payroll_config.schema``.  Runtime callers
use ``payroll_config.get_active_config()``; this module is the parsing
step underneath it.

Architecture position
---------------------
**Config layer** -- infrastructure tooling.  No dependency on kernel or
modules.

Invariants enforced
-------------------
* Every parsed object is a frozen dataclass; every table is a
  ``MappingProxyType`` whose values are tuples.
* Country order in the YAML is preserved, and field order within a
  country is preserved (merge order depends on it).
* ``compute_checksum`` is a deterministic SHA-256 over the raw tables.

Failure modes
-------------
* Missing YAML file  -> ``FileNotFoundError`` propagates.
* Malformed YAML  -> ``yaml.YAMLError`` propagates.
* Missing required keys (``name``, ``label``, ``pattern``)  -> ``KeyError``.

Audit relevance
---------------
The checksum lets an auditor confirm which version of the regional tables
governed a validation run.
"""

from __future__ import annotations

import hashlib
import json
from pathlib import Path
from types import MappingProxyType
from typing import Any

import yaml

from payroll_config.schema import (
    FieldValidationDef,
    GovernmentIDField,
    PostalCodeRule,
    RegionalConfiguration,
)

GOVERNMENT_IDS_FILE = "government_ids.yaml"
STATUTORY_COMPONENTS_FILE = "statutory_components.yaml"
POSTAL_CODES_FILE = "postal_codes.yaml"
COUNTRIES_FILE = "countries.yaml"


def load_yaml_file(path: Path) -> dict[str, Any]:
    """
    Load a single YAML file and return its contents as a dict.

    Raises:
        FileNotFoundError: if the file does not exist.
        yaml.YAMLError: if the file contains invalid YAML.
    """
    with open(path, encoding="utf-8") as f:
        return yaml.safe_load(f) or {}


def parse_government_id_field(data: dict[str, Any]) -> GovernmentIDField:
    """Parse one field definition; ``name`` and ``label`` are required."""
    validation_data = data.get("validation")
    validation = None
    if validation_data and validation_data.get("pattern"):
        validation = FieldValidationDef(
            pattern=validation_data["pattern"],
            message=validation_data.get("message"),
        )
    return GovernmentIDField(
        name=data["name"],
        label=data["label"],
        placeholder=data.get("placeholder", ""),
        required=bool(data.get("required", False)),
        validation=validation,
        helper_text=data.get("helper_text"),
    )


def parse_government_ids(
    data: dict[str, Any],
) -> MappingProxyType[str, tuple[GovernmentIDField, ...]]:
    countries = data.get("countries") or {}
    return MappingProxyType({
        str(code): tuple(parse_government_id_field(f) for f in (fields or []))
        for code, fields in countries.items()
    })


def parse_statutory_components(data: dict[str, Any]) -> MappingProxyType[str, tuple[str, ...]]:
    countries = data.get("countries") or {}
    return MappingProxyType({
        str(code): tuple(str(tag) for tag in (tags or []))
        for code, tags in countries.items()
    })


def parse_postal_code_rules(data: dict[str, Any]) -> MappingProxyType[str, PostalCodeRule]:
    countries = data.get("countries") or {}
    return MappingProxyType({
        str(code): PostalCodeRule(
            country_code=str(code),
            pattern=rule["pattern"],
            message=rule.get("message", "Invalid postal code format"),
            ignore_case=bool(rule.get("ignore_case", False)),
        )
        for code, rule in countries.items()
    })


def parse_country_names(data: dict[str, Any]) -> MappingProxyType[str, str]:
    countries = data.get("countries") or {}
    return MappingProxyType({str(code): str(name) for code, name in countries.items()})


def compute_checksum(data: dict[str, Any]) -> str:
    """
    Compute SHA-256 checksum of canonical JSON serialization.

    Postconditions:
        - Identical ``data`` always produces identical checksums.
    """
    canonical = json.dumps(data, sort_keys=True, default=str)
    return hashlib.sha256(canonical.encode()).hexdigest()


def load_regional_configuration(config_dir: Path) -> RegionalConfiguration:
    """
    Load and parse all regional tables from ``config_dir``.

    Preconditions:
        - ``config_dir`` contains the four table files.
    Postconditions:
        - Returns an unvalidated ``RegionalConfiguration``; callers run
          ``payroll_config.validator.validate_configuration`` next.
    """
    raw = {
        "government_ids": load_yaml_file(config_dir / GOVERNMENT_IDS_FILE),
        "statutory_components": load_yaml_file(config_dir / STATUTORY_COMPONENTS_FILE),
        "postal_codes": load_yaml_file(config_dir / POSTAL_CODES_FILE),
        "countries": load_yaml_file(config_dir / COUNTRIES_FILE),
    }
    return RegionalConfiguration(
        government_id_fields=parse_government_ids(raw["government_ids"]),
        statutory_components=parse_statutory_components(raw["statutory_components"]),
        postal_code_rules=parse_postal_code_rules(raw["postal_codes"]),
        country_names=parse_country_names(raw["countries"]),
        checksum=compute_checksum(raw),
        source=str(config_dir),
    )
