"""
payroll_config -- single public entrypoint for regional payroll configuration.

Responsibility:
    Provides the ONLY way to obtain the regional tables at runtime through
    ``get_active_config()``.  Profile and payroll modules never open the
    YAML files themselves.

Architecture position:
    Configuration -- YAML tables, load-time validation.  Sits above
    ``payroll_kernel`` and below ``payroll_modules``.  The kernel MUST
    NEVER import from ``payroll_config``.

Invariants enforced:
    - Single entrypoint: all runtime configuration flows through
      ``get_active_config()``.
    - Load-time validation: tables that fail
      ``validate_configuration`` are never returned.
    - Immutability: the returned configuration is frozen and its tables
      are read-only mappings, so sharing one cached instance is safe.

Failure modes:
    - ``FileNotFoundError`` -- a table file is missing.
    - ``ConfigurationError`` -- structural validation failed.

Audit relevance:
    Every load emits a ``PAYROLL_CONFIG_TRACE`` log entry carrying the
    source directory, checksum and table sizes.
"""

from __future__ import annotations

import logging
from functools import lru_cache
from pathlib import Path

from payroll_config.loader import load_regional_configuration
from payroll_config.schema import (
    DEFAULT_COUNTRY,
    FieldValidationDef,
    GovernmentIDField,
    PostalCodeRule,
    RegionalConfiguration,
    StatutoryComponentType,
)
from payroll_config.validator import validate_configuration
from payroll_kernel.exceptions import ConfigurationError

_logger = logging.getLogger("payroll_kernel.config")

# Default tables shipped with the package
_DEFAULT_CONFIG_DIR = Path(__file__).parent / "data"

__all__ = [
    "DEFAULT_COUNTRY",
    "FieldValidationDef",
    "GovernmentIDField",
    "PostalCodeRule",
    "RegionalConfiguration",
    "StatutoryComponentType",
    "clear_config_cache",
    "get_active_config",
]


def get_active_config(config_dir: Path | None = None) -> RegionalConfiguration:
    """The ONLY public configuration entrypoint.

    Guarantees:
        - The returned configuration has passed ``validate_configuration``.
        - Repeated calls for the same directory return the same instance.

    Raises:
        FileNotFoundError: If a table file is missing.
        ConfigurationError: If validation reports errors.
    """
    resolved = (config_dir or _DEFAULT_CONFIG_DIR).resolve()
    return _load_validated(str(resolved))


def clear_config_cache() -> None:
    """Drop cached configurations. FOR TESTING ONLY."""
    _load_validated.cache_clear()


@lru_cache(maxsize=8)
def _load_validated(config_dir: str) -> RegionalConfiguration:
    config = load_regional_configuration(Path(config_dir))

    validation = validate_configuration(config)
    for warning in validation.warnings:
        _logger.warning("payroll_config_warning", extra={"detail": warning})
    if not validation.is_valid:
        raise ConfigurationError(config_dir, validation.errors)

    _logger.info(
        "PAYROLL_CONFIG_TRACE",
        extra={
            "trace_type": "PAYROLL_CONFIG_TRACE",
            "config_source": config.source,
            "checksum": config.checksum,
            "government_id_countries": len(config.government_id_fields),
            "statutory_countries": len(config.statutory_components),
            "postal_code_countries": len(config.postal_code_rules),
        },
    )
    return config
