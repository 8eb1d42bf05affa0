"""Services for the payroll kernel (stateful, collaborator-facing)."""

from payroll_kernel.services.conversion_service import (
    ConversionConfig,
    CurrencyConversionService,
    ExchangeRateSource,
    RateCache,
)

__all__ = [
    "ConversionConfig",
    "CurrencyConversionService",
    "ExchangeRateSource",
    "RateCache",
]
