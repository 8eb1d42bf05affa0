"""
Payroll Kernel

Pure, stateless building blocks shared by the HR/payroll administration
front-end:
- ISO 4217 currency registry with display symbols
- Currency arithmetic with explicit, precision-derived rounding
- Injectable clock for date-dependent validation
- Typed exceptions and structured JSON logging
"""

__version__ = "0.1.0"
