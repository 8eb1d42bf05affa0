"""
Payroll Modules.

Thin rule layers over the payroll kernel and regional configuration:

- Profile: government-ID fields, field validation, completion, tabs,
  employment countries
- Payroll: statutory components, exchange-rate selection, tax years
"""

from payroll_modules import payroll, profile

__all__ = ["payroll", "profile"]
