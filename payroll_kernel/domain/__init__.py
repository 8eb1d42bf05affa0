"""Pure domain layer of the payroll kernel: currencies, values, money math, clock."""
