"""
Profile Validation Rules (``payroll_modules.profile.validation``).

Responsibility
--------------
Field-level validators for contact, identity and banking inputs, and an
aggregate validator for a flat profile payload.  Also the two input
normalizers the forms apply before saving.

Architecture position
---------------------
**Modules layer** -- pure functions.  "Today" is read from an injected
``Clock``; postal-code formats come from the regional configuration.

Invariants enforced
-------------------
* No validator raises for bad input; each returns a
  ``FieldValidationResult`` with a user-facing message.
* Blank optional input is valid.  Date of birth is required by default.
* Age bounds are inclusive at the minimum: someone who turns 16 today
  passes the 16-year check.
* Countries without a postal-code rule skip format checking.

Failure modes
-------------
* ``ValueError`` only from ``ProfileValidationConfig`` construction.
"""

from __future__ import annotations

import re
from collections.abc import Iterable, Mapping
from datetime import date, datetime
from typing import Any

from payroll_config import RegionalConfiguration, get_active_config
from payroll_kernel.domain.clock import Clock, SystemClock
from payroll_modules.profile.config import DEFAULT_VALIDATION_CONFIG, ProfileValidationConfig
from payroll_modules.profile.models import FieldValidationResult, FormValidationResult

# Whole-value patterns: always applied with fullmatch.
_EMAIL = re.compile(r"[^\s@]+@[^\s@]+\.[^\s@]+")
_PHONE = re.compile(r"[0-9\s\-+()]+")
_NON_DIGIT = re.compile(r"[^0-9]")
_BANK_ACCOUNT = re.compile(r"[A-Z0-9]{4,}", re.IGNORECASE | re.ASCII)
_IBAN = re.compile(r"[A-Z]{2}[0-9]{2}[A-Z0-9]{1,30}")
_SWIFT = re.compile(r"[A-Z]{4}[A-Z]{2}[A-Z0-9]{2}([A-Z0-9]{3})?")
_WHITESPACE = re.compile(r"\s+")


def is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and value.strip() == "")


def validate_email(email: str | None) -> FieldValidationResult:
    if is_blank(email):
        return FieldValidationResult.fail("email", "Email is required")
    if not _EMAIL.fullmatch(email):
        return FieldValidationResult.fail("email", "Invalid email format")
    return FieldValidationResult.ok("email")


def validate_phone_number(
    phone: str | None,
    required: bool = False,
    config: ProfileValidationConfig = DEFAULT_VALIDATION_CONFIG,
) -> FieldValidationResult:
    """Permissive international format: digits, spaces, ``+-()``."""
    if is_blank(phone):
        if required:
            return FieldValidationResult.fail("phone", "Phone number is required")
        return FieldValidationResult.ok("phone")

    if not _PHONE.fullmatch(phone):
        return FieldValidationResult.fail("phone", "Invalid phone number format")

    if len(_NON_DIGIT.sub("", phone)) < config.min_phone_digits:
        return FieldValidationResult.fail("phone", "Phone number too short")

    return FieldValidationResult.ok("phone")


def parse_date_of_birth(value: str | date | datetime) -> date | None:
    """ISO date or datetime string, ``date`` or ``datetime``; None if unparseable."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str):
        return None
    text = value.strip()
    try:
        return date.fromisoformat(text)
    except ValueError:
        pass
    try:
        return datetime.fromisoformat(text).date()
    except ValueError:
        return None


def years_before(day: date, years: int) -> date:
    """Same calendar day ``years`` earlier; 29 February maps to 28 February."""
    try:
        return day.replace(year=day.year - years)
    except ValueError:
        return day.replace(year=day.year - years, day=28)


def check_age_bounds(
    dob: date,
    today: date,
    min_age: int,
    max_age: int,
    min_age_message: str,
) -> FieldValidationResult:
    """Future, minimum-age and maximum-age checks for a parsed date of birth."""
    if dob > today:
        return FieldValidationResult.fail(
            "dateOfBirth", "Date of birth cannot be in the future"
        )
    if dob > years_before(today, min_age):
        return FieldValidationResult.fail("dateOfBirth", min_age_message)
    if dob < years_before(today, max_age):
        return FieldValidationResult.fail("dateOfBirth", "Invalid date of birth")
    return FieldValidationResult.ok("dateOfBirth")


def validate_date_of_birth(
    dob: str | date | datetime | None,
    required: bool = True,
    *,
    clock: Clock | None = None,
    config: ProfileValidationConfig = DEFAULT_VALIDATION_CONFIG,
) -> FieldValidationResult:
    if is_blank(dob):
        if required:
            return FieldValidationResult.fail("dateOfBirth", "Date of birth is required")
        return FieldValidationResult.ok("dateOfBirth")

    parsed = parse_date_of_birth(dob)
    if parsed is None:
        return FieldValidationResult.fail("dateOfBirth", "Invalid date format")

    today = (clock or SystemClock()).today()
    return check_age_bounds(
        parsed,
        today,
        config.min_age,
        config.max_age,
        f"Must be at least {config.min_age} years old",
    )


def validate_required(
    field_name: str, value: Any, label: str | None = None
) -> FieldValidationResult:
    if is_blank(value):
        return FieldValidationResult.fail(field_name, f"{label or field_name} is required")
    return FieldValidationResult.ok(field_name)


def validate_postal_code(
    postal_code: str | None,
    country_code: str | None = None,
    required: bool = False,
    config: RegionalConfiguration | None = None,
) -> FieldValidationResult:
    if is_blank(postal_code):
        if required:
            return FieldValidationResult.fail("postalCode", "Postal code is required")
        return FieldValidationResult.ok("postalCode")

    if country_code:
        rules = (config if config is not None else get_active_config()).postal_code_rules
        rule = rules.get(country_code)
        if rule is not None and not rule.matches(postal_code):
            return FieldValidationResult.fail("postalCode", rule.message)

    return FieldValidationResult.ok("postalCode")


def validate_bank_account_number(
    account_number: str | None, required: bool = False
) -> FieldValidationResult:
    if is_blank(account_number):
        if required:
            return FieldValidationResult.fail("accountNumber", "Account number is required")
        return FieldValidationResult.ok("accountNumber")
    if not _BANK_ACCOUNT.fullmatch(account_number):
        return FieldValidationResult.fail(
            "accountNumber",
            "Invalid account number format (minimum 4 alphanumeric characters)",
        )
    return FieldValidationResult.ok("accountNumber")


def validate_iban(iban: str | None, required: bool = False) -> FieldValidationResult:
    if is_blank(iban):
        if required:
            return FieldValidationResult.fail("iban", "IBAN is required")
        return FieldValidationResult.ok("iban")
    normalized = _WHITESPACE.sub("", iban).upper()
    if not _IBAN.fullmatch(normalized):
        return FieldValidationResult.fail("iban", "Invalid IBAN format")
    return FieldValidationResult.ok("iban")


def validate_swift_code(swift: str | None, required: bool = False) -> FieldValidationResult:
    if is_blank(swift):
        if required:
            return FieldValidationResult.fail("swiftCode", "SWIFT/BIC code is required")
        return FieldValidationResult.ok("swiftCode")
    if not _SWIFT.fullmatch(swift.upper()):
        return FieldValidationResult.fail(
            "swiftCode", "Invalid SWIFT/BIC code format (8 or 11 characters)"
        )
    return FieldValidationResult.ok("swiftCode")


def validate_profile_data(
    profile_data: Mapping[str, Any],
    required_fields: Iterable[str] = (),
    *,
    clock: Clock | None = None,
    config: ProfileValidationConfig = DEFAULT_VALIDATION_CONFIG,
    regional_config: RegionalConfiguration | None = None,
) -> FormValidationResult:
    """
    Validate a flat profile payload keyed by camelCase field names.

    Runs required checks first, then format checks for ``email``,
    ``phone``/``phoneNumber`` (reported under ``phone``), ``dateOfBirth``
    and ``postalCode`` (using ``countryCode``), each only when present.
    """
    results: list[tuple[str, FieldValidationResult]] = []

    for name in required_fields:
        results.append((name, validate_required(name, profile_data.get(name))))

    if profile_data.get("email"):
        results.append(("email", validate_email(profile_data["email"])))

    phone = profile_data.get("phone") or profile_data.get("phoneNumber")
    if phone:
        results.append(("phone", validate_phone_number(phone, config=config)))

    if profile_data.get("dateOfBirth"):
        results.append((
            "dateOfBirth",
            validate_date_of_birth(profile_data["dateOfBirth"], clock=clock, config=config),
        ))

    if profile_data.get("postalCode"):
        results.append((
            "postalCode",
            validate_postal_code(
                profile_data["postalCode"],
                profile_data.get("countryCode"),
                config=regional_config,
            ),
        ))

    return FormValidationResult.from_results(results)


def sanitize_input(value: str | None) -> str:
    """Trim and collapse internal whitespace runs to single spaces."""
    if not value:
        return ""
    return _WHITESPACE.sub(" ", value.strip())


def normalize_phone_number(phone: str | None) -> str:
    """Digits only, keeping a leading ``+``."""
    if not phone:
        return ""
    trimmed = phone.strip()
    if trimmed.startswith("+"):
        return "+" + _NON_DIGIT.sub("", trimmed[1:])
    return _NON_DIGIT.sub("", trimmed)
