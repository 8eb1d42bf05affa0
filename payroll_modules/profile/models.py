"""
Profile Domain Models (``payroll_modules.profile.models``).

Responsibility
--------------
Frozen dataclass value objects for the employee profile: personal and
contact fields, addresses, emergency contacts, banking details,
preferences, government-ID values, and the employment records that decide
which country rules apply.  Also the result records returned by every
validator in this package.

Architecture position
---------------------
**Modules layer** -- pure data definitions with ZERO I/O.

Invariants enforced
-------------------
* All models are ``frozen=True``; sequences are stored as tuples.
* ``from_dict`` accepts the camelCase keys used on the wire and
  ``to_dict`` emits them, so a round trip preserves the payload shape.
* Missing keys default to empty strings or empty collections; there is no
  ``None`` for text fields except ``date_of_birth``.

Failure modes
-------------
* ``ProfileTabName(x)`` / ``ProfileMode(x)`` raise ``ValueError`` for an
  unknown tag.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any, Mapping

from payroll_kernel.logging_config import get_logger

logger = get_logger("modules.profile.models")


class ProfileTabName(Enum):
    """Sections of the profile editor."""
    CORE = "core"
    PERSONAL = "personal"
    ADDRESS = "address"
    GOVERNMENT_IDS = "governmentIds"
    EMERGENCY = "emergency"
    BANKING = "banking"
    DOCUMENTS = "documents"
    PREFERENCES = "preferences"
    ROLES_PERMISSIONS = "rolesPermissions"


class ProfileMode(Enum):
    """Editor mode: the full profile page or the onboarding wizard."""
    FULL = "full"
    ONBOARDING = "onboarding"


def _text(data: dict[str, Any], key: str) -> str:
    value = data.get(key)
    return "" if value is None else str(value)


# ---------------------------------------------------------------------------
# Validation results
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class FieldValidationResult:
    """Outcome of validating one field."""

    field: str
    valid: bool
    message: str | None = None

    @classmethod
    def ok(cls, field_name: str) -> FieldValidationResult:
        return cls(field=field_name, valid=True)

    @classmethod
    def fail(cls, field_name: str, message: str) -> FieldValidationResult:
        return cls(field=field_name, valid=False, message=message)


@dataclass(frozen=True)
class FormValidationResult:
    """
    Aggregate outcome of validating a form.

    ``errors`` maps field name to the message of its last failing result.
    """

    valid: bool
    errors: dict[str, str] = field(default_factory=dict)
    field_results: tuple[FieldValidationResult, ...] = ()

    @classmethod
    def from_results(
        cls, results: list[tuple[str, FieldValidationResult]]
    ) -> FormValidationResult:
        """Aggregate ``(error_key, result)`` pairs in order."""
        errors: dict[str, str] = {}
        for key, result in results:
            if not result.valid and result.message:
                errors[key] = result.message
        return cls(
            valid=not errors,
            errors=errors,
            field_results=tuple(r for _, r in results),
        )


# ---------------------------------------------------------------------------
# Profile parts
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Address:
    """Postal address."""
    address_line1: str = ""
    address_line2: str = ""
    city: str = ""
    state_province: str = ""
    postal_code: str = ""
    country: str = ""

    @classmethod
    def from_dict(cls, data: dict[str, Any] | None) -> Address:
        data = data or {}
        return cls(
            address_line1=_text(data, "addressLine1"),
            address_line2=_text(data, "addressLine2"),
            city=_text(data, "city"),
            state_province=_text(data, "stateProvince"),
            postal_code=_text(data, "postalCode"),
            country=_text(data, "country"),
        )

    def to_dict(self) -> dict[str, str]:
        return {
            "addressLine1": self.address_line1,
            "addressLine2": self.address_line2,
            "city": self.city,
            "stateProvince": self.state_province,
            "postalCode": self.postal_code,
            "country": self.country,
        }


@dataclass(frozen=True)
class EmergencyContact:
    """Person to contact in an emergency."""
    name: str = ""
    relationship: str = ""
    phone_number: str = ""
    address: str = ""
    is_primary: bool = False
    id: str | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> EmergencyContact:
        return cls(
            name=_text(data, "name"),
            relationship=_text(data, "relationship"),
            phone_number=_text(data, "phoneNumber"),
            address=_text(data, "address"),
            is_primary=bool(data.get("isPrimary", False)),
            id=data.get("id"),
        )

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {
            "name": self.name,
            "relationship": self.relationship,
            "phoneNumber": self.phone_number,
            "address": self.address,
            "isPrimary": self.is_primary,
        }
        if self.id is not None:
            result["id"] = self.id
        return result


@dataclass(frozen=True)
class BankingInfo:
    """Salary payment details."""
    bank_account_number: str = ""
    ifsc_code: str = ""
    payment_mode: str = ""
    bank_name: str = ""
    account_type: str = ""
    bank_holder_name: str = ""
    iban: str = ""
    swift_code: str = ""
    routing_number: str = ""

    _WIRE_KEYS = (
        ("bank_account_number", "bankAccountNumber"),
        ("ifsc_code", "ifscCode"),
        ("payment_mode", "paymentMode"),
        ("bank_name", "bankName"),
        ("account_type", "accountType"),
        ("bank_holder_name", "bankHolderName"),
        ("iban", "iban"),
        ("swift_code", "swiftCode"),
        ("routing_number", "routingNumber"),
    )

    @classmethod
    def from_dict(cls, data: dict[str, Any] | None) -> BankingInfo:
        data = data or {}
        return cls(**{attr: _text(data, key) for attr, key in cls._WIRE_KEYS})

    def to_dict(self) -> dict[str, str]:
        return {key: getattr(self, attr) for attr, key in self._WIRE_KEYS}


@dataclass(frozen=True)
class UserPreferences:
    """Communication and workplace preferences."""
    language_preference: str = ""
    communication_preferences: tuple[str, ...] = ()
    notification_settings: tuple[str, ...] = ()
    work_phone: str = ""
    extension: str = ""
    seating_location: str = ""
    linkedin_url: str = ""
    blood_group: str = ""
    personal_description: str = ""
    expertise: str = ""

    @classmethod
    def from_dict(cls, data: dict[str, Any] | None) -> UserPreferences:
        data = data or {}
        return cls(
            language_preference=_text(data, "languagePreference"),
            communication_preferences=tuple(data.get("communicationPreferences") or ()),
            notification_settings=tuple(data.get("notificationSettings") or ()),
            work_phone=_text(data, "workPhone"),
            extension=_text(data, "extension"),
            seating_location=_text(data, "seatingLocation"),
            linkedin_url=_text(data, "linkedinUrl"),
            blood_group=_text(data, "bloodGroup"),
            personal_description=_text(data, "personalDescription"),
            expertise=_text(data, "expertise"),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "languagePreference": self.language_preference,
            "communicationPreferences": list(self.communication_preferences),
            "notificationSettings": list(self.notification_settings),
            "workPhone": self.work_phone,
            "extension": self.extension,
            "seatingLocation": self.seating_location,
            "linkedinUrl": self.linkedin_url,
            "bloodGroup": self.blood_group,
            "personalDescription": self.personal_description,
            "expertise": self.expertise,
        }


@dataclass(frozen=True)
class ProfileData:
    """
    An employee's profile as edited on the profile page and onboarding wizard.

    ``government_ids`` maps field names from the country field registry
    (``pan``, ``sss``, ``nationalId``...) to entered values.  It is stored
    as a read-only copy and left out of the hash.
    """

    first_name: str = ""
    last_name: str = ""
    middle_name: str = ""
    date_of_birth: str | None = None
    gender: str = ""
    marital_status: str = ""
    nationality: str = ""
    personal_mobile: str = ""
    personal_email: str = ""
    present_address: Address = field(default_factory=Address)
    permanent_address: Address = field(default_factory=Address)
    government_ids: Mapping[str, str] = field(default_factory=dict, hash=False)
    banking: BankingInfo = field(default_factory=BankingInfo)
    preferences: UserPreferences = field(default_factory=UserPreferences)
    emergency_contacts: tuple[EmergencyContact, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "government_ids", MappingProxyType(dict(self.government_ids)))

    @classmethod
    def from_dict(cls, data: dict[str, Any] | None) -> ProfileData:
        data = data or {}
        dob = data.get("dateOfBirth")
        return cls(
            first_name=_text(data, "firstName"),
            last_name=_text(data, "lastName"),
            middle_name=_text(data, "middleName"),
            date_of_birth=str(dob) if dob else None,
            gender=_text(data, "gender"),
            marital_status=_text(data, "maritalStatus"),
            nationality=_text(data, "nationality"),
            personal_mobile=_text(data, "personalMobile"),
            personal_email=_text(data, "personalEmail"),
            present_address=Address.from_dict(data.get("presentAddress")),
            permanent_address=Address.from_dict(data.get("permanentAddress")),
            government_ids={
                str(k): str(v)
                for k, v in (data.get("governmentIds") or {}).items()
                if v is not None
            },
            banking=BankingInfo.from_dict(data.get("banking")),
            preferences=UserPreferences.from_dict(data.get("preferences")),
            emergency_contacts=tuple(
                EmergencyContact.from_dict(c) for c in (data.get("emergencyContacts") or [])
            ),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "firstName": self.first_name,
            "lastName": self.last_name,
            "middleName": self.middle_name,
            "dateOfBirth": self.date_of_birth,
            "gender": self.gender,
            "maritalStatus": self.marital_status,
            "nationality": self.nationality,
            "personalMobile": self.personal_mobile,
            "personalEmail": self.personal_email,
            "presentAddress": self.present_address.to_dict(),
            "permanentAddress": self.permanent_address.to_dict(),
            "governmentIds": dict(self.government_ids),
            "banking": self.banking.to_dict(),
            "preferences": self.preferences.to_dict(),
            "emergencyContacts": [c.to_dict() for c in self.emergency_contacts],
        }


# ---------------------------------------------------------------------------
# Employment
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class CountryRef:
    """Country attached to an employment record."""
    id: str
    code: str
    name: str


@dataclass(frozen=True)
class EmploymentRecord:
    """The slice of an employment record that drives country rules."""
    id: str
    status: str
    country: CountryRef | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> EmploymentRecord:
        country_data = data.get("country")
        country = None
        if country_data:
            country = CountryRef(
                id=_text(country_data, "id"),
                code=_text(country_data, "code"),
                name=_text(country_data, "name"),
            )
        return cls(id=_text(data, "id"), status=_text(data, "status"), country=country)


@dataclass(frozen=True)
class EmploymentCountry:
    """A country the employee works in, with the status that won de-duplication."""
    id: str
    code: str
    name: str
    employment_status: str
