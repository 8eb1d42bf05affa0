"""
Profile Completion (``payroll_modules.profile.completion``).

Responsibility
--------------
Decides whether an onboarding profile is complete enough to submit, and
scores overall profile completion for the progress indicator.

Architecture position
---------------------
**Modules layer** -- pure functions over ``ProfileData``.

Invariants enforced
-------------------
* Onboarding is complete iff all four groups pass: core (first name,
  last name, date of birth), personal (personal mobile and email), present
  address (line 1, city, state/province, postal code, country) and at
  least one emergency contact.
* Completion status thresholds: 100 complete, >= 75 almost-complete,
  >= 40 in-progress, otherwise incomplete.

Failure modes
-------------
* None; missing data simply scores as incomplete.

Audit relevance
---------------
Each group outcome is logged at DEBUG so a rejected onboarding submission
can be explained without dumping the profile itself.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from payroll_kernel.domain.clock import Clock, SystemClock
from payroll_kernel.logging_config import get_logger
from payroll_modules.profile.config import DEFAULT_VALIDATION_CONFIG, ProfileValidationConfig
from payroll_modules.profile.models import FieldValidationResult, ProfileData
from payroll_modules.profile.validation import check_age_bounds, is_blank, parse_date_of_birth

logger = get_logger("modules.profile.completion")


class CompletionStatus(Enum):
    COMPLETE = "complete"
    ALMOST_COMPLETE = "almost-complete"
    IN_PROGRESS = "in-progress"
    INCOMPLETE = "incomplete"


@dataclass(frozen=True)
class OnboardingCompletionGroups:
    """Per-group outcome of the onboarding completeness check."""
    core: bool
    personal: bool
    address: bool
    emergency_contact: bool

    @property
    def is_complete(self) -> bool:
        return self.core and self.personal and self.address and self.emergency_contact

    @property
    def missing_groups(self) -> list[str]:
        labels = (
            (self.core, "Core fields (first name, last name, DOB)"),
            (self.personal, "Personal fields (personal mobile, personal email)"),
            (self.address, "Address fields"),
            (self.emergency_contact, "Emergency contact"),
        )
        return [label for passed, label in labels if not passed]


@dataclass(frozen=True)
class ProfileCompletionInfo:
    percentage: int
    status: CompletionStatus
    message: str
    color: str


def get_onboarding_completion_groups(profile: ProfileData) -> OnboardingCompletionGroups:
    address = profile.present_address
    groups = OnboardingCompletionGroups(
        core=bool(profile.first_name and profile.last_name and profile.date_of_birth),
        personal=bool(profile.personal_mobile and profile.personal_email),
        address=bool(
            address.address_line1
            and address.city
            and address.state_province
            and address.postal_code
            and address.country
        ),
        emergency_contact=len(profile.emergency_contacts) > 0,
    )
    logger.debug(
        "onboarding_completion_checked",
        extra={
            "core_complete": groups.core,
            "personal_complete": groups.personal,
            "address_complete": groups.address,
            "emergency_contact_count": len(profile.emergency_contacts),
            "missing_groups": groups.missing_groups,
        },
    )
    return groups


def validate_onboarding_completion(profile: ProfileData) -> bool:
    """True iff every onboarding group is complete."""
    return get_onboarding_completion_groups(profile).is_complete


def validate_onboarding_date_of_birth(
    dob: str | None,
    *,
    clock: Clock | None = None,
    config: ProfileValidationConfig = DEFAULT_VALIDATION_CONFIG,
) -> FieldValidationResult:
    """
    Onboarding wizard's date-of-birth rule.

    Stricter than ``validate_date_of_birth``: the minimum age is
    ``config.onboarding_min_age`` (18 by default).
    """
    if is_blank(dob):
        return FieldValidationResult.fail("dateOfBirth", "Date of birth is required")
    parsed = parse_date_of_birth(dob)
    if parsed is None:
        return FieldValidationResult.fail("dateOfBirth", "Invalid date format")
    today = (clock or SystemClock()).today()
    return check_age_bounds(
        parsed,
        today,
        config.onboarding_min_age,
        config.max_age,
        f"You must be at least {config.onboarding_min_age} years old",
    )


def _completion_checks(profile: ProfileData) -> list[bool]:
    address = profile.present_address
    return [
        bool(profile.first_name),
        bool(profile.last_name),
        bool(profile.date_of_birth),
        bool(profile.gender),
        bool(profile.nationality),
        bool(profile.personal_mobile),
        bool(profile.personal_email),
        bool(address.address_line1),
        bool(address.city),
        bool(address.state_province),
        bool(address.postal_code),
        bool(address.country),
        len(profile.emergency_contacts) > 0,
        bool(profile.banking.bank_account_number),
        bool(profile.banking.bank_name),
    ]


def calculate_profile_completion(profile: ProfileData) -> ProfileCompletionInfo:
    """Share of tracked profile fields that are filled, with a status band."""
    checks = _completion_checks(profile)
    percentage = round(100 * sum(checks) / len(checks))

    if percentage == 100:
        return ProfileCompletionInfo(
            percentage, CompletionStatus.COMPLETE, "Your profile is complete", "success"
        )
    if percentage >= 75:
        return ProfileCompletionInfo(
            percentage,
            CompletionStatus.ALMOST_COMPLETE,
            "Almost there! Just a few more details",
            "info",
        )
    if percentage >= 40:
        return ProfileCompletionInfo(
            percentage,
            CompletionStatus.IN_PROGRESS,
            "Good progress. Keep going",
            "warning",
        )
    return ProfileCompletionInfo(
        percentage,
        CompletionStatus.INCOMPLETE,
        "Please complete your profile",
        "error",
    )
