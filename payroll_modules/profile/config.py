"""
Profile Configuration Schema.

Defines the tunable thresholds for profile validation and tab visibility.
Defaults match the behaviour of the profile page and onboarding wizard.
"""

from dataclasses import dataclass

from payroll_kernel.logging_config import get_logger

logger = get_logger("modules.profile.config")


@dataclass(frozen=True)
class ProfileValidationConfig:
    """
    Thresholds for field validators.

    The shared date-of-birth validator and the onboarding completion check
    use different minimum ages; both are configurable here:

        config = ProfileValidationConfig(min_age=18)
    """

    min_age: int = 16
    max_age: int = 100
    onboarding_min_age: int = 18
    min_phone_digits: int = 7

    def __post_init__(self):
        if self.min_age < 0:
            raise ValueError("min_age cannot be negative")
        if self.onboarding_min_age < 0:
            raise ValueError("onboarding_min_age cannot be negative")
        if self.max_age <= max(self.min_age, self.onboarding_min_age):
            raise ValueError("max_age must exceed min_age and onboarding_min_age")
        if self.min_phone_digits < 1:
            raise ValueError("min_phone_digits must be positive")
        logger.debug(
            "profile_validation_config_initialized",
            extra={
                "min_age": self.min_age,
                "max_age": self.max_age,
                "onboarding_min_age": self.onboarding_min_age,
                "min_phone_digits": self.min_phone_digits,
            },
        )


@dataclass(frozen=True)
class TabVisibilityRules:
    """Conditions under which optional profile tabs are shown."""

    government_ids_require_employment: bool = True
    banking_requires_employment: bool = True
    show_documents_in_profile: bool = False
    show_documents_in_onboarding: bool = False
    roles_permissions_roles: frozenset[str] = frozenset({"admin", "hr"})

    def __post_init__(self):
        if not self.roles_permissions_roles:
            raise ValueError("roles_permissions_roles cannot be empty")
        logger.debug(
            "tab_visibility_rules_initialized",
            extra={
                "show_documents_in_profile": self.show_documents_in_profile,
                "show_documents_in_onboarding": self.show_documents_in_onboarding,
                "roles_permissions_roles": sorted(self.roles_permissions_roles),
            },
        )


DEFAULT_VALIDATION_CONFIG = ProfileValidationConfig()
DEFAULT_TAB_RULES = TabVisibilityRules()
