"""
Profile Module (``payroll_modules.profile``).

Responsibility
--------------
Employee profile rules shared by the profile page and the onboarding
wizard: country-specific government-ID fields, field validators,
onboarding and profile completion, tab visibility, and the employment
countries that select which regional rules apply.

Architecture position
---------------------
**Modules layer** -- pure functions and frozen models over regional
configuration from ``payroll_config``.  No I/O, no persistence.

Invariants enforced
-------------------
* Validators return results and never raise for user input.
* Regional tables are read only through ``payroll_config.get_active_config``.
"""

from payroll_modules.profile.completion import (
    CompletionStatus,
    OnboardingCompletionGroups,
    ProfileCompletionInfo,
    calculate_profile_completion,
    get_onboarding_completion_groups,
    validate_onboarding_completion,
    validate_onboarding_date_of_birth,
)
from payroll_modules.profile.config import ProfileValidationConfig, TabVisibilityRules
from payroll_modules.profile.employment import (
    EmploymentCountries,
    employment_country_for_record,
    extract_employment_countries,
)
from payroll_modules.profile.government_ids import (
    get_country_fields,
    get_country_name,
    get_merged_country_fields,
    get_missing_required_fields,
    has_all_required_fields,
    validate_field,
    validate_government_id_fields,
)
from payroll_modules.profile.models import (
    Address,
    BankingInfo,
    EmergencyContact,
    EmploymentCountry,
    EmploymentRecord,
    FieldValidationResult,
    FormValidationResult,
    ProfileData,
    ProfileMode,
    ProfileTabName,
    UserPreferences,
)
from payroll_modules.profile.tabs import (
    TAB_CATALOGUE,
    TabDefinition,
    resolve_visible_tabs,
    should_use_admin_endpoint,
)
from payroll_modules.profile.validation import (
    normalize_phone_number,
    sanitize_input,
    validate_bank_account_number,
    validate_date_of_birth,
    validate_email,
    validate_iban,
    validate_phone_number,
    validate_postal_code,
    validate_profile_data,
    validate_required,
    validate_swift_code,
)

__all__ = [
    "Address",
    "BankingInfo",
    "CompletionStatus",
    "EmergencyContact",
    "EmploymentCountries",
    "EmploymentCountry",
    "EmploymentRecord",
    "FieldValidationResult",
    "FormValidationResult",
    "OnboardingCompletionGroups",
    "ProfileCompletionInfo",
    "ProfileData",
    "ProfileMode",
    "ProfileTabName",
    "ProfileValidationConfig",
    "TAB_CATALOGUE",
    "TabDefinition",
    "TabVisibilityRules",
    "UserPreferences",
    "calculate_profile_completion",
    "employment_country_for_record",
    "extract_employment_countries",
    "get_country_fields",
    "get_country_name",
    "get_merged_country_fields",
    "get_missing_required_fields",
    "get_onboarding_completion_groups",
    "has_all_required_fields",
    "normalize_phone_number",
    "resolve_visible_tabs",
    "sanitize_input",
    "should_use_admin_endpoint",
    "validate_bank_account_number",
    "validate_date_of_birth",
    "validate_email",
    "validate_field",
    "validate_government_id_fields",
    "validate_iban",
    "validate_onboarding_completion",
    "validate_onboarding_date_of_birth",
    "validate_phone_number",
    "validate_postal_code",
    "validate_profile_data",
    "validate_required",
    "validate_swift_code",
]
