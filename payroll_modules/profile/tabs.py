"""
Profile Tabs (``payroll_modules.profile.tabs``).

Responsibility
--------------
Resolves which sections of the profile editor a viewer sees, and whether
the profile must be loaded through the admin endpoint.

Architecture position
---------------------
**Modules layer** -- pure functions.  The caller supplies roles and the
``has_employment_records`` flag from ``extract_employment_countries``.

Invariants enforced
-------------------
* Output preserves catalogue order regardless of filter order.
* Base visibility is applied before include/exclude filters; a filter can
  hide a visible tab but never reveal a hidden one.
* In onboarding mode with no include list, only the onboarding tab set is
  offered.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

from payroll_kernel.logging_config import get_logger
from payroll_modules.profile.config import DEFAULT_TAB_RULES, TabVisibilityRules
from payroll_modules.profile.models import ProfileMode, ProfileTabName

logger = get_logger("modules.profile.tabs")


@dataclass(frozen=True)
class TabDefinition:
    name: ProfileTabName
    label: str


TAB_CATALOGUE: tuple[TabDefinition, ...] = (
    TabDefinition(ProfileTabName.CORE, "Basic Information"),
    TabDefinition(ProfileTabName.PERSONAL, "Personal Details"),
    TabDefinition(ProfileTabName.ADDRESS, "Address"),
    TabDefinition(ProfileTabName.GOVERNMENT_IDS, "Government IDs"),
    TabDefinition(ProfileTabName.EMERGENCY, "Emergency Contacts"),
    TabDefinition(ProfileTabName.BANKING, "Banking"),
    TabDefinition(ProfileTabName.DOCUMENTS, "Documents"),
    TabDefinition(ProfileTabName.PREFERENCES, "Preferences"),
    TabDefinition(ProfileTabName.ROLES_PERMISSIONS, "Roles & Permissions"),
)

ONBOARDING_TABS: frozenset[ProfileTabName] = frozenset({
    ProfileTabName.CORE,
    ProfileTabName.PERSONAL,
    ProfileTabName.ADDRESS,
    ProfileTabName.GOVERNMENT_IDS,
    ProfileTabName.EMERGENCY,
    ProfileTabName.BANKING,
})


def _tab_names(tabs: Iterable[ProfileTabName | str] | None) -> frozenset[ProfileTabName]:
    if not tabs:
        return frozenset()
    return frozenset(t if isinstance(t, ProfileTabName) else ProfileTabName(t) for t in tabs)


def _is_base_visible(
    tab: ProfileTabName,
    mode: ProfileMode,
    roles: frozenset[str],
    has_employment_records: bool,
    rules: TabVisibilityRules,
) -> bool:
    if tab is ProfileTabName.GOVERNMENT_IDS and rules.government_ids_require_employment:
        return has_employment_records
    if tab is ProfileTabName.BANKING and rules.banking_requires_employment:
        return has_employment_records
    if tab is ProfileTabName.ROLES_PERMISSIONS:
        return bool(roles & rules.roles_permissions_roles)
    if tab is ProfileTabName.DOCUMENTS:
        if mode is ProfileMode.ONBOARDING:
            return rules.show_documents_in_onboarding
        return rules.show_documents_in_profile
    return True


def resolve_visible_tabs(
    mode: ProfileMode | str,
    roles: Iterable[str],
    has_employment_records: bool,
    include_tabs: Iterable[ProfileTabName | str] | None = None,
    exclude_tabs: Iterable[ProfileTabName | str] | None = None,
    rules: TabVisibilityRules = DEFAULT_TAB_RULES,
) -> list[TabDefinition]:
    """Visible tabs in catalogue order."""
    mode = mode if isinstance(mode, ProfileMode) else ProfileMode(mode)
    role_set = frozenset(roles)
    include = _tab_names(include_tabs)
    exclude = _tab_names(exclude_tabs)
    if not include and mode is ProfileMode.ONBOARDING:
        include = ONBOARDING_TABS

    visible = [
        tab
        for tab in TAB_CATALOGUE
        if _is_base_visible(tab.name, mode, role_set, has_employment_records, rules)
        and (not include or tab.name in include)
        and tab.name not in exclude
    ]
    logger.debug(
        "profile_tabs_resolved",
        extra={
            "mode": mode,
            "has_employment_records": has_employment_records,
            "visible_tabs": [t.name.value for t in visible],
        },
    )
    return visible


def should_use_admin_endpoint(
    target_user_id: str | None,
    current_user_id: str | None,
    roles: Iterable[str],
    rules: TabVisibilityRules = DEFAULT_TAB_RULES,
) -> bool:
    """Admin/HR viewing someone else's profile loads it through the admin endpoint."""
    if not target_user_id:
        return False
    if not (frozenset(roles) & rules.roles_permissions_roles):
        return False
    return target_user_id != current_user_id
