"""
Pytest fixtures for the payroll kernel test suite.

Provides:
- Deterministic clocks for date-dependent validators and caches
- The shipped regional configuration, and a writable copy of its tables
- Sample profiles, employment records and exchange-rate histories
"""

import shutil
from datetime import date, datetime, timezone
from decimal import Decimal
from pathlib import Path

import pytest

from payroll_config import clear_config_cache, get_active_config
from payroll_kernel.domain.clock import DeterministicClock
from payroll_kernel.domain.values import ExchangeRate
from payroll_kernel.logging_config import LogContext, reset_logging
from payroll_modules.profile.models import (
    Address,
    CountryRef,
    EmergencyContact,
    EmploymentRecord,
    ProfileData,
)

SHIPPED_CONFIG_DIR = Path(__file__).resolve().parent.parent / "payroll_config" / "data"


@pytest.fixture(autouse=True)
def _isolate_global_state():
    """Reset cached configuration and logging between tests."""
    clear_config_cache()
    yield
    clear_config_cache()
    LogContext.clear()
    reset_logging()


# Clock fixtures


@pytest.fixture
def deterministic_clock():
    """Provide a deterministic clock for testing (2024-10-01 10:00 UTC)."""
    return DeterministicClock()


@pytest.fixture
def today(deterministic_clock) -> date:
    return deterministic_clock.today()


# Configuration fixtures


@pytest.fixture
def regional_config():
    """The regional configuration shipped with the package."""
    return get_active_config()


@pytest.fixture
def config_dir(tmp_path) -> Path:
    """A writable copy of the shipped tables."""
    target = tmp_path / "regional"
    shutil.copytree(SHIPPED_CONFIG_DIR, target)
    return target


# Domain fixtures


@pytest.fixture
def complete_profile() -> ProfileData:
    """A profile that satisfies every onboarding group."""
    return ProfileData(
        first_name="Priya",
        last_name="Raman",
        date_of_birth="1990-05-14",
        gender="female",
        nationality="Indian",
        personal_mobile="+91 98765 43210",
        personal_email="priya.raman@example.com",
        present_address=Address(
            address_line1="12 MG Road",
            city="Bengaluru",
            state_province="Karnataka",
            postal_code="560001",
            country="India",
        ),
        emergency_contacts=(
            EmergencyContact(
                name="Arun Raman",
                relationship="Spouse",
                phone_number="+91 91234 56789",
                is_primary=True,
            ),
        ),
    )


@pytest.fixture
def employment_records() -> list[EmploymentRecord]:
    india = CountryRef(id="c-in", code="IN", name="India")
    philippines = CountryRef(id="c-ph", code="PH", name="Philippines")
    return [
        EmploymentRecord(id="er-1", status="offboarding", country=india),
        EmploymentRecord(id="er-2", status="active", country=philippines),
        EmploymentRecord(id="er-3", status="active", country=india),
        EmploymentRecord(id="er-4", status="terminated", country=CountryRef("c-au", "AU", "Australia")),
        EmploymentRecord(id="er-5", status="onboarding", country=None),
    ]


@pytest.fixture
def usd_inr_history() -> list[ExchangeRate]:
    return [
        ExchangeRate("USD", "INR", Decimal("82.10"), date(2024, 1, 1)),
        ExchangeRate("USD", "INR", Decimal("83.50"), date(2024, 7, 1)),
        ExchangeRate("USD", "INR", Decimal("84.00"), date(2024, 9, 1), is_active=False),
        ExchangeRate("USD", "INR", Decimal("85.25"), date(2024, 12, 1)),
        ExchangeRate("INR", "USD", Decimal("0.012"), date(2024, 8, 1)),
    ]


@pytest.fixture
def fixed_time() -> datetime:
    return datetime(2024, 10, 1, 10, 0, 0, tzinfo=timezone.utc)
