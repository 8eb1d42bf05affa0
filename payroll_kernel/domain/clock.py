"""
Clock -- injectable source of "now" for payroll rules.

Responsibility:
    Age limits on a date of birth, the current tax year, the exchange rate
    in force and rate-cache expiry all depend on the current date or time.
    They read it from a Clock passed in by the caller rather than from
    ``datetime.now()`` or ``date.today()``.

Architecture position:
    Kernel > Domain.  ``SystemClock`` is the only place that touches the
    real system time.

Invariants enforced:
    - ``now()`` is timezone-aware.
    - ``today()`` is the calendar date of ``now()`` in the clock's zone, so
      an employee in Manila and one in Sydney can be evaluated against
      their own date.
"""

from abc import ABC, abstractmethod
from datetime import date, datetime, timedelta, timezone, tzinfo

# Fixed instant used by tests unless a case needs another one
DEFAULT_TEST_TIME = datetime(2024, 10, 1, 10, 0, 0, tzinfo=timezone.utc)


class Clock(ABC):
    """Source of the current instant."""

    @abstractmethod
    def now(self) -> datetime:
        ...

    def today(self) -> date:
        return self.now().date()


class SystemClock(Clock):
    """Wall-clock time, reported in ``tz`` (UTC by default)."""

    def __init__(self, tz: tzinfo = timezone.utc):
        self._tz = tz

    def now(self) -> datetime:
        return datetime.now(self._tz)


class DeterministicClock(Clock):
    """
    Clock that only moves when told to.

    Starts at ``DEFAULT_TEST_TIME`` (2024-10-01 10:00 UTC) unless another
    aware datetime is given.
    """

    def __init__(self, fixed_time: datetime | None = None):
        self._current = fixed_time or DEFAULT_TEST_TIME

    def now(self) -> datetime:
        return self._current

    def set_time(self, time: datetime) -> None:
        self._current = time

    def advance(self, seconds: int = 1) -> None:
        """Move forward; rate-cache TTL tests step in seconds."""
        self._current += timedelta(seconds=seconds)
