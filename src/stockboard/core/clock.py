"""Wall clock abstraction so "now" can be replaced in tests."""

from datetime import datetime
from typing import Protocol

from stockboard.core.timezone import now_taipei


class Clock(Protocol):
    """Source of the current time."""

    def now(self) -> datetime:
        """Return the current time as an aware datetime."""
        ...


class SystemClock:
    """Clock backed by the system time, in Asia/Taipei."""

    def now(self) -> datetime:
        return now_taipei()
