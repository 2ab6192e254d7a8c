"""Calendar helpers: what "today" means for the lending rules."""

from __future__ import annotations

from datetime import date, datetime
from typing import Callable, Optional

import pytz

Clock = Callable[[], date]


def today_in(timezone_name: Optional[str] = None) -> date:
    """Return the current date in ``timezone_name`` (UTC when unset)."""
    timezone = pytz.timezone(timezone_name or 'UTC')
    return datetime.now(timezone).date()


def make_clock(timezone_name: Optional[str] = None) -> Clock:
    """Build a zero-argument clock bound to a timezone.

    Unknown timezone names fail here rather than on the first loan.
    """
    pytz.timezone(timezone_name or 'UTC')

    def clock() -> date:
        return today_in(timezone_name)

    return clock


class FixedClock:
    """Clock frozen on a date until moved; used by scripts and tests."""

    def __init__(self, current: date):
        self.current = current

    def __call__(self) -> date:
        return self.current

    def set(self, current: date) -> None:
        self.current = current
