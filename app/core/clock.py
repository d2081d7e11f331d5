"""
Clock

Supplies the "current date" to the dashboard. The system clock reads the
wall time in the configured timezone; a fixed clock pins the date for tests
and for reproducing historical reports.
"""

from datetime import date, datetime
from typing import Optional, Protocol

import pytz


class Clock(Protocol):
    """Anything that can tell the dashboard what day it is."""

    def today(self) -> date: ...


class SystemClock:
    """Wall clock localized to a pytz timezone."""

    def __init__(self, timezone: str = "Asia/Kolkata"):
        self.tz = pytz.timezone(timezone)

    def today(self) -> date:
        return datetime.now(self.tz).date()


class FixedClock:
    """Clock that always returns the same date."""

    def __init__(self, current: date):
        if isinstance(current, datetime):
            current = current.date()
        self.current = current

    def today(self) -> date:
        return self.current


def get_clock(timezone: Optional[str] = None) -> SystemClock:
    """Build the default system clock from settings."""
    if timezone is None:
        from core.config import get_settings

        timezone = get_settings().timezone
    return SystemClock(timezone)
