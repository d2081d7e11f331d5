# Core Layer
# Configuration, clock and roster models for the dashboard engine

from .config import Settings, get_settings, safe_print, setup_logging
from .clock import Clock, FixedClock, SystemClock
from .models import CollegeProfile, RosterValidationError, StudentRecord

__all__ = [
    "Settings",
    "get_settings",
    "safe_print",
    "setup_logging",
    "Clock",
    "FixedClock",
    "SystemClock",
    "CollegeProfile",
    "RosterValidationError",
    "StudentRecord",
]
