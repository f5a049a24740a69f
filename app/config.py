"""Environment-driven settings."""

from __future__ import annotations

import os

from app.domain.models import WorkingHours


def default_working_hours() -> WorkingHours:
    """Working-hours envelope used when the caller's preferences omit one."""
    return WorkingHours(
        start=os.environ.get("CALENDAR_WORKING_HOURS_START", "08:00"),
        end=os.environ.get("CALENDAR_WORKING_HOURS_END", "22:00"),
    )


def log_level() -> str:
    return os.environ.get("CALENDAR_LOG_LEVEL", "INFO").upper()
