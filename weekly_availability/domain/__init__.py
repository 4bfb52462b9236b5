"""
Domain layer - Pure schedule logic without I/O.
"""

from .day_rules import (
    append_range,
    can_append,
    disable_day,
    enable_day,
    next_range,
    remove_range_at,
    replace_ranges,
    set_day_enabled,
)
from .exceptions import ParseError, ScheduleAPIError, ScheduleError, ScheduleFormatError
from .locale import LocaleProvider, PendulumLocaleProvider
from .models import DayBucket, TimeOfDay, TimeRange, WeeklySchedule
from .policy import DEFAULT_DAY_RANGE, default_schedule
from .slot_generator import TimeOption, TimeSlotGenerator, generate_catalog, options_filtered

__all__ = [
    "DayBucket",
    "TimeOfDay",
    "TimeRange",
    "WeeklySchedule",
    "TimeOption",
    "TimeSlotGenerator",
    "generate_catalog",
    "options_filtered",
    "DEFAULT_DAY_RANGE",
    "default_schedule",
    "LocaleProvider",
    "PendulumLocaleProvider",
    "append_range",
    "can_append",
    "disable_day",
    "enable_day",
    "next_range",
    "remove_range_at",
    "replace_ranges",
    "set_day_enabled",
    "ParseError",
    "ScheduleAPIError",
    "ScheduleError",
    "ScheduleFormatError",
]
