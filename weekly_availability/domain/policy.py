"""
Default schedule used when no schedule has been stored yet.
"""

from .models import DAYS_PER_WEEK, DayBucket, TimeRange, WeeklySchedule

DEFAULT_DAY_RANGE = TimeRange.parse("09:00:00", "17:00:00")

# Bucket indices without availability in the default week (first and last day).
WEEKEND_INDICES = (0, 6)


def default_schedule() -> WeeklySchedule:
    """
    Weekdays 09:00-17:00, weekend empty.

    Each weekday gets its own bucket, so editing one day never touches another.
    """
    return WeeklySchedule([
        DayBucket() if index in WEEKEND_INDICES else DayBucket([DEFAULT_DAY_RANGE])
        for index in range(DAYS_PER_WEEK)
    ])
