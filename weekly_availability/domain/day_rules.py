"""
Mutation rules for a single day of the weekly schedule.

All operations work in place and return the bucket they were given. Misuse
that a UI can trigger in normal operation (appending to an empty day, toggling
a day that is already in the requested state, appending past midnight) is a
silent no-op. Only an out-of-range index is an error.
"""

import logging
from typing import Iterable, Optional

from .models import DayBucket, TimeRange
from .policy import DEFAULT_DAY_RANGE

logger = logging.getLogger(__name__)

APPEND_LENGTH_MINUTES = 60


def enable_day(bucket: DayBucket) -> DayBucket:
    """Give an empty day the default range; leave an enabled day alone."""
    if not bucket.is_enabled:
        replace_ranges(bucket, [DEFAULT_DAY_RANGE])
    return bucket


def disable_day(bucket: DayBucket) -> DayBucket:
    """Remove every range of the day."""
    return replace_ranges(bucket, [])


def set_day_enabled(bucket: DayBucket, enabled: bool) -> DayBucket:
    """Checkbox toggle for a whole day."""
    return enable_day(bucket) if enabled else disable_day(bucket)


def next_range(bucket: DayBucket) -> Optional[TimeRange]:
    """
    The range ``append_range`` would add, or None.

    The candidate starts where the last range ends and lasts one hour. It is
    rejected when the day is empty or when it would end after midnight.
    """
    last = bucket.last()
    if last is None:
        return None

    candidate = TimeRange(start=last.end, end=last.end.add_minutes(APPEND_LENGTH_MINUTES))

    if candidate.end.is_after(last.end.day_end()):
        return None

    return candidate


def can_append(bucket: DayBucket) -> bool:
    return next_range(bucket) is not None


def append_range(bucket: DayBucket) -> DayBucket:
    """Append a one-hour range after the last one, unless it would cross midnight."""
    candidate = next_range(bucket)

    if candidate is None:
        if bucket.is_enabled:
            logger.debug("Append rejected: one hour after %s runs past midnight", bucket.last().end)
        else:
            logger.debug("Append ignored: day has no range to extend")
        return bucket

    bucket.append(candidate)
    return bucket


def remove_range_at(bucket: DayBucket, index: int) -> DayBucket:
    """
    Remove the range at ``index`` (0-based, insertion order).

    Raises:
        IndexError: If index is out of bounds
    """
    bucket.remove(index)
    return bucket


def replace_ranges(bucket: DayBucket, new_ranges: Iterable[TimeRange]) -> DayBucket:
    """Replace all ranges of the day. The new ranges are not validated."""
    bucket.replace(new_ranges)
    return bucket
