"""
Domain models for a recurring weekly availability schedule.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from datetime import time
from typing import Any, Dict, Iterable, Iterator, List, Mapping, Optional, Sequence, Tuple, Union
from uuid import uuid4

import pendulum
from pendulum import DateTime

from .exceptions import ParseError, ScheduleFormatError
from .locale import LocaleProvider, PendulumLocaleProvider

logger = logging.getLogger(__name__)

TIME_FORMAT = "HH:mm:ss"
DAYS_PER_WEEK = 7

# Every parsed value lives on this day; arithmetic may move it onto the next one.
_ANCHOR = pendulum.datetime(2000, 1, 2)

_STRICT_PATTERN = re.compile(r"([0-9]{2}):([0-9]{2}):([0-9]{2})")
_LENIENT_PATTERN = re.compile(r"([0-9]{2}):([0-9]{2})(?::([0-9]{2}))?")


@dataclass(frozen=True, order=True)
class TimeOfDay:
    """
    Immutable wall-clock time without a calendar date.

    Values produced by parsing always lie in [00:00:00, 23:59:59]. Values
    produced by ``add_minutes`` may roll over into the following day, which is
    what the overnight guard of the day rules looks for.
    """
    moment: DateTime

    @classmethod
    def parse(cls, text: str, strict: bool = True) -> "TimeOfDay":
        """
        Parse ``HH:mm:ss`` text.

        Args:
            text: Time text, e.g. "09:00:00"
            strict: When False, "HH:mm" is accepted as well

        Returns:
            TimeOfDay instance

        Raises:
            ParseError: If the text does not match the expected format
        """
        pattern = _STRICT_PATTERN if strict else _LENIENT_PATTERN
        match = pattern.fullmatch(text) if isinstance(text, str) else None
        if match is None:
            raise ParseError(f"Invalid time '{text}', expected {TIME_FORMAT}")

        hour, minute, second = (int(part or 0) for part in match.groups())
        try:
            moment = _ANCHOR.at(hour, minute, second)
        except ValueError as exc:
            raise ParseError(f"Invalid time '{text}': {exc}") from exc

        return cls(moment=moment)

    @classmethod
    def of(cls, hour: int, minute: int = 0, second: int = 0) -> "TimeOfDay":
        """Build a time of day from its components."""
        return cls(moment=_ANCHOR.at(hour, minute, second))

    @classmethod
    def start_of_day(cls) -> "TimeOfDay":
        return cls(moment=_ANCHOR.start_of("day"))

    @classmethod
    def end_of_day(cls) -> "TimeOfDay":
        """The last second before midnight, 23:59:59."""
        return cls(moment=_ANCHOR.at(23, 59, 59))

    def day_end(self) -> "TimeOfDay":
        """End of the day this value falls on."""
        return TimeOfDay(moment=self.moment.start_of("day").at(23, 59, 59))

    @property
    def rolls_over(self) -> bool:
        """True if arithmetic moved this value past midnight."""
        return self.moment.date() != _ANCHOR.date()

    def add_minutes(self, minutes: int) -> "TimeOfDay":
        """Advance by ``minutes``; the result may cross into the next day."""
        return TimeOfDay(moment=self.moment.add(minutes=minutes))

    def is_before(self, other: "TimeOfDay") -> bool:
        return self.moment < other.moment

    def is_after(self, other: "TimeOfDay") -> bool:
        return self.moment > other.moment

    def format(self) -> str:
        """Render as HH:mm:ss (24-hour, zero-padded)."""
        return self.moment.format(TIME_FORMAT)

    def display_label(
        self,
        locale: str = "en",
        locale_provider: Optional[LocaleProvider] = None,
    ) -> str:
        """
        Locale formatted hour:minute label for pickers.

        Presentation only, never parse it back.
        """
        provider = locale_provider or PendulumLocaleProvider()
        return provider.time_label(self, locale)

    def to_time(self) -> time:
        return time(self.moment.hour, self.moment.minute, self.moment.second, self.moment.microsecond)

    def __str__(self) -> str:
        return self.format()

    def __repr__(self) -> str:
        suffix = " (+1 day)" if self.rolls_over else ""
        return f"TimeOfDay({self.format()}{suffix})"


@dataclass(frozen=True)
class TimeRange:
    """
    One bookable interval within a day.

    Not validated on construction: ranges loaded from storage are kept as-is.
    The day rules only ever create well-formed ranges.
    """
    start: TimeOfDay
    end: TimeOfDay

    @classmethod
    def parse(cls, start: str, end: str) -> "TimeRange":
        """Build a range from two strict HH:mm:ss strings."""
        return cls(start=TimeOfDay.parse(start), end=TimeOfDay.parse(end))

    def is_well_formed(self) -> bool:
        """Start before end, and the end does not run past the start's midnight."""
        return self.start.is_before(self.end) and not self.end.is_after(self.start.day_end())

    def overlaps(self, other: "TimeRange") -> bool:
        """Check if this range overlaps with another."""
        return self.start < other.end and self.end > other.start

    def to_payload(self) -> Dict[str, str]:
        return {"start": self.start.format(), "end": self.end.format()}

    @classmethod
    def from_payload(cls, data: Mapping[str, Any]) -> "TimeRange":
        """
        Parse a ``{"start": "HH:mm:ss", "end": "HH:mm:ss"}`` mapping.

        Raises:
            ScheduleFormatError: If the mapping lacks start or end
            ParseError: If a time is malformed
        """
        if not isinstance(data, Mapping):
            raise ScheduleFormatError(f"Time range must be a mapping, got {type(data).__name__}")
        try:
            start, end = data["start"], data["end"]
        except KeyError as exc:
            raise ScheduleFormatError(f"Time range is missing {exc.args[0]!r}: {dict(data)}") from exc
        return cls.parse(start, end)

    def __str__(self) -> str:
        return f"{self.start.format()} - {self.end.format()}"


def _new_key() -> str:
    return uuid4().hex


class DayBucket:
    """
    Ordered time ranges of one weekday, in insertion order.

    Each range carries a generated key that identifies it independently of its
    position, so removing a range never changes the keys of the others.
    """

    def __init__(self, ranges: Iterable[TimeRange] = ()):
        self._entries: List[Tuple[str, TimeRange]] = [(_new_key(), r) for r in ranges]

    @property
    def ranges(self) -> List[TimeRange]:
        return [time_range for _, time_range in self._entries]

    @property
    def keys(self) -> List[str]:
        return [key for key, _ in self._entries]

    @property
    def entries(self) -> List[Tuple[str, TimeRange]]:
        """(key, range) pairs in order."""
        return list(self._entries)

    @property
    def is_enabled(self) -> bool:
        return bool(self._entries)

    def last(self) -> Optional[TimeRange]:
        return self._entries[-1][1] if self._entries else None

    def append(self, time_range: TimeRange) -> str:
        """Append a range and return its key."""
        key = _new_key()
        self._entries.append((key, time_range))
        return key

    def remove(self, index: int) -> TimeRange:
        """
        Remove the range at ``index``.

        Raises:
            IndexError: If index is outside 0..len-1
        """
        if not 0 <= index < len(self._entries):
            raise IndexError(
                f"Range index {index} out of range for a day with {len(self._entries)} range(s)"
            )
        _, removed = self._entries.pop(index)
        return removed

    def replace(self, ranges: Iterable[TimeRange]) -> None:
        self._entries = [(_new_key(), r) for r in ranges]

    def index_of(self, key: str) -> int:
        """Current position of the range with ``key``."""
        for index, (entry_key, _) in enumerate(self._entries):
            if entry_key == key:
                return index
        raise KeyError(key)

    def copy(self) -> "DayBucket":
        bucket = DayBucket()
        bucket._entries = list(self._entries)
        return bucket

    def to_payload(self) -> List[Dict[str, str]]:
        return [time_range.to_payload() for time_range in self.ranges]

    @classmethod
    def from_payload(cls, data: Sequence[Mapping[str, Any]]) -> "DayBucket":
        if not isinstance(data, (list, tuple)):
            raise ScheduleFormatError(f"Day must be a list of time ranges, got {type(data).__name__}")
        return cls(TimeRange.from_payload(item) for item in data)

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[TimeRange]:
        return iter(self.ranges)

    def __getitem__(self, index: Union[int, slice]) -> Union[TimeRange, List[TimeRange]]:
        if isinstance(index, slice):
            return [time_range for _, time_range in self._entries[index]]
        return self._entries[index][1]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, DayBucket):
            return NotImplemented
        return self.ranges == other.ranges

    def __repr__(self) -> str:
        return f"DayBucket([{', '.join(str(r) for r in self.ranges)}])"


class WeeklySchedule:
    """
    Exactly seven day buckets.

    Index 0 is the first day of the locale's week (Sunday by default). The
    mapping from index to weekday name is supplied by a LocaleProvider.
    """

    def __init__(self, days: Optional[Sequence[Iterable[TimeRange]]] = None):
        if days is None:
            days = [DayBucket() for _ in range(DAYS_PER_WEEK)]

        buckets: List[DayBucket] = []
        for day in days:
            if day is None:
                raise ScheduleFormatError("A day without availability must be an empty list, not None")
            buckets.append(day if isinstance(day, DayBucket) else DayBucket(day))

        if len(buckets) != DAYS_PER_WEEK:
            raise ScheduleFormatError(
                f"A weekly schedule needs exactly {DAYS_PER_WEEK} days, got {len(buckets)}"
            )
        self._days = buckets

    @property
    def days(self) -> Tuple[DayBucket, ...]:
        return tuple(self._days)

    def copy(self) -> "WeeklySchedule":
        return WeeklySchedule([day.copy() for day in self._days])

    def find_issues(self) -> List[str]:
        """
        Describe ranges that are ill-formed, overlap their predecessor or start before it.

        Nothing is repaired; this only reports.
        """
        issues: List[str] = []
        for day_index, bucket in enumerate(self._days):
            previous: Optional[TimeRange] = None
            for range_index, time_range in enumerate(bucket):
                if not time_range.is_well_formed():
                    issues.append(f"day {day_index}, range {range_index} ({time_range}) is not a same-day range")
                if previous is not None and time_range.overlaps(previous):
                    issues.append(f"day {day_index}, range {range_index} ({time_range}) overlaps the previous range")
                elif previous is not None and time_range.start < previous.start:
                    issues.append(f"day {day_index}, range {range_index} ({time_range}) is out of order")
                previous = time_range
        return issues

    def to_payload(self) -> List[List[Dict[str, str]]]:
        return [day.to_payload() for day in self._days]

    @classmethod
    def from_payload(cls, data: Sequence[Sequence[Mapping[str, Any]]]) -> "WeeklySchedule":
        """
        Build a schedule from the 7-element list payload.

        Raises:
            ScheduleFormatError: If the payload does not have the 7-day shape
            ParseError: If a time is malformed
        """
        if not isinstance(data, (list, tuple)):
            raise ScheduleFormatError(f"Schedule must be a list of {DAYS_PER_WEEK} days")
        if len(data) != DAYS_PER_WEEK:
            raise ScheduleFormatError(
                f"A weekly schedule needs exactly {DAYS_PER_WEEK} days, got {len(data)}"
            )

        schedule = cls([DayBucket.from_payload(day) for day in data])
        for issue in schedule.find_issues():
            logger.warning("Loaded schedule: %s", issue)
        return schedule

    def __len__(self) -> int:
        return len(self._days)

    def __iter__(self) -> Iterator[DayBucket]:
        return iter(self._days)

    def __getitem__(self, index: int) -> DayBucket:
        return self._days[index]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, WeeklySchedule):
            return NotImplemented
        return self._days == other._days

    def __repr__(self) -> str:
        return f"WeeklySchedule({self._days!r})"
