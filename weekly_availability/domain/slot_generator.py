"""
Selectable times for start/end pickers.

The catalog of quantized times depends only on the increment, so it is
computed once per increment and shared by every picker in the week. Filtering
happens lazily, per interaction.
"""

from dataclasses import dataclass
from functools import lru_cache
from typing import List, Optional, Sequence, Tuple

from .locale import LocaleProvider, PendulumLocaleProvider
from .models import TimeOfDay, TimeRange

DEFAULT_INCREMENT_MINUTES = 15


@lru_cache(maxsize=None)
def generate_catalog(increment_minutes: int = DEFAULT_INCREMENT_MINUTES) -> Tuple[TimeOfDay, ...]:
    """
    Generate all times of a day on an ``increment_minutes`` grid.

    Starts at 00:00:00 and keeps adding the increment while the value stays
    strictly before the end of the day. With 15 minutes this yields
    00:00:00 ... 23:45:00 (96 values).

    Raises:
        ValueError: If the increment is not a positive integer
    """
    if not isinstance(increment_minutes, int) or increment_minutes <= 0:
        raise ValueError(f"increment_minutes must be a positive integer, got {increment_minutes!r}")

    end = TimeOfDay.end_of_day()
    current = TimeOfDay.start_of_day()

    times: List[TimeOfDay] = []
    while current.is_before(end):
        times.append(current)
        current = current.add_minutes(increment_minutes)

    return tuple(times)


def options_filtered(
    catalog: Sequence[TimeOfDay],
    after: Optional[TimeOfDay] = None,
    before: Optional[TimeOfDay] = None,
) -> List[TimeOfDay]:
    """
    Return the catalog values strictly after ``after`` and strictly before ``before``.

    Both bounds are optional and applied independently.
    """
    return [
        time for time in catalog
        if (before is None or time.is_before(before)) and (after is None or time.is_after(after))
    ]


@dataclass(frozen=True)
class TimeOption:
    """
    One picker entry.

    ``value`` is the HH:mm:ss selection key; ``label`` is for display only.
    """
    value: str
    label: str

    def to_time(self) -> TimeOfDay:
        return TimeOfDay.parse(self.value)


def to_option(
    time: TimeOfDay,
    locale: str = "en",
    locale_provider: Optional[LocaleProvider] = None,
) -> TimeOption:
    """Pair a time's machine value with its locale label."""
    return TimeOption(value=time.format(), label=time.display_label(locale, locale_provider))


class TimeSlotGenerator:
    """
    Builds picker options from the shared catalog.

    One instance serves every day and range of an edit session.
    """

    def __init__(
        self,
        increment_minutes: int = DEFAULT_INCREMENT_MINUTES,
        locale_provider: Optional[LocaleProvider] = None,
    ):
        self.increment_minutes = increment_minutes
        self.locale_provider = locale_provider or PendulumLocaleProvider()
        self.catalog = generate_catalog(increment_minutes)

    def times(
        self,
        after: Optional[TimeOfDay] = None,
        before: Optional[TimeOfDay] = None,
    ) -> List[TimeOfDay]:
        return options_filtered(self.catalog, after=after, before=before)

    def option_for(self, time: TimeOfDay, locale: str = "en") -> TimeOption:
        return to_option(time, locale, self.locale_provider)

    def options(
        self,
        after: Optional[TimeOfDay] = None,
        before: Optional[TimeOfDay] = None,
        locale: str = "en",
    ) -> List[TimeOption]:
        """Filtered catalog as picker options."""
        return [self.option_for(time, locale) for time in self.times(after=after, before=before)]

    def start_options(self, time_range: TimeRange, locale: str = "en") -> List[TimeOption]:
        """Choices for a range's start: everything before its current end."""
        return self.options(before=time_range.end, locale=locale)

    def end_options(self, time_range: TimeRange, locale: str = "en") -> List[TimeOption]:
        """Choices for a range's end: everything after its current start."""
        return self.options(after=time_range.start, locale=locale)
