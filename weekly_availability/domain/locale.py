"""
Locale collaborator: weekday names and time labels for a locale tag.

The engine never derives weekday names itself; it asks a LocaleProvider.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, List, Protocol

import pendulum

if TYPE_CHECKING:
    from .models import TimeOfDay

# 2000-01-02 was a Sunday.
_REFERENCE_SUNDAY = pendulum.datetime(2000, 1, 2)


class LocaleProvider(Protocol):
    """Protocol describing the locale behaviour needed by the engine."""

    def weekday_names(self, locale: str) -> List[str]:
        """Return 7 weekday names aligned to bucket indices 0-6."""

    def time_label(self, value: "TimeOfDay", locale: str) -> str:
        """Return a display label (hour and minute) for a time of day."""


class PendulumLocaleProvider:
    """
    LocaleProvider backed by pendulum's locale data.

    ``week_start`` selects the weekday of bucket 0 (0=Sunday, 1=Monday, ...).
    """

    def __init__(self, week_start: int = 0):
        if week_start not in range(7):
            raise ValueError(f"week_start must be between 0 and 6, got {week_start}")
        self.week_start = week_start

    def weekday_names(self, locale: str) -> List[str]:
        return [
            _REFERENCE_SUNDAY.add(days=self.week_start + offset).format("dddd", locale=locale)
            for offset in range(7)
        ]

    def time_label(self, value: "TimeOfDay", locale: str) -> str:
        return value.moment.format("LT", locale=locale)
