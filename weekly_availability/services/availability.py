"""
Application service for loading, editing and saving the weekly schedule.

The service talks to storage through a small protocol, so the HTTP backend
and the local file store (or a stub in tests) are interchangeable. All
mutation happens in the domain layer; the service only moves whole schedules
in and out.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional, Protocol

from ..domain.models import TimeOfDay, WeeklySchedule
from ..domain.policy import default_schedule
from ..domain.slot_generator import TimeOption, TimeSlotGenerator

logger = logging.getLogger(__name__)


class ScheduleClientProtocol(Protocol):
    """Protocol describing the storage behaviour needed by the service."""

    def load(self) -> Dict[str, Any]:
        """Return ``{"schedule": payload or None}``."""

    def save(self, payload: Dict[str, Any]) -> Any:
        """Persist ``{"schedule": payload}``."""


class AvailabilityService:
    """
    Orchestrates schedule storage and the picker catalog.

    Saves are all-or-nothing: the full 7-day payload goes out in one call and
    the last write wins. Storage errors propagate unchanged.
    """

    def __init__(
        self,
        client: ScheduleClientProtocol,
        generator: Optional[TimeSlotGenerator] = None,
        locale: str = "en",
    ) -> None:
        self._client = client
        self._generator = generator or TimeSlotGenerator()
        self.locale = locale

    @property
    def generator(self) -> TimeSlotGenerator:
        return self._generator

    def load_schedule(self) -> WeeklySchedule:
        """Load the stored schedule, or the default week if none is stored."""
        payload = self._client.load().get("schedule")

        if payload is None:
            logger.info("No stored schedule, using the default week")
            return default_schedule()

        return WeeklySchedule.from_payload(payload)

    def save_schedule(self, schedule: WeeklySchedule) -> Any:
        """Persist the whole schedule."""
        result = self._client.save({"schedule": schedule.to_payload()})
        logger.info("Saved schedule (%d enabled day(s))", sum(1 for day in schedule if day.is_enabled))
        return result

    def weekday_names(self) -> List[str]:
        """Weekday names aligned to bucket indices 0-6."""
        return self._generator.locale_provider.weekday_names(self.locale)

    def day_options(
        self,
        after: Optional[TimeOfDay] = None,
        before: Optional[TimeOfDay] = None,
    ) -> List[TimeOption]:
        return self._generator.options(after=after, before=before, locale=self.locale)
