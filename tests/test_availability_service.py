"""
Tests for the AvailabilityService orchestration layer and the file store.
"""

import json
from typing import Any, Dict, List, Optional

import pytest

from weekly_availability.adapters.file_schedule_client import FileScheduleClient
from weekly_availability.domain import day_rules
from weekly_availability.domain.exceptions import ParseError, ScheduleAPIError, ScheduleFormatError
from weekly_availability.domain.locale import PendulumLocaleProvider
from weekly_availability.domain.models import TimeOfDay, TimeRange, WeeklySchedule
from weekly_availability.domain.policy import default_schedule
from weekly_availability.domain.slot_generator import TimeSlotGenerator
from weekly_availability.services.availability import AvailabilityService


class StubScheduleClient:
    """Minimal stub matching ScheduleClientProtocol."""

    def __init__(self, schedule: Optional[List[Any]] = None):
        self._schedule = schedule
        self.saved: List[Dict[str, Any]] = []

    def load(self) -> Dict[str, Any]:
        return {"schedule": self._schedule}

    def save(self, payload: Dict[str, Any]) -> Any:
        self.saved.append(payload)
        self._schedule = payload["schedule"]
        return payload["schedule"]


class FailingScheduleClient(StubScheduleClient):
    def save(self, payload):
        raise ScheduleAPIError("backend unavailable", status_code=503)


def _payload():
    payload = [[] for _ in range(7)]
    payload[2] = [{"start": "10:00:00", "end": "11:00:00"}]
    return payload


def test_load_falls_back_to_default_schedule():
    """A missing schedule should be replaced by the default week."""
    service = AvailabilityService(client=StubScheduleClient(schedule=None))

    assert service.load_schedule() == default_schedule()


def test_load_uses_stored_schedule():
    """A stored schedule should be loaded as-is."""
    service = AvailabilityService(client=StubScheduleClient(schedule=_payload()))

    schedule = service.load_schedule()

    assert list(schedule[2]) == [TimeRange.parse("10:00:00", "11:00:00")]
    assert not schedule[1].is_enabled


def test_load_rejects_malformed_payload():
    """Payloads of the wrong shape or with bad times should fail loudly."""
    with pytest.raises(ScheduleFormatError):
        AvailabilityService(client=StubScheduleClient(schedule=[[]] * 5)).load_schedule()

    bad_time = _payload()
    bad_time[0] = [{"start": "9am", "end": "10:00:00"}]
    with pytest.raises(ParseError):
        AvailabilityService(client=StubScheduleClient(schedule=bad_time)).load_schedule()


def test_save_sends_whole_week():
    """Saving should hand over the full 7-day payload in one call."""
    client = StubScheduleClient(schedule=None)
    service = AvailabilityService(client=client)

    schedule = service.load_schedule()
    day_rules.append_range(schedule[1])
    service.save_schedule(schedule)

    assert len(client.saved) == 1
    saved = client.saved[0]["schedule"]
    assert len(saved) == 7
    assert saved[1] == [
        {"start": "09:00:00", "end": "17:00:00"},
        {"start": "17:00:00", "end": "18:00:00"},
    ]
    assert saved[0] == [] and saved[6] == []


def test_save_then_load_round_trips():
    """Saving and reloading should yield an equal schedule."""
    service = AvailabilityService(client=StubScheduleClient(schedule=_payload()))
    schedule = service.load_schedule()
    day_rules.enable_day(schedule[5])

    service.save_schedule(schedule)

    assert service.load_schedule() == schedule


def test_save_errors_propagate():
    """Storage failures should reach the caller unchanged."""
    service = AvailabilityService(client=FailingScheduleClient(schedule=None))

    with pytest.raises(ScheduleAPIError, match="backend unavailable"):
        service.save_schedule(default_schedule())


def test_weekday_names_and_options():
    """Names and options should come from the configured generator."""
    generator = TimeSlotGenerator(
        increment_minutes=30,
        locale_provider=PendulumLocaleProvider(week_start=1),
    )
    service = AvailabilityService(client=StubScheduleClient(), generator=generator, locale="en")

    assert service.weekday_names()[0] == "Monday"

    options = service.day_options(after=TimeOfDay.parse("22:30:00"))
    assert [o.value for o in options] == ["23:00:00", "23:30:00"]


class TestFileScheduleClient:
    """Tests for the local JSON store."""

    def test_missing_file_means_no_schedule(self, tmp_path):
        """Test that an absent file loads as no schedule."""
        client = FileScheduleClient(tmp_path / "schedule.json")

        assert client.load() == {"schedule": None}

    def test_save_and_load(self, tmp_path):
        """Test a save/load round trip through the file."""
        path = tmp_path / "nested" / "schedule.json"
        client = FileScheduleClient(path)
        service = AvailabilityService(client=client)

        schedule = default_schedule()
        service.save_schedule(schedule)

        assert json.loads(path.read_text(encoding="utf-8"))["schedule"] == schedule.to_payload()
        assert service.load_schedule() == schedule
        assert isinstance(service.load_schedule(), WeeklySchedule)

    def test_invalid_json(self, tmp_path):
        """Test that a corrupt file raises ScheduleAPIError."""
        path = tmp_path / "schedule.json"
        path.write_text("{not json", encoding="utf-8")

        with pytest.raises(ScheduleAPIError):
            FileScheduleClient(path).load()

    def test_non_object_json(self, tmp_path):
        """Test that the file must hold an object."""
        path = tmp_path / "schedule.json"
        path.write_text("[]", encoding="utf-8")

        with pytest.raises(ScheduleAPIError):
            FileScheduleClient(path).load()
