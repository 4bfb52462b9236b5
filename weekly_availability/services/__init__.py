"""
Service layer helpers that orchestrate adapters and domain logic.
"""

from .availability import AvailabilityService, ScheduleClientProtocol

__all__ = ["AvailabilityService", "ScheduleClientProtocol"]
