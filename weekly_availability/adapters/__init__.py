"""
Adapters layer - Schedule storage backends.
"""

from .file_schedule_client import FileScheduleClient
from .http_schedule_client import HttpScheduleClient

__all__ = ["FileScheduleClient", "HttpScheduleClient"]
