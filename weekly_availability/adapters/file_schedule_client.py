"""
Local JSON file store with the same interface as the HTTP client.
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict

from ..domain.exceptions import ScheduleAPIError

logger = logging.getLogger(__name__)


class FileScheduleClient:
    """
    Keeps the schedule payload in a JSON file.

    Useful for working offline and for tests: no backend, no authentication.
    A missing file means no schedule has been stored yet.
    """

    def __init__(self, path: Path):
        self.path = Path(path)

    def load(self) -> Dict[str, Any]:
        if not self.path.exists():
            logger.info("No schedule stored at %s", self.path)
            return {"schedule": None}

        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, ValueError) as e:
            raise ScheduleAPIError(f"Could not read schedule file {self.path}: {e}") from e

        if not isinstance(data, dict):
            raise ScheduleAPIError(f"Schedule file {self.path} must contain a JSON object")
        return {"schedule": data.get("schedule")}

    def save(self, payload: Dict[str, Any]) -> Any:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            tmp_path = self.path.with_suffix(self.path.suffix + ".tmp")
            with open(tmp_path, "w", encoding="utf-8") as f:
                json.dump(payload, f, indent=2)
            tmp_path.replace(self.path)
        except OSError as e:
            raise ScheduleAPIError(f"Could not write schedule file {self.path}: {e}") from e

        return payload["schedule"]
