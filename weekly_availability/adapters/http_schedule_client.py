"""
HTTP client for loading and saving the availability schedule.
"""

import logging
from typing import Any, Dict, Optional

import requests

from ..domain.exceptions import ScheduleAPIError

logger = logging.getLogger(__name__)


class HttpScheduleClient:
    """
    Client for the availability backend.

    Loads with ``GET /api/availability`` and saves with ``POST /api/schedule``.
    Both endpoints speak ``{"schedule": [[{"start", "end"}, ...] x 7]}``.
    """

    LOAD_PATH = "/api/availability"
    SAVE_PATH = "/api/schedule"

    def __init__(self, base_url: str, access_token: Optional[str] = None, timeout: float = 30):
        """
        Initialize the client.

        Args:
            base_url: Backend root URL, e.g. "https://cal.example.com"
            access_token: Optional bearer token sent with every request
            timeout: Request timeout in seconds
        """
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.headers = {"Content-Type": "application/json"}
        if access_token:
            self.headers["Authorization"] = f"Bearer {access_token}"

    def load(self) -> Dict[str, Any]:
        """
        Fetch the stored schedule of the current user.

        Returns:
            ``{"schedule": <payload>}``, with ``None`` when nothing is stored

        Raises:
            ScheduleAPIError: If the request fails
        """
        data = self._request("GET", self.LOAD_PATH)
        return {"schedule": data.get("schedule")}

    def save(self, payload: Dict[str, Any]) -> Any:
        """
        Persist a full ``{"schedule": ...}`` payload.

        Returns:
            The ``data`` member of the response body

        Raises:
            ScheduleAPIError: If the request fails
        """
        data = self._request("POST", self.SAVE_PATH, json=payload)
        return data.get("data")

    def _request(self, method: str, path: str, **kwargs: Any) -> Dict[str, Any]:
        url = f"{self.base_url}{path}"
        logger.debug("%s %s", method, url)

        try:
            response = requests.request(method, url, headers=self.headers, timeout=self.timeout, **kwargs)
        except requests.exceptions.RequestException as e:
            raise ScheduleAPIError(f"Request to {url} failed: {e}") from e

        if not response.ok:
            raise ScheduleAPIError(self._error_message(response), status_code=response.status_code)

        try:
            data = response.json()
        except ValueError as e:
            raise ScheduleAPIError(f"Invalid JSON in response from {url}: {e}") from e

        if not isinstance(data, dict):
            raise ScheduleAPIError(f"Unexpected response body from {url}: {data!r}")
        return data

    @staticmethod
    def _error_message(response: requests.Response) -> str:
        """Prefer the backend's ``message``; fall back to the HTTP status."""
        try:
            body = response.json()
        except ValueError:
            body = None

        if isinstance(body, dict) and body.get("message"):
            return str(body["message"])
        return f"HTTP {response.status_code} {response.reason or ''}".strip()
