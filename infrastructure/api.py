import logging
from datetime import datetime, timezone
from typing import Any, Dict, List, Mapping, Optional

import requests

from domain.models import Page, TrainingSession

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "http://localhost:8080"

# One request per dashboard window; sessions beyond this are not fetched.
DASHBOARD_PAGE_SIZE = 300


class ApiError(RuntimeError):
    """The backend answered with something other than JSON."""


def to_local_datetime_param(dt: datetime) -> str:
    """
    Format an instant as the backend's LocalDateTime query parameter:
    UTC, second precision, no offset suffix (YYYY-MM-DDTHH:MM:SS).
    """
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc).strftime("%Y-%m-%dT%H:%M:%S")


class ApiClient:
    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        token: Optional[str] = None,
        timeout: int = 30,
        session: Optional[requests.Session] = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout

        self.session = session or requests.Session()
        self.session.headers.update({
            "Content-Type": "application/json",
            "Accept": "application/json",
            "User-Agent": "MatLogDashboard/1.0",
        })
        if token:
            self.session.headers["Authorization"] = f"Bearer {token}"

    # -----------------------------------------------------------------
    # Transport
    # -----------------------------------------------------------------

    def _request(self, method: str, path: str, **kwargs: Any) -> Any:
        url = f"{self.base_url}{path}"
        logger.debug("%s %s params=%s", method, url, kwargs.get("params"))

        r = self.session.request(method, url, timeout=self.timeout, **kwargs)
        r.raise_for_status()

        if r.status_code == 204 or not r.content:
            return None

        if not r.headers.get("content-type", "").startswith("application/json"):
            raise ApiError(f"{method} {path} failed (non-JSON): {r.text[:500]}")

        return r.json()

    # -----------------------------------------------------------------
    # Dashboard
    # -----------------------------------------------------------------

    def fetch_sessions(self, start: datetime, end: datetime) -> List[TrainingSession]:
        """
        All trainings with sessionDate in [start, end], newest first.

        Only the first DASHBOARD_PAGE_SIZE records are returned.
        """
        data = self._request(
            "GET",
            "/trainings",
            params={
                "startDate": to_local_datetime_param(start),
                "endDate": to_local_datetime_param(end),
                "sort": "sessionDate,desc",
                "size": DASHBOARD_PAGE_SIZE,
            },
        ) or {}

        items = data.get("content") or []

        total = data.get("totalElements")
        if total is not None and int(total) > len(items):
            logger.warning(
                "Training range %s..%s has %s sessions, only %d loaded",
                start, end, total, len(items),
            )

        return [TrainingSession.from_api(it) for it in items]

    # -----------------------------------------------------------------
    # Training history
    # -----------------------------------------------------------------

    def list_trainings(self, page: int = 0, size: int = 10) -> Page[TrainingSession]:
        data = self._request(
            "GET",
            "/trainings",
            params={"page": page, "size": size, "sort": "sessionDate,desc"},
        ) or {}
        return Page.from_api(data, TrainingSession.from_api)

    def get_training(self, training_id: Any) -> TrainingSession:
        data = self._request("GET", f"/trainings/{training_id}")
        return TrainingSession.from_api(data)

    def delete_training(self, training_id: Any) -> None:
        self._request("DELETE", f"/trainings/{training_id}")
        logger.info("Deleted training %s", training_id)


def client_from_secrets(secrets: Mapping[str, Any]) -> ApiClient:
    return ApiClient(
        base_url=secrets.get("API_BASE_URL", DEFAULT_BASE_URL),
        token=secrets.get("API_TOKEN"),
    )
