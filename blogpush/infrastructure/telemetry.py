"""Best-effort telemetry emitted by the background delivery context."""

from __future__ import annotations

import requests

from blogpush.domain.errors import TelemetryError
from blogpush.utils import isoformat_timestamp

from .http import JsonHttpClient

TRACK_CLOSE_PATH = "/notifications/track-close"


class TelemetryClient:
    """Report notification dismissals to the backend."""

    def __init__(self, http: JsonHttpClient) -> None:
        self._http = http

    async def track_close(self, notification_id: str | None, *, timestamp: str | None = None) -> None:
        body = {
            "notificationId": notification_id,
            "timestamp": timestamp or isoformat_timestamp(),
        }
        try:
            await self._http.asend("POST", TRACK_CLOSE_PATH, body)
        except requests.RequestException as exc:
            raise TelemetryError(f"Failed to track notification close: {exc}") from exc


__all__ = ["TelemetryClient", "TRACK_CLOSE_PATH"]
