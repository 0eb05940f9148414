"""JSON-over-HTTP helper shared by the registry, telemetry and resync clients."""

from __future__ import annotations

import json
import logging
from functools import partial
from typing import Any, Callable

import anyio
import requests

logger = logging.getLogger(__name__)

TokenProvider = Callable[[], "str | None"]


def extract_error_details(response: requests.Response | None) -> str | None:
    """Return a human readable description of an error response body."""

    if response is None:
        return None
    body = (response.text or "").strip()
    if not body:
        return None
    try:
        parsed = json.loads(body)
    except json.JSONDecodeError:
        return body[:200]
    if isinstance(parsed, dict):
        for key in ("message", "error", "detail"):
            value = parsed.get(key)
            if isinstance(value, str) and value:
                return value
    return json.dumps(parsed)[:200]


class JsonHttpClient:
    """Send JSON requests to the blogging backend off the event loop."""

    def __init__(
        self,
        base_url: str,
        *,
        token_provider: TokenProvider | None = None,
        timeout: float = 10.0,
        session: requests.Session | None = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self._token_provider = token_provider
        self._timeout = timeout
        self._session = session or requests.Session()

    def url_for(self, path: str) -> str:
        return f"{self.base_url}/{path.lstrip('/')}"

    def _headers(self) -> dict[str, str]:
        headers = {"Content-Type": "application/json"}
        token = self._token_provider() if self._token_provider else None
        if token:
            headers["Authorization"] = f"Bearer {token}"
        return headers

    def send(self, method: str, path: str, body: Any | None = None) -> requests.Response:
        """Perform the request; non-2xx answers raise :class:`requests.HTTPError`."""

        response = self._session.request(
            method.upper(),
            self.url_for(path),
            json=body,
            headers=self._headers(),
            timeout=self._timeout,
        )
        response.raise_for_status()
        return response

    async def asend(self, method: str, path: str, body: Any | None = None) -> requests.Response:
        return await anyio.to_thread.run_sync(partial(self.send, method, path, body))

    def close(self) -> None:
        self._session.close()


__all__ = ["JsonHttpClient", "TokenProvider", "extract_error_details"]
