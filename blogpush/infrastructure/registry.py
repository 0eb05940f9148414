"""Client for the remote subscription registry mirrored by the subscription manager."""

from __future__ import annotations

import logging

import requests

from blogpush.domain.entities import Subscription
from blogpush.domain.errors import RegistrySyncFailed

from .http import JsonHttpClient, extract_error_details

logger = logging.getLogger(__name__)

SUBSCRIBE_PATH = "/push/subscribe"
UNSUBSCRIBE_PATH = "/push/unsubscribe"


class RegistryClient:
    """Mirror the local subscription on the blogging backend."""

    def __init__(self, http: JsonHttpClient) -> None:
        self._http = http

    async def register(self, subscription: Subscription) -> None:
        """``POST /push/subscribe`` with the endpoint and its keys."""

        await self._post(SUBSCRIBE_PATH, subscription.to_registry_payload())

    async def deregister(self, endpoint: str) -> None:
        """``POST /push/unsubscribe`` so the server drops its mirror."""

        await self._post(UNSUBSCRIBE_PATH, {"endpoint": endpoint})

    async def _post(self, path: str, body: dict) -> None:
        try:
            await self._http.asend("POST", path, body)
        except requests.HTTPError as exc:
            status_code = exc.response.status_code if exc.response is not None else None
            details = extract_error_details(exc.response)
            message = f"Registry request {path} failed with status {status_code}"
            if details:
                message = f"{message}: {details}"
            raise RegistrySyncFailed(message, status_code=status_code) from exc
        except requests.RequestException as exc:
            raise RegistrySyncFailed(f"Registry request {path} failed: {exc}") from exc


__all__ = ["RegistryClient", "SUBSCRIBE_PATH", "UNSUBSCRIBE_PATH"]
