"""In-process push platform used by the service and the test-suite."""

from __future__ import annotations

import inspect
import logging
import os
import uuid
from typing import Awaitable, Callable, Union

from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import ec

from blogpush.domain.entities import (
    ClientWindow,
    DisplayedNotification,
    Permission,
    Subscription,
    SubscriptionKeys,
)
from blogpush.utils import bytes_to_base64

logger = logging.getLogger(__name__)

PromptAnswer = Union[Permission, str]
PromptHandler = Callable[[], Union[PromptAnswer, Awaitable[PromptAnswer]]]

DEFAULT_PUSH_SERVICE_URL = "https://push.example.invalid/send"


def generate_subscription_keys() -> SubscriptionKeys:
    """Create a P-256 public key and a 16 byte auth secret for a new subscription."""

    private_key = ec.generate_private_key(ec.SECP256R1())
    public_bytes = private_key.public_key().public_bytes(
        encoding=serialization.Encoding.X962,
        format=serialization.PublicFormat.UncompressedPoint,
    )
    return SubscriptionKeys(
        p256dh=bytes_to_base64(public_bytes),
        auth=bytes_to_base64(os.urandom(16)),
    )


class InMemoryPushPlatform:
    """Platform emulation keeping permission, worker and subscription state in memory.

    It implements both :class:`PushPlatform` and :class:`WorkerScope`; the two
    execution contexts only ever see it through one of those interfaces.
    """

    def __init__(
        self,
        *,
        origin: str,
        prompt: PromptHandler | PromptAnswer = Permission.GRANTED,
        permission: PromptAnswer = Permission.UNDETERMINED,
        background_context: bool = True,
        push_api: bool = True,
        push_service_url: str = DEFAULT_PUSH_SERVICE_URL,
    ) -> None:
        self._origin = origin.rstrip("/")
        self._prompt = prompt
        self._permission = Permission.from_platform(permission)
        self._background_context = background_context
        self._push_api = push_api
        self._push_service_url = push_service_url.rstrip("/")
        self._worker_script: str | None = None
        self._subscription: Subscription | None = None
        self.prompt_count = 0
        self.subscribe_calls = 0
        self.unsubscribe_calls = 0
        self.shown: list[DisplayedNotification] = []
        self.closed: list[DisplayedNotification] = []
        self.windows: list[ClientWindow] = []
        self.waiting_skipped = False
        self.clients_claimed = False

    # Main context -----------------------------------------------------------------

    def supports_background_context(self) -> bool:
        return self._background_context

    def supports_push(self) -> bool:
        return self._push_api

    def permission_state(self) -> Permission:
        return self._permission

    def set_permission(self, permission: PromptAnswer) -> None:
        """Change the permission out of band, as a browser settings page would."""

        self._permission = Permission.from_platform(permission)
        if not self._permission.is_granted:
            self._subscription = None

    async def request_permission(self) -> Permission:
        self.prompt_count += 1
        if self._permission is not Permission.UNDETERMINED:
            return self._permission

        answer = self._prompt() if callable(self._prompt) else self._prompt
        if inspect.isawaitable(answer):
            answer = await answer
        self._permission = Permission.from_platform(answer)
        return self._permission

    async def is_worker_registered(self) -> bool:
        return self._worker_script is not None

    async def register_worker(self, script_url: str) -> None:
        if not self._background_context:
            raise RuntimeError("Background delivery contexts are not available")
        self._worker_script = script_url
        logger.debug("Registered background delivery context %s", script_url)

    async def get_subscription(self) -> Subscription | None:
        if self._worker_script is None:
            return None
        return self._subscription

    async def subscribe(self, application_server_key: bytes) -> Subscription:
        self.subscribe_calls += 1
        if not self._push_api:
            raise RuntimeError("Push API is not available")
        if self._worker_script is None:
            raise RuntimeError("No background delivery context is registered")
        if not self._permission.is_granted:
            raise RuntimeError("Registration failed - permission denied")
        if not application_server_key:
            raise ValueError("An application server key is required")
        if self._subscription is None:
            self._subscription = Subscription(
                endpoint=f"{self._push_service_url}/{uuid.uuid4().hex}",
                keys=generate_subscription_keys(),
            )
        return self._subscription

    async def unsubscribe(self, subscription: Subscription) -> bool:
        self.unsubscribe_calls += 1
        if self._subscription is None or self._subscription.endpoint != subscription.endpoint:
            return False
        self._subscription = None
        return True

    # Background delivery context ---------------------------------------------------

    @property
    def origin(self) -> str:
        return self._origin

    async def show_notification(self, notification: DisplayedNotification) -> None:
        self.shown.append(notification)

    async def close_notification(self, notification: DisplayedNotification) -> None:
        self.closed.append(notification)

    async def match_clients(self) -> list[ClientWindow]:
        return list(self.windows)

    async def focus_client(self, client: ClientWindow) -> ClientWindow:
        for window in self.windows:
            window.focused = window.id == client.id
        return client

    async def open_window(self, url: str) -> ClientWindow | None:
        for window in self.windows:
            window.focused = False
        window = ClientWindow(id=uuid.uuid4().hex, url=url, focused=True)
        self.windows.append(window)
        return window

    async def skip_waiting(self) -> None:
        self.waiting_skipped = True

    async def claim_clients(self) -> None:
        self.clients_claimed = True


__all__ = ["InMemoryPushPlatform", "generate_subscription_keys"]
