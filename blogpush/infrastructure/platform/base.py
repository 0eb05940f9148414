"""Interfaces of the platform services the push lifecycle depends on."""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from blogpush.domain.entities import ClientWindow, DisplayedNotification, Permission, Subscription


@runtime_checkable
class PushPlatform(Protocol):
    """Platform services available to the main application context.

    Every coroutine is a suspension point: it may prompt the user, perform network
    I/O or touch persistent storage.
    """

    def supports_background_context(self) -> bool: ...

    def supports_push(self) -> bool: ...

    def permission_state(self) -> Permission | str: ...

    async def request_permission(self) -> Permission | str: ...

    async def is_worker_registered(self) -> bool: ...

    async def register_worker(self, script_url: str) -> None: ...

    async def get_subscription(self) -> Subscription | None: ...

    async def subscribe(self, application_server_key: bytes) -> Subscription: ...

    async def unsubscribe(self, subscription: Subscription) -> bool: ...

    async def show_notification(self, notification: DisplayedNotification) -> None: ...


@runtime_checkable
class WorkerScope(Protocol):
    """Platform services available inside the background delivery context."""

    @property
    def origin(self) -> str: ...

    async def show_notification(self, notification: DisplayedNotification) -> None: ...

    async def close_notification(self, notification: DisplayedNotification) -> None: ...

    async def match_clients(self) -> list[ClientWindow]: ...

    async def focus_client(self, client: ClientWindow) -> ClientWindow: ...

    async def open_window(self, url: str) -> ClientWindow | None: ...

    async def skip_waiting(self) -> None: ...

    async def claim_clients(self) -> None: ...


__all__ = ["PushPlatform", "WorkerScope"]
