"""Forward observable push state changes to websocket listeners."""

from __future__ import annotations

import asyncio
from typing import Any

from anyio import from_thread

from blogpush.domain.entities import Permission, Subscription

from .manager import StateConnectionManager


class StateChangePublisher:
    """Serialize permission/subscription changes and schedule their delivery."""

    def __init__(self, manager: StateConnectionManager) -> None:
        self._manager = manager

    def publish_permission(self, permission: Permission) -> None:
        self._schedule({"type": "permission", "data": permission.value})

    def publish_subscription(self, subscription: Subscription | None) -> None:
        self._schedule({"type": "subscription", "data": serialize_subscription(subscription)})

    def _schedule(self, message: dict[str, Any]) -> None:
        if not self._manager.connection_count:
            return
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            from_thread.run(self._manager.broadcast, message)
        else:
            loop.create_task(self._manager.broadcast(message))


def serialize_subscription(subscription: Subscription | None) -> dict[str, Any] | None:
    """Return the public representation of ``subscription``."""

    if subscription is None:
        return None
    return {
        "endpoint": subscription.endpoint,
        "keys": {"p256dh": subscription.keys.p256dh, "auth": subscription.keys.auth},
        "expiration_time": subscription.expiration_time,
    }


__all__ = ["StateChangePublisher", "serialize_subscription"]
