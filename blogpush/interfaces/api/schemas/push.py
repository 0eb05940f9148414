"""Pydantic models describing the main-context push state."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field

from blogpush.domain.entities import Permission, RecoveryStatus


class SubscriptionKeysRead(BaseModel):
    p256dh: str
    auth: str


class SubscriptionRead(BaseModel):
    """Subscription credentials as mirrored to the registry."""

    endpoint: str
    keys: SubscriptionKeysRead
    expiration_time: int | None = None


class PermissionRead(BaseModel):
    permission: Permission


class PushStatusRead(BaseModel):
    """Snapshot of capability, permission and subscription state."""

    supported: bool
    permission: Permission
    subscribed: bool
    subscription: SubscriptionRead | None = None
    recovery_status: RecoveryStatus
    busy: bool = False
    last_sync_error: str | None = None


class LocalNotificationRequest(BaseModel):
    """Notification shown directly from the main context."""

    title: str = Field(default="Test Notification", min_length=1)
    body: str = "This is a test notification from your CollabBlog platform!"
    tag: str | None = "test"
    data: dict[str, Any] = Field(default_factory=lambda: {"type": "test", "url": "/dashboard"})
    require_interaction: bool = False
    silent: bool = False


__all__ = [
    "LocalNotificationRequest",
    "PermissionRead",
    "PushStatusRead",
    "SubscriptionKeysRead",
    "SubscriptionRead",
]
