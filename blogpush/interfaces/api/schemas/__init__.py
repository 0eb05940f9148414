"""Pydantic schemas used by the HTTP API."""

from .preferences import PreferenceRecordSchema, PreferenceToggleRequest, PreferenceUpdateRequest
from .push import (
    LocalNotificationRequest,
    PermissionRead,
    PushStatusRead,
    SubscriptionKeysRead,
    SubscriptionRead,
)
from .worker import (
    ClientWindowRead,
    NotificationActionSchema,
    NotificationClickRequest,
    NotificationClickResult,
    NotificationCloseRequest,
    NotificationSchema,
    OfflineActionQueued,
    OfflineActionRequest,
    SyncRequest,
    SyncResult,
)

__all__ = [
    "ClientWindowRead",
    "LocalNotificationRequest",
    "NotificationActionSchema",
    "NotificationClickRequest",
    "NotificationClickResult",
    "NotificationCloseRequest",
    "NotificationSchema",
    "OfflineActionQueued",
    "OfflineActionRequest",
    "PermissionRead",
    "PreferenceRecordSchema",
    "PreferenceToggleRequest",
    "PreferenceUpdateRequest",
    "PushStatusRead",
    "SubscriptionKeysRead",
    "SubscriptionRead",
    "SyncRequest",
    "SyncResult",
]
