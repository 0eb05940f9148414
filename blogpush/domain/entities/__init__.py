"""Domain entities exposed by the application."""

from .client_window import ClientWindow
from .notification import (
    DisplayedNotification,
    InboundPayload,
    NotificationAction,
    NotificationData,
)
from .permission import Permission
from .preferences import PREFERENCE_CATEGORIES, PreferenceRecord
from .subscription import RecoveryStatus, Subscription, SubscriptionKeys

__all__ = [
    "ClientWindow",
    "DisplayedNotification",
    "InboundPayload",
    "NotificationAction",
    "NotificationData",
    "Permission",
    "PREFERENCE_CATEGORIES",
    "PreferenceRecord",
    "RecoveryStatus",
    "Subscription",
    "SubscriptionKeys",
]
