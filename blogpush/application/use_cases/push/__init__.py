"""Use cases of the main application context."""

from .capability import CapabilityReport, detect_capability
from .context import PushContext, PushStatus
from .permissions import PermissionNegotiator
from .subscriptions import SubscriptionManager, SubscriptionRegistry

__all__ = [
    "CapabilityReport",
    "detect_capability",
    "PermissionNegotiator",
    "PushContext",
    "PushStatus",
    "SubscriptionManager",
    "SubscriptionRegistry",
]
