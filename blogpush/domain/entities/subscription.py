"""Domain entity representing a push subscription."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any


@dataclass(frozen=True)
class SubscriptionKeys:
    """Key pair the sender uses to encrypt payloads for this subscriber."""

    p256dh: str
    auth: str


@dataclass(frozen=True)
class Subscription:
    """Active agreement with a push delivery service."""

    endpoint: str
    keys: SubscriptionKeys
    expiration_time: int | None = None

    def to_registry_payload(self) -> dict[str, Any]:
        """Return the body expected by ``POST /push/subscribe``."""

        return {
            "endpoint": self.endpoint,
            "keys": {"p256dh": self.keys.p256dh, "auth": self.keys.auth},
        }


class RecoveryStatus(str, Enum):
    """Outcome of looking up an existing subscription at startup."""

    NOT_ATTEMPTED = "not_attempted"
    RECOVERED = "recovered"
    ABSENT = "absent"
    INDETERMINATE = "indeterminate"


__all__ = ["RecoveryStatus", "Subscription", "SubscriptionKeys"]
