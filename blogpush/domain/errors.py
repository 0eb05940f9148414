"""Error taxonomy for the push subscription lifecycle."""

from __future__ import annotations


class PushError(RuntimeError):
    """Base class for every push lifecycle failure."""


class UnsupportedCapability(PushError):
    """The runtime lacks a background delivery context or the push API."""

    def __init__(self, message: str = "Push notifications are not supported") -> None:
        super().__init__(message)


class PermissionDenied(PushError):
    """Notification permission is not granted."""

    def __init__(self, permission: object | None = None) -> None:
        self.permission = permission
        super().__init__("Notification permission denied")


class SubscriptionCreationFailed(PushError):
    """Registering with the push service or the key exchange failed."""


class UnsubscribeFailed(PushError):
    """The platform refused or failed to revoke the subscription."""


class NoActiveSubscription(PushError):
    """An operation needed a live subscription and there is none."""

    def __init__(self, message: str = "There is no active push subscription") -> None:
        super().__init__(message)


class OperationInProgress(PushError):
    """Another subscribe/unsubscribe call currently holds the subscription."""

    def __init__(self, message: str = "A subscription change is already in progress") -> None:
        super().__init__(message)


class MalformedPayload(PushError, ValueError):
    """An inbound push payload could not be parsed."""


class RegistrySyncFailed(PushError):
    """The remote subscription registry could not be updated."""

    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        self.status_code = status_code
        super().__init__(message)


class TelemetryError(PushError):
    """A best-effort telemetry call failed."""


__all__ = [
    "PushError",
    "UnsupportedCapability",
    "PermissionDenied",
    "SubscriptionCreationFailed",
    "UnsubscribeFailed",
    "NoActiveSubscription",
    "OperationInProgress",
    "MalformedPayload",
    "RegistrySyncFailed",
    "TelemetryError",
]
