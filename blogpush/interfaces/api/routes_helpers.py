"""Shared helpers for the API routers."""

from __future__ import annotations

from fastapi import HTTPException, status

from blogpush.application.use_cases.push import PushStatus
from blogpush.domain.entities import Subscription
from blogpush.domain.errors import (
    NoActiveSubscription,
    OperationInProgress,
    PermissionDenied,
    PushError,
    SubscriptionCreationFailed,
    UnsubscribeFailed,
    UnsupportedCapability,
)
from blogpush.interfaces.api.schemas import PushStatusRead, SubscriptionKeysRead, SubscriptionRead

_STATUS_BY_ERROR: tuple[tuple[type[PushError], int], ...] = (
    (UnsupportedCapability, status.HTTP_501_NOT_IMPLEMENTED),
    (PermissionDenied, status.HTTP_403_FORBIDDEN),
    (NoActiveSubscription, status.HTTP_404_NOT_FOUND),
    (OperationInProgress, status.HTTP_409_CONFLICT),
    (SubscriptionCreationFailed, status.HTTP_502_BAD_GATEWAY),
    (UnsubscribeFailed, status.HTTP_502_BAD_GATEWAY),
)


def to_http_exception(exc: PushError) -> HTTPException:
    """Translate a push lifecycle error into the matching HTTP error."""

    for error_type, status_code in _STATUS_BY_ERROR:
        if isinstance(exc, error_type):
            return HTTPException(status_code=status_code, detail=str(exc))
    return HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(exc))


def subscription_to_schema(subscription: Subscription | None) -> SubscriptionRead | None:
    if subscription is None:
        return None
    return SubscriptionRead(
        endpoint=subscription.endpoint,
        keys=SubscriptionKeysRead(p256dh=subscription.keys.p256dh, auth=subscription.keys.auth),
        expiration_time=subscription.expiration_time,
    )


def status_to_schema(push_status: PushStatus) -> PushStatusRead:
    return PushStatusRead(
        supported=push_status.supported,
        permission=push_status.permission,
        subscribed=push_status.subscription is not None,
        subscription=subscription_to_schema(push_status.subscription),
        recovery_status=push_status.recovery_status,
        busy=push_status.busy,
        last_sync_error=push_status.last_sync_error,
    )


__all__ = ["status_to_schema", "subscription_to_schema", "to_http_exception"]
