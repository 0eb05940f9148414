"""Lifecycle of the single push subscription owned by this installation."""

from __future__ import annotations

import asyncio
import logging
from typing import Protocol

from blogpush.domain.entities import Permission, RecoveryStatus, Subscription
from blogpush.domain.errors import (
    NoActiveSubscription,
    OperationInProgress,
    PermissionDenied,
    RegistrySyncFailed,
    SubscriptionCreationFailed,
    UnsubscribeFailed,
)
from blogpush.infrastructure.notifications import ObservableState
from blogpush.infrastructure.platform import PushPlatform
from blogpush.utils import url_base64_to_bytes

from .capability import CapabilityReport
from .permissions import PermissionNegotiator

logger = logging.getLogger(__name__)


class SubscriptionRegistry(Protocol):
    """Remote mirror of the subscription kept by the blogging backend."""

    async def register(self, subscription: Subscription) -> None: ...

    async def deregister(self, endpoint: str) -> None: ...


class SubscriptionManager:
    """Create, recover and tear down the installation's push subscription.

    The local copy is authoritative for whether a subscription exists. The
    registry only mirrors it: registry failures are logged and never roll back
    local state. ``subscribe`` and ``unsubscribe`` are mutually exclusive; a
    second concurrent call fails with :class:`OperationInProgress`.
    """

    def __init__(
        self,
        platform: PushPlatform,
        capability: CapabilityReport,
        negotiator: PermissionNegotiator,
        registry: SubscriptionRegistry | None,
        *,
        application_server_key: str,
        worker_script_url: str,
    ) -> None:
        self._platform = platform
        self._capability = capability
        self._negotiator = negotiator
        self._registry = registry
        self._application_server_key = application_server_key
        self._worker_script_url = worker_script_url
        self._lock = asyncio.Lock()
        self._background_tasks: set[asyncio.Task] = set()
        self.subscription: ObservableState[Subscription | None] = ObservableState(
            None, name="subscription"
        )
        self.recovery_status = RecoveryStatus.NOT_ATTEMPTED
        self.last_sync_error: str | None = None
        negotiator.permission.subscribe(self._on_permission_change, replay=False)

    @property
    def current(self) -> Subscription | None:
        return self.subscription.value

    @property
    def is_subscribed(self) -> bool:
        return self.subscription.value is not None

    @property
    def busy(self) -> bool:
        return self._lock.locked()

    async def recover_existing(self) -> Subscription | None:
        """Adopt a subscription the platform already holds for this installation.

        Never raises. A platform error leaves ``None`` as the current subscription
        and marks :attr:`recovery_status` as ``INDETERMINATE``. The lookup holds the
        same lock as ``subscribe`` and ``unsubscribe``; when one of them is running,
        recovery is skipped, the current value is returned and the status is
        ``INDETERMINATE``.
        """

        if not self._capability.supported:
            self.recovery_status = RecoveryStatus.ABSENT
            return None
        if self._lock.locked():
            logger.info("Skipping subscription recovery while another operation is running")
            self.recovery_status = RecoveryStatus.INDETERMINATE
            return self.current

        async with self._lock:
            try:
                existing = await self._platform.get_subscription()
            except Exception as exc:
                logger.warning("Could not look up an existing push subscription: %s", exc)
                self.recovery_status = RecoveryStatus.INDETERMINATE
                return None

            if existing is not None and not self._negotiator.current_permission().is_granted:
                logger.warning("Ignoring existing push subscription without granted permission")
                existing = None

            self.subscription.set(existing)
            self.recovery_status = RecoveryStatus.RECOVERED if existing else RecoveryStatus.ABSENT
            if existing is not None:
                logger.info("Recovered push subscription %s", _short(existing.endpoint))
            return existing

    async def subscribe(self) -> Subscription:
        """Return the live subscription, creating and registering it when missing."""

        self._capability.require()
        if self._lock.locked():
            raise OperationInProgress()

        async with self._lock:
            permission = self._negotiator.refresh()
            if not permission.is_granted:
                permission = await self._negotiator.request_permission()
            if permission is not Permission.GRANTED:
                raise PermissionDenied(permission)

            if self.current is not None:
                return self.current

            try:
                if not await self._platform.is_worker_registered():
                    await self._platform.register_worker(self._worker_script_url)
                subscription = await self._platform.get_subscription()
                if subscription is None:
                    key = url_base64_to_bytes(self._application_server_key)
                    subscription = await self._platform.subscribe(key)
            except Exception as exc:
                logger.error("Error subscribing to push notifications: %s", exc)
                raise SubscriptionCreationFailed(str(exc)) from exc

            self.subscription.set(subscription)
            logger.info("Subscribed to push notifications at %s", _short(subscription.endpoint))
            await self._register(subscription)
            return subscription

    async def unsubscribe(self) -> None:
        """Revoke the live subscription and drop the registry mirror."""

        self._capability.require()
        if self._lock.locked():
            raise OperationInProgress()

        async with self._lock:
            subscription = self.current
            if subscription is None:
                raise NoActiveSubscription()

            try:
                revoked = await self._platform.unsubscribe(subscription)
            except Exception as exc:
                logger.error("Error unsubscribing from push notifications: %s", exc)
                raise UnsubscribeFailed(str(exc)) from exc
            if not revoked:
                raise UnsubscribeFailed("The platform refused to revoke the subscription")

            self.subscription.set(None)
            logger.info("Unsubscribed from push notifications at %s", _short(subscription.endpoint))
            await self._deregister(subscription.endpoint)

    async def wait_for_background_tasks(self) -> None:
        if self._background_tasks:
            await asyncio.gather(*self._background_tasks, return_exceptions=True)

    def _on_permission_change(self, permission: Permission) -> None:
        subscription = self.current
        if permission.is_granted or subscription is None:
            return

        logger.info("Notification permission is %s; dropping local subscription", permission.value)
        self.subscription.set(None)
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            logger.warning(
                "No running loop to deregister %s; registry may hold a stale endpoint",
                _short(subscription.endpoint),
            )
            return
        task = loop.create_task(self._deregister(subscription.endpoint))
        self._background_tasks.add(task)
        task.add_done_callback(self._background_tasks.discard)

    async def _register(self, subscription: Subscription) -> None:
        if self._registry is None:
            return
        try:
            await self._registry.register(subscription)
        except RegistrySyncFailed as exc:
            self.last_sync_error = str(exc)
            logger.error("Failed to send subscription to server: %s", exc)
        else:
            self.last_sync_error = None

    async def _deregister(self, endpoint: str) -> None:
        if self._registry is None:
            return
        try:
            await self._registry.deregister(endpoint)
        except RegistrySyncFailed as exc:
            self.last_sync_error = str(exc)
            logger.error("Failed to remove subscription from server: %s", exc)
        else:
            self.last_sync_error = None


def _short(endpoint: str) -> str:
    return endpoint if len(endpoint) <= 50 else f"{endpoint[:50]}..."


__all__ = ["SubscriptionManager", "SubscriptionRegistry"]
