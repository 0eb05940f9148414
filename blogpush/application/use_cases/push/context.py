"""Wiring of the main application context."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

from blogpush.config import Settings
from blogpush.domain.entities import (
    DisplayedNotification,
    NotificationData,
    Permission,
    RecoveryStatus,
    Subscription,
)
from blogpush.domain.errors import PermissionDenied
from blogpush.infrastructure.notifications import StateChangePublisher
from blogpush.infrastructure.platform import PushPlatform

from .capability import CapabilityReport, detect_capability
from .permissions import PermissionNegotiator
from .subscriptions import SubscriptionManager, SubscriptionRegistry

logger = logging.getLogger(__name__)


@dataclass
class PushStatus:
    """Snapshot of the main context exposed to the UI."""

    supported: bool
    permission: Permission
    subscription: Subscription | None
    recovery_status: RecoveryStatus
    busy: bool
    last_sync_error: str | None


class PushContext:
    """Capability detector, permission negotiator and subscription manager bundled."""

    def __init__(
        self,
        settings: Settings,
        platform: PushPlatform,
        registry: SubscriptionRegistry | None,
    ) -> None:
        self.settings = settings
        self.platform = platform
        self.capability: CapabilityReport = detect_capability(platform)
        self.permissions = PermissionNegotiator(platform, self.capability)
        self.subscriptions = SubscriptionManager(
            platform,
            self.capability,
            self.permissions,
            registry,
            application_server_key=settings.vapid_public_key,
            worker_script_url=settings.worker_script_url,
        )

    async def start(self) -> Subscription | None:
        """Read the permission and recover an existing subscription."""

        self.permissions.refresh()
        return await self.subscriptions.recover_existing()

    def attach(self, publisher: StateChangePublisher) -> None:
        """Forward every state change to ``publisher``."""

        self.permissions.permission.subscribe(publisher.publish_permission, replay=False)
        self.subscriptions.subscription.subscribe(publisher.publish_subscription, replay=False)

    def status(self) -> PushStatus:
        return PushStatus(
            supported=self.capability.supported,
            permission=self.permissions.permission.value,
            subscription=self.subscriptions.current,
            recovery_status=self.subscriptions.recovery_status,
            busy=self.subscriptions.busy,
            last_sync_error=self.subscriptions.last_sync_error,
        )

    async def show_local_notification(
        self,
        title: str,
        *,
        body: str = "",
        tag: str | None = None,
        data: dict[str, Any] | None = None,
        require_interaction: bool = False,
        silent: bool = False,
    ) -> DisplayedNotification:
        """Show a notification directly from the main context."""

        self.capability.require()
        permission = self.permissions.refresh()
        if not permission.is_granted:
            raise PermissionDenied(permission)

        notification = DisplayedNotification(
            title=title,
            body=body,
            icon=self.settings.notification_icon,
            badge=self.settings.notification_badge,
            tag=tag,
            data=NotificationData.from_mapping(data),
            require_interaction=require_interaction,
            silent=silent,
        )
        await self.platform.show_notification(notification)
        return notification


__all__ = ["PushContext", "PushStatus"]
