"""Permission negotiation with the platform."""

from __future__ import annotations

import logging

from blogpush.domain.entities import Permission
from blogpush.infrastructure.notifications import ObservableState
from blogpush.infrastructure.platform import PushPlatform

from .capability import CapabilityReport

logger = logging.getLogger(__name__)


class PermissionNegotiator:
    """Request and track the user's notification permission decision.

    The negotiator never assumes a transition: after every prompt it re-reads the
    platform value, since the user may also change it from the browser settings.
    """

    def __init__(self, platform: PushPlatform, capability: CapabilityReport) -> None:
        self._platform = platform
        self._capability = capability
        self.permission: ObservableState[Permission] = ObservableState(
            self.current_permission(), name="permission"
        )

    def current_permission(self) -> Permission:
        """Read the platform state without prompting."""

        if not self._capability.supported:
            return Permission.UNDETERMINED
        return Permission.from_platform(self._platform.permission_state())

    def refresh(self) -> Permission:
        """Publish the platform value if it changed out of band."""

        permission = self.current_permission()
        self.permission.set(permission)
        return permission

    async def request_permission(self) -> Permission:
        """Prompt the user once and return the resulting decision."""

        self._capability.require()
        answer = Permission.from_platform(await self._platform.request_permission())
        permission = self.current_permission()
        if permission is not answer:
            logger.debug("Prompt answered %s but platform reports %s", answer.value, permission.value)
        self.permission.set(permission)
        logger.info("Notification permission is %s", permission.value)
        return permission


__all__ = ["PermissionNegotiator"]
