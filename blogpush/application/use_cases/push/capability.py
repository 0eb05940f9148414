"""Detect whether the runtime can deliver background notifications at all."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from blogpush.domain.errors import UnsupportedCapability
from blogpush.infrastructure.platform import PushPlatform

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CapabilityReport:
    """Immutable result of the startup capability check."""

    background_context: bool
    push_api: bool

    @property
    def supported(self) -> bool:
        return self.background_context and self.push_api

    def require(self) -> None:
        """Raise :class:`UnsupportedCapability` unless push is supported."""

        if not self.supported:
            raise UnsupportedCapability()


def detect_capability(platform: PushPlatform) -> CapabilityReport:
    """Query the platform once; the answer holds for the process lifetime."""

    report = CapabilityReport(
        background_context=bool(platform.supports_background_context()),
        push_api=bool(platform.supports_push()),
    )
    if not report.supported:
        logger.warning(
            "Push notifications are not supported (background context: %s, push API: %s)",
            report.background_context,
            report.push_api,
        )
    return report


__all__ = ["CapabilityReport", "detect_capability"]
