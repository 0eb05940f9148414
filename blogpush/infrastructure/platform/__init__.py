"""Platform adapters for the main and background delivery contexts."""

from __future__ import annotations

from blogpush.config import Settings

from .base import PushPlatform, WorkerScope
from .memory import InMemoryPushPlatform, generate_subscription_keys


def build_platform(settings: Settings) -> InMemoryPushPlatform:
    """Return the platform adapter selected by ``PLATFORM_BACKEND``."""

    if settings.platform_backend == "memory":
        return InMemoryPushPlatform(
            origin=settings.site_origin,
            prompt=settings.memory_platform_permission,
        )
    raise ValueError(f"Unsupported platform backend '{settings.platform_backend}'")


__all__ = [
    "InMemoryPushPlatform",
    "PushPlatform",
    "WorkerScope",
    "build_platform",
    "generate_subscription_keys",
]
