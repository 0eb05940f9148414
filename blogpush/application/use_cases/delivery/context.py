"""Wiring of the background delivery context."""

from __future__ import annotations

from typing import Callable

from sqlalchemy.orm import Session

from blogpush.config import Settings
from blogpush.infrastructure.http import JsonHttpClient
from blogpush.infrastructure.offline_queue import OfflineActionQueue
from blogpush.infrastructure.platform import WorkerScope
from blogpush.infrastructure.telemetry import TelemetryClient

from .router import DispatchRouter


def build_dispatch_router(
    settings: Settings,
    scope: WorkerScope,
    session_factory: Callable[[], Session],
    *,
    http: JsonHttpClient | None = None,
) -> DispatchRouter:
    """Build a router that owns its own HTTP client and storage access."""

    http = http or JsonHttpClient(
        settings.api_base_url,
        token_provider=lambda: settings.registry_token,
        timeout=settings.http_timeout_seconds,
    )
    return DispatchRouter(
        scope,
        icon=settings.notification_icon,
        badge=settings.notification_badge,
        telemetry=TelemetryClient(http),
        offline_queue=OfflineActionQueue(session_factory),
        resync_http=http,
        sync_tag=settings.background_sync_tag,
        version=settings.worker_version,
    )


__all__ = ["build_dispatch_router"]
