"""Handlers of the platform events received by the background delivery context."""

from __future__ import annotations

import asyncio
import logging
from typing import Any

from blogpush.domain.entities import ClientWindow, DisplayedNotification
from blogpush.domain.errors import MalformedPayload, TelemetryError
from blogpush.infrastructure.http import JsonHttpClient
from blogpush.infrastructure.offline_queue import OfflineAction, OfflineActionQueue, ReplayReport
from blogpush.infrastructure.platform import WorkerScope
from blogpush.infrastructure.telemetry import TelemetryClient

from .rendering import parse_payload, render_fallback, render_notification
from .routing import resolve_target_url

logger = logging.getLogger(__name__)

CLOSE_ACTION = "close"


class DispatchRouter:
    """Render inbound pushes and act on the user's interaction with them.

    The router may run while no UI instance exists, so it never relies on the
    main context: every decision is derived from the event it receives. Failures
    are logged and never propagated, since no caller waits on these events.
    """

    def __init__(
        self,
        scope: WorkerScope,
        *,
        icon: str,
        badge: str,
        telemetry: TelemetryClient | None = None,
        offline_queue: OfflineActionQueue | None = None,
        resync_http: JsonHttpClient | None = None,
        sync_tag: str = "background-sync",
        version: str = "1.0.0",
    ) -> None:
        self._scope = scope
        self._icon = icon
        self._badge = badge
        self._telemetry = telemetry
        self._offline_queue = offline_queue
        self._resync_http = resync_http
        self._sync_tag = sync_tag
        self._version = version
        self._background_tasks: set[asyncio.Task] = set()

    async def on_push(self, raw: bytes | str | None) -> DisplayedNotification | None:
        """Show exactly one notification for the push, the fallback if needed."""

        try:
            notification = render_notification(parse_payload(raw), icon=self._icon, badge=self._badge)
        except MalformedPayload as exc:
            logger.warning("Error handling push event: %s", exc)
            notification = render_fallback(icon=self._icon, badge=self._badge)

        try:
            await self._scope.show_notification(notification)
        except Exception:
            logger.exception("Platform failed to show notification %r", notification.title)
            return None
        return notification

    async def on_notification_click(
        self, notification: DisplayedNotification, action: str | None = None
    ) -> ClientWindow | None:
        """Close ``notification`` and bring its target page to the front."""

        await self._close(notification)
        if action == CLOSE_ACTION:
            return None

        target = resolve_target_url(self._scope.origin, notification.data, action)
        try:
            for client in await self._scope.match_clients():
                if client.url == target:
                    return await self._scope.focus_client(client)
            return await self._scope.open_window(target)
        except Exception:
            logger.exception("Could not navigate to %s after a notification click", target)
            return None

    async def on_notification_close(self, notification: DisplayedNotification) -> asyncio.Task | None:
        """Report the dismissal when the payload asked for close tracking.

        The report runs as a background task; the handler returns without waiting
        on the telemetry endpoint.
        """

        data = notification.data
        if not data.track_close or self._telemetry is None:
            return None
        task = asyncio.get_running_loop().create_task(self._track_close(data.id))
        self._background_tasks.add(task)
        task.add_done_callback(self._background_tasks.discard)
        return task

    async def on_sync(self, tag: str) -> ReplayReport | None:
        """Replay queued offline actions for the background sync tag."""

        if tag != self._sync_tag:
            logger.debug("Ignoring sync event with tag %s", tag)
            return None
        if self._offline_queue is None or self._resync_http is None:
            return ReplayReport()

        logger.info("Performing background sync...")
        try:
            report = await self._offline_queue.replay(self._resync_http)
        except Exception:
            logger.exception("Background sync failed")
            return None
        if report.remaining:
            logger.warning("Background sync left %s queued action(s)", report.remaining)
        return report

    def queue_offline_action(self, action: OfflineAction) -> int:
        """Store an action for the next background sync and return the queue length."""

        if self._offline_queue is None:
            raise RuntimeError("No offline action queue is configured")
        self._offline_queue.enqueue(action)
        pending = len(self._offline_queue.pending())
        logger.info("Queued offline action %s %s (%s pending)", action.method, action.path, pending)
        return pending

    async def on_install(self) -> None:
        logger.info("Background delivery context installing...")
        await self._scope.skip_waiting()

    async def on_activate(self) -> None:
        logger.info("Background delivery context activating...")
        await self._scope.claim_clients()

    async def on_message(self, message: Any) -> dict[str, Any] | None:
        """Answer messages posted by the main application."""

        if not isinstance(message, dict):
            return None
        message_type = message.get("type")
        if message_type == "SKIP_WAITING":
            await self._scope.skip_waiting()
            return None
        if message_type == "GET_VERSION":
            return {"version": self._version}
        return None

    async def wait_for_background_tasks(self) -> None:
        if self._background_tasks:
            await asyncio.gather(*self._background_tasks, return_exceptions=True)

    async def _track_close(self, notification_id: str | None) -> None:
        try:
            await self._telemetry.track_close(notification_id)
        except TelemetryError as exc:
            logger.error("%s", exc)

    async def _close(self, notification: DisplayedNotification) -> None:
        try:
            await self._scope.close_notification(notification)
        except Exception:
            logger.exception("Could not close notification %r", notification.title)


__all__ = ["CLOSE_ACTION", "DispatchRouter"]
