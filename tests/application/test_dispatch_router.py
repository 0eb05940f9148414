"""Tests for the background delivery context router."""

from __future__ import annotations

import asyncio

import pytest

from blogpush.application.use_cases.delivery import (
    FALLBACK_BODY,
    FALLBACK_TITLE,
    DispatchRouter,
    render_notification,
    parse_payload,
)
from blogpush.domain.entities import ClientWindow, DisplayedNotification, NotificationData
from blogpush.domain.errors import TelemetryError
from blogpush.infrastructure.offline_queue import ReplayReport
from blogpush.infrastructure.platform import InMemoryPushPlatform

from conftest import SITE_ORIGIN

pytestmark = pytest.mark.anyio

ICON = "/assets/icons/icon-192x192.png"
BADGE = "/assets/icons/badge-72x72.png"


class RecordingTelemetry:
    def __init__(self, *, fail: bool = False) -> None:
        self.fail = fail
        self.calls: list[str | None] = []

    async def track_close(self, notification_id, *, timestamp=None):
        self.calls.append(notification_id)
        if self.fail:
            raise TelemetryError("telemetry endpoint unavailable")


class GatedTelemetry(RecordingTelemetry):
    def __init__(self, release: asyncio.Event) -> None:
        super().__init__()
        self.release = release

    async def track_close(self, notification_id, *, timestamp=None):
        await self.release.wait()
        await super().track_close(notification_id, timestamp=timestamp)


class RecordingQueue:
    def __init__(self, report: ReplayReport | None = None, *, fail: bool = False) -> None:
        self.report = report or ReplayReport()
        self.fail = fail
        self.replays = 0

    async def replay(self, http):
        self.replays += 1
        if self.fail:
            raise RuntimeError("storage unavailable")
        return self.report


@pytest.fixture
def scope() -> InMemoryPushPlatform:
    return InMemoryPushPlatform(origin=SITE_ORIGIN)


def _router(scope, **kwargs) -> DispatchRouter:
    return DispatchRouter(scope, icon=ICON, badge=BADGE, **kwargs)


def _notification(**data) -> DisplayedNotification:
    payload = parse_payload(b'{"title": "Hi"}')
    rendered = render_notification(payload, icon=ICON, badge=BADGE)
    rendered.data = NotificationData.from_mapping(data)
    return rendered


@pytest.mark.parametrize("raw", [b"not json", b"", None, b"[1, 2]", b"\xff\xfe", "42"])
async def test_malformed_payload_shows_exactly_one_fallback(scope, raw):
    notification = await _router(scope).on_push(raw)

    assert len(scope.shown) == 1
    assert notification is scope.shown[0]
    assert notification.title == FALLBACK_TITLE
    assert notification.body == FALLBACK_BODY
    assert (notification.icon, notification.badge) == (ICON, BADGE)


async def test_push_payload_is_rendered(scope):
    raw = (
        b'{"title": "New comment", "body": "Ana replied", "tag": "comment-1",'
        b' "data": {"type": "comment", "articleId": "A1"}, "requireInteraction": true}'
    )

    notification = await _router(scope).on_push(raw)

    assert scope.shown == [notification]
    assert notification.title == "New comment"
    assert notification.tag == "comment-1"
    assert notification.data.article_id == "A1"
    assert notification.require_interaction is True
    assert notification.silent is False
    assert [action.action for action in notification.actions] == ["open", "close"]


async def test_click_with_close_action_does_not_navigate(scope):
    notification = _notification(type="comment", articleId="A1")

    client = await _router(scope).on_notification_click(notification, "close")

    assert client is None
    assert scope.closed == [notification]
    assert scope.windows == []


async def test_click_opens_comment_anchor_for_article(scope):
    notification = _notification(type="comment", articleId="A1")

    client = await _router(scope).on_notification_click(notification, "open")

    assert client is not None
    assert client.url == f"{SITE_ORIGIN}/articles/A1#comments"
    assert len(scope.windows) == 1


async def test_click_focuses_existing_window_for_target(scope):
    target = f"{SITE_ORIGIN}/articles/A1#comments"
    scope.windows = [
        ClientWindow(id="w1", url=f"{SITE_ORIGIN}/dashboard", focused=True),
        ClientWindow(id="w2", url=target),
    ]

    client = await _router(scope).on_notification_click(
        _notification(type="comment", articleId="A1"), "open"
    )

    assert client.id == "w2"
    assert len(scope.windows) == 2
    assert [window.focused for window in scope.windows] == [False, True]


async def test_click_opens_one_window_when_no_client_matches(scope):
    scope.windows = [
        ClientWindow(id="w1", url=f"{SITE_ORIGIN}/dashboard"),
        ClientWindow(id="w2", url=f"{SITE_ORIGIN}/articles"),
    ]

    client = await _router(scope).on_notification_click(_notification(type="follow", userId="U7"))

    assert client.url == f"{SITE_ORIGIN}/profile/U7"
    assert len(scope.windows) == 3


async def test_close_tracking_failure_is_only_logged(scope, caplog):
    telemetry = RecordingTelemetry(fail=True)
    notification = _notification(type="like", trackClose=True, id="n-42")
    router = _router(scope, telemetry=telemetry)

    with caplog.at_level("ERROR"):
        await router.on_notification_close(notification)
        await router.wait_for_background_tasks()

    assert telemetry.calls == ["n-42"]
    assert "telemetry endpoint unavailable" in caplog.text


async def test_close_without_tracking_sends_nothing(scope):
    telemetry = RecordingTelemetry()

    task = await _router(scope, telemetry=telemetry).on_notification_close(_notification(type="like"))

    assert task is None
    assert telemetry.calls == []


async def test_close_tracking_does_not_wait_for_telemetry(scope):
    release = asyncio.Event()
    telemetry = GatedTelemetry(release)
    router = _router(scope, telemetry=telemetry)

    task = await router.on_notification_close(_notification(type="like", trackClose=True, id="n-7"))

    assert task is not None
    assert not task.done()

    release.set()
    await router.wait_for_background_tasks()

    assert telemetry.calls == ["n-7"]


async def test_sync_replays_queue_for_background_tag(scope):
    queue = RecordingQueue(ReplayReport(sent=2))
    router = _router(scope, offline_queue=queue, resync_http=object())

    report = await router.on_sync("background-sync")
    ignored = await router.on_sync("periodic-refresh")

    assert report.sent == 2
    assert ignored is None
    assert queue.replays == 1


async def test_sync_failure_never_escapes(scope, caplog):
    router = _router(scope, offline_queue=RecordingQueue(fail=True), resync_http=object())

    with caplog.at_level("ERROR"):
        report = await router.on_sync("background-sync")

    assert report is None
    assert "Background sync failed" in caplog.text


async def test_worker_messages_and_lifecycle(scope):
    router = _router(scope, version="2.1.0")

    assert await router.on_message({"type": "GET_VERSION"}) == {"version": "2.1.0"}
    assert await router.on_message({"type": "SKIP_WAITING"}) is None
    assert await router.on_message("noise") is None
    await router.on_activate()

    assert scope.waiting_skipped is True
    assert scope.clients_claimed is True
