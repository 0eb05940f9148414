"""Tests for preferences and the offline action queue kept in local storage."""

from __future__ import annotations

import json

import pytest
import requests

from blogpush.application.use_cases.preferences import PREFERENCES_KEY, PreferenceStore
from blogpush.domain.entities import PreferenceRecord
from blogpush.infrastructure.offline_queue import OFFLINE_ACTIONS_KEY, OfflineAction, OfflineActionQueue
from blogpush.infrastructure.repositories import LocalStorageRepository


def test_preferences_default_to_all_enabled(session_factory):
    record = PreferenceStore(session_factory).load()

    assert record == PreferenceRecord()
    assert all(record.to_dict().values())


def test_toggle_persists_only_that_category_across_reload(session_factory):
    store = PreferenceStore(session_factory)
    store.update(likes=False)

    store.toggle("comments")

    reloaded = PreferenceStore(session_factory).load()
    assert reloaded.to_dict() == {
        "comments": False,
        "likes": False,
        "mentions": True,
        "articles": True,
        "system": True,
    }


def test_toggle_rejects_unknown_category(session_factory):
    with pytest.raises(ValueError):
        PreferenceStore(session_factory).toggle("followers")


def test_unreadable_preferences_fall_back_to_defaults(session_factory, caplog):
    session = session_factory()
    LocalStorageRepository(session).set(PREFERENCES_KEY, "{broken")
    session.close()

    with caplog.at_level("WARNING"):
        record = PreferenceStore(session_factory).load()

    assert record == PreferenceRecord()
    assert "unreadable" in caplog.text


def test_stored_record_ignores_unknown_keys(session_factory):
    session = session_factory()
    LocalStorageRepository(session).set(
        PREFERENCES_KEY, json.dumps({"system": False, "followers": False})
    )
    session.close()

    assert PreferenceStore(session_factory).load() == PreferenceRecord(system=False)


class FlakyHttp:
    def __init__(self, fail_on: str | None = None) -> None:
        self.fail_on = fail_on
        self.sent: list[tuple[str, str]] = []

    async def asend(self, method, path, body=None):
        if path == self.fail_on:
            raise requests.ConnectionError("offline")
        self.sent.append((method, path))


@pytest.mark.anyio
async def test_replay_keeps_failed_action_and_the_rest(session_factory):
    queue = OfflineActionQueue(session_factory)
    queue.enqueue(OfflineAction("POST", "/comments", {"body": "first"}))
    queue.enqueue(OfflineAction("POST", "/likes", {"articleId": "A1"}))
    queue.enqueue(OfflineAction("PUT", "/drafts/3", {"title": "t"}))

    report = await queue.replay(FlakyHttp(fail_on="/likes"))

    assert report.sent == 1
    assert report.remaining == 2
    assert [action.path for action in queue.pending()] == ["/likes", "/drafts/3"]

    http = FlakyHttp()
    report = await queue.replay(http)

    assert report.sent == 2
    assert http.sent == [("POST", "/likes"), ("PUT", "/drafts/3")]
    assert queue.pending() == []


class EnqueueingHttp:
    """Sends successfully and records a new offline action during the first send."""

    def __init__(self, queue: OfflineActionQueue) -> None:
        self.queue = queue
        self.sent: list[str] = []

    async def asend(self, method, path, body=None):
        if not self.sent:
            self.queue.enqueue(OfflineAction("POST", "/late"))
        self.sent.append(path)


@pytest.mark.anyio
async def test_actions_queued_during_replay_are_kept(session_factory):
    queue = OfflineActionQueue(session_factory)
    queue.enqueue(OfflineAction("POST", "/comments", {"body": "first"}))

    report = await queue.replay(EnqueueingHttp(queue))

    assert report.sent == 1
    assert report.remaining == 1
    assert [action.path for action in queue.pending()] == ["/late"]


@pytest.mark.anyio
async def test_stored_actions_without_ids_are_replayed_once(session_factory):
    session = session_factory()
    LocalStorageRepository(session).set(
        OFFLINE_ACTIONS_KEY,
        json.dumps([{"method": "POST", "path": "/likes"}, {"method": "POST", "path": "/likes"}]),
    )
    session.close()
    queue = OfflineActionQueue(session_factory)
    http = FlakyHttp()

    report = await queue.replay(http)

    assert report.sent == 2
    assert http.sent == [("POST", "/likes"), ("POST", "/likes")]
    assert queue.pending() == []
