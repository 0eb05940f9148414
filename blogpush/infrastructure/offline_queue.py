"""Persistent queue of actions recorded while offline and replayed on background sync."""

from __future__ import annotations

import json
import logging
import uuid
from dataclasses import asdict, dataclass, field
from typing import Any, Callable

import requests
from sqlalchemy.orm import Session

from .http import JsonHttpClient
from .repositories import LocalStorageRepository

logger = logging.getLogger(__name__)

OFFLINE_ACTIONS_KEY = "offlineActions"


@dataclass
class OfflineAction:
    """Request to the backend that could not be sent at the time."""

    method: str
    path: str
    body: dict[str, Any] | None = None
    id: str = field(default_factory=lambda: uuid.uuid4().hex)


@dataclass
class ReplayReport:
    sent: int = 0
    remaining: int = 0
    errors: list[str] = field(default_factory=list)


class OfflineActionQueue:
    """FIFO of :class:`OfflineAction` stored in local storage."""

    def __init__(self, session_factory: Callable[[], Session]) -> None:
        self._session_factory = session_factory

    def pending(self) -> list[OfflineAction]:
        session = self._session_factory()
        try:
            raw = LocalStorageRepository(session).get(OFFLINE_ACTIONS_KEY)
        finally:
            session.close()
        if not raw:
            return []
        try:
            entries = json.loads(raw)
        except json.JSONDecodeError:
            logger.warning("Discarding unreadable offline action queue")
            return []
        actions: list[OfflineAction] = []
        missing_ids = False
        for entry in entries if isinstance(entries, list) else []:
            if isinstance(entry, dict) and entry.get("method") and entry.get("path"):
                action = OfflineAction(method=entry["method"], path=entry["path"], body=entry.get("body"))
                if entry.get("id"):
                    action.id = str(entry["id"])
                else:
                    missing_ids = True
                actions.append(action)
        if missing_ids:
            self._store(actions)
        return actions

    def enqueue(self, action: OfflineAction) -> None:
        self._store([*self.pending(), action])

    def _discard(self, action_id: str) -> None:
        self._store([action for action in self.pending() if action.id != action_id])

    def _store(self, actions: list[OfflineAction]) -> None:
        session = self._session_factory()
        try:
            repository = LocalStorageRepository(session)
            if actions:
                repository.set(OFFLINE_ACTIONS_KEY, json.dumps([asdict(a) for a in actions]))
            else:
                repository.remove(OFFLINE_ACTIONS_KEY)
        finally:
            session.close()

    async def replay(self, http: JsonHttpClient) -> ReplayReport:
        """Send queued actions in order, stopping at the first failure.

        Each delivered action is removed by id right after its send, so actions
        queued while a send is in flight are kept. The failed action and
        everything queued after it stay in the queue.
        """

        report = ReplayReport()
        for action in self.pending():
            try:
                await http.asend(action.method, action.path, action.body)
            except requests.RequestException as exc:
                logger.warning(
                    "Replaying offline action %s %s failed: %s", action.method, action.path, exc
                )
                report.errors.append(str(exc))
                break
            self._discard(action.id)
            report.sent += 1
        report.remaining = len(self.pending())
        return report


__all__ = ["OFFLINE_ACTIONS_KEY", "OfflineAction", "OfflineActionQueue", "ReplayReport"]
