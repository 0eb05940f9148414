"""Decoding of inbound push payloads and their rendering into notifications."""

from __future__ import annotations

import json
from typing import Any

from blogpush.domain.entities import (
    DisplayedNotification,
    InboundPayload,
    NotificationAction,
    NotificationData,
)
from blogpush.domain.errors import MalformedPayload

FALLBACK_TITLE = "New Notification"
FALLBACK_BODY = "You have a new notification"
DEFAULT_TAG = "general"


def default_actions() -> list[NotificationAction]:
    return [
        NotificationAction(action="open", title="Open", icon="/assets/icons/open.png"),
        NotificationAction(action="close", title="Close", icon="/assets/icons/close.png"),
    ]


def parse_payload(raw: bytes | str | None) -> InboundPayload:
    """Decode the JSON body of a push event.

    Raises :class:`MalformedPayload` for empty bodies, undecodable bytes, invalid
    JSON and JSON values that are not objects.
    """

    if raw is None:
        raise MalformedPayload("Push event carried no payload")
    if isinstance(raw, bytes):
        try:
            raw = raw.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise MalformedPayload("Push payload is not valid UTF-8") from exc
    if not raw.strip():
        raise MalformedPayload("Push event carried an empty payload")
    try:
        document = json.loads(raw)
    except json.JSONDecodeError as exc:
        raise MalformedPayload(f"Push payload is not JSON: {exc.msg}") from exc
    if not isinstance(document, dict):
        raise MalformedPayload("Push payload is not a JSON object")

    data = document.get("data")
    actions = document.get("actions")
    return InboundPayload(
        title=_optional_text(document.get("title")),
        body=_optional_text(document.get("body")),
        tag=_optional_text(document.get("tag")),
        data=NotificationData.from_mapping(data) if isinstance(data, dict) else None,
        actions=_parse_actions(actions) if isinstance(actions, list) else None,
        require_interaction=_optional_flag(document.get("requireInteraction")),
        silent=_optional_flag(document.get("silent")),
    )


def render_notification(payload: InboundPayload, *, icon: str, badge: str) -> DisplayedNotification:
    """Merge payload fields with the fixed platform chrome and defaults."""

    return DisplayedNotification(
        title=payload.title or FALLBACK_TITLE,
        body=payload.body or FALLBACK_BODY,
        icon=icon,
        badge=badge,
        tag=payload.tag or DEFAULT_TAG,
        data=payload.data or NotificationData(),
        actions=payload.actions if payload.actions is not None else default_actions(),
        require_interaction=bool(payload.require_interaction),
        silent=bool(payload.silent),
    )


def render_fallback(*, icon: str, badge: str) -> DisplayedNotification:
    """Generic notification shown when a payload cannot be used."""

    return DisplayedNotification(title=FALLBACK_TITLE, body=FALLBACK_BODY, icon=icon, badge=badge)


def _parse_actions(values: list[Any]) -> list[NotificationAction]:
    return [
        NotificationAction.from_mapping(value)
        for value in values
        if isinstance(value, dict) and value.get("action")
    ]


def _optional_text(value: Any) -> str | None:
    if value is None:
        return None
    return value if isinstance(value, str) else str(value)


def _optional_flag(value: Any) -> bool | None:
    return None if value is None else bool(value)


__all__ = [
    "DEFAULT_TAG",
    "FALLBACK_BODY",
    "FALLBACK_TITLE",
    "default_actions",
    "parse_payload",
    "render_fallback",
    "render_notification",
]
