"""Transient notification payloads handled by the background delivery context."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping


@dataclass
class NotificationAction:
    """Button offered on a shown notification."""

    action: str
    title: str
    icon: str | None = None

    @classmethod
    def from_mapping(cls, values: Mapping[str, Any]) -> "NotificationAction":
        return cls(
            action=str(values.get("action", "")),
            title=str(values.get("title", "")),
            icon=values.get("icon"),
        )

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"action": self.action, "title": self.title}
        if self.icon:
            data["icon"] = self.icon
        return data


@dataclass
class NotificationData:
    """Routing hints carried by a payload; unknown keys are kept in ``extra``."""

    type: str | None = None
    article_id: str | None = None
    user_id: str | None = None
    url: str | None = None
    track_close: bool = False
    id: str | None = None
    extra: dict[str, Any] = field(default_factory=dict)

    _WIRE_KEYS = {
        "type": "type",
        "articleId": "article_id",
        "userId": "user_id",
        "url": "url",
        "trackClose": "track_close",
        "id": "id",
    }

    @classmethod
    def from_mapping(cls, values: Mapping[str, Any] | None) -> "NotificationData":
        if not values:
            return cls()
        known: dict[str, Any] = {}
        extra: dict[str, Any] = {}
        for key, value in values.items():
            attribute = cls._WIRE_KEYS.get(key)
            if attribute is None:
                extra[key] = value
            elif attribute == "track_close":
                known[attribute] = bool(value)
            else:
                known[attribute] = None if value is None else str(value)
        return cls(**known, extra=extra)

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = dict(self.extra)
        for wire_key, attribute in self._WIRE_KEYS.items():
            value = getattr(self, attribute)
            if attribute == "track_close":
                if value:
                    data[wire_key] = True
            elif value is not None:
                data[wire_key] = value
        return data


@dataclass
class InboundPayload:
    """Decoded push payload; every field is optional on the wire."""

    title: str | None = None
    body: str | None = None
    tag: str | None = None
    data: NotificationData | None = None
    actions: list[NotificationAction] | None = None
    require_interaction: bool | None = None
    silent: bool | None = None


@dataclass
class DisplayedNotification:
    """Notification handed to the platform for display."""

    title: str
    body: str
    icon: str
    badge: str
    tag: str | None = None
    data: NotificationData = field(default_factory=NotificationData)
    actions: list[NotificationAction] = field(default_factory=list)
    require_interaction: bool = False
    silent: bool = False


__all__ = [
    "DisplayedNotification",
    "InboundPayload",
    "NotificationAction",
    "NotificationData",
]
