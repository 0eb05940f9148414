"""Pydantic models for events delivered to the background delivery context."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from blogpush.domain.entities import DisplayedNotification, NotificationAction, NotificationData


class NotificationActionSchema(BaseModel):
    action: str
    title: str
    icon: str | None = None


class NotificationSchema(BaseModel):
    """Notification as shown by the platform, in its wire casing."""

    model_config = ConfigDict(populate_by_name=True)

    title: str
    body: str = ""
    icon: str = ""
    badge: str = ""
    tag: str | None = None
    data: dict[str, Any] = Field(default_factory=dict)
    actions: list[NotificationActionSchema] = Field(default_factory=list)
    require_interaction: bool = Field(default=False, alias="requireInteraction")
    silent: bool = False

    def to_entity(self) -> DisplayedNotification:
        return DisplayedNotification(
            title=self.title,
            body=self.body,
            icon=self.icon,
            badge=self.badge,
            tag=self.tag,
            data=NotificationData.from_mapping(self.data),
            actions=[NotificationAction(**action.model_dump()) for action in self.actions],
            require_interaction=self.require_interaction,
            silent=self.silent,
        )

    @classmethod
    def from_entity(cls, notification: DisplayedNotification) -> "NotificationSchema":
        return cls(
            title=notification.title,
            body=notification.body,
            icon=notification.icon,
            badge=notification.badge,
            tag=notification.tag,
            data=notification.data.to_dict(),
            actions=[NotificationActionSchema(**action.to_dict()) for action in notification.actions],
            require_interaction=notification.require_interaction,
            silent=notification.silent,
        )


class NotificationClickRequest(BaseModel):
    notification: NotificationSchema
    action: str | None = None


class NotificationCloseRequest(BaseModel):
    notification: NotificationSchema


class OfflineActionRequest(BaseModel):
    """Backend request to send on the next background sync."""

    method: str = Field(pattern=r"^(POST|PUT|PATCH|DELETE)$")
    path: str = Field(pattern=r"^/", min_length=1)
    body: dict[str, Any] | None = None


class OfflineActionQueued(BaseModel):
    id: str
    pending: int


class SyncRequest(BaseModel):
    tag: str


class ClientWindowRead(BaseModel):
    id: str
    url: str
    focused: bool


class NotificationClickResult(BaseModel):
    client: ClientWindowRead | None = None


class SyncResult(BaseModel):
    handled: bool
    sent: int = 0
    remaining: int = 0


__all__ = [
    "ClientWindowRead",
    "NotificationActionSchema",
    "NotificationClickRequest",
    "NotificationClickResult",
    "NotificationCloseRequest",
    "NotificationSchema",
    "OfflineActionQueued",
    "OfflineActionRequest",
    "SyncRequest",
    "SyncResult",
]
