"""Endpoints driving the main-context push lifecycle."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, WebSocket, WebSocketDisconnect, status

from blogpush.application.use_cases.push import PushContext
from blogpush.domain.errors import PushError
from blogpush.infrastructure.notifications import StateConnectionManager
from blogpush.interfaces.api.dependencies import get_push_context
from blogpush.interfaces.api.routes_helpers import (
    status_to_schema,
    subscription_to_schema,
    to_http_exception,
)
from blogpush.interfaces.api.schemas import (
    LocalNotificationRequest,
    NotificationSchema,
    PermissionRead,
    PushStatusRead,
    SubscriptionRead,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/push", tags=["push"])


@router.get("/status", response_model=PushStatusRead)
async def read_status(context: PushContext = Depends(get_push_context)) -> PushStatusRead:
    """Return capability, permission and subscription state."""

    context.permissions.refresh()
    return status_to_schema(context.status())


@router.post("/permission", response_model=PermissionRead)
async def request_permission(context: PushContext = Depends(get_push_context)) -> PermissionRead:
    """Prompt the user for notification permission."""

    try:
        permission = await context.permissions.request_permission()
    except PushError as exc:
        raise to_http_exception(exc) from exc
    return PermissionRead(permission=permission)


@router.post("/subscribe", response_model=SubscriptionRead, status_code=status.HTTP_201_CREATED)
async def subscribe(context: PushContext = Depends(get_push_context)) -> SubscriptionRead:
    """Create (or return) the installation's push subscription."""

    try:
        subscription = await context.subscriptions.subscribe()
    except PushError as exc:
        raise to_http_exception(exc) from exc
    return subscription_to_schema(subscription)


@router.post("/unsubscribe", response_model=PushStatusRead)
async def unsubscribe(context: PushContext = Depends(get_push_context)) -> PushStatusRead:
    """Revoke the push subscription."""

    try:
        await context.subscriptions.unsubscribe()
    except PushError as exc:
        raise to_http_exception(exc) from exc
    return status_to_schema(context.status())


@router.post("/test", response_model=NotificationSchema)
async def send_test_notification(
    payload: LocalNotificationRequest,
    context: PushContext = Depends(get_push_context),
) -> NotificationSchema:
    """Show a local notification without going through the push service."""

    try:
        notification = await context.show_local_notification(
            payload.title,
            body=payload.body,
            tag=payload.tag,
            data=payload.data,
            require_interaction=payload.require_interaction,
            silent=payload.silent,
        )
    except PushError as exc:
        raise to_http_exception(exc) from exc
    return NotificationSchema.from_entity(notification)


@router.websocket("/ws")
async def push_state_websocket(websocket: WebSocket) -> None:
    """Stream permission and subscription changes to a UI instance."""

    context: PushContext = websocket.app.state.push_context
    manager: StateConnectionManager = websocket.app.state.connection_manager

    await manager.connect(websocket)
    try:
        snapshot = status_to_schema(context.status())
        await websocket.send_json({"type": "init", "data": snapshot.model_dump(mode="json")})
        while True:
            message = await websocket.receive_json()
            if isinstance(message, dict) and message.get("type") == "ping":
                await websocket.send_json({"type": "pong"})
    except WebSocketDisconnect:
        manager.disconnect(websocket)
    except Exception:
        manager.disconnect(websocket)
        raise
