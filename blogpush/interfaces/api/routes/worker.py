"""Endpoints through which the platform delivers background events."""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Body, Depends, Request, Response, status

from blogpush.application.use_cases.delivery import DispatchRouter
from blogpush.infrastructure.offline_queue import OfflineAction
from blogpush.interfaces.api.dependencies import get_dispatch_router
from blogpush.interfaces.api.schemas import (
    ClientWindowRead,
    NotificationClickRequest,
    NotificationClickResult,
    NotificationCloseRequest,
    NotificationSchema,
    OfflineActionQueued,
    OfflineActionRequest,
    SyncRequest,
    SyncResult,
)

router = APIRouter(prefix="/worker", tags=["worker"])


@router.post("/push", response_model=NotificationSchema | None)
async def handle_push(
    request: Request,
    dispatch: DispatchRouter = Depends(get_dispatch_router),
) -> NotificationSchema | None:
    """Render the raw push body; malformed bodies still show the fallback."""

    raw = await request.body()
    notification = await dispatch.on_push(raw or None)
    return NotificationSchema.from_entity(notification) if notification else None


@router.post("/notificationclick", response_model=NotificationClickResult)
async def handle_notification_click(
    payload: NotificationClickRequest,
    dispatch: DispatchRouter = Depends(get_dispatch_router),
) -> NotificationClickResult:
    client = await dispatch.on_notification_click(payload.notification.to_entity(), payload.action)
    if client is None:
        return NotificationClickResult(client=None)
    return NotificationClickResult(
        client=ClientWindowRead(id=client.id, url=client.url, focused=client.focused)
    )


@router.post("/notificationclose", status_code=status.HTTP_204_NO_CONTENT)
async def handle_notification_close(
    payload: NotificationCloseRequest,
    dispatch: DispatchRouter = Depends(get_dispatch_router),
) -> Response:
    await dispatch.on_notification_close(payload.notification.to_entity())
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post("/sync", response_model=SyncResult)
async def handle_sync(
    payload: SyncRequest,
    dispatch: DispatchRouter = Depends(get_dispatch_router),
) -> SyncResult:
    """Run the best-effort resync; the answer never signals failure."""

    report = await dispatch.on_sync(payload.tag)
    if report is None:
        return SyncResult(handled=False)
    return SyncResult(handled=True, sent=report.sent, remaining=report.remaining)


@router.post(
    "/offline-actions",
    response_model=OfflineActionQueued,
    status_code=status.HTTP_202_ACCEPTED,
)
def queue_offline_action(
    payload: OfflineActionRequest,
    dispatch: DispatchRouter = Depends(get_dispatch_router),
) -> OfflineActionQueued:
    """Keep a backend request that failed while offline for the next sync."""

    action = OfflineAction(method=payload.method, path=payload.path, body=payload.body)
    pending = dispatch.queue_offline_action(action)
    return OfflineActionQueued(id=action.id, pending=pending)


@router.post("/message")
async def handle_message(
    message: Any = Body(default=None),
    dispatch: DispatchRouter = Depends(get_dispatch_router),
) -> dict[str, Any] | None:
    return await dispatch.on_message(message)


@router.post("/install", status_code=status.HTTP_204_NO_CONTENT)
async def handle_install(dispatch: DispatchRouter = Depends(get_dispatch_router)) -> Response:
    await dispatch.on_install()
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post("/activate", status_code=status.HTTP_204_NO_CONTENT)
async def handle_activate(dispatch: DispatchRouter = Depends(get_dispatch_router)) -> Response:
    await dispatch.on_activate()
    return Response(status_code=status.HTTP_204_NO_CONTENT)
