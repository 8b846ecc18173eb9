"""Notification routes."""

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Cookie, Query
from pydantic import BaseModel
from sse_starlette.sse import EventSourceResponse

from skillswap.application.usecase.notification import (
    ListNotificationsRequest,
    ListNotificationsResponse,
    ListNotificationsUseCase,
    MarkAllNotificationsReadRequest,
    MarkAllNotificationsReadResponse,
    MarkAllNotificationsReadUseCase,
    MarkNotificationReadRequest,
    MarkNotificationReadUseCase,
    NotificationItem,
    OpenNotificationStreamRequest,
    OpenNotificationStreamUseCase,
    to_notification_item,
)
from skillswap.domain.service import JWTService
from skillswap.interface.api.auth import require_principal
from skillswap.interface.api.streaming import event_source

router = APIRouter(prefix="/notifications", tags=["notifications"], route_class=DishkaRoute)


class UnreadCountResponse(BaseModel):
    """Unread notification badge."""

    unread_count: int


@router.get("", response_model=ListNotificationsResponse)
async def list_notifications(
    list_use_case: FromDishka[ListNotificationsUseCase],
    jwt_service: FromDishka[JWTService],
    unread_only: bool = Query(default=False),
    limit: int = Query(default=50, ge=1, le=200),
    offset: int = Query(default=0, ge=0),
    auth_token: str | None = Cookie(default=None),
) -> ListNotificationsResponse:
    """The caller's notifications, newest first."""
    principal = require_principal(jwt_service, auth_token, "view notifications")
    return await list_use_case.execute(
        ListNotificationsRequest(
            user_id=str(principal.user_id),
            unread_only=unread_only,
            limit=limit,
            offset=offset,
        )
    )


@router.get("/unread-count", response_model=UnreadCountResponse)
async def unread_count(
    list_use_case: FromDishka[ListNotificationsUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> UnreadCountResponse:
    """Number of unread notifications, for the navbar badge."""
    principal = require_principal(jwt_service, auth_token, "view notifications")
    result = await list_use_case.execute(
        ListNotificationsRequest(user_id=str(principal.user_id), unread_only=True, limit=1)
    )
    return UnreadCountResponse(unread_count=result.unread_count)


@router.post("/read-all", response_model=MarkAllNotificationsReadResponse)
async def mark_all_read(
    mark_all_use_case: FromDishka[MarkAllNotificationsReadUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> MarkAllNotificationsReadResponse:
    """Mark every notification of the caller as read."""
    principal = require_principal(jwt_service, auth_token, "update notifications")
    return await mark_all_use_case.execute(
        MarkAllNotificationsReadRequest(user_id=str(principal.user_id))
    )


@router.get("/stream")
async def stream_notifications(
    open_stream_use_case: FromDishka[OpenNotificationStreamUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> EventSourceResponse:
    """Server-Sent Events feed of the caller's new notifications."""
    principal = require_principal(jwt_service, auth_token, "follow notifications")
    stream = await open_stream_use_case.execute(
        OpenNotificationStreamRequest(user_id=str(principal.user_id))
    )
    return event_source(stream, "notification", to_notification_item)


@router.post("/{notification_id}/read", response_model=NotificationItem)
async def mark_read(
    notification_id: str,
    mark_read_use_case: FromDishka[MarkNotificationReadUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> NotificationItem:
    """Mark one notification as read. Repeating it is a no-op."""
    principal = require_principal(jwt_service, auth_token, "update notifications")
    return await mark_read_use_case.execute(
        MarkNotificationReadRequest(
            notification_id=notification_id, user_id=str(principal.user_id)
        )
    )
