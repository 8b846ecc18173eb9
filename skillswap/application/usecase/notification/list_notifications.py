"""List notifications use case."""

from datetime import datetime
from typing import Any
from uuid import UUID

from pydantic import BaseModel, Field

from skillswap.application.usecase.base import BaseUseCase
from skillswap.domain.model import Notification
from skillswap.domain.service import NotificationService
from skillswap.domain.value import NotificationType, UserId


class NotificationItem(BaseModel):
    """Notification as returned to API clients."""

    notification_id: str
    type: NotificationType
    title: str
    body: str
    payload: dict[str, Any]
    read: bool
    created_at: datetime


def to_notification_item(notification: Notification) -> NotificationItem:
    return NotificationItem(
        notification_id=str(notification.id),
        type=notification.type,
        title=notification.title,
        body=notification.body,
        payload=notification.payload,
        read=notification.read,
        created_at=notification.created_at,
    )


class ListNotificationsRequest(BaseModel):
    """List notifications request."""

    user_id: str  # User ID from authenticated user
    unread_only: bool = False
    limit: int = Field(default=50, ge=1, le=200)
    offset: int = Field(default=0, ge=0)


class ListNotificationsResponse(BaseModel):
    """List notifications response."""

    notifications: list[NotificationItem]
    unread_count: int


class ListNotificationsUseCase(BaseUseCase):
    """Use case for the caller's notifications, newest first."""

    def __init__(self, notification_service: NotificationService) -> None:
        """Initialize list notifications use case.

        Args:
            notification_service: Notification dispatcher
        """
        self.notification_service = notification_service

    async def execute(
        self, request: ListNotificationsRequest
    ) -> ListNotificationsResponse:
        user_id = UserId(UUID(request.user_id))
        notifications = await self.notification_service.list(
            user_id,
            unread_only=request.unread_only,
            limit=request.limit,
            offset=request.offset,
        )
        unread = await self.notification_service.unread_count(user_id)
        return ListNotificationsResponse(
            notifications=[to_notification_item(n) for n in notifications],
            unread_count=unread,
        )
