"""Mark notifications read use cases."""

from uuid import UUID

from pydantic import BaseModel

from skillswap.application.usecase.base import BaseUseCase
from skillswap.domain.service import NotificationService
from skillswap.domain.value import NotificationId, UserId

from .list_notifications import NotificationItem, to_notification_item


class MarkNotificationReadRequest(BaseModel):
    """Mark notification read request."""

    notification_id: str  # UUID string
    user_id: str  # User ID from authenticated user


class MarkNotificationReadUseCase(BaseUseCase):
    """Use case for reading one notification."""

    def __init__(self, notification_service: NotificationService) -> None:
        """Initialize mark notification read use case.

        Args:
            notification_service: Notification dispatcher
        """
        self.notification_service = notification_service

    async def execute(self, request: MarkNotificationReadRequest) -> NotificationItem:
        """Execute mark read flow.

        Raises:
            NotFoundError: If the notification does not exist
            NotAuthorizedError: If the caller is not its recipient
        """
        notification = await self.notification_service.mark_read(
            NotificationId(UUID(request.notification_id)),
            UserId(UUID(request.user_id)),
        )
        return to_notification_item(notification)


class MarkAllNotificationsReadRequest(BaseModel):
    """Mark all notifications read request."""

    user_id: str  # User ID from authenticated user


class MarkAllNotificationsReadResponse(BaseModel):
    """Mark all notifications read response."""

    marked_read: int


class MarkAllNotificationsReadUseCase(BaseUseCase):
    """Use case for clearing the notification badge."""

    def __init__(self, notification_service: NotificationService) -> None:
        """Initialize mark all read use case.

        Args:
            notification_service: Notification dispatcher
        """
        self.notification_service = notification_service

    async def execute(
        self, request: MarkAllNotificationsReadRequest
    ) -> MarkAllNotificationsReadResponse:
        count = await self.notification_service.mark_all_read(
            UserId(UUID(request.user_id))
        )
        return MarkAllNotificationsReadResponse(marked_read=count)
