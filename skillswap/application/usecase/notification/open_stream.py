"""Open notification stream use case."""

from uuid import UUID

from pydantic import BaseModel

from skillswap.application.usecase.base import BaseUseCase
from skillswap.domain.repository import UnitOfWork
from skillswap.domain.service import NotificationService, NotificationStream
from skillswap.domain.value import UserId


class OpenNotificationStreamRequest(BaseModel):
    """Open notification stream request."""

    user_id: str  # User ID from authenticated user


class OpenNotificationStreamUseCase(BaseUseCase):
    """Use case for the live notification badge feed."""

    def __init__(
        self, notification_service: NotificationService, unit_of_work: UnitOfWork
    ) -> None:
        """Initialize open notification stream use case.

        Args:
            notification_service: Notification dispatcher
            unit_of_work: Request transaction, finished before streaming
        """
        self.notification_service = notification_service
        self.unit_of_work = unit_of_work

    async def execute(self, request: OpenNotificationStreamRequest) -> NotificationStream:
        stream = await self.notification_service.subscribe(UserId(UUID(request.user_id)))
        try:
            await self.unit_of_work.commit()
        except Exception:
            await stream.close()
            raise
        return stream
