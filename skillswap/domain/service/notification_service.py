"""Notification domain service."""

from typing import Any, List
from uuid import uuid4

import logfire

from skillswap.domain.error import NotAuthorizedError, NotFoundError
from skillswap.domain.model import Notification
from skillswap.domain.repository import NotificationRepository
from skillswap.domain.value import NotificationId, NotificationType, UserId

from .base import DEFAULT_STORE_TIMEOUT, Service
from .live import LiveOutbox, LiveTransport, user_topic
from .streams import NotificationStream


class NotificationService(Service):
    """Persists user notices and queues them for live subscribers."""

    def __init__(
        self,
        notification_repository: NotificationRepository,
        live_transport: LiveTransport,
        outbox: LiveOutbox,
        store_timeout: float = DEFAULT_STORE_TIMEOUT,
    ) -> None:
        """Initialize notification service.

        Args:
            notification_repository: Notification repository
            live_transport: Push transport for the user topics
            outbox: Pushes held back until the request commits
            store_timeout: Seconds allowed per store interaction
        """
        self.notification_repository = notification_repository
        self.live_transport = live_transport
        self.outbox = outbox
        self.store_timeout = store_timeout

    async def emit(
        self,
        recipient_id: UserId,
        type: NotificationType,
        title: str,
        body: str,
        payload: dict[str, Any],
    ) -> Notification:
        """Persist a notification and queue its push to the recipient.

        The push goes out once the request commits and is best effort: a
        failure is logged and the persisted notification still stands.

        Args:
            recipient_id: User receiving the notice
            type: Notification type
            title: Short headline
            body: Human-readable text
            payload: JSON-serializable data, must include match_id

        Returns:
            The persisted notification

        Raises:
            StoreUnavailableError: If the notification could not be persisted
        """
        with logfire.span(
            "notification_service.emit",
            recipient_id=str(recipient_id),
            type=type.value,
        ):
            notification = Notification(
                id=NotificationId(uuid4()),
                user_id=recipient_id,
                type=type,
                title=title,
                body=body,
                payload=payload,
            )

            async with self.store_call("notification.emit"):
                saved = await self.notification_repository.save(notification)

            self.outbox.add(
                user_topic(saved.user_id),
                {"kind": "notification", "data": saved.model_dump(mode="json")},
            )
            return saved

    async def mark_read(
        self, notification_id: NotificationId, caller_id: UserId
    ) -> Notification:
        """Mark a notification read. Repeated calls are no-ops.

        Raises:
            NotFoundError: If the notification does not exist
            NotAuthorizedError: If the caller is not the recipient
        """
        with logfire.span(
            "notification_service.mark_read",
            notification_id=str(notification_id),
            caller_id=str(caller_id),
        ):
            async with self.store_call("notification.mark_read"):
                notification = await self.notification_repository.find_by_id(
                    notification_id
                )
                if notification is None:
                    raise NotFoundError("Notification", str(notification_id))

                if notification.user_id != caller_id:
                    logfire.warn(
                        "Notification read by non-recipient",
                        notification_id=str(notification_id),
                        caller_id=str(caller_id),
                    )
                    raise NotAuthorizedError("notification", notification_id, caller_id)

                if notification.read:
                    return notification

                updated = await self.notification_repository.mark_read(notification_id)

            return updated or notification.model_copy(update={"read": True})

    async def list(
        self,
        user_id: UserId,
        unread_only: bool = False,
        limit: int = 50,
        offset: int = 0,
    ) -> List[Notification]:
        """List a user's notifications, newest first."""
        async with self.store_call("notification.list"):
            return await self.notification_repository.find_by_user(
                user_id, unread_only=unread_only, limit=limit, offset=offset
            )

    async def mark_all_read(self, user_id: UserId) -> int:
        """Mark every notification of a user read.

        Returns:
            Number of notifications changed
        """
        with logfire.span("notification_service.mark_all_read", user_id=str(user_id)):
            async with self.store_call("notification.mark_all_read"):
                count = await self.notification_repository.mark_all_read(user_id)
            logfire.info("Notifications marked read", user_id=str(user_id), count=count)
            return count

    async def unread_count(self, user_id: UserId) -> int:
        async with self.store_call("notification.unread_count"):
            return await self.notification_repository.count_unread(user_id)

    async def subscribe(self, user_id: UserId) -> NotificationStream:
        """Open the live notification feed of a user."""
        subscription = await self.live_transport.subscribe(user_topic(user_id))
        logfire.info("Notification stream opened", user_id=str(user_id))
        return NotificationStream(subscription)
