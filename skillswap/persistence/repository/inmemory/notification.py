"""In-memory notification repository for testing."""

from typing import List, Optional

from skillswap.domain.model import Notification
from skillswap.domain.repository import NotificationRepository
from skillswap.domain.value import NotificationId, UserId


class InMemoryNotificationRepository(NotificationRepository):
    """In-memory implementation of NotificationRepository for testing."""

    def __init__(self) -> None:
        self._notifications: dict[NotificationId, Notification] = {}

    async def find_by_id(self, notification_id: NotificationId) -> Optional[Notification]:
        """Find a notification by ID."""
        return self._notifications.get(notification_id)

    async def find_by_user(
        self,
        user_id: UserId,
        unread_only: bool = False,
        limit: int = 50,
        offset: int = 0,
    ) -> List[Notification]:
        """Find a user's notifications, newest first."""
        # Reversed first so equal timestamps keep newest-inserted first
        notifications = [
            n
            for n in reversed(self._notifications.values())
            if n.user_id == user_id and not (unread_only and n.read)
        ]
        notifications.sort(key=lambda n: n.created_at, reverse=True)
        return notifications[offset : offset + limit]

    async def save(self, notification: Notification) -> Notification:
        """Save a notification."""
        self._notifications[notification.id] = notification
        return notification

    async def mark_read(self, notification_id: NotificationId) -> Optional[Notification]:
        """Set the read flag."""
        notification = self._notifications.get(notification_id)
        if notification is None:
            return None
        updated = notification.model_copy(update={"read": True})
        self._notifications[notification_id] = updated
        return updated

    async def mark_all_read(self, user_id: UserId) -> int:
        """Mark every unread notification of a user read."""
        count = 0
        for notification_id, notification in list(self._notifications.items()):
            if notification.user_id == user_id and not notification.read:
                self._notifications[notification_id] = notification.model_copy(
                    update={"read": True}
                )
                count += 1
        return count

    async def count_unread(self, user_id: UserId) -> int:
        """Count unread notifications of a user."""
        return sum(
            1
            for n in self._notifications.values()
            if n.user_id == user_id and not n.read
        )
