"""Notification repository interface."""

from abc import ABC, abstractmethod
from typing import List, Optional

from skillswap.domain.model.notification import Notification
from skillswap.domain.value import NotificationId, UserId


class NotificationRepository(ABC):
    """Repository for Notification entity."""

    @abstractmethod
    async def find_by_id(self, notification_id: NotificationId) -> Optional[Notification]:
        """Find a notification by ID."""
        pass

    @abstractmethod
    async def find_by_user(
        self,
        user_id: UserId,
        unread_only: bool = False,
        limit: int = 50,
        offset: int = 0,
    ) -> List[Notification]:
        """Find a user's notifications, newest first.

        Args:
            user_id: Recipient
            unread_only: Skip notifications already read
            limit: Page size
            offset: Page offset

        Returns:
            Notifications ordered by created_at descending
        """
        pass

    @abstractmethod
    async def save(self, notification: Notification) -> Notification:
        """Persist a new notification."""
        pass

    @abstractmethod
    async def mark_read(self, notification_id: NotificationId) -> Optional[Notification]:
        """Set the read flag.

        Returns:
            Updated notification, None if it does not exist
        """
        pass

    @abstractmethod
    async def mark_all_read(self, user_id: UserId) -> int:
        """Mark every notification of a user read.

        Returns:
            Number of notifications changed
        """
        pass

    @abstractmethod
    async def count_unread(self, user_id: UserId) -> int:
        """Count unread notifications of a user."""
        pass
