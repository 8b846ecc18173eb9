"""PostgreSQL implementation of Notification repository."""

from typing import List, Optional

from sqlalchemy import func, insert, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from skillswap.domain.model import Notification
from skillswap.domain.repository import NotificationRepository
from skillswap.domain.value import NotificationId, UserId
from skillswap.persistence.mappers import notification_to_dict, row_to_notification
from skillswap.persistence.tables import notifications_table


class PostgresNotificationRepository(NotificationRepository):
    """PostgreSQL implementation of NotificationRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def find_by_id(self, notification_id: NotificationId) -> Optional[Notification]:
        """Find a notification by ID."""
        stmt = select(notifications_table).where(
            notifications_table.c.id == notification_id
        )
        result = await self.session.execute(stmt)
        row = result.fetchone()
        return row_to_notification(row._asdict()) if row else None

    async def find_by_user(
        self,
        user_id: UserId,
        unread_only: bool = False,
        limit: int = 50,
        offset: int = 0,
    ) -> List[Notification]:
        """Find a user's notifications, newest first."""
        stmt = select(notifications_table).where(notifications_table.c.user_id == user_id)
        if unread_only:
            stmt = stmt.where(notifications_table.c.read.is_(False))
        stmt = (
            stmt.order_by(notifications_table.c.created_at.desc())
            .limit(limit)
            .offset(offset)
        )
        result = await self.session.execute(stmt)
        return [row_to_notification(row._asdict()) for row in result.fetchall()]

    async def save(self, notification: Notification) -> Notification:
        """Insert a notification.

        Runs in a savepoint so a failed insert leaves the surrounding
        transition intact.
        """
        async with self.session.begin_nested():
            stmt = insert(notifications_table).values(
                **notification_to_dict(notification)
            )
            await self.session.execute(stmt)
        return notification

    async def mark_read(self, notification_id: NotificationId) -> Optional[Notification]:
        """Set the read flag."""
        stmt = (
            update(notifications_table)
            .where(notifications_table.c.id == notification_id)
            .values(read=True)
            .returning(notifications_table)
        )
        result = await self.session.execute(stmt)
        row = result.fetchone()
        await self.session.flush()
        return row_to_notification(row._asdict()) if row else None

    async def mark_all_read(self, user_id: UserId) -> int:
        """Mark every unread notification of a user read."""
        stmt = (
            update(notifications_table)
            .where(notifications_table.c.user_id == user_id)
            .where(notifications_table.c.read.is_(False))
            .values(read=True)
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount  # type: ignore[attr-defined]

    async def count_unread(self, user_id: UserId) -> int:
        """Count unread notifications of a user."""
        stmt = (
            select(func.count())
            .select_from(notifications_table)
            .where(notifications_table.c.user_id == user_id)
            .where(notifications_table.c.read.is_(False))
        )
        result = await self.session.execute(stmt)
        return result.scalar_one()
