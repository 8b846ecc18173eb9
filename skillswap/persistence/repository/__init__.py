"""PostgreSQL repository implementations."""

from skillswap.persistence.repository.match import PostgresMatchRepository
from skillswap.persistence.repository.message import PostgresMessageRepository
from skillswap.persistence.repository.notification import (
    PostgresNotificationRepository,
)
from skillswap.persistence.repository.skill import PostgresSkillRepository
from skillswap.persistence.repository.unit_of_work import SqlAlchemyUnitOfWork
from skillswap.persistence.repository.user_skill import PostgresUserSkillRepository

__all__ = [
    "PostgresSkillRepository",
    "PostgresUserSkillRepository",
    "PostgresMatchRepository",
    "PostgresMessageRepository",
    "PostgresNotificationRepository",
    "SqlAlchemyUnitOfWork",
]
