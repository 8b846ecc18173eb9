"""In-memory repository implementations for testing."""

from .match import InMemoryMatchRepository
from .message import InMemoryMessageRepository
from .notification import InMemoryNotificationRepository
from .skill import InMemorySkillRepository
from .unit_of_work import InMemoryUnitOfWork
from .user_skill import InMemoryUserSkillRepository

__all__ = [
    "InMemoryMatchRepository",
    "InMemoryMessageRepository",
    "InMemoryNotificationRepository",
    "InMemorySkillRepository",
    "InMemoryUnitOfWork",
    "InMemoryUserSkillRepository",
]
