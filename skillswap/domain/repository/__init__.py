"""Repository interfaces for SkillSwap domain.

Repository interfaces are defined in the domain layer (dependency inversion).
Implementations live in the persistence layer.
"""

from skillswap.domain.repository.match import MatchRepository
from skillswap.domain.repository.message import MessageRepository
from skillswap.domain.repository.notification import NotificationRepository
from skillswap.domain.repository.skill import SkillRepository
from skillswap.domain.repository.unit_of_work import UnitOfWork
from skillswap.domain.repository.user_skill import UserSkillRepository

__all__ = [
    "SkillRepository",
    "UserSkillRepository",
    "MatchRepository",
    "MessageRepository",
    "NotificationRepository",
    "UnitOfWork",
]
