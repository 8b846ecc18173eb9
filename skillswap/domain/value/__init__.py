"""Domain value objects for SkillSwap."""

from skillswap.domain.value.identifiers import (
    MatchId,
    MessageId,
    NotificationId,
    SkillId,
    UserId,
    UserSkillId,
)
from skillswap.domain.value.types import (
    MatchDecision,
    MatchStatus,
    MessageType,
    NotificationType,
    Principal,
    ProficiencyLevel,
    SkillRole,
)

__all__ = [
    # Identifiers
    "UserId",
    "SkillId",
    "UserSkillId",
    "MatchId",
    "MessageId",
    "NotificationId",
    # Types
    "SkillRole",
    "MatchStatus",
    "MatchDecision",
    "MessageType",
    "NotificationType",
    "ProficiencyLevel",
    "Principal",
]
