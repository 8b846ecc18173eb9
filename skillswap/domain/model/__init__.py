"""Domain model entities for SkillSwap."""

from skillswap.domain.model.match import Match
from skillswap.domain.model.message import Message
from skillswap.domain.model.notification import Notification
from skillswap.domain.model.skill import Skill
from skillswap.domain.model.user_skill import UserSkillDeclaration

__all__ = [
    "Skill",
    "UserSkillDeclaration",
    "Match",
    "Message",
    "Notification",
]
