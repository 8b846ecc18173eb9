"""Domain value objects for SkillSwap.

Value objects are immutable and defined by their values, not identity.
They encapsulate validation rules and the match lifecycle table.
"""

from enum import Enum

from pydantic import field_validator

from skillswap.domain.value.common import RootValueObject, ValueObject
from skillswap.domain.value.identifiers import UserId


class SkillRole(str, Enum):
    """Whether a user offers a skill or wants to acquire it."""

    TEACH = "teach"
    LEARN = "learn"


class MatchStatus(str, Enum):
    """Status of a skill match.

    pending -> accepted | cancelled
    accepted -> completed | cancelled
    """

    PENDING = "pending"
    ACCEPTED = "accepted"
    COMPLETED = "completed"
    CANCELLED = "cancelled"

    @property
    def is_terminal(self) -> bool:
        return self in (MatchStatus.COMPLETED, MatchStatus.CANCELLED)

    def can_transition_to(self, target: "MatchStatus") -> bool:
        """Whether ``self -> target`` is an edge of the lifecycle."""
        return target in _TRANSITIONS.get(self, frozenset())


_TRANSITIONS: dict[MatchStatus, frozenset[MatchStatus]] = {
    MatchStatus.PENDING: frozenset({MatchStatus.ACCEPTED, MatchStatus.CANCELLED}),
    MatchStatus.ACCEPTED: frozenset({MatchStatus.COMPLETED, MatchStatus.CANCELLED}),
}


class MatchDecision(str, Enum):
    """A teacher's answer to a pending request."""

    ACCEPT = "accept"
    DECLINE = "decline"

    @property
    def target_status(self) -> MatchStatus:
        if self is MatchDecision.ACCEPT:
            return MatchStatus.ACCEPTED
        return MatchStatus.CANCELLED


class MessageType(str, Enum):
    """Kind of conversation entry."""

    TEXT = "text"
    FILE = "file"
    SYSTEM = "system"  # Written by the lifecycle engine, never by participants


class NotificationType(str, Enum):
    """Kind of user-facing notice."""

    MATCH_REQUEST = "match_request"
    MATCH_RESPONSE = "match_response"
    MATCH_COMPLETED = "match_completed"
    MATCH_CANCELLED = "match_cancelled"
    NEW_MESSAGE = "new_message"


PROFICIENCY_LABELS: dict[int, str] = {
    1: "Beginner",
    2: "Novice",
    3: "Intermediate",
    4: "Intermediate+",
    5: "Advanced",
    6: "Advanced+",
    7: "Expert",
    8: "Expert+",
    9: "Master",
    10: "Master+",
}


class ProficiencyLevel(RootValueObject[int]):
    """Self-assessed proficiency on a 1-10 scale."""

    @field_validator("root")
    @classmethod
    def validate_range(cls, v: int) -> int:
        """Validate level is within the scale."""
        if v < 1 or v > 10:
            raise ValueError("Proficiency level must be between 1 and 10")
        return v

    @property
    def label(self) -> str:
        return PROFICIENCY_LABELS[self.root]


class Principal(ValueObject):
    """Authenticated caller as asserted by the identity provider."""

    user_id: UserId
    display_name: str | None = None
    email: str | None = None

    @property
    def name(self) -> str:
        """Best human-readable name for notices and system messages."""
        if self.display_name:
            return self.display_name
        if self.email:
            return self.email.split("@")[0]
        return "Someone"
