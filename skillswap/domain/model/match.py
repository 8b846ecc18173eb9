"""Match aggregate root.

A match pairs a learner with a teacher for one skill and gates the
conversation between them.
"""

from datetime import datetime
from typing import Optional

from pydantic import Field, model_validator

from skillswap.domain.model.common import DomainModel, utc_now
from skillswap.domain.value import MatchId, MatchStatus, SkillId, UserId


class Match(DomainModel):
    """Match aggregate root.

    Business rules:
    - Teacher and learner are different users
    - One pending match per (teacher, learner, skill), enforced by the store
    - Status only changes along MatchStatus transitions
    - Never hard-deleted; terminal matches are the audit trail for reviews
    """

    id: MatchId
    teacher_id: UserId
    learner_id: UserId
    skill_id: SkillId
    status: MatchStatus = MatchStatus.PENDING
    message: Optional[str] = Field(default=None, max_length=2000)
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)
    accepted_at: Optional[datetime] = None  # Set once, when the channel opens

    @model_validator(mode="after")
    def validate_distinct_participants(self) -> "Match":
        """A user cannot be matched with themselves."""
        if self.teacher_id == self.learner_id:
            raise ValueError("Teacher and learner must be different users")
        return self

    def is_participant(self, user_id: UserId) -> bool:
        return user_id in (self.teacher_id, self.learner_id)

    def counterpart_of(self, user_id: UserId) -> UserId:
        """The other participant.

        Raises:
            ValueError: If user_id is not a participant
        """
        if user_id == self.teacher_id:
            return self.learner_id
        if user_id == self.learner_id:
            return self.teacher_id
        raise ValueError(f"User {user_id} is not part of match {self.id}")

    @property
    def was_accepted(self) -> bool:
        """Whether the conversation was ever opened."""
        return self.accepted_at is not None
