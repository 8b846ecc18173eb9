"""User skill declaration entity."""

from datetime import datetime
from typing import Optional

from pydantic import Field

from skillswap.domain.model.common import DomainModel, utc_now
from skillswap.domain.value import SkillId, SkillRole, UserId, UserSkillId
from skillswap.domain.value.types import ProficiencyLevel


class UserSkillDeclaration(DomainModel):
    """A user's claim to teach or to learn a skill.

    Business rules:
    - At most one declaration per (user, skill, role)
    - Only the owning user may edit or delete it
    """

    id: UserSkillId
    user_id: UserId
    skill_id: SkillId
    role: SkillRole
    proficiency_level: ProficiencyLevel
    note: Optional[str] = Field(default=None, max_length=1000)
    created_at: datetime = Field(default_factory=utc_now)
