"""In-memory skill catalog for testing."""

from typing import Iterable, Optional

from skillswap.domain.model import Skill
from skillswap.domain.repository import SkillRepository
from skillswap.domain.value import SkillId


class InMemorySkillRepository(SkillRepository):
    """In-memory implementation of SkillRepository for testing."""

    def __init__(self, skills: Iterable[Skill] = ()) -> None:
        self._skills: dict[SkillId, Skill] = {skill.id: skill for skill in skills}

    def add(self, skill: Skill) -> Skill:
        """Put a skill in the catalog (test setup only)."""
        self._skills[skill.id] = skill
        return skill

    async def find_by_id(self, skill_id: SkillId) -> Optional[Skill]:
        """Find a skill by ID."""
        return self._skills.get(skill_id)
