"""Skill catalog repository interface."""

from abc import ABC, abstractmethod
from typing import Optional

from skillswap.domain.model.skill import Skill
from skillswap.domain.value import SkillId


class SkillRepository(ABC):
    """Read-only view of the external skill catalog."""

    @abstractmethod
    async def find_by_id(self, skill_id: SkillId) -> Optional[Skill]:
        """Find a skill by ID.

        Args:
            skill_id: The skill's unique identifier

        Returns:
            The skill if found, None otherwise
        """
        pass
