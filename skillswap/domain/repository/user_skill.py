"""User skill declaration repository interface."""

from abc import ABC, abstractmethod
from typing import List, Optional

from skillswap.domain.model.user_skill import UserSkillDeclaration
from skillswap.domain.value import SkillId, SkillRole, UserId, UserSkillId


class UserSkillRepository(ABC):
    """Repository for UserSkillDeclaration entity."""

    @abstractmethod
    async def find_by_id(
        self, declaration_id: UserSkillId
    ) -> Optional[UserSkillDeclaration]:
        """Find a declaration by ID."""
        pass

    @abstractmethod
    async def find_by_skill_and_role(
        self, skill_id: SkillId, role: SkillRole
    ) -> List[UserSkillDeclaration]:
        """Find every declaration of a skill in a role.

        Results are ordered by proficiency level (highest first), then by
        created_at (newest first).

        Args:
            skill_id: Skill to look up
            role: teach or learn

        Returns:
            Ordered declarations
        """
        pass

    @abstractmethod
    async def find_by_user(self, user_id: UserId) -> List[UserSkillDeclaration]:
        """Find all declarations of a user, newest first."""
        pass

    @abstractmethod
    async def save(self, declaration: UserSkillDeclaration) -> UserSkillDeclaration:
        """Create or update a declaration.

        Raises:
            IntegrityError: If another declaration has the same
                (user, skill, role)
        """
        pass

    @abstractmethod
    async def delete(self, declaration_id: UserSkillId) -> bool:
        """Delete a declaration.

        Returns:
            True if a declaration was deleted
        """
        pass
