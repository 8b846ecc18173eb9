"""In-memory user skill repository for testing."""

from typing import List, Optional

from sqlalchemy.exc import IntegrityError

from skillswap.domain.model import UserSkillDeclaration
from skillswap.domain.repository import UserSkillRepository
from skillswap.domain.value import SkillId, SkillRole, UserId, UserSkillId


class InMemoryUserSkillRepository(UserSkillRepository):
    """In-memory implementation of UserSkillRepository for testing."""

    def __init__(self) -> None:
        self._declarations: dict[UserSkillId, UserSkillDeclaration] = {}

    async def find_by_id(
        self, declaration_id: UserSkillId
    ) -> Optional[UserSkillDeclaration]:
        """Find a declaration by ID."""
        return self._declarations.get(declaration_id)

    async def find_by_skill_and_role(
        self, skill_id: SkillId, role: SkillRole
    ) -> List[UserSkillDeclaration]:
        """Find declarations of a skill in a role, best first."""
        matching = [
            d
            for d in reversed(self._declarations.values())
            if d.skill_id == skill_id and d.role == role
        ]
        return sorted(
            matching,
            key=lambda d: (d.proficiency_level.root, d.created_at),
            reverse=True,
        )

    async def find_by_user(self, user_id: UserId) -> List[UserSkillDeclaration]:
        """Find all declarations of a user, newest first."""
        declarations = [
            d for d in reversed(self._declarations.values()) if d.user_id == user_id
        ]
        return sorted(declarations, key=lambda d: d.created_at, reverse=True)

    async def save(self, declaration: UserSkillDeclaration) -> UserSkillDeclaration:
        """Save a declaration.

        Raises:
            IntegrityError: If another declaration has the same (user, skill, role)
        """
        for existing in self._declarations.values():
            if (
                existing.id != declaration.id
                and existing.user_id == declaration.user_id
                and existing.skill_id == declaration.skill_id
                and existing.role == declaration.role
            ):
                raise IntegrityError("Duplicate skill declaration", None, Exception())

        self._declarations[declaration.id] = declaration
        return declaration

    async def delete(self, declaration_id: UserSkillId) -> bool:
        """Delete a declaration."""
        return self._declarations.pop(declaration_id, None) is not None
