"""PostgreSQL implementation of UserSkill repository."""

from typing import List, Optional

from sqlalchemy import delete, insert, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from skillswap.domain.model import UserSkillDeclaration
from skillswap.domain.repository import UserSkillRepository
from skillswap.domain.value import SkillId, SkillRole, UserId, UserSkillId
from skillswap.persistence.mappers import row_to_user_skill, user_skill_to_dict
from skillswap.persistence.tables import user_skills_table


class PostgresUserSkillRepository(UserSkillRepository):
    """PostgreSQL implementation of UserSkillRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def find_by_id(
        self, declaration_id: UserSkillId
    ) -> Optional[UserSkillDeclaration]:
        """Find a declaration by ID."""
        stmt = select(user_skills_table).where(user_skills_table.c.id == declaration_id)
        result = await self.session.execute(stmt)
        row = result.fetchone()
        return row_to_user_skill(row._asdict()) if row else None

    async def find_by_skill_and_role(
        self, skill_id: SkillId, role: SkillRole
    ) -> List[UserSkillDeclaration]:
        """Find declarations of a skill in a role, best first."""
        stmt = (
            select(user_skills_table)
            .where(user_skills_table.c.skill_id == skill_id)
            .where(user_skills_table.c.role == role.value)
            .order_by(
                user_skills_table.c.proficiency_level.desc(),
                user_skills_table.c.created_at.desc(),
            )
        )
        result = await self.session.execute(stmt)
        return [row_to_user_skill(row._asdict()) for row in result.fetchall()]

    async def find_by_user(self, user_id: UserId) -> List[UserSkillDeclaration]:
        """Find all declarations of a user, newest first."""
        stmt = (
            select(user_skills_table)
            .where(user_skills_table.c.user_id == user_id)
            .order_by(user_skills_table.c.created_at.desc())
        )
        result = await self.session.execute(stmt)
        return [row_to_user_skill(row._asdict()) for row in result.fetchall()]

    async def save(self, declaration: UserSkillDeclaration) -> UserSkillDeclaration:
        """Save a declaration (create or update)."""
        data = user_skill_to_dict(declaration)
        existing = await self.find_by_id(declaration.id)

        # Savepoint keeps the request transaction usable after a duplicate
        async with self.session.begin_nested():
            if existing:
                stmt = (
                    update(user_skills_table)
                    .where(user_skills_table.c.id == declaration.id)
                    .values(
                        proficiency_level=data["proficiency_level"],
                        note=data["note"],
                    )
                )
            else:
                stmt = insert(user_skills_table).values(**data)
            await self.session.execute(stmt)

        return declaration

    async def delete(self, declaration_id: UserSkillId) -> bool:
        """Delete a declaration."""
        stmt = delete(user_skills_table).where(user_skills_table.c.id == declaration_id)
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount > 0  # type: ignore[attr-defined]
