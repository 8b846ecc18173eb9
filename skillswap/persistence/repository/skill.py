"""PostgreSQL implementation of Skill repository."""

from typing import Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from skillswap.domain.model import Skill
from skillswap.domain.repository import SkillRepository
from skillswap.domain.value import SkillId
from skillswap.persistence.mappers import row_to_skill
from skillswap.persistence.tables import skills_table


class PostgresSkillRepository(SkillRepository):
    """PostgreSQL implementation of SkillRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def find_by_id(self, skill_id: SkillId) -> Optional[Skill]:
        """Find a skill by ID."""
        stmt = select(skills_table).where(skills_table.c.id == skill_id)
        result = await self.session.execute(stmt)
        row = result.fetchone()
        return row_to_skill(row._asdict()) if row else None
