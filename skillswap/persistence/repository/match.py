"""PostgreSQL implementation of Match repository."""

from datetime import datetime
from typing import List, Optional

from sqlalchemy import insert, or_, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from skillswap.domain.model import Match
from skillswap.domain.repository import MatchRepository
from skillswap.domain.value import MatchId, MatchStatus, SkillId, UserId
from skillswap.persistence.mappers import match_to_dict, row_to_match
from skillswap.persistence.tables import matches_table


class PostgresMatchRepository(MatchRepository):
    """PostgreSQL implementation of MatchRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def find_by_id(self, match_id: MatchId) -> Optional[Match]:
        """Find a match by ID."""
        stmt = select(matches_table).where(matches_table.c.id == match_id)
        result = await self.session.execute(stmt)
        row = result.fetchone()
        return row_to_match(row._asdict()) if row else None

    async def find_pending(
        self, teacher_id: UserId, learner_id: UserId, skill_id: SkillId
    ) -> Optional[Match]:
        """Find the pending match of a triple."""
        stmt = select(matches_table).where(
            matches_table.c.teacher_id == teacher_id,
            matches_table.c.learner_id == learner_id,
            matches_table.c.skill_id == skill_id,
            matches_table.c.status == MatchStatus.PENDING.value,
        )
        result = await self.session.execute(stmt)
        row = result.fetchone()
        return row_to_match(row._asdict()) if row else None

    async def find_by_participant(
        self,
        user_id: UserId,
        status: Optional[MatchStatus] = None,
    ) -> List[Match]:
        """Find matches of a user, newest first."""
        stmt = select(matches_table).where(
            or_(
                matches_table.c.teacher_id == user_id,
                matches_table.c.learner_id == user_id,
            )
        )
        if status is not None:
            stmt = stmt.where(matches_table.c.status == status.value)
        stmt = stmt.order_by(matches_table.c.created_at.desc())

        result = await self.session.execute(stmt)
        return [row_to_match(row._asdict()) for row in result.fetchall()]

    async def create(self, match: Match) -> Match:
        """Insert a match.

        The partial unique index on pending triples raises IntegrityError
        for a duplicate. The insert runs in a savepoint so the caller can
        keep using the session afterwards.
        """
        async with self.session.begin_nested():
            stmt = insert(matches_table).values(**match_to_dict(match))
            await self.session.execute(stmt)
        return match

    async def compare_and_set_status(
        self,
        match_id: MatchId,
        expected: MatchStatus,
        new_status: MatchStatus,
        at: datetime,
    ) -> Optional[Match]:
        """Single conditional UPDATE; concurrent callers serialize on the row lock."""
        values: dict[str, object] = {"status": new_status.value, "updated_at": at}
        if new_status is MatchStatus.ACCEPTED:
            values["accepted_at"] = at

        stmt = (
            update(matches_table)
            .where(matches_table.c.id == match_id)
            .where(matches_table.c.status == expected.value)
            .values(**values)
            .returning(matches_table)
        )
        result = await self.session.execute(stmt)
        row = result.fetchone()
        await self.session.flush()
        return row_to_match(row._asdict()) if row else None
