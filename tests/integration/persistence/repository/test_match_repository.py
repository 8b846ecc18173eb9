"""Integration tests for the match and message repositories.

Assume postgres is running with migrations applied.
"""

from uuid import uuid4

import pytest
from sqlalchemy import insert
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from skillswap.domain.model import Match, Message
from skillswap.domain.model.common import utc_now
from skillswap.domain.repository import MatchRepository, MessageRepository
from skillswap.domain.value import MatchId, MatchStatus, MessageId, SkillId
from skillswap.persistence.tables import skills_table
from tests.conftest import new_user
from tests.harness import create_env_fixture

# Integration test fixture
integration_env = create_env_fixture(unmock={"persistence"})


async def _skill(session: AsyncSession) -> SkillId:
    skill_id = SkillId(uuid4())
    await session.execute(
        insert(skills_table).values(
            id=skill_id, name=f"Skill {skill_id.hex[:8]}", category="Test"
        )
    )
    return skill_id


async def _pending(match_repo: MatchRepository, skill_id: SkillId) -> Match:
    return await match_repo.create(
        Match(
            id=MatchId(uuid4()),
            teacher_id=new_user(),
            learner_id=new_user(),
            skill_id=skill_id,
        )
    )


class TestMatchRepositoryIntegration:
    """Integration tests for PostgresMatchRepository."""

    @pytest.mark.asyncio
    async def test_pending_triple_is_unique(self, integration_env):
        session = await integration_env.get(AsyncSession)
        match_repo = await integration_env.get(MatchRepository)
        first = await _pending(match_repo, await _skill(session))

        with pytest.raises(IntegrityError):
            await match_repo.create(first.model_copy(update={"id": MatchId(uuid4())}))

    @pytest.mark.asyncio
    async def test_compare_and_set_applies_once(self, integration_env):
        session = await integration_env.get(AsyncSession)
        match_repo = await integration_env.get(MatchRepository)
        match = await _pending(match_repo, await _skill(session))
        now = utc_now()

        accepted = await match_repo.compare_and_set_status(
            match.id, MatchStatus.PENDING, MatchStatus.ACCEPTED, now
        )
        lost = await match_repo.compare_and_set_status(
            match.id, MatchStatus.PENDING, MatchStatus.CANCELLED, now
        )
        reloaded = await match_repo.find_by_id(match.id)

        assert accepted is not None and accepted.status is MatchStatus.ACCEPTED
        assert lost is None
        assert reloaded is not None and reloaded.accepted_at is not None


class TestMessageRepositoryIntegration:
    """Integration tests for PostgresMessageRepository."""

    @pytest.mark.asyncio
    async def test_append_orders_by_created_at_and_seq(self, integration_env):
        session = await integration_env.get(AsyncSession)
        match_repo = await integration_env.get(MatchRepository)
        message_repo = await integration_env.get(MessageRepository)
        match = await _pending(match_repo, await _skill(session))

        for body in ("one", "two", "three"):
            await message_repo.append(
                Message(
                    id=MessageId(uuid4()),
                    match_id=match.id,
                    sender_id=match.learner_id,
                    body=body,
                )
            )
        log = await message_repo.find_by_match(match.id)
        unread = await message_repo.count_unread(match.id, match.teacher_id)

        assert [m.body for m in log] == ["one", "two", "three"]
        assert [m.seq for m in log] == [1, 2, 3]
        assert log[0].created_at < log[1].created_at < log[2].created_at
        assert unread == 3
