"""In-memory match repository for testing."""

from datetime import datetime
from typing import List, Optional

from sqlalchemy.exc import IntegrityError

from skillswap.domain.model import Match
from skillswap.domain.repository import MatchRepository
from skillswap.domain.value import MatchId, MatchStatus, SkillId, UserId


class InMemoryMatchRepository(MatchRepository):
    """In-memory implementation of MatchRepository for testing.

    Methods do not await between reading and writing, so each call is
    atomic with respect to other coroutines, like a row-level update.
    """

    def __init__(self) -> None:
        self._matches: dict[MatchId, Match] = {}

    async def find_by_id(self, match_id: MatchId) -> Optional[Match]:
        """Find a match by ID."""
        return self._matches.get(match_id)

    async def find_pending(
        self, teacher_id: UserId, learner_id: UserId, skill_id: SkillId
    ) -> Optional[Match]:
        """Find the pending match of a triple."""
        for match in self._matches.values():
            if (
                match.teacher_id == teacher_id
                and match.learner_id == learner_id
                and match.skill_id == skill_id
                and match.status == MatchStatus.PENDING
            ):
                return match
        return None

    async def find_by_participant(
        self,
        user_id: UserId,
        status: Optional[MatchStatus] = None,
    ) -> List[Match]:
        """Find matches of a user, newest first."""
        matches = [
            m
            for m in reversed(self._matches.values())
            if m.is_participant(user_id) and (status is None or m.status == status)
        ]
        return sorted(matches, key=lambda m: m.created_at, reverse=True)

    async def create(self, match: Match) -> Match:
        """Insert a match.

        Raises:
            IntegrityError: If a pending match exists for the same triple
        """
        if match.status == MatchStatus.PENDING and await self.find_pending(
            match.teacher_id, match.learner_id, match.skill_id
        ):
            raise IntegrityError("Duplicate pending match", None, Exception())

        self._matches[match.id] = match
        return match

    async def compare_and_set_status(
        self,
        match_id: MatchId,
        expected: MatchStatus,
        new_status: MatchStatus,
        at: datetime,
    ) -> Optional[Match]:
        """Move a match from expected to new_status if it is still expected."""
        match = self._matches.get(match_id)
        if match is None or match.status != expected:
            return None

        updates: dict[str, object] = {"status": new_status, "updated_at": at}
        if new_status == MatchStatus.ACCEPTED:
            updates["accepted_at"] = at

        updated = match.model_copy(update=updates)
        self._matches[match_id] = updated
        return updated
