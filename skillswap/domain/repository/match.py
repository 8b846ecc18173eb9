"""Match repository interface."""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import List, Optional

from skillswap.domain.model.match import Match
from skillswap.domain.value import MatchId, MatchStatus, SkillId, UserId


class MatchRepository(ABC):
    """Repository for the Match aggregate.

    Matches are never deleted; status changes only go through
    ``compare_and_set_status`` so concurrent transitions serialize.
    """

    @abstractmethod
    async def find_by_id(self, match_id: MatchId) -> Optional[Match]:
        """Find a match by ID.

        Args:
            match_id: The match's unique identifier

        Returns:
            The match if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_pending(
        self, teacher_id: UserId, learner_id: UserId, skill_id: SkillId
    ) -> Optional[Match]:
        """Find the outstanding pending match for a triple, if any."""
        pass

    @abstractmethod
    async def find_by_participant(
        self,
        user_id: UserId,
        status: Optional[MatchStatus] = None,
    ) -> List[Match]:
        """Find matches where the user is teacher or learner.

        Args:
            user_id: Participant
            status: Only return matches in this status

        Returns:
            Matches ordered by created_at, newest first
        """
        pass

    @abstractmethod
    async def create(self, match: Match) -> Match:
        """Insert a new match.

        Raises:
            IntegrityError: If a pending match already exists for the
                same (teacher, learner, skill)
        """
        pass

    @abstractmethod
    async def compare_and_set_status(
        self,
        match_id: MatchId,
        expected: MatchStatus,
        new_status: MatchStatus,
        at: datetime,
    ) -> Optional[Match]:
        """Atomically move a match from ``expected`` to ``new_status``.

        Sets updated_at to ``at``, and accepted_at to ``at`` when the new
        status is accepted.

        Args:
            match_id: Match to update
            expected: Status the match must currently have
            new_status: Status to set
            at: Transition time

        Returns:
            The updated match, or None if the match does not exist or its
            status was not ``expected`` (another transition won)
        """
        pass
