"""Match lifecycle domain service."""

from dataclasses import dataclass
from typing import Any, List, Optional
from uuid import uuid4

import logfire
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from skillswap.domain.error import (
    DomainError,
    DuplicatePendingError,
    InvalidTransitionError,
    NotAuthorizedError,
    NotFoundError,
    SelfMatchError,
    SkillNotFoundError,
)
from skillswap.domain.model import Match, Skill
from skillswap.domain.model.common import utc_now
from skillswap.domain.repository import MatchRepository, SkillRepository
from skillswap.domain.value import (
    MatchDecision,
    MatchId,
    MatchStatus,
    MessageType,
    NotificationType,
    SkillId,
    UserId,
)

from .base import DEFAULT_STORE_TIMEOUT, Service
from .conversation_service import ConversationService, SeedEntry
from .notification_service import NotificationService


@dataclass
class ReviewEligibility:
    """What the review collaborator needs to gate a review."""

    match_id: MatchId
    status: MatchStatus
    teacher_id: UserId
    learner_id: UserId
    eligible: bool


class MatchService(Service):
    """Domain service driving a match through its lifecycle.

    Status changes are applied first with a compare-and-set in the store.
    Conversation seeding and notifications follow and are best effort:
    their failures are logged and never undo a visible transition.
    """

    def __init__(
        self,
        match_repository: MatchRepository,
        skill_repository: SkillRepository,
        conversation_service: ConversationService,
        notification_service: NotificationService,
        store_timeout: float = DEFAULT_STORE_TIMEOUT,
    ) -> None:
        """Initialize match service.

        Args:
            match_repository: Match repository
            skill_repository: Skill catalog
            conversation_service: Conversation domain service, used for seeding
            notification_service: Notification dispatcher
            store_timeout: Seconds allowed per store interaction
        """
        self.match_repository = match_repository
        self.skill_repository = skill_repository
        self.conversation_service = conversation_service
        self.notification_service = notification_service
        self.store_timeout = store_timeout

    async def request(
        self,
        learner_id: UserId,
        teacher_id: UserId,
        skill_id: SkillId,
        message: Optional[str] = None,
        learner_name: str = "Someone",
    ) -> Match:
        """Create a pending match and notify the teacher.

        Args:
            learner_id: User asking to learn
            teacher_id: User asked to teach
            skill_id: Skill to learn
            message: Optional note to the teacher
            learner_name: Name shown in the teacher's notification

        Returns:
            The new pending match

        Raises:
            SelfMatchError: If learner and teacher are the same user
            SkillNotFoundError: If the skill is not in the catalog
            DuplicatePendingError: If a pending match exists for the triple
        """
        with logfire.span(
            "match_service.request",
            learner_id=str(learner_id),
            teacher_id=str(teacher_id),
            skill_id=str(skill_id),
        ):
            if learner_id == teacher_id:
                raise SelfMatchError(learner_id)

            message = (message or "").strip() or None
            skill = await self._get_skill(skill_id)

            async with self.store_call("match.request"):
                existing = await self.match_repository.find_pending(
                    teacher_id, learner_id, skill_id
                )
                if existing is not None:
                    logfire.warn(
                        "Duplicate pending match request",
                        existing_match_id=str(existing.id),
                    )
                    raise DuplicatePendingError(existing.id)

                now = utc_now()
                match = Match(
                    id=MatchId(uuid4()),
                    teacher_id=teacher_id,
                    learner_id=learner_id,
                    skill_id=skill_id,
                    message=message,
                    created_at=now,
                    updated_at=now,
                )

                try:
                    created = await self.match_repository.create(match)
                except IntegrityError:
                    # A concurrent request won the pending slot
                    existing = await self.match_repository.find_pending(
                        teacher_id, learner_id, skill_id
                    )
                    logfire.warn(
                        "Concurrent duplicate match request",
                        existing_match_id=str(existing.id) if existing else None,
                    )
                    raise DuplicatePendingError(existing.id if existing else None)

            logfire.info("Match requested", match_id=str(created.id))

            await self._notify(
                teacher_id,
                NotificationType.MATCH_REQUEST,
                title="New Match Request",
                body=f"{learner_name} wants to learn {skill.name} from you.",
                payload={
                    "match_id": str(created.id),
                    "skill_id": str(skill.id),
                    "skill_name": skill.name,
                    "learner_id": str(learner_id),
                    "learner_name": learner_name,
                },
            )
            return created

    async def respond(
        self,
        match_id: MatchId,
        responder_id: UserId,
        decision: MatchDecision,
        responder_name: str = "Your teacher",
    ) -> Match:
        """Accept or decline a pending match as its teacher.

        On accept the conversation is seeded with the request message
        (from the learner) followed by a system announcement.

        Args:
            match_id: Match to answer
            responder_id: Must be the match's teacher
            decision: accept or decline
            responder_name: Name shown to the learner

        Returns:
            The match in its new status

        Raises:
            NotFoundError: If the match does not exist
            NotAuthorizedError: If the responder is not the teacher
            InvalidTransitionError: If the match is no longer pending,
                including when a concurrent respond won
        """
        with logfire.span(
            "match_service.respond",
            match_id=str(match_id),
            responder_id=str(responder_id),
            decision=decision.value,
        ):
            match = await self._get(match_id)

            if match.teacher_id != responder_id:
                logfire.warn(
                    "Respond by non-teacher",
                    match_id=str(match_id),
                    responder_id=str(responder_id),
                )
                raise NotAuthorizedError("match", match_id, responder_id)

            target = decision.target_status
            if match.status is not MatchStatus.PENDING:
                raise InvalidTransitionError(match_id, match.status.value, target.value)

            skill = await self._get_skill(match.skill_id)
            updated = await self._transition(match, MatchStatus.PENDING, target)

            logfire.info(
                "Match responded", match_id=str(match_id), status=updated.status.value
            )

            if decision is MatchDecision.ACCEPT:
                await self._seed_conversation(updated, skill, responder_name)
                title = "Match Request Accepted! 🎉"
                body = (
                    f"{responder_name} accepted your request to learn {skill.name}! "
                    "You can now start messaging."
                )
            else:
                title = "Match Request Declined"
                body = f"{responder_name} declined your request to learn {skill.name}."

            await self._notify(
                updated.learner_id,
                NotificationType.MATCH_RESPONSE,
                title=title,
                body=body,
                payload={
                    "match_id": str(updated.id),
                    "skill_name": skill.name,
                    "teacher_name": responder_name,
                    "response": updated.status.value,
                },
            )
            return updated

    async def complete(
        self, match_id: MatchId, actor_id: Optional[UserId] = None
    ) -> Match:
        """Mark an accepted match completed.

        Args:
            match_id: Match to complete
            actor_id: Participant completing it, or None for the
                scheduling collaborator

        Returns:
            The completed match; unchanged if it already was completed
        """
        return await self._close(match_id, actor_id, MatchStatus.COMPLETED)

    async def cancel(self, match_id: MatchId, actor_id: Optional[UserId] = None) -> Match:
        """Cancel an accepted match, closing its conversation.

        Args:
            match_id: Match to cancel
            actor_id: Participant cancelling it, or None for a trusted caller

        Returns:
            The cancelled match; unchanged if it already was cancelled
        """
        return await self._close(match_id, actor_id, MatchStatus.CANCELLED)

    async def get_match(self, match_id: MatchId, viewer_id: UserId) -> Match:
        """Get a match visible to one of its participants.

        Raises:
            NotFoundError: If the match does not exist
            NotAuthorizedError: If the viewer is not a participant
        """
        match = await self._get(match_id)
        if not match.is_participant(viewer_id):
            raise NotAuthorizedError("match", match_id, viewer_id)
        return match

    async def list_matches(
        self, user_id: UserId, status: Optional[MatchStatus] = None
    ) -> List[Match]:
        """Matches of a user as teacher or learner, newest first."""
        async with self.store_call("match.list"):
            return await self.match_repository.find_by_participant(user_id, status)

    async def review_eligibility(
        self, match_id: MatchId, reviewer_id: UserId, reviewee_id: UserId
    ) -> ReviewEligibility:
        """Whether the reviewer may review the reviewee for this match.

        Only the two distinct participants of a completed match may
        review each other.
        """
        match = await self._get(match_id)
        participants = {match.teacher_id, match.learner_id}
        eligible = (
            match.status is MatchStatus.COMPLETED
            and reviewer_id != reviewee_id
            and {reviewer_id, reviewee_id} == participants
        )
        return ReviewEligibility(
            match_id=match.id,
            status=match.status,
            teacher_id=match.teacher_id,
            learner_id=match.learner_id,
            eligible=eligible,
        )

    async def _close(
        self, match_id: MatchId, actor_id: Optional[UserId], target: MatchStatus
    ) -> Match:
        operation = "complete" if target is MatchStatus.COMPLETED else "cancel"
        with logfire.span(
            "match_service.{operation}",
            operation=operation,
            match_id=str(match_id),
            actor_id=str(actor_id) if actor_id else "scheduler",
        ):
            match = await self._get(match_id)

            if actor_id is not None and not match.is_participant(actor_id):
                logfire.warn(
                    "Match change by non-participant",
                    match_id=str(match_id),
                    actor_id=str(actor_id),
                )
                raise NotAuthorizedError("match", match_id, actor_id)

            if match.status is target:
                logfire.info(
                    "Match already in target status", match_id=str(match_id), status=target.value
                )
                return match

            if match.status is not MatchStatus.ACCEPTED:
                raise InvalidTransitionError(match_id, match.status.value, target.value)

            skill = await self._get_skill(match.skill_id)

            try:
                updated = await self._transition(match, MatchStatus.ACCEPTED, target)
            except InvalidTransitionError as e:
                # Duplicate triggers racing each other converge on the same result
                if e.current == target.value:
                    return await self._get(match_id)
                raise

            payload: dict[str, Any] = {
                "match_id": str(updated.id),
                "skill_id": str(skill.id),
                "skill_name": skill.name,
                "teacher_id": str(updated.teacher_id),
                "learner_id": str(updated.learner_id),
            }

            if target is MatchStatus.COMPLETED:
                for participant_id in (updated.teacher_id, updated.learner_id):
                    await self._notify(
                        participant_id,
                        NotificationType.MATCH_COMPLETED,
                        title="Match Completed",
                        body=(
                            f"Your {skill.name} match is complete. "
                            "Share how it went by leaving a review."
                        ),
                        payload=payload,
                    )
            else:
                recipients = (
                    [updated.counterpart_of(actor_id)]
                    if actor_id is not None
                    else [updated.teacher_id, updated.learner_id]
                )
                for recipient_id in recipients:
                    await self._notify(
                        recipient_id,
                        NotificationType.MATCH_CANCELLED,
                        title="Match Cancelled",
                        body=f"Your {skill.name} match was cancelled.",
                        payload=payload,
                    )

            logfire.info(
                "Match closed", match_id=str(match_id), status=updated.status.value
            )
            return updated

    async def _get(self, match_id: MatchId) -> Match:
        async with self.store_call("match.get"):
            match = await self.match_repository.find_by_id(match_id)
        if match is None:
            raise NotFoundError("Match", str(match_id))
        return match

    async def _get_skill(self, skill_id: SkillId) -> Skill:
        async with self.store_call("skill.get"):
            skill = await self.skill_repository.find_by_id(skill_id)
        if skill is None:
            logfire.error("Skill missing from catalog", skill_id=str(skill_id))
            raise SkillNotFoundError(skill_id)
        return skill

    async def _transition(
        self, match: Match, expected: MatchStatus, target: MatchStatus
    ) -> Match:
        async with self.store_call("match.transition"):
            updated = await self.match_repository.compare_and_set_status(
                match.id, expected, target, utc_now()
            )
            if updated is not None:
                return updated

            current = await self.match_repository.find_by_id(match.id)

        current_status = current.status.value if current else "unknown"
        logfire.warn(
            "Lost match transition race",
            match_id=str(match.id),
            current=current_status,
            target=target.value,
        )
        raise InvalidTransitionError(match.id, current_status, target.value)

    async def _seed_conversation(
        self, match: Match, skill: Skill, teacher_name: str
    ) -> None:
        entries = []
        if match.message:
            entries.append(SeedEntry(sender_id=match.learner_id, body=match.message))
        entries.append(
            SeedEntry(
                sender_id=match.teacher_id,
                body=(
                    f"🎉 {teacher_name} accepted your request to learn {skill.name}! "
                    "You can now start messaging."
                ),
                type=MessageType.SYSTEM,
            )
        )

        try:
            await self.conversation_service.seed(match, entries)
        except (DomainError, SQLAlchemyError) as e:
            logfire.error(
                "Conversation seeding failed; match stays accepted",
                match_id=str(match.id),
                error=str(e),
            )

    async def _notify(
        self,
        recipient_id: UserId,
        type: NotificationType,
        title: str,
        body: str,
        payload: dict[str, Any],
    ) -> None:
        try:
            await self.notification_service.emit(recipient_id, type, title, body, payload)
        except (DomainError, SQLAlchemyError) as e:
            logfire.error(
                "Notification emit failed",
                recipient_id=str(recipient_id),
                type=type.value,
                match_id=payload.get("match_id"),
                error=str(e),
            )
