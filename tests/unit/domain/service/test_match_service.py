"""Unit tests for MatchService."""

import asyncio
from uuid import uuid4

import pytest
from sqlalchemy.exc import IntegrityError, OperationalError

from skillswap.domain.error import (
    DuplicatePendingError,
    InvalidTransitionError,
    NotAuthorizedError,
    NotFoundError,
    SelfMatchError,
    SkillNotFoundError,
    StoreUnavailableError,
)
from skillswap.domain.model import Match
from skillswap.domain.repository import (
    MatchRepository,
    MessageRepository,
    NotificationRepository,
)
from skillswap.domain.service import MatchService
from skillswap.domain.value import (
    MatchDecision,
    MatchId,
    MatchStatus,
    MessageType,
    NotificationType,
    SkillId,
)
from tests.di.catalog import GUITAR, PYTHON, SPANISH
from tests.harness import create_env_fixture

# Unit test fixture - everything mocked, no docker needed
unit_env = create_env_fixture()


async def _accepted(match_service: MatchService, teacher, learner, skill=SPANISH) -> Match:
    match = await match_service.request(learner, teacher, skill.id)
    return await match_service.respond(match.id, teacher, MatchDecision.ACCEPT)


class TestRequest:
    """Tests for request method."""

    @pytest.mark.asyncio
    async def test_request_creates_pending_match_and_notifies_teacher(
        self, unit_env, alice, bob
    ):
        """Requesting should store a pending match and tell the teacher."""
        # Arrange
        match_service = await unit_env.get(MatchService)
        notification_repo = await unit_env.get(NotificationRepository)

        # Act
        match = await match_service.request(
            bob, alice, GUITAR.id, message="Hi, teach me!", learner_name="Bob"
        )

        # Assert
        assert match.status is MatchStatus.PENDING
        assert match.teacher_id == alice
        assert match.learner_id == bob
        assert match.message == "Hi, teach me!"
        assert match.accepted_at is None

        notifications = await notification_repo.find_by_user(alice)
        assert len(notifications) == 1
        assert notifications[0].type is NotificationType.MATCH_REQUEST
        assert notifications[0].title == "New Match Request"
        assert notifications[0].body == "Bob wants to learn Guitar from you."
        assert notifications[0].payload["match_id"] == str(match.id)
        assert notifications[0].payload["skill_name"] == "Guitar"

    @pytest.mark.asyncio
    async def test_request_self_raises_self_match(self, unit_env, alice):
        """A learner cannot ask themselves."""
        match_service = await unit_env.get(MatchService)

        with pytest.raises(SelfMatchError):
            await match_service.request(alice, alice, GUITAR.id)

    @pytest.mark.asyncio
    async def test_request_unknown_skill_raises(self, unit_env, alice, bob):
        """A skill missing from the catalog is a data integrity error."""
        match_service = await unit_env.get(MatchService)

        with pytest.raises(SkillNotFoundError):
            await match_service.request(bob, alice, SkillId(uuid4()))

    @pytest.mark.asyncio
    async def test_duplicate_pending_request_raises_with_existing_id(
        self, unit_env, alice, bob
    ):
        """A second pending request for the same triple is rejected."""
        match_service = await unit_env.get(MatchService)
        first = await match_service.request(bob, alice, GUITAR.id)

        with pytest.raises(DuplicatePendingError) as exc_info:
            await match_service.request(bob, alice, GUITAR.id, message="again")

        assert exc_info.value.existing_match_id == first.id

    @pytest.mark.asyncio
    async def test_other_skill_is_not_a_duplicate(self, unit_env, alice, bob):
        """The pending slot is per skill."""
        match_service = await unit_env.get(MatchService)
        await match_service.request(bob, alice, GUITAR.id)

        other = await match_service.request(bob, alice, PYTHON.id)

        assert other.status is MatchStatus.PENDING

    @pytest.mark.asyncio
    async def test_rerequest_after_decline_creates_fresh_pending_match(
        self, unit_env, alice, bob
    ):
        """Only pending duplicates are disallowed."""
        match_service = await unit_env.get(MatchService)
        declined = await match_service.request(bob, alice, GUITAR.id)
        await match_service.respond(declined.id, alice, MatchDecision.DECLINE)

        fresh = await match_service.request(bob, alice, GUITAR.id)

        assert fresh.id != declined.id
        assert fresh.status is MatchStatus.PENDING


class TestRespond:
    """Tests for respond method."""

    @pytest.mark.asyncio
    async def test_decline_cancels_without_conversation(self, unit_env, alice, bob):
        """Guitar: declining cancels, notifies the learner, opens no channel."""
        # Arrange
        match_service = await unit_env.get(MatchService)
        message_repo = await unit_env.get(MessageRepository)
        notification_repo = await unit_env.get(NotificationRepository)
        match = await match_service.request(
            bob, alice, GUITAR.id, message="Hi, teach me!"
        )

        # Act
        declined = await match_service.respond(
            match.id, alice, MatchDecision.DECLINE, responder_name="Alice"
        )

        # Assert
        assert declined.status is MatchStatus.CANCELLED
        assert declined.accepted_at is None
        assert await message_repo.find_by_match(match.id) == []

        notifications = await notification_repo.find_by_user(bob)
        assert [n.type for n in notifications] == [NotificationType.MATCH_RESPONSE]
        assert notifications[0].title == "Match Request Declined"
        assert notifications[0].body == "Alice declined your request to learn Guitar."
        assert notifications[0].payload["response"] == "cancelled"

    @pytest.mark.asyncio
    async def test_accept_seeds_conversation_in_order(self, unit_env, alice, bob):
        """Accepting writes the request message, then the system announcement."""
        # Arrange
        match_service = await unit_env.get(MatchService)
        message_repo = await unit_env.get(MessageRepository)
        notification_repo = await unit_env.get(NotificationRepository)
        match = await match_service.request(
            bob, alice, SPANISH.id, message="Hola! Can you help?"
        )

        # Act
        accepted = await match_service.respond(
            match.id, alice, MatchDecision.ACCEPT, responder_name="Alice"
        )

        # Assert
        assert accepted.status is MatchStatus.ACCEPTED
        assert accepted.accepted_at is not None

        messages = await message_repo.find_by_match(match.id)
        assert [m.seq for m in messages] == [1, 2]
        assert messages[0].sender_id == bob
        assert messages[0].body == "Hola! Can you help?"
        assert messages[0].type is MessageType.TEXT
        assert messages[1].sender_id == alice
        assert messages[1].type is MessageType.SYSTEM
        assert "Alice accepted your request to learn Spanish" in messages[1].body
        assert messages[0].created_at < messages[1].created_at

        notifications = await notification_repo.find_by_user(bob)
        assert notifications[0].title == "Match Request Accepted! 🎉"
        assert notifications[0].payload["response"] == "accepted"

    @pytest.mark.asyncio
    async def test_accept_without_message_seeds_only_announcement(
        self, unit_env, alice, bob
    ):
        match_service = await unit_env.get(MatchService)
        message_repo = await unit_env.get(MessageRepository)

        accepted = await _accepted(match_service, alice, bob)

        messages = await message_repo.find_by_match(accepted.id)
        assert [m.type for m in messages] == [MessageType.SYSTEM]

    @pytest.mark.asyncio
    async def test_learner_cannot_respond(self, unit_env, alice, bob):
        """Only the teacher answers a request."""
        match_service = await unit_env.get(MatchService)
        match = await match_service.request(bob, alice, GUITAR.id)

        with pytest.raises(NotAuthorizedError):
            await match_service.respond(match.id, bob, MatchDecision.ACCEPT)

    @pytest.mark.asyncio
    async def test_respond_twice_raises_invalid_transition(self, unit_env, alice, bob):
        match_service = await unit_env.get(MatchService)
        match = await match_service.request(bob, alice, GUITAR.id)
        await match_service.respond(match.id, alice, MatchDecision.ACCEPT)

        with pytest.raises(InvalidTransitionError) as exc_info:
            await match_service.respond(match.id, alice, MatchDecision.DECLINE)

        assert exc_info.value.current == "accepted"

    @pytest.mark.asyncio
    async def test_respond_unknown_match_raises_not_found(self, unit_env, alice):
        match_service = await unit_env.get(MatchService)

        with pytest.raises(NotFoundError):
            await match_service.respond(MatchId(uuid4()), alice, MatchDecision.ACCEPT)

    @pytest.mark.asyncio
    async def test_concurrent_responses_exactly_one_wins(self, unit_env, alice, bob):
        """Accept and decline racing on one match: one succeeds, one is rejected."""
        # Arrange
        match_service = await unit_env.get(MatchService)
        match_repo = await unit_env.get(MatchRepository)
        match = await match_service.request(bob, alice, GUITAR.id)

        # Act
        results = await asyncio.gather(
            match_service.respond(match.id, alice, MatchDecision.ACCEPT),
            match_service.respond(match.id, alice, MatchDecision.DECLINE),
            return_exceptions=True,
        )

        # Assert
        winners = [r for r in results if isinstance(r, Match)]
        losers = [r for r in results if isinstance(r, InvalidTransitionError)]
        assert len(winners) == 1
        assert len(losers) == 1

        final = await match_repo.find_by_id(match.id)
        assert final.status is winners[0].status
        assert final.status in (MatchStatus.ACCEPTED, MatchStatus.CANCELLED)


class TestCompleteAndCancel:
    """Tests for complete and cancel methods."""

    @pytest.mark.asyncio
    async def test_complete_notifies_both_participants(self, unit_env, alice, bob):
        match_service = await unit_env.get(MatchService)
        notification_repo = await unit_env.get(NotificationRepository)
        accepted = await _accepted(match_service, alice, bob)

        completed = await match_service.complete(accepted.id, alice)

        assert completed.status is MatchStatus.COMPLETED
        for user in (alice, bob):
            types = [n.type for n in await notification_repo.find_by_user(user)]
            assert NotificationType.MATCH_COMPLETED in types

    @pytest.mark.asyncio
    async def test_complete_twice_is_noop(self, unit_env, alice, bob):
        """The second completion returns the match unchanged."""
        match_service = await unit_env.get(MatchService)
        notification_repo = await unit_env.get(NotificationRepository)
        accepted = await _accepted(match_service, alice, bob)

        first = await match_service.complete(accepted.id)
        second = await match_service.complete(accepted.id)

        assert second.status is MatchStatus.COMPLETED
        assert second.updated_at == first.updated_at
        completed_notices = [
            n
            for n in await notification_repo.find_by_user(alice)
            if n.type is NotificationType.MATCH_COMPLETED
        ]
        assert len(completed_notices) == 1

    @pytest.mark.asyncio
    async def test_complete_pending_raises_invalid_transition(
        self, unit_env, alice, bob
    ):
        match_service = await unit_env.get(MatchService)
        match = await match_service.request(bob, alice, GUITAR.id)

        with pytest.raises(InvalidTransitionError):
            await match_service.complete(match.id)

    @pytest.mark.asyncio
    async def test_cancel_notifies_counterparty_only(self, unit_env, alice, bob):
        match_service = await unit_env.get(MatchService)
        notification_repo = await unit_env.get(NotificationRepository)
        accepted = await _accepted(match_service, alice, bob)

        cancelled = await match_service.cancel(accepted.id, bob)

        assert cancelled.status is MatchStatus.CANCELLED
        alice_types = [n.type for n in await notification_repo.find_by_user(alice)]
        bob_types = [n.type for n in await notification_repo.find_by_user(bob)]
        assert NotificationType.MATCH_CANCELLED in alice_types
        assert NotificationType.MATCH_CANCELLED not in bob_types

    @pytest.mark.asyncio
    async def test_cancel_by_outsider_raises_not_authorized(
        self, unit_env, alice, bob, carol
    ):
        match_service = await unit_env.get(MatchService)
        accepted = await _accepted(match_service, alice, bob)

        with pytest.raises(NotAuthorizedError):
            await match_service.cancel(accepted.id, carol)

    @pytest.mark.asyncio
    async def test_completed_match_cannot_be_cancelled(self, unit_env, alice, bob):
        match_service = await unit_env.get(MatchService)
        accepted = await _accepted(match_service, alice, bob)
        await match_service.complete(accepted.id)

        with pytest.raises(InvalidTransitionError):
            await match_service.cancel(accepted.id, alice)


class TestQueries:
    """Tests for get_match, list_matches and review_eligibility."""

    @pytest.mark.asyncio
    async def test_get_match_hidden_from_outsiders(self, unit_env, alice, bob, carol):
        match_service = await unit_env.get(MatchService)
        match = await match_service.request(bob, alice, GUITAR.id)

        assert (await match_service.get_match(match.id, alice)).id == match.id
        with pytest.raises(NotAuthorizedError):
            await match_service.get_match(match.id, carol)

    @pytest.mark.asyncio
    async def test_list_matches_filters_by_status(self, unit_env, alice, bob):
        match_service = await unit_env.get(MatchService)
        pending = await match_service.request(bob, alice, GUITAR.id)
        accepted = await _accepted(match_service, alice, bob, skill=SPANISH)

        all_matches = await match_service.list_matches(alice)
        pending_only = await match_service.list_matches(alice, MatchStatus.PENDING)

        assert {m.id for m in all_matches} == {pending.id, accepted.id}
        assert [m.id for m in pending_only] == [pending.id]

    @pytest.mark.asyncio
    async def test_review_eligible_only_once_completed(self, unit_env, alice, bob):
        match_service = await unit_env.get(MatchService)
        accepted = await _accepted(match_service, alice, bob)

        before = await match_service.review_eligibility(accepted.id, bob, alice)
        await match_service.complete(accepted.id)
        after = await match_service.review_eligibility(accepted.id, bob, alice)
        self_review = await match_service.review_eligibility(accepted.id, bob, bob)

        assert before.eligible is False
        assert after.eligible is True
        assert after.status is MatchStatus.COMPLETED
        assert self_review.eligible is False

    @pytest.mark.asyncio
    async def test_review_by_outsider_not_eligible(self, unit_env, alice, bob, carol):
        match_service = await unit_env.get(MatchService)
        accepted = await _accepted(match_service, alice, bob)
        await match_service.complete(accepted.id)

        result = await match_service.review_eligibility(accepted.id, carol, alice)

        assert result.eligible is False


class TestAcceptSideEffectFailures:
    """Acceptance stands even when seeding or notifying fails afterwards."""

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "failure",
        [
            OperationalError("INSERT INTO messages", {}, ConnectionResetError()),
            IntegrityError("INSERT INTO messages", {}, Exception("seq taken")),
        ],
    )
    async def test_failed_seeding_keeps_match_accepted(
        self, unit_env, alice, bob, monkeypatch, failure
    ):
        match_service = await unit_env.get(MatchService)
        match_repo = await unit_env.get(MatchRepository)
        message_repo = await unit_env.get(MessageRepository)
        notification_repo = await unit_env.get(NotificationRepository)
        match = await match_service.request(bob, alice, SPANISH.id)

        async def failing_append(message):
            raise failure

        monkeypatch.setattr(message_repo, "append", failing_append)

        responded = await match_service.respond(match.id, alice, MatchDecision.ACCEPT)

        assert responded.status is MatchStatus.ACCEPTED
        stored = await match_repo.find_by_id(match.id)
        assert stored.status is MatchStatus.ACCEPTED
        assert stored.accepted_at is not None
        assert await message_repo.find_by_match(match.id) == []
        # The learner still hears about the acceptance
        notices = await notification_repo.find_by_user(bob)
        assert [n.type for n in notices] == [NotificationType.MATCH_RESPONSE]

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "failure",
        [
            StoreUnavailableError("notification.emit", "timed out"),
            OperationalError("INSERT INTO notifications", {}, ConnectionResetError()),
        ],
    )
    async def test_failed_notification_keeps_match_accepted(
        self, unit_env, alice, bob, monkeypatch, failure
    ):
        match_service = await unit_env.get(MatchService)
        match_repo = await unit_env.get(MatchRepository)
        message_repo = await unit_env.get(MessageRepository)
        notification_repo = await unit_env.get(NotificationRepository)
        match = await match_service.request(bob, alice, SPANISH.id)

        async def failing_save(notification):
            raise failure

        monkeypatch.setattr(notification_repo, "save", failing_save)

        responded = await match_service.respond(match.id, alice, MatchDecision.ACCEPT)

        assert responded.status is MatchStatus.ACCEPTED
        stored = await match_repo.find_by_id(match.id)
        assert stored.status is MatchStatus.ACCEPTED
        history = await message_repo.find_by_match(match.id)
        assert [m.type for m in history] == [MessageType.SYSTEM]
        assert await notification_repo.find_by_user(bob) == []
