"""Unit tests for conversation use cases."""

import pytest

from skillswap.application.usecase.conversation import (
    GetMessagesRequest,
    GetMessagesUseCase,
    ListConversationsRequest,
    ListConversationsUseCase,
    MarkConversationReadRequest,
    MarkConversationReadUseCase,
    OpenMessageStreamRequest,
    OpenMessageStreamUseCase,
    SendMessageRequest,
    SendMessageUseCase,
)
from skillswap.domain.error import ChannelNotOpenError
from skillswap.domain.repository import UnitOfWork
from skillswap.domain.service import LiveOutbox, MatchService
from skillswap.domain.value import MatchDecision, MessageType
from tests.di.catalog import GUITAR, SPANISH
from tests.harness import create_env_fixture

# Unit test fixture
unit_env = create_env_fixture()


async def _accepted_match(unit_env, teacher, learner, skill=SPANISH, message="Hola!"):
    match_service = await unit_env.get(MatchService)
    match = await match_service.request(learner, teacher, skill.id, message=message)
    await match_service.respond(match.id, teacher, MatchDecision.ACCEPT)
    return match


class TestSendAndRead:
    """Tests for sending and reading a conversation."""

    @pytest.mark.asyncio
    async def test_send_then_counterpart_reads(self, unit_env, alice, bob):
        match = await _accepted_match(unit_env, alice, bob)
        send = await unit_env.get(SendMessageUseCase)
        get_messages = await unit_env.get(GetMessagesUseCase)

        sent = await send.execute(
            SendMessageRequest(match_id=str(match.id), sender_id=str(bob), body="Gracias")
        )
        transcript = await get_messages.execute(
            GetMessagesRequest(match_id=str(match.id), user_id=str(alice))
        )

        assert sent.seq == 3
        assert [m.body for m in transcript.messages][0] == "Hola!"
        assert transcript.messages[1].type is MessageType.SYSTEM
        assert transcript.messages[-1].message_id == sent.message_id
        assert transcript.marked_read >= 1
        assert all(
            m.read_at is not None
            for m in transcript.messages
            if m.sender_id != str(alice)
        )

    @pytest.mark.asyncio
    async def test_get_messages_without_marking(self, unit_env, alice, bob):
        match = await _accepted_match(unit_env, alice, bob)
        get_messages = await unit_env.get(GetMessagesUseCase)
        mark_read = await unit_env.get(MarkConversationReadUseCase)

        peek = await get_messages.execute(
            GetMessagesRequest(match_id=str(match.id), user_id=str(alice), mark_read=False)
        )
        marked = await mark_read.execute(
            MarkConversationReadRequest(match_id=str(match.id), reader_id=str(alice))
        )

        assert peek.marked_read == 0
        assert marked.marked_read > 0

    @pytest.mark.asyncio
    async def test_pending_match_has_no_channel(self, unit_env, alice, bob):
        match_service = await unit_env.get(MatchService)
        match = await match_service.request(bob, alice, GUITAR.id)
        send = await unit_env.get(SendMessageUseCase)

        with pytest.raises(ChannelNotOpenError):
            await send.execute(
                SendMessageRequest(match_id=str(match.id), sender_id=str(bob), body="hi")
            )


class TestListConversationsUseCase:
    """Tests for ListConversationsUseCase."""

    @pytest.mark.asyncio
    async def test_inbox_has_counterpart_and_unread(self, unit_env, alice, bob):
        match = await _accepted_match(unit_env, alice, bob)
        use_case = await unit_env.get(ListConversationsUseCase)

        inbox = await use_case.execute(ListConversationsRequest(user_id=str(alice)))

        assert len(inbox.conversations) == 1
        conversation = inbox.conversations[0]
        assert conversation.match.match_id == str(match.id)
        assert conversation.counterpart_id == str(bob)
        assert conversation.last_message is not None
        assert inbox.total_unread == conversation.unread_count


class TestOpenMessageStreamUseCase:
    """Tests for OpenMessageStreamUseCase."""

    @pytest.mark.asyncio
    async def test_commits_before_streaming(self, unit_env, alice, bob):
        match = await _accepted_match(unit_env, alice, bob)
        use_case = await unit_env.get(OpenMessageStreamUseCase)
        unit_of_work = await unit_env.get(UnitOfWork)

        stream = await use_case.execute(
            OpenMessageStreamRequest(match_id=str(match.id), user_id=str(bob))
        )

        assert unit_of_work.commits == 1
        # Pushes queued by the accept went out with the commit
        assert (await unit_env.get(LiveOutbox)).pending == 0
        assert not stream.closed
        await stream.close()
