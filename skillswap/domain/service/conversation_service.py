"""Conversation domain service."""

from dataclasses import dataclass
from datetime import datetime
from typing import List, Optional, Sequence
from uuid import uuid4

import logfire
from sqlalchemy.exc import SQLAlchemyError

from skillswap.config import ConversationSettings
from skillswap.domain.error import (
    ChannelNotOpenError,
    DomainError,
    NotFoundError,
    NotParticipantError,
)
from skillswap.domain.model import Match, Message
from skillswap.domain.model.common import utc_now
from skillswap.domain.repository import MatchRepository, MessageRepository
from skillswap.domain.value import (
    MatchId,
    MatchStatus,
    MessageId,
    MessageType,
    NotificationType,
    UserId,
)

from .base import DEFAULT_STORE_TIMEOUT, Service
from .live import LiveOutbox, LiveTransport, match_topic
from .notification_service import NotificationService
from .presence import PresenceRegistry
from .streams import MessageStream

# Characters of a message body quoted in a new_message notification
PREVIEW_LENGTH = 100


@dataclass
class ConversationSummary:
    """One row of a user's inbox."""

    match: Match
    last_message: Optional[Message]
    unread_count: int

    @property
    def last_activity(self) -> datetime:
        if self.last_message is not None:
            return self.last_message.created_at
        return self.match.accepted_at or self.match.updated_at


@dataclass
class SeedEntry:
    """A message written by the match engine rather than typed by a participant."""

    sender_id: UserId
    body: str
    type: MessageType = MessageType.TEXT


class ConversationService(Service):
    """Domain service for the message channel of accepted matches.

    Sending requires the match to be accepted or completed. Reading
    (history, subscribe, mark read) is allowed for any match that was
    accepted at some point, so the transcript survives a later
    cancellation.
    """

    def __init__(
        self,
        match_repository: MatchRepository,
        message_repository: MessageRepository,
        notification_service: NotificationService,
        live_transport: LiveTransport,
        outbox: LiveOutbox,
        presence: PresenceRegistry,
        settings: ConversationSettings,
        store_timeout: float = DEFAULT_STORE_TIMEOUT,
    ) -> None:
        """Initialize conversation service.

        Args:
            match_repository: Match repository
            message_repository: Message repository
            notification_service: Notification dispatcher
            live_transport: Push transport for the match topics
            outbox: Pushes held back until the request commits
            presence: Who is viewing which conversation in this process
            settings: Conversation settings
            store_timeout: Seconds allowed per store interaction
        """
        self.match_repository = match_repository
        self.message_repository = message_repository
        self.notification_service = notification_service
        self.live_transport = live_transport
        self.outbox = outbox
        self.presence = presence
        self.settings = settings
        self.store_timeout = store_timeout

    async def send(
        self,
        match_id: MatchId,
        sender_id: UserId,
        body: str,
        message_type: MessageType = MessageType.TEXT,
        file_url: Optional[str] = None,
        sender_name: Optional[str] = None,
    ) -> Message:
        """Append a participant's message to the conversation.

        Args:
            match_id: Conversation
            sender_id: Participant sending the message
            body: Message text
            message_type: text or file
            file_url: Location of the attachment for file messages
            sender_name: Display name used in the recipient's notification

        Returns:
            The stored message

        Raises:
            ValueError: If the body is empty or too long, or the type is system
            NotFoundError: If the match does not exist
            NotParticipantError: If the sender is not teacher or learner
            ChannelNotOpenError: If the match was never accepted or was cancelled
        """
        with logfire.span(
            "conversation_service.send",
            match_id=str(match_id),
            sender_id=str(sender_id),
            message_type=message_type.value,
        ):
            if message_type is MessageType.SYSTEM:
                raise ValueError("System messages cannot be sent by participants")

            body = body.strip()
            if not body:
                raise ValueError("Message cannot be empty")
            if len(body) > self.settings.max_body_length:
                raise ValueError(
                    f"Message cannot exceed {self.settings.max_body_length} characters"
                )
            if message_type is MessageType.FILE and not file_url:
                raise ValueError("File messages require a file_url")

            match = await self._load_for(match_id, sender_id)
            if match.status not in (MatchStatus.ACCEPTED, MatchStatus.COMPLETED):
                logfire.warn(
                    "Message on closed channel",
                    match_id=str(match_id),
                    status=match.status.value,
                )
                raise ChannelNotOpenError(
                    match_id, match.status.value, closed=match.was_accepted
                )

            message = Message(
                id=MessageId(uuid4()),
                match_id=match_id,
                sender_id=sender_id,
                body=body,
                type=message_type,
                file_url=file_url,
            )
            stored = await self._append(message)

            recipient_id = match.counterpart_of(sender_id)
            if self.presence.is_viewing(match_id, recipient_id):
                read_at = utc_now()
                async with self.store_call("conversation.read_on_arrival"):
                    await self.message_repository.mark_read(
                        match_id, recipient_id, read_at, [stored.id]
                    )
                stored = stored.model_copy(update={"read_at": read_at})
            elif self.settings.notify_offline_recipients:
                await self._notify_new_message(stored, recipient_id, sender_name)

            self._announce(stored)

            logfire.info(
                "Message sent",
                match_id=str(match_id),
                message_id=str(stored.id),
                seq=stored.seq,
            )
            return stored

    async def seed(self, match: Match, entries: Sequence[SeedEntry]) -> List[Message]:
        """Write engine-authored messages in order, bypassing send rules.

        Each entry is stored strictly after the previous one.
        """
        seeded = []
        for entry in entries:
            message = Message(
                id=MessageId(uuid4()),
                match_id=match.id,
                sender_id=entry.sender_id,
                body=entry.body,
                type=entry.type,
            )
            stored = await self._append(message)
            self._announce(stored)
            seeded.append(stored)

        return seeded

    async def mark_read(self, match_id: MatchId, reader_id: UserId) -> int:
        """Mark every unread message addressed to the reader as read.

        Returns:
            Number of messages newly marked; 0 on repeated calls

        Raises:
            NotFoundError: If the match does not exist
            NotParticipantError: If the reader is not teacher or learner
            ChannelNotOpenError: If the match was never accepted
        """
        with logfire.span(
            "conversation_service.mark_read",
            match_id=str(match_id),
            reader_id=str(reader_id),
        ):
            match = await self._load_for(match_id, reader_id)
            self._ensure_readable(match)

            async with self.store_call("conversation.mark_read"):
                count = await self.message_repository.mark_read(
                    match_id, reader_id, utc_now()
                )

            return count

    async def subscribe(
        self, match_id: MatchId, participant_id: UserId
    ) -> MessageStream:
        """Open a live stream of messages appended from now on.

        The participant counts as viewing the conversation until the
        stream is closed.

        Raises:
            NotFoundError: If the match does not exist
            NotParticipantError: If the caller is not teacher or learner
            ChannelNotOpenError: If the match was never accepted
        """
        match = await self._load_for(match_id, participant_id)
        self._ensure_readable(match)

        subscription = await self.live_transport.subscribe(match_topic(match_id))
        self.presence.enter(match_id, participant_id)
        logfire.info(
            "Conversation stream opened",
            match_id=str(match_id),
            participant_id=str(participant_id),
        )

        def leave() -> None:
            self.presence.leave(match_id, participant_id)

        return MessageStream(subscription, on_close=leave)

    async def history(self, match_id: MatchId, viewer_id: UserId) -> List[Message]:
        """Full conversation log ordered by (created_at, seq)."""
        match = await self._load_for(match_id, viewer_id)
        self._ensure_readable(match)

        async with self.store_call("conversation.history"):
            return await self.message_repository.find_by_match(match_id)

    async def unread_count(self, match_id: MatchId, user_id: UserId) -> int:
        """Messages in the conversation the user has not read yet."""
        match = await self._load_for(match_id, user_id)
        return await self._unread_for(match.id, user_id)

    async def list_conversations(self, user_id: UserId) -> List[ConversationSummary]:
        """Every conversation the user has, most recently active first."""
        async with self.store_call("conversation.list"):
            matches = await self.match_repository.find_by_participant(user_id)
            opened = [match for match in matches if match.was_accepted]
            last_messages = await self.message_repository.find_last(
                [match.id for match in opened]
            )

        summaries = [
            ConversationSummary(
                match=match,
                last_message=last_messages.get(match.id),
                unread_count=await self._unread_for(match.id, user_id),
            )
            for match in opened
        ]
        summaries.sort(key=lambda summary: summary.last_activity, reverse=True)
        return summaries

    async def _load_for(self, match_id: MatchId, user_id: UserId) -> Match:
        async with self.store_call("conversation.load_match"):
            match = await self.match_repository.find_by_id(match_id)

        if match is None:
            raise NotFoundError("Match", str(match_id))

        if not match.is_participant(user_id):
            logfire.warn(
                "Conversation access by non-participant",
                match_id=str(match_id),
                user_id=str(user_id),
            )
            raise NotParticipantError(match_id, user_id)

        return match

    def _ensure_readable(self, match: Match) -> None:
        if not match.was_accepted:
            raise ChannelNotOpenError(match.id, match.status.value)

    async def _unread_for(self, match_id: MatchId, user_id: UserId) -> int:
        # Always derived from the message log; any worker may have written since
        async with self.store_call("conversation.count_unread"):
            return await self.message_repository.count_unread(match_id, user_id)

    async def _append(self, message: Message) -> Message:
        async with self.store_call("conversation.append"):
            return await self.message_repository.append(message)

    def _announce(self, message: Message) -> None:
        self.outbox.add(
            match_topic(message.match_id),
            {"kind": "message", "data": message.model_dump(mode="json")},
        )

    async def _notify_new_message(
        self, message: Message, recipient_id: UserId, sender_name: Optional[str]
    ) -> None:
        preview = message.body
        if len(preview) > PREVIEW_LENGTH:
            preview = preview[: PREVIEW_LENGTH - 3] + "..."

        try:
            await self.notification_service.emit(
                recipient_id,
                NotificationType.NEW_MESSAGE,
                title=f"New message from {sender_name}" if sender_name else "New message",
                body=preview,
                payload={
                    "match_id": str(message.match_id),
                    "message_id": str(message.id),
                    "sender_id": str(message.sender_id),
                },
            )
        except (DomainError, SQLAlchemyError) as e:
            logfire.error(
                "New message notification failed",
                match_id=str(message.match_id),
                message_id=str(message.id),
                error=str(e),
            )
