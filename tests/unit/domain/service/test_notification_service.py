"""Unit tests for NotificationService."""

import asyncio
from uuid import uuid4

import pytest

from skillswap.adapter.live.memory import InMemoryLiveTransport
from skillswap.domain.error import NotAuthorizedError, NotFoundError
from skillswap.domain.repository import UnitOfWork
from skillswap.domain.service import LiveOutbox, LiveTransport, NotificationService
from skillswap.domain.value import NotificationId, NotificationType
from skillswap.persistence.repository.inmemory import InMemoryNotificationRepository
from tests.harness import create_env_fixture

unit_env = create_env_fixture()


class BrokenLiveTransport(InMemoryLiveTransport):
    """Transport whose pushes always fail."""

    async def publish(self, topic, event):
        raise ConnectionError("broker down")


async def _emit(service: NotificationService, user_id, match_id=None):
    return await service.emit(
        user_id,
        NotificationType.MATCH_REQUEST,
        title="New Match Request",
        body="Bob wants to learn Guitar from you.",
        payload={"match_id": str(match_id or uuid4())},
    )


class TestEmit:
    """Tests for emit method."""

    @pytest.mark.asyncio
    async def test_emit_persists_and_pushes_after_commit(self, unit_env, alice):
        notification_service = await unit_env.get(NotificationService)
        unit_of_work = await unit_env.get(UnitOfWork)
        stream = await notification_service.subscribe(alice)

        notification = await _emit(notification_service, alice)
        assert await notification_service.unread_count(alice) == 1
        with pytest.raises(asyncio.TimeoutError):
            await asyncio.wait_for(stream.__anext__(), 0.05)

        await unit_of_work.commit()

        received = await asyncio.wait_for(stream.__anext__(), 1.0)
        assert received.id == notification.id
        assert received.read is False
        await stream.close()

    @pytest.mark.asyncio
    async def test_rolled_back_emit_is_never_pushed(self, unit_env, alice):
        notification_service = await unit_env.get(NotificationService)
        unit_of_work = await unit_env.get(UnitOfWork)
        stream = await notification_service.subscribe(alice)

        await _emit(notification_service, alice)
        await unit_of_work.rollback()
        await unit_of_work.commit()

        with pytest.raises(asyncio.TimeoutError):
            await asyncio.wait_for(stream.__anext__(), 0.05)
        await stream.close()

    @pytest.mark.asyncio
    async def test_push_failure_still_returns_persisted_notification(self, alice):
        repo = InMemoryNotificationRepository()
        transport = BrokenLiveTransport()
        outbox = LiveOutbox(transport)
        service = NotificationService(repo, transport, outbox)

        notification = await _emit(service, alice)
        await outbox.flush()

        assert await repo.find_by_id(notification.id) == notification

    @pytest.mark.asyncio
    async def test_payload_without_match_id_rejected(self, unit_env, alice):
        notification_service = await unit_env.get(NotificationService)

        with pytest.raises(ValueError):
            await notification_service.emit(
                alice, NotificationType.NEW_MESSAGE, "t", "b", payload={}
            )

    @pytest.mark.asyncio
    async def test_other_users_stream_sees_nothing(self, unit_env, alice, bob):
        notification_service = await unit_env.get(NotificationService)
        transport = await unit_env.get(LiveTransport)
        stream = await notification_service.subscribe(bob)

        await _emit(notification_service, alice)
        await stream.close()

        with pytest.raises(StopAsyncIteration):
            await asyncio.wait_for(stream.__anext__(), 1.0)
        assert transport.subscriber_count(f"user:{bob}") == 0


class TestMarkRead:
    """Tests for mark_read and mark_all_read."""

    @pytest.mark.asyncio
    async def test_mark_read_is_idempotent(self, unit_env, alice):
        notification_service = await unit_env.get(NotificationService)
        notification = await _emit(notification_service, alice)

        first = await notification_service.mark_read(notification.id, alice)
        second = await notification_service.mark_read(notification.id, alice)

        assert first.read is True
        assert second.read is True
        assert await notification_service.unread_count(alice) == 0

    @pytest.mark.asyncio
    async def test_mark_read_by_other_user_raises(self, unit_env, alice, bob):
        notification_service = await unit_env.get(NotificationService)
        notification = await _emit(notification_service, alice)

        with pytest.raises(NotAuthorizedError):
            await notification_service.mark_read(notification.id, bob)

        assert await notification_service.unread_count(alice) == 1

    @pytest.mark.asyncio
    async def test_mark_read_unknown_raises_not_found(self, unit_env, alice):
        notification_service = await unit_env.get(NotificationService)

        with pytest.raises(NotFoundError):
            await notification_service.mark_read(NotificationId(uuid4()), alice)

    @pytest.mark.asyncio
    async def test_mark_all_read_only_touches_own(self, unit_env, alice, bob):
        notification_service = await unit_env.get(NotificationService)
        for _ in range(3):
            await _emit(notification_service, alice)
        await _emit(notification_service, bob)

        count = await notification_service.mark_all_read(alice)

        assert count == 3
        assert await notification_service.unread_count(alice) == 0
        assert await notification_service.unread_count(bob) == 1


class TestList:
    """Tests for list method."""

    @pytest.mark.asyncio
    async def test_list_newest_first_with_unread_filter(self, unit_env, alice):
        notification_service = await unit_env.get(NotificationService)
        first = await _emit(notification_service, alice)
        second = await _emit(notification_service, alice)
        await notification_service.mark_read(first.id, alice)

        everything = await notification_service.list(alice)
        unread = await notification_service.list(alice, unread_only=True)

        assert [n.id for n in everything] == [second.id, first.id]
        assert [n.id for n in unread] == [second.id]

    @pytest.mark.asyncio
    async def test_list_paginates(self, unit_env, alice):
        notification_service = await unit_env.get(NotificationService)
        emitted = [await _emit(notification_service, alice) for _ in range(5)]

        page = await notification_service.list(alice, limit=2, offset=1)

        assert [n.id for n in page] == [emitted[3].id, emitted[2].id]
