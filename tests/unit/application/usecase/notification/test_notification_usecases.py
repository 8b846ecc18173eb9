"""Unit tests for notification use cases."""

import pytest

from skillswap.application.usecase.notification import (
    ListNotificationsRequest,
    ListNotificationsUseCase,
    MarkAllNotificationsReadRequest,
    MarkAllNotificationsReadUseCase,
    MarkNotificationReadRequest,
    MarkNotificationReadUseCase,
)
from skillswap.domain.service import MatchService
from skillswap.domain.value import NotificationType
from tests.di.catalog import GUITAR, PYTHON, SPANISH
from tests.harness import create_env_fixture

# Unit test fixture
unit_env = create_env_fixture()


async def _requests(unit_env, learner, teacher, skills):
    match_service = await unit_env.get(MatchService)
    for skill in skills:
        await match_service.request(learner, teacher, skill.id, learner_name="Bob")


class TestListNotificationsUseCase:
    """Tests for ListNotificationsUseCase."""

    @pytest.mark.asyncio
    async def test_lists_newest_first_with_unread_count(self, unit_env, alice, bob):
        await _requests(unit_env, bob, alice, [GUITAR, SPANISH])
        use_case = await unit_env.get(ListNotificationsUseCase)

        response = await use_case.execute(ListNotificationsRequest(user_id=str(alice)))

        assert response.unread_count == 2
        assert [n.type for n in response.notifications] == [
            NotificationType.MATCH_REQUEST,
            NotificationType.MATCH_REQUEST,
        ]
        assert response.notifications[0].body == "Bob wants to learn Spanish from you."

    @pytest.mark.asyncio
    async def test_limit_applies(self, unit_env, alice, bob):
        await _requests(unit_env, bob, alice, [GUITAR, SPANISH, PYTHON])
        use_case = await unit_env.get(ListNotificationsUseCase)

        response = await use_case.execute(
            ListNotificationsRequest(user_id=str(alice), limit=2, offset=1)
        )

        assert len(response.notifications) == 2
        assert response.unread_count == 3


class TestMarkNotificationsRead:
    """Tests for marking notifications read."""

    @pytest.mark.asyncio
    async def test_mark_one_then_all(self, unit_env, alice, bob):
        await _requests(unit_env, bob, alice, [GUITAR, SPANISH])
        list_use_case = await unit_env.get(ListNotificationsUseCase)
        mark_one = await unit_env.get(MarkNotificationReadUseCase)
        mark_all = await unit_env.get(MarkAllNotificationsReadUseCase)
        listed = await list_use_case.execute(ListNotificationsRequest(user_id=str(alice)))

        item = await mark_one.execute(
            MarkNotificationReadRequest(
                notification_id=listed.notifications[0].notification_id,
                user_id=str(alice),
            )
        )
        remaining = await mark_all.execute(
            MarkAllNotificationsReadRequest(user_id=str(alice))
        )
        after = await list_use_case.execute(
            ListNotificationsRequest(user_id=str(alice), unread_only=True)
        )

        assert item.read
        assert remaining.marked_read == 1
        assert after.notifications == []
        assert after.unread_count == 0
