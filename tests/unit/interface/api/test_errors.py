"""Unit tests for the domain error to HTTP status mapping."""

from uuid import uuid4

import pytest
from starlette.requests import Request

from skillswap.domain.error import (
    ChannelNotOpenError,
    DomainError,
    DuplicatePendingError,
    NotFoundError,
    NotParticipantError,
    SelfMatchError,
    SkillNotFoundError,
    StoreUnavailableError,
)
from skillswap.domain.repository import UnitOfWork
from skillswap.domain.service import LiveOutbox
from skillswap.interface.api.errors import domain_error_handler, status_for
from tests.harness import create_env_fixture

# Unit test fixture
unit_env = create_env_fixture()


@pytest.mark.parametrize(
    ("error", "expected"),
    [
        (SelfMatchError(uuid4()), 400),
        (DuplicatePendingError(uuid4()), 409),
        (NotParticipantError(uuid4(), uuid4()), 403),
        (ChannelNotOpenError(uuid4(), "pending"), 409),
        (NotFoundError("Match", "abc"), 404),
        (SkillNotFoundError(uuid4()), 500),
        (DomainError("unmapped"), 500),
    ],
)
def test_status_for(error, expected):
    assert status_for(error) == expected


def test_store_outage_is_the_only_retryable_error():
    assert StoreUnavailableError.retryable
    assert not ChannelNotOpenError.retryable
    assert not NotFoundError.retryable


def test_closed_channel_message_differs_from_not_yet_open():
    match_id = uuid4()

    assert (
        ChannelNotOpenError(match_id, "cancelled", closed=True).user_message
        != ChannelNotOpenError(match_id, "pending").user_message
    )


@pytest.mark.asyncio
async def test_domain_error_abandons_queued_pushes(unit_env):
    """A rejected request rolls back, so nothing it queued is ever pushed."""
    outbox = await unit_env.get(LiveOutbox)
    unit_of_work = await unit_env.get(UnitOfWork)
    outbox.add("match:1", {"kind": "message"})
    request = Request({"type": "http", "method": "POST", "path": "/x", "headers": []})
    request.state.dishka_container = unit_env

    response = await domain_error_handler(
        request, StoreUnavailableError("conversation.read_on_arrival", "timed out")
    )

    assert response.status_code == 503
    assert outbox.pending == 0
    assert unit_of_work.rollbacks == 1
