"""Unit tests for the in-process live transport and typed streams."""

import asyncio
from uuid import uuid4

import pytest

from skillswap.adapter.live.memory import InMemoryLiveTransport
from skillswap.adapter.live.postgres import channel_for
from skillswap.domain.model import Message
from skillswap.domain.service import MessageStream, match_topic
from skillswap.domain.value import MatchId, MessageId, UserId


def _message(match_id: MatchId, seq: int) -> Message:
    return Message(
        id=MessageId(uuid4()),
        match_id=match_id,
        sender_id=UserId(uuid4()),
        body=f"message {seq}",
        seq=seq,
    )


def _event(message: Message) -> dict:
    return {"kind": "message", "data": message.model_dump(mode="json")}


class TestInMemoryLiveTransport:
    """Tests for InMemoryLiveTransport."""

    @pytest.mark.asyncio
    async def test_fan_out_to_every_subscriber_of_topic(self):
        transport = InMemoryLiveTransport()
        first = await transport.subscribe("match:1")
        second = await transport.subscribe("match:1")
        other = await transport.subscribe("match:2")

        await transport.publish("match:1", {"kind": "ping"})

        assert await asyncio.wait_for(first.__anext__(), 1.0) == {"kind": "ping"}
        assert await asyncio.wait_for(second.__anext__(), 1.0) == {"kind": "ping"}
        await other.close()
        assert transport.subscriber_count("match:2") == 0
        await transport.close()
        assert first.closed and second.closed

    @pytest.mark.asyncio
    async def test_lagging_subscriber_drops_instead_of_blocking(self):
        transport = InMemoryLiveTransport(queue_size=2)
        subscription = await transport.subscribe("user:1")

        for i in range(5):
            await transport.publish("user:1", {"n": i})

        received = [await asyncio.wait_for(subscription.__anext__(), 1.0) for _ in range(2)]
        assert received == [{"n": 0}, {"n": 1}]
        await transport.close()


class TestMessageStream:
    """Tests for MessageStream parsing and deduplication."""

    @pytest.mark.asyncio
    async def test_skips_other_kinds_and_malformed_events(self):
        transport = InMemoryLiveTransport()
        match_id = MatchId(uuid4())
        topic = match_topic(match_id)
        stream = MessageStream(await transport.subscribe(topic))
        message = _message(match_id, 1)

        await transport.publish(topic, {"kind": "notification", "data": {}})
        await transport.publish(topic, {"kind": "message", "data": {"body": ""}})
        await transport.publish(topic, _event(message))

        received = await asyncio.wait_for(stream.__anext__(), 1.0)
        assert received == message
        await stream.close()

    @pytest.mark.asyncio
    async def test_close_runs_callback_once(self):
        transport = InMemoryLiveTransport()
        closed = []
        stream = MessageStream(
            await transport.subscribe("match:x"), on_close=lambda: closed.append(True)
        )

        async with stream:
            pass
        await stream.close()

        assert closed == [True]
        assert transport.subscriber_count("match:x") == 0


def test_channel_name_is_a_postgres_identifier():
    match_id = uuid4()

    channel = channel_for(f"match:{match_id}")

    assert channel == f"skillswap_match_{match_id.hex}"
    assert len(channel) <= 63
