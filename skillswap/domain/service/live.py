"""Live push transport contract.

Topics are plain strings: ``match:<id>`` carries conversation messages,
``user:<id>`` carries notifications. Delivery is at-least-once; consumers
deduplicate by id.
"""

import asyncio
from typing import Any, Awaitable, Callable

import logfire

Event = dict[str, Any]

_CLOSED = object()


def match_topic(match_id: object) -> str:
    return f"match:{match_id}"


def user_topic(user_id: object) -> str:
    return f"user:{user_id}"


class Subscription:
    """Buffered handle on one topic.

    Transports push events with ``deliver``; consumers iterate with
    ``async for``. Closing stops delivery immediately and drops anything
    still buffered.
    """

    def __init__(
        self,
        topic: str,
        queue_size: int,
        on_close: Callable[["Subscription"], Awaitable[None]],
    ) -> None:
        self.topic = topic
        self._queue: asyncio.Queue[Any] = asyncio.Queue(maxsize=queue_size + 1)
        self._queue_size = queue_size
        self._on_close = on_close
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    def deliver(self, event: Event) -> bool:
        """Buffer an event for the consumer.

        Returns:
            False if the subscription is closed or its buffer is full
        """
        if self._closed:
            return False
        # One slot stays free for the close sentinel
        if self._queue.qsize() >= self._queue_size:
            logfire.warn("Live subscriber lagging, event dropped", topic=self.topic)
            return False
        self._queue.put_nowait(event)
        return True

    async def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        while not self._queue.empty():
            self._queue.get_nowait()
        self._queue.put_nowait(_CLOSED)
        await self._on_close(self)

    def __aiter__(self) -> "Subscription":
        return self

    async def __anext__(self) -> Event:
        item = await self._queue.get()
        if item is _CLOSED:
            # Leave the sentinel for any other waiter
            self._queue.put_nowait(_CLOSED)
            raise StopAsyncIteration
        return item


class LiveTransport:
    """Generic publish/subscribe interface for all live backends."""

    async def publish(self, topic: str, event: Event) -> None:
        """Push an event to every current subscriber of a topic.

        Args:
            topic: Topic name
            event: JSON-serializable event
        """
        raise NotImplementedError

    async def subscribe(self, topic: str) -> Subscription:
        """Start receiving events published to a topic from now on."""
        raise NotImplementedError

    async def close(self) -> None:
        """Release transport resources."""
        raise NotImplementedError


class LiveOutbox:
    """Events raised during one request, published once its writes are durable.

    Services ``add`` events as they write. Whoever owns the request's
    transaction calls ``flush`` after a successful commit, or ``discard``
    after a rollback. Publishing is best effort: a failed push is logged
    and the remaining events still go out, in the order they were added.
    """

    def __init__(self, transport: LiveTransport, timeout: float = 5.0) -> None:
        self.transport = transport
        self.timeout = timeout
        self._pending: list[tuple[str, Event]] = []

    @property
    def pending(self) -> int:
        return len(self._pending)

    def add(self, topic: str, event: Event) -> None:
        self._pending.append((topic, event))

    def discard(self) -> int:
        """Drop every queued event.

        Returns:
            Number of events dropped
        """
        dropped = len(self._pending)
        self._pending = []
        if dropped:
            logfire.info("Live events discarded", count=dropped)
        return dropped

    async def flush(self) -> None:
        """Publish every queued event in order and empty the queue."""
        pending, self._pending = self._pending, []
        for topic, event in pending:
            try:
                async with asyncio.timeout(self.timeout):
                    await self.transport.publish(topic, event)
            except Exception as e:
                logfire.warn(
                    "Live push failed",
                    topic=topic,
                    kind=event.get("kind"),
                    error=repr(e),
                )
