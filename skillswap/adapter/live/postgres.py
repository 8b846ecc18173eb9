"""Live transport over Postgres LISTEN/NOTIFY.

Every process keeps one asyncpg connection that listens on the channels
of its subscribed topics and is also used to publish. Any number of API
workers sharing the database then see each other's events.
"""

import asyncio
import json
from collections import defaultdict
from typing import Optional

import asyncpg
import logfire

from skillswap.adapter.error import LiveTransportError, PayloadTooLargeError
from skillswap.domain.service.live import Event, LiveTransport, Subscription

# Postgres rejects NOTIFY payloads of 8000 bytes or more
PAYLOAD_LIMIT = 7999

# Upper bound for the wait between reconnect attempts
MAX_RECONNECT_DELAY = 30.0


def channel_for(topic: str) -> str:
    """Postgres channel name for a topic, e.g. ``skillswap_match_<hex>``."""
    kind, _, identifier = topic.partition(":")
    return f"skillswap_{kind}_{identifier.replace('-', '')}"


class PostgresLiveTransport(LiveTransport):
    """LISTEN/NOTIFY broker.

    Events travel as ``{"topic": ..., "event": ...}`` JSON. A lost
    connection is reopened in the background while any topic still has
    subscribers, listening again on every such topic. Events notified
    while the connection is down are not replayed.
    """

    def __init__(
        self,
        dsn: str,
        queue_size: int = 256,
        timeout: float = 5.0,
        reconnect_delay: float = 1.0,
    ) -> None:
        """Initialize transport.

        Args:
            dsn: Plain postgresql:// DSN
            queue_size: Per-subscriber buffer
            timeout: Seconds allowed to connect
            reconnect_delay: First wait after a failed reconnect, doubled per failure
        """
        self.dsn = dsn
        self.queue_size = queue_size
        self.timeout = timeout
        self.reconnect_delay = reconnect_delay
        self._connection: Optional[asyncpg.Connection] = None
        self._connect_lock = asyncio.Lock()
        self._subscriptions: dict[str, set[Subscription]] = defaultdict(set)
        self._reconnect_task: Optional[asyncio.Task[None]] = None
        self._closing = False

    async def _get_connection(self) -> asyncpg.Connection:
        async with self._connect_lock:
            if self._connection is not None and not self._connection.is_closed():
                return self._connection

            try:
                connection = await asyncpg.connect(self.dsn, timeout=self.timeout)
            except (OSError, asyncpg.PostgresError, asyncio.TimeoutError) as e:
                logfire.error("Live transport connect failed", error=str(e))
                raise LiveTransportError(f"Cannot connect live transport: {e}") from e

            connection.add_termination_listener(self._on_terminated)
            for topic in list(self._subscriptions):
                await connection.add_listener(channel_for(topic), self._on_notify)

            self._connection = connection
            logfire.info(
                "Live transport connected", topics=len(self._subscriptions)
            )
            return connection

    def _on_terminated(self, connection: asyncpg.Connection) -> None:
        if self._connection is not connection:
            return
        self._connection = None
        if self._closing:
            return

        logfire.warn(
            "Live transport connection lost", topics=len(self._subscriptions)
        )
        if self._subscriptions and (
            self._reconnect_task is None or self._reconnect_task.done()
        ):
            self._reconnect_task = asyncio.get_running_loop().create_task(
                self._reconnect()
            )

    async def _reconnect(self) -> None:
        delay = self.reconnect_delay
        while self._subscriptions and not self._closing:
            try:
                await self._get_connection()
                return
            except LiveTransportError:
                logfire.warn("Live transport reconnect failed", retry_in=delay)
            await asyncio.sleep(delay)
            delay = min(delay * 2, MAX_RECONNECT_DELAY)

    def _on_notify(
        self, connection: asyncpg.Connection, pid: int, channel: str, payload: str
    ) -> None:
        try:
            envelope = json.loads(payload)
            topic = envelope["topic"]
            event = envelope["event"]
        except (ValueError, KeyError, TypeError) as e:
            logfire.warn("Malformed live notification", channel=channel, error=str(e))
            return

        for subscription in list(self._subscriptions.get(topic, ())):
            subscription.deliver(event)

    async def publish(self, topic: str, event: Event) -> None:
        """Send one NOTIFY on the topic's channel.

        Raises:
            PayloadTooLargeError: If the encoded event exceeds the Postgres limit
            LiveTransportError: If the broker connection cannot be opened
        """
        payload = json.dumps({"topic": topic, "event": event}, separators=(",", ":"))
        size = len(payload.encode("utf-8"))
        if size > PAYLOAD_LIMIT:
            raise PayloadTooLargeError(topic, size, PAYLOAD_LIMIT)

        connection = await self._get_connection()
        await connection.execute("SELECT pg_notify($1, $2)", channel_for(topic), payload)

    async def subscribe(self, topic: str) -> Subscription:
        connection = await self._get_connection()
        if topic not in self._subscriptions:
            await connection.add_listener(channel_for(topic), self._on_notify)

        subscription = Subscription(topic, self.queue_size, on_close=self._remove)
        self._subscriptions[topic].add(subscription)
        return subscription

    async def _remove(self, subscription: Subscription) -> None:
        subscribers = self._subscriptions.get(subscription.topic)
        if subscribers is None:
            return
        subscribers.discard(subscription)
        if subscribers:
            return

        del self._subscriptions[subscription.topic]
        connection = self._connection
        if connection is not None and not connection.is_closed():
            await connection.remove_listener(
                channel_for(subscription.topic), self._on_notify
            )

    async def close(self) -> None:
        self._closing = True
        if self._reconnect_task is not None and not self._reconnect_task.done():
            self._reconnect_task.cancel()
            try:
                await self._reconnect_task
            except asyncio.CancelledError:
                pass
        self._reconnect_task = None

        for subscribers in list(self._subscriptions.values()):
            for subscription in list(subscribers):
                await subscription.close()
        self._subscriptions.clear()

        if self._connection is not None and not self._connection.is_closed():
            await self._connection.close()
        self._connection = None
        logfire.info("Postgres live transport closed")
