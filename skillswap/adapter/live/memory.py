"""In-process live transport.

Delivers events to subscribers held by the same process. Suitable for a
single worker and for tests.
"""

from collections import defaultdict

import logfire

from skillswap.domain.service.live import Event, LiveTransport, Subscription


class InMemoryLiveTransport(LiveTransport):
    """Fan-out broker keeping subscriptions in a dict of topic -> set."""

    def __init__(self, queue_size: int = 256) -> None:
        self.queue_size = queue_size
        self._subscriptions: dict[str, set[Subscription]] = defaultdict(set)

    async def publish(self, topic: str, event: Event) -> None:
        for subscription in list(self._subscriptions.get(topic, ())):
            subscription.deliver(event)

    async def subscribe(self, topic: str) -> Subscription:
        subscription = Subscription(topic, self.queue_size, on_close=self._remove)
        self._subscriptions[topic].add(subscription)
        return subscription

    async def _remove(self, subscription: Subscription) -> None:
        subscribers = self._subscriptions.get(subscription.topic)
        if subscribers is None:
            return
        subscribers.discard(subscription)
        if not subscribers:
            del self._subscriptions[subscription.topic]

    def subscriber_count(self, topic: str) -> int:
        return len(self._subscriptions.get(topic, ()))

    async def close(self) -> None:
        for subscribers in list(self._subscriptions.values()):
            for subscription in list(subscribers):
                await subscription.close()
        self._subscriptions.clear()
        logfire.info("In-memory live transport closed")
