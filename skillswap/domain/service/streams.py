"""Typed live streams over transport subscriptions."""

from collections import deque
from typing import Callable, Generic, Optional, TypeVar
from uuid import UUID

import logfire
from pydantic import ValidationError

from skillswap.domain.model import Message, Notification

from .live import Event, Subscription

T = TypeVar("T", Message, Notification)

# Ids remembered per stream for duplicate suppression
_SEEN_WINDOW = 1024


class LiveStream(Generic[T]):
    """Async iterator of domain objects pushed on one topic.

    Events of other kinds are skipped and each id is yielded at most once.
    Closing the stream ends iteration and leaves stored data untouched.
    """

    kind: str = ""
    model: type[T]

    def __init__(
        self,
        subscription: Subscription,
        on_close: Optional[Callable[[], None]] = None,
    ) -> None:
        self._subscription = subscription
        self._on_close = on_close
        self._seen: set[UUID] = set()
        self._order: deque[UUID] = deque()

    @property
    def closed(self) -> bool:
        return self._subscription.closed

    async def close(self) -> None:
        if self._subscription.closed:
            return
        await self._subscription.close()
        if self._on_close is not None:
            self._on_close()

    async def __aenter__(self) -> "LiveStream[T]":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.close()

    def __aiter__(self) -> "LiveStream[T]":
        return self

    async def __anext__(self) -> T:
        async for event in self._subscription:
            item = self._parse(event)
            if item is None or item.id in self._seen:
                continue
            self._remember(item.id)
            return item
        raise StopAsyncIteration

    def _parse(self, event: Event) -> Optional[T]:
        if event.get("kind") != self.kind:
            return None
        try:
            return self.model.model_validate(event.get("data"))
        except ValidationError as e:
            logfire.warn(
                "Malformed live event skipped",
                topic=self._subscription.topic,
                error=str(e),
            )
            return None

    def _remember(self, item_id: UUID) -> None:
        self._seen.add(item_id)
        self._order.append(item_id)
        if len(self._order) > _SEEN_WINDOW:
            self._seen.discard(self._order.popleft())


class MessageStream(LiveStream[Message]):
    """Messages appended to one conversation, in creation order."""

    kind = "message"
    model = Message


class NotificationStream(LiveStream[Notification]):
    """Notifications emitted for one user."""

    kind = "notification"
    model = Notification
