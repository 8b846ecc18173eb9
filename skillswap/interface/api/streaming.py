"""Server-Sent Events rendering of live streams."""

from collections.abc import AsyncIterator, Callable
from typing import Any

import logfire
from pydantic import BaseModel
from sse_starlette.sse import EventSourceResponse

from skillswap.domain.service import LiveStream

# Seconds between keep-alive comments on idle streams
PING_SECONDS = 15


def event_source(
    stream: LiveStream[Any],
    event: str,
    render: Callable[[Any], BaseModel],
) -> EventSourceResponse:
    """Relay a live stream to the client until either side closes it.

    Args:
        stream: Open live stream, closed when the client disconnects
        event: SSE event name
        render: Converts a domain object to its API model
    """

    async def events() -> AsyncIterator[dict[str, str]]:
        try:
            async for item in stream:
                yield {
                    "event": event,
                    "id": str(item.id),
                    "data": render(item).model_dump_json(),
                }
        finally:
            await stream.close()
            logfire.info("Live stream closed", event=event)

    return EventSourceResponse(events(), ping=PING_SECONDS)
