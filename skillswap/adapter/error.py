"""Infrastructure layer errors."""


class AdapterError(Exception):
    """Base infrastructure error."""

    pass


class LiveTransportError(AdapterError):
    """Live push transport error."""

    pass


class PayloadTooLargeError(LiveTransportError):
    """Event does not fit in a single broker notification."""

    def __init__(self, topic: str, size: int, limit: int):
        self.topic = topic
        self.size = size
        self.limit = limit
        super().__init__(f"Event for {topic} is {size} bytes, limit is {limit}")
