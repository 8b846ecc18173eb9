"""Conversation use cases."""

from .get_messages import GetMessagesRequest, GetMessagesResponse, GetMessagesUseCase
from .list_conversations import (
    ConversationItem,
    ListConversationsRequest,
    ListConversationsResponse,
    ListConversationsUseCase,
)
from .mark_read import (
    MarkConversationReadRequest,
    MarkConversationReadResponse,
    MarkConversationReadUseCase,
)
from .open_stream import OpenMessageStreamRequest, OpenMessageStreamUseCase
from .send_message import (
    MessageItem,
    SendMessageRequest,
    SendMessageUseCase,
    to_message_item,
)

__all__ = [
    "ConversationItem",
    "GetMessagesRequest",
    "GetMessagesResponse",
    "GetMessagesUseCase",
    "ListConversationsRequest",
    "ListConversationsResponse",
    "ListConversationsUseCase",
    "MarkConversationReadRequest",
    "MarkConversationReadResponse",
    "MarkConversationReadUseCase",
    "MessageItem",
    "OpenMessageStreamRequest",
    "OpenMessageStreamUseCase",
    "SendMessageRequest",
    "SendMessageUseCase",
    "to_message_item",
]
