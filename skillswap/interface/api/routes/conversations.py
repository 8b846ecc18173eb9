"""Conversation routes."""

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Cookie, Query, status
from pydantic import BaseModel, Field
from sse_starlette.sse import EventSourceResponse

from skillswap.application.usecase.conversation import (
    GetMessagesRequest,
    GetMessagesResponse,
    GetMessagesUseCase,
    ListConversationsRequest,
    ListConversationsResponse,
    ListConversationsUseCase,
    MarkConversationReadRequest,
    MarkConversationReadResponse,
    MarkConversationReadUseCase,
    MessageItem,
    OpenMessageStreamRequest,
    OpenMessageStreamUseCase,
    SendMessageRequest,
    SendMessageUseCase,
    to_message_item,
)
from skillswap.domain.service import JWTService
from skillswap.domain.value import MessageType
from skillswap.interface.api.auth import require_principal
from skillswap.interface.api.streaming import event_source

router = APIRouter(tags=["conversations"], route_class=DishkaRoute)


class SendMessageAPIRequest(BaseModel):
    """API request for sending a message."""

    body: str = Field(min_length=1, max_length=5000)
    type: MessageType = MessageType.TEXT
    file_url: str | None = None


@router.get("/conversations", response_model=ListConversationsResponse)
async def list_conversations(
    list_conversations_use_case: FromDishka[ListConversationsUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> ListConversationsResponse:
    """The caller's inbox, most recently active first."""
    principal = require_principal(jwt_service, auth_token, "view conversations")
    return await list_conversations_use_case.execute(
        ListConversationsRequest(user_id=str(principal.user_id))
    )


@router.get("/matches/{match_id}/messages", response_model=GetMessagesResponse)
async def get_messages(
    match_id: str,
    get_messages_use_case: FromDishka[GetMessagesUseCase],
    jwt_service: FromDishka[JWTService],
    mark_read: bool = Query(default=True),
    auth_token: str | None = Cookie(default=None),
) -> GetMessagesResponse:
    """Full conversation history, oldest first.

    Opening the history marks the caller's incoming messages read unless
    ``mark_read=false`` is passed.
    """
    principal = require_principal(jwt_service, auth_token, "read messages")
    return await get_messages_use_case.execute(
        GetMessagesRequest(
            match_id=match_id, user_id=str(principal.user_id), mark_read=mark_read
        )
    )


@router.post(
    "/matches/{match_id}/messages",
    response_model=MessageItem,
    status_code=status.HTTP_201_CREATED,
)
async def send_message(
    match_id: str,
    request: SendMessageAPIRequest,
    send_message_use_case: FromDishka[SendMessageUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> MessageItem:
    """Send a message to the other participant of an accepted match."""
    principal = require_principal(jwt_service, auth_token, "send messages")
    return await send_message_use_case.execute(
        SendMessageRequest(
            match_id=match_id,
            sender_id=str(principal.user_id),
            sender_name=principal.name,
            body=request.body,
            type=request.type,
            file_url=request.file_url,
        )
    )


@router.post("/matches/{match_id}/read", response_model=MarkConversationReadResponse)
async def mark_conversation_read(
    match_id: str,
    mark_read_use_case: FromDishka[MarkConversationReadUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> MarkConversationReadResponse:
    """Mark every message addressed to the caller as read."""
    principal = require_principal(jwt_service, auth_token, "read messages")
    return await mark_read_use_case.execute(
        MarkConversationReadRequest(match_id=match_id, reader_id=str(principal.user_id))
    )


@router.get("/matches/{match_id}/stream")
async def stream_messages(
    match_id: str,
    open_stream_use_case: FromDishka[OpenMessageStreamUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> EventSourceResponse:
    """Server-Sent Events feed of new messages in the conversation.

    The caller counts as viewing the conversation while connected, so
    messages sent to them meanwhile are read on arrival.
    """
    principal = require_principal(jwt_service, auth_token, "follow conversations")
    stream = await open_stream_use_case.execute(
        OpenMessageStreamRequest(match_id=match_id, user_id=str(principal.user_id))
    )
    return event_source(stream, "message", to_message_item)
