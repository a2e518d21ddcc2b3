from uuid import UUID
from fastapi import APIRouter, status

from ..core.dependency import MessageServiceDep
from matchmaker.schemas.message import (
    ConversationResponse,
    MarkReadResponse,
    MessageCreate,
    MessageResponse,
    UnreadCountResponse,
)

message_router = APIRouter(tags=["messages"])


@message_router.post(
    "/matches/{match_id}/messages",
    response_model=MessageResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Send a message",
)
def send_message(match_id: UUID, request: MessageCreate, service: MessageServiceDep):
    """Only the two users of the match may send messages in it (403 otherwise)"""
    return service.send_message(match_id, request.sender_id, request.content)


@message_router.get(
    "/matches/{match_id}/messages",
    response_model=list[MessageResponse],
    summary="List messages in a match",
)
def get_messages(match_id: UUID, service: MessageServiceDep):
    return service.get_messages(match_id)


@message_router.post(
    "/matches/{match_id}/messages/read",
    response_model=MarkReadResponse,
    summary="Mark the other user's messages as read",
)
def mark_as_read(match_id: UUID, user_id: UUID, service: MessageServiceDep):
    marked = service.mark_as_read(match_id, user_id)
    return MarkReadResponse(match_id=match_id, marked_read=marked)


@message_router.get(
    "/users/{user_id}/unread-count",
    response_model=UnreadCountResponse,
    summary="Unread messages across all matches",
)
def get_unread_count(user_id: UUID, service: MessageServiceDep):
    return UnreadCountResponse(user_id=user_id, unread_count=service.get_unread_count(user_id))


@message_router.get(
    "/users/{user_id}/conversations",
    response_model=list[ConversationResponse],
    summary="Matches with their latest message",
)
def get_conversations(user_id: UUID, service: MessageServiceDep):
    return service.get_matches_with_last_message(user_id)
