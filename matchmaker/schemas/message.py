from datetime import datetime
from typing import Optional
from uuid import UUID
from pydantic import BaseModel, Field, field_validator

from matchmaker.schemas.user import ProfileResponse


class MessageCreate(BaseModel):
    sender_id: UUID
    content: str = Field(..., max_length=5000)

    @field_validator("content")
    @classmethod
    def strip_content(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Message content cannot be empty")
        return v


class MessageResponse(BaseModel):
    id: UUID
    match_id: UUID
    sender_id: UUID
    content: str
    read: bool
    created_at: datetime

    model_config = {"from_attributes": True}


class MarkReadResponse(BaseModel):
    match_id: UUID
    marked_read: int


class UnreadCountResponse(BaseModel):
    user_id: UUID
    unread_count: int


class ConversationResponse(BaseModel):
    """Match with its most recent message, for a chat list"""

    match_id: UUID
    matched_at: datetime
    other_user: ProfileResponse
    last_message: Optional[MessageResponse] = None
    unread_count: int = 0
