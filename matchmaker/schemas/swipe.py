from typing import Optional
from uuid import UUID
from pydantic import BaseModel, Field

from matchmaker.enumerations.user_enum import SwipeAction
from matchmaker.schemas.user import ProfileResponse


class SwipeRequest(BaseModel):
    swiper_id: UUID
    swiped_id: UUID
    action: SwipeAction


class SwipeResponse(BaseModel):
    matched: bool
    match_id: Optional[UUID] = None


class FeedResponse(BaseModel):
    user_id: UUID
    profiles: list[ProfileResponse] = Field(default_factory=list)
    count: int = 0


class LikesReceivedResponse(BaseModel):
    user_id: UUID
    profiles: list[ProfileResponse] = Field(default_factory=list)
    count: int = 0
