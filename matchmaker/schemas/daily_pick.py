from datetime import datetime
from typing import Optional
from uuid import UUID
from pydantic import BaseModel, Field

from matchmaker.enumerations.user_enum import PickAction, PickStatus
from matchmaker.schemas.user import ProfileResponse


class DailyPickResponse(BaseModel):
    picked_user_id: UUID
    score: float
    ai_explanation: str
    shared_interests: list[str] = Field(default_factory=list)
    status: PickStatus
    profile: Optional[ProfileResponse] = None


class DailyPicksResponse(BaseModel):
    user_id: UUID
    picks: list[DailyPickResponse] = Field(default_factory=list)
    generated_at: datetime
    expires_at: datetime
    all_reviewed: bool


class PickActionRequest(BaseModel):
    action: PickAction


class PickActionResponse(BaseModel):
    picked_user_id: UUID
    status: PickStatus
    matched: bool
    match_id: Optional[UUID] = None
    match_created: bool = Field(False, exclude=True)
