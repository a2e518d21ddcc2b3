from datetime import datetime
from typing import Optional
from uuid import UUID
from pydantic import BaseModel

from matchmaker.schemas.user import ProfileResponse


class MatchResponse(BaseModel):
    """A match seen from one participant's side"""

    id: UUID
    matched_at: datetime
    ai_explanation: Optional[str] = None
    other_user: ProfileResponse


class MatchDetailResponse(BaseModel):
    id: UUID
    matched_at: datetime
    ai_explanation: Optional[str] = None
    user1: ProfileResponse
    user2: ProfileResponse


class MatchCheckResponse(BaseModel):
    matched: bool
    match_id: Optional[UUID] = None


class MatchExplanationResponse(BaseModel):
    match_id: UUID
    ai_explanation: str
