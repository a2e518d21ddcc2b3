from typing import Optional
from uuid import UUID
from pydantic import BaseModel, Field


class SeedProfilesResponse(BaseModel):
    created: int
    skipped: int
    message: str


class SeedLikesRequest(BaseModel):
    user_id: UUID
    like_count: Optional[int] = Field(None, ge=1, description="Omit to use every compatible demo user")


class SeedLikesResponse(BaseModel):
    user_id: UUID
    likes_created: int
    message: str


class ClearResponse(BaseModel):
    deleted: int
    message: str
