from typing import Optional
from uuid import UUID
from fastapi import APIRouter, status

from ..core.dependency import AdminServiceDep
from matchmaker.schemas.admin import (
    ClearResponse,
    SeedLikesRequest,
    SeedLikesResponse,
    SeedProfilesResponse,
)

admin_router = APIRouter(prefix="/admin", tags=["admin"])


@admin_router.post(
    "/seed/profiles",
    response_model=SeedProfilesResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Seed demo profiles",
)
async def seed_demo_profiles(service: AdminServiceDep):
    """Create the demo profiles with embeddings; failed embeddings are skipped"""
    created, skipped = await service.seed_demo_profiles()
    return SeedProfilesResponse(
        created=created,
        skipped=skipped,
        message=f"Created {created} demo profiles",
    )


@admin_router.post("/seed/likes", response_model=SeedLikesResponse, summary="Seed likes for a user")
def seed_likes(request: SeedLikesRequest, service: AdminServiceDep):
    """Compatible demo users like the given user, up to **like_count**"""
    likes = service.seed_likes_for_user(request.user_id, request.like_count)
    return SeedLikesResponse(
        user_id=request.user_id,
        likes_created=likes,
        message=f"{likes} demo users liked this user",
    )


@admin_router.delete("/demo-profiles", response_model=ClearResponse, summary="Delete demo profiles")
def clear_demo_profiles(service: AdminServiceDep):
    deleted = service.clear_demo_profiles()
    return ClearResponse(deleted=deleted, message=f"Deleted {deleted} demo profiles")


@admin_router.delete("/swipes", response_model=ClearResponse, summary="Delete all swipes")
def clear_swipes(service: AdminServiceDep):
    deleted = service.clear_swipes()
    return ClearResponse(deleted=deleted, message=f"Deleted {deleted} swipes")


@admin_router.delete("/daily-picks", response_model=ClearResponse, summary="Delete daily picks")
def clear_daily_picks(service: AdminServiceDep, user_id: Optional[UUID] = None):
    """All users, or only **user_id** when given"""
    deleted = service.clear_daily_picks(user_id)
    scope = "for user" if user_id else "for all users"
    return ClearResponse(deleted=deleted, message=f"Deleted {deleted} daily picks {scope}")
