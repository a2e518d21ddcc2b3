from uuid import UUID
from fastapi import APIRouter, BackgroundTasks, Query, status

from ..core.dependency import (
    ExplanationGeneratorDep,
    FeedServiceDep,
    PhotoResolverDep,
    SessionFactoryDep,
    SwipeServiceDep,
)
from matchmaker.core.config import settings
from matchmaker.schemas.swipe import FeedResponse, LikesReceivedResponse, SwipeRequest, SwipeResponse
from matchmaker.schemas.user import ProfileResponse
from matchmaker.services.match_service import populate_match_explanation

swipe_router = APIRouter(tags=["swipes"])


@swipe_router.get(
    "/users/{user_id}/feed",
    response_model=FeedResponse,
    summary="Get the swipe feed",
)
def get_feed(
    user_id: UUID,
    service: FeedServiceDep,
    batch_size: int = Query(settings.FEED_BATCH_SIZE, ge=1, le=50),
):
    """
    Closest compatible profiles the user has not swiped on yet

    Profiles without a known distance come last and report `distance: null`.
    """
    profiles = service.get_swipe_feed(user_id, batch_size=batch_size)
    return FeedResponse(user_id=user_id, profiles=profiles, count=len(profiles))


@swipe_router.post(
    "/swipes",
    response_model=SwipeResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Like or reject a profile",
)
def create_swipe(
    request: SwipeRequest,
    background_tasks: BackgroundTasks,
    service: SwipeServiceDep,
    explanation_generator: ExplanationGeneratorDep,
    photo_resolver: PhotoResolverDep,
    session_factory: SessionFactoryDep,
):
    """
    Record a swipe

    - **action**: `like` or `reject`

    A like answering an earlier like creates a match, returned as
    `{matched: true, match_id}`; its AI explanation is filled in afterwards.
    Swiping the same profile twice returns 409.
    """
    result = service.record_swipe(request.swiper_id, request.swiped_id, request.action)

    if result.created:
        background_tasks.add_task(
            populate_match_explanation,
            result.match_id,
            explanation_generator,
            photo_resolver,
            session_factory,
        )

    return SwipeResponse(matched=result.matched, match_id=result.match_id)


@swipe_router.get(
    "/users/{user_id}/likes-received",
    response_model=LikesReceivedResponse,
    summary="Profiles that liked the user",
)
def get_likes_received(user_id: UUID, service: SwipeServiceDep, photo_resolver: PhotoResolverDep):
    """Users who liked this user and are still waiting for a swipe back"""
    profiles = [
        ProfileResponse.from_user(user, photo_resolver)
        for user in service.get_likes_received(user_id)
    ]
    return LikesReceivedResponse(user_id=user_id, profiles=profiles, count=len(profiles))
