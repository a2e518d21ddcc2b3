from typing import Optional
from uuid import UUID
from fastapi import APIRouter, BackgroundTasks

from ..core.dependency import (
    DailyPickServiceDep,
    ExplanationGeneratorDep,
    PhotoResolverDep,
    SessionFactoryDep,
)
from matchmaker.schemas.daily_pick import DailyPicksResponse, PickActionRequest, PickActionResponse
from matchmaker.services.match_service import populate_match_explanation

daily_pick_router = APIRouter(prefix="/users/{user_id}/daily-picks", tags=["daily-picks"])


@daily_pick_router.get(
    "",
    response_model=Optional[DailyPicksResponse],
    summary="Get today's cached picks",
)
def get_daily_picks(user_id: UUID, service: DailyPickServiceDep):
    """Returns `null` when there are no picks yet or they expired"""
    return service.get_daily_picks(user_id)


@daily_pick_router.post(
    "",
    response_model=DailyPicksResponse,
    summary="Get today's picks, generating them if needed",
)
async def get_or_generate_daily_picks(user_id: UUID, service: DailyPickServiceDep):
    """
    Serve the cached set or generate a new one

    - 404 if the user does not exist
    - 422 if the user has no profile embedding
    - 502 if the vector search fails
    """
    return await service.get_or_generate_daily_picks(user_id)


@daily_pick_router.post(
    "/generate",
    response_model=DailyPicksResponse,
    summary="Regenerate today's picks",
)
async def generate_daily_picks(user_id: UUID, service: DailyPickServiceDep):
    pick_set = await service.generate_daily_picks(user_id)
    return service.to_response(pick_set)


@daily_pick_router.post(
    "/{picked_user_id}/action",
    response_model=PickActionResponse,
    summary="Like or pass on a pick",
)
def act_on_pick(
    user_id: UUID,
    picked_user_id: UUID,
    request: PickActionRequest,
    background_tasks: BackgroundTasks,
    service: DailyPickServiceDep,
    explanation_generator: ExplanationGeneratorDep,
    photo_resolver: PhotoResolverDep,
    session_factory: SessionFactoryDep,
):
    """
    - **like**: records a like and reports a match if it was mutual
    - **pass**: records a reject so the profile stops showing up

    Repeating an action is safe and keeps the first decision.
    """
    result = service.act_on_pick(user_id, picked_user_id, request.action)

    if result.match_created:
        background_tasks.add_task(
            populate_match_explanation,
            result.match_id,
            explanation_generator,
            photo_resolver,
            session_factory,
        )

    return result
