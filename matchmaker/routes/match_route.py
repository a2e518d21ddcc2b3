from uuid import UUID
from fastapi import APIRouter

from ..core.dependency import MatchServiceDep
from matchmaker.schemas.match import (
    MatchCheckResponse,
    MatchDetailResponse,
    MatchExplanationResponse,
    MatchResponse,
)

match_router = APIRouter(tags=["matches"])


@match_router.get(
    "/users/{user_id}/matches",
    response_model=list[MatchResponse],
    summary="List a user's matches",
)
def get_matches(user_id: UUID, service: MatchServiceDep):
    """Newest first, each with the other user's profile"""
    return service.get_matches(user_id)


@match_router.get("/matches/check", response_model=MatchCheckResponse, summary="Check a pair")
def check_match(user_a_id: UUID, user_b_id: UUID, service: MatchServiceDep):
    return service.check_match(user_a_id, user_b_id)


@match_router.get(
    "/matches/{match_id}",
    response_model=MatchDetailResponse,
    summary="Get a match with both profiles",
)
def get_match(match_id: UUID, service: MatchServiceDep):
    return service.get_match_with_users(match_id)


@match_router.post(
    "/matches/{match_id}/explanation",
    response_model=MatchExplanationResponse,
    summary="Generate the match explanation",
)
async def generate_match_explanation(match_id: UUID, service: MatchServiceDep):
    """
    (Re)generate the 2-3 sentence explanation for a match

    Falls back to a generic explanation when the AI provider is unavailable.
    """
    explanation = await service.generate_match_explanation(match_id)
    return MatchExplanationResponse(match_id=match_id, ai_explanation=explanation)
