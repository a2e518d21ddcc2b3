import logging
from typing import Callable, Optional
from uuid import UUID

from sqlalchemy.orm import Session

from matchmaker.constants.error_constant import ERROR_MATCH_NOT_FOUND, ERROR_USER_NOT_FOUND
from matchmaker.core.database import SessionLocal
from matchmaker.core.exception import AppException, NotFoundError
from matchmaker.models.match import Match
from matchmaker.models.user import User
from matchmaker.schemas.match import MatchCheckResponse, MatchDetailResponse, MatchResponse
from matchmaker.schemas.user import ProfileResponse
from matchmaker.services.explanation_service import ExplanationGenerator
from matchmaker.services.photo_resolver import PhotoResolver
from matchmaker.services.swipe_service import SwipeService
from matchmaker.utils.profile import as_utc

logger = logging.getLogger(__name__)


class MatchService:
    """Read side of the match ledger plus match-level explanations"""

    def __init__(
        self,
        db: Session,
        photo_resolver: PhotoResolver,
        explanation_generator: Optional[ExplanationGenerator] = None,
        swipe_service: Optional[SwipeService] = None,
    ):
        self.db = db
        self.photo_resolver = photo_resolver
        self.explanation_generator = explanation_generator
        self.swipe_service = swipe_service or SwipeService(db)

    def get_match(self, match_id: UUID) -> Match:
        match = self.db.get(Match, match_id)
        if match is None:
            raise NotFoundError(ERROR_MATCH_NOT_FOUND, "Match not found", match_id=str(match_id))
        return match

    def get_matches(self, user_id: UUID) -> list[MatchResponse]:
        """
        All matches for a user, newest first, each with the other
        participant's profile

        Raises:
            NotFoundError: If the user does not exist
        """
        if self.db.get(User, user_id) is None:
            raise NotFoundError(ERROR_USER_NOT_FOUND, "User not found", user_id=str(user_id))

        responses = []
        for match in self.swipe_service.get_all_matches_for_user(user_id):
            other_user = self.db.get(User, match.other_user_id(user_id))
            if other_user is None:
                continue
            responses.append(
                MatchResponse(
                    id=match.id,
                    matched_at=match.matched_at,
                    ai_explanation=match.ai_explanation,
                    other_user=ProfileResponse.from_user(other_user, self.photo_resolver),
                )
            )

        responses.sort(key=lambda m: as_utc(m.matched_at), reverse=True)
        return responses

    def check_match(self, user_a_id: UUID, user_b_id: UUID) -> MatchCheckResponse:
        match = self.swipe_service.find_match(user_a_id, user_b_id)
        if match is None:
            return MatchCheckResponse(matched=False)
        return MatchCheckResponse(matched=True, match_id=match.id)

    def get_match_with_users(self, match_id: UUID) -> MatchDetailResponse:
        match = self.get_match(match_id)
        user1, user2 = self._participants(match)
        return MatchDetailResponse(
            id=match.id,
            matched_at=match.matched_at,
            ai_explanation=match.ai_explanation,
            user1=ProfileResponse.from_user(user1, self.photo_resolver),
            user2=ProfileResponse.from_user(user2, self.photo_resolver),
        )

    async def generate_match_explanation(self, match_id: UUID) -> str:
        """
        Generate and store a 2-3 sentence explanation for a match

        Provider failures fall back to a generic explanation, which is
        stored the same way.

        Raises:
            NotFoundError: If the match or either participant is missing
        """
        if self.explanation_generator is None:
            raise RuntimeError("MatchService needs an ExplanationGenerator to explain matches")

        match = self.get_match(match_id)
        user1, user2 = self._participants(match)

        explanation = await self.explanation_generator.explain_match(user1, user2)

        try:
            match.ai_explanation = explanation
            self.db.commit()

        except Exception as e:
            self.db.rollback()
            logger.error(f"Error storing match explanation: {e}", exc_info=True)
            raise

        logger.info(
            f"Explanation stored for match {match_id}",
            extra={"match_id": str(match_id)},
        )
        return explanation

    def _participants(self, match: Match) -> tuple[User, User]:
        user1 = self.db.get(User, match.user1_id)
        user2 = self.db.get(User, match.user2_id)
        if user1 is None or user2 is None:
            raise NotFoundError(
                ERROR_USER_NOT_FOUND,
                "Match participants not found",
                match_id=str(match.id),
            )
        return user1, user2


async def populate_match_explanation(
    match_id: UUID,
    explanation_generator: ExplanationGenerator,
    photo_resolver: PhotoResolver,
    session_factory: Callable[[], Session] = SessionLocal,
) -> None:
    """Background task run after a swipe creates a match"""
    db = session_factory()
    try:
        service = MatchService(db, photo_resolver, explanation_generator)
        await service.generate_match_explanation(match_id)
    except AppException as e:
        logger.warning(
            f"Could not populate explanation for match {match_id}: {e}",
            extra={"match_id": str(match_id), "error_code": e.error_code},
        )
    finally:
        db.close()
