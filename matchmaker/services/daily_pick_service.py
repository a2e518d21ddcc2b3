import asyncio
import logging
from datetime import datetime
from typing import Callable, Optional
from uuid import UUID

from sqlalchemy import delete, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from matchmaker.constants.error_constant import (
    ERROR_DAILY_PICKS_NOT_FOUND,
    ERROR_DAILY_PICKS_PICK_NOT_FOUND,
    ERROR_USER_NOT_FOUND,
)
from matchmaker.core.config import settings
from matchmaker.core.exception import AppException, NoEmbeddingError, NotFoundError
from matchmaker.enumerations.user_enum import PickAction, PickStatus, SwipeAction
from matchmaker.models.daily_pick import DailyPickSet
from matchmaker.models.user import User
from matchmaker.schemas.daily_pick import DailyPickResponse, DailyPicksResponse, PickActionResponse
from matchmaker.schemas.user import ProfileResponse
from matchmaker.services.explanation_service import ExplanationGenerator
from matchmaker.services.photo_resolver import PhotoResolver
from matchmaker.services.swipe_service import NO_MATCH, SwipeService
from matchmaker.services.vector_index import VectorIndex
from matchmaker.utils.compatibility import are_compatible
from matchmaker.utils.profile import as_utc, next_local_midnight, shared_interests, utc_now

logger = logging.getLogger(__name__)

_STATUS_FOR_ACTION = {
    PickAction.LIKE: PickStatus.LIKED,
    PickAction.PASS: PickStatus.PASSED,
}


class DailyPickService:
    """
    AI-curated daily picks: a small set of embedding-similar, compatible,
    unswiped profiles per user, cached until the next local midnight.
    """

    def __init__(
        self,
        db: Session,
        vector_index: VectorIndex,
        photo_resolver: PhotoResolver,
        explanation_generator: Optional[ExplanationGenerator] = None,
        swipe_service: Optional[SwipeService] = None,
        clock: Callable[[], datetime] = utc_now,
        pick_count: int = settings.DAILY_PICKS_COUNT,
        candidate_limit: int = settings.DAILY_PICKS_CANDIDATES,
        tz_name: str = settings.TIMEZONE,
    ):
        self.db = db
        self.vector_index = vector_index
        self.photo_resolver = photo_resolver
        self.explanation_generator = explanation_generator
        self.swipe_service = swipe_service or SwipeService(db, clock=clock)
        self.clock = clock
        self.pick_count = pick_count
        self.candidate_limit = candidate_limit
        self.tz_name = tz_name

    def get_pick_set(self, user_id: UUID) -> Optional[DailyPickSet]:
        """Stored set for the user, expired or not"""
        return self.db.scalars(select(DailyPickSet).where(DailyPickSet.user_id == user_id)).first()

    def is_expired(self, pick_set: DailyPickSet) -> bool:
        return as_utc(self.clock()) >= as_utc(pick_set.expires_at)

    def get_daily_picks(self, user_id: UUID) -> Optional[DailyPicksResponse]:
        """
        Serve today's cached picks

        Returns:
            None when there is no set or it has expired; the caller decides
            whether to generate
        """
        pick_set = self.get_pick_set(user_id)
        if pick_set is None or self.is_expired(pick_set):
            return None
        return self.to_response(pick_set)

    async def get_or_generate_daily_picks(self, user_id: UUID) -> DailyPicksResponse:
        cached = self.get_daily_picks(user_id)
        if cached is not None:
            return cached

        pick_set = await self.generate_daily_picks(user_id)
        return self.to_response(pick_set)

    async def generate_daily_picks(self, user_id: UUID) -> DailyPickSet:
        """
        Generate and store a fresh pick set for the user

        Walks the nearest embedding neighbours in similarity order and keeps
        the first compatible ones the user has not swiped on. An empty
        result is stored too, so the day is not regenerated.

        Raises:
            NotFoundError: If the user does not exist
            NoEmbeddingError: If the user has no profile embedding
            ProviderError: If the vector search fails
        """
        if self.explanation_generator is None:
            raise RuntimeError("DailyPickService needs an ExplanationGenerator to generate picks")

        viewer = self.db.get(User, user_id)
        if viewer is None:
            raise NotFoundError(ERROR_USER_NOT_FOUND, "User not found", user_id=str(user_id))

        if not viewer.has_embedding:
            raise NoEmbeddingError(user_id)

        selected = self._select_candidates(viewer)

        explanations = await asyncio.gather(
            *(self.explanation_generator.explain_pick(viewer, candidate) for candidate, _ in selected)
        )

        picks = [
            {
                "picked_user_id": str(candidate.id),
                "score": score,
                "ai_explanation": explanation,
                "shared_interests": shared_interests(viewer.interests or [], candidate.interests or []),
                "status": PickStatus.PENDING.value,
            }
            for (candidate, score), explanation in zip(selected, explanations)
        ]

        pick_set = self._replace_pick_set(user_id, picks)

        logger.info(
            f"Generated {len(picks)} daily picks for user {user_id}",
            extra={
                "user_id": str(user_id),
                "picks": len(picks),
                "expires_at": pick_set.expires_at.isoformat(),
            },
        )
        return pick_set

    def act_on_pick(self, user_id: UUID, picked_user_id: UUID, action: PickAction | str) -> PickActionResponse:
        """
        Like or pass on one of today's picks

        Records a swipe through the lenient ledger path, so repeating the
        call neither raises nor creates a second swipe. A pick that was
        already acted on keeps its first status.

        Raises:
            NotFoundError: If the user has no pick set or the pick is not in it
        """
        action = PickAction(action)
        self._require_pick(user_id, picked_user_id)

        swipe_action = SwipeAction.LIKE if action == PickAction.LIKE else SwipeAction.REJECT
        result = self.swipe_service.record_swipe_lenient(user_id, picked_user_id, swipe_action)
        if action == PickAction.PASS:
            result = NO_MATCH

        try:
            # The swipe commit expired the loaded set
            pick_set = self._require_pick(user_id, picked_user_id)
            status = self._apply_status(pick_set, str(picked_user_id), _STATUS_FOR_ACTION[action])
            self.db.commit()

        except AppException:
            self.db.rollback()
            raise

        except Exception as e:
            self.db.rollback()
            logger.error(f"Error updating daily pick status: {e}", exc_info=True)
            raise

        logger.info(
            f"User {user_id} acted on daily pick {picked_user_id}",
            extra={
                "user_id": str(user_id),
                "picked_user_id": str(picked_user_id),
                "action": action.value,
                "status": status.value,
                "matched": result.matched,
            },
        )
        return PickActionResponse(
            picked_user_id=picked_user_id,
            status=status,
            matched=result.matched,
            match_id=result.match_id,
            match_created=result.created,
        )

    def to_response(self, pick_set: DailyPickSet) -> DailyPicksResponse:
        picks = []
        for pick in pick_set.picks or []:
            user = self.db.get(User, UUID(pick["picked_user_id"]))
            if user is None:
                continue
            picks.append(
                DailyPickResponse(
                    picked_user_id=user.id,
                    score=pick["score"],
                    ai_explanation=pick["ai_explanation"],
                    shared_interests=pick.get("shared_interests", []),
                    status=PickStatus(pick["status"]),
                    profile=ProfileResponse.from_user(user, self.photo_resolver),
                )
            )

        return DailyPicksResponse(
            user_id=pick_set.user_id,
            picks=picks,
            generated_at=as_utc(pick_set.generated_at),
            expires_at=as_utc(pick_set.expires_at),
            all_reviewed=pick_set.all_reviewed,
        )

    def _select_candidates(self, viewer: User) -> list[tuple[User, float]]:
        query_vector = [float(x) for x in viewer.embedding]
        neighbours = self.vector_index.search(query_vector, self.candidate_limit)
        swiped_ids = self.swipe_service.get_swiped_ids(viewer.id)

        selected: list[tuple[User, float]] = []
        for candidate_id, score in neighbours:
            if len(selected) >= self.pick_count:
                break

            if candidate_id == viewer.id or candidate_id in swiped_ids:
                continue

            candidate = self.db.get(User, candidate_id)
            if candidate is None:
                continue

            if not are_compatible(viewer, candidate):
                continue

            selected.append((candidate, score))

        return selected

    def _replace_pick_set(self, user_id: UUID, picks: list[dict]) -> DailyPickSet:
        """
        Delete-then-insert the user's set. A concurrent generation that
        inserted first is overwritten by retrying once.
        """
        now = self.clock()
        expires_at = next_local_midnight(now, self.tz_name)

        try:
            return self._write_pick_set(user_id, picks, now, expires_at)
        except IntegrityError:
            logger.warning(
                "Concurrent daily pick generation detected, replacing again",
                extra={"user_id": str(user_id)},
            )
            return self._write_pick_set(user_id, picks, now, expires_at)

    def _write_pick_set(
        self, user_id: UUID, picks: list[dict], now: datetime, expires_at: datetime
    ) -> DailyPickSet:
        try:
            self.db.execute(delete(DailyPickSet).where(DailyPickSet.user_id == user_id))
            pick_set = DailyPickSet(
                user_id=user_id,
                picks=picks,
                generated_at=now,
                expires_at=expires_at,
            )
            self.db.add(pick_set)
            self.db.commit()
            return pick_set

        except IntegrityError:
            self.db.rollback()
            raise

        except Exception as e:
            self.db.rollback()
            logger.error(f"Error saving daily picks: {e}", exc_info=True)
            raise

    def _require_pick(self, user_id: UUID, picked_user_id: UUID) -> DailyPickSet:
        pick_set = self.get_pick_set(user_id)
        if pick_set is None:
            raise NotFoundError(
                ERROR_DAILY_PICKS_NOT_FOUND, "No daily picks found", user_id=str(user_id)
            )

        if not any(pick["picked_user_id"] == str(picked_user_id) for pick in pick_set.picks or []):
            raise NotFoundError(
                ERROR_DAILY_PICKS_PICK_NOT_FOUND,
                "User is not one of today's picks",
                user_id=str(user_id),
                picked_user_id=str(picked_user_id),
            )
        return pick_set

    @staticmethod
    def _apply_status(pick_set: DailyPickSet, picked_user_id: str, new_status: PickStatus) -> PickStatus:
        """Move a pending pick to `new_status`; acted picks keep their status"""
        updated = []
        resulting = new_status
        for pick in pick_set.picks:
            if pick["picked_user_id"] == picked_user_id:
                if pick["status"] == PickStatus.PENDING.value:
                    pick = {**pick, "status": new_status.value}
                resulting = PickStatus(pick["status"])
            updated.append(pick)

        # Reassign so the JSON column is flagged dirty
        pick_set.picks = updated
        return resulting
