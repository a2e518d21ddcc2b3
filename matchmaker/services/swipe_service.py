import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Callable, Optional
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from matchmaker.constants.error_constant import ERROR_SWIPE_SELF, ERROR_USER_NOT_FOUND
from matchmaker.core.exception import (
    AppException,
    DuplicateSwipeError,
    NotFoundError,
    ValidationError,
)
from matchmaker.enumerations.user_enum import SwipeAction
from matchmaker.models.match import Match, make_pair_key
from matchmaker.models.swipe import Swipe
from matchmaker.models.user import User
from matchmaker.utils.pair_lock import pair_lock
from matchmaker.utils.profile import utc_now

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MatchResult:
    matched: bool
    match_id: Optional[UUID] = None
    # True only for the call that inserted the match row
    created: bool = False


NO_MATCH = MatchResult(matched=False)


class SwipeService:
    """Swipe ledger with mutual-like match detection"""

    def __init__(self, db: Session, clock: Callable[[], datetime] = utc_now):
        self.db = db
        self.clock = clock

    def record_swipe(self, swiper_id: UUID, swiped_id: UUID, action: SwipeAction | str) -> MatchResult:
        """
        Record a swipe made directly by a user

        Raises:
            DuplicateSwipeError: If swiper already swiped on swiped
            NotFoundError: If either user does not exist
        """
        return self._record(swiper_id, swiped_id, SwipeAction(action), strict=True)

    def record_swipe_lenient(
        self, swiper_id: UUID, swiped_id: UUID, action: SwipeAction | str
    ) -> MatchResult:
        """
        Record a swipe for automated flows (daily-pick accept/pass)

        An existing swipe for the pair is left untouched and the pair's
        current match state is returned instead, so repeated calls agree.
        """
        return self._record(swiper_id, swiped_id, SwipeAction(action), strict=False)

    def get_swipe(self, swiper_id: UUID, swiped_id: UUID) -> Optional[Swipe]:
        return self.db.scalars(
            select(Swipe).where(Swipe.swiper_id == swiper_id, Swipe.swiped_id == swiped_id)
        ).first()

    def get_swiped_ids(self, swiper_id: UUID) -> set[UUID]:
        return set(self.db.scalars(select(Swipe.swiped_id).where(Swipe.swiper_id == swiper_id)))

    def find_match(self, user_a_id: UUID, user_b_id: UUID) -> Optional[Match]:
        return self.db.scalars(
            select(Match).where(Match.pair_key == make_pair_key(user_a_id, user_b_id))
        ).first()

    def get_all_matches_for_user(self, user_id: UUID) -> list[Match]:
        as_user1 = self.db.scalars(select(Match).where(Match.user1_id == user_id)).all()
        as_user2 = self.db.scalars(select(Match).where(Match.user2_id == user_id)).all()
        return [*as_user1, *as_user2]

    def get_likes_received(self, user_id: UUID) -> list[User]:
        """Users who liked `user_id` and have not been swiped on by them yet"""
        already_swiped = self.get_swiped_ids(user_id)
        likes = self.db.scalars(
            select(Swipe)
            .where(Swipe.swiped_id == user_id, Swipe.action == SwipeAction.LIKE)
            .order_by(Swipe.created_at)
        ).all()

        pending = []
        for like in likes:
            if like.swiper_id in already_swiped:
                continue
            user = self.db.get(User, like.swiper_id)
            if user is not None:
                pending.append(user)
        return pending

    def _record(
        self, swiper_id: UUID, swiped_id: UUID, action: SwipeAction, strict: bool
    ) -> MatchResult:
        if swiper_id == swiped_id:
            raise ValidationError("Cannot swipe on yourself", error_code=ERROR_SWIPE_SELF)

        try:
            with pair_lock(self.db, swiper_id, swiped_id):
                self._require_user(swiper_id)
                self._require_user(swiped_id)

                if self.get_swipe(swiper_id, swiped_id) is not None:
                    if strict:
                        raise DuplicateSwipeError(swiper_id, swiped_id)
                    result = self._current_match_result(swiper_id, swiped_id)
                    self.db.rollback()
                    return result

                swipe = Swipe(
                    swiper_id=swiper_id,
                    swiped_id=swiped_id,
                    action=action,
                    created_at=self.clock(),
                )
                self.db.add(swipe)
                self.db.flush()

                result = NO_MATCH
                if action == SwipeAction.LIKE:
                    result = self._detect_match(swiper_id, swiped_id)

                self.db.commit()

        except IntegrityError:
            # Another writer recorded the same ordered pair first
            self.db.rollback()
            if self.get_swipe(swiper_id, swiped_id) is None:
                raise
            if strict:
                raise DuplicateSwipeError(swiper_id, swiped_id)
            return self._current_match_result(swiper_id, swiped_id)

        except AppException:
            self.db.rollback()
            raise

        except Exception as e:
            self.db.rollback()
            logger.error(f"Error recording swipe: {e}", exc_info=True)
            raise

        logger.info(
            f"Swipe recorded for user {swiper_id}",
            extra={
                "swiper_id": str(swiper_id),
                "swiped_id": str(swiped_id),
                "action": action.value,
                "matched": result.matched,
            },
        )
        return result

    def _detect_match(self, swiper_id: UUID, swiped_id: UUID) -> MatchResult:
        reverse = self.get_swipe(swiped_id, swiper_id)
        if reverse is None or reverse.action != SwipeAction.LIKE:
            return NO_MATCH

        match, created = self._create_match(swiper_id, swiped_id)
        return MatchResult(matched=True, match_id=match.id, created=created)

    def _create_match(self, swiper_id: UUID, swiped_id: UUID) -> tuple[Match, bool]:
        existing = self.find_match(swiper_id, swiped_id)
        if existing is not None:
            return existing, False

        match = Match(
            user1_id=swiper_id,
            user2_id=swiped_id,
            pair_key=make_pair_key(swiper_id, swiped_id),
            matched_at=self.clock(),
        )
        try:
            with self.db.begin_nested():
                self.db.add(match)
        except IntegrityError:
            existing = self.find_match(swiper_id, swiped_id)
            if existing is None:
                raise
            return existing, False

        logger.info(
            f"Match created between {swiper_id} and {swiped_id}",
            extra={"match_id": str(match.id), "user1_id": str(swiper_id), "user2_id": str(swiped_id)},
        )
        return match, True

    def _current_match_result(self, user_a_id: UUID, user_b_id: UUID) -> MatchResult:
        match = self.find_match(user_a_id, user_b_id)
        if match is None:
            return NO_MATCH
        return MatchResult(matched=True, match_id=match.id)

    def _require_user(self, user_id: UUID) -> User:
        user = self.db.get(User, user_id)
        if user is None:
            raise NotFoundError(
                ERROR_USER_NOT_FOUND, "User not found", user_id=str(user_id)
            )
        return user
