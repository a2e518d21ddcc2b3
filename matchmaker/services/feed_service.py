import logging
import math
from dataclasses import dataclass
from typing import Iterator, Optional
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.orm import Session

from matchmaker.constants.error_constant import ERROR_VAL_OUT_OF_RANGE
from matchmaker.core.config import settings
from matchmaker.core.exception import ValidationError
from matchmaker.models.user import User
from matchmaker.schemas.user import ProfileResponse
from matchmaker.services.photo_resolver import PhotoResolver
from matchmaker.services.swipe_service import SwipeService
from matchmaker.utils.compatibility import are_compatible
from matchmaker.utils.distance import distance_between

logger = logging.getLogger(__name__)


@dataclass
class FeedCandidate:
    user: User
    distance: float  # miles, math.inf when unknown


class FeedService:
    """Selects the closest compatible, not-yet-swiped profiles for a user"""

    def __init__(
        self,
        db: Session,
        photo_resolver: PhotoResolver,
        swipe_service: Optional[SwipeService] = None,
        scan_chunk: int = settings.FEED_SCAN_CHUNK,
    ):
        self.db = db
        self.photo_resolver = photo_resolver
        self.swipe_service = swipe_service or SwipeService(db)
        self.scan_chunk = scan_chunk

    def get_swipe_feed(
        self, user_id: UUID, batch_size: int = settings.FEED_BATCH_SIZE
    ) -> list[ProfileResponse]:
        candidates = self.select_candidates(user_id, batch_size)
        return [
            ProfileResponse.from_user(c.user, self.photo_resolver, distance=c.distance)
            for c in candidates
        ]

    def select_candidates(self, user_id: UUID, batch_size: int) -> list[FeedCandidate]:
        """
        Stream the user population and keep the `batch_size` closest
        compatible candidates.

        The working list never grows beyond 2 * batch_size; it is trimmed
        with a stable sort so equal distances keep scan order.
        """
        if batch_size < 1:
            raise ValidationError(
                "batch_size must be at least 1",
                error_code=ERROR_VAL_OUT_OF_RANGE,
                details={"batch_size": batch_size},
            )

        viewer = self.db.get(User, user_id)
        if viewer is None:
            return []

        swiped_ids = self.swipe_service.get_swiped_ids(user_id)

        candidates: list[FeedCandidate] = []
        scanned = 0

        for user in self._stream_users():
            scanned += 1

            if user.id == user_id:
                continue

            if user.id in swiped_ids:
                continue

            if not are_compatible(viewer, user):
                continue

            distance = distance_between(viewer.location, user.location)
            candidates.append(
                FeedCandidate(user=user, distance=math.inf if distance is None else distance)
            )

            if len(candidates) > batch_size * 2:
                candidates.sort(key=lambda c: c.distance)
                del candidates[batch_size:]

        candidates.sort(key=lambda c: c.distance)
        top_candidates = candidates[:batch_size]

        logger.info(
            f"Built swipe feed for user {user_id}",
            extra={
                "user_id": str(user_id),
                "scanned": scanned,
                "excluded_swiped": len(swiped_ids),
                "returned": len(top_candidates),
            },
        )
        return top_candidates

    def _stream_users(self) -> Iterator[User]:
        stmt = select(User).execution_options(yield_per=self.scan_chunk)
        yield from self.db.scalars(stmt)
