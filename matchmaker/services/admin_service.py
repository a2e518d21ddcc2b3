import logging
from datetime import date, timedelta
from typing import Optional
from uuid import UUID, uuid4

from sqlalchemy import delete, select
from sqlalchemy.orm import Session

from matchmaker.constants.demo_profiles import DEMO_PROFILES, MAX_DISTANCES, SF_LOCATIONS
from matchmaker.constants.error_constant import ERROR_ADMIN_NO_DEMO_USERS, ERROR_USER_NOT_FOUND
from matchmaker.core.config import settings
from matchmaker.core.exception import AppException, NotFoundError, ProviderError
from matchmaker.enumerations.user_enum import SwipeAction
from matchmaker.models.daily_pick import DailyPickSet
from matchmaker.models.swipe import Swipe
from matchmaker.models.user import User
from matchmaker.schemas.user import ProfileCreate
from matchmaker.services.embedding_service import EmbeddingService
from matchmaker.services.swipe_service import SwipeService
from matchmaker.services.user_service import UserService
from matchmaker.utils.compatibility import are_compatible

logger = logging.getLogger(__name__)


def _date_of_birth_for_age(age: int, offset_days: int, today: date) -> date:
    """A birth date giving exactly `age` today, spread by up to a year"""
    try:
        anniversary = today.replace(year=today.year - age)
    except ValueError:
        # Feb 29 in a non-leap birth year
        anniversary = date(today.year - age, 2, 28)
    return anniversary - timedelta(days=offset_days % 365)


class AdminService:
    """Demo data seeding and bulk resets for development environments"""

    def __init__(
        self,
        db: Session,
        embedding_service: Optional[EmbeddingService] = None,
        demo_prefix: str = settings.DEMO_EXTERNAL_ID_PREFIX,
    ):
        self.db = db
        self.embedding_service = embedding_service
        self.demo_prefix = demo_prefix
        self.user_service = UserService(db, embedding_service)
        self.swipe_service = SwipeService(db)

    async def seed_demo_profiles(
        self, profiles: Optional[list[dict]] = None, today: Optional[date] = None
    ) -> tuple[int, int]:
        """
        Create demo profiles with embeddings

        A profile whose embedding cannot be generated is skipped.

        Returns:
            Tuple of (created, skipped)
        """
        today = today or date.today()
        created = 0
        skipped = 0

        for index, profile in enumerate(profiles if profiles is not None else DEMO_PROFILES):
            data = ProfileCreate(
                external_id=f"{self.demo_prefix}{profile['name'].lower()}_{uuid4().hex[:8]}",
                name=profile["name"],
                date_of_birth=_date_of_birth_for_age(profile["age"], index * 11 + 1, today),
                gender=profile["gender"],
                bio=profile["bio"],
                looking_for=profile["looking_for"],
                age_range=profile["age_range"],
                interests=profile["interests"],
                photos=profile["photos"],
                location=profile.get("location", SF_LOCATIONS[index % len(SF_LOCATIONS)]),
                max_distance=profile.get("max_distance", MAX_DISTANCES[index % len(MAX_DISTANCES)]),
            )

            try:
                await self.user_service.create_profile(data, today=today)
            except ProviderError as e:
                logger.warning(
                    f"Skipping demo profile {profile['name']}: {e}",
                    extra={"profile_name": profile["name"], "error_code": e.error_code},
                )
                skipped += 1
                continue

            created += 1

        logger.info(
            f"Seeded {created} demo profiles",
            extra={"profiles_created": created, "profiles_skipped": skipped},
        )
        return created, skipped

    def get_demo_users(self) -> list[User]:
        return list(
            self.db.scalars(
                select(User)
                .where(User.external_id.startswith(self.demo_prefix, autoescape=True))
                .order_by(User.created_at, User.name)
            )
        )

    def seed_likes_for_user(self, user_id: UUID, like_count: Optional[int] = None) -> int:
        """
        Make compatible demo users like `user_id`

        Args:
            user_id: Target user
            like_count: Maximum number of likes, all compatible demo users if None

        Returns:
            Number of new like swipes

        Raises:
            NotFoundError: If the target user or any demo user is missing
        """
        target = self.db.get(User, user_id)
        if target is None:
            raise NotFoundError(ERROR_USER_NOT_FOUND, "User not found", user_id=str(user_id))

        demo_users = [u for u in self.get_demo_users() if u.id != user_id]
        if not demo_users:
            raise NotFoundError(
                ERROR_ADMIN_NO_DEMO_USERS,
                "No demo users found, seed demo profiles first",
            )

        compatible = [u for u in demo_users if are_compatible(u, target)]
        if like_count is not None:
            compatible = compatible[:like_count]

        likes_created = 0
        for demo_user in compatible:
            if self.swipe_service.get_swipe(demo_user.id, user_id) is not None:
                continue
            self.swipe_service.record_swipe_lenient(demo_user.id, user_id, SwipeAction.LIKE)
            likes_created += 1

        logger.info(
            f"Seeded {likes_created} likes for user {user_id}",
            extra={"user_id": str(user_id), "likes_created": likes_created},
        )
        return likes_created

    def clear_demo_profiles(self) -> int:
        """Delete every demo user with their swipes, matches and messages"""
        demo_ids = [u.id for u in self.get_demo_users()]
        for demo_id in demo_ids:
            self.user_service.delete_user(demo_id)

        logger.info(f"Deleted {len(demo_ids)} demo profiles", extra={"deleted": len(demo_ids)})
        return len(demo_ids)

    def clear_swipes(self) -> int:
        try:
            deleted = self.db.execute(
                delete(Swipe).execution_options(synchronize_session=False)
            ).rowcount
            self.db.commit()

        except Exception as e:
            self.db.rollback()
            logger.error(f"Error clearing swipes: {e}", exc_info=True)
            raise

        logger.info(f"Deleted {deleted} swipes", extra={"deleted": deleted})
        return deleted

    def clear_daily_picks(self, user_id: Optional[UUID] = None) -> int:
        """Delete one user's pick set, or every set when `user_id` is None"""
        try:
            stmt = delete(DailyPickSet).execution_options(synchronize_session=False)
            if user_id is not None:
                if self.db.get(User, user_id) is None:
                    raise NotFoundError(ERROR_USER_NOT_FOUND, "User not found", user_id=str(user_id))
                stmt = stmt.where(DailyPickSet.user_id == user_id)

            deleted = self.db.execute(stmt).rowcount
            self.db.commit()

        except AppException:
            self.db.rollback()
            raise

        except Exception as e:
            self.db.rollback()
            logger.error(f"Error clearing daily picks: {e}", exc_info=True)
            raise

        logger.info(
            f"Deleted {deleted} daily pick sets",
            extra={"deleted": deleted, "user_id": str(user_id) if user_id else None},
        )
        return deleted
