from datetime import date
from typing import Optional
from uuid import UUID
from fastapi import status
from sqlalchemy import delete, or_, select
from sqlalchemy.orm import Session
import logging

from matchmaker.constants.error_constant import ERROR_USER_ALREADY_EXIST, ERROR_USER_NOT_FOUND
from matchmaker.core.database import transactional
from matchmaker.core.exception import AppException, NotFoundError
from matchmaker.models.daily_pick import DailyPickSet
from matchmaker.models.match import Match
from matchmaker.models.message import Message
from matchmaker.models.swipe import Swipe
from matchmaker.models.user import User
from matchmaker.schemas.user import ProfileCreate, ProfileUpdate
from matchmaker.services.embedding_service import EmbeddingService
from matchmaker.utils.profile import calculate_age

logger = logging.getLogger(__name__)


class UserService:
    """Service layer for profile operations"""

    def __init__(self, db: Session, embedding_service: Optional[EmbeddingService] = None):
        self.db = db
        self.embedding_service = embedding_service

    def get_user(self, user_id: UUID) -> User:
        user = self.db.get(User, user_id)
        if user is None:
            raise NotFoundError(ERROR_USER_NOT_FOUND, "User not found", user_id=str(user_id))
        return user

    def get_user_by_external_id(self, external_id: str) -> User | None:
        return self.db.scalars(select(User).where(User.external_id == external_id)).first()

    async def create_profile(self, data: ProfileCreate, today: Optional[date] = None) -> User:
        """
        Create a profile together with its embedding

        Raises:
            AppException: If the external id is already registered
            ProviderError: If the embedding cannot be generated
        """
        if self.embedding_service is None:
            raise RuntimeError("UserService.create_profile requires an EmbeddingService")

        if self.get_user_by_external_id(data.external_id) is not None:
            raise AppException(
                ERROR_USER_ALREADY_EXIST,
                message="A profile already exists for this account",
                status_code=status.HTTP_409_CONFLICT,
            )

        embedding = await self.embedding_service.embed_profile(data.bio, data.interests)

        with transactional(self.db):
            user = User(
                external_id=data.external_id,
                name=data.name,
                date_of_birth=data.date_of_birth,
                age=calculate_age(data.date_of_birth, today),
                gender=data.gender,
                bio=data.bio,
                looking_for=[g.value for g in data.looking_for],
                age_min=data.age_range.min,
                age_max=data.age_range.max,
                interests=list(data.interests),
                photos=list(data.photos),
                latitude=data.location.latitude if data.location else None,
                longitude=data.location.longitude if data.location else None,
                max_distance=data.max_distance,
                embedding=embedding,
            )
            self.db.add(user)
            self.db.flush()

        logger.info(
            f"Profile created for user {user.id}",
            extra={"user_id": str(user.id), "interests": len(data.interests)},
        )
        return user

    def update_profile(self, user_id: UUID, data: ProfileUpdate, today: Optional[date] = None) -> bool:
        """
        Apply a partial profile update

        Returns:
            True when bio or interests changed and the embedding needs a refresh
        """
        try:
            user = self.get_user(user_id)
            updates = data.model_dump(exclude_unset=True)

            for field in ("name", "bio", "gender", "max_distance"):
                if field in updates:
                    setattr(user, field, updates[field])

            if "date_of_birth" in updates and data.date_of_birth is not None:
                user.date_of_birth = data.date_of_birth
                user.age = calculate_age(data.date_of_birth, today)

            if data.looking_for is not None:
                user.looking_for = [g.value for g in data.looking_for]

            if data.age_range is not None:
                user.age_min = data.age_range.min
                user.age_max = data.age_range.max

            if data.interests is not None:
                user.interests = list(data.interests)

            if data.photos is not None:
                user.photos = list(data.photos)

            if "location" in updates:
                user.latitude = data.location.latitude if data.location else None
                user.longitude = data.location.longitude if data.location else None

            self.db.commit()

        except AppException:
            self.db.rollback()
            raise

        except Exception as e:
            self.db.rollback()
            logger.error(f"Error updating profile: {e}", exc_info=True)
            raise

        needs_reembed = data.bio is not None or data.interests is not None
        logger.info(
            f"Profile updated for user {user_id}",
            extra={"user_id": str(user_id), "fields": sorted(updates), "reembed": needs_reembed},
        )
        return needs_reembed

    def update_embedding(self, user_id: UUID, embedding: list[float]) -> None:
        with transactional(self.db):
            user = self.get_user(user_id)
            user.embedding = embedding

    def delete_user(self, user_id: UUID) -> dict:
        """
        Delete a user with every swipe, match, message and daily-pick set
        that belongs to them
        """
        try:
            user = self.get_user(user_id)

            match_ids = list(
                self.db.scalars(
                    select(Match.id).where(or_(Match.user1_id == user_id, Match.user2_id == user_id))
                )
            )

            messages_deleted = 0
            if match_ids:
                messages_deleted = self.db.execute(
                    delete(Message)
                    .where(Message.match_id.in_(match_ids))
                    .execution_options(synchronize_session=False)
                ).rowcount
                self.db.execute(delete(Match).where(Match.id.in_(match_ids)))

            swipes_deleted = self.db.execute(
                delete(Swipe)
                .where(or_(Swipe.swiper_id == user_id, Swipe.swiped_id == user_id))
                .execution_options(synchronize_session=False)
            ).rowcount

            self.db.execute(delete(DailyPickSet).where(DailyPickSet.user_id == user_id))

            self.db.delete(user)
            self.db.commit()

        except AppException:
            self.db.rollback()
            raise

        except Exception as e:
            self.db.rollback()
            logger.error(f"Error deleting user: {e}", exc_info=True)
            raise

        summary = {
            "user_id": str(user_id),
            "swipes_deleted": swipes_deleted,
            "matches_deleted": len(match_ids),
            "messages_deleted": messages_deleted,
        }
        logger.info(f"Deleted user {user_id}", extra=summary)
        return summary
