import logging
from datetime import datetime
from typing import Callable, Optional
from uuid import UUID

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from matchmaker.constants.error_constant import ERROR_MESSAGE_EMPTY, ERROR_USER_NOT_FOUND
from matchmaker.core.exception import AppException, AuthorizationError, NotFoundError, ValidationError
from matchmaker.models.match import Match
from matchmaker.models.message import Message
from matchmaker.models.user import User
from matchmaker.schemas.message import ConversationResponse, MessageResponse
from matchmaker.schemas.user import ProfileResponse
from matchmaker.services.match_service import MatchService
from matchmaker.services.photo_resolver import PhotoResolver
from matchmaker.utils.profile import as_utc, utc_now

logger = logging.getLogger(__name__)


class MessageService:
    """Append-only chat messages scoped to a match"""

    def __init__(
        self,
        db: Session,
        photo_resolver: PhotoResolver,
        clock: Callable[[], datetime] = utc_now,
    ):
        self.db = db
        self.photo_resolver = photo_resolver
        self.clock = clock
        self.match_service = MatchService(db, photo_resolver)

    def send_message(self, match_id: UUID, sender_id: UUID, content: str) -> Message:
        """
        Append a message to a match

        Raises:
            NotFoundError: If the match does not exist
            AuthorizationError: If the sender is not part of the match
            ValidationError: If the content is blank
        """
        try:
            match = self.match_service.get_match(match_id)

            if not match.involves(sender_id):
                raise AuthorizationError(
                    "Not authorized to send messages in this match",
                    details={"match_id": str(match_id), "sender_id": str(sender_id)},
                )

            content = (content or "").strip()
            if not content:
                raise ValidationError("Message content cannot be empty", error_code=ERROR_MESSAGE_EMPTY)

            message = Message(
                match_id=match_id,
                sender_id=sender_id,
                content=content,
                read=False,
                created_at=self.clock(),
            )
            self.db.add(message)
            self.db.commit()
            self.db.refresh(message)

        except AppException:
            self.db.rollback()
            raise

        except Exception as e:
            self.db.rollback()
            logger.error(f"Error sending message: {e}", exc_info=True)
            raise

        logger.info(
            f"Message sent in match {match_id}",
            extra={"match_id": str(match_id), "sender_id": str(sender_id)},
        )
        return message

    def get_messages(self, match_id: UUID) -> list[Message]:
        self.match_service.get_match(match_id)
        return list(
            self.db.scalars(
                select(Message)
                .where(Message.match_id == match_id)
                .order_by(Message.created_at, Message.id)
            )
        )

    def mark_as_read(self, match_id: UUID, user_id: UUID) -> int:
        """
        Flag every unread message the other participant sent as read

        Returns:
            Number of messages updated
        """
        try:
            match = self.match_service.get_match(match_id)
            if not match.involves(user_id):
                raise AuthorizationError(
                    "Not authorized to read messages in this match",
                    details={"match_id": str(match_id), "user_id": str(user_id)},
                )

            unread = self.db.scalars(
                select(Message).where(
                    Message.match_id == match_id,
                    Message.sender_id != user_id,
                    Message.read.is_(False),
                )
            ).all()
            for message in unread:
                message.read = True
            updated = len(unread)
            self.db.commit()

        except AppException:
            self.db.rollback()
            raise

        except Exception as e:
            self.db.rollback()
            logger.error(f"Error marking messages read: {e}", exc_info=True)
            raise

        return updated

    def get_unread_count(self, user_id: UUID) -> int:
        match_ids = [m.id for m in self.match_service.swipe_service.get_all_matches_for_user(user_id)]
        if not match_ids:
            return 0
        return self.db.scalar(
            select(func.count(Message.id)).where(
                Message.match_id.in_(match_ids),
                Message.sender_id != user_id,
                Message.read.is_(False),
            )
        ) or 0

    def get_matches_with_last_message(self, user_id: UUID) -> list[ConversationResponse]:
        """Chat list: each match with its latest message, most recent activity first"""
        if self.db.get(User, user_id) is None:
            raise NotFoundError(ERROR_USER_NOT_FOUND, "User not found", user_id=str(user_id))

        conversations = []
        for match in self.match_service.swipe_service.get_all_matches_for_user(user_id):
            other_user = self.db.get(User, match.other_user_id(user_id))
            if other_user is None:
                continue

            last_message = self._last_message(match)
            conversations.append(
                ConversationResponse(
                    match_id=match.id,
                    matched_at=match.matched_at,
                    other_user=ProfileResponse.from_user(other_user, self.photo_resolver),
                    last_message=(
                        MessageResponse.model_validate(last_message) if last_message else None
                    ),
                    unread_count=self._unread_in_match(match.id, user_id),
                )
            )

        conversations.sort(key=self._activity_time, reverse=True)
        return conversations

    def _last_message(self, match: Match) -> Optional[Message]:
        return self.db.scalars(
            select(Message)
            .where(Message.match_id == match.id)
            .order_by(Message.created_at.desc(), Message.id.desc())
            .limit(1)
        ).first()

    def _unread_in_match(self, match_id: UUID, user_id: UUID) -> int:
        return self.db.scalar(
            select(func.count(Message.id)).where(
                Message.match_id == match_id,
                Message.sender_id != user_id,
                Message.read.is_(False),
            )
        ) or 0

    @staticmethod
    def _activity_time(conversation: ConversationResponse) -> datetime:
        if conversation.last_message is not None:
            return as_utc(conversation.last_message.created_at)
        return as_utc(conversation.matched_at)
