import logging
from typing import Callable, Iterable
from uuid import UUID

from sqlalchemy.orm import Session

from matchmaker.core.database import SessionLocal
from matchmaker.core.exception import AppException
from matchmaker.models.user import User
from matchmaker.services.ai_provider import AIProvider
from matchmaker.utils.profile import build_profile_text

logger = logging.getLogger(__name__)


class EmbeddingService:
    """Builds profile embeddings and refreshes them after profile edits"""

    def __init__(
        self,
        ai_provider: AIProvider,
        session_factory: Callable[[], Session] = SessionLocal,
    ):
        self.ai_provider = ai_provider
        self.session_factory = session_factory

    async def embed_profile(self, bio: str, interests: Iterable[str]) -> list[float]:
        """Raises ProviderError if the embedding call fails"""
        return await self.ai_provider.embed(build_profile_text(bio, interests))

    async def refresh_embedding(self, user_id: UUID) -> bool:
        """
        Regenerate a user's embedding from their current bio and interests

        Runs detached from the request that changed the profile, so it opens
        its own session. Failures are logged and leave the previous embedding
        in place until the next edit.

        Returns:
            True if a new embedding was stored
        """
        db = self.session_factory()
        try:
            user = db.get(User, user_id)
            if user is None:
                logger.warning(
                    "Skipping embedding refresh for missing user",
                    extra={"user_id": str(user_id)},
                )
                return False

            embedding = await self.embed_profile(user.bio or "", user.interests or [])

            user.embedding = embedding
            db.commit()

            logger.info(
                f"Embedding refreshed for user {user_id}",
                extra={"user_id": str(user_id)},
            )
            return True

        except AppException as e:
            db.rollback()
            logger.warning(
                f"Embedding refresh failed for user {user_id}: {e}",
                extra={"user_id": str(user_id), "error_code": e.error_code},
            )
            return False

        except Exception as e:
            db.rollback()
            logger.error(f"Error refreshing embedding: {e}", exc_info=True)
            raise

        finally:
            db.close()
