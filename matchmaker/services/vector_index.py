import heapq
import logging
from typing import Protocol, Sequence
from uuid import UUID

import numpy as np
from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from matchmaker.constants.error_constant import ERROR_EXT_VECTOR_SEARCH_FAILED
from matchmaker.core.config import settings
from matchmaker.core.database import is_postgres
from matchmaker.core.exception import ProviderError
from matchmaker.models.user import User

logger = logging.getLogger(__name__)


class VectorIndex(Protocol):
    """Nearest-neighbour search over profile embeddings keyed by user id"""

    def search(self, query_vector: Sequence[float], limit: int) -> list[tuple[UUID, float]]: ...


class PgVectorIndex:
    """pgvector cosine search; score = 1 - cosine distance"""

    def __init__(self, db: Session):
        self.db = db

    def search(self, query_vector: Sequence[float], limit: int) -> list[tuple[UUID, float]]:
        distance = User.embedding.cosine_distance(list(query_vector))
        stmt = (
            select(User.id, distance.label("distance"))
            .where(User.embedding.is_not(None))
            .order_by(distance)
            .limit(limit)
        )
        try:
            rows = self.db.execute(stmt).all()
        except SQLAlchemyError as e:
            logger.error(f"Vector search failed: {e}", exc_info=True)
            raise ProviderError(
                "Vector search failed",
                error_code=ERROR_EXT_VECTOR_SEARCH_FAILED,
                details={"error_type": type(e).__name__},
            ) from e

        return [(row.id, 1.0 - float(row.distance)) for row in rows]


class InMemoryVectorIndex:
    """
    Brute-force cosine search with numpy.

    Used where pgvector is unavailable (SQLite development databases, tests).
    Streams embeddings so memory stays bounded by `limit`.
    """

    def __init__(self, db: Session, chunk_size: int = 200):
        self.db = db
        self.chunk_size = chunk_size

    def search(self, query_vector: Sequence[float], limit: int) -> list[tuple[UUID, float]]:
        if limit <= 0:
            return []

        query = np.asarray(query_vector, dtype=np.float32)
        query = query / (np.linalg.norm(query) + 1e-8)

        stmt = (
            select(User.id, User.embedding)
            .where(User.embedding.is_not(None))
            .execution_options(yield_per=self.chunk_size)
        )

        scored = []
        try:
            for order, row in enumerate(self.db.execute(stmt)):
                candidate = np.asarray(row.embedding, dtype=np.float32)
                if candidate.shape != query.shape:
                    continue
                candidate = candidate / (np.linalg.norm(candidate) + 1e-8)
                score = float(np.dot(query, candidate))

                # (score, -order) keeps scan order among equal scores
                item = (score, -order, row.id)
                if len(scored) < limit:
                    heapq.heappush(scored, item)
                elif item > scored[0]:
                    heapq.heapreplace(scored, item)
        except SQLAlchemyError as e:
            logger.error(f"Vector search failed: {e}", exc_info=True)
            raise ProviderError(
                "Vector search failed",
                error_code=ERROR_EXT_VECTOR_SEARCH_FAILED,
                details={"error_type": type(e).__name__},
            ) from e

        ranked = sorted(scored, reverse=True)
        return [(user_id, score) for score, _, user_id in ranked]


def build_vector_index(db: Session) -> VectorIndex:
    if is_postgres(db):
        return PgVectorIndex(db)
    return InMemoryVectorIndex(db, chunk_size=settings.FEED_SCAN_CHUNK)
