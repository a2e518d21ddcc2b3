import uuid
from sqlalchemy import JSON, Column, DateTime, ForeignKey, Uuid
from sqlalchemy.dialects.postgresql import JSONB

from matchmaker.core.database import Base
from matchmaker.enumerations.user_enum import PickStatus


class DailyPickSet(Base):
    """Cached AI-curated picks for one user, replaced on regeneration"""

    __tablename__ = "daily_pick_sets"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)

    user_id = Column(
        Uuid(as_uuid=True),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        unique=True,
    )

    # [{picked_user_id, score, ai_explanation, shared_interests, status}]
    picks = Column(JSON().with_variant(JSONB(), "postgresql"), nullable=False, default=list)

    generated_at = Column(DateTime(timezone=True), nullable=False)
    expires_at = Column(DateTime(timezone=True), nullable=False)

    @property
    def all_reviewed(self) -> bool:
        return bool(self.picks) and all(
            pick["status"] != PickStatus.PENDING.value for pick in self.picks
        )

    def __repr__(self):
        return f"<DailyPickSet(user={self.user_id}, picks={len(self.picks or [])}, expires={self.expires_at})>"
