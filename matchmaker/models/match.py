import uuid
from sqlalchemy import Column, DateTime, ForeignKey, Index, String, Text, Uuid
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from matchmaker.core.database import Base


def make_pair_key(user_a_id: uuid.UUID, user_b_id: uuid.UUID) -> str:
    """Order-independent key for an unordered pair of users"""
    first, second = sorted((str(user_a_id), str(user_b_id)))
    return f"{first}:{second}"


class Match(Base):
    __tablename__ = "matches"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)

    # user1 is the swiper whose like completed the match
    user1_id = Column(
        Uuid(as_uuid=True), ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )
    user2_id = Column(
        Uuid(as_uuid=True), ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )
    pair_key = Column(String(80), nullable=False, unique=True)

    ai_explanation = Column(Text, nullable=True)
    matched_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())

    messages = relationship(
        "Message",
        back_populates="match",
        cascade="all, delete-orphan",
        order_by="Message.created_at",
    )

    __table_args__ = (
        Index("idx_matches_user1", "user1_id"),
        Index("idx_matches_user2", "user2_id"),
    )

    def other_user_id(self, user_id: uuid.UUID) -> uuid.UUID:
        return self.user2_id if self.user1_id == user_id else self.user1_id

    def involves(self, user_id: uuid.UUID) -> bool:
        return user_id in (self.user1_id, self.user2_id)

    def __repr__(self):
        return f"<Match(id={self.id}, user1={self.user1_id}, user2={self.user2_id})>"
