import uuid
from sqlalchemy import (
    CheckConstraint,
    Column,
    DateTime,
    Enum,
    ForeignKey,
    Index,
    UniqueConstraint,
    Uuid,
)
from sqlalchemy.sql import func

from matchmaker.core.database import Base
from matchmaker.enumerations.user_enum import SwipeAction


class Swipe(Base):
    __tablename__ = "swipes"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)

    swiper_id = Column(
        Uuid(as_uuid=True), ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )
    swiped_id = Column(
        Uuid(as_uuid=True), ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )
    action = Column(
        Enum(SwipeAction, name="swipe_action", values_callable=lambda e: [m.value for m in e]),
        nullable=False,
    )

    created_at = Column(DateTime(timezone=True), server_default=func.now())

    __table_args__ = (
        UniqueConstraint("swiper_id", "swiped_id", name="unique_swiper_swiped"),
        CheckConstraint("swiper_id != swiped_id", name="check_no_self_swipe"),
        Index("idx_swipes_swiper", "swiper_id"),
        Index("idx_swipes_swiped", "swiped_id"),
    )

    def __repr__(self):
        return f"<Swipe(swiper={self.swiper_id}, swiped={self.swiped_id}, action={self.action})>"
