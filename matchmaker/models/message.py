import uuid
from sqlalchemy import Boolean, Column, DateTime, ForeignKey, Index, Text, Uuid
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from matchmaker.core.database import Base


class Message(Base):
    __tablename__ = "messages"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)

    match_id = Column(
        Uuid(as_uuid=True), ForeignKey("matches.id", ondelete="CASCADE"), nullable=False
    )
    sender_id = Column(
        Uuid(as_uuid=True), ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )
    content = Column(Text, nullable=False)
    read = Column(Boolean, nullable=False, default=False)

    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())

    match = relationship("Match", back_populates="messages")

    __table_args__ = (
        Index("idx_messages_match_time", "match_id", "created_at"),
    )

    def __repr__(self):
        return f"<Message(match={self.match_id}, sender={self.sender_id}, read={self.read})>"
