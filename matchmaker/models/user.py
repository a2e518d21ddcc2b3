import uuid
from dataclasses import dataclass
from pgvector.sqlalchemy import Vector  # type: ignore
from sqlalchemy import (
    JSON,
    CheckConstraint,
    Column,
    Date,
    DateTime,
    Enum,
    Float,
    Index,
    Integer,
    String,
    Text,
    Uuid,
)
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.sql import func

from matchmaker.core.config import settings
from matchmaker.core.database import Base
from matchmaker.enumerations.user_enum import Gender

JSONList = JSON().with_variant(JSONB(), "postgresql")


@dataclass(frozen=True)
class Location:
    latitude: float
    longitude: float


class User(Base):
    __tablename__ = "users"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    external_id = Column(String(255), unique=True, nullable=False)

    name = Column(String(100), nullable=False)
    date_of_birth = Column(Date, nullable=True)
    age = Column(Integer, nullable=False)
    gender = Column(
        Enum(Gender, name="gender", values_callable=lambda e: [m.value for m in e]),
        nullable=False,
    )
    bio = Column(Text, nullable=False, default="")

    looking_for = Column(JSONList, nullable=False, default=list)
    age_min = Column(Integer, nullable=False, default=18)
    age_max = Column(Integer, nullable=False, default=99)
    interests = Column(JSONList, nullable=False, default=list)
    photos = Column(JSONList, nullable=False, default=list)

    latitude = Column(Float, nullable=True)
    longitude = Column(Float, nullable=True)
    max_distance = Column(Float, nullable=True)  # miles, NULL = unlimited

    embedding = Column(Vector(settings.EMBEDDING_DIM), nullable=True)  # type: ignore

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    __table_args__ = (
        CheckConstraint("age_min <= age_max", name="check_age_range"),
        CheckConstraint(
            "(latitude IS NULL) = (longitude IS NULL)", name="check_location_pair"
        ),
        Index("idx_users_gender_age", "gender", "age"),
    )

    @property
    def location(self) -> Location | None:
        if self.latitude is None or self.longitude is None:
            return None
        return Location(latitude=self.latitude, longitude=self.longitude)

    @property
    def has_embedding(self) -> bool:
        return self.embedding is not None and len(self.embedding) > 0

    def __repr__(self):
        return f"<User(id={self.id}, name={self.name}, gender={self.gender}, age={self.age})>"
