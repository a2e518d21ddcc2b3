import math
from datetime import date, datetime
from typing import TYPE_CHECKING, Annotated, ClassVar, Optional
from uuid import UUID
from pydantic import AfterValidator, BaseModel, Field, field_validator, model_validator

from matchmaker.enumerations.user_enum import Gender
from matchmaker.utils.profile import MAX_AGE, MIN_AGE, calculate_age

if TYPE_CHECKING:
    from matchmaker.models.user import User
    from matchmaker.services.photo_resolver import PhotoResolver


class LocationSchema(BaseModel):
    latitude: float = Field(..., ge=-90, le=90)
    longitude: float = Field(..., ge=-180, le=180)


class AgeRange(BaseModel):
    min: int = Field(MIN_AGE, ge=MIN_AGE, le=MAX_AGE)
    max: int = Field(MAX_AGE, ge=MIN_AGE, le=MAX_AGE)

    @model_validator(mode="after")
    def check_order(self) -> "AgeRange":
        if self.min > self.max:
            raise ValueError("ageRange.min must be <= ageRange.max")
        return self


def _check_date_of_birth(value: date) -> date:
    age = calculate_age(value)
    if age < MIN_AGE or age > MAX_AGE:
        raise ValueError(f"Age must be between {MIN_AGE} and {MAX_AGE}")
    return value


DateOfBirth = Annotated[date, AfterValidator(_check_date_of_birth)]


def _dedupe(values: list[str]) -> list[str]:
    seen = set()
    result = []
    for value in values:
        value = value.strip()
        if value and value not in seen:
            seen.add(value)
            result.append(value)
    return result


class ProfileCreate(BaseModel):
    """Schema for creating a profile"""

    external_id: str = Field(..., min_length=1, max_length=255)
    name: str = Field(..., min_length=1, max_length=100)
    date_of_birth: DateOfBirth
    gender: Gender
    bio: str = Field("", max_length=2000)
    looking_for: list[Gender] = Field(..., min_length=1)
    age_range: AgeRange = Field(default_factory=AgeRange)
    interests: list[str] = Field(default_factory=list)
    photos: list[str] = Field(default_factory=list)
    location: Optional[LocationSchema] = None
    max_distance: Optional[float] = Field(None, gt=0, description="Miles; omit for unlimited")

    @field_validator("interests")
    @classmethod
    def normalize_interests(cls, v: list[str]) -> list[str]:
        return _dedupe(v)


class ProfileUpdate(BaseModel):
    """Schema for updating a profile; omitted fields stay unchanged"""

    name: Optional[str] = Field(None, min_length=1, max_length=100)
    date_of_birth: Optional[DateOfBirth] = None
    gender: Optional[Gender] = None
    bio: Optional[str] = Field(None, max_length=2000)
    looking_for: Optional[list[Gender]] = Field(None, min_length=1)
    age_range: Optional[AgeRange] = None
    interests: Optional[list[str]] = None
    photos: Optional[list[str]] = None
    location: Optional[LocationSchema] = None
    max_distance: Optional[float] = Field(None, gt=0)

    # Only these may be sent as null, to clear them
    NULLABLE_FIELDS: ClassVar[frozenset[str]] = frozenset({"location", "max_distance"})

    @field_validator("interests")
    @classmethod
    def normalize_interests(cls, v: Optional[list[str]]) -> Optional[list[str]]:
        return _dedupe(v) if v is not None else v

    @model_validator(mode="after")
    def reject_null_required_fields(self) -> "ProfileUpdate":
        nulls = sorted(
            field
            for field in self.model_fields_set - self.NULLABLE_FIELDS
            if getattr(self, field) is None
        )
        if nulls:
            raise ValueError(f"Fields cannot be null: {', '.join(nulls)}")
        return self


class ProfileResponse(BaseModel):
    """Profile as shown to other users, photos resolved to URLs"""

    id: UUID
    name: str
    age: int
    gender: Gender
    bio: str
    looking_for: list[Gender]
    age_range: AgeRange
    interests: list[str]
    photos: list[str]
    location: Optional[LocationSchema] = None
    max_distance: Optional[float] = None
    distance: Optional[float] = Field(None, description="Miles from the viewer, null if unknown")
    has_embedding: bool = False
    created_at: Optional[datetime] = None

    @classmethod
    def from_user(
        cls,
        user: "User",
        photo_resolver: "PhotoResolver",
        distance: Optional[float] = None,
    ) -> "ProfileResponse":
        location = user.location
        return cls(
            id=user.id,
            name=user.name,
            age=user.age,
            gender=user.gender,
            bio=user.bio or "",
            looking_for=user.looking_for or [],
            age_range=AgeRange.model_construct(min=user.age_min, max=user.age_max),
            interests=user.interests or [],
            photos=photo_resolver.resolve_all(user.photos),
            location=(
                LocationSchema(latitude=location.latitude, longitude=location.longitude)
                if location
                else None
            ),
            max_distance=user.max_distance,
            distance=None if distance is None or math.isinf(distance) else round(distance, 2),
            has_embedding=user.has_embedding,
            created_at=user.created_at,
        )


class ProfileCreatedResponse(BaseModel):
    id: UUID
    message: str = "Profile created successfully"


class ProfileUpdatedResponse(BaseModel):
    id: UUID
    embedding_refresh_scheduled: bool
    message: str = "Profile updated successfully"
