import os

# Settings are read at import time
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["LOG_JSON"] = "false"
os.environ["TIMEZONE"] = "UTC"

import itertools
from datetime import date, datetime, timezone
from typing import Optional

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from matchmaker.core.database import Base
from matchmaker.enumerations.user_enum import Gender
from matchmaker.models import User
from matchmaker.services.explanation_service import ExplanationGenerator
from matchmaker.services.photo_resolver import PhotoResolver
from tests.helpers import FakeAIProvider, FixedClock


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(bind=engine, autocommit=False, autoflush=False)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def clock():
    return FixedClock(datetime(2026, 3, 10, 15, 30, tzinfo=timezone.utc))


@pytest.fixture
def fake_ai():
    return FakeAIProvider()


@pytest.fixture
def explanation_generator(fake_ai):
    return ExplanationGenerator(fake_ai)


@pytest.fixture
def photo_resolver():
    return PhotoResolver("https://cdn.example.com/photos")


@pytest.fixture
def make_user(db):
    counter = itertools.count(1)

    def _make_user(
        name: Optional[str] = None,
        age: int = 28,
        gender: Gender | str = Gender.WOMAN,
        looking_for=("man",),
        age_min: int = 18,
        age_max: int = 99,
        interests=("Hiking", "Coffee"),
        photos=("photos/1.jpg",),
        location: Optional[tuple[float, float]] = None,
        max_distance: Optional[float] = None,
        embedding: Optional[list[float]] = None,
        bio: str = "Hello there",
        external_id: Optional[str] = None,
    ) -> User:
        n = next(counter)
        user = User(
            external_id=external_id or f"user_{n}",
            name=name or f"User {n}",
            date_of_birth=date(2000 - age + 28, 6, 15),
            age=age,
            gender=Gender(gender),
            bio=bio,
            looking_for=list(looking_for),
            age_min=age_min,
            age_max=age_max,
            interests=list(interests),
            photos=list(photos),
            latitude=location[0] if location else None,
            longitude=location[1] if location else None,
            max_distance=max_distance,
            embedding=embedding,
        )
        db.add(user)
        db.commit()
        return user

    return _make_user
