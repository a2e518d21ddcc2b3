import asyncio
import uuid
from datetime import date

import pytest
from sqlalchemy import func, select

from matchmaker.core.exception import AppException, NotFoundError, ProviderError
from matchmaker.models import DailyPickSet, Match, Message, Swipe, User
from matchmaker.schemas.user import ProfileCreate, ProfileUpdate
from matchmaker.services.embedding_service import EmbeddingService
from matchmaker.services.message_service import MessageService
from matchmaker.services.swipe_service import SwipeService
from matchmaker.services.user_service import UserService
from matchmaker.utils.profile import build_profile_text
from tests.helpers import FakeAIProvider, man_seeking_woman, woman_seeking_man

TODAY = date(2026, 3, 10)


def count(db, model) -> int:
    return db.scalar(select(func.count()).select_from(model))


def profile_data(**overrides) -> ProfileCreate:
    payload = {
        "external_id": "ext_1",
        "name": "Sophia",
        "date_of_birth": date(1999, 3, 11),
        "gender": "woman",
        "bio": "Trail runner and amateur baker",
        "looking_for": ["man"],
        "age_range": {"min": 25, "max": 35},
        "interests": ["Running", "Baking", "Running"],
        "photos": ["photos/sophia.jpg"],
        "location": {"latitude": 37.78, "longitude": -122.41},
        "max_distance": 25,
    }
    payload.update(overrides)
    return ProfileCreate(**payload)


@pytest.fixture
def embedding_service(fake_ai, session_factory):
    return EmbeddingService(fake_ai, session_factory=session_factory)


@pytest.fixture
def service(db, embedding_service):
    return UserService(db, embedding_service)


class TestCreateProfile:
    def test_creates_user_with_embedding(self, service, fake_ai):
        user = asyncio.run(service.create_profile(profile_data(), today=TODAY))

        assert user.age == 26
        assert user.interests == ["Running", "Baking"]
        assert user.looking_for == ["man"]
        assert (user.age_min, user.age_max) == (25, 35)
        assert user.has_embedding
        assert fake_ai.embed_calls == [
            build_profile_text("Trail runner and amateur baker", ["Running", "Baking"])
        ]

    def test_embedding_text_format(self):
        assert build_profile_text("Hi", ["A", "B"]) == "Hi Interests: A, B"

    def test_provider_failure_creates_nothing(self, db, session_factory):
        failing = EmbeddingService(FakeAIProvider(fail_embed=True), session_factory=session_factory)
        service = UserService(db, failing)

        with pytest.raises(ProviderError) as exc_info:
            asyncio.run(service.create_profile(profile_data(), today=TODAY))

        assert exc_info.value.status_code == 502
        assert count(db, User) == 0

    def test_duplicate_external_id(self, service):
        asyncio.run(service.create_profile(profile_data(), today=TODAY))

        with pytest.raises(AppException) as exc_info:
            asyncio.run(service.create_profile(profile_data(name="Other"), today=TODAY))

        assert exc_info.value.status_code == 409

    def test_underage_date_of_birth_rejected(self):
        with pytest.raises(ValueError):
            profile_data(date_of_birth=date.today())

    def test_inverted_age_range_rejected(self):
        with pytest.raises(ValueError):
            profile_data(age_range={"min": 40, "max": 30})


class TestUpdateProfile:
    def test_bio_change_requests_reembed(self, service, make_user):
        user = woman_seeking_man(make_user)

        assert service.update_profile(user.id, ProfileUpdate(bio="New bio")) is True
        assert service.get_user(user.id).bio == "New bio"

    def test_other_fields_do_not_reembed(self, service, make_user):
        user = woman_seeking_man(make_user)

        needs_reembed = service.update_profile(
            user.id,
            ProfileUpdate(
                name="Renamed",
                age_range={"min": 30, "max": 40},
                location={"latitude": 40.0, "longitude": -74.0},
            ),
        )

        user = service.get_user(user.id)
        assert needs_reembed is False
        assert user.name == "Renamed"
        assert (user.age_min, user.age_max) == (30, 40)
        assert user.location.latitude == 40.0

    def test_location_can_be_cleared(self, service, make_user):
        user = woman_seeking_man(make_user, location=(37.0, -122.0))

        service.update_profile(user.id, ProfileUpdate(location=None))

        assert service.get_user(user.id).location is None

    @pytest.mark.parametrize("field", ["name", "gender", "bio", "looking_for", "date_of_birth"])
    def test_null_for_required_field_rejected(self, field):
        with pytest.raises(ValueError, match=field):
            ProfileUpdate(**{field: None})

    def test_null_max_distance_allowed(self):
        assert ProfileUpdate(max_distance=None).model_dump(exclude_unset=True) == {"max_distance": None}

    def test_unknown_user(self, service):
        with pytest.raises(NotFoundError):
            service.update_profile(uuid.uuid4(), ProfileUpdate(name="x"))


class TestRefreshEmbedding:
    def test_refresh_stores_new_vector(self, db, embedding_service, make_user, fake_ai):
        user = woman_seeking_man(make_user, bio="Loves jazz", interests=["Jazz"])

        assert asyncio.run(embedding_service.refresh_embedding(user.id)) is True

        db.expire_all()
        assert db.get(User, user.id).has_embedding
        assert fake_ai.embed_calls == ["Loves jazz Interests: Jazz"]

    def test_refresh_failure_keeps_old_embedding(self, db, session_factory, make_user):
        user = woman_seeking_man(make_user, embedding=[0.1] * 1536)
        failing = EmbeddingService(FakeAIProvider(fail_embed=True), session_factory=session_factory)

        assert asyncio.run(failing.refresh_embedding(user.id)) is False

        db.expire_all()
        assert db.get(User, user.id).embedding[0] == pytest.approx(0.1)

    def test_refresh_for_missing_user(self, embedding_service):
        assert asyncio.run(embedding_service.refresh_embedding(uuid.uuid4())) is False


class TestDeleteUser:
    def test_cascades_to_everything_owned(self, db, service, make_user, photo_resolver, clock):
        me = woman_seeking_man(make_user)
        partner = man_seeking_woman(make_user)
        bystander = man_seeking_woman(make_user)

        swipes = SwipeService(db)
        swipes.record_swipe(me.id, partner.id, "like")
        match_id = swipes.record_swipe(partner.id, me.id, "like").match_id
        swipes.record_swipe(bystander.id, partner.id, "reject")
        MessageService(db, photo_resolver, clock=clock).send_message(match_id, me.id, "hi")
        db.add(DailyPickSet(user_id=me.id, picks=[], generated_at=clock(), expires_at=clock()))
        db.commit()

        summary = service.delete_user(me.id)

        assert summary == {
            "user_id": str(me.id),
            "swipes_deleted": 2,
            "matches_deleted": 1,
            "messages_deleted": 1,
        }
        assert count(db, User) == 2
        assert count(db, Swipe) == 1
        assert count(db, Match) == 0
        assert count(db, Message) == 0
        assert count(db, DailyPickSet) == 0

    def test_unknown_user(self, service):
        with pytest.raises(NotFoundError):
            service.delete_user(uuid.uuid4())
