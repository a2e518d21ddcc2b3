import threading
import uuid
from concurrent.futures import ThreadPoolExecutor

import pytest
from sqlalchemy import create_engine, func, select
from sqlalchemy.orm import sessionmaker

from matchmaker.core.database import Base
from matchmaker.core.exception import DuplicateSwipeError, NotFoundError, ValidationError
from matchmaker.enumerations.user_enum import Gender, SwipeAction
from matchmaker.models import Match, Swipe, User
from matchmaker.services.swipe_service import SwipeService
from tests.helpers import man_seeking_woman, woman_seeking_man


def count(db, model) -> int:
    return db.scalar(select(func.count()).select_from(model))


class TestRecordSwipe:
    def test_straightforward_match(self, db, make_user, clock):
        a = woman_seeking_man(make_user, name="A")
        b = man_seeking_woman(make_user, name="B")
        service = SwipeService(db, clock=clock)

        first = service.record_swipe(a.id, b.id, SwipeAction.LIKE)
        assert first.matched is False
        assert first.match_id is None
        assert first.created is False

        second = service.record_swipe(b.id, a.id, SwipeAction.LIKE)
        assert second.matched is True
        assert second.match_id is not None

        match = service.find_match(a.id, b.id)
        assert match.id == second.match_id
        assert service.find_match(b.id, a.id).id == second.match_id
        assert match.user1_id == b.id
        assert count(db, Match) == 1

    def test_like_after_reject_does_not_match(self, db, make_user):
        a = woman_seeking_man(make_user)
        b = man_seeking_woman(make_user)
        service = SwipeService(db)

        service.record_swipe(a.id, b.id, "reject")
        result = service.record_swipe(b.id, a.id, "like")

        assert result.matched is False
        assert count(db, Match) == 0

    def test_strict_duplicate_raises(self, db, make_user):
        a = woman_seeking_man(make_user)
        b = man_seeking_woman(make_user)
        service = SwipeService(db)

        service.record_swipe(a.id, b.id, SwipeAction.LIKE)
        with pytest.raises(DuplicateSwipeError) as exc_info:
            service.record_swipe(a.id, b.id, SwipeAction.REJECT)

        assert exc_info.value.status_code == 409
        assert count(db, Swipe) == 1
        assert service.get_swipe(a.id, b.id).action == SwipeAction.LIKE

    def test_lenient_duplicate_returns_current_state(self, db, make_user):
        a = woman_seeking_man(make_user)
        b = man_seeking_woman(make_user)
        service = SwipeService(db)

        service.record_swipe(a.id, b.id, SwipeAction.LIKE)
        matched = service.record_swipe(b.id, a.id, SwipeAction.LIKE)

        again = service.record_swipe_lenient(b.id, a.id, SwipeAction.LIKE)
        assert matched.created is True
        assert (again.matched, again.match_id) == (True, matched.match_id)
        assert again.created is False
        assert count(db, Swipe) == 2
        assert count(db, Match) == 1

    def test_lenient_duplicate_without_match(self, db, make_user):
        a = woman_seeking_man(make_user)
        b = man_seeking_woman(make_user)
        service = SwipeService(db)

        service.record_swipe_lenient(a.id, b.id, SwipeAction.REJECT)
        result = service.record_swipe_lenient(a.id, b.id, SwipeAction.LIKE)

        assert result.matched is False
        assert service.get_swipe(a.id, b.id).action == SwipeAction.REJECT

    def test_self_swipe_rejected(self, db, make_user):
        a = woman_seeking_man(make_user)
        with pytest.raises(ValidationError):
            SwipeService(db).record_swipe(a.id, a.id, SwipeAction.LIKE)

    def test_unknown_user_is_not_found(self, db, make_user):
        a = woman_seeking_man(make_user)
        with pytest.raises(NotFoundError):
            SwipeService(db).record_swipe(a.id, uuid.uuid4(), SwipeAction.LIKE)
        assert count(db, Swipe) == 0


class TestLedgerQueries:
    def test_swiped_ids(self, db, make_user):
        a = woman_seeking_man(make_user)
        b = man_seeking_woman(make_user)
        c = man_seeking_woman(make_user)
        service = SwipeService(db)

        service.record_swipe(a.id, b.id, "like")
        service.record_swipe(a.id, c.id, "reject")
        service.record_swipe(b.id, c.id, "reject")

        assert service.get_swiped_ids(a.id) == {b.id, c.id}
        assert service.get_swiped_ids(c.id) == set()

    def test_all_matches_for_user_covers_both_sides(self, db, make_user):
        a = woman_seeking_man(make_user, looking_for=["man", "woman"])
        b = man_seeking_woman(make_user)
        c = make_user(gender=Gender.WOMAN, looking_for=["woman"])
        service = SwipeService(db)

        service.record_swipe(a.id, b.id, "like")
        service.record_swipe(b.id, a.id, "like")  # a is user2
        service.record_swipe(c.id, a.id, "like")
        service.record_swipe(a.id, c.id, "like")  # a is user1

        matches = service.get_all_matches_for_user(a.id)
        assert len(matches) == 2
        assert {m.other_user_id(a.id) for m in matches} == {b.id, c.id}

    def test_likes_received_excludes_answered(self, db, make_user):
        me = woman_seeking_man(make_user)
        liker = man_seeking_woman(make_user, name="Liker")
        answered = man_seeking_woman(make_user, name="Answered")
        rejecter = man_seeking_woman(make_user, name="Rejecter")
        service = SwipeService(db)

        service.record_swipe(liker.id, me.id, "like")
        service.record_swipe(answered.id, me.id, "like")
        service.record_swipe(rejecter.id, me.id, "reject")
        service.record_swipe(me.id, answered.id, "reject")

        assert [u.name for u in service.get_likes_received(me.id)] == ["Liker"]


def test_concurrent_mutual_likes_create_exactly_one_match(tmp_path):
    engine = create_engine(
        f"sqlite:///{tmp_path / 'swipes.db'}",
        connect_args={"check_same_thread": False, "timeout": 30},
    )
    Base.metadata.create_all(bind=engine)
    Session = sessionmaker(bind=engine, autoflush=False)

    with Session() as setup:
        a = User(external_id="a", name="A", age=30, gender=Gender.WOMAN, looking_for=["man"])
        b = User(external_id="b", name="B", age=30, gender=Gender.MAN, looking_for=["woman"])
        setup.add_all([a, b])
        setup.commit()
        a_id, b_id = a.id, b.id

    barrier = threading.Barrier(2)

    def like(swiper_id, swiped_id):
        with Session() as session:
            barrier.wait()
            return SwipeService(session).record_swipe(swiper_id, swiped_id, SwipeAction.LIKE)

    try:
        for _ in range(5):
            with ThreadPoolExecutor(max_workers=2) as pool:
                futures = [pool.submit(like, a_id, b_id), pool.submit(like, b_id, a_id)]
                results = [f.result() for f in futures]

            with Session() as check:
                match_ids = check.scalars(select(Match.id)).all()
                assert len(match_ids) == 1
                assert sum(r.matched for r in results) == 1
                assert sum(r.created for r in results) == 1
                assert next(r.match_id for r in results if r.matched) == match_ids[0]

                check.execute(Swipe.__table__.delete())
                check.execute(Match.__table__.delete())
                check.commit()
    finally:
        engine.dispose()
