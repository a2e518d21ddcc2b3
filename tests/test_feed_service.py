import math
import uuid

import pytest

from matchmaker.core.exception import ValidationError
from matchmaker.services.feed_service import FeedService
from matchmaker.services.swipe_service import SwipeService
from tests.helpers import SF, man_seeking_woman, woman_seeking_man


def north_of(origin, miles):
    return (origin[0] + miles / 69.05, origin[1])


@pytest.fixture
def feed(db, photo_resolver):
    return FeedService(db, photo_resolver, scan_chunk=2)


class TestSelectCandidates:
    def test_orders_by_distance(self, db, make_user, feed):
        viewer = woman_seeking_man(make_user, location=SF)
        far = man_seeking_woman(make_user, name="Far", location=north_of(SF, 30))
        near = man_seeking_woman(make_user, name="Near", location=north_of(SF, 2))
        mid = man_seeking_woman(make_user, name="Mid", location=north_of(SF, 10))

        candidates = feed.select_candidates(viewer.id, batch_size=10)

        assert [c.user.id for c in candidates] == [near.id, mid.id, far.id]
        assert candidates[0].distance == pytest.approx(2, abs=0.05)

    def test_excludes_self_swiped_and_incompatible(self, db, make_user, feed):
        viewer = woman_seeking_man(make_user, location=SF)
        liked = man_seeking_woman(make_user, location=SF)
        rejected = man_seeking_woman(make_user, location=SF)
        wrong_gender = make_user(gender="woman", looking_for=["woman"], location=SF)
        too_old = man_seeking_woman(make_user, age=70, location=SF)
        open_candidate = man_seeking_woman(make_user, location=SF)
        viewer.age_max = 60
        db.commit()

        swipes = SwipeService(db)
        swipes.record_swipe(viewer.id, liked.id, "like")
        swipes.record_swipe(viewer.id, rejected.id, "reject")

        ids = [c.user.id for c in feed.select_candidates(viewer.id, batch_size=10)]

        assert ids == [open_candidate.id]
        assert viewer.id not in ids
        assert wrong_gender.id not in ids
        assert too_old.id not in ids

    def test_candidate_swipe_on_viewer_does_not_exclude(self, db, make_user, feed):
        viewer = woman_seeking_man(make_user, location=SF)
        admirer = man_seeking_woman(make_user, location=SF)
        SwipeService(db).record_swipe(admirer.id, viewer.id, "like")

        ids = [c.user.id for c in feed.select_candidates(viewer.id, batch_size=10)]

        assert ids == [admirer.id]

    def test_respects_max_distance_of_either_side(self, db, make_user, feed):
        viewer = woman_seeking_man(make_user, location=SF, max_distance=10)
        close = man_seeking_woman(make_user, location=north_of(SF, 5))
        man_seeking_woman(make_user, location=north_of(SF, 50))
        picky = man_seeking_woman(make_user, location=north_of(SF, 8), max_distance=5)

        ids = [c.user.id for c in feed.select_candidates(viewer.id, batch_size=10)]

        assert ids == [close.id]
        assert picky.id not in ids

    def test_unknown_distance_sorts_last(self, db, make_user, feed):
        viewer = woman_seeking_man(make_user, location=SF)
        nowhere = man_seeking_woman(make_user, name="Nowhere")
        far = man_seeking_woman(make_user, name="Far", location=north_of(SF, 80))

        candidates = feed.select_candidates(viewer.id, batch_size=10)

        assert [c.user.id for c in candidates] == [far.id, nowhere.id]
        assert math.isinf(candidates[-1].distance)

    def test_batch_size_caps_result(self, db, make_user, feed):
        viewer = woman_seeking_man(make_user, location=SF)
        for miles in range(1, 13):
            man_seeking_woman(make_user, name=f"M{miles}", location=north_of(SF, miles))

        candidates = feed.select_candidates(viewer.id, batch_size=3)

        assert [c.user.name for c in candidates] == ["M1", "M2", "M3"]

    def test_closest_survive_trimming(self, db, make_user, feed):
        viewer = woman_seeking_man(make_user, location=SF)
        for miles in range(20, 0, -1):
            man_seeking_woman(make_user, name=f"M{miles}", location=north_of(SF, miles))

        candidates = feed.select_candidates(viewer.id, batch_size=2)

        assert [c.user.name for c in candidates] == ["M1", "M2"]

    def test_ties_keep_scan_order(self, db, make_user, feed):
        viewer = woman_seeking_man(make_user)
        names = [f"Tie{i}" for i in range(6)]
        for name in names:
            man_seeking_woman(make_user, name=name)

        candidates = feed.select_candidates(viewer.id, batch_size=6)

        assert [c.user.name for c in candidates] == names

    def test_missing_viewer_returns_empty(self, make_user, feed):
        man_seeking_woman(make_user)
        assert feed.select_candidates(uuid.uuid4(), batch_size=5) == []

    def test_invalid_batch_size(self, make_user, feed):
        viewer = woman_seeking_man(make_user)
        with pytest.raises(ValidationError):
            feed.select_candidates(viewer.id, batch_size=0)


class TestGetSwipeFeed:
    def test_profiles_have_resolved_photos_and_distance(self, make_user, feed):
        viewer = woman_seeking_man(make_user, location=SF)
        man_seeking_woman(
            make_user,
            location=north_of(SF, 3),
            photos=["photos/a.jpg", "https://img.example.com/b.jpg"],
        )
        man_seeking_woman(make_user)

        profiles = feed.get_swipe_feed(viewer.id, batch_size=5)

        assert profiles[0].photos == [
            "https://cdn.example.com/photos/photos/a.jpg",
            "https://img.example.com/b.jpg",
        ]
        assert profiles[0].distance == pytest.approx(3, abs=0.05)
        assert profiles[1].distance is None
