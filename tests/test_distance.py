import math

import pytest

from matchmaker.models.user import Location
from matchmaker.utils.distance import (
    EARTH_RADIUS_MILES,
    distance_between,
    distance_km,
    distance_miles,
    is_within_distance,
)

SAN_FRANCISCO = Location(37.7749, -122.4194)
LOS_ANGELES = Location(34.0522, -118.2437)


def north_of(origin: Location, miles: float) -> Location:
    return Location(origin.latitude + math.degrees(miles / EARTH_RADIUS_MILES), origin.longitude)


class TestDistance:
    def test_same_point_is_zero(self):
        assert distance_miles(SAN_FRANCISCO, SAN_FRANCISCO) == pytest.approx(0.0)

    def test_san_francisco_to_los_angeles(self):
        assert distance_miles(SAN_FRANCISCO, LOS_ANGELES) == pytest.approx(347, abs=3)
        assert distance_km(SAN_FRANCISCO, LOS_ANGELES) == pytest.approx(559, abs=5)

    def test_is_symmetric(self):
        assert distance_miles(SAN_FRANCISCO, LOS_ANGELES) == pytest.approx(
            distance_miles(LOS_ANGELES, SAN_FRANCISCO)
        )

    def test_meridian_offset(self):
        assert distance_miles(SAN_FRANCISCO, north_of(SAN_FRANCISCO, 50)) == pytest.approx(50, abs=0.01)

    def test_unknown_location_is_none_not_zero(self):
        assert distance_between(SAN_FRANCISCO, None) is None
        assert distance_between(None, SAN_FRANCISCO) is None
        assert distance_between(None, None) is None


class TestIsWithinDistance:
    @pytest.mark.parametrize("max_distance", [None, 0])
    def test_no_limit_never_excludes(self, max_distance):
        assert is_within_distance(SAN_FRANCISCO, LOS_ANGELES, max_distance)

    def test_missing_location_never_excludes(self):
        assert is_within_distance(None, LOS_ANGELES, 10)
        assert is_within_distance(SAN_FRANCISCO, None, 10)

    def test_limit_is_inclusive(self):
        target = north_of(SAN_FRANCISCO, 10)
        assert is_within_distance(SAN_FRANCISCO, target, 10.001)
        assert not is_within_distance(SAN_FRANCISCO, target, 9.99)

    def test_far_target_excluded(self):
        assert not is_within_distance(SAN_FRANCISCO, LOS_ANGELES, 100)
