from typing import Iterable

from matchmaker.enumerations.user_enum import Gender
from matchmaker.models.user import User
from matchmaker.utils.distance import is_within_distance


def _accepted_genders(looking_for: Iterable[str]) -> set[Gender]:
    return {Gender(value) for value in looking_for or []}


def _accepts(viewer: User, target: User) -> bool:
    if Gender(target.gender) not in _accepted_genders(viewer.looking_for):
        return False

    if target.age < viewer.age_min or target.age > viewer.age_max:
        return False

    return is_within_distance(viewer.location, target.location, viewer.max_distance)


def are_compatible(a: User, b: User) -> bool:
    """
    Check if two users may be shown to each other.

    Both users must accept each other's gender, fall within each other's
    age range and be within each other's max distance. Pure and symmetric:
    are_compatible(a, b) == are_compatible(b, a).
    """
    return _accepts(a, b) and _accepts(b, a)
