from enum import Enum


class Gender(str, Enum):
    WOMAN = "woman"
    MAN = "man"


class SwipeAction(str, Enum):
    LIKE = "like"
    REJECT = "reject"


class PickStatus(str, Enum):
    PENDING = "pending"
    LIKED = "liked"
    PASSED = "passed"


class PickAction(str, Enum):
    LIKE = "like"
    PASS = "pass"
