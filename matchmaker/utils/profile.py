from datetime import date, datetime, time, timedelta, timezone
from typing import Iterable, Optional
from zoneinfo import ZoneInfo

MIN_AGE = 18
MAX_AGE = 99


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def as_utc(value: datetime) -> datetime:
    """Normalize a stored timestamp; naive values are treated as UTC"""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def calculate_age(date_of_birth: date, today: Optional[date] = None) -> int:
    today = today or date.today()
    age = today.year - date_of_birth.year
    if (today.month, today.day) < (date_of_birth.month, date_of_birth.day):
        age -= 1
    return age


def next_local_midnight(now: datetime, tz_name: str) -> datetime:
    """
    First local midnight strictly after `now`, returned in UTC.

    At exactly midnight this is the following day's midnight.
    """
    tz = ZoneInfo(tz_name)
    local_now = as_utc(now).astimezone(tz)
    midnight = datetime.combine(local_now.date() + timedelta(days=1), time.min, tzinfo=tz)
    return midnight.astimezone(timezone.utc)


def build_profile_text(bio: str, interests: Iterable[str]) -> str:
    """Text fed to the embedding model for a profile"""
    return f"{bio} Interests: {', '.join(interests)}"


def shared_interests(viewer_interests: Iterable[str], other_interests: Iterable[str]) -> list[str]:
    """Interests both users list, in the viewer's order"""
    others = set(other_interests)
    seen: set[str] = set()
    shared = []
    for interest in viewer_interests:
        if interest in others and interest not in seen:
            shared.append(interest)
            seen.add(interest)
    return shared
