from matchmaker.models.user import User
from matchmaker.models.swipe import Swipe
from matchmaker.models.match import Match
from matchmaker.models.message import Message
from matchmaker.models.daily_pick import DailyPickSet

__all__ = ["User", "Swipe", "Match", "Message", "DailyPickSet"]
