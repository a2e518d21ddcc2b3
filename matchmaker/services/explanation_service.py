import logging

from matchmaker.core.exception import ProviderError
from matchmaker.models.user import User
from matchmaker.services.ai_provider import AIProvider

logger = logging.getLogger(__name__)

PICK_FALLBACK = "You two seem like a great match!"
MATCH_FALLBACK = "You share some great things in common. Say hi and find out more!"


def _profile_block(label: str, user: User) -> str:
    return (
        f"{label}:\n"
        f"Name: {user.name}\n"
        f"Bio: {user.bio}\n"
        f"Interests: {', '.join(user.interests or [])}"
    )


class ExplanationGenerator:
    """Best-effort compatibility blurbs; never raises on provider failure"""

    def __init__(self, ai_provider: AIProvider):
        self.ai_provider = ai_provider

    async def explain_pick(self, viewer: User, candidate: User) -> str:
        """One short sentence (max ~20 words) for a daily pick"""
        prompt = (
            "You are a friendly matchmaker for a dating app. Given these two profiles, "
            "write ONE short, warm sentence (max 20 words) explaining why they might be "
            "compatible. Focus on their shared interests or complementary traits. "
            "Be specific and encouraging.\n\n"
            f"{_profile_block('User 1', viewer)}\n\n"
            f"{_profile_block('User 2', candidate)}\n\n"
            "Write a brief match insight:"
        )
        return await self._complete_or_fallback(
            prompt, max_tokens=60, temperature=0.8, fallback=PICK_FALLBACK
        )

    async def explain_match(self, user1: User, user2: User) -> str:
        """Two or three sentences on why a matched pair fits"""
        prompt = (
            "You are a friendly matchmaker. Given these two dating profiles, explain in "
            "2-3 warm, encouraging sentences why they would be compatible. Be specific "
            "about their shared interests.\n\n"
            f"{_profile_block('Profile 1', user1)}\n\n"
            f"{_profile_block('Profile 2', user2)}\n\n"
            "Write a brief, personalized match explanation:"
        )
        return await self._complete_or_fallback(
            prompt, max_tokens=150, temperature=0.7, fallback=MATCH_FALLBACK
        )

    async def _complete_or_fallback(
        self, prompt: str, max_tokens: int, temperature: float, fallback: str
    ) -> str:
        try:
            text = await self.ai_provider.complete(
                prompt, max_tokens=max_tokens, temperature=temperature
            )
        except ProviderError as e:
            logger.warning(f"Explanation generation failed, using fallback: {e}")
            return fallback

        text = text.strip()
        return text or fallback
