import zlib
from datetime import datetime
from typing import Optional

from matchmaker.core.config import settings
from matchmaker.core.exception import ProviderError
from matchmaker.enumerations.user_enum import Gender

SF = (37.78, -122.40)


class FakeAIProvider:
    """Deterministic stand-in for the embedding and chat backends"""

    def __init__(self, completion: str = "You both love the outdoors.", fail_embed=False, fail_complete=False):
        self.completion = completion
        self.fail_embed = fail_embed
        self.fail_complete = fail_complete
        self.embed_calls: list[str] = []
        self.complete_calls: list[dict] = []

    async def embed(self, text: str) -> list[float]:
        self.embed_calls.append(text)
        if self.fail_embed:
            raise ProviderError("Embedding generation failed")
        vector = [0.0] * settings.EMBEDDING_DIM
        vector[zlib.crc32(text.encode()) % settings.EMBEDDING_DIM] = 1.0
        vector[0] += 0.5
        return vector

    async def complete(self, prompt: str, max_tokens: int = 150, temperature: float = 0.7) -> str:
        self.complete_calls.append(
            {"prompt": prompt, "max_tokens": max_tokens, "temperature": temperature}
        )
        if self.fail_complete:
            raise ProviderError("Chat completion failed")
        return self.completion


class StaticVectorIndex:
    """Returns a fixed neighbour list, best first"""

    def __init__(self, results=None, error: Optional[Exception] = None):
        self.results = list(results or [])
        self.error = error
        self.calls: list[tuple[list[float], int]] = []

    def search(self, query_vector, limit):
        self.calls.append((list(query_vector), limit))
        if self.error is not None:
            raise self.error
        return self.results[:limit]


class FixedClock:
    def __init__(self, now: datetime):
        self.now = now

    def __call__(self) -> datetime:
        return self.now


def unit_vector(index: int, weight: float = 1.0) -> list[float]:
    vector = [0.0] * settings.EMBEDDING_DIM
    vector[index] = weight
    return vector


def woman_seeking_man(make_user, **kwargs):
    kwargs.setdefault("gender", Gender.WOMAN)
    kwargs.setdefault("looking_for", ["man"])
    return make_user(**kwargs)


def man_seeking_woman(make_user, **kwargs):
    kwargs.setdefault("gender", Gender.MAN)
    kwargs.setdefault("looking_for", ["woman"])
    return make_user(**kwargs)
