import logging
from typing import Optional, Protocol

import openai
from openai import AsyncOpenAI

from matchmaker.core.exception import ProviderError
from matchmaker.utils.http_client import HTTPClient

logger = logging.getLogger(__name__)


class AIProvider(Protocol):
    """Text-embedding and chat-completion backend"""

    async def embed(self, text: str) -> list[float]: ...

    async def complete(
        self, prompt: str, max_tokens: int = 150, temperature: float = 0.7
    ) -> str: ...


class OpenAIProvider:
    """AIProvider backed by the OpenAI API"""

    def __init__(
        self,
        http_client: HTTPClient,
        api_key: Optional[str],
        embedding_model: str,
        chat_model: str,
        dimensions: int,
        timeout: float,
        max_retries: int = 2,
        base_url: Optional[str] = None,
    ):
        self.embedding_model = embedding_model
        self.chat_model = chat_model
        self.dimensions = dimensions

        self.client = AsyncOpenAI(
            api_key=api_key,
            base_url=base_url,
            timeout=timeout,
            max_retries=max_retries,
            http_client=http_client.client,
        )

    async def embed(self, text: str) -> list[float]:
        """
        Generate an embedding vector for the given text

        Raises:
            ProviderError: On API failure, timeout, or a wrong-sized vector
        """
        try:
            response = await self.client.embeddings.create(
                model=self.embedding_model,
                input=text,
            )
        except openai.OpenAIError as e:
            logger.error(f"Embedding request failed: {e}", exc_info=True)
            raise ProviderError(
                "Embedding generation failed",
                details={"error_type": type(e).__name__},
            ) from e

        embedding = response.data[0].embedding
        if len(embedding) != self.dimensions:
            raise ProviderError(
                "Embedding has unexpected dimensions",
                details={"expected": self.dimensions, "actual": len(embedding)},
            )
        return embedding

    async def complete(
        self, prompt: str, max_tokens: int = 150, temperature: float = 0.7
    ) -> str:
        """
        Generate a chat completion for a single user prompt

        Raises:
            ProviderError: On API failure or timeout
        """
        try:
            response = await self.client.chat.completions.create(
                model=self.chat_model,
                messages=[{"role": "user", "content": prompt}],
                max_tokens=max_tokens,
                temperature=temperature,
            )
        except openai.OpenAIError as e:
            logger.error(f"Chat completion failed: {e}", exc_info=True)
            raise ProviderError(
                "Chat completion failed",
                details={"error_type": type(e).__name__},
            ) from e

        return response.choices[0].message.content or ""
