import logging
from typing import Optional
import httpx

logger = logging.getLogger(__name__)


class HTTPClient:
    """Pooled async HTTP client shared by outbound provider calls"""

    def __init__(self, timeout: float = 20.0):
        self._timeout = timeout
        self._client: Optional[httpx.AsyncClient] = None

    @property
    def client(self) -> httpx.AsyncClient:
        """Get the HTTP client instance, creating it on first use"""
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                timeout=httpx.Timeout(self._timeout),
                limits=httpx.Limits(
                    max_keepalive_connections=20,
                    max_connections=100,
                    keepalive_expiry=30.0,
                ),
            )
            logger.info("HTTP Client initialized with connection pooling")
        return self._client

    async def close(self):
        """Close the HTTP client"""
        if self._client:
            await self._client.aclose()
            self._client = None
            logger.info("HTTP Client closed")
