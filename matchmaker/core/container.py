from dependency_injector import containers, providers

from matchmaker.core.config import settings
from matchmaker.core.database import SessionLocal
from matchmaker.services.ai_provider import OpenAIProvider
from matchmaker.services.embedding_service import EmbeddingService
from matchmaker.services.explanation_service import ExplanationGenerator
from matchmaker.services.photo_resolver import PhotoResolver
from matchmaker.utils.http_client import HTTPClient


class Container(containers.DeclarativeContainer):
    """Application DI Container"""

    # Sessions for work that outlives the request (background tasks)
    session_factory = providers.Object(SessionLocal)

    http_client = providers.Singleton(
        HTTPClient,
        timeout=settings.AI_TIMEOUT_SECONDS,
    )

    ai_provider = providers.Singleton(
        OpenAIProvider,
        http_client=http_client,
        api_key=settings.OPENAI_API_KEY,
        embedding_model=settings.EMBEDDING_MODEL,
        chat_model=settings.CHAT_MODEL,
        dimensions=settings.EMBEDDING_DIM,
        timeout=settings.AI_TIMEOUT_SECONDS,
        max_retries=settings.AI_MAX_RETRIES,
        base_url=settings.OPENAI_BASE_URL,
    )

    explanation_generator = providers.Singleton(
        ExplanationGenerator,
        ai_provider=ai_provider,
    )

    embedding_service = providers.Singleton(
        EmbeddingService,
        ai_provider=ai_provider,
        session_factory=session_factory,
    )

    photo_resolver = providers.Singleton(
        PhotoResolver,
        storage_base_url=settings.STORAGE_BASE_URL,
    )


container = Container()
