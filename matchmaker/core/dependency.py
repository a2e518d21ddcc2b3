from typing import Annotated, Callable
from fastapi import Depends
from sqlalchemy.orm import Session

from matchmaker.core.container import container
from matchmaker.core.database import get_db
from matchmaker.services.admin_service import AdminService
from matchmaker.services.daily_pick_service import DailyPickService
from matchmaker.services.embedding_service import EmbeddingService
from matchmaker.services.explanation_service import ExplanationGenerator
from matchmaker.services.feed_service import FeedService
from matchmaker.services.match_service import MatchService
from matchmaker.services.message_service import MessageService
from matchmaker.services.photo_resolver import PhotoResolver
from matchmaker.services.swipe_service import SwipeService
from matchmaker.services.user_service import UserService
from matchmaker.services.vector_index import VectorIndex, build_vector_index


def get_photo_resolver() -> PhotoResolver:
    return container.photo_resolver()


def get_explanation_generator() -> ExplanationGenerator:
    return container.explanation_generator()


def get_embedding_service() -> EmbeddingService:
    return container.embedding_service()


def get_vector_index(db: Annotated[Session, Depends(get_db)]) -> VectorIndex:
    return build_vector_index(db)


PhotoResolverDep = Annotated[PhotoResolver, Depends(get_photo_resolver)]
ExplanationGeneratorDep = Annotated[ExplanationGenerator, Depends(get_explanation_generator)]
EmbeddingServiceDep = Annotated[EmbeddingService, Depends(get_embedding_service)]


def get_user_service(
    db: Annotated[Session, Depends(get_db)],
    embedding_service: EmbeddingServiceDep,
) -> UserService:
    return UserService(db, embedding_service)


def get_swipe_service(db: Annotated[Session, Depends(get_db)]) -> SwipeService:
    return SwipeService(db)


def get_feed_service(
    db: Annotated[Session, Depends(get_db)],
    photo_resolver: PhotoResolverDep,
) -> FeedService:
    return FeedService(db, photo_resolver)


def get_match_service(
    db: Annotated[Session, Depends(get_db)],
    photo_resolver: PhotoResolverDep,
    explanation_generator: ExplanationGeneratorDep,
) -> MatchService:
    return MatchService(db, photo_resolver, explanation_generator)


def get_message_service(
    db: Annotated[Session, Depends(get_db)],
    photo_resolver: PhotoResolverDep,
) -> MessageService:
    return MessageService(db, photo_resolver)


def get_daily_pick_service(
    db: Annotated[Session, Depends(get_db)],
    vector_index: Annotated[VectorIndex, Depends(get_vector_index)],
    photo_resolver: PhotoResolverDep,
    explanation_generator: ExplanationGeneratorDep,
) -> DailyPickService:
    return DailyPickService(db, vector_index, photo_resolver, explanation_generator)


def get_admin_service(
    db: Annotated[Session, Depends(get_db)],
    embedding_service: EmbeddingServiceDep,
) -> AdminService:
    return AdminService(db, embedding_service)


UserServiceDep = Annotated[UserService, Depends(get_user_service)]
SwipeServiceDep = Annotated[SwipeService, Depends(get_swipe_service)]
FeedServiceDep = Annotated[FeedService, Depends(get_feed_service)]
MatchServiceDep = Annotated[MatchService, Depends(get_match_service)]
MessageServiceDep = Annotated[MessageService, Depends(get_message_service)]
DailyPickServiceDep = Annotated[DailyPickService, Depends(get_daily_pick_service)]
AdminServiceDep = Annotated[AdminService, Depends(get_admin_service)]


def get_session_factory() -> Callable[[], Session]:
    return container.session_factory()


SessionFactoryDep = Annotated[Callable[[], Session], Depends(get_session_factory)]
