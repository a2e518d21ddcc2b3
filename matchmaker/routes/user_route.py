from uuid import UUID
from fastapi import APIRouter, BackgroundTasks, status

from ..core.dependency import EmbeddingServiceDep, PhotoResolverDep, UserServiceDep
from matchmaker.schemas.user import (
    ProfileCreate,
    ProfileCreatedResponse,
    ProfileResponse,
    ProfileUpdate,
    ProfileUpdatedResponse,
)

user_router = APIRouter(prefix="/users", tags=["users"])


@user_router.post(
    "",
    response_model=ProfileCreatedResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a profile",
)
async def create_profile(data: ProfileCreate, service: UserServiceDep):
    """
    Create a profile and its embedding

    The embedding is generated before the profile is stored; if the AI
    provider fails the profile is not created (502).
    """
    user = await service.create_profile(data)
    return ProfileCreatedResponse(id=user.id)


@user_router.get("/{user_id}", response_model=ProfileResponse, summary="Get a profile")
def get_profile(user_id: UUID, service: UserServiceDep, photo_resolver: PhotoResolverDep):
    return ProfileResponse.from_user(service.get_user(user_id), photo_resolver)


@user_router.patch(
    "/{user_id}",
    response_model=ProfileUpdatedResponse,
    summary="Update a profile",
)
def update_profile(
    user_id: UUID,
    data: ProfileUpdate,
    background_tasks: BackgroundTasks,
    service: UserServiceDep,
    embedding_service: EmbeddingServiceDep,
):
    """
    Partially update a profile

    Changing **bio** or **interests** schedules an embedding refresh after
    the response is sent.
    """
    needs_reembed = service.update_profile(user_id, data)
    if needs_reembed:
        background_tasks.add_task(embedding_service.refresh_embedding, user_id)

    return ProfileUpdatedResponse(id=user_id, embedding_refresh_scheduled=needs_reembed)


@user_router.delete("/{user_id}", summary="Delete a user and everything they own")
def delete_user(user_id: UUID, service: UserServiceDep):
    return service.delete_user(user_id)
