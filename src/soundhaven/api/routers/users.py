"""User listing endpoint."""

from fastapi import APIRouter, Depends

from soundhaven.api.dependencies import get_current_external_id, get_user_repository
from soundhaven.api.schemas import UserResponse
from soundhaven.infrastructure.persistence import UserRepository

router = APIRouter()


@router.get("")
async def list_users(
    external_id: str | None = Depends(get_current_external_id),
    repo: UserRepository = Depends(get_user_repository),
) -> list[UserResponse]:
    """All provisioned users except the caller."""
    users = await repo.list_all(exclude_external_id=external_id)
    return [UserResponse.from_entity(u) for u in users]
