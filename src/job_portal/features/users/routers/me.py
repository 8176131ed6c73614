"""
Current user profile endpoints.
"""

from fastapi import APIRouter, Depends, status

from ....api.dependencies import get_user_service
from ...auth.dependencies import get_current_user
from ..entities.user import User
from ..models import UserProfileUpdate, UserResponse
from ..services import UserService

router = APIRouter()


@router.get(
    "/me",
    response_model=UserResponse,
    status_code=status.HTTP_200_OK,
    summary="Get my profile",
)
async def get_my_profile(current_user: User = Depends(get_current_user)) -> UserResponse:
    return UserResponse.from_entity(current_user)


@router.put(
    "/me",
    response_model=UserResponse,
    status_code=status.HTTP_200_OK,
    summary="Update my profile",
)
async def update_my_profile(
    update_data: UserProfileUpdate,
    current_user: User = Depends(get_current_user),
    service: UserService = Depends(get_user_service),
) -> UserResponse:
    user = await service.update_profile(current_user.id, update_data.model_dump(exclude_unset=True))
    return UserResponse.from_entity(user)
