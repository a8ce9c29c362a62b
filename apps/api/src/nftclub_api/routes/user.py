"""User API routes."""

from typing import Any

from fastapi import APIRouter, Depends, status

from nftclub_api.services import get_user_service
from nftclub_common.models.user import User, UserCreate
from nftclub_common.services.user_service import UserAccessService

router = APIRouter(prefix="/user", tags=["user"], redirect_slashes=False)


@router.get("", response_model=dict[str, Any])
async def get_user_descriptor(service: UserAccessService = Depends(get_user_service)) -> dict[str, Any]:
    """Static descriptor of the user resource."""
    return service.get_static_descriptor()


@router.get("/{user_id}", response_model=User, response_model_exclude_unset=True)
def get_user(user_id: int, service: UserAccessService = Depends(get_user_service)) -> User:
    return service.get_user(user_id)


@router.post("", response_model=User, response_model_exclude_unset=True, status_code=status.HTTP_201_CREATED)
def create_user(user: UserCreate, service: UserAccessService = Depends(get_user_service)) -> User:
    return service.create_user(user)
