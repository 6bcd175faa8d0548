"""User profile API endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, File, HTTPException, Query, UploadFile, status

from src.api.dependencies import get_current_user, get_user_service, read_image
from src.models.user import User
from src.schemas.user import (
    MyInfoResponse,
    PasswordCheck,
    PasswordCheckResponse,
    PasswordUpdate,
    UserInfoResponse,
    UserUpdate,
)
from src.services.user_service import UserService

router = APIRouter(prefix="/api/v1/user", tags=["user"])


@router.get("/me", response_model=MyInfoResponse)
def get_me(
    current_user: Annotated[User, Depends(get_current_user)],
):
    """Get current user information."""
    return current_user


@router.patch("/me", response_model=MyInfoResponse)
def update_me(
    update: UserUpdate,
    current_user: Annotated[User, Depends(get_current_user)],
    service: Annotated[UserService, Depends(get_user_service)],
):
    """Update nickname and profile text."""
    return service.update_user(current_user, update.nickname, update.profile)


@router.put("/me/image", response_model=MyInfoResponse)
async def update_my_image(
    image: Annotated[UploadFile, File(description="Profile image (JPEG, PNG, GIF, or WebP)")],
    current_user: Annotated[User, Depends(get_current_user)],
    service: Annotated[UserService, Depends(get_user_service)],
):
    """Replace the profile image.

    Note: This endpoint must remain async because UploadFile.read() is async.
    """
    upload = await read_image(image)
    if upload is None:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Image is required")
    return service.update_image(current_user, upload)


@router.delete("/me", status_code=status.HTTP_204_NO_CONTENT)
def withdraw(
    current_user: Annotated[User, Depends(get_current_user)],
    service: Annotated[UserService, Depends(get_user_service)],
):
    """Close the current account."""
    service.withdraw(current_user)


@router.put("/me/password", status_code=status.HTTP_204_NO_CONTENT)
def update_password(
    update: PasswordUpdate,
    current_user: Annotated[User, Depends(get_current_user)],
    service: Annotated[UserService, Depends(get_user_service)],
):
    """Change the current user's password."""
    service.update_password(current_user, update.current_password, update.new_password)


@router.post("/me/password/check", response_model=PasswordCheckResponse)
def check_password(
    check: PasswordCheck,
    current_user: Annotated[User, Depends(get_current_user)],
    service: Annotated[UserService, Depends(get_user_service)],
):
    """Confirm the current password."""
    return PasswordCheckResponse(matched=service.check_password(current_user, check.password))


@router.get("/search", response_model=list[UserInfoResponse])
def search_users(
    nickname: Annotated[str, Query(max_length=50)],
    current_user: Annotated[User, Depends(get_current_user)],
    service: Annotated[UserService, Depends(get_user_service)],
):
    """Find other users by nickname."""
    return service.find_users_by_nickname(current_user, nickname)
