"""Authentication API endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, status

from src.api.dependencies import get_current_user, get_user_service
from src.models.user import User
from src.schemas.auth import (
    DuplicateCheckResponse,
    LoginRequest,
    LoginResponse,
    MessageResponse,
    ReissueRequest,
    SignUpRequest,
    TokenPair,
)
from src.services.user_service import UserService

router = APIRouter(prefix="/api/v1/auth", tags=["auth"])


@router.post("/signup", response_model=MessageResponse, status_code=status.HTTP_201_CREATED)
def sign_up(
    request: SignUpRequest,
    service: Annotated[UserService, Depends(get_user_service)],
):
    """Register a new user."""
    service.sign_up(request)
    return MessageResponse(message="Signup completed")


@router.get("/check-email", response_model=DuplicateCheckResponse)
def check_email(
    email: Annotated[str, Query(max_length=255)],
    service: Annotated[UserService, Depends(get_user_service)],
):
    """Check whether an email is already registered."""
    return DuplicateCheckResponse(duplicated=service.check_email(email))


@router.get("/check-nickname", response_model=DuplicateCheckResponse)
def check_nickname(
    nickname: Annotated[str, Query(max_length=50)],
    service: Annotated[UserService, Depends(get_user_service)],
):
    """Check whether a nickname is already taken."""
    return DuplicateCheckResponse(duplicated=service.check_nickname(nickname))


@router.post("/login", response_model=LoginResponse)
def login(
    credentials: LoginRequest,
    service: Annotated[UserService, Depends(get_user_service)],
):
    """Login with email and password."""
    return service.log_in(credentials.email, credentials.password)


@router.post("/reissue", response_model=TokenPair)
def reissue(
    request: ReissueRequest,
    service: Annotated[UserService, Depends(get_user_service)],
):
    """Issue a new token pair from the current refresh token."""
    return service.reissue_token(request.access_token, request.refresh_token)


@router.post("/logout", response_model=MessageResponse)
def logout(
    current_user: Annotated[User, Depends(get_current_user)],
    service: Annotated[UserService, Depends(get_user_service)],
):
    """Logout by discarding the stored refresh token."""
    service.log_out(current_user)
    return MessageResponse(message="Logged out successfully")
