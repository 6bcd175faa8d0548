"""Friend API endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends

from src.api.dependencies import get_current_user, get_friend_service
from src.models.user import User
from src.schemas.auth import MessageResponse
from src.schemas.friend import FriendResponse
from src.services.friend_service import FriendService

router = APIRouter(prefix="/api/v1/friend", tags=["friend"])


@router.get("/all", response_model=list[FriendResponse])
def get_friends(
    current_user: Annotated[User, Depends(get_current_user)],
    service: Annotated[FriendService, Depends(get_friend_service)],
):
    """List confirmed friends."""
    return service.find_friends(current_user)


@router.get("/request/all", response_model=list[FriendResponse])
def get_waiting_requests(
    current_user: Annotated[User, Depends(get_current_user)],
    service: Annotated[FriendService, Depends(get_friend_service)],
):
    """List users waiting for the current user to answer their request."""
    return service.find_waiting_requests(current_user)


@router.post("/request/{user_id}", response_model=MessageResponse)
def send_request(
    user_id: int,
    current_user: Annotated[User, Depends(get_current_user)],
    service: Annotated[FriendService, Depends(get_friend_service)],
):
    """Send a friend request."""
    return MessageResponse(message=service.send_request(current_user, user_id))


@router.put("/request/{user_id}", response_model=MessageResponse)
def accept_request(
    user_id: int,
    current_user: Annotated[User, Depends(get_current_user)],
    service: Annotated[FriendService, Depends(get_friend_service)],
):
    """Accept a friend request from ``user_id``."""
    return MessageResponse(message=service.accept_request(current_user, user_id))


@router.delete("/request/{user_id}", response_model=MessageResponse)
def deny_request(
    user_id: int,
    current_user: Annotated[User, Depends(get_current_user)],
    service: Annotated[FriendService, Depends(get_friend_service)],
):
    """Deny a friend request from ``user_id``."""
    return MessageResponse(message=service.deny_request(current_user, user_id))


@router.delete("/{user_id}", response_model=MessageResponse)
def delete_friend(
    user_id: int,
    current_user: Annotated[User, Depends(get_current_user)],
    service: Annotated[FriendService, Depends(get_friend_service)],
):
    """End a friendship."""
    return MessageResponse(message=service.delete_friend(current_user, user_id))
