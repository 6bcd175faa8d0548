"""FastAPI dependencies for authentication, database and services."""

from typing import Annotated

from fastapi import Depends, HTTPException, UploadFile, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from src.database import get_db
from src.models.user import User
from src.services.auth import decode_access_token
from src.services.diary_service import DiaryService
from src.services.friend_service import FriendService
from src.services.image_service import ImageService, ImageUpload
from src.services.token_store import RefreshTokenStore, get_sync_redis
from src.services.user_service import UserService, get_active_user

security = HTTPBearer()


def get_current_user(
    credentials: Annotated[HTTPAuthorizationCredentials, Depends(security)],
    db: Annotated[Session, Depends(get_db)],
) -> User:
    """Get the current authenticated user from JWT token."""
    token = credentials.credentials
    payload = decode_access_token(token)

    if payload is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid authentication credentials",
            headers={"WWW-Authenticate": "Bearer"},
        )

    user_id = payload.get("sub")
    if user_id is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid authentication credentials",
            headers={"WWW-Authenticate": "Bearer"},
        )

    user = get_active_user(db, int(user_id))
    if user is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="User not found",
            headers={"WWW-Authenticate": "Bearer"},
        )

    return user


async def read_image(image: UploadFile | None) -> ImageUpload | None:
    """Read an optional multipart image; empty uploads count as absent."""
    if image is None:
        return None
    data = await image.read()
    if not data:
        return None
    return ImageUpload(data=data, content_type=image.content_type)


def get_image_service() -> ImageService:
    """Get image storage service instance."""
    return ImageService()


def get_refresh_token_store() -> RefreshTokenStore:
    """Get the Redis-backed refresh token store."""
    return RefreshTokenStore(get_sync_redis())


def get_user_service(
    db: Annotated[Session, Depends(get_db)],
    token_store: Annotated[RefreshTokenStore, Depends(get_refresh_token_store)],
    image_service: Annotated[ImageService, Depends(get_image_service)],
) -> UserService:
    """Get user service with dependencies."""
    return UserService(db, token_store, image_service)


def get_diary_service(
    db: Annotated[Session, Depends(get_db)],
    image_service: Annotated[ImageService, Depends(get_image_service)],
) -> DiaryService:
    """Get diary service with dependencies."""
    return DiaryService(db, image_service)


def get_friend_service(
    db: Annotated[Session, Depends(get_db)],
) -> FriendService:
    """Get friend service with dependencies."""
    return FriendService(db)
