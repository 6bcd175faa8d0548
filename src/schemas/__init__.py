"""Pydantic schemas for API requests and responses."""

from src.schemas.auth import (
    DuplicateCheckResponse,
    LoginRequest,
    LoginResponse,
    MessageResponse,
    ReissueRequest,
    SignUpRequest,
    TokenPair,
)
from src.schemas.diary import (
    DiaryInput,
    DiaryMonthlyItem,
    DiaryMonthlyResponse,
    DiaryResponse,
    LikeResponse,
)
from src.schemas.friend import FriendResponse
from src.schemas.user import (
    MyInfoResponse,
    PasswordCheck,
    PasswordCheckResponse,
    PasswordUpdate,
    UserInfoResponse,
    UserUpdate,
)

__all__ = [
    "SignUpRequest",
    "LoginRequest",
    "LoginResponse",
    "ReissueRequest",
    "TokenPair",
    "DuplicateCheckResponse",
    "MessageResponse",
    "MyInfoResponse",
    "UserInfoResponse",
    "UserUpdate",
    "PasswordUpdate",
    "PasswordCheck",
    "PasswordCheckResponse",
    "DiaryInput",
    "DiaryResponse",
    "DiaryMonthlyItem",
    "DiaryMonthlyResponse",
    "LikeResponse",
    "FriendResponse",
]
