"""Authentication schemas."""

from pydantic import BaseModel, Field

from src.models.enums import UserRole


class SignUpRequest(BaseModel):
    """User signup request.

    Fields default to empty strings so that missing values are reported as a
    signup validation error rather than a schema error.
    """

    email: str = Field("", max_length=255)
    password: str = Field("", max_length=128)
    nickname: str = Field("", max_length=50)
    profile: str | None = Field(None, max_length=500)


class LoginRequest(BaseModel):
    """User login request."""

    email: str = Field(..., max_length=255)
    password: str = Field(..., max_length=128)


class ReissueRequest(BaseModel):
    """Token reissue request carrying the current pair."""

    access_token: str
    refresh_token: str


class TokenPair(BaseModel):
    """JWT access/refresh pair."""

    access_token: str
    refresh_token: str
    token_type: str = "bearer"  # noqa: S105


class LoginResponse(TokenPair):
    """Login response with tokens and profile summary."""

    email: str
    nickname: str
    image: str | None
    profile: str | None
    role: UserRole


class DuplicateCheckResponse(BaseModel):
    """Whether an email or nickname is already taken."""

    duplicated: bool


class MessageResponse(BaseModel):
    """Plain user-facing message."""

    message: str
