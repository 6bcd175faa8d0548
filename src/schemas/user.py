"""User profile schemas."""

from pydantic import BaseModel, ConfigDict, Field


class MyInfoResponse(BaseModel):
    """The authenticated user's own profile."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    email: str
    nickname: str
    image: str | None
    profile: str | None


class UserInfoResponse(BaseModel):
    """Public view of another user."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    nickname: str
    image: str | None
    profile: str | None


class UserUpdate(BaseModel):
    """Update nickname and/or profile text."""

    nickname: str | None = Field(None, max_length=50)
    profile: str | None = Field(None, max_length=500)


class PasswordUpdate(BaseModel):
    """Change password."""

    current_password: str = Field(..., max_length=128)
    new_password: str = Field(..., max_length=128)


class PasswordCheck(BaseModel):
    """Verify the current password before sensitive operations."""

    password: str = Field(..., max_length=128)


class PasswordCheckResponse(BaseModel):
    matched: bool
