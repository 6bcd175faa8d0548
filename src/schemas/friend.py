"""Friend schemas."""

from pydantic import BaseModel, ConfigDict


class FriendResponse(BaseModel):
    """A friend or a pending requester."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    email: str
    nickname: str
    image: str | None
    profile: str | None
