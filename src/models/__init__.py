"""SQLAlchemy models."""

from src.models.diary import Diary, LikeDiary
from src.models.friend import Friend
from src.models.user import User

__all__ = [
    "User",
    "Diary",
    "LikeDiary",
    "Friend",
]
