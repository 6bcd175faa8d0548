"""User model."""

from sqlalchemy import Column, Enum, Integer, String

from src.database import Base
from src.models.enums import UserRole
from src.models.mixins import SoftDeleteMixin, TimestampMixin


class User(Base, TimestampMixin, SoftDeleteMixin):
    """Diary author; soft-deleted on withdrawal."""

    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    email = Column(String(255), unique=True, nullable=False, index=True)
    password_hash = Column(String(255), nullable=False)
    nickname = Column(String(50), unique=True, nullable=False, index=True)
    image = Column(String(500), nullable=True)  # profile image URL
    profile = Column(String(500), nullable=True)  # short self-introduction
    role = Column(
        Enum(UserRole, name="userrole", values_callable=lambda x: [e.value for e in x]),
        default=UserRole.USER,
        nullable=False,
    )
