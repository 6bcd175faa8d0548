"""Friend relationship model."""

from sqlalchemy import Column, Enum, ForeignKey, Integer, UniqueConstraint
from sqlalchemy.orm import relationship

from src.database import Base
from src.models.enums import FriendStatus
from src.models.mixins import TimestampMixin


class Friend(Base, TimestampMixin):
    """Friend request from one user to another; ACCEPTED rows are friendships."""

    __tablename__ = "friends"

    id = Column(Integer, primary_key=True, index=True)
    from_user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    to_user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    status = Column(
        Enum(FriendStatus, name="friendstatus", values_callable=lambda x: [e.value for e in x]),
        default=FriendStatus.WAITING,
        nullable=False,
    )

    # Relationships
    from_user = relationship("User", foreign_keys=[from_user_id])
    to_user = relationship("User", foreign_keys=[to_user_id])

    __table_args__ = (UniqueConstraint("from_user_id", "to_user_id", name="uq_friend_pair"),)
