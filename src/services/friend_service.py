"""Friend request graph operations."""

import logging

from sqlalchemy import and_, or_
from sqlalchemy.orm import Session

from src.exceptions import BadRequestError, NotFoundError
from src.models.enums import FriendStatus
from src.models.friend import Friend
from src.models.user import User
from src.services.user_service import get_active_user

logger = logging.getLogger(__name__)


def _between(a: int, b: int):
    """Filter for a relationship row between two users in either direction."""
    return or_(
        and_(Friend.from_user_id == a, Friend.to_user_id == b),
        and_(Friend.from_user_id == b, Friend.to_user_id == a),
    )


def are_friends(db: Session, user_id: int, other_id: int) -> bool:
    """Check whether two users have a confirmed friendship."""
    return (
        db.query(Friend.id)
        .filter(_between(user_id, other_id), Friend.status == FriendStatus.ACCEPTED)
        .first()
        is not None
    )


class FriendService:
    """Service for friend requests and friendships."""

    def __init__(self, db: Session):
        self.db = db

    def find_friends(self, user: User) -> list[User]:
        """Users with a confirmed friendship with ``user``."""
        rows = (
            self.db.query(Friend)
            .filter(
                or_(Friend.from_user_id == user.id, Friend.to_user_id == user.id),
                Friend.status == FriendStatus.ACCEPTED,
            )
            .all()
        )
        friends = [row.to_user if row.from_user_id == user.id else row.from_user for row in rows]
        return sorted(
            (f for f in friends if not f.is_deleted),
            key=lambda f: f.nickname,
        )

    def find_waiting_requests(self, user: User) -> list[User]:
        """Users who sent ``user`` a request that is still waiting."""
        rows = (
            self.db.query(Friend)
            .filter(Friend.to_user_id == user.id, Friend.status == FriendStatus.WAITING)
            .order_by(Friend.created_at)
            .all()
        )
        return [row.from_user for row in rows if not row.from_user.is_deleted]

    def send_request(self, user: User, to_user_id: int) -> str:
        """Send a friend request."""
        if to_user_id == user.id:
            raise BadRequestError("You cannot send a friend request to yourself")

        target = get_active_user(self.db, to_user_id)
        if target is None:
            raise NotFoundError("User not found")

        existing = self.db.query(Friend).filter(_between(user.id, to_user_id)).first()
        if existing is not None:
            if existing.status == FriendStatus.ACCEPTED:
                raise BadRequestError(f"You are already friends with {target.nickname}")
            raise BadRequestError("A friend request already exists between you")

        self.db.add(Friend(from_user_id=user.id, to_user_id=to_user_id))
        self.db.commit()
        logger.info(f"User {user.id} sent a friend request to {to_user_id}")
        return f"Friend request sent to {target.nickname}"

    def _get_waiting_request(self, user: User, from_user_id: int) -> Friend:
        request = (
            self.db.query(Friend)
            .filter(
                Friend.from_user_id == from_user_id,
                Friend.to_user_id == user.id,
                Friend.status == FriendStatus.WAITING,
            )
            .first()
        )
        if request is None:
            raise NotFoundError("Friend request not found")
        return request

    def accept_request(self, user: User, from_user_id: int) -> str:
        """Accept a waiting request, creating the friendship."""
        request = self._get_waiting_request(user, from_user_id)
        request.status = FriendStatus.ACCEPTED
        self.db.commit()
        logger.info(f"User {user.id} accepted the friend request from {from_user_id}")
        return f"You are now friends with {request.from_user.nickname}"

    def deny_request(self, user: User, from_user_id: int) -> str:
        """Reject a waiting request."""
        request = self._get_waiting_request(user, from_user_id)
        nickname = request.from_user.nickname
        self.db.delete(request)
        self.db.commit()
        logger.info(f"User {user.id} denied the friend request from {from_user_id}")
        return f"Friend request from {nickname} denied"

    def delete_friend(self, user: User, friend_id: int) -> str:
        """End a confirmed friendship."""
        friendship = (
            self.db.query(Friend)
            .filter(_between(user.id, friend_id), Friend.status == FriendStatus.ACCEPTED)
            .first()
        )
        if friendship is None:
            raise NotFoundError("Friend not found")

        self.db.delete(friendship)
        self.db.commit()
        logger.info(f"User {user.id} removed friend {friend_id}")
        return "Friendship removed"
