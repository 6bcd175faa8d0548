"""Account service: signup, login, token reissue and profile management."""

import logging

from sqlalchemy.orm import Session

from src.exceptions import AuthenticationError, BadRequestError, NotFoundError, TokenError
from src.models.enums import UserRole
from src.models.user import User
from src.schemas.auth import LoginResponse, SignUpRequest, TokenPair
from src.services.auth import (
    create_token_pair,
    get_email_from_access_token,
    get_password_hash,
    is_valid_password,
    validate_refresh_token,
    verify_password,
)
from src.services.image_service import ImageService, ImageUpload
from src.services.token_store import RefreshTokenStore

logger = logging.getLogger(__name__)

PASSWORD_RULE_MESSAGE = (
    "Password must be 8-16 characters and include a letter, a digit and a special character"
)


def get_user_by_email(db: Session, email: str) -> User | None:
    """Get an active user by email."""
    return db.query(User).filter(User.email == email, User.deleted_at.is_(None)).first()


def get_active_user(db: Session, user_id: int) -> User | None:
    """Get an active user by id."""
    return db.query(User).filter(User.id == user_id, User.deleted_at.is_(None)).first()


def authenticate_user(db: Session, email: str, password: str) -> User | None:
    """Authenticate a user by email and password."""
    user = get_user_by_email(db, email)
    if not user:
        return None
    if not verify_password(password, user.password_hash):
        return None
    return user


class UserService:
    """Service for account operations."""

    def __init__(
        self,
        db: Session,
        token_store: RefreshTokenStore,
        image_service: ImageService | None = None,
    ):
        self.db = db
        self.token_store = token_store
        self.image_service = image_service or ImageService()

    # --- Signup ---

    def sign_up(self, request: SignUpRequest) -> User:
        """Create an account after validating the signup form."""
        logger.info(f"Signup requested for {request.email}")

        if not (request.email.strip() and request.password.strip() and request.nickname.strip()):
            logger.warning("Signup rejected: missing required field")
            raise BadRequestError("Email, password and nickname are required")

        if not is_valid_password(request.password):
            logger.warning("Signup rejected: password does not match the complexity rule")
            raise BadRequestError(PASSWORD_RULE_MESSAGE)

        if self.check_email(request.email):
            raise BadRequestError("Email already registered")
        if self.check_nickname(request.nickname):
            raise BadRequestError("Nickname already in use")

        user = User(
            email=request.email,
            password_hash=get_password_hash(request.password),
            nickname=request.nickname,
            profile=request.profile,
            role=UserRole.USER,
        )
        self.db.add(user)
        self.db.commit()
        self.db.refresh(user)
        logger.info(f"Signup completed for {user.email} (id={user.id})")
        return user

    def check_email(self, email: str) -> bool:
        """True when the email is already registered."""
        return self.db.query(User.id).filter(User.email == email).first() is not None

    def check_nickname(self, nickname: str) -> bool:
        """True when the nickname is already taken."""
        return self.db.query(User.id).filter(User.nickname == nickname).first() is not None

    # --- Session ---

    def log_in(self, email: str, password: str) -> LoginResponse:
        """Authenticate and issue a token pair, remembering the refresh token."""
        logger.info(f"Login requested for {email}")

        user = get_user_by_email(self.db, email)
        if user is None:
            logger.warning(f"Login failed: no user {email}")
            raise NotFoundError("User not found")

        if authenticate_user(self.db, email, password) is None:
            logger.warning(f"Login failed: bad credentials for {email}")
            raise AuthenticationError("Incorrect email or password")

        tokens = create_token_pair(user)
        self.token_store.save(email, tokens.refresh_token)

        return LoginResponse(
            access_token=tokens.access_token,
            refresh_token=tokens.refresh_token,
            email=user.email,
            nickname=user.nickname,
            image=user.image,
            profile=user.profile,
            role=user.role,
        )

    def reissue_token(self, access_token: str, refresh_token: str) -> TokenPair:
        """Exchange a valid refresh token for a new pair.

        The access token only identifies the user and may be expired. The
        supplied refresh token must equal the one currently stored.
        """
        if not validate_refresh_token(refresh_token):
            logger.warning("Reissue rejected: refresh token invalid or expired")
            raise TokenError("Refresh token is invalid or expired")

        email = get_email_from_access_token(access_token)

        stored = self.token_store.get(email)
        if stored is None:
            logger.warning(f"Reissue rejected: no stored refresh token for {email}")
            raise NotFoundError("Refresh token not found; please log in again")

        if stored != refresh_token:
            logger.warning(f"Reissue rejected: refresh token mismatch for {email}")
            raise TokenError("Refresh token does not match")

        user = get_user_by_email(self.db, email)
        if user is None:
            raise NotFoundError("User not found")

        tokens = create_token_pair(user)
        self.token_store.save(email, tokens.refresh_token)
        logger.info(f"Reissued tokens for {email}")
        return tokens

    def log_out(self, user: User) -> None:
        """Forget the user's refresh token."""
        self.token_store.delete(user.email)
        logger.info(f"Logged out {user.email}")

    def withdraw(self, user: User) -> None:
        """Close the account: drop the session and soft-delete the user."""
        self.token_store.delete(user.email)
        user.soft_delete()
        self.db.commit()
        logger.info(f"User {user.id} withdrew")

    # --- Profile ---

    def update_user(self, user: User, nickname: str | None, profile: str | None) -> User:
        """Update nickname and/or profile text."""
        if nickname is not None:
            if not nickname.strip():
                raise BadRequestError("Nickname must not be blank")
            if nickname != user.nickname and self.check_nickname(nickname):
                logger.warning(f"Profile update rejected: nickname {nickname!r} in use")
                raise BadRequestError("Nickname already in use")
            user.nickname = nickname
        if profile is not None:
            user.profile = profile

        self.db.commit()
        self.db.refresh(user)
        logger.info(f"Updated profile of user {user.id}")
        return user

    def update_image(self, user: User, image: ImageUpload) -> User:
        """Replace the profile image, removing the previous file."""
        url = self.image_service.upload_image(image.data, image.content_type)
        if user.image:
            self.image_service.delete_image(user.image)
        user.image = url
        self.db.commit()
        self.db.refresh(user)
        return user

    def check_password(self, user: User, password: str) -> bool:
        return verify_password(password, user.password_hash)

    def update_password(self, user: User, current_password: str, new_password: str) -> None:
        """Change the password after confirming the current one."""
        if not self.check_password(user, current_password):
            raise BadRequestError("Current password is incorrect")
        if not is_valid_password(new_password):
            raise BadRequestError(PASSWORD_RULE_MESSAGE)

        user.password_hash = get_password_hash(new_password)
        self.db.commit()
        logger.info(f"Password changed for user {user.id}")

    def find_users_by_nickname(self, user: User, nickname: str) -> list[User]:
        """Search active users whose nickname contains the query."""
        if not nickname.strip():
            return []
        return (
            self.db.query(User)
            .filter(
                User.nickname.contains(nickname, autoescape=True),
                User.id != user.id,
                User.deleted_at.is_(None),
            )
            .order_by(User.nickname)
            .all()
        )
