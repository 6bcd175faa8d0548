"""Password hashing and JWT access/refresh token handling."""

import re
import uuid
from datetime import UTC, datetime, timedelta

from jose import JWTError, jwt
from passlib.context import CryptContext

from src.config import get_settings
from src.exceptions import TokenError
from src.models.user import User
from src.schemas.auth import TokenPair

settings = get_settings()

ACCESS_TOKEN_TYPE = "access"  # noqa: S105
REFRESH_TOKEN_TYPE = "refresh"  # noqa: S105

# 8-16 characters with at least one letter, one digit and one special character
PASSWORD_PATTERN = re.compile(r"^(?=.*[a-zA-Z])(?=.*\d)(?=.*\W).{8,16}$")

# Password hashing context
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a password against its hash."""
    return pwd_context.verify(plain_password, hashed_password)


def get_password_hash(password: str) -> str:
    """Hash a password."""
    return pwd_context.hash(password)


def is_valid_password(password: str) -> bool:
    """Check the password complexity rule."""
    return PASSWORD_PATTERN.search(password) is not None


def _encode(claims: dict, expires_in: timedelta) -> str:
    to_encode = {**claims, "exp": datetime.now(UTC) + expires_in}
    return jwt.encode(to_encode, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def create_access_token(user: User) -> str:
    """Create a short-lived access token identifying the user."""
    return _encode(
        {
            "sub": str(user.id),
            "email": user.email,
            "role": user.role.value if user.role else None,
            "type": ACCESS_TOKEN_TYPE,
        },
        timedelta(minutes=settings.access_token_expiration_minutes),
    )


def create_refresh_token(user: User) -> str:
    """Create a long-lived refresh token.

    The ``jti`` claim keeps two tokens issued within the same second distinct.
    """
    return _encode(
        {
            "sub": str(user.id),
            "email": user.email,
            "type": REFRESH_TOKEN_TYPE,
            "jti": uuid.uuid4().hex,
        },
        timedelta(minutes=settings.refresh_token_expiration_minutes),
    )


def create_token_pair(user: User) -> TokenPair:
    """Issue a fresh access/refresh pair for the user."""
    return TokenPair(
        access_token=create_access_token(user),
        refresh_token=create_refresh_token(user),
    )


def decode_token(token: str, token_type: str, verify_exp: bool = True) -> dict | None:
    """Decode a JWT of the given type.

    Returns None when the signature is bad, the token expired (unless
    ``verify_exp`` is False) or it is a different kind of token.
    """
    try:
        payload = jwt.decode(
            token,
            settings.jwt_secret,
            algorithms=[settings.jwt_algorithm],
            options={"verify_exp": verify_exp},
        )
    except JWTError:
        return None
    if payload.get("type") != token_type:
        return None
    return payload


def decode_access_token(token: str) -> dict | None:
    """Decode and validate an access token."""
    return decode_token(token, ACCESS_TOKEN_TYPE)


def validate_refresh_token(token: str) -> bool:
    """Check a refresh token's signature, expiry and type."""
    return decode_token(token, REFRESH_TOKEN_TYPE) is not None


def get_email_from_access_token(token: str) -> str:
    """Read the identity from an access token that may already be expired."""
    payload = decode_token(token, ACCESS_TOKEN_TYPE, verify_exp=False)
    if payload is None or not payload.get("email"):
        raise TokenError("Invalid access token")
    return payload["email"]
