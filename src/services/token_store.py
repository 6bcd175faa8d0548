"""Redis-backed refresh token store keyed by user email."""

import logging

import redis

from src.config import get_settings

logger = logging.getLogger(__name__)
settings = get_settings()

KEY_PREFIX = "refresh_token:"

# Synchronous Redis client shared by API requests
_sync_redis: redis.Redis | None = None


def get_sync_redis() -> redis.Redis:
    """Get the shared synchronous Redis client."""
    global _sync_redis
    if _sync_redis is None:
        _sync_redis = redis.from_url(settings.redis_url, decode_responses=True)
    return _sync_redis


class RefreshTokenStore:
    """Holds the single current refresh token per user, with a TTL."""

    def __init__(self, redis_client: redis.Redis, ttl_seconds: int | None = None) -> None:
        self.redis = redis_client
        self.ttl_seconds = ttl_seconds or settings.refresh_token_ttl_seconds

    @staticmethod
    def _key(email: str) -> str:
        return f"{KEY_PREFIX}{email}"

    def save(self, email: str, refresh_token: str) -> None:
        """Store or overwrite the user's refresh token."""
        self.redis.set(self._key(email), refresh_token, ex=self.ttl_seconds)
        logger.debug(f"Stored refresh token for {email} (ttl={self.ttl_seconds}s)")

    def get(self, email: str) -> str | None:
        """Return the stored refresh token, or None if absent or expired."""
        value = self.redis.get(self._key(email))
        if isinstance(value, bytes):
            return value.decode("utf-8")
        return value

    def delete(self, email: str) -> None:
        """Drop the user's refresh token (logout, withdrawal)."""
        self.redis.delete(self._key(email))
