"""Redis client configuration and the persisted session slot."""

import json
from typing import Any, cast

import redis

from odontoapp.config import settings

# Global Redis client instance
_redis_client: redis.Redis | None = None


def get_redis_client() -> redis.Redis:
    """
    Get or create Redis client instance.

    Returns:
        Redis client instance
    """
    global _redis_client

    if _redis_client is None:
        _redis_client = redis.Redis(
            host=settings.redis_host,
            port=settings.redis_port,
            username=settings.redis_username,
            password=settings.redis_password,
            decode_responses=settings.redis_decode_responses,
            socket_connect_timeout=5,
            socket_keepalive=True,
            health_check_interval=30,
        )

    return _redis_client


async def check_redis_connection() -> bool:
    """
    Check if Redis connection is healthy.

    Returns:
        True if connection is healthy, False otherwise
    """
    try:
        client = get_redis_client()
        client.ping()
        return True
    except Exception:
        return False


def close_redis_connection() -> None:
    """Close Redis connection."""
    global _redis_client

    if _redis_client is not None:
        _redis_client.close()
        _redis_client = None


class SessionSlot:
    """
    Key-value slot holding the signed-in account as a JSON blob.

    The slot is advisory: it lets the UI show who was signed in while
    offline and is never consulted for authorization.
    """

    def __init__(self, redis_client: redis.Redis, key: str = "current-user"):
        """Initialize slot with Redis client and slot key."""
        self.redis = redis_client
        self.key = key

    def read(self) -> dict[str, Any] | None:
        """
        Read and deserialize the slot.

        Returns:
            Stored account data or None when empty or unreadable
        """
        value = cast(str | None, self.redis.get(self.key))
        if not value:
            return None
        try:
            return json.loads(value)
        except json.JSONDecodeError:
            return None

    def write(self, value: dict[str, Any]) -> None:
        """Serialize and store account data."""
        self.redis.set(self.key, json.dumps(value, default=str))

    def clear(self) -> None:
        """Empty the slot."""
        self.redis.delete(self.key)
