"""
Redis-backed persistence adapter.

This module provides a Redis client wrapper with:
- Connection management
- Health checking
- One string key per collection under a configurable prefix
"""

import logging
from typing import Any, Dict, Optional

import redis

from eventdesk.core.config import get_settings
from eventdesk.core.exceptions import RedisException
from eventdesk.integrations.persistence import PersistenceAdapter

logger = logging.getLogger("REDIS_CLIENT")


class RedisPersistenceAdapter(PersistenceAdapter):
    """
    Persistence adapter storing each collection blob in a Redis string key.

    Provides a clean interface for Redis operations with
    proper error handling and connection management.
    """

    def __init__(
        self,
        redis_url: Optional[str] = None,
        key_prefix: Optional[str] = None,
        client: Optional[redis.Redis] = None,
    ):
        """
        Initialize Redis client.

        Args:
            redis_url: Redis connection URL (defaults to settings)
            key_prefix: Prefix applied to every collection key (defaults to settings)
            client: Pre-built client; skips connecting from the URL
        """
        settings = get_settings()
        self.redis_url = redis_url or settings.redis_url
        self.key_prefix = settings.redis_key_prefix if key_prefix is None else key_prefix

        if client is not None:
            self._client = client
            return

        try:
            self._client = redis.from_url(self.redis_url, decode_responses=True)
            # Test connection
            self._client.ping()
            logger.info(f"Redis connected at {self._display_url()}")
        except redis.RedisError as e:
            logger.error(f"Redis connection failed: {e}")
            raise RedisException(f"Failed to connect to Redis at {self._display_url()}") from e

    @property
    def client(self) -> redis.Redis:
        """
        Get the underlying Redis client.

        Returns:
            redis.Redis: The Redis client instance
        """
        return self._client

    def _key(self, name: str) -> str:
        return f"{self.key_prefix}{name}"

    def _display_url(self) -> str:
        return self.redis_url.split('@')[-1] if '@' in self.redis_url else self.redis_url

    def ping(self) -> bool:
        """
        Check Redis connection health.

        Returns:
            bool: True if connection is healthy

        Raises:
            RedisException: If ping fails
        """
        try:
            return bool(self._client.ping())
        except redis.RedisError as e:
            raise RedisException("Ping check failed") from e

    def read(self, name: str) -> Optional[str]:
        try:
            value = self._client.get(self._key(name))
        except redis.RedisError as e:
            raise RedisException(f"Failed to get key '{self._key(name)}'") from e
        if isinstance(value, bytes):
            value = value.decode("utf-8")
        return value

    def write(self, name: str, blob: str) -> None:
        try:
            self._client.set(self._key(name), blob)
        except redis.RedisError as e:
            raise RedisException(f"Failed to set key '{self._key(name)}'") from e

    def remove(self, name: str) -> None:
        try:
            self._client.delete(self._key(name))
        except redis.RedisError as e:
            raise RedisException(f"Failed to delete key '{self._key(name)}'") from e

    def get_health_status(self) -> Dict[str, Any]:
        """
        Get comprehensive health status.

        Returns:
            dict: Health status information
        """
        try:
            info = self._client.info()
            return {
                "status": "healthy",
                "redis_url": self._display_url(),
                "connected_clients": info.get("connected_clients", 0),
                "used_memory_human": info.get("used_memory_human", "unknown"),
            }
        except redis.RedisError as e:
            return {
                "status": "unhealthy",
                "redis_url": self._display_url(),
                "error": str(e),
            }
