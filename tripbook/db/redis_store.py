"""Redis-backed implementation of the key-value store."""

import redis

from tripbook.db.repositories import StorageReadError, StorageWriteError


class RedisKeyValueStore:
    """Redis-based KeyValueStore using plain GET/SET."""

    def __init__(self, redis_client: redis.Redis) -> None:
        """Initialize Redis store.

        Args:
            redis_client: Redis client created with decode_responses=True
        """
        self._redis = redis_client

    @classmethod
    def from_url(cls, url: str) -> "RedisKeyValueStore":
        """Create a store from a Redis URL."""
        return cls(redis.from_url(url, decode_responses=True))  # type: ignore[no-untyped-call]

    def get(self, key: str) -> str | None:
        """Read a value."""
        try:
            value = self._redis.get(key)
        except redis.RedisError as e:
            raise StorageReadError(f"Redis GET {key} failed: {e}") from e

        if value is None:
            return None
        if isinstance(value, bytes):
            return value.decode("utf-8")
        return str(value)

    def set(self, key: str, value: str) -> None:
        """Write a value."""
        try:
            self._redis.set(key, value)
        except redis.RedisError as e:
            raise StorageWriteError(f"Redis SET {key} failed: {e}") from e
