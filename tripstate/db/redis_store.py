"""Redis implementation of the durable slot."""

import redis
import redis.asyncio

from tripstate.db.repositories import PersistenceReadError, PersistenceWriteError


def make_slot_key(namespace: str, key: str) -> str:
    """Create Redis key for a slot entry.

    Args:
        namespace: Key prefix shared by all entries of this application
        key: Entry name

    Returns:
        Redis key
    """
    return f"{namespace}:{key}"


class RedisKeyValueSlot:
    """Redis-based KeyValueSlot using plain GET/SET."""

    def __init__(self, redis_client: redis.asyncio.Redis, namespace: str = "tripstate") -> None:
        """Initialize slot.

        Args:
            redis_client: Async Redis client
            namespace: Key prefix (default "tripstate")
        """
        self._redis = redis_client
        self._namespace = namespace

    async def get(self, key: str) -> str | None:
        """Read an entry."""
        try:
            raw = await self._redis.get(make_slot_key(self._namespace, key))
        except redis.RedisError as e:
            raise PersistenceReadError(f"failed to read {key!r}: {e}") from e

        if raw is None:
            return None
        if not isinstance(raw, bytes):
            return raw
        try:
            return raw.decode("utf-8")
        except UnicodeDecodeError as e:
            raise PersistenceReadError(f"stored value for {key!r} is not UTF-8: {e}") from e

    async def set(self, key: str, value: str) -> None:
        """Write an entry."""
        try:
            await self._redis.set(make_slot_key(self._namespace, key), value)
        except redis.RedisError as e:
            raise PersistenceWriteError(f"failed to write {key!r}: {e}") from e
