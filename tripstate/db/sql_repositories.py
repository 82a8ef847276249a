"""SQL implementation of the durable slot."""

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from tripstate.db.models import KeyValueEntry
from tripstate.db.repositories import PersistenceReadError, PersistenceWriteError


class SqlKeyValueSlot:
    """SQL implementation of KeyValueSlot.

    Each call runs in its own session; a write is durable once its commit
    returns.
    """

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        self._session_factory = session_factory

    async def get(self, key: str) -> str | None:
        """Read an entry."""
        try:
            async with self._session_factory() as session:
                entry = await session.get(KeyValueEntry, key)
                return entry.value if entry is not None else None
        except SQLAlchemyError as e:
            raise PersistenceReadError(f"failed to read {key!r}: {e}") from e

    async def set(self, key: str, value: str) -> None:
        """Write an entry (insert or update)."""
        try:
            async with self._session_factory() as session:
                entry = await session.get(KeyValueEntry, key)
                if entry is None:
                    session.add(KeyValueEntry(key=key, value=value))
                else:
                    entry.value = value
                await session.commit()
        except SQLAlchemyError as e:
            raise PersistenceWriteError(f"failed to write {key!r}: {e}") from e
